"""
Generation Adapter.

Turns a finished integration configuration into a request for the
code-generation oracle and streams the oracle's text back unchanged.
The user always gets something actionable: when no model is reachable,
a summary of the captured configuration is emitted instead.
"""

import logging
from datetime import date
from typing import AsyncIterator, List

from ..data.knowledge import DFU_KNOWLEDGE
from ..prompts import Template, render
from ..llm.interface import LLMProvider
from ..schemas.generation import GenerationConfig
from .exceptions import OracleUnavailableError

logger = logging.getLogger(__name__)


class GenerationAdapter:
    def __init__(self, llm_provider: LLMProvider, temperature: float = 0.0):
        self.llm = llm_provider
        self.temperature = temperature

    def build_prompt(self, config: GenerationConfig) -> str:
        return render(Template.GENERATION_REQUEST, config=config, year=date.today().year)

    def build_messages(self, config: GenerationConfig) -> List[dict]:
        """Domain knowledge first, then the structured request."""
        return [
            {"role": "user", "content": DFU_KNOWLEDGE},
            {"role": "user", "content": self.build_prompt(config)},
        ]

    async def generate(self, config: GenerationConfig) -> AsyncIterator[str]:
        """Yields the oracle's chunks verbatim, in order."""
        logger.info(
            f"Requesting {config.platform.value} integration "
            f"(memory={config.memory_fn}, dataset={config.dataset_fn}, alt={config.alt_fn})"
        )

        if not self.llm.is_available:
            logger.warning("No code-generation model configured, emitting configuration summary")
            yield self._fallback(config, reason="")
            return

        streamed = 0
        try:
            async for chunk in self.llm.stream_text(
                messages=self.build_messages(config),
                temperature=self.temperature,
            ):
                streamed += 1
                yield chunk
        except OracleUnavailableError as e:
            logger.warning(f"Oracle unavailable after {streamed} chunks: {e}")
            prefix = "\n\n" if streamed else ""
            yield prefix + self._fallback(config, reason=str(e))

    def _fallback(self, config: GenerationConfig, reason: str) -> str:
        return render(Template.ORACLE_UNAVAILABLE, config=config, reason=reason)
