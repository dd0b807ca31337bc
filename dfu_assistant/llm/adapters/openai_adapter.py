import logging
from typing import AsyncIterator, List, Optional

import openai
from openai import AsyncOpenAI

from ..interface import LLMProvider
from ...config import settings
from ...services.exceptions import OracleUnavailableError

logger = logging.getLogger(__name__)

# Errors meaning "there is no usable model", as opposed to a bad request.
UNAVAILABLE_ERRORS = (
    openai.APIConnectionError,
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class OpenAIAdapter(LLMProvider):
    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = settings.OPENAI_MODEL,
        base_url: Optional[str] = None,
    ):
        # No key means no oracle; the Generation Adapter falls back to a summary.
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url) if api_key else None
        self.model_name = model_name

    @property
    def is_available(self) -> bool:
        return self.client is not None

    async def stream_text(
        self,
        messages: List[dict],
        temperature: float = 0.0
    ) -> AsyncIterator[str]:
        if self.client is None:
            raise OracleUnavailableError("No OpenAI API key configured.")

        # This is where the specific OpenAI implementation lives.
        # If OpenAI changes their API tomorrow, we ONLY change this file.
        try:
            stream = await self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                temperature=temperature,
                stream=True,
            )
            async for chunk in stream:
                if chunk.choices and chunk.choices[0].delta.content:
                    yield chunk.choices[0].delta.content
        except UNAVAILABLE_ERRORS as e:
            logger.error(f"OpenAI model '{self.model_name}' unavailable: {e}")
            raise OracleUnavailableError(str(e)) from e
