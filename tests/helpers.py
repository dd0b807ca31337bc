"""Fakes and helpers shared by the test modules."""

import asyncio
from pathlib import Path
from typing import AsyncIterator, List

from dfu_assistant.llm.interface import LLMProvider
from dfu_assistant.services.exceptions import OracleUnavailableError


class FakeLLMProvider(LLMProvider):
    """Records every request and streams canned chunks."""

    def __init__(self, chunks=("// dmiu_integration.h\n", "// dmiu_integration.c\n")):
        self.chunks = list(chunks)
        self.requests: List[List[dict]] = []

    async def stream_text(self, messages: List[dict], temperature: float = 0.0) -> AsyncIterator[str]:
        self.requests.append(messages)
        for chunk in self.chunks:
            yield chunk


class UnreachableLLMProvider(LLMProvider):
    """Configured, but the service cannot be reached."""

    async def stream_text(self, messages: List[dict], temperature: float = 0.0) -> AsyncIterator[str]:
        raise OracleUnavailableError("connection refused")
        yield  # pragma: no cover


class UnconfiguredLLMProvider(LLMProvider):
    @property
    def is_available(self) -> bool:
        return False

    async def stream_text(self, messages: List[dict], temperature: float = 0.0) -> AsyncIterator[str]:
        raise AssertionError("must not be called")
        yield  # pragma: no cover


class HangingLLMProvider(LLMProvider):
    """Emits one chunk, then blocks until cancelled."""

    async def stream_text(self, messages: List[dict], temperature: float = 0.0) -> AsyncIterator[str]:
        yield "partial"
        await asyncio.Event().wait()


def write_file(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


async def collect(stream: AsyncIterator[str]) -> str:
    return "".join([chunk async for chunk in stream])


