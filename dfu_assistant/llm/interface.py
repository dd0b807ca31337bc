from abc import ABC, abstractmethod
from typing import AsyncIterator, List


class LLMProvider(ABC):
    """
    Abstract Base Class interface that defines the contract for the
    code-generation oracle (OpenAI, Azure OpenAI, a local model, etc.)
    """

    @property
    def is_available(self) -> bool:
        """Whether a model can be reached at all (e.g. credentials are configured)."""
        return True

    @abstractmethod
    def stream_text(
        self,
        messages: List[dict],
        temperature: float = 0.0
    ) -> AsyncIterator[str]:
        """
        Streams the model's reply as text chunks, in arrival order.
        Raises OracleUnavailableError when no model can be reached.
        """
        pass
