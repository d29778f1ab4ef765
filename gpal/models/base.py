"""Abstract text-generation oracle."""

from abc import ABC, abstractmethod


class TextOracle(ABC):
    """Single round-trip prompt -> text completion.

    Implementations must not retry on their own; a failed call raises
    ``OracleError`` and the request is abandoned.
    """

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Return the model's full text response to ``prompt``."""

    async def close(self) -> None:
        """Release any held connections."""
