"""OpenAI chat-completions client used as the command-parsing oracle."""

import time
from typing import Any, Optional

import httpx
import structlog

from gpal.core.errors import OracleError
from gpal.models.base import TextOracle

logger = structlog.get_logger(__name__)


class OpenAIClient(TextOracle):
    """Async client for OpenAI GPT models.

    Sends one prompt as a single user message and returns the text of the
    first choice. Temperature defaults to 0 so the JSON command output is as
    repeatable as the model allows. Failures are not retried.
    """

    DEFAULT_MODEL = "gpt-4.1-mini"
    API_BASE_URL = "https://api.openai.com/v1"
    REQUEST_TIMEOUT = 60.0

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = API_BASE_URL,
        timeout_seconds: float = REQUEST_TIMEOUT,
        temperature: float = 0.0,
        max_tokens: int = 512,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key.
            model: Model to use for requests.
            base_url: API base URL.
            timeout_seconds: Request timeout in seconds.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in the response.
            transport: Optional httpx transport (used by tests).
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

        logger.info("OpenAIClient initialized", model=model)

    async def complete(self, prompt: str) -> str:
        """Execute a chat completion request.

        Args:
            prompt: Full instruction text, sent as the user message.

        Returns:
            The model's response text (may be empty).

        Raises:
            OracleError: On transport failures, HTTP errors, or an
                unexpected response shape.
        """
        start_time = time.time()
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

        try:
            response = await self.client.post("/chat/completions", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "OpenAI request failed",
                model=self.model,
                status_code=e.response.status_code,
                error=str(e),
            )
            raise OracleError(f"OpenAI returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("OpenAI request failed", model=self.model, error=str(e))
            raise OracleError("OpenAI request failed") from e

        try:
            choices = data.get("choices") or []
            if not choices:
                raise OracleError("OpenAI response contained no choices")
            content = choices[0]["message"].get("content") or ""
            if not isinstance(content, str):
                raise TypeError(f"message content is {type(content).__name__}")
            usage = data.get("usage") or {}
            tokens_used = usage.get("total_tokens", 0)
        except (AttributeError, TypeError, KeyError, IndexError) as e:
            logger.error(
                "OpenAI response has unexpected shape",
                model=self.model,
                error=str(e),
            )
            raise OracleError("Unexpected OpenAI response shape") from e

        logger.info(
            "OpenAI request successful",
            model=self.model,
            tokens_used=tokens_used,
            latency_ms=(time.time() - start_time) * 1000,
        )
        return content

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
        logger.debug("OpenAIClient closed")
