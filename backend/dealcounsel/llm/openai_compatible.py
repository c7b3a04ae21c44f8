"""
OpenAI-compatible provider implementation.

WHAT: Chat-completions client for OpenAI and Groq
WHY: Both upstreams speak the same dialect; only base URL and key differ
HOW: HTTPX async client with bearer auth, one request per call, no retries
"""

import httpx
import json

from .types import (
    ChatMessage,
    LLMResult,
    ProviderStatus,
    ProviderDisabledError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    ProviderResponseError,
)
from ..core.config import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)


class OpenAICompatibleProvider:
    """Provider for any endpoint exposing /models and /chat/completions."""

    def __init__(self, name: str, base_url: str, api_key: str, default_model: str | None = None):
        """
        Initialize provider.

        Args:
            name: Provider label used in logs and status output
            base_url: API root, e.g. https://api.openai.com/v1
            api_key: Bearer token; empty disables generate()
            default_model: Model used when a call does not name one
        """
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.default_model = default_model
        self.enabled = bool(api_key and api_key.strip())

        headers = {"Content-Type": "application/json"}
        if self.enabled:
            headers["Authorization"] = f"Bearer {self.api_key}"

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.LLM_REQUEST_TIMEOUT),
            headers=headers,
        )

        if self.enabled:
            masked = '*' * 10 + self.api_key[-4:] if len(self.api_key) > 4 else '***'
            logger.info(f"{self.name} provider initialized (base_url: {self.base_url}, API key: {masked})")
        else:
            logger.warning(f"{self.name} provider initialized without an API key")

    def _check_enabled(self):
        """Raise exception if no API key is configured."""
        if not self.enabled:
            raise ProviderDisabledError(
                f"{self.name} API key is not configured. Set {self.name.upper()}_API_KEY."
            )

    async def ping(self) -> ProviderStatus:
        """
        Check availability by fetching the models list.

        Returns:
            ProviderStatus with the first few available models
        """
        if not self.enabled:
            return ProviderStatus(
                available=False,
                base_url=self.base_url,
                error="API key not configured"
            )

        try:
            response = await self.client.get(f"{self.base_url}/models", timeout=10.0)
            response.raise_for_status()
            data = response.json()

            models = [model.get("id") for model in data.get("data", [])]
            logger.info(f"{self.name} ping success ({len(models)} models available)")

            return ProviderStatus(
                available=True,
                base_url=self.base_url,
                models=models[:10] if models else None
            )
        except httpx.TimeoutException:
            logger.warning(f"{self.name} ping timeout")
            return ProviderStatus(available=False, base_url=self.base_url, error="Request timed out")
        except httpx.ConnectError:
            logger.warning(f"{self.name} not reachable")
            return ProviderStatus(available=False, base_url=self.base_url, error="Connection refused")
        except Exception as e:
            logger.error(f"{self.name} ping failed: {e}")
            return ProviderStatus(available=False, base_url=self.base_url, error=str(e))

    async def generate(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int | None = None,
        model: str | None = None
    ) -> LLMResult:
        """
        Send one chat-completions request and return the reply text.

        A failed exchange is reported once and never retried.

        Raises:
            ProviderDisabledError: No API key configured
            ProviderTimeoutError: Request timed out
            ProviderUnavailableError: Upstream not reachable
            ProviderResponseError: Non-success status or malformed body
        """
        self._check_enabled()

        model_to_use = model or self.default_model
        payload = {
            "model": model_to_use,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens

        try:
            response = await self.client.post(f"{self.base_url}/chat/completions", json=payload)
            response.raise_for_status()
            data = response.json()

            text = data["choices"][0]["message"]["content"]
            usage = data.get("usage", {})
            response_model = data.get("model", model_to_use)

        except httpx.TimeoutException as e:
            logger.error(f"{self.name} request timed out (model: {model_to_use})")
            raise ProviderTimeoutError(f"{self.name} request timed out") from e

        except httpx.ConnectError as e:
            logger.error(f"{self.name} connection refused")
            raise ProviderUnavailableError(f"{self.name} is not reachable") from e

        except httpx.HTTPStatusError as e:
            logger.error(f"{self.name} returned HTTP {e.response.status_code}: {e.response.text[:200]}")
            raise ProviderResponseError("LLM API request failed") from e

        except (KeyError, IndexError, TypeError, json.JSONDecodeError) as e:
            logger.error(f"Invalid response from {self.name}: {e}")
            raise ProviderResponseError(f"Invalid response format: {e}") from e

        logger.info(f"{self.name} generate success (model: {response_model}, tokens: {usage.get('total_tokens', 'unknown')})")
        return LLMResult(text=text, usage=usage, model=response_model)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
