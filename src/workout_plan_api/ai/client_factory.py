"""AI client factory for plan generation, with optional Helicone proxying."""
import logging
from dataclasses import dataclass, field
from typing import Any

from workout_plan_api.config import settings


logger = logging.getLogger(__name__)

_HELICONE_BASE_URLS = {
    "openai": "https://oai.helicone.ai/v1",
    "anthropic": "https://anthropic.helicone.ai",
}

DEFAULT_TIMEOUT = 60.0


@dataclass
class AIRequestContext:
    """Who asked for a generation and why; forwarded as tracking headers."""

    user_id: str | None = None
    feature_name: str | None = None
    environment: str | None = None
    custom_properties: dict[str, str] = field(default_factory=dict)

    def to_tracking_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Helicone-Property-Deployment": settings.ENVIRONMENT,
        }
        if self.user_id:
            headers["Helicone-User-Id"] = self.user_id
        if self.feature_name:
            headers["Helicone-Property-Feature"] = self.feature_name
        if self.environment:
            headers["Helicone-Property-Plan-Environment"] = self.environment
        for key, value in self.custom_properties.items():
            headers[f"Helicone-Property-{key.replace('_', '-').title()}"] = str(value)
        return headers


def _client_kwargs(provider: str, api_key: str | None, context: AIRequestContext | None,
                   timeout: float) -> dict[str, Any]:
    if not api_key:
        env_var = f"{provider.upper()}_API_KEY"
        raise ValueError(f"{provider.title()} API key not configured. Set {env_var} environment variable.")

    kwargs: dict[str, Any] = {"api_key": api_key, "timeout": timeout}

    if settings.HELICONE_ENABLED:
        if not settings.HELICONE_API_KEY:
            logger.warning(
                "HELICONE_ENABLED=true but HELICONE_API_KEY not set. "
                f"Falling back to direct {provider} API calls."
            )
            return kwargs
        headers = {"Helicone-Auth": f"Bearer {settings.HELICONE_API_KEY}"}
        if context:
            headers.update(context.to_tracking_headers())
        kwargs["base_url"] = _HELICONE_BASE_URLS[provider]
        kwargs["default_headers"] = headers
        logger.debug(f"Creating {provider} client with Helicone proxy")
    else:
        logger.debug(f"Creating {provider} client (direct)")
    return kwargs


class AIClientFactory:
    """Creates LLM provider clients from settings."""

    @staticmethod
    def create_openai_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Raises:
            ValueError: If OPENAI_API_KEY is not configured
        """
        import openai

        kwargs = _client_kwargs("openai", settings.OPENAI_API_KEY, context, timeout)
        return openai.OpenAI(**kwargs)

    @staticmethod
    def create_anthropic_client(
        context: AIRequestContext | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """
        Raises:
            ValueError: If ANTHROPIC_API_KEY is not configured
        """
        from anthropic import Anthropic

        kwargs = _client_kwargs("anthropic", settings.ANTHROPIC_API_KEY, context, timeout)
        return Anthropic(**kwargs)
