"""Unit tests for AI client creation and tracking headers."""
from unittest.mock import MagicMock, patch

import pytest

from workout_plan_api.ai.client_factory import (
    _HELICONE_BASE_URLS,
    AIClientFactory,
    AIRequestContext,
)


class TestAIRequestContextHeaders:
    """Test tracking header generation from AIRequestContext."""

    def test_empty_context_includes_deployment_only(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.ENVIRONMENT = "production"

            headers = AIRequestContext().to_tracking_headers()

            assert headers == {"Helicone-Property-Deployment": "production"}

    def test_full_context(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.ENVIRONMENT = "staging"

            context = AIRequestContext(
                user_id="user_123",
                feature_name="generate_exercise_plan",
                environment="gym",
                custom_properties={"llm_provider": "openai"},
            )
            headers = context.to_tracking_headers()

            assert headers["Helicone-User-Id"] == "user_123"
            assert headers["Helicone-Property-Feature"] == "generate_exercise_plan"
            assert headers["Helicone-Property-Plan-Environment"] == "gym"
            assert headers["Helicone-Property-Llm-Provider"] == "openai"


class TestOpenAIClientCreation:

    def test_missing_key_raises_value_error(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.OPENAI_API_KEY = None

            with pytest.raises(ValueError, match="OPENAI_API_KEY"):
                AIClientFactory.create_openai_client()

    def test_direct_client_when_helicone_disabled(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.OPENAI_API_KEY = "sk-test-key"
            mock_settings.HELICONE_ENABLED = False

            mock_openai_class = MagicMock()
            with patch("openai.OpenAI", mock_openai_class):
                AIClientFactory.create_openai_client(timeout=30.0)

            call_kwargs = mock_openai_class.call_args.kwargs
            assert call_kwargs == {"api_key": "sk-test-key", "timeout": 30.0}

    def test_proxied_client_when_helicone_enabled(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.OPENAI_API_KEY = "sk-test-key"
            mock_settings.HELICONE_ENABLED = True
            mock_settings.HELICONE_API_KEY = "sk-helicone-key"
            mock_settings.ENVIRONMENT = "production"

            mock_openai_class = MagicMock()
            with patch("openai.OpenAI", mock_openai_class):
                AIClientFactory.create_openai_client(
                    context=AIRequestContext(user_id="user_1")
                )

            call_kwargs = mock_openai_class.call_args.kwargs
            assert call_kwargs["base_url"] == _HELICONE_BASE_URLS["openai"]
            headers = call_kwargs["default_headers"]
            assert headers["Helicone-Auth"] == "Bearer sk-helicone-key"
            assert headers["Helicone-User-Id"] == "user_1"

    def test_helicone_enabled_without_key_falls_back_to_direct(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.OPENAI_API_KEY = "sk-test-key"
            mock_settings.HELICONE_ENABLED = True
            mock_settings.HELICONE_API_KEY = None

            mock_openai_class = MagicMock()
            with patch("openai.OpenAI", mock_openai_class):
                AIClientFactory.create_openai_client()

            assert "base_url" not in mock_openai_class.call_args.kwargs


class TestAnthropicClientCreation:

    def test_direct_client(self):
        with patch("workout_plan_api.ai.client_factory.settings") as mock_settings:
            mock_settings.ANTHROPIC_API_KEY = "sk-ant-test"
            mock_settings.HELICONE_ENABLED = False

            mock_anthropic_class = MagicMock()
            with patch("anthropic.Anthropic", mock_anthropic_class):
                AIClientFactory.create_anthropic_client()

            assert mock_anthropic_class.call_args.kwargs["api_key"] == "sk-ant-test"
