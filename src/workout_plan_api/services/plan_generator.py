"""LLM service that writes weekly exercise plans as markdown."""
from __future__ import annotations

import logging

from workout_plan_api.ai import AIClientFactory, AIRequestContext
from workout_plan_api.config import settings
from workout_plan_api.models import HealthMetrics

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "anthropic")

ENVIRONMENT_CONTEXT = {
    "home": "at home with bodyweight exercises and minimal equipment (resistance bands, a pair of dumbbells at most)",
    "gym": "in a fully equipped commercial gym (barbells, dumbbells, cables, machines)",
}


class PlanGenerationError(RuntimeError):
    """Raised when a plan cannot be generated."""


class UnknownProviderError(PlanGenerationError):
    """Raised for an LLM provider name that is not supported."""


class PlanGenerator:
    """Generate a 7-day exercise plan from a user's health profile."""

    PLAN_FORMAT_INSTRUCTIONS = """Write the plan in markdown using EXACTLY this layout for every day:

## Day N: <title>
Focus: <muscle group>, <muscle group>
Warm-up: <one line>

**<Exercise name>** - <one line description>
Target muscles: <muscle>, <muscle>
Sets: <number>
Reps: <count or range, e.g. 8-10>
Equipment: <item>, <item>
- <form tip>
- <form tip>

Cool-down: <one line>
Notes: <one line>

Rules:
- Number days 1 to 7 and include at least one rest day titled "Rest" with "Focus: Rest".
- Only exercise names may be bold. Never bold labels such as Sets or Reps.
- Use plain commas between muscle groups and equipment items.
- Do not add any text before Day 1 or after Day 7."""

    @staticmethod
    def build_prompt(metrics: HealthMetrics, environment: str) -> str:
        profile_lines = []
        for field_name, value in metrics.model_dump().items():
            if value not in (None, ""):
                profile_lines.append(f"- {field_name.replace('_', ' ')}: {value}")
        profile = "\n".join(profile_lines) or "- no details provided"

        return (
            "You are a certified personal trainer. Create a personalised weekly exercise plan "
            f"for training {ENVIRONMENT_CONTEXT.get(environment, environment)}.\n\n"
            f"Client profile:\n{profile}\n\n"
            f"{PlanGenerator.PLAN_FORMAT_INSTRUCTIONS}"
        )

    @staticmethod
    def _generate_with_openai(prompt: str, context: AIRequestContext) -> str:
        client = AIClientFactory.create_openai_client(context=context)
        response = client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": "You write structured workout plans in markdown."},
                {"role": "user", "content": prompt},
            ],
            temperature=0.7,
        )
        return response.choices[0].message.content or ""

    @staticmethod
    def _generate_with_anthropic(prompt: str, context: AIRequestContext) -> str:
        client = AIClientFactory.create_anthropic_client(context=context)
        message = client.messages.create(
            model=settings.ANTHROPIC_MODEL,
            max_tokens=4096,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
        )
        return message.content[0].text

    @staticmethod
    def generate(
        metrics: HealthMetrics | None,
        environment: str,
        provider: str | None = None,
        user_id: str | None = None,
    ) -> str:
        """
        Generate plan markdown for an environment.

        Args:
            metrics: The user's health profile
            environment: 'home' or 'gym'
            provider: 'openai' or 'anthropic' (defaults to settings.LLM_PROVIDER)
            user_id: Optional user ID for request tracking

        Returns:
            Plan markdown

        Raises:
            PlanGenerationError: Missing metrics, missing API key or a failed call
            UnknownProviderError: Unsupported provider name
        """
        if metrics is None:
            raise PlanGenerationError("Please complete your health profile before generating a plan")

        provider = (provider or settings.LLM_PROVIDER).lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise UnknownProviderError(
                f"Unknown LLM provider: {provider}. Use 'openai' or 'anthropic'."
            )

        context = AIRequestContext(
            user_id=user_id,
            feature_name="generate_exercise_plan",
            environment=environment,
            custom_properties={"provider": provider},
        )
        prompt = PlanGenerator.build_prompt(metrics, environment)

        try:
            if provider == "openai":
                text = PlanGenerator._generate_with_openai(prompt, context)
            else:
                text = PlanGenerator._generate_with_anthropic(prompt, context)
        except ValueError as e:
            raise PlanGenerationError(str(e)) from e
        except Exception as e:
            logger.error(f"{provider} plan generation failed: {e}")
            raise PlanGenerationError(f"Failed to generate your {environment} exercise plan: {e}") from e

        if not text.strip():
            raise PlanGenerationError(f"{provider} returned an empty {environment} plan")

        logger.info(f"Generated {environment} plan with {provider} ({len(text)} chars)")
        return text
