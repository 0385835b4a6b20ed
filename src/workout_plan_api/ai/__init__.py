"""AI client management for plan generation."""
from .client_factory import AIClientFactory, AIRequestContext

__all__ = [
    "AIClientFactory",
    "AIRequestContext",
]
