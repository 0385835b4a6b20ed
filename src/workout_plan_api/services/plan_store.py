"""
Saved plan store.

Keeps the latest plan text per environment for each user, one JSON file per
user under settings.PLAN_STORE_DIR:

    {"plans": [{"environment": "gym", "plan": "...", "created_at": ..., "updated_at": ...}]}
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from workout_plan_api.config import settings
from workout_plan_api.models import ENVIRONMENTS, SavedPlan

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class PlanStoreError(RuntimeError):
    """Raised when a plan cannot be written."""


class PlanStore:
    """File-backed store of the latest plan per environment."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else settings.PLAN_STORE_DIR

    def _path(self, user_id: str) -> Path:
        safe = _UNSAFE_CHARS.sub("_", user_id or "anonymous")
        return self.base_dir / f"{safe}.json"

    def _read_safe(self, user_id: str) -> List[SavedPlan]:
        """Read a user's plans; unreadable files count as empty."""
        path = self._path(user_id)
        try:
            if not path.exists():
                return []
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [SavedPlan.model_validate(p) for p in data.get("plans", [])]
        except (OSError, ValueError, ValidationError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable plan store {path}: {e}")
            return []

    def _write(self, user_id: str, plans: List[SavedPlan]) -> None:
        path = self._path(user_id)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            payload = {"plans": [p.model_dump(mode="json") for p in plans]}
            tmp_path = path.with_suffix(".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as e:
            raise PlanStoreError(f"Failed to save exercise plan: {e}") from e

    def list_plans(self, user_id: str) -> List[SavedPlan]:
        """All saved plans for a user, home before gym."""
        plans = self._read_safe(user_id)
        return sorted(plans, key=lambda p: ENVIRONMENTS.index(p.environment))

    def get(self, user_id: str, environment: str) -> Optional[SavedPlan]:
        for plan in self._read_safe(user_id):
            if plan.environment == environment:
                return plan
        return None

    def save(self, user_id: str, environment: str, plan_text: str) -> SavedPlan:
        """Insert or replace the plan for an environment."""
        now = datetime.now(timezone.utc)
        plans = self._read_safe(user_id)
        existing = next((p for p in plans if p.environment == environment), None)

        saved = SavedPlan(
            environment=environment,
            plan=plan_text,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        plans = [p for p in plans if p.environment != environment] + [saved]
        self._write(user_id, plans)
        logger.info(f"Saved {environment} plan for {user_id}")
        return saved
