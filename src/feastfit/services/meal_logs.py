"""Meal logging for signed-in users."""

import logging
from dataclasses import dataclass
from typing import Protocol

from feastfit.domain.meals import LogMealRequest, MealLogEntry
from feastfit.domain.recommendations import MEAL_TYPES
from feastfit.errors import ConfigurationError, ValidationError

MAX_LOGS = 50

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def insert_meal_log(self, request: LogMealRequest) -> None:
        """Persist a meal log row."""

    def list_meal_logs(self, user_id: str, limit: int) -> list[MealLogEntry]:
        """Return a user's meal logs, newest first."""


@dataclass
class MealLogService:
    """Validates and stores logged meals."""

    repository: MealLogRepository | None

    def log_meal(self, request: LogMealRequest) -> None:
        """Persist a logged dish for a user."""
        if not request.user_id or not request.restaurant_id or not request.dish_name:
            raise ValidationError
        if request.meal_type not in MEAL_TYPES:
            raise ValidationError(f"Unknown meal type: {request.meal_type}")
        self._require_repository().insert_meal_log(request)
        _logger.info(
            "Meal logged: user_id=%s restaurant=%s",
            request.user_id,
            request.restaurant_id,
        )

    def list_logs(self, user_id: str, limit: int = MAX_LOGS) -> list[MealLogEntry]:
        """Return recent meal logs for a user."""
        if not user_id:
            raise ValidationError("Missing userId")
        return self._require_repository().list_meal_logs(
            user_id, min(max(limit, 1), MAX_LOGS)
        )

    def _require_repository(self) -> MealLogRepository:
        if self.repository is None:
            raise ConfigurationError("Missing Supabase configuration")
        return self.repository
