"""Premium feature gating on top of a billing collaborator."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Protocol

from forge.core.constants import FREE_CUSTOM_EXERCISES, FREE_HISTORY_DAYS, FREE_WORKOUT_TYPES
from forge.core.enums import PremiumFeature, WorkoutType
from forge.models.exercise import Exercise


class SubscriptionProvider(Protocol):
    def is_premium(self) -> bool: ...


class StaticSubscription:
    """Fixed entitlement, e.g. from configuration or a test."""

    def __init__(self, premium: bool = False):
        self.premium = premium

    def is_premium(self) -> bool:
        return self.premium


class FeatureGate:
    """Premium users get everything; free users get the free features and the free tier limits."""

    def __init__(self, provider: SubscriptionProvider):
        self.provider = provider

    @property
    def is_premium(self) -> bool:
        return self.provider.is_premium()

    def has_access(self, feature: PremiumFeature) -> bool:
        if self.is_premium:
            return True
        return feature.is_available_for_free

    def selectable_workout_types(self) -> list[WorkoutType]:
        types = list(WorkoutType)
        if self.has_access(PremiumFeature.UNLIMITED_WORKOUT_TYPES):
            return types
        return types[:FREE_WORKOUT_TYPES]

    def selectable_exercises(self, exercises: Iterable[Exercise]) -> list[Exercise]:
        if self.is_premium:
            return list(exercises)
        return [e for e in exercises if not e.is_premium]

    def can_create_custom_exercise(self, existing_custom: int) -> bool:
        if self.has_access(PremiumFeature.CUSTOM_EXERCISES):
            return True
        return existing_custom < FREE_CUSTOM_EXERCISES

    def history_cutoff(self, now: datetime) -> datetime | None:
        """Oldest start time a free user may browse; None means unlimited."""
        if self.has_access(PremiumFeature.UNLIMITED_HISTORY):
            return None
        return now - timedelta(days=FREE_HISTORY_DAYS)
