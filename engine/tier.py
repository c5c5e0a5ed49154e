"""Alert tiers, their urgency ordering and display styles."""

from enum import Enum
from typing import Dict, NamedTuple, Optional


class AlertTier(Enum):
    """Urgency classification of a task relative to a reference day."""

    COMPLETED = "completed"
    ON_SCHEDULE = "on_schedule"
    UPCOMING_WEEK = "upcoming_week"
    UPCOMING_SOON = "upcoming_soon"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"
    UNKNOWN = "unknown"  # Due date could not be parsed

    @property
    def urgency(self) -> Optional[int]:
        """Higher = more urgent. None for UNKNOWN, which has no rank."""
        return _URGENCY.get(self)

    def is_more_urgent(self, other: "AlertTier") -> bool:
        """Strictly more urgent than other. Always False if either is UNKNOWN."""
        if self.urgency is None or other.urgency is None:
            return False
        return self.urgency > other.urgency


_URGENCY: Dict[AlertTier, int] = {
    AlertTier.COMPLETED: 0,
    AlertTier.ON_SCHEDULE: 0,
    AlertTier.UPCOMING_WEEK: 1,
    AlertTier.UPCOMING_SOON: 2,
    AlertTier.DUE_TODAY: 3,
    AlertTier.OVERDUE: 4,
}


class TierStyle(NamedTuple):
    icon: str
    color_token: str


TIER_STYLES: Dict[AlertTier, TierStyle] = {
    AlertTier.OVERDUE: TierStyle("⚠️", "red"),
    AlertTier.DUE_TODAY: TierStyle("🟠", "orange-strong"),
    AlertTier.UPCOMING_SOON: TierStyle("🟠", "orange-strong"),
    AlertTier.UPCOMING_WEEK: TierStyle("📅", "orange-light"),
    AlertTier.ON_SCHEDULE: TierStyle("✅", "green"),
    AlertTier.COMPLETED: TierStyle("✓", "blue"),
    AlertTier.UNKNOWN: TierStyle("?", "gray"),
}

# Inclusive upper bounds in days, checked in order after the overdue and
# due-today cases. Anything beyond the last bound is on schedule.
UPCOMING_THRESHOLDS = (
    (3, AlertTier.UPCOMING_SOON),
    (7, AlertTier.UPCOMING_WEEK),
)


class Severity(Enum):
    """Calendar day marker. Higher value outranks lower."""

    NONE = 0
    ORANGE = 1
    RED = 2

    @classmethod
    def for_tier(cls, tier: AlertTier) -> "Severity":
        if tier == AlertTier.OVERDUE:
            return cls.RED
        if tier in (
            AlertTier.DUE_TODAY,
            AlertTier.UPCOMING_SOON,
            AlertTier.UPCOMING_WEEK,
        ):
            return cls.ORANGE
        return cls.NONE
