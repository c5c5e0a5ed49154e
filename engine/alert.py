"""Alert value rendered on task banners."""

from dataclasses import dataclass
from typing import Optional

from .tier import AlertTier


@dataclass(frozen=True)
class Alert:
    """Rendering-ready classification of one task."""

    tier: AlertTier
    icon: str
    message: str
    color_token: str
    days_until_due: Optional[int] = None

    @property
    def magnitude(self) -> Optional[int]:
        """Days overdue, or None when the task is not overdue."""
        if self.tier != AlertTier.OVERDUE or self.days_until_due is None:
            return None
        return abs(self.days_until_due)

    @property
    def is_alerting(self) -> bool:
        return self.tier in (
            AlertTier.OVERDUE,
            AlertTier.DUE_TODAY,
            AlertTier.UPCOMING_SOON,
            AlertTier.UPCOMING_WEEK,
        )
