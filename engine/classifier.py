"""Temporal classifier: task + reference instant -> alert."""

from datetime import date, datetime, tzinfo
from typing import Optional, Union

from .alert import Alert
from .calculations import (
    UTC,
    due_day,
    plural_days,
    to_calendar_day,
)
from .task import Task
from .tier import AlertTier, TIER_STYLES, UPCOMING_THRESHOLDS


def _alert(tier: AlertTier, message: str, days: Optional[int] = None) -> Alert:
    style = TIER_STYLES[tier]
    return Alert(
        tier=tier,
        icon=style.icon,
        message=message,
        color_token=style.color_token,
        days_until_due=days,
    )


def tier_for_days(days: int) -> AlertTier:
    """Map a day delta to its tier. First matching range wins."""
    if days < 0:
        return AlertTier.OVERDUE
    if days == 0:
        return AlertTier.DUE_TODAY
    for upper, tier in UPCOMING_THRESHOLDS:
        if days <= upper:
            return tier
    return AlertTier.ON_SCHEDULE


def _message(tier: AlertTier, days: int) -> str:
    if tier == AlertTier.OVERDUE:
        overdue = abs(days)
        return f"OVERDUE by {overdue} {plural_days(overdue)}! Complete immediately!"
    if tier == AlertTier.DUE_TODAY:
        return "Due today - Start immediately!"
    if tier == AlertTier.UPCOMING_SOON:
        return f"Due in {days} {plural_days(days)} - Prepare to start"
    if tier == AlertTier.UPCOMING_WEEK:
        return f"Due in {days} days - Coming up"
    return "On schedule"


def classify(task: Task, now: Union[date, datetime], zone: tzinfo = UTC) -> Alert:
    """
    Classify a task against the caller's reference instant.

    Completed tasks are always COMPLETED, whatever their due date. A due date
    that cannot be parsed gives UNKNOWN rather than an error. Otherwise the
    tier follows the number of calendar days (in zone) until the due date.
    """
    now_day = to_calendar_day(now, zone)

    if task.is_completed:
        return _alert(AlertTier.COMPLETED, "Task completed successfully")

    due = due_day(task.due_date, zone)
    if due is None:
        return _alert(AlertTier.UNKNOWN, "Due date unavailable")

    days = (due - now_day).days
    tier = tier_for_days(days)
    return _alert(tier, _message(tier, days), days)
