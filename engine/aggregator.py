"""Calendar and dashboard aggregation over a task collection."""

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .alert import Alert
from .calculations import (
    UTC,
    days_in_month,
    leading_blanks,
    due_day,
    to_calendar_day,
)
from .classifier import classify
from .task import Task, TaskStatus
from .tier import AlertTier, Severity


@dataclass(frozen=True)
class DayBucket:
    """Aggregated alert state for the open tasks due on one day."""

    day: date
    severity: Severity
    count: int


@dataclass(frozen=True)
class Summary:
    """Dashboard counts for a task collection."""

    total: int
    by_status: Dict[TaskStatus, int] = field(default_factory=dict)
    by_tier: Dict[AlertTier, int] = field(default_factory=dict)

    @property
    def overdue(self) -> int:
        return self.by_tier.get(AlertTier.OVERDUE, 0)

    @property
    def pending(self) -> int:
        return self.by_status.get(TaskStatus.PENDING, 0)

    @property
    def in_progress(self) -> int:
        return self.by_status.get(TaskStatus.IN_PROGRESS, 0)


def _open_tasks_by_day(
    tasks: Iterable[Task], zone: tzinfo
) -> Iterable[Tuple[date, Task]]:
    """Yield (due day, task) for non-completed tasks with a usable due date."""
    for task in tasks:
        if task.is_completed:
            continue
        due = due_day(task.due_date, zone)
        if due is None:
            continue
        yield due, task


def combine_severity(tiers: Iterable[AlertTier]) -> Severity:
    """Worst day marker for a set of tiers: RED over ORANGE over NONE."""
    return max(
        (Severity.for_tier(tier) for tier in tiers),
        key=lambda s: s.value,
        default=Severity.NONE,
    )


def _bucket(day: date, alerts: List[Alert]) -> DayBucket:
    severity = combine_severity(a.tier for a in alerts)
    return DayBucket(day=day, severity=severity, count=len(alerts))


def day_bucket(
    day: Union[date, datetime],
    tasks: Iterable[Task],
    now: Union[date, datetime],
    zone: tzinfo = UTC,
) -> Optional[DayBucket]:
    """
    Bucket the open tasks due on a day.

    Returns None when no open task is due that day; never a zero-count
    bucket. Severity is RED if any task is overdue, ORANGE if any is due
    within the week, else NONE.
    """
    target = to_calendar_day(day, zone)
    alerts = [
        classify(task, now, zone)
        for due_day, task in _open_tasks_by_day(tasks, zone)
        if due_day == target
    ]
    if not alerts:
        return None
    return _bucket(target, alerts)


def build_month_grid(reference_date: Union[date, datetime]) -> List[Optional[int]]:
    """
    Calendar cells for the month of reference_date.

    One None per blank before the 1st (weeks start on Sunday), then the day
    numbers 1..N.
    """
    cells: List[Optional[int]] = [None] * leading_blanks(reference_date)
    cells.extend(range(1, days_in_month(reference_date) + 1))
    return cells


def month_buckets(
    reference_date: Union[date, datetime],
    tasks: Iterable[Task],
    now: Union[date, datetime],
    zone: tzinfo = UTC,
) -> Dict[date, DayBucket]:
    """Day buckets for every day of the month, classifying each task once."""
    year, month = reference_date.year, reference_date.month
    grouped: Dict[date, List[Alert]] = {}
    for due_day, task in _open_tasks_by_day(tasks, zone):
        if (due_day.year, due_day.month) != (year, month):
            continue
        grouped.setdefault(due_day, []).append(classify(task, now, zone))
    return {day: _bucket(day, alerts) for day, alerts in sorted(grouped.items())}


def summarize(
    tasks: Iterable[Task], now: Union[date, datetime], zone: tzinfo = UTC
) -> Summary:
    """Count tasks per status and per alert tier."""
    by_status = {status: 0 for status in TaskStatus}
    by_tier = {tier: 0 for tier in AlertTier}
    total = 0
    for task in tasks:
        total += 1
        by_status[task.status] += 1
        by_tier[classify(task, now, zone).tier] += 1
    return Summary(total=total, by_status=by_status, by_tier=by_tier)
