"""
Factory maintenance policy and alert engine.

This package provides:
- Role, Action: Identity classes and gated capabilities
- has_permission, has_role: Static role-based permission policy
- Task, TaskStatus: Maintenance task records
- AlertTier, Alert: Urgency classification and banner values
- classify: Task + reference day -> Alert
- day_bucket, build_month_grid, month_buckets, summarize: Calendar and
  dashboard aggregation
- load_tasks and friends: YAML task file storage
"""

from .role import Role, Action, parse_role, parse_action
from .permissions import PERMISSIONS, allowed_actions, has_permission, has_role
from .task import Task, TaskStatus
from .tier import AlertTier, Severity, TIER_STYLES
from .alert import Alert
from .calculations import (
    UTC,
    due_day,
    get_timezone,
    parse_due_date,
    to_calendar_day,
)
from .classifier import classify, tier_for_days
from .aggregator import (
    DayBucket,
    Summary,
    build_month_grid,
    combine_severity,
    day_bucket,
    month_buckets,
    summarize,
)
from .loader import load_tasks, add_task, save_task_status, delete_task

__all__ = [
    "Role",
    "Action",
    "parse_role",
    "parse_action",
    "PERMISSIONS",
    "allowed_actions",
    "has_permission",
    "has_role",
    "Task",
    "TaskStatus",
    "AlertTier",
    "Severity",
    "TIER_STYLES",
    "Alert",
    "UTC",
    "get_timezone",
    "due_day",
    "parse_due_date",
    "to_calendar_day",
    "classify",
    "tier_for_days",
    "DayBucket",
    "Summary",
    "build_month_grid",
    "combine_severity",
    "day_bucket",
    "month_buckets",
    "summarize",
    "load_tasks",
    "add_task",
    "save_task_status",
    "delete_task",
]
