#!/usr/bin/env python3
"""
Unified CLI for factory maintenance tasks.

Commands:
  alerts      - Show every task with its alert banner, most urgent first
  calendar    - Show a month calendar with overdue/upcoming markers
  summary     - Show dashboard counts
  can         - Check whether a role may perform an action
  add         - Add a new task (admin, operator)
  set-status  - Change a task's status (admin, operator)
  delete      - Delete a task (admin)
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from engine import (
    Action,
    Alert,
    AlertTier,
    DayBucket,
    Severity,
    Task,
    TaskStatus,
    add_task,
    build_month_grid,
    classify,
    delete_task,
    get_timezone,
    has_permission,
    load_tasks,
    month_buckets,
    save_task_status,
    summarize,
)

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# =============================================================================
# Formatting helpers
# =============================================================================


def format_due(task: Task) -> str:
    """Format a task's due date for display."""
    due = task.due_date
    if due is None or due == "":
        return "-"
    if isinstance(due, (date, datetime)):
        return due.isoformat()
    return str(due)


def format_days(alert: Alert) -> str:
    """Format days until due (e.g., '5d' or '-2d')."""
    if alert.days_until_due is None:
        return "-"
    return f"{alert.days_until_due}d"


def format_bucket(day: int, bucket: Optional[DayBucket]) -> str:
    """Calendar cell text: day number plus open task count and marker."""
    if bucket is None:
        return str(day)
    marker = {Severity.RED: "!", Severity.ORANGE: "*"}.get(bucket.severity, "")
    return f"{day} ({bucket.count}{marker})"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def urgency_sort_key(item):
    """Most urgent first; UNKNOWN after everything ranked."""
    task, alert = item
    urgency = alert.tier.urgency
    return (urgency is None, -(urgency or 0), format_due(task), str(task.id))


# =============================================================================
# Alerts command
# =============================================================================


def make_alert_table(items) -> List[List[str]]:
    """Convert (task, alert) pairs to table rows."""
    rows = []
    for task, alert in items:
        rows.append(
            [
                task.id,
                task.equipment_id if task.equipment_id is not None else "-",
                truncate(task.description),
                format_due(task),
                task.status.value,
                format_days(alert),
                f"{alert.icon} {alert.message}",
            ]
        )
    return rows


def cmd_alerts(args, tasks: List[Task], now, zone):
    """Show every task with its alert banner."""
    items = [(task, classify(task, now, zone)) for task in tasks]

    if args.status:
        wanted = TaskStatus.parse(args.status)
        items = [(t, a) for t, a in items if t.status == wanted]
    if args.tier:
        items = [(t, a) for t, a in items if a.tier.value == args.tier]

    print(f"Tasks: {len(tasks)} (as of {now.isoformat()})")
    if args.status or args.tier:
        print(f"Showing: {len(items)} (filtered)")
    print()

    if not items:
        print("No tasks found.")
        return 0

    items.sort(key=urgency_sort_key)
    headers = ["ID", "Equipment", "Description", "Due", "Status", "Days", "Alert"]
    print(tabulate(make_alert_table(items), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Calendar command
# =============================================================================


def make_calendar_rows(
    cells: List[Optional[int]], reference: date, buckets
) -> List[List[str]]:
    """Split month grid cells into week rows of seven."""
    rows = []
    week: List[str] = []
    for cell in cells:
        if cell is None:
            week.append("")
        else:
            week.append(format_bucket(cell, buckets.get(reference.replace(day=cell))))
        if len(week) == 7:
            rows.append(week)
            week = []
    if week:
        rows.append(week + [""] * (7 - len(week)))
    return rows


def cmd_calendar(args, tasks: List[Task], now, zone):
    """Show a month calendar with alert markers."""
    if args.month:
        try:
            reference = datetime.strptime(args.month, "%Y-%m").date()
        except ValueError:
            print(f"Error: Invalid month '{args.month}' (expected YYYY-MM)")
            return 1
    else:
        reference = now.replace(day=1)

    buckets = month_buckets(reference, tasks, now, zone)
    cells = build_month_grid(reference)

    print(reference.strftime("%B %Y"))
    print()
    print(
        tabulate(
            make_calendar_rows(cells, reference, buckets),
            headers=WEEKDAYS,
            tablefmt="simple",
        )
    )
    print()
    print("(n!) overdue tasks   (n*) due within a week   (n) later")
    return 0


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args, tasks: List[Task], now, zone):
    """Show dashboard counts."""
    summary = summarize(tasks, now, zone)

    print(f"Total tasks: {summary.total} (as of {now.isoformat()})")
    print(f"Pending: {summary.pending}")
    print(f"In progress: {summary.in_progress}")
    print(f"Overdue: {summary.overdue}")
    print()

    rows = [[status.value, count] for status, count in summary.by_status.items()]
    print(tabulate(rows, headers=["Status", "Tasks"], tablefmt="simple"))
    print()

    rows = [
        [tier.value, count] for tier, count in summary.by_tier.items() if count
    ]
    if rows:
        print(tabulate(rows, headers=["Alert", "Tasks"], tablefmt="simple"))
    return 0


# =============================================================================
# Can command
# =============================================================================


def cmd_can(args):
    """Check whether a role may perform an action."""
    if has_permission(args.role, args.action):
        print(f"allow: {args.role} may {args.action}")
        return 0
    print(f"deny: {args.role} may not {args.action}")
    return 1


# =============================================================================
# Mutating commands
# =============================================================================


def require(role: str, action: Action) -> bool:
    """Print an error and return False if role may not perform action."""
    if has_permission(role, action):
        return True
    print(f"Error: role '{role}' may not {action.value} tasks")
    return False


def cmd_add(args):
    """Add a new task."""
    if not require(args.role, Action.ADD):
        return 1

    try:
        due = date.fromisoformat(args.date)
    except ValueError:
        print(f"Error: Invalid date '{args.date}' (expected YYYY-MM-DD)")
        return 1

    try:
        status = TaskStatus.parse(args.status, strict=True)
    except ValueError:
        print(f"Error: Invalid status '{args.status}'")
        return 1

    task = Task(
        id=None,
        equipment_id=args.equipment_id,
        description=args.description,
        due_date=due,
        status=status,
    )

    print(f"Adding task to {args.tasks_file}:")
    print(f"  Equipment:   {task.equipment_id}")
    print(f"  Description: {task.description}")
    print(f"  Due:         {format_due(task)}")
    print(f"  Status:      {task.status.value}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    stored = add_task(args.tasks_file, task)
    print(f"Task {stored.id} saved.")
    return 0


def cmd_set_status(args):
    """Change a task's status."""
    if not require(args.role, Action.EDIT):
        return 1

    try:
        status = TaskStatus.parse(args.status, strict=True)
    except ValueError:
        print(f"Error: Invalid status '{args.status}'")
        return 1
    print(f"Task {args.task_id}: status -> {status.value}")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        save_task_status(args.tasks_file, args.task_id, status)
    except KeyError:
        print(f"Error: Unknown task '{args.task_id}'")
        return 1
    print("Status updated.")
    return 0


def cmd_delete(args):
    """Delete a task."""
    if not require(args.role, Action.DELETE):
        return 1

    if args.dry_run:
        print(f"Would delete task {args.task_id}")
        print("(dry run - no changes made)")
        return 0

    try:
        removed = delete_task(args.tasks_file, args.task_id)
    except KeyError:
        print(f"Error: Unknown task '{args.task_id}'")
        return 1
    print(f"Deleted task {removed.id}: {removed.description}")
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Factory maintenance task tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/tasks.yaml alerts
  %(prog)s data/tasks.yaml alerts --tier overdue
  %(prog)s data/tasks.yaml --today 2025-03-10 calendar --month 2025-03
  %(prog)s data/tasks.yaml --tz Asia/Kolkata summary
  %(prog)s data/tasks.yaml can operator delete
  %(prog)s data/tasks.yaml add 3 "Replace conveyor belt" --date 2025-03-14 \\
      --role operator
  %(prog)s data/tasks.yaml set-status 7 Completed --role operator
  %(prog)s data/tasks.yaml delete 7 --role admin
""",
    )
    parser.add_argument(
        "tasks_file",
        type=Path,
        help="Path to tasks YAML file",
    )
    parser.add_argument(
        "--today",
        type=str,
        help="Reference day in YYYY-MM-DD format (default: today in --tz)",
    )
    parser.add_argument(
        "--tz",
        type=str,
        default="UTC",
        help="Time zone that defines calendar days (default: UTC)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Alerts subcommand
    alerts_parser = subparsers.add_parser(
        "alerts", help="Show every task with its alert banner"
    )
    alerts_parser.add_argument(
        "--status",
        type=str,
        help="Filter to a task status (Pending, 'In Progress', Completed)",
    )
    alerts_parser.add_argument(
        "--tier",
        choices=[tier.value for tier in AlertTier],
        help="Filter to an alert tier",
    )

    # Calendar subcommand
    calendar_parser = subparsers.add_parser(
        "calendar", help="Show a month calendar with alert markers"
    )
    calendar_parser.add_argument(
        "--month",
        type=str,
        help="Month in YYYY-MM format (default: month of --today)",
    )

    # Summary subcommand
    subparsers.add_parser("summary", help="Show dashboard counts")

    # Can subcommand
    can_parser = subparsers.add_parser(
        "can", help="Check whether a role may perform an action"
    )
    can_parser.add_argument("role", type=str, help="Role (admin, operator, user)")
    can_parser.add_argument(
        "action",
        type=str,
        help="Action (view, add, edit, delete, register, manage_users)",
    )

    # Add subcommand
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("equipment_id", type=str, help="Equipment ID")
    add_parser.add_argument("description", type=str, help="Task description")
    add_parser.add_argument(
        "--date",
        type=str,
        required=True,
        help="Due date in YYYY-MM-DD format",
    )
    add_parser.add_argument(
        "--status",
        type=str,
        default=TaskStatus.PENDING.value,
        help="Initial status (default: Pending)",
    )

    # Set-status subcommand
    status_parser = subparsers.add_parser("set-status", help="Change a task's status")
    status_parser.add_argument("task_id", type=str, help="Task ID")
    status_parser.add_argument(
        "status", type=str, help="New status (Pending, 'In Progress', Completed)"
    )

    # Delete subcommand
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", type=str, help="Task ID")

    for sub in (add_parser, status_parser, delete_parser):
        sub.add_argument(
            "--role",
            type=str,
            required=True,
            help="Role of the caller (admin, operator, user)",
        )
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would change without saving",
        )

    return parser


def resolve_now(today: Optional[str], zone):
    """Reference day from --today, or the current day in zone."""
    if today:
        return date.fromisoformat(today)
    return datetime.now(zone).date()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Policy lookup needs no task data
    if args.command == "can":
        return cmd_can(args)

    # Validate tasks file exists
    if not args.tasks_file.exists():
        print(f"Error: File not found: {args.tasks_file}")
        return 1

    zone = get_timezone(args.tz)
    if zone is None:
        print(f"Error: Unknown time zone '{args.tz}'")
        return 1

    try:
        now = resolve_now(args.today, zone)
    except ValueError:
        print(f"Error: Invalid date '{args.today}' (expected YYYY-MM-DD)")
        return 1

    # Dispatch to command handler
    if args.command == "add":
        return cmd_add(args)
    elif args.command == "set-status":
        return cmd_set_status(args)
    elif args.command == "delete":
        return cmd_delete(args)

    tasks = load_tasks(args.tasks_file)
    if args.command == "alerts":
        return cmd_alerts(args, tasks, now, zone)
    elif args.command == "calendar":
        return cmd_calendar(args, tasks, now, zone)
    elif args.command == "summary":
        return cmd_summary(args, tasks, now, zone)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
