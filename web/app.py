"""Flask web application for the factory maintenance dashboard."""

import os
from datetime import date, datetime
from pathlib import Path

from flask import Flask, abort, jsonify, request

# Add parent directory to path for engine imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine import (
    Action,
    Task,
    TaskStatus,
    add_task,
    allowed_actions,
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

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
app.config["TASKS_FILE"] = Path(
    os.environ.get("TASKS_FILE", Path(__file__).parent.parent / "data" / "tasks.yaml")
)
app.config["MAINT_TZ"] = os.environ.get("MAINT_TZ", "UTC")

ROLE_HEADER = "X-Role"


def get_zone():
    zone = get_timezone(app.config["MAINT_TZ"])
    if zone is None:
        raise RuntimeError(f"Unknown time zone: {app.config['MAINT_TZ']}")
    return zone


def get_role() -> str:
    """Caller's role as supplied by the session provider."""
    return request.headers.get(ROLE_HEADER, "")


def get_now(zone) -> date:
    """Reference day for this request: ?today= or the current day in zone."""
    today = request.args.get("today")
    if today:
        try:
            return date.fromisoformat(today)
        except ValueError:
            abort(400, description=f"Invalid date '{today}' (expected YYYY-MM-DD)")
    return datetime.now(zone).date()


def require(action: Action):
    """Abort with 403 unless the caller's role may perform action."""
    role = get_role()
    if not has_permission(role, action):
        app.logger.warning("Denied %s for role %r", action.value, role)
        abort(403, description=f"Role '{role}' may not {action.value} tasks")


def alert_json(alert) -> dict:
    return {
        "tier": alert.tier.value,
        "icon": alert.icon,
        "message": alert.message,
        "color": alert.color_token,
        "days_until_due": alert.days_until_due,
    }


def bucket_json(bucket) -> dict:
    if bucket is None:
        return None
    return {
        "day": bucket.day.isoformat(),
        "severity": bucket.severity.name.lower(),
        "count": bucket.count,
    }


@app.errorhandler(400)
@app.errorhandler(403)
@app.errorhandler(404)
def json_error(error):
    return jsonify({"error": error.description}), error.code


@app.route("/")
def index():
    """Dashboard summary counts."""
    require(Action.VIEW)
    zone = get_zone()
    now = get_now(zone)
    summary = summarize(load_tasks(app.config["TASKS_FILE"]), now, zone)

    return jsonify({
        "as_of": now.isoformat(),
        "total": summary.total,
        "pending": summary.pending,
        "in_progress": summary.in_progress,
        "overdue": summary.overdue,
        "by_status": {s.value: n for s, n in summary.by_status.items()},
        "by_tier": {t.value: n for t, n in summary.by_tier.items()},
        "actions": sorted(a.value for a in allowed_actions(get_role())),
    })


@app.route("/tasks", methods=["GET"])
def list_tasks():
    """All tasks with their alert banners."""
    require(Action.VIEW)
    zone = get_zone()
    now = get_now(zone)
    tasks = load_tasks(app.config["TASKS_FILE"])

    return jsonify({
        "as_of": now.isoformat(),
        "tasks": [
            dict(task.to_dict(), alert=alert_json(classify(task, now, zone)))
            for task in tasks
        ],
    })


@app.route("/calendar")
def calendar():
    """Month grid with per-day alert buckets."""
    require(Action.VIEW)
    zone = get_zone()
    now = get_now(zone)

    month = request.args.get("month")
    if month:
        try:
            reference = datetime.strptime(month, "%Y-%m").date()
        except ValueError:
            abort(400, description=f"Invalid month '{month}' (expected YYYY-MM)")
    else:
        reference = now.replace(day=1)

    buckets = month_buckets(reference, load_tasks(app.config["TASKS_FILE"]), now, zone)
    cells = []
    for day in build_month_grid(reference):
        if day is None:
            cells.append(None)
            continue
        cells.append({
            "day": day,
            "today": reference.replace(day=day) == now,
            "alert": bucket_json(buckets.get(reference.replace(day=day))),
        })

    return jsonify({
        "month": reference.strftime("%Y-%m"),
        "as_of": now.isoformat(),
        "cells": cells,
    })


@app.route("/tasks", methods=["POST"])
def create_task():
    """Add a task (admin, operator)."""
    require(Action.ADD)
    payload = request.get_json(silent=True) or {}

    equipment_id = payload.get("equipment_id")
    description = payload.get("description")
    task_date = payload.get("task_date")
    if not equipment_id or not description or not task_date:
        abort(400, description="Please fill in all fields")
    try:
        date.fromisoformat(task_date)
    except (TypeError, ValueError):
        abort(400, description=f"Invalid date '{task_date}' (expected YYYY-MM-DD)")

    status = payload.get("status") or TaskStatus.PENDING.value
    try:
        status = TaskStatus.parse(status, strict=True)
    except ValueError:
        abort(400, description=f"Invalid status '{status}'")

    task = Task(
        id=None,
        equipment_id=equipment_id,
        description=description,
        due_date=task_date,
        status=status,
    )
    stored = add_task(app.config["TASKS_FILE"], task)
    app.logger.info("Created task %s", stored.id)
    return jsonify(stored.to_dict()), 201


@app.route("/tasks/<task_id>/status", methods=["POST"])
def update_status(task_id: str):
    """Change a task's status (admin, operator)."""
    require(Action.EDIT)
    payload = request.get_json(silent=True) or {}

    status = payload.get("status")
    if not status:
        abort(400, description="Please choose a status")

    try:
        task = save_task_status(app.config["TASKS_FILE"], task_id, status)
    except KeyError:
        abort(404, description=f"Task '{task_id}' not found")
    except ValueError:
        abort(400, description=f"Invalid status '{status}'")

    app.logger.info("Task %s status -> %s", task_id, task.status.value)
    return jsonify(task.to_dict())


@app.route("/tasks/<task_id>", methods=["DELETE"])
def remove_task(task_id: str):
    """Delete a task (admin)."""
    require(Action.DELETE)

    try:
        removed = delete_task(app.config["TASKS_FILE"], task_id)
    except KeyError:
        abort(404, description=f"Task '{task_id}' not found")

    app.logger.info("Deleted task %s", removed.id)
    return jsonify(removed.to_dict())


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
