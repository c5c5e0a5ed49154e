"""YAML loading and saving utilities for task files."""

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .task import Task, TaskStatus

PathLike = Union[str, Path]


def _read(filename: PathLike) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    data = data or {}
    if data.get("tasks") is None:
        data["tasks"] = []
    return data


def _write(filename: PathLike, data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _find_index(tasks: List[Dict[str, Any]], task_id: Any) -> int:
    for index, entry in enumerate(tasks):
        if str(entry.get("id")) == str(task_id):
            return index
    raise KeyError(f"Task {task_id} not found")


def _task_entry(task: Task) -> Dict[str, Any]:
    """Build the file entry, omitting None values for cleaner YAML."""
    due = task.due_date
    if isinstance(due, date):
        due = due.isoformat()
    entry = {"id": task.id}
    if task.equipment_id is not None:
        entry["equipmentId"] = task.equipment_id
    entry["description"] = task.description
    if due is not None:
        entry["taskDate"] = due
    entry["status"] = task.status.value
    return entry


def load_tasks(filename: PathLike) -> List[Task]:
    """Load all tasks from a YAML file."""
    return [Task.from_dict(entry) for entry in _read(filename)["tasks"]]


def add_task(filename: PathLike, task: Task) -> Task:
    """
    Append a task to a YAML file.

    A task without an id gets the next integer id after the largest one in
    the file. Returns the task as stored.
    """
    data = _read(filename)
    if task.id is None:
        ids = [e.get("id") for e in data["tasks"] if isinstance(e.get("id"), int)]
        task = Task(
            id=max(ids, default=0) + 1,
            equipment_id=task.equipment_id,
            description=task.description,
            due_date=task.due_date,
            status=task.status,
        )
    data["tasks"].append(_task_entry(task))
    _write(filename, data)
    return task


def save_task_status(
    filename: PathLike, task_id: Any, status: Union[TaskStatus, str]
) -> Task:
    """
    Update the status of one task.

    Raises ValueError for an unrecognized status and KeyError for an unknown
    id; the file is left untouched in both cases.
    """
    new_status = TaskStatus.parse(status, strict=True)
    data = _read(filename)
    index = _find_index(data["tasks"], task_id)
    data["tasks"][index]["status"] = new_status.value
    _write(filename, data)
    return Task.from_dict(data["tasks"][index])


def delete_task(filename: PathLike, task_id: Any) -> Task:
    """Remove one task. Raises KeyError for an unknown id."""
    data = _read(filename)
    index = _find_index(data["tasks"], task_id)
    removed = data["tasks"].pop(index)
    _write(filename, data)
    return Task.from_dict(removed)
