"""Task record and status enum."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union


class TaskStatus(Enum):
    """Workflow status of a maintenance task, valued by its display string."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: Any, strict: bool = False) -> "TaskStatus":
        """
        Resolve a status from its display string or enum-style name.

        Accepts "In Progress", "InProgress" and "in_progress" alike. Anything
        unrecognized is treated as PENDING so a stored record is never hidden
        as completed. With strict=True it raises ValueError instead; use that
        for caller-supplied values being written.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().replace(" ", "").replace("_", "").lower()
            for status in cls:
                if status.value.replace(" ", "").lower() == key:
                    return status
        if strict:
            raise ValueError(f"Invalid status: {value!r}")
        return cls.PENDING


DueDate = Union[str, date, datetime, None]


@dataclass(frozen=True)
class Task:
    """A maintenance task as supplied by the task store."""

    id: Any
    equipment_id: Any
    description: str
    due_date: DueDate
    status: TaskStatus = TaskStatus.PENDING

    def __post_init__(self):
        object.__setattr__(self, "status", TaskStatus.parse(self.status))

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "Task":
        """Build a task from an API or file record (snake or camel case keys)."""
        due: Optional[Any] = None
        for key in ("task_date", "taskDate", "due_date", "dueDate"):
            if key in dct:
                due = dct[key]
                break
        equipment_id = dct.get("equipment_id", dct.get("equipmentId"))
        return cls(
            id=dct.get("id"),
            equipment_id=equipment_id,
            description=dct.get("description") or "",
            due_date=due,
            status=TaskStatus.parse(dct.get("status")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the remote API's field names."""
        due = self.due_date
        if isinstance(due, (date, datetime)):
            due = due.isoformat()
        return {
            "id": self.id,
            "equipment_id": self.equipment_id,
            "description": self.description,
            "task_date": due,
            "status": self.status.value,
        }
