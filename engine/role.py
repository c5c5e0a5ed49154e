"""Role and Action enums for access control."""

from enum import Enum
from typing import Any, Optional


class Role(Enum):
    """Identity classes a caller can hold."""

    ADMIN = "admin"
    OPERATOR = "operator"
    USER = "user"


class Action(Enum):
    """Capabilities gated by the permission policy."""

    VIEW = "view"
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    REGISTER = "register"
    MANAGE_USERS = "manage_users"


def _lookup(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return None


def parse_role(value: Any) -> Optional[Role]:
    """Resolve a role name (case-insensitive) or None if unrecognized."""
    return _lookup(Role, value)


def parse_action(value: Any) -> Optional[Action]:
    """Resolve an action name (case-insensitive) or None if unrecognized."""
    return _lookup(Action, value)
