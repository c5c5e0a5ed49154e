"""Role-based permission policy.

A single static table maps each role to the actions it may perform. Lookups
never raise: unknown roles and actions are simply denied.
"""

from typing import Any, Dict, FrozenSet

from .role import Action, Role, parse_action, parse_role

PERMISSIONS: Dict[Role, FrozenSet[Action]] = {
    Role.ADMIN: frozenset(
        {
            Action.VIEW,
            Action.ADD,
            Action.EDIT,
            Action.DELETE,
            Action.REGISTER,
            Action.MANAGE_USERS,
        }
    ),
    Role.OPERATOR: frozenset({Action.VIEW, Action.ADD, Action.EDIT}),
    Role.USER: frozenset({Action.VIEW}),
}


def allowed_actions(role: Any) -> FrozenSet[Action]:
    """Actions granted to a role; empty for anything unrecognized."""
    resolved = parse_role(role)
    if resolved is None:
        return frozenset()
    return PERMISSIONS[resolved]


def has_permission(role: Any, action: Any) -> bool:
    """Check whether a role may perform an action."""
    resolved = parse_action(action)
    if resolved is None:
        return False
    return resolved in allowed_actions(role)


def has_role(current_role: Any, expected_role: Any) -> bool:
    """Exact role match. Two unrecognized roles never match."""
    current = parse_role(current_role)
    return current is not None and current == parse_role(expected_role)
