"""Order status transition engine.

Pure functions over the tables in ``modules.orders.constants``.  Nothing
here logs, touches the database or raises: an unrecognised state or role
is an ordinary input and yields a negative answer.

Two independent questions are answered:

- ``is_transition_valid``: is ``current -> new`` structurally possible?
- ``is_transition_allowed_for_role``: may this role class perform it?

Callers (the order service, the transitions endpoint) decide how a
negative answer is surfaced.
"""

from __future__ import annotations

from typing import Any, Optional

from modules.orders.constants import (
    CONFIRMATION_REQUIRED_STATES,
    EDIT_LOCKED_STATES,
    ROLE_TRANSITIONS,
    TERMINAL_STATES,
    TRANSITION_ACTIONS,
    VALID_TRANSITIONS,
    ActorRole,
    OrderStatus,
)


def _token(value: Any) -> Optional[str]:
    """Return ``value`` if it can be used as a table key, else ``None``."""
    return value if isinstance(value, str) else None


def reachable_states(current: Any) -> tuple[str, ...]:
    """States reachable from ``current`` in one step (any role)."""
    key = _token(current)
    if key is None:
        return ()
    return VALID_TRANSITIONS.get(key, ())


def is_transition_valid(current: Any, new: Any) -> bool:
    """Check whether ``current -> new`` exists in the global table."""
    key = _token(current)
    if key is None or key not in VALID_TRANSITIONS:
        return False
    return _token(new) in VALID_TRANSITIONS[key]


def allowed_transitions_for_role(role: Any, current: Any) -> tuple[str, ...]:
    """Ordered destinations ``role`` may trigger from ``current``.

    Role entries are filtered through the global table, so a role can never
    reach a state the state machine itself forbids.
    """
    role_key = _token(role)
    state_key = _token(current)
    if role_key is None or state_key is None:
        return ()
    role_table = ROLE_TRANSITIONS.get(role_key)
    if role_table is None:
        return ()
    return tuple(
        target
        for target in role_table.get(state_key, ())
        if is_transition_valid(state_key, target)
    )


def is_transition_allowed_for_role(role: Any, current: Any, new: Any) -> bool:
    """Check whether ``role`` may move an order from ``current`` to ``new``."""
    target = _token(new)
    if target is None:
        return False
    return target in allowed_transitions_for_role(role, current)


def is_terminal(state: Any) -> bool:
    return _token(state) in TERMINAL_STATES


def can_edit_contents(state: Any) -> bool:
    """Only known, non-locked states (DRAFT, PENDING) accept content edits."""
    key = _token(state)
    return key in VALID_TRANSITIONS and key not in EDIT_LOCKED_STATES


def requires_confirmation(target: Any) -> bool:
    """Destructive transitions need an explicit second confirmation."""
    return _token(target) in CONFIRMATION_REQUIRED_STATES


def transition_actions(role: Any, current: Any) -> list[dict[str, Any]]:
    """Describe the actionable transitions of ``role`` from ``current``.

    One entry per destination, in table order, ready to be rendered as a
    button group.
    """
    actions = []
    for target in allowed_transitions_for_role(role, current):
        display = TRANSITION_ACTIONS.get(target, {})
        actions.append(
            {
                "status": str(target),
                "label": display.get("label", str(target)),
                "color": display.get("color", "primary"),
                "requires_confirmation": requires_confirmation(target),
            }
        )
    return actions


# ---------------------------------------------------------------------------
# Boundary helpers
# ---------------------------------------------------------------------------


def parse_state(value: Any) -> Optional[OrderStatus]:
    """Map an external token to ``OrderStatus``; ``None`` if unrecognised."""
    key = _token(value)
    if key is None or key not in OrderStatus.values:
        return None
    return OrderStatus(key)


def parse_role(value: Any) -> Optional[ActorRole]:
    """Map an external token to ``ActorRole``; ``None`` if unrecognised."""
    key = _token(value)
    if key is None or key not in ActorRole.values:
        return None
    return ActorRole(key)
