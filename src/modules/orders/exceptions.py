"""Order domain exceptions.

Raised by the Service Layer when a business rule is violated.
The API layer (Views) catches these and translates them into
HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The order does not exist, was soft-deleted, or belongs to another tenant."""


class InvalidOrderStatus(Exception):
    """The requested status is unknown or the transition is structurally impossible."""


class TransitionNotAllowedForRole(Exception):
    """The transition exists but the actor's role class may not perform it."""


class OrderLocked(Exception):
    """The order contents can no longer be edited in its current status."""


class ActorNotAuthorized(Exception):
    """The acting user has no role class able to act on orders."""


class CustomerRequired(Exception):
    """An internal user created an order without naming the customer."""
