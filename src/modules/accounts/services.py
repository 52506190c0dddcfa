"""Resolve the authenticated user into the actor seen by the order service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ObjectDoesNotExist

from modules.accounts.roles import RoleCode, can_write_orders, role_class_for
from modules.orders.constants import ActorRole

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    """Who is acting on an order.

    ``role`` is ``None`` when the user maps to no role class; the
    transition engine answers ``False`` for such an actor.  ``can_write``
    is ``False`` for read-only roles, which may look at orders but not
    create or change them.
    """

    user_id: Optional[int]
    role: Optional[ActorRole]
    customer_id: Optional[UUID] = None
    can_write: bool = False

    @property
    def is_internal(self) -> bool:
        return self.role == ActorRole.INTERNAL

    @property
    def is_customer(self) -> bool:
        return self.role == ActorRole.CUSTOMER


def resolve_actor(user: Any) -> Actor:
    """Build an ``Actor`` from a Django user.

    - Users without a profile have no role, except superusers, who act
      as ``ADMIN_SISTEMA``.
    - A customer-class profile without ``customer_id`` cannot be scoped to
      a tenant and resolves to no role.
    - ``AUDITOR_READONLY`` is internal but gets ``can_write=False``.
    """
    user_id = getattr(user, "pk", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return Actor(user_id=None, role=None)

    try:
        profile = user.profile
    except (AttributeError, ObjectDoesNotExist):
        profile = None

    if profile is None:
        if getattr(user, "is_superuser", False):
            return Actor(
                user_id=user_id,
                role=role_class_for(RoleCode.ADMIN_SISTEMA),
                can_write=True,
            )
        logger.warning("actor.profile_missing", user_id=user_id)
        return Actor(user_id=user_id, role=None)

    role = role_class_for(profile.role)
    if role == ActorRole.CUSTOMER and profile.customer_id is None:
        logger.warning("actor.customer_without_tenant", user_id=user_id)
        return Actor(user_id=user_id, role=None)

    return Actor(
        user_id=user_id,
        role=role,
        customer_id=profile.customer_id if role == ActorRole.CUSTOMER else None,
        can_write=role is not None and can_write_orders(profile.role),
    )
