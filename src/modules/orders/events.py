"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when a draft order is created."""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised after an accepted status transition."""

    old_status: Optional[str] = None
    new_status: Optional[str] = None
    actor_role: Optional[str] = None


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    """Raised when an order reaches CANCELLED."""

    actor_role: Optional[str] = None
