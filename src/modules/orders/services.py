"""Order service layer (Use Cases).

Orchestrates order creation, status transitions and content edits.  All
write operations are atomic; the service defines the unit-of-work
boundary.

Rules enforced:
- Orders are created in DRAFT.
- A status change must be structurally valid (400) *and* allowed for the
  actor's role class (403), as answered by ``modules.orders.transitions``.
- The order row is locked while a transition is checked and applied.
- Read-only actors (auditors) may not create or change orders (403).
- Contents are editable only in DRAFT and PENDING.
- Customer actors only see orders of their own customer.
- Every status change is recorded in the history trail and published as a
  domain event after commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.orders import transitions
from modules.orders.constants import OrderStatus
from modules.orders.dtos import OrderTransitionsDTO, TransitionActionDTO
from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.exceptions import (
    ActorNotAuthorized,
    CustomerRequired,
    InvalidOrderStatus,
    OrderLocked,
    OrderNotFound,
    TransitionNotAllowedForRole,
)

if TYPE_CHECKING:
    from modules.accounts.services import Actor
    from modules.orders.dtos import CreateOrderDTO, UpdateContentsDTO, UpdateStatusDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives its repository and event bus via constructor injection.
    """

    def __init__(self, order_repository: IOrderRepository, event_bus: IEventBus) -> None:
        self._order_repo = order_repository
        self._event_bus = event_bus

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO, actor: Actor) -> Order:
        """Create a DRAFT order.

        Raises:
            ActorNotAuthorized: the actor has no role class or is read-only.
            CustomerRequired: an internal actor did not name the customer.
        """
        if actor.role is None:
            raise ActorNotAuthorized("User has no role allowed to create orders.")
        self._require_write(actor)

        customer_id = actor.customer_id if actor.is_customer else dto.customer_id
        if customer_id is None:
            raise CustomerRequired("Field 'customer_id' is required.")

        order = self._order_repo.create(
            {
                "customer_id": customer_id,
                "status": OrderStatus.DRAFT,
                "notes": dto.notes or "",
            }
        )
        self._order_repo.add_history(
            order_id=order.id,
            status=OrderStatus.DRAFT,
            notes="Order created",
            actor_role=actor.role,
            user_id=actor.user_id,
        )
        order.add_domain_event(OrderCreated(aggregate_id=order.id))
        self._publish_on_commit(order)

        logger.info(
            "order.created",
            order_id=str(order.id),
            customer_id=str(customer_id),
            actor_role=actor.role,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_status(self, order_id: str, dto: UpdateStatusDTO, actor: Actor) -> Order:
        """Move an order to ``dto.status``.

        The order row is locked before the transition is checked, so two
        competing requests cannot both succeed.

        Raises:
            OrderNotFound: order missing or outside the actor's tenant.
            ActorNotAuthorized: the actor is read-only.
            InvalidOrderStatus: unknown status or impossible transition.
            TransitionNotAllowedForRole: the role class may not do it.
        """
        order = self._order_repo.get_for_update(str(order_id))
        if order is None or not self._is_visible(order, actor):
            raise OrderNotFound(f"Order {order_id} not found.")
        self._require_write(actor)

        current = order.status
        log = logger.bind(
            order_id=str(order_id),
            current_status=current,
            new_status=dto.status,
            actor_role=actor.role,
        )

        new_status = transitions.parse_state(dto.status)
        if new_status is None:
            log.warning("order.unknown_status")
            raise InvalidOrderStatus(f"Unknown status '{dto.status}'.")

        if not transitions.is_transition_valid(current, new_status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {current} to {new_status}."
            )

        if not transitions.is_transition_allowed_for_role(actor.role, current, new_status):
            log.warning("order.transition_forbidden")
            raise TransitionNotAllowedForRole(
                f"Role {actor.role} cannot transition {current} -> {new_status}."
            )

        order.status = new_status
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            status=new_status,
            notes=dto.notes,
            old_status=current,
            actor_role=actor.role,
            user_id=actor.user_id,
        )

        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=str(current),
                new_status=str(new_status),
                actor_role=_role_str(actor),
            )
        )
        if new_status == OrderStatus.CANCELLED:
            order.add_domain_event(
                OrderCancelled(aggregate_id=order.id, actor_role=_role_str(actor))
            )
        self._publish_on_commit(order)

        log.info("order.status_updated")
        return self._order_repo.get_by_id(str(order_id)) or order

    @transaction.atomic
    def update_contents(
        self, order_id: str, dto: UpdateContentsDTO, actor: Actor
    ) -> Order:
        """Edit the order notes.

        Raises:
            OrderNotFound: order missing or outside the actor's tenant.
            ActorNotAuthorized: the actor is read-only.
            OrderLocked: the status no longer allows content changes.
        """
        order = self._order_repo.get_for_update(str(order_id))
        if order is None or not self._is_visible(order, actor):
            raise OrderNotFound(f"Order {order_id} not found.")
        self._require_write(actor)

        if not order.is_editable:
            logger.warning("order.locked", order_id=str(order_id), status=order.status)
            raise OrderLocked(f"Order in status {order.status} can no longer be edited.")

        order.notes = dto.notes
        self._order_repo.save(order)
        logger.info("order.contents_updated", order_id=str(order_id))
        return self._order_repo.get_by_id(str(order_id)) or order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str, actor: Actor) -> Order:
        """Raises ``OrderNotFound`` when missing or outside the tenant."""
        order = self._order_repo.get_by_id(order_id)
        if order is None or not self._is_visible(order, actor):
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, actor: Actor, filters: Optional[Dict[str, Any]] = None):
        """Orders visible to ``actor``; customers are scoped to their tenant."""
        if actor.role is None:
            raise ActorNotAuthorized("User has no role allowed to list orders.")
        scoped = dict(filters or {})
        if actor.is_customer:
            scoped["customer_id"] = actor.customer_id
        return self._order_repo.list(scoped)

    def available_transitions(self, order_id: str, actor: Actor) -> OrderTransitionsDTO:
        """Actionable transitions of ``actor`` on the order, for button groups."""
        order = self.get_order(order_id, actor)
        actions = (
            [
                TransitionActionDTO(**action)
                for action in transitions.transition_actions(actor.role, order.status)
            ]
            if actor.can_write
            else []
        )
        return OrderTransitionsDTO(
            order_id=order.id,
            status=order.status,
            role=_role_str(actor),
            is_terminal=order.is_terminal,
            can_edit=order.is_editable and actor.can_write,
            actions=actions,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_write(actor: Actor) -> None:
        if not actor.can_write:
            logger.warning("order.write_denied", user_id=actor.user_id, actor_role=actor.role)
            raise ActorNotAuthorized("User has a read-only role.")

    @staticmethod
    def _is_visible(order: Order, actor: Actor) -> bool:
        if actor.is_internal:
            return True
        if actor.is_customer:
            return str(order.customer_id) == str(actor.customer_id)
        return False

    def _publish_on_commit(self, order: Order) -> None:
        events = order.pull_domain_events()
        transaction.on_commit(lambda: self._event_bus.publish_all(events))


def _role_str(actor: Actor) -> Optional[str]:
    return str(actor.role) if actor.role is not None else None
