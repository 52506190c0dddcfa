"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from shared.domain.bus import IEventBus, IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info(
            f"Rascunho de pedido {event.aggregate_id} criado",
            order_id=str(event.aggregate_id),
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            f"Pedido {event.aggregate_id}: {event.old_status} -> {event.new_status}",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
            actor_role=event.actor_role,
        )


class OrderCancelledHandler(IEventHandler[OrderCancelled]):
    def handle(self, event: OrderCancelled) -> None:
        logger.info(
            f"Pedido {event.aggregate_id} cancelado",
            order_id=str(event.aggregate_id),
            actor_role=event.actor_role,
        )


order_created_handler = OrderCreatedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
order_cancelled_handler = OrderCancelledHandler()


def register_handlers(bus: IEventBus) -> None:
    """Subscribe the order handlers; safe to call more than once."""
    bus.subscribe(OrderCreated, order_created_handler)
    bus.subscribe(OrderStatusChanged, order_status_changed_handler)
    bus.subscribe(OrderCancelled, order_cancelled_handler)
