"""Unit tests for Orders event handlers and their bus wiring."""

from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from modules.orders.events import OrderCancelled, OrderCreated, OrderStatusChanged
from modules.orders.handlers import (
    OrderCancelledHandler,
    OrderCreatedHandler,
    OrderStatusChangedHandler,
    order_cancelled_handler,
    order_created_handler,
    order_status_changed_handler,
)
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.unit


def _messages(caplog):
    return [record.getMessage() for record in caplog.records]


def test_order_created_handler_logs(caplog):
    order_id = uuid4()
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderCreatedHandler().handle(OrderCreated(aggregate_id=order_id))

    assert any(f"Rascunho de pedido {order_id} criado" in m for m in _messages(caplog))


def test_order_status_changed_handler_logs_both_states(caplog):
    order_id = uuid4()
    event = OrderStatusChanged(
        aggregate_id=order_id,
        old_status="PENDING",
        new_status="CONFIRMED",
        actor_role="INTERNAL",
    )
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderStatusChangedHandler().handle(event)

    assert any(f"Pedido {order_id}: PENDING -> CONFIRMED" in m for m in _messages(caplog))


def test_order_cancelled_handler_logs(caplog):
    order_id = uuid4()
    with caplog.at_level(logging.INFO, logger="modules.orders.handlers"):
        OrderCancelledHandler().handle(
            OrderCancelled(aggregate_id=order_id, actor_role="CUSTOMER")
        )

    assert any(f"Pedido {order_id} cancelado" in m for m in _messages(caplog))


def test_app_ready_subscribes_handlers():
    assert order_created_handler in event_bus._handlers[OrderCreated]
    assert order_status_changed_handler in event_bus._handlers[OrderStatusChanged]
    assert order_cancelled_handler in event_bus._handlers[OrderCancelled]
