"""Django ORM implementation of the Order repository.

Concurrency control on status updates uses ``select_for_update()``: the
service reads the order under a row lock, checks the transition and
writes the new status inside one transaction.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.models import SoftDeleteQuerySet
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        order = Order(
            customer_id=data["customer_id"],
            status=data.get("status", OrderStatus.DRAFT),
            notes=data.get("notes") or "",
        )
        order.save()
        logger.info("order.persisted", order_id=str(order.id))
        return order

    def get_by_id(self, id: str) -> Optional[Order]:
        """Returns ``None`` for missing, soft-deleted or malformed IDs."""
        try:
            return (
                Order.objects.alive()
                .prefetch_related("status_history")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Lock the order row (SELECT FOR UPDATE); caller must be atomic."""
        try:
            return Order.objects.alive().select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> SoftDeleteQuerySet:
        """Lazy queryset of live orders, so callers can filter and paginate."""
        queryset = Order.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        actor_role: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order_id=order_id,
            old_status=old_status,
            new_status=status,
            actor_role=actor_role,
            user_id=user_id,
            notes=notes,
        )
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=status,
            actor_role=actor_role,
        )
        return history
