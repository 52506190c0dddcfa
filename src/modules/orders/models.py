"""Persistence for orders and their status audit trail.

An ``Order`` starts in DRAFT and only changes status through
``OrderService``, which asks ``modules.orders.transitions`` first.  The
service writes one ``OrderStatusHistory`` row per change.  ``customer_id``
is the tenant key used to scope every customer query.
"""

from __future__ import annotations

import secrets
from decimal import Decimal
from typing import Any

import structlog
from django.conf import settings
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel, SoftDeleteModel
from modules.orders import transitions
from modules.orders.constants import ORDER_NUMBER_MAX_RETRIES, ActorRole, OrderStatus
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)


class Order(DomainEventMixin, SoftDeleteModel):
    """A bakery order placed by (or on behalf of) a B2B customer.

    Lookups go through the UUIDv7 ``id``; ``order_number``
    (``PED-YYYYMMDD-XXXXXX``) is what people read on the counter and is
    allocated on the first save.
    """

    order_number: models.CharField = models.CharField(
        max_length=20, unique=True, editable=False
    )
    customer_id: models.UUIDField = models.UUIDField(db_index=True)
    status: models.CharField = models.CharField(
        max_length=20, choices=OrderStatus.choices, default=OrderStatus.DRAFT
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.order_number} ({self.status})"

    @property
    def is_terminal(self) -> bool:
        return transitions.is_terminal(self.status)

    @property
    def is_editable(self) -> bool:
        """Notes may only change while the order is DRAFT or PENDING."""
        return transitions.can_edit_contents(self.status)

    def can_transition_to(self, new_status: str) -> bool:
        return transitions.is_transition_valid(self.status, new_status)

    def allowed_transitions_for(self, role: ActorRole | str | None) -> tuple[str, ...]:
        return transitions.allowed_transitions_for_role(role, self.status)

    @staticmethod
    def generate_order_number() -> str:
        return f"PED-{timezone.now():%Y%m%d}-{secrets.token_hex(3).upper()}"

    def _claim_order_number(self) -> str:
        for _ in range(ORDER_NUMBER_MAX_RETRIES):
            candidate = self.generate_order_number()
            if not Order.objects.filter(order_number=candidate).exists():
                return candidate
        logger.error("order.number_generation_failed", attempts=ORDER_NUMBER_MAX_RETRIES)
        raise RuntimeError(
            f"No free order number after {ORDER_NUMBER_MAX_RETRIES} attempts"
        )

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.order_number:
            self.order_number = self._claim_order_number()
        super().save(*args, **kwargs)


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status transitions.

    Audit records are immutable, hence ``BaseModel`` rather than
    ``SoftDeleteModel``.  ``user`` and ``actor_role`` are nullable: the
    initial DRAFT record of an order created by the system has neither.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    actor_role: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=ActorRole.choices,
        null=True,
        blank=True,
    )
    user: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order} : {self.old_status} -> {self.new_status}"
