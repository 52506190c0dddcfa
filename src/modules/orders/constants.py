"""Order domain constants.

Defines the status choices, the actor role classes and the transition
tables of the order state machine.

Main flow::

    DRAFT -> PENDING -> CONFIRMED -> IN_PRODUCTION -> READY -> DELIVERED

CANCELLED is reachable from DRAFT, PENDING, CONFIRMED and IN_PRODUCTION.
READY only moves to DELIVERED (a produced order is not cancelled).
DELIVERED and CANCELLED are terminal.

The tables are read-only mappings of tuples, built once at import time.
"""

from types import MappingProxyType
from typing import Mapping

from django.db import models


class OrderStatus(models.TextChoices):
    DRAFT = "DRAFT", "Rascunho"
    PENDING = "PENDING", "Pendente"
    CONFIRMED = "CONFIRMED", "Confirmado"
    IN_PRODUCTION = "IN_PRODUCTION", "Em Produção"
    READY = "READY", "Pronto"
    DELIVERED = "DELIVERED", "Entregue"
    CANCELLED = "CANCELLED", "Cancelado"


class ActorRole(models.TextChoices):
    """Coarse actor classes used to scope status transitions."""

    CUSTOMER = "CUSTOMER", "Cliente"
    INTERNAL = "INTERNAL", "Interno"


VALID_TRANSITIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        OrderStatus.DRAFT: (OrderStatus.PENDING, OrderStatus.CANCELLED),
        OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
        OrderStatus.CONFIRMED: (OrderStatus.IN_PRODUCTION, OrderStatus.CANCELLED),
        OrderStatus.IN_PRODUCTION: (OrderStatus.READY, OrderStatus.CANCELLED),
        OrderStatus.READY: (OrderStatus.DELIVERED,),
        OrderStatus.DELIVERED: (),
        OrderStatus.CANCELLED: (),
    }
)

# CUSTOMER builds and submits the draft and may give up before confirmation.
# INTERNAL drives the order from confirmation to delivery and may cancel.
ROLE_TRANSITIONS: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        ActorRole.CUSTOMER: MappingProxyType(
            {
                OrderStatus.DRAFT: (OrderStatus.PENDING, OrderStatus.CANCELLED),
                OrderStatus.PENDING: (OrderStatus.CANCELLED,),
            }
        ),
        ActorRole.INTERNAL: MappingProxyType(
            {
                OrderStatus.PENDING: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
                OrderStatus.CONFIRMED: (
                    OrderStatus.IN_PRODUCTION,
                    OrderStatus.CANCELLED,
                ),
                OrderStatus.IN_PRODUCTION: (OrderStatus.READY, OrderStatus.CANCELLED),
                OrderStatus.READY: (OrderStatus.DELIVERED,),
            }
        ),
    }
)

ORDER_STATES: tuple[str, ...] = tuple(VALID_TRANSITIONS)

TERMINAL_STATES: frozenset[str] = frozenset(
    state for state, targets in VALID_TRANSITIONS.items() if not targets
)

# Content (notes) may only be edited while the order is DRAFT or
# PENDING.  Kept apart from VALID_TRANSITIONS: content mutability and status
# mutability are separate policies.
EDIT_LOCKED_STATES: frozenset[str] = frozenset(
    {
        OrderStatus.CONFIRMED,
        OrderStatus.IN_PRODUCTION,
        OrderStatus.READY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }
)

# Button label and colour hint for each destination state.
TRANSITION_ACTIONS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        OrderStatus.PENDING: {"label": "Enviar Pedido", "color": "primary"},
        OrderStatus.CONFIRMED: {"label": "Confirmar Pedido", "color": "info"},
        OrderStatus.IN_PRODUCTION: {"label": "Iniciar Produção", "color": "warning"},
        OrderStatus.READY: {"label": "Marcar Pronto", "color": "success"},
        OrderStatus.DELIVERED: {"label": "Registrar Entrega", "color": "success"},
        OrderStatus.CANCELLED: {"label": "Cancelar", "color": "error"},
    }
)

CONFIRMATION_REQUIRED_STATES: frozenset[str] = frozenset({OrderStatus.CANCELLED})

ORDER_NUMBER_MAX_RETRIES = 5
