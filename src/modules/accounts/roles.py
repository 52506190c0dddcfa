"""Role codes of the system and their mapping to transition role classes.

INTERNAL codes belong to bakery staff, CUSTOMER codes to users of B2B
customers.  The order state machine only distinguishes the two classes.
"""

from __future__ import annotations

from typing import Any, Optional

from django.db import models

from modules.orders.constants import ActorRole

class RoleCode(models.TextChoices):
    ADMIN_SISTEMA = "ADMIN_SISTEMA", "Administrador do Sistema"
    GERENTE_COMERCIAL = "GERENTE_COMERCIAL", "Gerente Comercial"
    FINANCEIRO = "FINANCEIRO", "Financeiro"
    OPERADOR_PEDIDOS = "OPERADOR_PEDIDOS", "Operador de Pedidos"
    AUDITOR_READONLY = "AUDITOR_READONLY", "Auditor (somente leitura)"
    CLIENTE_ADMIN = "CLIENTE_ADMIN", "Administrador do Cliente"
    CLIENTE_USUARIO = "CLIENTE_USUARIO", "Usuário do Cliente"

INTERNAL_ROLE_CODES: frozenset[str] = frozenset(
    {
        RoleCode.ADMIN_SISTEMA,
        RoleCode.GERENTE_COMERCIAL,
        RoleCode.FINANCEIRO,
        RoleCode.OPERADOR_PEDIDOS,
        RoleCode.AUDITOR_READONLY,
    }
)

CUSTOMER_ROLE_CODES: frozenset[str] = frozenset(
    {RoleCode.CLIENTE_ADMIN, RoleCode.CLIENTE_USUARIO}
)

# Roles that may create orders and change their status or contents.  The
# auditor is staff but read-only.
ORDER_WRITE_ROLE_CODES: frozenset[str] = (
    INTERNAL_ROLE_CODES | CUSTOMER_ROLE_CODES
) - {RoleCode.AUDITOR_READONLY}

# Higher level = more privileges.
ROLE_LEVELS: dict[str, int] = {
    RoleCode.ADMIN_SISTEMA: 100,
    RoleCode.GERENTE_COMERCIAL: 80,
    RoleCode.FINANCEIRO: 60,
    RoleCode.OPERADOR_PEDIDOS: 50,
    RoleCode.AUDITOR_READONLY: 40,
    RoleCode.CLIENTE_ADMIN: 30,
    RoleCode.CLIENTE_USUARIO: 20,
}


def role_class_for(code: Any) -> Optional[ActorRole]:
    """Return the role class of a role code, ``None`` for unknown codes."""
    if not isinstance(code, str):
        return None
    if code in INTERNAL_ROLE_CODES:
        return ActorRole.INTERNAL
    if code in CUSTOMER_ROLE_CODES:
        return ActorRole.CUSTOMER
    return None


def role_level(code: Any) -> int:
    if not isinstance(code, str):
        return 0
    return ROLE_LEVELS.get(code, 0)


def can_write_orders(code: Any) -> bool:
    return isinstance(code, str) and code in ORDER_WRITE_ROLE_CODES
