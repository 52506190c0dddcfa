"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  They are the
contracts between the API layer (DRF Serializers) and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for draft creation.
- ``UpdateStatusDTO``: input for a status transition request.
- ``UpdateContentsDTO``: input for a content edit.
- ``TransitionActionDTO`` / ``OrderTransitionsDTO``: the actionable
  transitions of an order for a given actor.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderDTO(BaseModel):
    """Immutable DTO for draft creation.

    ``customer_id`` is ignored for customer actors (their tenant is used)
    and required for internal actors.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[UUID] = None
    notes: Optional[str] = ""


class UpdateStatusDTO(BaseModel):
    """Immutable DTO for a status transition request.

    ``status`` is kept as the raw token, surrounding whitespace included:
    recognising it is the service's job, so a padded or unknown value is
    reported as an invalid transition.
    """

    model_config = ConfigDict(frozen=True)

    status: str
    notes: str = ""

    @field_validator("status")
    @classmethod
    def status_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Status must not be blank.")
        return v


class UpdateContentsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    notes: str


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class TransitionActionDTO(BaseModel):
    """One actionable transition, rendered by front-ends as a button."""

    model_config = ConfigDict(frozen=True)

    status: str
    label: str
    color: str
    requires_confirmation: bool


class OrderTransitionsDTO(BaseModel):
    """What the current actor may do with an order right now."""

    model_config = ConfigDict(frozen=True)

    order_id: UUID
    status: str
    role: Optional[str]
    is_terminal: bool
    can_edit: bool
    actions: List[TransitionActionDTO]

