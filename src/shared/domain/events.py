"""Domain event primitives.

Aggregates record events while they change; the service pulls them once
the change is persisted and hands them to the event bus after commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=_utcnow)

    @property
    def event_name(self) -> str:
        return type(self).__name__


class DomainEventMixin:
    """Collects domain events on a model instance (never persisted)."""

    def _pending_events(self) -> list[DomainEvent]:
        return self.__dict__.setdefault("_domain_events", [])

    def add_domain_event(self, event: DomainEvent) -> None:
        self._pending_events().append(event)

    @property
    def domain_events(self) -> list[DomainEvent]:
        return list(self._pending_events())

    def clear_domain_events(self) -> None:
        self._pending_events().clear()

    def pull_domain_events(self) -> list[DomainEvent]:
        """Return the recorded events and forget them."""
        events = self.domain_events
        self.clear_domain_events()
        return events
