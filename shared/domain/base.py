"""
Base Domain Classes

Building blocks shared by the booking contexts:
- ValueObject: Immutable objects compared by value
- DomainEvent: Something that happened, published after commit
"""

from abc import ABC
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass
class DomainEvent:
    """
    Base class for domain events

    Domain events are collected by the unit of work while a transaction is
    open and handed to the message bus once the transaction commits.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=datetime.now)
    aggregate_id: int | None = None

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict:
        """Convert event to a JSON-friendly dictionary"""
        payload = {}
        for key, value in asdict(self).items():
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            elif isinstance(value, UUID):
                value = str(value)
            payload[key] = value
        payload['event_type'] = self.event_type
        return payload
