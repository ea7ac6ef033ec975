from __future__ import annotations

from pydantic import ConfigDict

from dialect_adapter.core.interfaces.model_bases import DomainModel


class ValueObject(DomainModel):
    """Base class for value objects.

    Value objects are immutable and compared by their values,
    not their identities.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True, frozen=True  # Value objects are immutable
    )
