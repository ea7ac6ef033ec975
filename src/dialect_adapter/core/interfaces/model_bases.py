"""Nominal marker base classes for model standardization.

``DomainModel`` marks Pydantic-based payload and result models and
``InternalDTO`` marks internal dataclass-based records, so static type
checkers can tell the two families apart.
"""

from __future__ import annotations

from pydantic import BaseModel


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based domain and API models."""

    def __repr__(self) -> str:
        """Provide a concise, one-line summary of the object."""
        class_name = self.__class__.__name__

        # Dialect payloads are identified by their model, results by id
        repr_attrs = ("id", "model", "request_id")
        for attr in repr_attrs:
            if attr in type(self).model_fields:
                attr_value = getattr(self, attr)
                if attr_value is not None:
                    return f'<{class_name} {attr}="{attr_value}">'

        return f"<{class_name}>"


class InternalDTO:
    """Nominal marker for internal dataclass DTOs.

    This is a plain marker class intended to be mixed into dataclass
    definitions to make their intent explicit for mypy checks.
    """
