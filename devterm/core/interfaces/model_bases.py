"""Nominal marker base classes for model standardization.

``DomainModel`` is the base for Pydantic-based domain and API models and
``InternalDTO`` marks the dataclass DTOs passed between parsing stages.
"""

from __future__ import annotations

from pydantic import BaseModel


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based domain and API models."""

    def __repr__(self) -> str:
        """Provide a concise, one-line summary of the object."""
        class_name = self.__class__.__name__
        for attr in ("id", "name", "command_name", "command"):
            value = getattr(self, attr, None)
            if isinstance(value, str) and value:
                return f'<{class_name} {attr}="{value}">'
        return f"<{class_name}>"


class InternalDTO:
    """Nominal marker for internal dataclass DTOs."""
