"""Gym member model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Member:
    """A gym member.

    ``fitness_goals`` is a denormalized copy of the member's standalone
    fitness goal record, kept for read convenience.
    """

    name: str
    email: str
    fitness_goals: dict | None = None
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "fitness_goals": self.fitness_goals,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
