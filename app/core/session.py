"""Reveal session holding the current assignment for one pass-and-play table."""

import logging
import random
from datetime import datetime

from models.assignment import AssignedPlayer, Assignment
from services.assignment import assign

from .roles import RoleRegistry, role_registry

logger = logging.getLogger(__name__)


class RevealSession:
    """Presentation-side state for the reveal phase.

    The session keeps its own deep copy of the engine's Assignment. Only that
    copy has its ``revealed`` flags flipped, and re-allocation replaces it
    wholesale.
    """

    def __init__(
        self,
        session_id: str,
        participant_names: list[str],
        role_counts: dict[str, int],
        registry: RoleRegistry = role_registry,
        rng: random.Random | None = None,
    ):
        """Create a session and run the first allocation.

        Args:
            session_id: The session's unique identifier
            participant_names: Names in input order
            role_counts: Role id to count mapping for special roles
            registry: Role registry to draw roles from
            rng: Random source. Only pass a seeded one in tests.
        """
        self.session_id: str = session_id
        self.participant_names: list[str] = [name.strip() for name in participant_names]
        self.role_counts: dict[str, int] = dict(role_counts)
        self.registry = registry
        self.rng = rng
        self.created_at: datetime = datetime.now()
        self.reallocations: int = 0
        self.assignment: Assignment = self._allocate()

    def _allocate(self) -> Assignment:
        assignment = assign(
            self.role_counts,
            len(self.participant_names),
            self.participant_names,
            self.registry,
            self.rng,
        )
        return assignment.model_copy(deep=True)

    def reallocate(self) -> Assignment:
        """Replace the current assignment with a freshly randomized one.

        Returns:
            The new assignment
        """
        self.assignment = self._allocate()
        self.reallocations += 1
        logger.info(
            "Session %s re-allocated (%d times)", self.session_id, self.reallocations
        )
        return self.assignment

    @property
    def players(self) -> list[AssignedPlayer]:
        return self.assignment.players

    def progress(self) -> dict:
        """Get reveal progress counts."""
        completed = sum(1 for p in self.players if p.revealed)
        return {"completed": completed, "total": len(self.players)}

    def get_public_state(self) -> dict:
        """Get the session state with every role hidden."""
        return {
            "session_id": self.session_id,
            "assignment_id": self.assignment.id,
            "players": [p.to_dict() for p in self.players],
            "progress": self.progress(),
            "role_distribution": self.assignment.statistics.role_distribution,
            "reallocations": self.reallocations,
        }

    def __repr__(self) -> str:
        return f"RevealSession(id={self.session_id}, players={len(self.participant_names)})"
