"""Assignment models handed to the reveal screens."""

from datetime import datetime

from pydantic import BaseModel

from core.roles import RoleDefinition


class AssignedPlayer(BaseModel):
    """A participant and the role they drew."""

    id: int  # Index in the original participant list
    name: str
    role: RoleDefinition
    revealed: bool = False

    def to_dict(self, include_role: bool = False) -> dict:
        """Convert player to dictionary for API responses.

        Args:
            include_role: Whether to include the player's role (only once revealed)

        Returns:
            Dictionary representation of the player
        """
        data = {
            "id": self.id,
            "name": self.name,
            "revealed": self.revealed,
        }
        if include_role:
            data["role"] = self.role.model_dump(mode="json")
        return data


class AssignmentMetadata(BaseModel):
    """The exact inputs that produced an assignment."""

    total_players: int
    role_configuration: dict[str, int]
    villager_count: int
    version: str


class AssignmentStatistics(BaseModel):
    """Read-only summary of the realized role counts."""

    role_distribution: dict[str, int]
    team_distribution: dict[str, int]


class Assignment(BaseModel):
    """One randomized mapping of participants to roles."""

    id: str
    timestamp: datetime
    players: list[AssignedPlayer]
    metadata: AssignmentMetadata
    statistics: AssignmentStatistics

    def get_player(self, player_id: int) -> AssignedPlayer | None:
        """Find a player by their index id."""
        return next((p for p in self.players if p.id == player_id), None)

    def players_with_role(self, role_id: str) -> list[AssignedPlayer]:
        """Get every player holding the given role."""
        role_id = role_id.upper()
        return [p for p in self.players if p.role.id == role_id]

    def __repr__(self) -> str:
        return f"Assignment(id={self.id}, players={len(self.players)})"
