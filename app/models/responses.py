"""Response models for API endpoints."""

from pydantic import BaseModel

from core.roles import RoleDefinition


class PlayerResponse(BaseModel):
    """Player information for API responses."""

    id: int
    name: str
    revealed: bool
    role: RoleDefinition | None = None  # Only included for the revealing player


class ProgressResponse(BaseModel):
    """Reveal progress."""

    completed: int
    total: int


class SessionStateResponse(BaseModel):
    """Reveal session state with roles hidden."""

    session_id: str
    assignment_id: str
    players: list[PlayerResponse]
    progress: ProgressResponse
    role_distribution: dict[str, int]
    reallocations: int


class RevealResponse(BaseModel):
    """A single player's revealed role."""

    player: PlayerResponse
    next_player_id: int | None = None
    all_revealed: bool
