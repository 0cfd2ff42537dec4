"""Request models for API endpoints."""

from pydantic import BaseModel, Field, field_validator

from core.constants import MAX_NAME_LENGTH, MAX_PLAYERS, MIN_PLAYERS


class ValidateRequest(BaseModel):
    """Request to validate a role configuration.

    Counts accept floats so fractional values reach the validation rules
    and are reported there instead of failing request parsing.
    """

    role_counts: dict[str, int | float] = Field(
        default_factory=dict, description="Special role id to requested count"
    )
    total_players: int = Field(..., description="Number of players in the game")


class CreateSessionRequest(BaseModel):
    """Request to allocate roles to a list of players."""

    player_names: list[str] = Field(..., min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    role_counts: dict[str, int | float] = Field(default_factory=dict)
    acknowledge_warnings: bool = Field(
        False, description="Set once the user confirmed the edge case warnings"
    )

    @field_validator("player_names")
    @classmethod
    def names_must_be_clean(cls, v: list[str]) -> list[str]:
        """Strip names and reject blank or overlong ones."""
        cleaned = [name.strip() for name in v]
        if any(not name for name in cleaned):
            raise ValueError("All player names are required")
        if any(len(name) > MAX_NAME_LENGTH for name in cleaned):
            raise ValueError(f"Player names cannot exceed {MAX_NAME_LENGTH} characters")
        return cleaned
