"""Role definitions and the role registry."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DOCTOR, MAFIA, POLICE, VILLAGER
from .errors import RoleNotFoundError


class Team(str, Enum):
    """Team affiliations used for aggregate statistics."""

    MAFIA = "mafia"
    SPECIAL = "special"
    VILLAGER = "villager"


class RoleColor(BaseModel):
    """Presentation color tokens. Opaque to the allocation logic."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    border: str
    text: str
    accent: str


class RoleConstraints(BaseModel):
    """Bounds on how many players may hold a role.

    A ``max`` of None means unbounded, which in practice is the player count.
    """

    model_config = ConfigDict(frozen=True)

    min: int = Field(0, ge=0)
    max: int | None = Field(None, ge=0)
    default: int = Field(0, ge=0)


class RoleDefinition(BaseModel):
    """A single role in the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    team: Team
    color: RoleColor
    description: str
    constraints: RoleConstraints
    display_order: int
    is_special_role: bool = True
    is_antagonist: bool = False

    @field_validator("id")
    @classmethod
    def id_must_be_uppercase(cls, v: str) -> str:
        """Role ids are stored uppercase so lookups agree everywhere."""
        return v.strip().upper()


def is_whole_number(value) -> bool:
    """Check that a count is an int (bools are rejected)."""
    return isinstance(value, int) and not isinstance(value, bool)


class RoleRegistry:
    """Read-only, queryable catalog of role definitions.

    Exactly one role must be the catch-all (``is_special_role=False``); it
    absorbs every player not given a special role.
    """

    def __init__(self, roles: list[RoleDefinition]):
        """Build a registry from role definitions.

        Args:
            roles: The roles to register

        Raises:
            ValueError: If ids collide or there is not exactly one catch-all role
        """
        by_id: dict[str, RoleDefinition] = {}
        for role in roles:
            if role.id in by_id:
                raise ValueError(f"Duplicate role id: {role.id}")
            by_id[role.id] = role

        remainder = [role for role in roles if not role.is_special_role]
        if len(remainder) != 1:
            raise ValueError(
                f"Registry needs exactly one catch-all role, found {len(remainder)}"
            )
        if remainder[0].constraints.max is not None:
            raise ValueError("The catch-all role cannot have an upper bound")

        antagonists = [role for role in roles if role.is_antagonist]
        if len(antagonists) > 1:
            raise ValueError("Registry allows at most one primary antagonist role")

        self._roles: dict[str, RoleDefinition] = by_id
        self._ordered: tuple[RoleDefinition, ...] = tuple(
            sorted(roles, key=lambda role: role.display_order)
        )
        self._remainder = remainder[0]
        self._antagonist = antagonists[0] if antagonists else None

    def get_roles(self) -> list[RoleDefinition]:
        """Get all roles ordered by display order."""
        return list(self._ordered)

    def find_role(self, role_id) -> RoleDefinition | None:
        """Look up a role without raising. Lookup is case-insensitive."""
        if not isinstance(role_id, str) or not role_id:
            return None
        return self._roles.get(role_id.upper())

    def get_role_by_id(self, role_id: str) -> RoleDefinition:
        """Get a role by its id.

        Args:
            role_id: Role identifier, e.g. "MAFIA" or "mafia"

        Returns:
            The matching RoleDefinition

        Raises:
            RoleNotFoundError: If no role has this id
        """
        role = self.find_role(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)
        return role

    def get_roles_by_team(self, team: Team | str) -> list[RoleDefinition]:
        """Get the roles of one team. Unknown teams yield an empty list."""
        try:
            team = Team(team.lower() if isinstance(team, str) else team)
        except ValueError:
            return []
        return [role for role in self._ordered if role.team == team]

    def get_special_roles(self) -> list[RoleDefinition]:
        """Get every role except the catch-all role."""
        return [role for role in self._ordered if role.is_special_role]

    def get_remainder_role(self) -> RoleDefinition:
        """Get the catch-all role whose count is always derived."""
        return self._remainder

    def get_antagonist_role(self) -> RoleDefinition | None:
        """Get the primary antagonist role, if the catalog has one."""
        return self._antagonist

    def default_configuration(self) -> dict[str, int]:
        """Get the recommended count for every special role."""
        return {role.id: role.constraints.default for role in self.get_special_roles()}

    def validate_role_count(
        self, role_id: str, count: int, total_players: int
    ) -> tuple[bool, str | None]:
        """Check a single role count against its constraints.

        Args:
            role_id: Role identifier
            count: Proposed number of players holding the role
            total_players: Number of players in the game

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not isinstance(role_id, str) or not role_id:
            return False, "Role ID must be a non-empty string"
        if not is_whole_number(count) or count < 0:
            return False, "Count must be a non-negative integer"
        if not is_whole_number(total_players) or total_players <= 0:
            return False, "Total players must be a positive integer"

        role = self.find_role(role_id)
        if role is None:
            return False, f'Role with ID "{role_id}" not found in registry'

        constraints = role.constraints
        if count < constraints.min:
            return False, f"{role.name} count must be at least {constraints.min}"
        if constraints.max is not None and count > constraints.max:
            return False, (
                f"{role.name} count cannot exceed {constraints.max} "
                f"for {total_players} players"
            )
        if count > total_players:
            return False, (
                f"{role.name} count ({count}) cannot exceed total players ({total_players})"
            )

        return True, None

    def __contains__(self, role_id) -> bool:
        return self.find_role(role_id) is not None

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"RoleRegistry(roles={[role.id for role in self._ordered]})"


DEFAULT_ROLES = [
    RoleDefinition(
        id=MAFIA,
        name="Mafia",
        team=Team.MAFIA,
        color=RoleColor(
            primary="red-600",
            secondary="red-50",
            border="red-500",
            text="red-800",
            accent="red-700",
        ),
        description="Eliminate villagers to win",
        constraints=RoleConstraints(min=0, max=None, default=1),
        display_order=1,
        is_antagonist=True,
    ),
    RoleDefinition(
        id=POLICE,
        name="Police",
        team=Team.SPECIAL,
        color=RoleColor(
            primary="blue-600",
            secondary="blue-50",
            border="blue-500",
            text="blue-800",
            accent="blue-700",
        ),
        description="Investigate one player each night",
        constraints=RoleConstraints(min=0, max=2, default=0),
        display_order=2,
    ),
    RoleDefinition(
        id=DOCTOR,
        name="Doctor",
        team=Team.SPECIAL,
        color=RoleColor(
            primary="green-600",
            secondary="green-50",
            border="green-500",
            text="green-800",
            accent="green-700",
        ),
        description="Protect one player each night",
        constraints=RoleConstraints(min=0, max=2, default=0),
        display_order=3,
    ),
    RoleDefinition(
        id=VILLAGER,
        name="Villager",
        team=Team.VILLAGER,
        color=RoleColor(
            primary="gray-500",
            secondary="gray-50",
            border="gray-300",
            text="gray-700",
            accent="gray-600",
        ),
        description="Work with others to identify Mafia",
        constraints=RoleConstraints(min=0, max=None, default=0),
        display_order=4,
        is_special_role=False,
    ),
]


# Global default registry
role_registry = RoleRegistry(DEFAULT_ROLES)
