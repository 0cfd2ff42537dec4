"""Edge case detection for unusual but legal game configurations."""

from core.constants import LARGE_GROUP_SIZE, MAX_NAME_LENGTH, SMALL_GROUP_SIZE
from core.roles import RoleRegistry, is_whole_number, role_registry
from models.validation import EdgeCase, EdgeCaseType
from services.validation import configured_count


def detect_edge_case(antagonist_count: int, total_players: int) -> EdgeCase | None:
    """Classify a two-role configuration.

    Checked in order: no Mafia, all Mafia, one Villager left, large group,
    small group.

    Args:
        antagonist_count: Number of Mafia players
        total_players: Total number of players

    Returns:
        The first matching EdgeCase, or None for a standard configuration
    """
    if antagonist_count == 0:
        return EdgeCase(
            type=EdgeCaseType.NO_MAFIA,
            message="No Mafia players (all Villagers)",
            explanation="This game will have only Villager roles.",
            gameplay_impact="No elimination phase or deduction gameplay.",
        )

    if antagonist_count == total_players:
        return EdgeCase(
            type=EdgeCaseType.ALL_MAFIA,
            message="All players are Mafia",
            explanation="Every player will receive the Mafia role.",
            gameplay_impact="No Villagers to eliminate or deceive.",
        )

    if antagonist_count == total_players - 1 and total_players > 2:
        return EdgeCase(
            type=EdgeCaseType.ALMOST_ALL_MAFIA,
            message="Only one Villager player",
            explanation="This configuration has only one Villager among all players.",
            gameplay_impact="Heavily favors Mafia with minimal Villager resistance.",
        )

    if total_players > LARGE_GROUP_SIZE:
        return EdgeCase(
            type=EdgeCaseType.LARGE_GROUP,
            message="Large group size",
            explanation=f"With {total_players} players, the reveal screen may become crowded.",
            gameplay_impact="Consider splitting into multiple smaller games.",
        )

    if total_players < SMALL_GROUP_SIZE:
        return EdgeCase(
            type=EdgeCaseType.SMALL_GROUP,
            message="Very small group size",
            explanation=f"With only {total_players} players, the game may lack social dynamics.",
            gameplay_impact="Limited deduction and social interaction opportunities.",
        )

    return None


def detect_configuration_edge_case(
    role_counts: dict, total_players: int, registry: RoleRegistry = role_registry
) -> EdgeCase | None:
    """Classify a multi-role configuration by its antagonist count.

    Returns:
        The matching EdgeCase, or None for a standard configuration or when
        the registry has no antagonist role
    """
    antagonist = registry.get_antagonist_role()
    if antagonist is None or not is_whole_number(total_players) or total_players < 1:
        return None
    return detect_edge_case(configured_count(role_counts, antagonist.id), total_players)


def validate_player_names(names: list[str]) -> tuple[bool, str | None]:
    """Check a participant list before assignment.

    Args:
        names: Participant names in input order

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not names:
        return False, "At least one player is required"

    seen: set[str] = set()
    for index, name in enumerate(names):
        if not isinstance(name, str) or not name.strip():
            return False, f"Player {index + 1} needs a name"

        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            return False, f"Player name {name!r} is longer than {MAX_NAME_LENGTH} characters"

        key = name.lower()
        if key in seen:
            return False, f"Duplicate player name: {name}"
        seen.add(key)

    return True, None
