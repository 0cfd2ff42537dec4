"""Reveal-one-at-a-time service helpers."""

from core.session import RevealSession
from models.assignment import AssignedPlayer


def next_player_to_reveal(session: RevealSession) -> AssignedPlayer | None:
    """Get the first player, in input order, who has not seen their role.

    Args:
        session: The reveal session

    Returns:
        The next player, or None once everyone has revealed
    """
    return next((p for p in session.players if not p.revealed), None)


def can_reveal(session: RevealSession, player_id: int) -> tuple[bool, str | None]:
    """Check if a player may reveal their role now.

    Args:
        session: The reveal session
        player_id: Index id of the player trying to reveal

    Returns:
        Tuple of (can_reveal, error_message)
    """
    player = session.assignment.get_player(player_id)
    if not player:
        return False, "Player not found"

    if player.revealed:
        return False, "Role already revealed"

    current = next_player_to_reveal(session)
    if current is not None and current.id != player_id:
        return False, f"Wait for your turn (current player: {current.name})"

    return True, None


def reveal_player(session: RevealSession, player_id: int) -> AssignedPlayer:
    """Mark a player's role as revealed on the session's copy.

    Args:
        session: The reveal session
        player_id: Index id of the player

    Returns:
        The revealed player

    Raises:
        ValueError: If the player cannot reveal now
    """
    allowed, error = can_reveal(session, player_id)
    if not allowed:
        raise ValueError(error)

    player = session.assignment.get_player(player_id)
    player.revealed = True
    return player


def all_players_revealed(session: RevealSession) -> bool:
    """Check if every player has seen their role.

    Args:
        session: The reveal session

    Returns:
        True if no player is left to reveal
    """
    return all(p.revealed for p in session.players)
