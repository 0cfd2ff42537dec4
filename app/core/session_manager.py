"""Session manager singleton for coordinating reveal sessions."""

import logging
import random
import secrets
from datetime import datetime, timedelta

from .constants import SESSION_TTL_SECONDS
from .roles import RoleRegistry, role_registry
from .session import RevealSession

logger = logging.getLogger(__name__)


class SessionManager:
    """Singleton manager for all active reveal sessions."""

    def __init__(self):
        """Initialize the session manager."""
        self.sessions: dict[str, RevealSession] = {}

    def create_session(
        self,
        participant_names: list[str],
        role_counts: dict[str, int],
        registry: RoleRegistry = role_registry,
        rng: random.Random | None = None,
    ) -> RevealSession:
        """Create a new reveal session with a unique ID.

        Args:
            participant_names: Names in input order
            role_counts: Role id to count mapping for special roles
            registry: Role registry to draw roles from
            rng: Random source. Only pass a seeded one in tests.

        Sessions past their TTL are dropped first so the store stays bounded.

        Returns:
            The newly created RevealSession
        """
        self.cleanup_stale_sessions()

        # Generate a unique, URL-safe session ID (8 characters)
        session_id = secrets.token_urlsafe(6)
        while session_id in self.sessions:
            session_id = secrets.token_urlsafe(6)

        session = RevealSession(session_id, participant_names, role_counts, registry, rng)
        self.sessions[session_id] = session
        logger.info("Created session %s with %d players", session_id, len(participant_names))
        return session

    def get_session(self, session_id: str) -> RevealSession | None:
        """Retrieve a session by ID.

        Args:
            session_id: The session's unique identifier

        Returns:
            The RevealSession if found, None otherwise
        """
        return self.sessions.get(session_id)

    def remove_session(self, session_id: str) -> None:
        """Remove a session, discarding its assignment.

        Args:
            session_id: The session's unique identifier
        """
        if session_id in self.sessions:
            del self.sessions[session_id]

    def cleanup_stale_sessions(self) -> int:
        """Remove sessions that are too old.

        Returns:
            Number of sessions cleaned up
        """
        cutoff_time = datetime.now() - timedelta(seconds=SESSION_TTL_SECONDS)

        stale_ids = [
            session_id
            for session_id, session in self.sessions.items()
            if session.created_at < cutoff_time
        ]

        for session_id in stale_ids:
            self.remove_session(session_id)

        if stale_ids:
            logger.info("Cleaned up %d stale sessions", len(stale_ids))
        return len(stale_ids)

    def get_stats(self) -> dict:
        """Get statistics about active sessions.

        Returns:
            Dictionary with session statistics
        """
        total_players = sum(len(s.players) for s in self.sessions.values())
        fully_revealed = sum(
            1 for s in self.sessions.values() if all(p.revealed for p in s.players)
        )
        reallocations = sum(s.reallocations for s in self.sessions.values())

        return {
            "total_sessions": len(self.sessions),
            "fully_revealed": fully_revealed,
            "total_players": total_players,
            "total_reallocations": reallocations,
        }


# Global singleton instance
session_manager = SessionManager()
