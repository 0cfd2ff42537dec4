"""Pytest configuration and fixtures."""

import random

import pytest

from core.roles import (
    RoleColor,
    RoleConstraints,
    RoleDefinition,
    RoleRegistry,
    Team,
    role_registry,
)
from core.session import RevealSession


def make_role(role_id: str, team: Team, order: int, **overrides) -> RoleDefinition:
    """Build a role definition with plain colors for tests."""
    fields = {
        "id": role_id,
        "name": role_id.title(),
        "team": team,
        "color": RoleColor(
            primary="gray-500",
            secondary="gray-50",
            border="gray-300",
            text="gray-700",
            accent="gray-600",
        ),
        "description": f"{role_id.title()} role",
        "constraints": RoleConstraints(),
        "display_order": order,
    }
    fields.update(overrides)
    return RoleDefinition(**fields)


@pytest.fixture
def role_factory():
    """Factory for test role definitions."""
    return make_role


@pytest.fixture
def registry():
    """The built-in role catalog."""
    return role_registry


@pytest.fixture
def extended_registry():
    """A catalog with an extra special role added."""
    seer = make_role(
        "SEER",
        Team.SPECIAL,
        5,
        constraints=RoleConstraints(min=0, max=1, default=0),
    )
    return RoleRegistry(role_registry.get_roles() + [seer])


@pytest.fixture
def rng():
    """Seeded random source for deterministic tests."""
    return random.Random(1234)


@pytest.fixture
def twenty_names():
    """Names for a 20 player game."""
    return [f"Player{i + 1}" for i in range(20)]


@pytest.fixture
def five_names():
    """Names for a 5 player game."""
    return ["Alice", "Bob", "Carol", "Dave", "Erin"]


@pytest.fixture
def reveal_session(five_names, rng):
    """A reveal session for 5 players with one of each special role."""
    return RevealSession(
        session_id="test-session-123",
        participant_names=five_names,
        role_counts={"MAFIA": 1, "POLICE": 1, "DOCTOR": 1},
        rng=rng,
    )
