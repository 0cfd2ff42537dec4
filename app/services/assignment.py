"""Role assignment engine.

Turns a validated role configuration and an ordered participant list into a
randomized Assignment in four steps: build the role pool, shuffle it, zip it
with the names, then verify and summarize the result.
"""

import logging
import random
import secrets
from collections import Counter
from datetime import datetime, timezone

from core.constants import ASSIGNMENT_VERSION
from core.errors import AssignmentError, AssignmentIntegrityError, RoleNotFoundError
from core.roles import RoleDefinition, RoleRegistry, is_whole_number, role_registry
from models.assignment import (
    AssignedPlayer,
    Assignment,
    AssignmentMetadata,
    AssignmentStatistics,
)

logger = logging.getLogger(__name__)


def get_secure_random() -> random.Random:
    """Get a cryptographically strong random source.

    Falls back to the pseudorandom generator if the OS source is unavailable.
    """
    rng = random.SystemRandom()
    try:
        rng.random()
    except NotImplementedError:
        logger.warning("System randomness unavailable, falling back to pseudorandom source")
        return random.Random()
    return rng


def fisher_yates_shuffle(items: list, rng: random.Random) -> list:
    """Shuffle a list in place with the Fisher-Yates (Knuth) algorithm.

    Args:
        items: List to shuffle (modified in place)
        rng: Random source to draw swap indices from

    Returns:
        The same list, shuffled
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def normalize_configuration(
    role_counts: dict[str, int], registry: RoleRegistry
) -> dict[str, int]:
    """Resolve role ids against the registry and reject malformed counts.

    Counts for the catch-all role are dropped since that count is derived.

    Raises:
        AssignmentError: On unknown or repeated role ids, or non-integer/negative counts
    """
    normalized: dict[str, int] = {}
    seen: set[str] = set()
    for role_id, count in (role_counts or {}).items():
        try:
            role = registry.get_role_by_id(role_id)
        except RoleNotFoundError as e:
            raise AssignmentError(str(e)) from e

        if not is_whole_number(count):
            raise AssignmentError(f"{role.name} count must be a whole number, got {count!r}")
        if count < 0:
            raise AssignmentError(f"{role.name} count cannot be negative, got {count}")

        if role.id in seen:
            raise AssignmentError(f'Role "{role.id}" is configured more than once')
        seen.add(role.id)

        if role.is_special_role:
            normalized[role.id] = count
    return normalized


def build_role_pool(
    role_counts: dict[str, int], total_players: int, registry: RoleRegistry
) -> list[RoleDefinition]:
    """Build the unshuffled pool: special roles first, then the remainder role.

    Args:
        role_counts: Normalized role id to count mapping
        total_players: Number of players the pool must cover
        registry: Role registry

    Returns:
        List of exactly total_players role definitions

    Raises:
        AssignmentError: If special roles outnumber the players
    """
    pool: list[RoleDefinition] = []
    for role in registry.get_special_roles():
        pool.extend([role] * role_counts.get(role.id, 0))

    villager_count = total_players - len(pool)
    if villager_count < 0:
        raise AssignmentError(
            f"Special roles ({len(pool)}) exceed participant count ({total_players})"
        )

    pool.extend([registry.get_remainder_role()] * villager_count)
    return pool


def summarize_players(players: list[AssignedPlayer]) -> AssignmentStatistics:
    """Count realized roles and teams."""
    return AssignmentStatistics(
        role_distribution=dict(Counter(p.role.id for p in players)),
        team_distribution=dict(Counter(p.role.team.value for p in players)),
    )


def verify_assignment(assignment: Assignment, registry: RoleRegistry = role_registry) -> None:
    """Check that an assignment realizes exactly its configuration.

    Args:
        assignment: The assignment to verify
        registry: Role registry the assignment was built from

    Raises:
        AssignmentIntegrityError: On any mismatch
    """
    players = assignment.players
    metadata = assignment.metadata

    if len(players) != metadata.total_players:
        raise AssignmentIntegrityError(
            f"Metadata mismatch: {len(players)} players for {metadata.total_players} total"
        )

    if [p.id for p in players] != list(range(len(players))):
        raise AssignmentIntegrityError("Player ids must match participant order")

    for player in players:
        if player.role is None or player.role.id not in registry:
            raise AssignmentIntegrityError(f"Player {player.id} holds an unregistered role")
        if registry.get_role_by_id(player.role.id) != player.role:
            raise AssignmentIntegrityError(
                f"Player {player.id} holds a role that differs from the registry"
            )

    expected = {role_id: n for role_id, n in metadata.role_configuration.items() if n}
    remainder = registry.get_remainder_role()
    if metadata.villager_count:
        expected[remainder.id] = metadata.villager_count

    realized = dict(Counter(p.role.id for p in players))
    if realized != expected:
        raise AssignmentIntegrityError(
            f"Role count mismatch: expected {expected}, realized {realized}"
        )

    if assignment.statistics.role_distribution != realized:
        raise AssignmentIntegrityError("Statistics do not match realized roles")


def _generate_assignment_id() -> str:
    return f"assign_{secrets.token_hex(8)}"


def assign(
    role_counts: dict[str, int],
    total_players: int,
    participant_names: list[str],
    registry: RoleRegistry = role_registry,
    rng: random.Random | None = None,
) -> Assignment:
    """Randomly assign roles to participants.

    Callers are expected to have run validation first; inputs are still
    checked here and any inconsistency raises instead of being coerced.

    Args:
        role_counts: Role id to count mapping for special roles
        total_players: Number of players, must equal len(participant_names)
        participant_names: Names in seating/input order
        registry: Role registry to draw roles from
        rng: Random source. Only pass a seeded one in tests.

    Returns:
        A fresh, verified Assignment

    Raises:
        AssignmentError: If inputs are rejected
        AssignmentIntegrityError: If the produced assignment fails verification
    """
    if not isinstance(participant_names, (list, tuple)):
        raise AssignmentError("Participant names must be a list")
    if not participant_names:
        raise AssignmentError("Participant list cannot be empty")
    if not all(isinstance(name, str) and name.strip() for name in participant_names):
        raise AssignmentError("All participant names must be non-empty strings")
    if not is_whole_number(total_players) or total_players != len(participant_names):
        raise AssignmentError(
            f"Total players ({total_players}) must match participant count "
            f"({len(participant_names)})"
        )

    configuration = normalize_configuration(role_counts, registry)
    pool = build_role_pool(configuration, total_players, registry)
    villager_count = total_players - sum(configuration.values())

    fisher_yates_shuffle(pool, rng or get_secure_random())

    players = [
        AssignedPlayer(id=index, name=name.strip(), role=role, revealed=False)
        for index, (name, role) in enumerate(zip(participant_names, pool, strict=True))
    ]

    assignment = Assignment(
        id=_generate_assignment_id(),
        timestamp=datetime.now(timezone.utc),
        players=players,
        metadata=AssignmentMetadata(
            total_players=total_players,
            role_configuration=configuration,
            villager_count=villager_count,
            version=ASSIGNMENT_VERSION,
        ),
        statistics=summarize_players(players),
    )

    try:
        verify_assignment(assignment, registry)
    except AssignmentIntegrityError:
        logger.error("Assignment %s failed verification", assignment.id)
        raise

    logger.debug(
        "Created assignment %s: %s", assignment.id, assignment.statistics.role_distribution
    )
    return assignment


def assign_two_role(
    participant_names: list[str],
    antagonist_count: int,
    registry: RoleRegistry = role_registry,
    rng: random.Random | None = None,
) -> Assignment:
    """Assign just antagonists and villagers.

    Args:
        participant_names: Names in input order
        antagonist_count: Number of antagonist players
        registry: Role registry, must define an antagonist role
        rng: Random source. Only pass a seeded one in tests.

    Returns:
        A fresh, verified Assignment
    """
    antagonist = registry.get_antagonist_role()
    if antagonist is None:
        raise AssignmentError("Registry has no antagonist role")
    names = list(participant_names) if isinstance(participant_names, (list, tuple)) else []
    return assign({antagonist.id: antagonist_count}, len(names), names, registry, rng)


def measure_distribution(
    participant_names: list[str],
    role_counts: dict[str, int],
    iterations: int = 1000,
    registry: RoleRegistry = role_registry,
    rng: random.Random | None = None,
) -> dict:
    """Run many assignments and report how often each player drew each role.

    Args:
        participant_names: Names in input order
        role_counts: Role id to count mapping for special roles
        iterations: Number of assignments to run
        registry: Role registry
        rng: Random source shared across iterations

    Returns:
        Dictionary with per-player rates, expected rates and the max deviation
    """
    if iterations < 1:
        raise ValueError("Iterations must be positive")

    total_players = len(participant_names)
    configuration = normalize_configuration(role_counts, registry)
    counts = {index: Counter() for index in range(total_players)}
    for _ in range(iterations):
        assignment = assign(role_counts, total_players, participant_names, registry, rng)
        for player in assignment.players:
            counts[player.id][player.role.id] += 1

    villager_count = total_players - sum(configuration.values())
    expected_rates = {role_id: n / total_players for role_id, n in configuration.items()}
    expected_rates[registry.get_remainder_role().id] = villager_count / total_players

    rates = {
        index: {role_id: counts[index][role_id] / iterations for role_id in expected_rates}
        for index in counts
    }
    max_deviation = max(
        abs(rates[index][role_id] - expected)
        for index in rates
        for role_id, expected in expected_rates.items()
    )

    return {
        "iterations": iterations,
        "total_players": total_players,
        "expected_rates": expected_rates,
        "rates": rates,
        "max_deviation": max_deviation,
    }
