"""Multi-role configuration validation.

Every rule is a plain function with the signature::

    rule(role_counts, total_players, registry) -> list[ValidationIssue]

An empty list means the rule passed. Rules never raise and never depend on
each other, so all of them run on every pass and their findings are simply
concatenated. A custom rule is added by appending it to the pipeline passed
to :func:`validate`.
"""

from typing import Callable

from core.constants import LARGE_GROUP_SIZE, SMALL_GROUP_SIZE
from core.roles import RoleRegistry, is_whole_number, role_registry
from models.validation import Severity, ValidationIssue, ValidationResult

RoleCounts = dict[str, int]
ValidationRule = Callable[[RoleCounts, int, RoleRegistry], list[ValidationIssue]]


def _error(rule: str, message: str, **details) -> ValidationIssue:
    return ValidationIssue(rule=rule, severity=Severity.ERROR, message=message, details=details)


def _warning(rule: str, message: str, **details) -> ValidationIssue:
    return ValidationIssue(
        rule=rule, severity=Severity.WARNING, message=message, details=details
    )


def _raw_count(role_counts: RoleCounts, role_id: str):
    """Configured value for a role id, matched case-insensitively."""
    role_id = role_id.upper()
    for key, value in role_counts.items():
        if isinstance(key, str) and key.upper() == role_id:
            return value
    return 0


def configured_count(role_counts: RoleCounts, role_id: str) -> int:
    """Configured count of a role, with malformed values counted as zero."""
    value = _raw_count(role_counts, role_id)
    return value if is_whole_number(value) else 0


def calculate_special_total(role_counts: RoleCounts, registry: RoleRegistry) -> int:
    """Sum the configured counts of every special role."""
    return sum(configured_count(role_counts, role.id) for role in registry.get_special_roles())


def calculate_villager_count(
    role_counts: RoleCounts, total_players: int, registry: RoleRegistry = role_registry
) -> int:
    """Derive the remainder role count. Negative when over-allocated.

    Args:
        role_counts: Role id to count mapping for special roles
        total_players: Number of players in the game
        registry: Role registry to read special roles from

    Returns:
        total_players minus the sum of special role counts
    """
    total = total_players if is_whole_number(total_players) else 0
    return total - calculate_special_total(role_counts, registry)


def player_count_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Total players must be a positive integer."""
    if not is_whole_number(total_players) or total_players < 1:
        return [
            _error(
                "PlayerCountRule",
                f"Total players must be a positive whole number (currently: {total_players})",
                total_players=total_players,
            )
        ]
    return []


def unknown_role_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Every configured role id must be in the registry."""
    return [
        _error(
            "UnknownRoleRule",
            f'Role with ID "{role_id}" not found in registry',
            role_id=role_id,
        )
        for role_id in role_counts
        if role_id not in registry
    ]


def duplicate_role_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """A role may be configured only once, whatever the letter case of its id."""
    seen: dict[str, str] = {}
    issues = []
    for role_id in role_counts:
        if not isinstance(role_id, str):
            continue
        key = role_id.upper()
        if key in seen:
            issues.append(
                _error(
                    "DuplicateRoleRule",
                    f'Role "{key}" is configured more than once ("{seen[key]}" and "{role_id}")',
                    role_id=key,
                )
            )
        else:
            seen[key] = role_id
    return issues


def negative_count_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Counts must be non-negative whole numbers."""
    issues = []
    for role_id, count in role_counts.items():
        role = registry.find_role(role_id)
        if role is not None and not role.is_special_role:
            continue
        label = role.name if role else role_id
        if not is_whole_number(count):
            issues.append(
                _error(
                    "NegativeCountRule",
                    f"{label} count must be a whole number (currently: {count!r})",
                    role_id=role_id,
                    count=count,
                )
            )
        elif count < 0:
            issues.append(
                _error(
                    "NegativeCountRule",
                    f"{label} count cannot be negative (currently: {count})",
                    role_id=role_id,
                    count=count,
                )
            )
    return issues


def total_role_count_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Special roles together cannot outnumber the players."""
    if not is_whole_number(total_players):
        return []

    total_roles = calculate_special_total(role_counts, registry)
    if total_roles > total_players:
        excess = total_roles - total_players
        return [
            _error(
                "TotalRoleCountRule",
                f"Total roles ({total_roles}) cannot exceed total players ({total_players}). "
                f"Reduce role counts by {excess}.",
                total_roles=total_roles,
                total_players=total_players,
                excess=excess,
            )
        ]
    return []


def individual_min_max_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Each special role count must respect its registry bounds.

    Malformed counts are reported by negative_count_rule and skipped here.
    """
    issues = []
    for role in registry.get_special_roles():
        count = _raw_count(role_counts, role.id)
        if not is_whole_number(count) or count < 0:
            continue

        low, high = role.constraints.min, role.constraints.max
        if count < low:
            issues.append(
                _error(
                    "IndividualMinMaxRule",
                    f"{role.name} count ({count}) is below minimum ({low})",
                    role_id=role.id,
                    count=count,
                    min=low,
                    max=high,
                )
            )
        elif high is not None and count > high:
            issues.append(
                _error(
                    "IndividualMinMaxRule",
                    f"{role.name} count ({count}) exceeds maximum ({high}). "
                    f"Reduce {role.name} count by {count - high}.",
                    role_id=role.id,
                    count=count,
                    min=low,
                    max=high,
                )
            )
    return issues


def minimum_villagers_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Negative remainder is an error, zero remainder only a warning.

    Zero villagers is an unusual but legal game mode.
    """
    if not is_whole_number(total_players):
        return []

    remainder = registry.get_remainder_role()
    villager_count = calculate_villager_count(role_counts, total_players, registry)
    if villager_count < 0:
        return [
            _error(
                "MinimumVillagersRule",
                f"Configuration allocates {abs(villager_count)} more roles than players. "
                "Reduce special role counts.",
                villager_count=villager_count,
                total_players=total_players,
            )
        ]
    if villager_count == 0:
        return [
            _warning(
                "MinimumVillagersRule",
                f"Configuration leaves 0 {remainder.name.lower()}s. "
                "All players are assigned special roles.",
                villager_count=0,
                total_players=total_players,
            )
        ]
    return []


def all_special_roles_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Explain what a game without the catch-all role plays like."""
    if not is_whole_number(total_players) or total_players < 1:
        return []

    remainder = registry.get_remainder_role()
    if calculate_villager_count(role_counts, total_players, registry) == 0:
        return [
            _warning(
                "AllSpecialRolesRule",
                f"All players assigned special roles. No {remainder.name.lower()}s in game. "
                "This configuration may affect gameplay balance.",
                villager_count=0,
                total_players=total_players,
            )
        ]
    return []


def edge_ratio_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Warn on no antagonists, or on all players but one being antagonists."""
    antagonist = registry.get_antagonist_role()
    if antagonist is None or not is_whole_number(total_players) or total_players < 1:
        return []

    raw = _raw_count(role_counts, antagonist.id)
    if not is_whole_number(raw):
        return []

    if raw == 0:
        return [
            _warning(
                "EdgeRatioRule",
                f"No {antagonist.name} players. Every player gets a non-{antagonist.name} role, "
                "so there is no elimination or deduction.",
                role_id=antagonist.id,
                count=0,
            )
        ]
    if total_players > 2 and raw == total_players - 1:
        return [
            _warning(
                "EdgeRatioRule",
                f"Only one player is not {antagonist.name}. "
                f"This heavily favors the {antagonist.name}.",
                role_id=antagonist.id,
                count=raw,
            )
        ]
    return []


def group_size_rule(role_counts, total_players, registry) -> list[ValidationIssue]:
    """Warn on very small or very large groups. Not part of the default pipeline."""
    if not is_whole_number(total_players) or total_players < 1:
        return []

    if total_players < SMALL_GROUP_SIZE:
        return [
            _warning(
                "GroupSizeRule",
                f"With only {total_players} players the game may lack social dynamics.",
                total_players=total_players,
            )
        ]
    if total_players > LARGE_GROUP_SIZE:
        return [
            _warning(
                "GroupSizeRule",
                f"With {total_players} players the reveal screen may become crowded.",
                total_players=total_players,
            )
        ]
    return []


DEFAULT_RULES: tuple[ValidationRule, ...] = (
    player_count_rule,
    unknown_role_rule,
    duplicate_role_rule,
    negative_count_rule,
    total_role_count_rule,
    individual_min_max_rule,
    minimum_villagers_rule,
    all_special_roles_rule,
    edge_ratio_rule,
)


def validate(
    role_counts: RoleCounts,
    total_players: int,
    registry: RoleRegistry = role_registry,
    rules=DEFAULT_RULES,
) -> ValidationResult:
    """Run every rule over a configuration and aggregate the findings.

    Args:
        role_counts: Role id to count mapping for special roles
        total_players: Number of players in the game
        registry: Role registry the configuration refers to
        rules: Rule functions to run, in display order

    Returns:
        ValidationResult. Never raises for malformed input.
    """
    role_counts = dict(role_counts or {})

    issues: list[ValidationIssue] = []
    for rule in rules:
        issues.extend(rule(role_counts, total_players, registry))

    errors = [issue for issue in issues if issue.severity == Severity.ERROR]
    warnings = [issue for issue in issues if issue.severity == Severity.WARNING]

    return ValidationResult(
        is_valid=not errors,
        villager_count=calculate_villager_count(role_counts, total_players, registry),
        errors=errors,
        warnings=warnings,
        requires_confirmation=not errors and bool(warnings),
    )
