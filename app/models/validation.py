"""Validation result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """How a validation finding affects allocation."""

    ERROR = "ERROR"  # Blocks allocation
    WARNING = "WARNING"  # Requires confirmation


class ValidationIssue(BaseModel):
    """A single finding produced by a validation rule."""

    model_config = ConfigDict(frozen=True)

    rule: str
    severity: Severity
    message: str
    details: dict[str, Any] | None = None


class ValidationResult(BaseModel):
    """Aggregated outcome of running every rule over a configuration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    villager_count: int
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    requires_confirmation: bool = False

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def messages(self) -> list[str]:
        """All messages, errors first."""
        return [issue.message for issue in self.errors + self.warnings]


class EdgeCaseType(str, Enum):
    """Kinds of unusual configurations."""

    NO_MAFIA = "NO_MAFIA"
    ALL_MAFIA = "ALL_MAFIA"
    ALMOST_ALL_MAFIA = "ALMOST_ALL_MAFIA"
    LARGE_GROUP = "LARGE_GROUP"
    SMALL_GROUP = "SMALL_GROUP"


class EdgeCase(BaseModel):
    """Description of a detected edge case for the confirmation screen."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: EdgeCaseType
    message: str
    explanation: str
    gameplay_impact: str


class ConfigurationReport(ValidationResult):
    """Validation outcome plus the edge case shown on the confirmation screen."""

    edge_case: EdgeCase | None = None
