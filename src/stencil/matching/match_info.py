"""Match primitive: a single observation made while evaluating a template."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MatchLocation(Enum):
    """What was compared."""

    NAME = "name"
    SHORT_NAME = "short_name"
    LANGUAGE = "language"
    CONTEXT = "context"  # template type: project, item, ...
    BASELINE = "baseline"
    CLASSIFICATION = "classification"
    AUTHOR = "author"
    DEFAULT_LANGUAGE = "default_language"
    OTHER_PARAMETER = "other_parameter"


class MatchKind(Enum):
    """Outcome of a comparison."""

    EXACT = "exact"
    PARTIAL = "partial"
    MISMATCH = "mismatch"
    UNSPECIFIED = "unspecified"
    AMBIGUOUS_PARAMETER_VALUE = "ambiguous_parameter_value"
    INVALID_PARAMETER_VALUE = "invalid_parameter_value"


# Name-like locations, used when ranking how well a template matched by name.
NAME_LOCATIONS: frozenset[MatchLocation] = frozenset(
    {MatchLocation.NAME, MatchLocation.SHORT_NAME}
)


@dataclass(frozen=True)
class MatchInfo:
    """One (location, kind, parameter name, parameter value) observation."""

    location: MatchLocation
    kind: MatchKind
    parameter_name: str | None = None
    parameter_value: str | None = None

    @property
    def is_parameter(self) -> bool:
        return self.location is MatchLocation.OTHER_PARAMETER
