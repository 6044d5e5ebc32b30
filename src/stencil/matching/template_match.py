"""A template together with everything observed while matching it."""

from __future__ import annotations

from collections.abc import Iterable

from stencil.matching.match_info import (
    NAME_LOCATIONS,
    MatchInfo,
    MatchKind,
    MatchLocation,
)
from stencil.templates.base import TemplateInfo

# Kinds that make a parameter observation block invocation.
_BLOCKING_PARAMETER_KINDS = frozenset(
    {
        MatchKind.MISMATCH,
        MatchKind.INVALID_PARAMETER_VALUE,
        MatchKind.AMBIGUOUS_PARAMETER_VALUE,
    }
)


class FrozenMatchError(RuntimeError):
    """Raised when adding a match to a TemplateMatchInfo that has been frozen."""


class TemplateMatchInfo:
    """Binds one template to its accumulated match observations.

    Observations are appended while the template is evaluated and the list is
    frozen once evaluation is complete. All predicates are computed from the
    current list on every call.
    """

    def __init__(
        self, info: TemplateInfo, matches: Iterable[MatchInfo] = ()
    ) -> None:
        self.info = info
        self._matches: list[MatchInfo] = list(matches)
        self._frozen = False

    def __repr__(self) -> str:
        count = len(self._matches)
        return f"TemplateMatchInfo({self.info.identity!r}, {count} matches)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemplateMatchInfo):
            return NotImplemented
        return self.info == other.info and self._matches == other._matches

    @property
    def matches(self) -> tuple[MatchInfo, ...]:
        return tuple(self._matches)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def add_match(self, match: MatchInfo) -> None:
        if self._frozen:
            raise FrozenMatchError(
                f"Match list of '{self.info.identity}' is frozen"
            )
        self._matches.append(match)

    def freeze(self) -> TemplateMatchInfo:
        """Disallow further additions. Returns self for chaining."""
        self._frozen = True
        return self

    def _any(self, location: MatchLocation, *kinds: MatchKind) -> bool:
        return any(m.location is location and m.kind in kinds for m in self._matches)

    # Core predicates

    @property
    def is_match(self) -> bool:
        """At least one observation and no mismatch."""
        return bool(self._matches) and not any(
            m.kind is MatchKind.MISMATCH for m in self._matches
        )

    @property
    def is_partial_match(self) -> bool:
        """Something matched and the template was not ruled out by its type."""
        return any(m.kind is not MatchKind.MISMATCH for m in self._matches) and all(
            m.kind is MatchKind.EXACT
            for m in self._matches
            if m.location is MatchLocation.CONTEXT
        )

    @property
    def is_invokable_match(self) -> bool:
        """A match whose supplied parameters are all usable as given."""
        return self.is_match and not any(
            m.is_parameter and m.kind in _BLOCKING_PARAMETER_KINDS
            for m in self._matches
        )

    @property
    def has_ambiguous_parameter_value_match(self) -> bool:
        return self._any(
            MatchLocation.OTHER_PARAMETER, MatchKind.AMBIGUOUS_PARAMETER_VALUE
        )

    def get_invalid_parameter_names(self) -> list[str]:
        """Distinct names of parameters with an unknown name or invalid value."""
        names: list[str] = []
        for m in self._matches:
            if (
                m.is_parameter
                and m.kind is MatchKind.INVALID_PARAMETER_VALUE
                and m.parameter_name is not None
                and m.parameter_name not in names
            ):
                names.append(m.parameter_name)
        return names

    # Name dimension

    @property
    def name_match_quality(self) -> int:
        """2 for an exact name/short name match, 1 for partial, 0 otherwise."""
        kinds = {m.kind for m in self._matches if m.location in NAME_LOCATIONS}
        if MatchKind.EXACT in kinds:
            return 2
        if MatchKind.PARTIAL in kinds:
            return 1
        return 0

    @property
    def has_name_match(self) -> bool:
        return self._any(MatchLocation.NAME, MatchKind.EXACT, MatchKind.PARTIAL)

    @property
    def has_name_exact_match(self) -> bool:
        return self._any(MatchLocation.NAME, MatchKind.EXACT)

    @property
    def has_short_name_match(self) -> bool:
        return self._any(MatchLocation.SHORT_NAME, MatchKind.EXACT, MatchKind.PARTIAL)

    @property
    def has_name_or_short_name_match(self) -> bool:
        return self.has_name_match or self.has_short_name_match

    # Other dimensions

    @property
    def has_language_mismatch(self) -> bool:
        return self._any(MatchLocation.LANGUAGE, MatchKind.MISMATCH)

    @property
    def has_language_exact_match(self) -> bool:
        return self._any(MatchLocation.LANGUAGE, MatchKind.EXACT)

    @property
    def has_type_mismatch(self) -> bool:
        return self._any(MatchLocation.CONTEXT, MatchKind.MISMATCH)

    @property
    def has_baseline_mismatch(self) -> bool:
        return self._any(MatchLocation.BASELINE, MatchKind.MISMATCH)

    @property
    def has_classification_mismatch(self) -> bool:
        return self._any(MatchLocation.CLASSIFICATION, MatchKind.MISMATCH)

    @property
    def has_author_mismatch(self) -> bool:
        return self._any(MatchLocation.AUTHOR, MatchKind.MISMATCH)

    @property
    def has_any_mismatch(self) -> bool:
        return any(m.kind is MatchKind.MISMATCH for m in self._matches)

    @property
    def has_default_language_match(self) -> bool:
        return self._any(MatchLocation.DEFAULT_LANGUAGE, MatchKind.EXACT)

    # Parameters

    @property
    def has_parameter_mismatch(self) -> bool:
        return self._any(
            MatchLocation.OTHER_PARAMETER,
            MatchKind.MISMATCH,
            MatchKind.INVALID_PARAMETER_VALUE,
        )

    @property
    def has_invalid_parameter_name(self) -> bool:
        """True when a supplied parameter is not declared by the template."""
        return any(
            m.is_parameter
            and m.kind is MatchKind.INVALID_PARAMETER_VALUE
            and m.parameter_name is not None
            and self.info.get_parameter(m.parameter_name) is None
            for m in self._matches
        )

    def get_partial_parameter_names(self) -> list[str]:
        """Names of parameters whose value completed a single choice value."""
        return [
            m.parameter_name
            for m in self._matches
            if m.is_parameter
            and m.kind is MatchKind.PARTIAL
            and m.parameter_name is not None
        ]

    @property
    def valid_template_parameters(self) -> dict[str, str | None]:
        """Supplied parameters that were accepted, by declared name."""
        return {
            m.parameter_name: m.parameter_value
            for m in self._matches
            if m.is_parameter
            and m.kind in (MatchKind.EXACT, MatchKind.PARTIAL)
            and m.parameter_name is not None
        }
