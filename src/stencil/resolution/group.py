"""Grouping of matched templates that share a group identity."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from stencil.matching.match_info import MatchKind
from stencil.matching.template_match import TemplateMatchInfo


class InvalidParameterKind(Enum):
    """Why a supplied parameter cannot be used with a template group."""

    INVALID_NAME = "invalid_name"
    INVALID_VALUE = "invalid_value"
    AMBIGUOUS_VALUE = "ambiguous_value"


@dataclass(frozen=True)
class InvalidParameterInfo:
    """One supplied parameter that blocks invocation, for error reporting."""

    kind: InvalidParameterKind
    name: str
    value: str | None = None

    def _key(self) -> tuple[InvalidParameterKind, str, str | None]:
        value = self.value.casefold() if self.value is not None else None
        return (self.kind, self.name.casefold(), value)


def _append_distinct(
    target: list[InvalidParameterInfo], item: InvalidParameterInfo
) -> None:
    if all(existing._key() != item._key() for existing in target):
        target.append(item)


@dataclass(frozen=True)
class TemplateGroup:
    """Non-empty set of matched templates sharing one group identity."""

    group_identity: str
    templates: tuple[TemplateMatchInfo, ...]

    def __post_init__(self) -> None:
        if not self.templates:
            raise ValueError(f"Template group '{self.group_identity}' is empty")

    @property
    def short_name(self) -> str:
        return self.templates[0].info.short_name

    @property
    def has_single_template(self) -> bool:
        return len(self.templates) == 1

    @property
    def invokable_templates(self) -> list[TemplateMatchInfo]:
        return [t for t in self.templates if t.is_invokable_match]

    @property
    def name_match_quality(self) -> int:
        """Best name match quality among members (see TemplateMatchInfo)."""
        return max(t.name_match_quality for t in self.templates)

    @property
    def has_ambiguous_parameter_value_match(self) -> bool:
        return any(t.has_ambiguous_parameter_value_match for t in self.templates)

    def get_highest_precedence_invokable_templates(self) -> list[TemplateMatchInfo]:
        """Invokable members at the highest precedence."""
        invokable = self.invokable_templates
        if not invokable:
            return []

        highest = max(t.info.precedence for t in invokable)
        return [t for t in invokable if t.info.precedence == highest]

    def get_ambiguous_single_starts_with_parameters(self) -> list[InvalidParameterInfo]:
        """Parameters completed to a single value in more than one invokable member."""
        result: list[InvalidParameterInfo] = []
        seen: set[str] = set()
        for template in self.invokable_templates:
            for match in template.matches:
                if not (match.is_parameter and match.kind is MatchKind.PARTIAL):
                    continue
                name = match.parameter_name or ""
                if name.casefold() in seen:
                    _append_distinct(
                        result,
                        InvalidParameterInfo(
                            InvalidParameterKind.AMBIGUOUS_VALUE,
                            name,
                            match.parameter_value,
                        ),
                    )
                seen.add(name.casefold())
        return result

    def get_invalid_parameter_list(self) -> list[InvalidParameterInfo]:
        """Explain which supplied parameters block invocation of this group.

        Ambiguous values are always reported. If some member is invokable,
        only single starts-with collisions are added. Otherwise unknown names
        and invalid values are reported when every (relevant) member rejects
        them.
        """
        result: list[InvalidParameterInfo] = []

        for template in self.templates:
            for match in template.matches:
                if (
                    match.is_parameter
                    and match.kind is MatchKind.AMBIGUOUS_PARAMETER_VALUE
                ):
                    _append_distinct(
                        result,
                        InvalidParameterInfo(
                            InvalidParameterKind.AMBIGUOUS_VALUE,
                            match.parameter_name or "",
                            match.parameter_value,
                        ),
                    )

        if self.invokable_templates:
            for item in self.get_ambiguous_single_starts_with_parameters():
                _append_distinct(result, item)
            return result

        unknown_by_template = [_unknown_parameters(t) for t in self.templates]
        for unknown in unknown_by_template:
            for name, value in unknown.items():
                if all(name in other for other in unknown_by_template):
                    _append_distinct(
                        result,
                        InvalidParameterInfo(
                            InvalidParameterKind.INVALID_NAME, value[0], value[1]
                        ),
                    )

        relevant = [t for t in self.templates if not t.has_invalid_parameter_name]
        if not relevant:
            relevant = list(self.templates)

        invalid_by_template = [_invalid_values(t) for t in relevant]
        for invalid in invalid_by_template:
            for name, value in invalid.items():
                if all(name in other for other in invalid_by_template):
                    _append_distinct(
                        result,
                        InvalidParameterInfo(
                            InvalidParameterKind.INVALID_VALUE, value[0], value[1]
                        ),
                    )

        return result

    def get_valid_values_for_choice_parameter(
        self, parameter_name: str
    ) -> dict[str, str | None]:
        """All legal values of a choice parameter across members, with descriptions."""
        values: dict[str, str | None] = {}
        for template in self.templates:
            parameter = template.info.get_parameter(parameter_name)
            if parameter is None:
                continue
            for choice in parameter.choices:
                if choice.value not in values or values[choice.value] is None:
                    values[choice.value] = choice.description
        return values

    def get_ambiguous_values_for_choice_parameter(
        self, parameter_name: str, prefix: str
    ) -> dict[str, str | None]:
        """Legal values of a choice parameter that start with ``prefix``."""
        folded = prefix.casefold()
        return {
            value: description
            for value, description in self.get_valid_values_for_choice_parameter(
                parameter_name
            ).items()
            if value.casefold().startswith(folded)
        }


def _unknown_parameters(
    template: TemplateMatchInfo,
) -> dict[str, tuple[str, str | None]]:
    """Supplied parameters the template does not declare, keyed by folded name."""
    return {
        m.parameter_name.casefold(): (m.parameter_name, m.parameter_value)
        for m in template.matches
        if m.is_parameter
        and m.kind is MatchKind.INVALID_PARAMETER_VALUE
        and m.parameter_name is not None
        and template.info.get_parameter(m.parameter_name) is None
    }


def _invalid_values(template: TemplateMatchInfo) -> dict[str, tuple[str, str | None]]:
    """Declared parameters given a value that matches no legal choice."""
    return {
        m.parameter_name.casefold(): (m.parameter_name, m.parameter_value)
        for m in template.matches
        if m.is_parameter
        and m.kind is MatchKind.INVALID_PARAMETER_VALUE
        and m.parameter_name is not None
        and template.info.get_parameter(m.parameter_name) is not None
    }


def group_templates(templates: Iterable[TemplateMatchInfo]) -> list[TemplateGroup]:
    """Partition templates by group identity, in order of first appearance.

    Group identities compare case-insensitively. Templates without a group
    identity each form their own group.
    """
    members: dict[str, list[TemplateMatchInfo]] = {}
    identities: dict[str, str] = {}
    for template in templates:
        identity = template.info.effective_group_identity
        key = identity.casefold()
        if key not in members:
            members[key] = []
            identities[key] = identity
        members[key].append(template)

    return [
        TemplateGroup(group_identity=identities[key], templates=tuple(group))
        for key, group in members.items()
    ]
