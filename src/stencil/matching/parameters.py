"""Matching of user-supplied parameters against a template's declared ones."""

from __future__ import annotations

from collections.abc import Mapping

from stencil.matching.match_info import MatchInfo, MatchKind, MatchLocation
from stencil.templates.base import TemplateInfo, TemplateParameter


def match_choice_value(parameter: TemplateParameter, value: str) -> MatchKind:
    """Classify a value against the legal values of a choice parameter.

    Exact (case-insensitive) equality wins. Otherwise the value is treated as
    a prefix: one completion is a partial match, several are ambiguous, none
    is invalid.
    """
    if not value:
        return MatchKind.INVALID_PARAMETER_VALUE

    folded = value.casefold()
    choices = [choice.casefold() for choice in parameter.choice_values]
    if folded in choices:
        return MatchKind.EXACT

    starts_with_count = sum(1 for choice in choices if choice.startswith(folded))
    if starts_with_count == 1:
        return MatchKind.PARTIAL
    if starts_with_count > 1:
        return MatchKind.AMBIGUOUS_PARAMETER_VALUE
    return MatchKind.INVALID_PARAMETER_VALUE


def match_parameter(template: TemplateInfo, name: str, value: str | None) -> MatchInfo:
    """Evaluate one supplied parameter against a template.

    Unknown parameter names are reported as invalid values carrying the name
    exactly as the user typed it.
    """
    parameter = template.get_parameter(name)
    if parameter is None:
        return MatchInfo(
            MatchLocation.OTHER_PARAMETER,
            MatchKind.INVALID_PARAMETER_VALUE,
            parameter_name=name,
            parameter_value=value,
        )

    effective_value = value
    if not effective_value and parameter.default_if_option_without_value:
        # Switch given without a value.
        effective_value = parameter.default_if_option_without_value

    if parameter.is_choice:
        kind = match_choice_value(parameter, effective_value or "")
    else:
        kind = MatchKind.EXACT

    return MatchInfo(
        MatchLocation.OTHER_PARAMETER,
        kind,
        parameter_name=parameter.name,
        parameter_value=effective_value,
    )


def match_parameters(
    template: TemplateInfo, parameters: Mapping[str, str | None]
) -> list[MatchInfo]:
    """Evaluate every supplied parameter; unsupplied ones contribute nothing."""
    return [
        match_parameter(template, name, value) for name, value in parameters.items()
    ]
