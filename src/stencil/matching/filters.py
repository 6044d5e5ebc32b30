"""Per-dimension template filters.

Every filter is a pure function of a template and the user's criterion for
one dimension. A filter returns ``None`` when no criterion was supplied, so
the dimension contributes no evidence either way. All comparisons are
case-insensitive.
"""

from __future__ import annotations

from collections.abc import Iterable

from stencil.matching.match_info import MatchInfo, MatchKind, MatchLocation
from stencil.templates.base import TemplateInfo


def _equals(left: str | None, right: str) -> bool:
    return left is not None and left.casefold() == right.casefold()


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.casefold() in haystack.casefold()


def name_filter(
    template: TemplateInfo,
    name: str | None,
    short_names: Iterable[str] | None = None,
) -> MatchInfo | None:
    """Match the requested name against the template name and short names.

    ``short_names`` overrides the template's own short names; the resolver
    passes the pooled short names of the template's whole group here.

    Exact name wins over exact short name, which wins over any partial
    (substring) match. Name partials are reported before short-name partials.
    """
    if not name:
        return None

    if _equals(template.name, name):
        return MatchInfo(MatchLocation.NAME, MatchKind.EXACT, parameter_value=name)

    candidates = template.short_names if short_names is None else short_names
    has_short_name_partial = False
    for short_name in candidates:
        if _equals(short_name, name):
            return MatchInfo(
                MatchLocation.SHORT_NAME, MatchKind.EXACT, parameter_value=name
            )
        has_short_name_partial |= _contains(short_name, name)

    if _contains(template.name, name):
        return MatchInfo(MatchLocation.NAME, MatchKind.PARTIAL, parameter_value=name)
    if has_short_name_partial:
        return MatchInfo(
            MatchLocation.SHORT_NAME, MatchKind.PARTIAL, parameter_value=name
        )
    return MatchInfo(MatchLocation.NAME, MatchKind.MISMATCH, parameter_value=name)


def language_filter(template: TemplateInfo, language: str | None) -> MatchInfo | None:
    """Match the requested language (e.g. ``F#``) against the template's."""
    if not language:
        return None
    if _equals(template.language, language):
        kind = MatchKind.EXACT
    elif _contains(template.language, language):
        kind = MatchKind.PARTIAL
    else:
        kind = MatchKind.MISMATCH
    return MatchInfo(MatchLocation.LANGUAGE, kind, parameter_value=language)


def type_filter(template: TemplateInfo, template_type: str | None) -> MatchInfo | None:
    """Match the requested template type (context).

    A template that declares no type never matches an explicit type filter.
    """
    if not template_type:
        return None
    kind = (
        MatchKind.EXACT
        if _equals(template.template_type, template_type)
        else MatchKind.MISMATCH
    )
    return MatchInfo(MatchLocation.CONTEXT, kind, parameter_value=template_type)


def baseline_filter(template: TemplateInfo, baseline: str | None) -> MatchInfo | None:
    if not baseline:
        return None
    kind = (
        MatchKind.EXACT
        if any(_equals(b, baseline) for b in template.baselines)
        else MatchKind.MISMATCH
    )
    return MatchInfo(MatchLocation.BASELINE, kind, parameter_value=baseline)


def classification_filter(
    template: TemplateInfo, classification: str | None
) -> MatchInfo | None:
    """Match a tag against the template classifications (whole entries only)."""
    if not classification or not classification.strip():
        return None
    kind = (
        MatchKind.EXACT
        if any(_equals(c, classification) for c in template.classifications)
        else MatchKind.MISMATCH
    )
    return MatchInfo(MatchLocation.CLASSIFICATION, kind, parameter_value=classification)


def author_filter(template: TemplateInfo, author: str | None) -> MatchInfo | None:
    if not author or not author.strip():
        return None
    if not template.author or not template.author.strip():
        kind = MatchKind.MISMATCH
    elif _equals(template.author, author):
        kind = MatchKind.EXACT
    elif _contains(template.author, author):
        kind = MatchKind.PARTIAL
    else:
        kind = MatchKind.MISMATCH
    return MatchInfo(MatchLocation.AUTHOR, kind, parameter_value=author)


def default_language_filter(
    template: TemplateInfo, default_language: str | None
) -> MatchInfo | None:
    """Record a soft preference for templates in the configured default language.

    Only an exact match is recorded. Templates in other languages get no
    entry, so the default language can break ties but never disqualify.
    """
    if not default_language or not template.language:
        return None
    if _equals(template.language, default_language):
        return MatchInfo(
            MatchLocation.DEFAULT_LANGUAGE,
            MatchKind.EXACT,
            parameter_value=default_language,
        )
    return None
