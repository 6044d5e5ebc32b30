"""Template resolution: from a corpus and a request to a single template.

Resolution runs in three stages:

1. Every template is evaluated against the request, producing a
   TemplateMatchInfo per template (``perform_core_query``).
2. Matching templates are grouped by group identity and the engine decides
   whether exactly one group is meant (``find_unambiguous_group``).
3. Within that group the engine decides whether exactly one variant should
   be invoked (``find_singular_invokable_match``).

The engine is stateless: the corpus and the default language are passed in
on every call, nothing is cached between calls, and no exceptions are raised
for any request. Ambiguity is always reported, never guessed away.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from stencil.matching.filters import (
    author_filter,
    baseline_filter,
    classification_filter,
    default_language_filter,
    language_filter,
    name_filter,
    type_filter,
)
from stencil.matching.match_info import MatchInfo, MatchKind, MatchLocation
from stencil.matching.parameters import match_parameters
from stencil.matching.template_match import TemplateMatchInfo
from stencil.resolution.group import TemplateGroup, group_templates
from stencil.resolution.request import TemplateRequest
from stencil.resolution.result import (
    ListResolutionResult,
    ResolutionStatus,
    SingularInvokableMatchCheckStatus,
    TemplateResolutionResult,
    UnambiguousTemplateGroupStatus,
)
from stencil.templates.base import TemplateInfo

logger = logging.getLogger(__name__)

EXACT_NAME_QUALITY = 2


def _group_short_names(templates: Iterable[TemplateInfo]) -> dict[str, list[str]]:
    """Union of short names per (case-folded) effective group identity."""
    pooled: dict[str, list[str]] = {}
    for template in templates:
        names = pooled.setdefault(template.effective_group_identity.casefold(), [])
        for short_name in template.short_names:
            if short_name not in names:
                names.append(short_name)
    return pooled


def evaluate_template(
    template: TemplateInfo,
    request: TemplateRequest,
    default_language: str | None = None,
    short_names: Sequence[str] | None = None,
) -> TemplateMatchInfo:
    """Run every filter and the parameter matcher for one template.

    The default language is only consulted when the request names no
    language. If nothing was observed at all, an unspecified name entry is
    recorded so that an empty request still matches every template.
    """
    match = TemplateMatchInfo(template)

    observations = [
        name_filter(template, request.name, short_names),
        language_filter(template, request.language),
        type_filter(template, request.template_type),
        baseline_filter(template, request.baseline),
        classification_filter(template, request.classification),
        author_filter(template, request.author),
    ]
    if not request.has_language:
        observations.append(default_language_filter(template, default_language))

    for observation in observations:
        if observation is not None:
            match.add_match(observation)

    for parameter_match in match_parameters(template, request.parameters):
        match.add_match(parameter_match)

    if not match.matches:
        match.add_match(MatchInfo(MatchLocation.NAME, MatchKind.UNSPECIFIED))

    return match.freeze()


def perform_core_query(
    templates: Sequence[TemplateInfo],
    request: TemplateRequest,
    default_language: str | None = None,
) -> list[TemplateMatchInfo]:
    """Evaluate every template of the corpus, in corpus order."""
    pooled = _group_short_names(templates)
    return [
        evaluate_template(
            template,
            request,
            default_language,
            pooled[template.effective_group_identity.casefold()],
        )
        for template in templates
    ]


def narrow_to_exact_name_matches(
    templates: Sequence[TemplateMatchInfo],
) -> list[TemplateMatchInfo]:
    """Keep only exact name/short name matches if there are any."""
    exact = [t for t in templates if t.name_match_quality == EXACT_NAME_QUALITY]
    return exact if exact else list(templates)


def find_unambiguous_group(
    groups: Sequence[TemplateGroup],
) -> tuple[UnambiguousTemplateGroupStatus, TemplateGroup | None]:
    """Decide which group, if any, the request refers to.

    With several groups, a group whose name match is strictly better than
    every other group's wins; any tie is ambiguous.
    """
    if not groups:
        return UnambiguousTemplateGroupStatus.NO_MATCH, None
    if len(groups) == 1:
        return UnambiguousTemplateGroupStatus.SINGLE_MATCH, groups[0]

    best_quality = max(group.name_match_quality for group in groups)
    best = [group for group in groups if group.name_match_quality == best_quality]
    if len(best) == 1:
        return UnambiguousTemplateGroupStatus.SINGLE_MATCH, best[0]
    return UnambiguousTemplateGroupStatus.AMBIGUOUS, None


def _has_shared_partial_parameter(candidates: Sequence[TemplateMatchInfo]) -> bool:
    """True if two candidates both completed the same parameter from a prefix."""
    seen: set[str] = set()
    for candidate in candidates:
        for name in {n.casefold() for n in candidate.get_partial_parameter_names()}:
            if name in seen:
                return True
            seen.add(name)
    return False


def _apply_language_preference(
    candidates: list[TemplateMatchInfo], has_user_language: bool
) -> list[TemplateMatchInfo]:
    """Prefer the requested language, or else the default language.

    The preference only narrows the candidates when some candidate satisfies
    it; it never leaves the list empty.
    """
    if has_user_language:
        preferred = [t for t in candidates if t.has_language_exact_match]
    else:
        preferred = [t for t in candidates if t.has_default_language_match]
    return preferred if preferred else candidates


def find_singular_invokable_match(
    group: TemplateGroup, has_user_language: bool
) -> tuple[SingularInvokableMatchCheckStatus, TemplateMatchInfo | None]:
    """Decide which member of the group should be invoked.

    Ambiguous parameter values anywhere in the group stop resolution before
    precedence is considered: the user has to pick the value.
    """
    if group.has_ambiguous_parameter_value_match:
        return SingularInvokableMatchCheckStatus.AMBIGUOUS_CHOICE, None

    invokable = group.invokable_templates
    if not invokable:
        return SingularInvokableMatchCheckStatus.NO_MATCH, None

    candidates = _apply_language_preference(invokable, has_user_language)
    if len(candidates) == 1:
        return SingularInvokableMatchCheckStatus.SINGLE_MATCH, candidates[0]

    if _has_shared_partial_parameter(candidates):
        return SingularInvokableMatchCheckStatus.AMBIGUOUS_CHOICE, None

    highest = max(t.info.precedence for t in candidates)
    candidates = [t for t in candidates if t.info.precedence == highest]
    if len(candidates) == 1:
        return SingularInvokableMatchCheckStatus.SINGLE_MATCH, candidates[0]
    return SingularInvokableMatchCheckStatus.AMBIGUOUS_PRECEDENCE, None


def _overall_status(
    group_status: UnambiguousTemplateGroupStatus,
    invokable_status: SingularInvokableMatchCheckStatus,
    group: TemplateGroup | None,
) -> ResolutionStatus:
    if group_status is UnambiguousTemplateGroupStatus.NO_MATCH:
        return ResolutionStatus.NO_MATCH
    if group_status is UnambiguousTemplateGroupStatus.AMBIGUOUS:
        return ResolutionStatus.AMBIGUOUS_TEMPLATE_GROUP_CHOICE

    if invokable_status is SingularInvokableMatchCheckStatus.SINGLE_MATCH:
        return ResolutionStatus.SINGLE_MATCH
    if invokable_status is SingularInvokableMatchCheckStatus.AMBIGUOUS_CHOICE:
        return ResolutionStatus.AMBIGUOUS_CHOICE
    if invokable_status is SingularInvokableMatchCheckStatus.AMBIGUOUS_PRECEDENCE:
        return ResolutionStatus.AMBIGUOUS_PRECEDENCE
    if group is not None and any(t.has_parameter_mismatch for t in group.templates):
        return ResolutionStatus.INVALID_PARAMETER
    return ResolutionStatus.NO_MATCH


def resolve_template(
    templates: Sequence[TemplateInfo],
    request: TemplateRequest,
    default_language: str | None = None,
) -> TemplateResolutionResult:
    """Resolve a request against a corpus snapshot.

    Args:
        templates: The corpus. It is only read, never modified.
        request: What the user asked for.
        default_language: Configured default language, used as a soft
            preference when the request names no language.

    Returns:
        TemplateResolutionResult describing the chosen group and template, or
        the most specific reason none could be chosen.
    """
    evaluated = perform_core_query(templates, request, default_language)
    matched = narrow_to_exact_name_matches([t for t in evaluated if t.is_match])
    groups = group_templates(matched)

    group_status, group = find_unambiguous_group(groups)
    invokable_status = SingularInvokableMatchCheckStatus.NOT_EVALUATED
    singular: TemplateMatchInfo | None = None
    if group is not None:
        invokable_status, singular = find_singular_invokable_match(
            group, request.has_language
        )

    status = _overall_status(group_status, invokable_status, group)
    logger.debug(
        "Resolved %r against %d templates: %d matched in %d groups, status %s",
        request.name,
        len(evaluated),
        len(matched),
        len(groups),
        status.value,
    )

    return TemplateResolutionResult(
        status=status,
        group_status=group_status,
        invokable_status=invokable_status,
        templates=tuple(evaluated),
        groups=tuple(groups),
        unambiguous_group=group,
        singular_invokable_match=singular,
        invalid_parameters=(
            tuple(group.get_invalid_parameter_list()) if group is not None else ()
        ),
        per_template_invalid_parameters={
            t.info.identity: tuple(t.get_invalid_parameter_names())
            for t in matched
            if t.get_invalid_parameter_names()
        },
    )


def perform_list_query(
    templates: Sequence[TemplateInfo],
    request: TemplateRequest,
    default_language: str | None = None,
) -> ListResolutionResult:
    """Select templates to list: everything that at least partially matches."""
    evaluated = perform_core_query(templates, request, default_language)
    return ListResolutionResult(
        templates=tuple(t for t in evaluated if t.is_partial_match)
    )


class TemplateResolver:
    """Convenience wrapper binding a default language.

    Holds no corpus state; the corpus is passed to every call.
    """

    def __init__(self, default_language: str | None = None) -> None:
        self.default_language = default_language

    def resolve(
        self, templates: Sequence[TemplateInfo], request: TemplateRequest
    ) -> TemplateResolutionResult:
        return resolve_template(templates, request, self.default_language)

    def list(
        self, templates: Sequence[TemplateInfo], request: TemplateRequest
    ) -> ListResolutionResult:
        return perform_list_query(templates, request, self.default_language)
