"""Grouping, disambiguation and resolution results."""

from stencil.resolution.group import (
    InvalidParameterInfo,
    InvalidParameterKind,
    TemplateGroup,
    group_templates,
)
from stencil.resolution.request import TemplateRequest
from stencil.resolution.resolver import (
    TemplateResolver,
    evaluate_template,
    find_singular_invokable_match,
    find_unambiguous_group,
    narrow_to_exact_name_matches,
    perform_core_query,
    perform_list_query,
    resolve_template,
)
from stencil.resolution.result import (
    ListResolutionResult,
    ResolutionStatus,
    SingularInvokableMatchCheckStatus,
    TemplateResolutionResult,
    UnambiguousTemplateGroupStatus,
)

__all__ = [
    "InvalidParameterInfo",
    "InvalidParameterKind",
    "ListResolutionResult",
    "ResolutionStatus",
    "SingularInvokableMatchCheckStatus",
    "TemplateGroup",
    "TemplateRequest",
    "TemplateResolutionResult",
    "TemplateResolver",
    "UnambiguousTemplateGroupStatus",
    "evaluate_template",
    "find_singular_invokable_match",
    "find_unambiguous_group",
    "group_templates",
    "narrow_to_exact_name_matches",
    "perform_core_query",
    "perform_list_query",
    "resolve_template",
]
