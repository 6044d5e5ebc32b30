"""Outcome of a template resolution request."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from stencil.matching.template_match import TemplateMatchInfo
from stencil.resolution.group import InvalidParameterInfo, TemplateGroup


class UnambiguousTemplateGroupStatus(Enum):
    """Whether exactly one template group is usable."""

    NO_MATCH = "no_match"
    SINGLE_MATCH = "single_match"
    AMBIGUOUS = "ambiguous"


class SingularInvokableMatchCheckStatus(Enum):
    """Whether exactly one template of the chosen group should be invoked."""

    NOT_EVALUATED = "not_evaluated"
    NO_MATCH = "no_match"
    SINGLE_MATCH = "single_match"
    AMBIGUOUS_CHOICE = "ambiguous_choice"
    AMBIGUOUS_PRECEDENCE = "ambiguous_precedence"


class ResolutionStatus(Enum):
    """Overall resolution status reported to the caller."""

    NO_MATCH = "no_match"
    SINGLE_MATCH = "single_match"
    AMBIGUOUS_TEMPLATE_GROUP_CHOICE = "ambiguous_template_group_choice"
    AMBIGUOUS_CHOICE = "ambiguous_choice"
    AMBIGUOUS_PARAMETER_VALUE_CHOICE = "ambiguous_choice"  # alias
    AMBIGUOUS_PRECEDENCE = "ambiguous_precedence"
    INVALID_PARAMETER = "invalid_parameter"


def _freeze_mapping(
    mapping: Mapping[str, tuple[str, ...]],
) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class TemplateResolutionResult:
    """Immutable report of one resolution request.

    ``templates`` holds every evaluated template (matching or not) so the
    mismatch flags can explain why nothing matched. The flags are for
    reporting only and play no part in choosing a template.
    """

    status: ResolutionStatus
    group_status: UnambiguousTemplateGroupStatus
    invokable_status: SingularInvokableMatchCheckStatus
    templates: tuple[TemplateMatchInfo, ...] = ()
    groups: tuple[TemplateGroup, ...] = ()
    unambiguous_group: TemplateGroup | None = None
    singular_invokable_match: TemplateMatchInfo | None = None
    invalid_parameters: tuple[InvalidParameterInfo, ...] = ()
    per_template_invalid_parameters: Mapping[str, tuple[str, ...]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "per_template_invalid_parameters",
            _freeze_mapping(self.per_template_invalid_parameters),
        )

    @property
    def is_success(self) -> bool:
        return self.status is ResolutionStatus.SINGLE_MATCH

    @property
    def matched_templates(self) -> list[TemplateMatchInfo]:
        return [t for t in self.templates if t.is_match]

    @property
    def has_language_mismatch(self) -> bool:
        return any(t.has_language_mismatch for t in self.templates)

    @property
    def has_type_mismatch(self) -> bool:
        return any(t.has_type_mismatch for t in self.templates)

    @property
    def has_baseline_mismatch(self) -> bool:
        return any(t.has_baseline_mismatch for t in self.templates)

    @property
    def has_classification_mismatch(self) -> bool:
        return any(t.has_classification_mismatch for t in self.templates)

    @property
    def has_author_mismatch(self) -> bool:
        return any(t.has_author_mismatch for t in self.templates)


@dataclass(frozen=True)
class ListResolutionResult:
    """Templates to show for a list or help request.

    Exact matches satisfied every criterion. Partial matches matched by name
    but failed some other criterion; the mismatch flags describe which.
    """

    templates: tuple[TemplateMatchInfo, ...] = ()

    @property
    def exact_matched_templates(self) -> list[TemplateMatchInfo]:
        return [t for t in self.templates if t.is_match]

    @property
    def partially_matched_templates(self) -> list[TemplateMatchInfo]:
        return [
            t
            for t in self.templates
            if t.has_name_or_short_name_match and t.has_any_mismatch
        ]

    @property
    def has_exact_matches(self) -> bool:
        return bool(self.exact_matched_templates)

    @property
    def has_partial_matches(self) -> bool:
        return bool(self.partially_matched_templates)

    @property
    def has_unambiguous_template_to_use(self) -> bool:
        return len(self.exact_matched_templates) == 1

    @property
    def has_language_mismatch(self) -> bool:
        return any(t.has_language_mismatch for t in self.partially_matched_templates)

    @property
    def has_type_mismatch(self) -> bool:
        return any(t.has_type_mismatch for t in self.partially_matched_templates)

    @property
    def has_baseline_mismatch(self) -> bool:
        return any(t.has_baseline_mismatch for t in self.partially_matched_templates)

    @property
    def has_classification_mismatch(self) -> bool:
        return any(
            t.has_classification_mismatch for t in self.partially_matched_templates
        )

    @property
    def has_author_mismatch(self) -> bool:
        return any(t.has_author_mismatch for t in self.partially_matched_templates)
