"""Match primitives, filters and per-template match aggregation."""

from stencil.matching.filters import (
    author_filter,
    baseline_filter,
    classification_filter,
    default_language_filter,
    language_filter,
    name_filter,
    type_filter,
)
from stencil.matching.match_info import (
    NAME_LOCATIONS,
    MatchInfo,
    MatchKind,
    MatchLocation,
)
from stencil.matching.parameters import (
    match_choice_value,
    match_parameter,
    match_parameters,
)
from stencil.matching.template_match import FrozenMatchError, TemplateMatchInfo

__all__ = [
    "NAME_LOCATIONS",
    "FrozenMatchError",
    "MatchInfo",
    "MatchKind",
    "MatchLocation",
    "TemplateMatchInfo",
    "author_filter",
    "baseline_filter",
    "classification_filter",
    "default_language_filter",
    "language_filter",
    "match_choice_value",
    "match_parameter",
    "match_parameters",
    "name_filter",
    "type_filter",
]
