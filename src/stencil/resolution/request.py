"""The user's template selection request."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TemplateRequest:
    """What the user asked for: ``create <name> --language X --param value``.

    All criteria are optional. Parameter names are case-insensitive; when the
    same name is supplied twice in different case, the last value wins.
    Values are kept as raw strings.
    """

    name: str | None = None
    language: str | None = None
    template_type: str | None = None
    baseline: str | None = None
    classification: str | None = None
    author: str | None = None
    parameters: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        deduplicated: dict[str, str | None] = {}
        by_folded: dict[str, str] = {}
        for key, value in self.parameters.items():
            previous = by_folded.get(key.casefold())
            if previous is not None:
                del deduplicated[previous]
            by_folded[key.casefold()] = key
            deduplicated[key] = value
        # frozen dataclass: bypass __setattr__ to store the normalized copy
        object.__setattr__(self, "parameters", deduplicated)

    @property
    def has_language(self) -> bool:
        return bool(self.language)

    @classmethod
    def from_pairs(
        cls, pairs: list[str] | tuple[str, ...], **criteria: str | None
    ) -> TemplateRequest:
        """Build a request from ``name=value`` strings.

        A bare ``name`` means the option was given without a value.
        """
        parameters: dict[str, str | None] = {}
        for pair in pairs:
            key, sep, value = pair.partition("=")
            key = key.strip().lstrip("-")
            if not key:
                continue
            parameters[key] = value if sep else None
        return cls(parameters=parameters, **criteria)
