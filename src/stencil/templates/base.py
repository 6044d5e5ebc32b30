"""Template descriptor definitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class TemplateDefinitionError(ValueError):
    """Raised when a template mapping cannot be turned into a descriptor."""


def _str_tuple(raw: Any) -> tuple[str, ...]:
    """Coerce a scalar or list value from a mapping into a tuple of strings."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,) if raw else ()
    if isinstance(raw, (list, tuple)):
        return tuple(str(item) for item in raw if item is not None)
    return (str(raw),)


def _optional_str(raw: Any) -> str | None:
    if raw is None:
        return None
    value = str(raw)
    return value or None


@dataclass(frozen=True)
class ChoiceValue:
    """One legal value of a choice parameter."""

    value: str
    description: str | None = None


@dataclass(frozen=True)
class TemplateParameter:
    """A parameter declared by a template.

    Parameters without choices are free-form: any supplied value is accepted
    and only validated when the template is invoked.
    """

    name: str
    default_value: str | None = None
    choices: tuple[ChoiceValue, ...] = ()
    default_if_option_without_value: str | None = None
    description: str | None = None

    @property
    def is_choice(self) -> bool:
        return bool(self.choices)

    @property
    def choice_values(self) -> tuple[str, ...]:
        return tuple(choice.value for choice in self.choices)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict, omitting unset fields."""
        result: dict[str, Any] = {"name": self.name}
        if self.default_value is not None:
            result["default"] = self.default_value
        if self.choices:
            result["choices"] = [
                (
                    {"value": c.value, "description": c.description}
                    if c.description is not None
                    else c.value
                )
                for c in self.choices
            ]
        if self.default_if_option_without_value is not None:
            result["default_if_option_without_value"] = (
                self.default_if_option_without_value
            )
        if self.description is not None:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemplateParameter:
        """Create from a dict.

        Choices may be given as a list of strings, a list of
        ``{value, description}`` mappings, or a ``value: description`` mapping.
        """
        name = _optional_str(data.get("name"))
        if name is None:
            raise TemplateDefinitionError("Template parameter is missing 'name'")

        choices_raw = data.get("choices")
        choices: list[ChoiceValue] = []
        if isinstance(choices_raw, dict):
            for value, description in choices_raw.items():
                choices.append(ChoiceValue(str(value), _optional_str(description)))
        elif isinstance(choices_raw, (list, tuple)):
            for item in choices_raw:
                if isinstance(item, dict):
                    value = _optional_str(item.get("value"))
                    if value is None:
                        raise TemplateDefinitionError(
                            f"Choice of parameter '{name}' is missing 'value'"
                        )
                    choices.append(
                        ChoiceValue(value, _optional_str(item.get("description")))
                    )
                elif item is not None:
                    choices.append(ChoiceValue(str(item)))

        default_raw = data.get("default")
        return cls(
            name=name,
            default_value=str(default_raw) if default_raw is not None else None,
            choices=tuple(choices),
            default_if_option_without_value=_optional_str(
                data.get("default_if_option_without_value")
            ),
            description=_optional_str(data.get("description")),
        )


@dataclass(frozen=True)
class TemplateInfo:
    """Read-only descriptor of a registered template.

    Templates sharing a ``group_identity`` are variants of the same template
    (e.g. the C# and F# flavors of a console app). An empty group identity
    means the template forms its own group.
    """

    identity: str
    name: str
    short_names: tuple[str, ...] = ()
    group_identity: str = ""
    precedence: int = 0
    language: str | None = None
    template_type: str | None = None  # "project" | "item" | "solution" | ...
    author: str | None = None
    classifications: tuple[str, ...] = ()
    baselines: tuple[str, ...] = ()
    parameters: tuple[TemplateParameter, ...] = ()
    description: str = ""

    @property
    def short_name(self) -> str:
        """Primary short name, or empty string when none is declared."""
        return self.short_names[0] if self.short_names else ""

    @property
    def effective_group_identity(self) -> str:
        return self.group_identity or self.identity

    def get_parameter(self, name: str) -> TemplateParameter | None:
        """Find a declared parameter by name (case-insensitive)."""
        folded = name.casefold()
        for parameter in self.parameters:
            if parameter.name.casefold() == folded:
                return parameter
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict, omitting unset fields."""
        result: dict[str, Any] = {
            "identity": self.identity,
            "name": self.name,
        }
        if self.short_names:
            result["short_names"] = list(self.short_names)
        if self.group_identity:
            result["group_identity"] = self.group_identity
        if self.precedence:
            result["precedence"] = self.precedence
        if self.language is not None:
            result["language"] = self.language
        if self.template_type is not None:
            result["type"] = self.template_type
        if self.author is not None:
            result["author"] = self.author
        if self.classifications:
            result["classifications"] = list(self.classifications)
        if self.baselines:
            result["baselines"] = list(self.baselines)
        if self.parameters:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        if self.description:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TemplateInfo:
        """Create a TemplateInfo from a dict (one entry of a corpus file).

        ``short_name`` and ``short_names`` are both accepted. Unknown keys are
        ignored.
        """
        identity = _optional_str(data.get("identity"))
        if identity is None:
            raise TemplateDefinitionError("Template is missing 'identity'")
        name = _optional_str(data.get("name"))
        if name is None:
            raise TemplateDefinitionError(f"Template '{identity}' is missing 'name'")

        short_names = _str_tuple(data.get("short_names", data.get("short_name")))

        precedence_raw = data.get("precedence", 0)
        try:
            precedence = int(precedence_raw) if precedence_raw is not None else 0
        except (TypeError, ValueError) as e:
            raise TemplateDefinitionError(
                f"Template '{identity}' has non-integer precedence: {precedence_raw!r}"
            ) from e

        parameters_raw = data.get("parameters", [])
        parameters: list[TemplateParameter] = []
        if isinstance(parameters_raw, dict):
            # name -> definition shorthand
            for param_name, definition in parameters_raw.items():
                param_data = dict(definition) if isinstance(definition, dict) else {}
                param_data.setdefault("name", param_name)
                parameters.append(TemplateParameter.from_dict(param_data))
        elif isinstance(parameters_raw, list):
            for param_data in parameters_raw:
                if isinstance(param_data, dict):
                    parameters.append(TemplateParameter.from_dict(param_data))

        return cls(
            identity=identity,
            name=name,
            short_names=short_names,
            group_identity=str(data.get("group_identity") or ""),
            precedence=precedence,
            language=_optional_str(data.get("language")),
            template_type=_optional_str(data.get("type", data.get("template_type"))),
            author=_optional_str(data.get("author")),
            classifications=_str_tuple(data.get("classifications")),
            baselines=_str_tuple(data.get("baselines")),
            parameters=tuple(parameters),
            description=str(data.get("description") or ""),
        )
