"""Tests for parameter matching and choice value classification."""

from stencil.matching import (
    MatchKind,
    MatchLocation,
    match_choice_value,
    match_parameter,
    match_parameters,
)
from stencil.templates import ChoiceValue, TemplateInfo, TemplateParameter


def _choice(name: str, *values: str, **kwargs: str) -> TemplateParameter:
    return TemplateParameter(
        name=name, choices=tuple(ChoiceValue(v) for v in values), **kwargs
    )


def _make_template(*parameters: TemplateParameter) -> TemplateInfo:
    return TemplateInfo(
        identity="Console.App",
        name="Console Application",
        short_names=("console",),
        parameters=parameters,
    )


FRAMEWORK = _choice("Framework", "net5.0", "netcoreapp3.1", "net48")


class TestMatchChoiceValue:
    """Tests for match_choice_value."""

    def test_exact_value(self) -> None:
        """Test that a legal value matches exactly, ignoring case."""
        assert match_choice_value(FRAMEWORK, "NET5.0") is MatchKind.EXACT

    def test_single_starts_with_is_partial(self) -> None:
        """Test that a prefix of exactly one legal value is partial."""
        assert match_choice_value(FRAMEWORK, "netc") is MatchKind.PARTIAL

    def test_prefix_of_several_is_ambiguous(self) -> None:
        """Test that a prefix of two or more legal values is ambiguous."""
        kind = match_choice_value(FRAMEWORK, "net")
        assert kind is MatchKind.AMBIGUOUS_PARAMETER_VALUE

    def test_exact_wins_over_prefix(self) -> None:
        """Test that equality to a value that is also a prefix of others is exact."""
        parameter = _choice("Kind", "net", "net5.0")
        assert match_choice_value(parameter, "net") is MatchKind.EXACT

    def test_no_prefix_is_invalid(self) -> None:
        """Test that a value matching nothing is invalid."""
        assert (
            match_choice_value(FRAMEWORK, "java") is MatchKind.INVALID_PARAMETER_VALUE
        )

    def test_empty_value_is_invalid(self) -> None:
        """Test that an empty value never matches a choice."""
        assert match_choice_value(FRAMEWORK, "") is MatchKind.INVALID_PARAMETER_VALUE


class TestMatchParameter:
    """Tests for match_parameter."""

    def test_unknown_parameter_carries_raw_name(self) -> None:
        """Test that an undeclared name is reported as an invalid value."""
        match = match_parameter(_make_template(FRAMEWORK), "langVersion", "9")

        assert match.location is MatchLocation.OTHER_PARAMETER
        assert match.kind is MatchKind.INVALID_PARAMETER_VALUE
        assert match.parameter_name == "langVersion"
        assert match.parameter_value == "9"

    def test_declared_name_is_case_insensitive(self) -> None:
        """Test that lookup ignores case and reports the declared name."""
        match = match_parameter(_make_template(FRAMEWORK), "framework", "net48")

        assert match.kind is MatchKind.EXACT
        assert match.parameter_name == "Framework"

    def test_name_and_value_use_full_case_folding(self) -> None:
        """Test that names fold the same way choice values do."""
        template = _make_template(_choice("Straße", "Größe", "Breite"))

        by_name = match_parameter(template, "STRASSE", "Größe")
        by_value = match_parameter(template, "Straße", "GRÖSSE")

        assert by_name.kind is MatchKind.EXACT
        assert by_name.parameter_name == "Straße"
        assert by_value.kind is MatchKind.EXACT

    def test_free_form_accepts_anything(self) -> None:
        """Test that a free-form parameter accepts any value as exact."""
        template = _make_template(TemplateParameter(name="Namespace"))
        match = match_parameter(template, "namespace", "anything at all")

        assert match.kind is MatchKind.EXACT

    def test_free_form_accepts_empty_value(self) -> None:
        """Test that a free-form parameter given without a value is exact."""
        template = _make_template(TemplateParameter(name="Namespace"))

        assert match_parameter(template, "Namespace", None).kind is MatchKind.EXACT

    def test_option_without_value_uses_declared_default(self) -> None:
        """Test that a switch without value takes default_if_option_without_value."""
        parameter = _choice(
            "Auth", "None", "Individual", default_if_option_without_value="Individual"
        )
        match = match_parameter(_make_template(parameter), "auth", None)

        assert match.kind is MatchKind.EXACT
        assert match.parameter_value == "Individual"

    def test_choice_without_value_or_default_is_invalid(self) -> None:
        """Test that a choice switch without value and default is invalid."""
        match = match_parameter(_make_template(FRAMEWORK), "Framework", "")

        assert match.kind is MatchKind.INVALID_PARAMETER_VALUE


class TestMatchParameters:
    """Tests for match_parameters."""

    def test_one_observation_per_supplied_parameter(self) -> None:
        """Test that only supplied parameters produce observations."""
        template = _make_template(FRAMEWORK, TemplateParameter(name="Namespace"))
        matches = match_parameters(template, {"Framework": "net5.0"})

        assert len(matches) == 1
        assert matches[0].parameter_name == "Framework"

    def test_no_parameters(self) -> None:
        """Test that an empty mapping yields no observations."""
        assert match_parameters(_make_template(FRAMEWORK), {}) == []
