"""Tests for template descriptors and corpus loading."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from stencil.templates import (
    ChoiceValue,
    TemplateDefinitionError,
    TemplateFileError,
    TemplateInfo,
    TemplateParameter,
    get_all_templates,
    load_templates_file,
    parse_templates,
)

CORPUS_YAML = """\
templates:
  - identity: Console.CSharp
    name: Console Application
    short_name: console
    group_identity: Console
    language: C#
    type: project
    precedence: 100
    classifications: [Common, Console]
    parameters:
      Framework:
        choices:
          net6.0: Target net6.0
          net48: Target .NET Framework 4.8
      Namespace:
        description: Root namespace
  - identity: Console.FSharp
    name: Console Application
    short_names: [console]
    group_identity: Console
    language: F#
"""


class TestTemplateParameter:
    """Tests for TemplateParameter dataclass."""

    def test_free_form_by_default(self) -> None:
        """Test that a parameter without choices is free-form."""
        parameter = TemplateParameter(name="Namespace")
        assert parameter.is_choice is False
        assert parameter.choice_values == ()

    def test_from_dict_choice_list(self) -> None:
        """Test that choices may be a plain list of strings."""
        parameter = TemplateParameter.from_dict(
            {"name": "Framework", "choices": ["net6.0", "net48"], "default": "net6.0"}
        )

        assert parameter.is_choice is True
        assert parameter.choice_values == ("net6.0", "net48")
        assert parameter.default_value == "net6.0"

    def test_from_dict_choice_mappings(self) -> None:
        """Test that choices may be value/description mappings."""
        parameter = TemplateParameter.from_dict(
            {
                "name": "Auth",
                "choices": [
                    {"value": "None"},
                    {"value": "Individual", "description": "Local"},
                ],
                "default_if_option_without_value": "Individual",
            }
        )

        assert parameter.choices[1] == ChoiceValue("Individual", "Local")
        assert parameter.default_if_option_without_value == "Individual"

    def test_from_dict_missing_name(self) -> None:
        """Test that a parameter without name is rejected."""
        with pytest.raises(TemplateDefinitionError, match="missing 'name'"):
            TemplateParameter.from_dict({"choices": ["a"]})

    def test_to_dict_round_trips(self) -> None:
        """Test that to_dict output is accepted by from_dict."""
        parameter = TemplateParameter(
            name="Framework",
            choices=(ChoiceValue("net6.0", "Target net6.0"), ChoiceValue("net48")),
        )
        assert TemplateParameter.from_dict(parameter.to_dict()) == parameter


class TestTemplateInfo:
    """Tests for TemplateInfo dataclass."""

    def test_effective_group_identity(self) -> None:
        """Test that templates without group identity are their own group."""
        assert TemplateInfo("a", "A").effective_group_identity == "a"
        grouped = TemplateInfo("a", "A", group_identity="g")
        assert grouped.effective_group_identity == "g"

    def test_short_name(self) -> None:
        """Test that the primary short name is the first one."""
        assert TemplateInfo("a", "A", short_names=("x", "y")).short_name == "x"
        assert TemplateInfo("a", "A").short_name == ""

    def test_get_parameter_is_case_insensitive(self) -> None:
        """Test that parameters are found regardless of case."""
        template = TemplateInfo(
            "a", "A", parameters=(TemplateParameter(name="Framework"),)
        )

        parameter = template.get_parameter("FRAMEWORK")
        assert parameter is not None
        assert parameter.name == "Framework"
        assert template.get_parameter("other") is None

    def test_get_parameter_folds_case_fully(self) -> None:
        """Test that lookup uses full case folding, not just lowercasing."""
        template = TemplateInfo(
            "a", "A", parameters=(TemplateParameter(name="Straße"),)
        )

        parameter = template.get_parameter("STRASSE")
        assert parameter is not None
        assert parameter.name == "Straße"

    def test_is_immutable(self) -> None:
        """Test that TemplateInfo cannot be modified."""
        template = TemplateInfo("a", "A")
        with pytest.raises(AttributeError):
            template.precedence = 5  # type: ignore[misc]

    def test_from_dict_requires_identity(self) -> None:
        """Test that identity is required."""
        with pytest.raises(TemplateDefinitionError, match="identity"):
            TemplateInfo.from_dict({"name": "A"})

    def test_from_dict_requires_name(self) -> None:
        """Test that name is required."""
        with pytest.raises(TemplateDefinitionError, match="missing 'name'"):
            TemplateInfo.from_dict({"identity": "a"})

    def test_from_dict_rejects_bad_precedence(self) -> None:
        """Test that precedence must be an integer."""
        with pytest.raises(TemplateDefinitionError, match="precedence"):
            TemplateInfo.from_dict({"identity": "a", "name": "A", "precedence": "high"})

    def test_to_dict_excludes_defaults(self) -> None:
        """Test that to_dict omits unset fields."""
        data = TemplateInfo("a", "A").to_dict()
        assert data == {"identity": "a", "name": "A"}

    def test_to_dict_round_trips(self) -> None:
        """Test that a full descriptor survives to_dict/from_dict."""
        template = TemplateInfo(
            identity="a",
            name="A",
            short_names=("a", "aa"),
            group_identity="g",
            precedence=3,
            language="C#",
            template_type="item",
            author="Me",
            classifications=("Web",),
            baselines=("app",),
            parameters=(TemplateParameter(name="Namespace"),),
            description="An item",
        )
        assert TemplateInfo.from_dict(template.to_dict()) == template


class TestParseTemplates:
    """Tests for parse_templates."""

    def test_accepts_plain_list(self) -> None:
        """Test that a bare list of templates is accepted."""
        templates = parse_templates([{"identity": "a", "name": "A"}])
        assert [t.identity for t in templates] == ["a"]

    def test_skips_bad_entries(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that invalid entries are logged and skipped."""
        data = {
            "templates": [
                {"identity": "a", "name": "A"},
                "not a mapping",
                {"name": "no identity"},
                {"identity": "b", "name": "B"},
            ]
        }
        with caplog.at_level(logging.WARNING, logger="stencil.templates.loader"):
            templates = parse_templates(data)

        assert [t.identity for t in templates] == ["a", "b"]
        assert len(caplog.records) == 2

    def test_rejects_non_list(self) -> None:
        """Test that a templates value that is not a list is an error."""
        with pytest.raises(TemplateFileError, match="expected a list"):
            parse_templates({"templates": "console"})


class TestLoadTemplatesFile:
    """Tests for load_templates_file."""

    def test_loads_corpus(self, tmp_path: Path) -> None:
        """Test loading a YAML corpus with parameter shorthand."""
        path = tmp_path / "templates.yaml"
        path.write_text(CORPUS_YAML)

        templates = load_templates_file(path)

        assert [t.identity for t in templates] == ["Console.CSharp", "Console.FSharp"]
        csharp = templates[0]
        assert csharp.short_names == ("console",)
        assert csharp.template_type == "project"
        assert csharp.precedence == 100
        framework = csharp.get_parameter("framework")
        assert framework is not None
        assert framework.choice_values == ("net6.0", "net48")
        namespace = csharp.get_parameter("Namespace")
        assert namespace is not None
        assert namespace.is_choice is False

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file is an empty corpus."""
        path = tmp_path / "templates.yaml"
        path.write_text("")

        assert load_templates_file(path) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises TemplateFileError."""
        with pytest.raises(TemplateFileError) as exc_info:
            load_templates_file(tmp_path / "missing.yaml")

        assert exc_info.value.path == tmp_path / "missing.yaml"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test that invalid YAML raises TemplateFileError."""
        path = tmp_path / "templates.yaml"
        path.write_text("templates: [unclosed")

        with pytest.raises(TemplateFileError, match="invalid YAML"):
            load_templates_file(path)


class TestTemplateDiscovery:
    """Tests for global/local corpus merging."""

    def test_local_overrides_global(self, tmp_path: Path) -> None:
        """Test that a local template replaces a global one with the same identity."""
        global_path = tmp_path / "global" / "templates.yaml"
        local_path = tmp_path / "local" / "templates.yaml"
        global_path.parent.mkdir()
        local_path.parent.mkdir()
        global_path.write_text(
            "- {identity: a, name: Global A}\n- {identity: b, name: Global B}\n"
        )
        local_path.write_text("- {identity: a, name: Local A}\n")

        with (
            patch(
                "stencil.templates.loader.get_global_templates_path",
                return_value=global_path,
            ),
            patch(
                "stencil.templates.loader.get_local_templates_path",
                return_value=local_path,
            ),
        ):
            templates = get_all_templates()

        assert [(t.identity, t.name) for t in templates] == [
            ("a", "Local A"),
            ("b", "Global B"),
        ]

    def test_no_corpus_files(self, tmp_path: Path) -> None:
        """Test that missing corpus files give an empty corpus."""
        with (
            patch(
                "stencil.templates.loader.get_global_templates_path",
                return_value=tmp_path / "nonexistent",
            ),
            patch(
                "stencil.templates.loader.get_local_templates_path",
                return_value=tmp_path / "also_nonexistent",
            ),
        ):
            assert get_all_templates() == []
