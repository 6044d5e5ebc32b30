"""Template descriptors and corpus loading."""

from stencil.templates.base import (
    ChoiceValue,
    TemplateDefinitionError,
    TemplateInfo,
    TemplateParameter,
)
from stencil.templates.loader import (
    TemplateFileError,
    get_all_templates,
    get_global_templates_path,
    get_local_templates_path,
    load_templates_file,
    parse_templates,
)

__all__ = [
    "ChoiceValue",
    "TemplateDefinitionError",
    "TemplateFileError",
    "TemplateInfo",
    "TemplateParameter",
    "get_all_templates",
    "get_global_templates_path",
    "get_local_templates_path",
    "load_templates_file",
    "parse_templates",
]
