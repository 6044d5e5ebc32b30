"""Template corpus loading from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from stencil.templates.base import TemplateDefinitionError, TemplateInfo

logger = logging.getLogger(__name__)

TEMPLATES_FILENAME = "templates.yaml"


class TemplateFileError(Exception):
    """Raised when a template corpus file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load templates from {path}: {reason}")


def get_global_templates_path() -> Path:
    """Get path to the global corpus: ~/.stencil/templates.yaml."""
    return Path.home() / ".stencil" / TEMPLATES_FILENAME


def get_local_templates_path() -> Path:
    """Get path to the project corpus: ./.stencil/templates.yaml."""
    return Path.cwd() / ".stencil" / TEMPLATES_FILENAME


def parse_templates(data: Any, source: Path | None = None) -> list[TemplateInfo]:
    """Build descriptors from parsed YAML.

    Accepts either a list of template mappings or a mapping with a
    ``templates`` list. Entries that are not valid descriptors are logged and
    skipped so a single bad entry does not hide the rest of the corpus.
    """
    if isinstance(data, dict):
        entries = data.get("templates", [])
    else:
        entries = data

    if not isinstance(entries, list):
        raise TemplateFileError(
            source or Path("<memory>"), "expected a list of templates"
        )

    templates: list[TemplateInfo] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning(
                "Skipping template entry %d in %s: not a mapping", index, source
            )
            continue
        try:
            templates.append(TemplateInfo.from_dict(entry))
        except TemplateDefinitionError as e:
            logger.warning("Skipping template entry %d in %s: %s", index, source, e)
    return templates


def load_templates_file(path: Path) -> list[TemplateInfo]:
    """Load all templates declared in one YAML corpus file.

    An empty file yields an empty corpus.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise TemplateFileError(path, e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise TemplateFileError(path, f"invalid YAML ({e})") from e

    if data is None:
        return []
    return parse_templates(data, source=path)


def get_all_templates() -> list[TemplateInfo]:
    """Load the merged corpus from the global and project files.

    Resolution order (later wins for the same identity):
    1. Global (~/.stencil/templates.yaml)
    2. Project (./.stencil/templates.yaml)

    Order of first appearance is preserved.
    """
    templates: dict[str, TemplateInfo] = {}

    for path in (get_global_templates_path(), get_local_templates_path()):
        if not path.exists():
            continue
        for template in load_templates_file(path):
            templates[template.identity] = template

    return list(templates.values())
