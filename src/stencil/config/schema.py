"""Configuration schema for stencil."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class StencilConfig:
    """Stencil configuration schema.

    None values indicate "not set" and will use defaults or be inherited.
    """

    # Language preferred when a request names none
    default_language: str | None = None

    # Corpus file used instead of the global/local templates.yaml
    templates_file: str | None = None

    def merge(self, other: StencilConfig) -> StencilConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new StencilConfig instance.
        """
        return StencilConfig(
            default_language=(
                other.default_language
                if other.default_language is not None
                else self.default_language
            ),
            templates_file=(
                other.templates_file
                if other.templates_file is not None
                else self.templates_file
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        if self.default_language is not None:
            result["default_language"] = self.default_language
        if self.templates_file is not None:
            result["templates_file"] = self.templates_file
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StencilConfig:
        """Create config from dictionary. Unknown keys are ignored."""
        default_language = data.get("default_language")
        templates_file = data.get("templates_file")
        return cls(
            default_language=(
                str(default_language) if default_language is not None else None
            ),
            templates_file=str(templates_file) if templates_file is not None else None,
        )


DEFAULT_CONFIG = StencilConfig(default_language="C#")
