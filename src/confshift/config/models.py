"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``confshift.toml`` (or the
``[tool.confshift]`` table of ``pyproject.toml``) only holds overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from confshift.domain.types import SOURCE_FORMATS, TARGET_FORMATS

DEFAULT_STATE_FILE = Path("~/.confshift/preferences.yml")


class PreferencesConfig(BaseModel):
    """[preferences] section: where the selected formats are remembered."""

    model_config = {"frozen": True}

    state_file: Path = DEFAULT_STATE_FILE
    default_source: str = "idea"
    default_target: str = "dotenv"

    @field_validator("default_source")
    @classmethod
    def _known_source(cls, value: str) -> str:
        if value not in SOURCE_FORMATS:
            raise ValueError(f"default_source must be one of {', '.join(SOURCE_FORMATS)}")
        return value

    @field_validator("default_target")
    @classmethod
    def _known_target(cls, value: str) -> str:
        if value not in TARGET_FORMATS:
            raise ValueError(f"default_target must be one of {', '.join(TARGET_FORMATS)}")
        return value

    def resolved_state_file(self) -> Path:
        """State file path with ``~`` expanded."""
        return self.state_file.expanduser()


class ComposeConfig(BaseModel):
    """[compose] section."""

    model_config = {"frozen": True}

    # Host written into the JDBC URL and the Redis host property.
    host: str = "localhost"
