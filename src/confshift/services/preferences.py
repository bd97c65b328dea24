"""PreferencesService: remembers the selected source and target formats.

The two selections live in a small YAML state file under two fixed
keys. They are loaded on every invocation and written on every change.
A missing or damaged file silently falls back to the configured
defaults; nothing here ever blocks a conversion.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import BaseModel
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from confshift.config.models import PreferencesConfig
from confshift.domain.types import SOURCE_FORMATS, TARGET_FORMATS
from confshift.services.result import (
    INVALID_FORMAT,
    STATE_WRITE_FAILED,
    ServiceResult,
    failure,
)

log = structlog.get_logger(__name__)

SOURCE_KEY = "source_format"
TARGET_KEY = "target_format"


class Preferences(BaseModel):
    """The persisted pair of format selections."""

    model_config = {"frozen": True}

    source_format: str
    target_format: str

    def as_data(self) -> dict[str, str]:
        return {SOURCE_KEY: self.source_format, TARGET_KEY: self.target_format}


class PreferencesService:
    """Load, change and persist the selected formats."""

    def __init__(self, config: PreferencesConfig | None = None) -> None:
        self._config = config or PreferencesConfig()

    @property
    def state_file(self) -> Path:
        return self._config.resolved_state_file()

    def defaults(self) -> Preferences:
        return Preferences(
            source_format=self._config.default_source,
            target_format=self._config.default_target,
        )

    def load(self) -> Preferences:
        """Read the state file; each unusable entry falls back to its default."""
        defaults = self.defaults()
        path = self.state_file
        if not path.is_file():
            return defaults

        try:
            data = YAML(typ="safe").load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeError, YAMLError):
            log.warning("preferences.unreadable", path=str(path))
            return defaults
        if not isinstance(data, dict):
            return defaults

        source = data.get(SOURCE_KEY)
        target = data.get(TARGET_KEY)
        if source not in SOURCE_FORMATS:
            log.debug("preferences.invalid_source", value=source)
            source = defaults.source_format
        if target not in TARGET_FORMATS:
            log.debug("preferences.invalid_target", value=target)
            target = defaults.target_format
        return Preferences(source_format=source, target_format=target)

    def _save(self, prefs: Preferences) -> None:
        path = self.state_file
        path.parent.mkdir(parents=True, exist_ok=True)
        yaml = YAML(typ="safe", pure=True)
        yaml.default_flow_style = False
        with path.open("w", encoding="utf-8") as fh:
            yaml.dump(prefs.as_data(), fh)

    def _result(self, op: str, prefs: Preferences) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op=op,
            data={**prefs.as_data(), "state_file": str(self.state_file)},
        )

    def _persist(self, op: str, prefs: Preferences) -> ServiceResult:
        try:
            self._save(prefs)
        except OSError as exc:
            return failure(
                op,
                STATE_WRITE_FAILED,
                f"Could not write {self.state_file}: {exc}",
                path=str(self.state_file),
            )
        return self._result(op, prefs)

    def show(self) -> ServiceResult:
        return self._result("prefs_show", self.load())

    def set(self, *, source: str | None = None, target: str | None = None) -> ServiceResult:
        """Change one or both selections and persist them."""
        op = "prefs_set"
        if source is not None and source not in SOURCE_FORMATS:
            return failure(
                op,
                INVALID_FORMAT,
                f"Unknown source format: {source}",
                allowed=list(SOURCE_FORMATS),
            )
        if target is not None and target not in TARGET_FORMATS:
            return failure(
                op,
                INVALID_FORMAT,
                f"Unknown target format: {target}",
                allowed=list(TARGET_FORMATS),
            )

        current = self.load()
        updated = Preferences(
            source_format=source if source is not None else current.source_format,
            target_format=target if target is not None else current.target_format,
        )
        return self._persist(op, updated)

    def swap(self) -> ServiceResult:
        """Exchange source and target, if the swapped pair is selectable.

        Compose is source-only and the Spring outputs are target-only, so
        those selections cannot be swapped.
        """
        op = "prefs_swap"
        current = self.load()
        if current.target_format not in SOURCE_FORMATS:
            return failure(
                op,
                INVALID_FORMAT,
                f"{current.target_format} cannot be used as a source format",
                **current.as_data(),
            )
        if current.source_format not in TARGET_FORMATS:
            return failure(
                op,
                INVALID_FORMAT,
                f"{current.source_format} cannot be used as a target format",
                **current.as_data(),
            )
        swapped = Preferences(
            source_format=current.target_format,
            target_format=current.source_format,
        )
        return self._persist(op, swapped)

    def reset(self) -> ServiceResult:
        """Forget the stored selections."""
        op = "prefs_reset"
        try:
            self.state_file.unlink(missing_ok=True)
        except OSError as exc:
            return failure(op, STATE_WRITE_FAILED, f"Could not remove {self.state_file}: {exc}")
        return self._result(op, self.defaults())
