"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CADENCECTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``cadencectl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from cadencectl.config.discovery import find_config
from cadencectl.config.models import DisplayConfig, EventsConfig, RecurrenceConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``cadencectl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                import click

                raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class CadenceSettings(BaseSettings):
    """Unified, frozen settings for the cadencectl CLI.

    Attributes:
        base_dir: Directory relative paths resolve against (parent of
            ``cadencectl.toml``, or CWD if no config was found).
        config_path: The TOML file in use, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CADENCECTL_",
        "env_nested_delimiter": "__",
    }

    base_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    events: EventsConfig = Field(default_factory=EventsConfig)
    recurrence: RecurrenceConfig = Field(default_factory=RecurrenceConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        base_dir: Path | None = None,
        **cli_flags: Any,
    ) -> CadenceSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers ``cadencectl.toml``
        by walking up from *base_dir* (or the CWD).
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(base_dir)

        resolved = base_dir
        if resolved is None:
            resolved = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(base_dir=resolved, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    @property
    def events_path(self) -> Path:
        """The configured event file, resolved against :attr:`base_dir`."""
        path = self.events.path
        return path if path.is_absolute() else self.base_dir / path
