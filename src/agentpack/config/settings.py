"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``AGENTPACK_*`` prefix
  3. TOML file    — ``agentpack.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`agentpack.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from agentpack.config.discovery import find_config, read_config
from agentpack.config.models import BuildConfig, SourceConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``agentpack.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_config(toml_path)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PackSettings(BaseSettings):
    """Unified settings for the agentpack CLI.

    Frozen after construction and stored on the Click context, so nothing
    in the build pipeline reads process-wide mutable state.

    Attributes:
        start_dir: Directory the source search starts from (``-C``, or CWD).
        config_path: The config file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "AGENTPACK_",
        "env_nested_delimiter": "__",
    }

    start_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    source: SourceConfig = Field(default_factory=SourceConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @property
    def dist_dir(self) -> Path:
        """Default parent of per-target output directories."""
        dist = Path(self.build.dist_dir).expanduser()
        if not dist.is_absolute():
            dist = self.start_dir / dist
        return dist

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
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | str | None = None,
        **cli_flags: Any,
    ) -> PackSettings:
        """Construct settings from a CLI invocation.

        Discovers ``agentpack.toml`` by walking up from *start_dir* (or uses
        the explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        resolved_start = Path(start_dir).resolve() if start_dir else Path.cwd().resolve()

        import click

        toml_path: Path | None = None
        if config_path:
            toml_path = Path(config_path).expanduser()
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            try:
                toml_path = find_config(resolved_start)
            except FileNotFoundError as exc:
                raise click.ClickException(str(exc)) from exc

        _tls.toml_path = toml_path
        try:
            return cls(
                start_dir=resolved_start,
                config_path=toml_path,
                **cli_flags,
            )
        except ValidationError as exc:
            where = f" in {toml_path}" if toml_path else ""
            msg = f"Invalid configuration{where}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
