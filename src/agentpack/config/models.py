"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, agentpack.toml only contains
overrides.  An empty (or absent) config file is valid.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class SourceConfig(BaseModel):
    """[source] section: how a payload root is recognised."""

    model_config = {"frozen": True, "extra": "forbid"}

    rules_file: str = "AGENTS.md"
    commands_dir: str = "commands"
    nested_dir: str = "Agents"
    command_suffix: str = ".md"

    @field_validator("rules_file", "commands_dir", "nested_dir")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in (".", ".."):
            msg = f"must be a plain file or directory name, got {value!r}"
            raise ValueError(msg)
        return value


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    dist_dir: str = "dist"
    force: bool = False
