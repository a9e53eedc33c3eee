"""Payload models — the resolved source directory and its documents."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, model_validator


class CommandDocument(BaseModel):
    """A reusable prompt file. Identity is the filename; content is opaque."""

    model_config = {"frozen": True}

    name: str
    path: Path


class PayloadRoot(BaseModel):
    """A directory holding the rules document and at least one command document."""

    model_config = {"frozen": True}

    root: Path
    rules_path: Path
    commands: tuple[CommandDocument, ...]

    @model_validator(mode="after")
    def _require_commands(self) -> PayloadRoot:
        if not self.commands:
            msg = f"Payload root {self.root} has no command documents"
            raise ValueError(msg)
        return self

    @property
    def command_names(self) -> list[str]:
        return [doc.name for doc in self.commands]

    def summary(self) -> dict[str, object]:
        """User-facing payload description for ServiceResult data."""
        return {
            "source_dir": str(self.root),
            "rules_file": str(self.rules_path),
            "commands": self.command_names,
            "command_count": len(self.commands),
        }
