"""Jinja2 template loading for generated descriptor files, with per-source overrides."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, source_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.agentpack/templates/`` inside the
    payload root.  Both a per-target directory (for example
    ``.agentpack/templates/opencode/``) and the shared root are searched.
    """

    loaders: list[BaseLoader] = []
    if source_root is not None:
        template_root = source_root / ".agentpack" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("agentpack", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)
