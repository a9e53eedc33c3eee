"""Target identifiers and their static output layouts.

Each target maps the rules document and the command documents to fixed
relative destinations, plus the descriptor files rendered for the
destination tool.  Adding a target means adding one ``TargetLayout`` entry.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePosixPath

from pydantic import BaseModel


class Target(StrEnum):
    """Supported destination tool layouts."""

    CURSOR = "cursor"
    CLAUDE = "claude"
    OPENCODE = "opencode"


ALL_TARGETS = "all"

# Build order for the ``all`` selector.
TARGET_ORDER: tuple[Target, ...] = (Target.CURSOR, Target.CLAUDE, Target.OPENCODE)

TARGET_CHOICES: tuple[str, ...] = (*(t.value for t in TARGET_ORDER), ALL_TARGETS)


class Descriptor(BaseModel):
    """A generated file: destination path and the template that renders it."""

    model_config = {"frozen": True}

    path: str
    template: str


class TargetLayout(BaseModel):
    """Relative destinations for one target's output tree."""

    model_config = {"frozen": True}

    target: Target
    label: str
    rules: tuple[str, ...]
    command_dirs: tuple[str, ...]
    descriptors: tuple[Descriptor, ...] = ()

    def instruction_globs(self, suffix: str = ".md") -> list[str]:
        """Paths a destination tool should load: rules files, then command globs."""
        globs = list(self.rules)
        globs.extend(str(PurePosixPath(d) / f"*{suffix}") for d in self.command_dirs)
        return globs

    def expected_files(self, command_names: list[str]) -> list[str]:
        """Every relative path a build writes for the given command filenames."""
        files = set(self.rules)
        for directory in self.command_dirs:
            files.update(str(PurePosixPath(directory) / name) for name in command_names)
        files.update(d.path for d in self.descriptors)
        return sorted(files)


TARGET_LAYOUTS: dict[Target, TargetLayout] = {
    Target.CURSOR: TargetLayout(
        target=Target.CURSOR,
        label="Cursor",
        rules=(".cursorrules",),
        command_dirs=(".cursor/commands",),
        descriptors=(Descriptor(path="README.txt", template="README.txt.j2"),),
    ),
    Target.CLAUDE: TargetLayout(
        target=Target.CLAUDE,
        label="Claude Code",
        rules=(".claude/knowledge/AGENTS.md",),
        command_dirs=(".claude/commands",),
        descriptors=(Descriptor(path="README.txt", template="README.txt.j2"),),
    ),
    Target.OPENCODE: TargetLayout(
        target=Target.OPENCODE,
        label="opencode",
        rules=("AGENTS.md",),
        command_dirs=("commands",),
        descriptors=(
            Descriptor(path="opencode.json", template="opencode.json.j2"),
            Descriptor(path="README.txt", template="README.txt.j2"),
        ),
    ),
}


def get_layout(target: Target | str) -> TargetLayout:
    """Return the layout for *target*, raising ValueError for unknown names."""
    try:
        return TARGET_LAYOUTS[Target(target)]
    except ValueError:
        msg = f"Unknown target: {target!r}"
        raise ValueError(msg) from None


def expand_selector(selector: str) -> list[Target]:
    """Map a CLI selector (a target name or ``all``) to targets in build order."""
    if selector == ALL_TARGETS:
        return list(TARGET_ORDER)
    return [get_layout(selector).target]
