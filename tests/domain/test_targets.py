"""Tests for target identifiers and static layouts."""

import pytest

from agentpack.domain.targets import (
    ALL_TARGETS,
    TARGET_CHOICES,
    TARGET_LAYOUTS,
    Target,
    expand_selector,
    get_layout,
)


class TestTarget:
    def test_values(self) -> None:
        assert [t.value for t in Target] == ["cursor", "claude", "opencode"]

    def test_choices_include_all(self) -> None:
        assert TARGET_CHOICES == ("cursor", "claude", "opencode", "all")

    def test_every_target_has_layout(self) -> None:
        assert set(TARGET_LAYOUTS) == set(Target)
        for target, layout in TARGET_LAYOUTS.items():
            assert layout.target is target


class TestExpandSelector:
    def test_all_in_build_order(self) -> None:
        assert expand_selector(ALL_TARGETS) == [Target.CURSOR, Target.CLAUDE, Target.OPENCODE]

    def test_single(self) -> None:
        assert expand_selector("claude") == [Target.CLAUDE]

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown target"):
            expand_selector("vscode")


class TestLayouts:
    def test_cursor(self) -> None:
        layout = get_layout(Target.CURSOR)
        assert layout.rules == (".cursorrules",)
        assert layout.command_dirs == (".cursor/commands",)
        assert [d.path for d in layout.descriptors] == ["README.txt"]

    def test_claude(self) -> None:
        layout = get_layout("claude")
        assert layout.rules == (".claude/knowledge/AGENTS.md",)
        assert layout.command_dirs == (".claude/commands",)

    def test_opencode_descriptors(self) -> None:
        layout = get_layout(Target.OPENCODE)
        assert [d.path for d in layout.descriptors] == ["opencode.json", "README.txt"]

    def test_instruction_globs(self) -> None:
        layout = get_layout(Target.OPENCODE)
        assert layout.instruction_globs() == ["AGENTS.md", "commands/*.md"]
        assert layout.instruction_globs(".mdc") == ["AGENTS.md", "commands/*.mdc"]

    def test_expected_files_opencode(self) -> None:
        layout = get_layout(Target.OPENCODE)
        assert layout.expected_files(["A.md", "B.md"]) == [
            "AGENTS.md",
            "README.txt",
            "commands/A.md",
            "commands/B.md",
            "opencode.json",
        ]

    def test_layout_is_frozen(self) -> None:
        layout = get_layout(Target.CURSOR)
        with pytest.raises(Exception):  # noqa: B017
            layout.rules = ("x",)  # type: ignore[misc]
