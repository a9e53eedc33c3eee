"""Shared pytest fixtures and helpers for agentpack tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from agentpack.config.settings import PackSettings
from agentpack.services.source import resolve_payload_root
from agentpack.services.telemetry import disable_telemetry

RULES_TEXT = "# Rules\n\nAlways write tests.\n"
COMMANDS = {
    "A.md": "---\ndescription: first\n---\nDo A.\n",
    "B.md": "Do B with ünïcode and a trailing space \n",
}


def make_payload(
    root: Path,
    *,
    rules: str | None = RULES_TEXT,
    commands: dict[str, str] | None = None,
) -> Path:
    """Create a payload root at *root*: AGENTS.md plus commands/*.md."""
    root.mkdir(parents=True, exist_ok=True)
    if rules is not None:
        (root / "AGENTS.md").write_text(rules, encoding="utf-8")
    commands_dir = root / "commands"
    commands_dir.mkdir(exist_ok=True)
    for name, body in (COMMANDS if commands is None else commands).items():
        (commands_dir / name).write_text(body, encoding="utf-8")
    return root


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under *root* (relative POSIX path) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()
    }


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging and telemetry changes made by AppContext."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pack_level = logging.getLogger("agentpack").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("agentpack").setLevel(pack_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def payload_dir(tmp_path: Path) -> Path:
    """A valid payload root with AGENTS.md and commands/A.md, commands/B.md."""
    return make_payload(tmp_path / "prompts")


@pytest.fixture
def settings(payload_dir: Path) -> PackSettings:
    """Settings whose start directory is the payload root."""
    return PackSettings.from_cli(start_dir=payload_dir)


@pytest.fixture
def payload(payload_dir: Path):
    """The resolved PayloadRoot for *payload_dir*."""
    return resolve_payload_root(payload_dir)


@pytest.fixture
def _in_payload(payload_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from inside the payload root, isolated from any real config."""
    monkeypatch.delenv("AGENTPACK_CONFIG", raising=False)
    monkeypatch.chdir(payload_dir)
