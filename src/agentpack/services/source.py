"""SourceService — locate the payload root near a starting directory.

Resolution is a first-match search over a fixed, ordered candidate list,
not a best match: the first directory that holds the rules document and
at least one command document wins, whatever later candidates contain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from agentpack.config.models import SourceConfig
from agentpack.domain.errors import ResolutionError
from agentpack.domain.payload import CommandDocument, PayloadRoot
from agentpack.infrastructure.filesystem import PathKind, list_markdown_files, path_kind
from agentpack.services.base import BaseService
from agentpack.services.result import ServiceResult
from agentpack.services.telemetry import get_current_span, traced

log = structlog.get_logger(__name__)

# (base, nesting depth) in priority order.  Base "start" is the starting
# directory, "parent" its parent; depth counts nested_dir segments.
CANDIDATE_ORDER: tuple[tuple[str, int], ...] = (
    ("start", 0),
    ("start", 1),
    ("start", 2),
    ("parent", 0),
    ("parent", 1),
    ("parent", 2),
)


def candidate_dirs(start: Path, config: SourceConfig | None = None) -> list[Path]:
    """Return the six candidate directories for *start*, highest priority first."""
    config = config or SourceConfig()
    bases = {"start": start, "parent": start.parent}
    return [
        bases[base].joinpath(*([config.nested_dir] * depth)) for base, depth in CANDIDATE_ORDER
    ]


def load_payload(candidate: Path, config: SourceConfig | None = None) -> PayloadRoot | None:
    """Return the payload rooted at *candidate*, or None if it is not valid.

    Missing directories are simply invalid.  Symlinks are followed.
    """
    config = config or SourceConfig()
    rules = candidate / config.rules_file
    if path_kind(rules) is not PathKind.FILE:
        return None
    commands = list_markdown_files(candidate / config.commands_dir, config.command_suffix)
    if not commands:
        return None
    return PayloadRoot(
        root=candidate,
        rules_path=rules,
        commands=tuple(CommandDocument(name=p.name, path=p) for p in commands),
    )


def resolve_payload_root(start: Path, config: SourceConfig | None = None) -> PayloadRoot:
    """Return the first valid payload root among the candidates of *start*.

    Raises:
        ResolutionError: No candidate is valid.
    """
    config = config or SourceConfig()
    candidates = candidate_dirs(start, config)
    for candidate in candidates:
        payload = load_payload(candidate, config)
        log.debug("source.candidate", path=str(candidate), valid=payload is not None)
        if payload is not None:
            log.debug("source.resolved", path=str(candidate), commands=len(payload.commands))
            return payload

    msg = (
        f"Could not find a source directory with {config.rules_file} and "
        f"{config.commands_dir}/*{config.command_suffix} near {start}"
    )
    raise ResolutionError(
        msg,
        start_dir=str(start),
        candidates=[str(c) for c in candidates],
    )


class SourceService(BaseService):
    """Resolve and describe the payload root for the configured start directory."""

    @traced
    def resolve(
        self, start: Path | None = None, *, include_candidates: bool = False
    ) -> ServiceResult:
        """Resolve the payload root and report its documents (op ``locate``).

        With *include_candidates*, ``data["candidates"]`` lists every
        candidate in priority order with its validity.
        """
        op = "locate"
        start = start or self._settings.start_dir
        extra: dict[str, Any] = {}
        if include_candidates:
            extra["candidates"] = self.candidates(start)

        try:
            payload = resolve_payload_root(start, self._settings.source)
        except ResolutionError as exc:
            self._log.info("source.not_found", start_dir=str(start))
            return ServiceResult.failure(op, exc, data=extra)

        span = get_current_span()
        if span is not None:
            span.annotate("source_dir", str(payload.root))
        return ServiceResult(ok=True, op=op, data={**payload.summary(), **extra})

    def candidates(self, start: Path | None = None) -> list[dict[str, Any]]:
        """Report every candidate in priority order with its validity."""
        start = start or self._settings.start_dir
        config = self._settings.source
        return [
            {
                "priority": index,
                "path": str(candidate),
                "valid": load_payload(candidate, config) is not None,
            }
            for index, candidate in enumerate(candidate_dirs(start, config), start=1)
        ]

    def payload(self, start: Path | None = None) -> PayloadRoot:
        """Resolve and return the PayloadRoot itself.

        Raises:
            ResolutionError: No candidate is valid.
        """
        return resolve_payload_root(start or self._settings.start_dir, self._settings.source)
