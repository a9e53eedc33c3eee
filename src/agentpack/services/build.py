"""BuildService — assemble per-target output trees from a payload root.

Pipeline per target: PREFLIGHT → STAGE → COPY RULES → COPY COMMANDS →
RENDER DESCRIPTORS → SWAP.  Everything after PREFLIGHT happens in a
staging directory, so the output path only ever holds a complete tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from agentpack.domain.errors import AgentpackError, AlreadyExistsError, WriteError
from agentpack.domain.payload import PayloadRoot
from agentpack.domain.targets import ALL_TARGETS, Target, expand_selector, get_layout
from agentpack.infrastructure.filesystem import (
    copy_document,
    list_tree,
    path_kind,
    staged_directory,
    write_text_file,
)
from agentpack.infrastructure.templates import build_template_environment
from agentpack.services.base import BaseService
from agentpack.services.result import ServiceError, ServiceResult
from agentpack.services.telemetry import trace_span, traced


@dataclass(frozen=True)
class BuildRequest:
    """One target build: where it goes and whether it may overwrite."""

    target: Target
    out_dir: Path | None = None
    force: bool = False


class BuildService(BaseService):
    """Builds output trees for the targets in :data:`TARGET_LAYOUTS`."""

    def output_dir(self, request: BuildRequest) -> Path:
        """Effective output directory: the override, else ``<dist>/<target>``."""
        if request.out_dir is not None:
            return Path(request.out_dir).expanduser().absolute()
        return self._settings.dist_dir / request.target.value

    @traced
    def build(self, payload: PayloadRoot, request: BuildRequest) -> ServiceResult:
        """Build one target's tree.  Never raises for expected failures."""
        op = "build"
        out = self.output_dir(request)
        log = self._log.bind(target=request.target.value, output_dir=str(out))
        log.info("build.start", source_dir=str(payload.root), force=request.force)

        try:
            files = self._build_tree(payload, request.target, out, force=request.force)
        except AgentpackError as exc:
            log.info("build.failed", code=exc.code, error=exc.message)
            return ServiceResult.failure(
                op, exc, data={"target": request.target.value, "output_dir": str(out)}
            )

        log.info("build.complete", file_count=len(files))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "target": request.target.value,
                "label": get_layout(request.target).label,
                "output_dir": str(out),
                "files": files,
                "file_count": len(files),
            },
        )

    def _build_tree(
        self, payload: PayloadRoot, target: Target, out: Path, *, force: bool
    ) -> list[str]:
        layout = get_layout(target)

        kind = path_kind(out)
        if kind.exists and not force:
            msg = f"{out} already exists. Use --force to overwrite."
            raise AlreadyExistsError(msg, path=str(out), kind=kind.value)
        if kind.exists and payload.root.resolve().is_relative_to(out.resolve()):
            msg = f"Refusing to replace {out}: it contains the source directory {payload.root}"
            raise WriteError(msg, path=str(out))

        with staged_directory(out, replace=force) as stage:
            with trace_span("copy_rules"):
                for rel in layout.rules:
                    copy_document(payload.rules_path, stage / rel)
                    self._log.debug("build.copied", src=str(payload.rules_path), dest=rel)

            with trace_span("copy_commands") as span:
                for directory in layout.command_dirs:
                    for doc in payload.commands:
                        copy_document(doc.path, stage / directory / doc.name)
                if span is not None:
                    span.annotate("documents", len(payload.commands) * len(layout.command_dirs))

            with trace_span("render_descriptors"):
                self._render_descriptors(payload, target, stage)

            files = list_tree(stage)
        return files

    def _render_descriptors(self, payload: PayloadRoot, target: Target, stage: Path) -> None:
        layout = get_layout(target)
        if not layout.descriptors:
            return
        suffix = self._settings.source.command_suffix
        env = build_template_environment(target.value, source_root=payload.root)
        context: dict[str, Any] = {
            "layout": layout,
            "target": target.value,
            "suffix": suffix,
            "commands": payload.command_names,
            "instructions": layout.instruction_globs(suffix),
        }
        for descriptor in layout.descriptors:
            dest = stage / descriptor.path
            try:
                content = env.get_template(descriptor.template).render(**context)
            except TemplateError as exc:
                msg = f"Cannot render {descriptor.template} for {target.value}: {exc}"
                raise WriteError(msg, path=str(dest), template=descriptor.template) from exc
            write_text_file(dest, content)

    @traced
    def build_targets(
        self,
        payload: PayloadRoot,
        selector: str,
        *,
        out_dir: Path | None = None,
        force: bool = False,
    ) -> ServiceResult:
        """Build one target, or every target for the ``all`` selector.

        A single target returns its own ``build`` result.  ``all`` builds
        cursor, claude, then opencode, continuing past failures, and returns
        one ``build_all`` result that fails if any target failed.  With
        ``all``, *out_dir* is a parent holding one directory per target.
        """
        targets = expand_selector(selector)
        if selector != ALL_TARGETS:
            return self.build(payload, BuildRequest(targets[0], out_dir, force))

        outcomes: list[dict[str, Any]] = []
        failed: list[str] = []
        for target in targets:
            sub_out = out_dir / target.value if out_dir is not None else None
            result = self.build(payload, BuildRequest(target, sub_out, force))
            outcome: dict[str, Any] = {"ok": result.ok, **result.data}
            if result.error is not None:
                outcome["error"] = result.error.model_dump()
                failed.append(target.value)
            outcomes.append(outcome)

        data = {"targets": outcomes, "built": len(targets) - len(failed), "failed": failed}
        if not failed:
            return ServiceResult(ok=True, op="build_all", data=data)
        return ServiceResult(
            ok=False,
            op="build_all",
            data=data,
            error=ServiceError(
                code="BUILD_FAILED",
                message=f"{len(failed)} of {len(targets)} targets failed: {', '.join(failed)}",
                detail={"failed": failed},
            ),
        )

    def describe_layouts(self) -> ServiceResult:
        """Report every target's static layout (op ``targets``)."""
        suffix = self._settings.source.command_suffix
        items = []
        for target in expand_selector(ALL_TARGETS):
            layout = get_layout(target)
            items.append(
                {
                    "id": target.value,
                    "label": layout.label,
                    "default_output": str(self._settings.dist_dir / target.value),
                    "rules": list(layout.rules),
                    "command_dirs": list(layout.command_dirs),
                    "descriptors": [d.path for d in layout.descriptors],
                    "instructions": layout.instruction_globs(suffix),
                }
            )
        return ServiceResult(ok=True, op="targets", data={"items": items})
