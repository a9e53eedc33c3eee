"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from agentpack.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from agentpack.services.result import ServiceResult

Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
    else:
        renderer = _ERROR_RENDERERS.get(result.op, _render_error)
    renderer(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: paths or ids, one per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if result.op == "build":
        return str(data["output_dir"])
    if result.op == "build_all":
        return "\n".join(str(t["output_dir"]) for t in data.get("targets", []))
    if result.op == "locate":
        return str(data["source_dir"])
    items = data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pack.ok"), Text(f"  {result.op}", style="pack.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pack.key")
    if key.endswith("_dir") or key == "path":
        v = Text(str(value), style="pack.path")
    elif key == "target":
        v = Text(str(value), style="pack.target")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    # Annotations carry filesystem paths, so build Text rather than markup.
    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 2)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="pack.error"),
        Text(f"  {result.op}", style="pack.op"),
        Text(f" — {msg}"),
        sep="",
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose:
        _render_meta(console, result)


# ── Build renderers ───────────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(
        Text("OK", style="pack.ok"),
        Text(f"  Built {data.get('label', data['target'])} tree at ", style="pack.op"),
        Text(str(data["output_dir"]), style="pack.path"),
        sep="",
    )
    _field(console, "target", data["target"])
    _field(console, "file_count", data["file_count"])
    if verbose:
        for rel in data.get("files", []):
            console.print(Text(f"    {rel}", style="pack.path"))
        _render_meta(console, result)


def _render_build_all(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(box=None, pad_edge=False, show_header=True, header_style="pack.key")
    table.add_column("Target")
    table.add_column("Status")
    table.add_column("Output")
    for outcome in result.data.get("targets", []):
        if outcome.get("ok"):
            status = Text("OK", style="pack.ok")
            detail = Text(str(outcome.get("output_dir", "")), style="pack.path")
        else:
            status = Text("ERROR", style="pack.error")
            detail = Text(outcome.get("error", {}).get("message", "Unknown error"))
        table.add_row(Text(str(outcome.get("target", "?")), style="pack.target"), status, detail)

    if result.ok:
        _status_line(console, result)
    console.print(table)
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    elif verbose:
        _render_meta(console, result)


# ── Source renderers ──────────────────────────────────────────────────


def _render_locate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "source_dir", data["source_dir"])
    _field(console, "rules_file", data["rules_file"])
    _field(console, "command_count", data["command_count"])
    for name in data.get("commands", []):
        console.print(Text(f"    {name}"))

    candidates = data.get("candidates")
    if verbose and candidates:
        console.print(Text("  candidates:", style="pack.key"))
        for cand in candidates:
            mark = Text("valid", style="pack.valid") if cand["valid"] else Text(
                "-", style="pack.invalid"
            )
            console.print(f"    {cand['priority']}. ", Text(cand["path"]), "  ", mark, sep="")
    if verbose:
        _render_meta(console, result)


def _render_targets(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(box=None, pad_edge=False, header_style="pack.key")
    table.add_column("Target", style="pack.target")
    table.add_column("Rules")
    table.add_column("Commands")
    table.add_column("Descriptors")
    if verbose:
        table.add_column("Default output", style="pack.path")

    for item in result.data.get("items", []):
        row = [
            Text(item["id"]),
            Text(", ".join(item["rules"])),
            Text(", ".join(f"{d}/" for d in item["command_dirs"])),
            Text(", ".join(item["descriptors"]) or "-"),
        ]
        if verbose:
            row.append(Text(item["default_output"]))
        table.add_row(*row)
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Renderer] = {
    "build": _render_build,
    "build_all": _render_build_all,
    "locate": _render_locate,
    "targets": _render_targets,
}

_ERROR_RENDERERS: dict[str, Renderer] = {
    "build_all": _render_build_all,
}
