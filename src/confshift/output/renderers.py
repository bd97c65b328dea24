"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Conversion ops bypass Rich entirely: their converted text is returned
verbatim so it can be piped or redirected into a file.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from confshift.output.console import create_console, get_output, style_for_service

if TYPE_CHECKING:
    from rich.console import Console

    from confshift.services.result import ServiceResult

# Ops whose ``data["output"]`` is the converted document.
RAW_OUTPUT_OPS = frozenset({"convert", "convert_config", "convert_env", "compose_to_spring"})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    if result.ok and result.op in RAW_OUTPUT_OPS:
        return str(result.data.get("output", ""))

    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Converted text is still printed; everything else shrinks to a status.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op in RAW_OUTPUT_OPS:
        return str(result.data.get("output", ""))
    if result.op.startswith("prefs_"):
        return f"{result.data.get('source_format')} -> {result.data.get('target_format')}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="cs.ok")
    op = Text(f"  {result.op}", style="cs.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cs.key")
    if key.endswith("_format"):
        v = Text(str(value), style="cs.format")
    elif key.endswith("file") or key == "path":
        v = Text(str(value), style="cs.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cs.error")
    op = Text(f"  {result.op}", style="cs.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Compose inspection ───────────────────────────────────────────────


def _service_table(kind: str, config: dict[str, Any]) -> Table:
    table = Table(
        title=kind,
        title_style=style_for_service(kind) or None,
        show_header=True,
        show_lines=False,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Setting", style="cs.key")
    table.add_column("Value")
    for key, value in config.items():
        table.add_row(Text(key), Text("" if value is None else str(value)))
    return table


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the extracted MySQL/Redis settings, one table per service."""
    found = False
    for kind in ("mysql", "redis"):
        config = result.data.get(kind)
        if config is None:
            if verbose:
                console.print(Text(f"{kind}: not found", style="dim"))
            continue
        found = True
        console.print(_service_table(kind, config))
    if not found:
        console.print("No MySQL or Redis service detected.")


# ── Preferences ──────────────────────────────────────────────────────


def _render_prefs(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the current source/target selection."""
    _status_line(console, result)
    _field(console, "source_format", result.data.get("source_format", ""))
    _field(console, "target_format", result.data.get("target_format", ""))
    if verbose and "state_file" in result.data:
        _field(console, "state_file", result.data["state_file"])


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "inspect_compose": _render_inspect,
    "prefs_show": _render_prefs,
    "prefs_set": _render_prefs,
    "prefs_swap": _render_prefs,
    "prefs_reset": _render_prefs,
}
