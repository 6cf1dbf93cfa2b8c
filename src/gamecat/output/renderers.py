"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from gamecat.output.console import create_console, get_output, style_for_code

if TYPE_CHECKING:
    from rich.console import Console

    from gamecat.services.result import ServiceResult

# Field doc keys shown in their own columns rather than under "Constraints".
_DOC_COLUMNS = frozenset({"path", "type", "required", "nullable", "description", "example"})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, max_issues: int = 50) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose, max_issues=max_issues)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "list_games":
        return "\n".join(g["game"] for g in result.data.get("games", []))
    if result.op == "validate_batch":
        return f"OK: {result.op} {result.data.get('passed', 0)}/{result.data.get('total', 0)}"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="gc.ok")
    op = Text(f"  {result.op}", style="gc.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="gc.key")
    if key in ("game", "type"):
        v = Text(str(value), style="gc.game")
    elif key in ("path", "source"):
        v = Text(str(value), style="gc.path")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _issue_table(issues: list[dict[str, Any]], *, max_issues: int) -> Table:
    """Build a Rich Table of wire-format issues, truncated to *max_issues*."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="gc.path", no_wrap=True)
    table.add_column("Code")
    table.add_column("Message")

    for issue in issues[:max_issues]:
        path = ".".join(str(p) for p in issue.get("path", [])) or "(record)"
        code = str(issue.get("code", ""))
        table.add_row(
            Text(path),
            Text(code, style=style_for_code(code)),
            Text(str(issue.get("message", ""))),
        )
    return table


def _print_issues(console: Console, issues: list[dict[str, Any]], *, max_issues: int) -> None:
    console.print(_issue_table(issues, max_issues=max_issues))
    hidden = len(issues) - max_issues
    if hidden > 0:
        console.print(Text(f"  ... and {hidden} more issue(s)", style="gc.warning"))


def _record_label(entry: dict[str, Any]) -> str:
    game = entry.get("game") or "?"
    kind = entry.get("type") or "?"
    return f"record {entry.get('index')} ({game}/{kind})"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    max_issues: int = 50,
) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="gc.error")
    op = Text(f"  {result.op}", style="gc.op")
    dash = Text(" — ")
    console.print(label, op, dash, Text(msg), sep="")
    if err is None:
        return

    detail = err.detail
    if detail.get("issues"):
        for key in ("game", "type"):
            if detail.get(key) is not None:
                _field(console, key, detail[key])
        _print_issues(console, detail["issues"], max_issues=max_issues)

    for entry in detail.get("results", []):
        if entry.get("success"):
            if verbose:
                console.print(Text(f"  {_record_label(entry)}: ok", style="gc.ok"))
            continue
        console.print()
        console.print(Text(f"  {_record_label(entry)}", style="gc.error"))
        _print_issues(console, entry.get("issues", []), max_issues=max_issues)

    if verbose:
        extra = {k: v for k, v in detail.items() if k not in ("issues", "results")}
        if extra:
            console.print(Text("  detail:", style="dim"))
            for k, v in extra.items():
                console.print(Text(f"    {k}: {v}"))
        _render_meta(console, result)


# ── Validation renderers ──────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single valid record."""
    _status_line(console, result)
    for key in ("game", "type"):
        if key in result.data:
            _field(console, key, result.data[key])
    record = result.data.get("record") or {}
    if "slug" in record:
        _field(console, "slug", record["slug"])
    if verbose:
        console.print()
        console.print(Text(_json.dumps(record, indent=2, ensure_ascii=False)))
        _render_meta(console, result)


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a batch in which every record passed."""
    _status_line(console, result)
    for key in ("total", "passed", "failed"):
        _field(console, key, result.data.get(key, 0))
    if verbose:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("#", justify="right")
        table.add_column("Game", style="gc.game")
        table.add_column("Type")
        table.add_column("Slug")
        for entry in result.data.get("results", []):
            table.add_row(
                str(entry.get("index")),
                str(entry.get("game", "")),
                str(entry.get("type", "")),
                str((entry.get("record") or {}).get("slug", "")),
            )
        console.print(table)
        _render_meta(console, result)


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_games(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the registered games with their discriminant values."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Game", style="gc.game", no_wrap=True)
    table.add_column("Discriminant", style="gc.key")
    table.add_column("Types")
    for game in result.data.get("games", []):
        table.add_row(game["game"], game["discriminant"], ", ".join(game["types"]))
    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} games")


def _constraint_summary(row: dict[str, Any]) -> str:
    parts: list[str] = []
    for key, value in row.items():
        if key in _DOC_COLUMNS:
            continue
        if isinstance(value, bool):
            parts.append(key)
        elif isinstance(value, (dict, list)):
            parts.append(f"{key}={_json.dumps(value, separators=(',', ':'))}")
        else:
            parts.append(f"{key}={value}")
    return ", ".join(parts)


def _render_variant(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the field tree and rules of one variant."""
    d = result.data
    console.print(Text(f"{d.get('game')} / {d.get('type')}", style="gc.game"))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Path", style="gc.path", no_wrap=True)
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Nullable")
    table.add_column("Constraints")
    if verbose:
        table.add_column("Description", style="dim")
    for row in d.get("fields", []):
        cells = [
            str(row.get("path", "")),
            str(row.get("type", "")),
            "yes" if row.get("required", True) else "no",
            "yes" if row.get("nullable") else "no",
            _constraint_summary(row),
        ]
        if verbose:
            cells.append(str(row.get("description", "")))
        table.add_row(*(Text(cell) for cell in cells))
    console.print(table)

    rules = d.get("rules", [])
    if rules:
        console.print()
        console.print(Text("Rules:", style="gc.key"))
        for rule in rules:
            console.print(Text(f"  - {rule['description']}"))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Validation
    "validate": _render_validate,
    "validate_batch": _render_batch,
    # Catalog
    "list_games": _render_games,
    "describe_variant": _render_variant,
}
