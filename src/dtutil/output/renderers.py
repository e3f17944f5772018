"""Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from dtutil.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from dtutil.services.result import ServiceResult

# Key holding the headline value of each operation (used by --quiet).
PRIMARY_KEYS: dict[str, str] = {
    "format": "text",
    "parse": "value",
    "diff": "value",
    "compose": "value",
    "decompose": "date",
}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    if result.ok:
        _render_fields(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: just the headline value."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    key = PRIMARY_KEYS.get(result.op)
    if key is not None and key in result.data:
        return str(result.data[key])
    return f"OK: {result.op}"


def render_warnings(result: ServiceResult) -> str:
    """Render one ``WARNING: ...`` line per result warning, for stderr."""
    console = create_console()
    for warning in result.warnings:
        console.print(Text.assemble(("WARNING", "dt.warning"), f": {warning}"))
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dt.key")
    style = "dt.number" if isinstance(value, int) and not isinstance(value, bool) else "dt.value"
    console.print(Text.assemble(k, Text(str(value), style=style)))


def _render_fields(result: ServiceResult, console: Console) -> None:
    """Status line followed by every data field."""
    console.print(Text("OK", style="dt.ok"), Text(f"  {result.op}", style="dt.op"), end="")
    console.print()
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dt.error")
    op = Text(f"  {result.op}", style="dt.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
