"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from poolctl.output.console import create_console, get_output, style_for_sku

if TYPE_CHECKING:
    from rich.console import Console

    from poolctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    # For list results, return addresses only
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["address"]) for item in items if item.get("address"))

    if result.data.get("id"):
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="pool.ok")
    op = Text(f"  {result.op}", style="pool.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pool.key")
    if key == "id":
        v = Text(str(value), style="pool.id")
    elif key == "address":
        v = Text(str(value), style="pool.address")
    elif key == "sku":
        v = Text(str(value), style=style_for_sku(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _format_size(data: dict[str, Any]) -> str:
    gb = data.get("max_size_gb")
    size_bytes = data.get("max_size_bytes")
    if gb is None and size_bytes is None:
        return "(service default)"
    if size_bytes is None:
        return f"{gb:g} GB"
    if gb is None:
        return f"{size_bytes} bytes"
    return f"{gb:g} GB ({size_bytes} bytes)"


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    # Thresholds sized for Azure long-running operations.
    if duration > 60_000:
        style = "bold red"
    elif duration > 5_000:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>10.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations")
    if annotations:
        line += f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pool.error")
    op = Text(f"  {result.op}", style="pool.op")
    code = Text(f" [{err.code}]" if err else "", style="pool.key")
    console.print(label, op, code, Text(" - "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)
    if verbose:
        _render_meta(console, result)


# ── Operation renderers ───────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "address", d.get("address", ""))
    _field(console, "sku", d.get("sku", ""))
    _field(console, "billing_model", d.get("billing_model", ""))
    _field(console, "max_size", _format_size(d))
    if verbose:
        _field(console, "tracked", d.get("tracked", False))
        _render_meta(console, result)


def _render_pool(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render apply/show/import results: one pool's state."""
    d = result.data
    _status_line(console, result)
    _field(console, "address", d.get("address", ""))

    if d.get("exists") is False:
        _field(console, "id", d.get("id", ""))
        _field(console, "exists", False)
        return

    if "created" in d:
        _field(console, "action", "created" if d["created"] else "updated")
    _field(console, "id", d.get("id", ""))
    _field(console, "location", d.get("location", ""))

    sku = d.get("sku") or {}
    if sku:
        _field(console, "sku", sku.get("name", ""))
        _field(console, "tier", sku.get("tier", ""))
        if sku.get("family"):
            _field(console, "family", sku["family"])
        _field(console, "capacity", sku.get("capacity", ""))

    per_db = d.get("per_database_settings") or {}
    if per_db:
        _field(
            console,
            "per_database",
            f"{per_db.get('min_capacity', 0):g}..{per_db.get('max_capacity', 0):g}",
        )
    _field(console, "max_size", _format_size(d))

    if d.get("zone_redundant") is not None:
        _field(console, "zone_redundant", d["zone_redundant"])
    tags = d.get("tags") or {}
    if tags:
        _field(console, "tags", ", ".join(f"{k}={v}" for k, v in sorted(tags.items())))

    if verbose:
        props = d.get("elastic_pool_properties") or {}
        for key in ("state", "creation_date", "license_type"):
            if props.get(key):
                _field(console, key, props[key])
        _render_meta(console, result)


def _render_destroy(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "address", d.get("address", ""))
    if d.get("id"):
        _field(console, "id", d["id"])
    _field(console, "deleted", d.get("deleted", False))
    if verbose:
        _render_meta(console, result)


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Address", style="pool.address", no_wrap=True)
    table.add_column("SKU")
    table.add_column("Tier")
    table.add_column("Capacity", justify="right")
    table.add_column("Max Size (GB)", justify="right")
    table.add_column("Location")
    if verbose:
        table.add_column("ID", style="pool.id")

    for item in items:
        sku = str(item.get("sku", ""))
        max_size = item.get("max_size_gb")
        row: list[Any] = [
            str(item.get("address", "")),
            Text(sku, style=style_for_sku(sku)),
            str(item.get("tier", "")),
            str(item.get("capacity", "") if item.get("capacity") is not None else ""),
            f"{max_size:g}" if isinstance(max_size, (int, float)) else "",
            str(item.get("location", "")),
        ]
        if verbose:
            row.append(str(item.get("id", "")))
        table.add_row(*row)

    console.print(table)
    count = result.data.get("count", len(items))
    console.print(f"\n{count} pool{'' if count == 1 else 's'} tracked")
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "validate": _render_validate,
    "apply": _render_pool,
    "show": _render_pool,
    "import": _render_pool,
    "destroy": _render_destroy,
    "list": _render_list,
}
