"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from verial.output.console import create_console, format_cents, get_output, style_for_tier

if TYPE_CHECKING:
    from rich.console import Console

    from verial.services.result import ServiceResult

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
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    # For ranked lists, return IDs only (in rank order)
    order = result.data.get("order")
    if order and isinstance(order, list):
        return "\n".join(str(item_id) for item_id in order)
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    if isinstance(item, dict):
        val = item.get("id")
        return str(val) if val is not None else ""
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "verial.ok"), (f"  {result.op}", "verial.op")))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    if not style:
        if key == "id" or key.endswith("_id"):
            style = "verial.id"
        elif key in ("path", "output"):
            style = "verial.path"
    console.print(Text.assemble((f"  {key}: ", "verial.key"), (str(value), style)))


def _money(console: Console, key: str, cents: Any) -> None:
    if isinstance(cents, int):
        _field(console, key, f"{format_cents(cents)}  ({cents})", style="verial.money")
    else:
        _field(console, key, cents)


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
    """Render a span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text.assemble(
        ("ERROR", "verial.error"),
        (f"  {result.op}", "verial.op"),
        (f" [{err.code}]" if err else "", "verial.error"),
        ": ",
        msg,
    )
    console.print(line)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Booking renderers ─────────────────────────────────────────────────


def _render_transition(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "lifecycle", d.get("lifecycle", ""))
    _field(console, "transition", f"{d.get('current')} -> {d.get('target')}", style="verial.ok")
    if verbose:
        _render_meta(console, result)


def _render_transitions(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "lifecycle", d.get("lifecycle", ""))
    _field(console, "status", d.get("status", ""), style="verial.title")
    successors = d.get("transitions") or []
    _field(console, "next", ", ".join(successors) if successors else "(terminal)")
    if verbose:
        _render_meta(console, result)


# ── Money renderers ───────────────────────────────────────────────────

_MONEY_KEYS = frozenset(
    {
        "gross_amount",
        "platform_fee_amount",
        "gst_amount",
        "net_amount",
        "price",
        "refunded_amount",
        "total_paid",
        "service_price",
        "service_fee",
        "total",
        "amount_total",
        "provider_amount",
        "total_platform_fee",
    }
)


def _render_money(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render fee/earnings breakdowns with cents shown as dollars."""
    _status_line(console, result)
    for key, value in result.data.items():
        if key in _MONEY_KEYS:
            _money(console, key, value)
        elif key.endswith("_bps") and isinstance(value, int):
            _field(console, key, f"{value} bps ({value / 100:g}%)")
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Ranking renderers ─────────────────────────────────────────────────


def _render_listings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    items: list[dict[str, Any]] = d.get("items", [])
    _status_line(console, result)
    if d.get("query"):
        _field(console, "query", d["query"])
    _field(console, "count", d.get("count", len(items)))
    if not items:
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("ID", style="verial.id", no_wrap=True)
    table.add_column("Title", style="verial.title")
    table.add_column("Tier", justify="right")
    table.add_column("Badge")
    table.add_column("Score", style="verial.score", justify="right")
    for item in items:
        tier = int(item.get("tier", 0))
        table.add_row(
            str(item.get("rank", "")),
            str(item.get("id", "")),
            str(item.get("title", "")),
            Text(str(tier), style=style_for_tier(tier)),
            str(item.get("badge") or ""),
            f"{float(item.get('score', 0.0)):.4f}",
        )
    console.print()
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_quotes(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    items: list[dict[str, Any]] = d.get("items", [])
    _status_line(console, result)
    _field(console, "count", d.get("count", len(items)))
    if not items:
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="verial.id", no_wrap=True)
    table.add_column("Provider")
    table.add_column("Amount", style="verial.money", justify="right")
    table.add_column("Rating", justify="right")
    table.add_column("Response (h)", justify="right")
    table.add_column("Score", style="verial.score", justify="right")
    table.add_column("Badges")
    for item in items:
        hours = item.get("response_speed_hours")
        table.add_row(
            str(item.get("id", "")),
            str(item.get("provider_id") or ""),
            format_cents(int(item.get("amount_total", 0))),
            f"{float(item.get('rating', 0.0)):.1f}",
            "" if hours is None else f"{float(hours):g}",
            f"{float(item.get('score', 0.0)):.4f}",
            ", ".join(item.get("badges", [])),
        )
    console.print()
    console.print(table)
    if verbose:
        _render_meta(console, result)


# ── Regions renderer ──────────────────────────────────────────────────


def _render_regions(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "output", d.get("output", ""))
    for key, value in (d.get("stats") or {}).items():
        _field(console, key, value)
    _field(console, "rowsSkippedInvalid", d.get("rowsSkippedInvalid", 0))

    counts: dict[str, int] = d.get("counts") or {}
    if counts:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Region", style="verial.title")
        table.add_column("Suburbs", justify="right")
        for region, count in counts.items():
            table.add_row(region, str(count))
        console.print()
        console.print(table)

    if verbose:
        assigned = d.get("assignedBy") or {}
        if assigned:
            console.print()
            _field(console, "assignedBy", ", ".join(f"{k}={v}" for k, v in assigned.items()))
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    # Booking
    "check_transition": _render_transition,
    "list_transitions": _render_transitions,
    # Earnings
    "calculate_earnings": _render_money,
    "booking_totals": _render_money,
    "customer_fee": _render_money,
    "job_charge": _render_money,
    # Ranking
    "rank_listings": _render_listings,
    "rank_quotes": _render_quotes,
    # Regions
    "generate_regions": _render_regions,
}
