"""Command-line interface for calface.

Lays out an event file the way the watch face would and prints the
resulting bands.
"""

from __future__ import annotations

import argparse
from datetime import UTC, datetime
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from calface.core.calendar.source import load_events
from calface.core.config.loader import configure_logging, load_app_config
from calface.core.config.models import AppConfig
from calface.core.dial.geometry import arc_span, ring_radii
from calface.core.layout.greedy import GreedyLayoutEngine
from calface.core.layout.models import LayoutResult, RawEvent
from calface.core.layout.orchestrator import LayoutOrchestrator
from calface.core.layout.window import clip_to_window, display_order, window_for
from calface.core.pipeline.runner import LayoutPipeline, build_orchestrator
from calface.core.timing.clock import Clock, FixedClock, SystemClock
from calface.core.timing.constants import MINUTE_MS

console = Console()
logger = logging.getLogger(__name__)

ENGINES = ("auto", "greedy", "constraint")


def build_clock(now: str | None, utc_offset_min: int | None) -> Clock:
    """Clock for the run: the system clock, or a fixed instant.

    A timezone-aware ``now`` supplies its own offset unless
    ``utc_offset_min`` overrides it; a naive one is taken as UTC.
    """
    if now is None:
        if utc_offset_min is not None:
            reading = SystemClock().read()
            return FixedClock(reading.utc_ms, utc_offset_min * MINUTE_MS)
        return SystemClock()

    instant = datetime.fromisoformat(now)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)

    if utc_offset_min is None:
        offset = instant.utcoffset()
        offset_ms = int(offset.total_seconds() * 1000) if offset is not None else 0
    else:
        offset_ms = utc_offset_min * MINUTE_MS

    return FixedClock(int(instant.timestamp() * 1000), offset_ms)


def compute_layout(events: list[RawEvent], clock: Clock, config: AppConfig, engine: str) -> LayoutResult | None:
    """Lay out ``events`` with the chosen engine.

    ``auto`` runs the full refresh pipeline (constraint layout with
    fallback). ``greedy`` and ``constraint`` run a single engine with no
    fallback.

    Returns:
        The layout, or None if it could not be produced.
    """
    reading = clock.read()

    if engine == "auto":
        result = LayoutPipeline(config).run(events, reading)
        if not result.success:
            console.print(f"[red]ERROR: {result.error}[/red]")
            return None
        return result.output

    window = window_for(reading)
    clipped = clip_to_window(display_order(events), window)

    if engine == "greedy":
        layout = GreedyLayoutEngine().layout(clipped)
    else:
        orchestrator = build_orchestrator(config)
        attempt = orchestrator.constraint_engine.solve(clipped)
        if not attempt.success or attempt.output is None:
            console.print(f"[red]ERROR: constraint layout failed ({attempt.error_type}): {attempt.error}[/red]")
            return None
        layout = attempt.output

    LayoutOrchestrator.sanity_check(layout, f"{engine} layout")
    return layout.model_copy(update={"window": window})


def _format_local(local_ms: int) -> str:
    return datetime.fromtimestamp(local_ms / 1000, tz=UTC).strftime("%H:%M")


def render_table(layout: LayoutResult, config: AppConfig) -> Table:
    """Build a rich table describing every band."""
    table = Table(title=f"Layout ({layout.engine.value}, max_level={layout.max_level})")
    table.add_column("#", justify="right")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Color")
    table.add_column("Levels", justify="right")
    table.add_column("Arc", justify="right")
    table.add_column("Radii", justify="right")

    for index, event in enumerate(layout.events):
        arc_start, arc_end = arc_span(event)
        outer, inner = ring_radii(event, layout.max_level, config.dial)
        table.add_row(
            str(index),
            _format_local(event.start_ms),
            _format_local(event.end_ms),
            f"#{event.color & 0xFFFFFFFF:08X}",
            f"[{event.min_level}, {event.max_level}]",
            f"{arc_start:.2f} → {arc_end:.2f}",
            f"{outer:.3f} → {inner:.3f}",
        )
    return table


def run_layout(args: argparse.Namespace) -> int:
    """Lay out an event file and print the result."""
    try:
        config = load_app_config(args.config)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return 1
    configure_logging(config)

    events_path = Path(args.events).resolve()
    if not events_path.exists():
        console.print(f"[red]ERROR: Event file not found: {events_path}[/red]")
        return 1

    try:
        events = load_events(events_path)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load events: {e}[/red]")
        return 1

    try:
        clock = build_clock(args.now, args.utc_offset)
    except ValueError as e:
        console.print(f"[red]ERROR: Invalid --now value: {e}[/red]")
        return 1

    layout = compute_layout(events, clock, config, args.engine)
    if layout is None:
        return 1

    if args.json:
        console.print_json(layout.model_dump_json())
        return 0

    if layout.window is not None:
        console.print(
            f"[bold]Window:[/bold] {_format_local(layout.window.local_start_ms)} "
            f"+12h ({len(layout.events)} of {len(events)} events visible)"
        )
    if not layout.events:
        console.print("[yellow]No events in the display window[/yellow]")
        return 0

    console.print(render_table(layout, config))
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="calface",
        description="calface - calendar wedge layout for a 12-hour watch dial",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    layout = sub.add_parser("layout", help="Lay out an event file")
    layout.add_argument("events", help="Path to event file (JSON or YAML)")
    layout.add_argument("--now", default=None, help="ISO-8601 instant to lay out at (default: now)")
    layout.add_argument(
        "--utc-offset",
        type=int,
        default=None,
        help="Local UTC offset in minutes (default: from --now, or the system zone)",
    )
    layout.add_argument(
        "--engine",
        choices=ENGINES,
        default="auto",
        help="Layout engine (default: auto, constraint with greedy fallback)",
    )
    layout.add_argument(
        "--config",
        default=None,
        help="Path to app config (default: calface.yaml if present)",
    )
    layout.add_argument("--json", action="store_true", help="Print the layout as JSON")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "layout":
        sys.exit(run_layout(args))


if __name__ == "__main__":
    main()
