"""
Command line interface for promboard.

Usage:
    promboard <command> [args]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Sequence

import structlog
from rich.console import Console
from rich.table import Table

from promboard.config.settings import get_settings
from promboard.core.errors import ConfigurationError, main_with_error_handling
from promboard.dashboards.importer import import_board
from promboard.dashboards.renderer import render_nodes_board
from promboard.logging import bind_context, configure_logging
from promboard.metrics.models import TimeWindow
from promboard.metrics.step import compute_step, format_step
from promboard.providers.prometheus import PrometheusClient

logger = structlog.get_logger()
console = Console()

_SINCE_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days", "w": "weeks"}


def parse_timestamp(value: str) -> datetime:
    """ISO-8601 timestamp or unix seconds; naive values are taken as UTC."""
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as exc:
            raise ConfigurationError("Timestamp out of range", details={"value": value}) from exc
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ConfigurationError("Invalid timestamp", details={"value": value}) from exc
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def parse_since(value: str) -> timedelta:
    """Parse a lookback like ``15m`` or ``7d``."""
    unit = _SINCE_UNITS.get(value[-1:])
    amount = value[:-1]
    if unit is None or not amount.isdigit():
        raise ConfigurationError("Invalid duration", details={"value": value})
    return timedelta(**{unit: int(amount)})


@main_with_error_handling()
def step_command(start: str, end: str) -> int:
    window = TimeWindow(parse_timestamp(start), parse_timestamp(end))
    step = compute_step(window.start, window.end)
    console.print(f"window={window.duration} step={format_step(step)}")
    return 0


@main_with_error_handling()
def instances_command() -> int:
    async def _run() -> list[str]:
        client = await PrometheusClient.from_settings()
        return await client.discover_instances()

    instances = asyncio.run(_run())
    if not instances:
        console.print("No instances discovered")
    for instance in instances:
        console.print(instance)
    return 0


@main_with_error_handling()
def board_command(output: str | None = None, summary: bool = False) -> int:
    async def _run() -> tuple[list[str], bytes]:
        client = await PrometheusClient.from_settings()
        instances = await client.discover_instances()
        return instances, render_nodes_board(instances)

    instances, data = asyncio.run(_run())

    # Import validates the rendered document before it is written anywhere
    board = import_board(data)
    log = bind_context(command="board", board=board.uri)
    log.info("board_synthesized", instances=len(instances), panels=len(board.panels))

    if summary:
        table = Table(title=f"{board.title} ({board.uri})")
        table.add_column("ID", justify="right")
        table.add_column("Type")
        table.add_column("Title")
        table.add_column("Queries", justify="right")
        for panel in board.panels:
            table.add_row(str(panel.id), panel.type or "", panel.title, str(len(panel.queries)))
        console.print(table)
        console.print(f"{len(instances)} instance(s), {len(board.panels)} panel(s)")
    elif output:
        Path(output).write_bytes(data)
        console.print(f"Wrote {board.title} to {output}")
    else:
        sys.stdout.write(data.decode("utf-8"))
    return 0


@main_with_error_handling()
def query_command(query: str) -> int:
    async def _run() -> bytes:
        client = await PrometheusClient.from_settings()
        return await client.query({"query": query})

    sys.stdout.write(asyncio.run(_run()).decode("utf-8"))
    return 0


@main_with_error_handling()
def query_range_command(query: str, since: str) -> int:
    window = TimeWindow.trailing(parse_since(since))
    step = window.step()

    async def _run() -> bytes:
        client = await PrometheusClient.from_settings()
        return await client.query_range(
            {
                "query": query,
                "start": window.start.timestamp(),
                "end": window.end.timestamp(),
                "step": format_step(step),
            }
        )

    logger.debug("query_range_step", since=since, step=format_step(step))
    sys.stdout.write(asyncio.run(_run()).decode("utf-8"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="promboard", description="Prometheus query broker")
    parser.add_argument("--log-level", default=None, help="Log level (default: PROMBOARD_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    step_parser = subparsers.add_parser("step", help="Show the range query step for a window")
    step_parser.add_argument("start", help="Window start (ISO-8601 or unix seconds)")
    step_parser.add_argument("end", help="Window end (ISO-8601 or unix seconds)")

    subparsers.add_parser("instances", help="List node-exporter instances")

    board_parser = subparsers.add_parser("board", help="Render the node overview dashboard")
    board_parser.add_argument("--output", "-o", help="Write dashboard JSON to this file")
    board_parser.add_argument("--summary", action="store_true", help="Print a panel table instead of JSON")

    query_parser = subparsers.add_parser("query", help="Instant query through the proxy")
    query_parser.add_argument("query", help="PromQL expression")

    range_parser = subparsers.add_parser("query-range", help="Range query through the proxy")
    range_parser.add_argument("query", help="PromQL expression")
    range_parser.add_argument("--since", default="1h", help="Lookback, e.g. 15m, 6h, 7d (default: 1h)")

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)

    if args.command == "step":
        sys.exit(step_command(args.start, args.end))
    if args.command == "instances":
        sys.exit(instances_command())
    if args.command == "board":
        sys.exit(board_command(output=args.output, summary=args.summary))
    if args.command == "query":
        sys.exit(query_command(args.query))
    if args.command == "query-range":
        sys.exit(query_range_command(args.query, args.since))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
