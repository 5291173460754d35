#!/usr/bin/env python3
"""
Metrics time window CLI
Pick time scales, map ranges onto presets and check them against storage retention
"""

import argparse
import asyncio
import datetime
import logging
import sys

import asyncpg
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from timewindow.adjust import AdjustmentReason, adjust_time_scale
from timewindow.catalog import AVAILABLE_TIME_SCALES
from timewindow.matching import find_closest_time_scale
from timewindow.models import TimeScale, TimeWindow
from timewindow.retention import StorageTTLs, connect, fetch_storage_ttls
from timewindow.settings import load_settings
from timewindow.time_utils import format_duration, parse_duration, to_utc, utcnow


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands"""
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="""
╭─────────────────────────────────────────────────────────────────╮
│ Metrics Time Window                                             │
│ Time scale presets, range matching and retention checks         │
╰─────────────────────────────────────────────────────────────────╯
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--db-host", default=settings.db["host"], help="Cluster host")
    parser.add_argument("--db-port", type=int, default=settings.db["port"], help="Cluster port")
    parser.add_argument("--db-name", default=settings.db["database"], help="Database name")
    parser.add_argument("--db-user", default=settings.db["user"], help="Database user")
    parser.add_argument("--db-password", default=settings.db["password"], help="Database password")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # scales
    subparsers.add_parser("scales", help="List the preset time scales")

    # match
    match_parser = subparsers.add_parser("match", help="Find the preset closest to a window length")
    match_parser.add_argument("seconds", type=float, help="Window length in seconds")
    match_parser.add_argument("--start", type=_timestamp, help="Window start (ISO format)")

    # adjust
    adjust_parser = subparsers.add_parser(
        "adjust", help="Adjust a scale's sample size to the storage retention"
    )
    adjust_parser.add_argument("scale", help="Preset label, e.g. 'Past Week'")
    adjust_parser.add_argument("--start", type=_timestamp, help="Range start (ISO format)")
    adjust_parser.add_argument("--end", type=_timestamp, help="Range end (default: now)")
    adjust_parser.add_argument(
        "--ttl-10s",
        type=parse_duration,
        default=settings.resolution_10s_ttl,
        help=f"10s resolution retention (default: {format_duration(settings.resolution_10s_ttl)})",
    )
    adjust_parser.add_argument(
        "--ttl-30m",
        type=parse_duration,
        default=settings.resolution_30m_ttl,
        help=f"30m resolution retention (default: {format_duration(settings.resolution_30m_ttl)})",
    )

    # ttls
    subparsers.add_parser("ttls", help="Fetch the storage retention from the cluster")

    return parser


def _timestamp(text: str) -> datetime.datetime:
    return to_utc(datetime.datetime.fromisoformat(text))


def _scale_table(*scales: TimeScale) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("key")
    table.add_column("window", justify="right")
    table.add_column("valid", justify="right")
    table.add_column("sample", justify="right")
    for scale in scales:
        table.add_row(
            scale.key or "",
            format_duration(scale.window_size),
            format_duration(scale.window_valid) if scale.window_valid else "-",
            format_duration(scale.sample_size),
        )
    return table


def handle_scales_command(console: Console) -> None:
    console.print(Panel("[bold cyan]TIME SCALES[/bold cyan]", expand=False))
    console.print(_scale_table(*AVAILABLE_TIME_SCALES))


def handle_match_command(args, console: Console) -> None:
    scale = find_closest_time_scale(
        args.seconds, args.start.timestamp() if args.start else None
    )
    console.print(_scale_table(scale))


def handle_adjust_command(args, console: Console) -> None:
    scale = AVAILABLE_TIME_SCALES.lookup(args.scale)
    if scale is None:
        labels = ", ".join(AVAILABLE_TIME_SCALES.labels())
        raise ValueError(f"Unknown scale {args.scale!r}, choose one of: {labels}")

    now = utcnow()
    if args.start:
        window = TimeWindow(args.start, args.end or now)
    else:
        window = scale.window_at(args.end or now)

    adjusted = adjust_time_scale(scale, window, args.ttl_10s, args.ttl_30m, now=now)
    console.print(f"Window: {window.start:%Y-%m-%d %H:%M} - {window.end:%Y-%m-%d %H:%M} UTC")
    console.print(_scale_table(adjusted.time_scale))
    if adjusted.adjustment_reason == AdjustmentReason.DELETED_DATA_PERIOD:
        console.print(
            f"[red]⚠[/red] Data older than {format_duration(args.ttl_30m)} has been deleted"
        )
    elif adjusted.adjustment_reason == AdjustmentReason.LOW_RESOLUTION_PERIOD:
        console.print(
            f"[yellow]⚠[/yellow] Data older than {format_duration(args.ttl_10s)} "
            "is only available at 30m resolution"
        )
    else:
        console.print("[green]✓[/green] Full resolution available")


async def _fetch_ttls(args) -> StorageTTLs:
    connection = await connect(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )
    try:
        return await fetch_storage_ttls(connection)
    finally:
        await connection.close()


def handle_ttls_command(args, console: Console) -> None:
    ttls = asyncio.run(_fetch_ttls(args))
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("resolution")
    table.add_column("ttl", justify="right")
    table.add_row("10s", format_duration(ttls.resolution_10s))
    table.add_row("30m", format_duration(ttls.resolution_30m))
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    try:
        parser = create_parser()
    except ValueError as e:
        Console().print(f"[red]Error:[/red] Invalid settings file: {escape(str(e))}")
        sys.exit(1)
    args = parser.parse_args(argv)

    # If no command provided, show help
    if not args.command:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    console = Console()

    try:
        if args.command == "scales":
            handle_scales_command(console)
        elif args.command == "match":
            handle_match_command(args, console)
        elif args.command == "adjust":
            handle_adjust_command(args, console)
        elif args.command == "ttls":
            handle_ttls_command(args, console)
        else:
            parser.print_help()
            sys.exit(1)
    except (ValueError, OSError, asyncpg.PostgresError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
