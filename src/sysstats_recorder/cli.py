"""CLI interface for sysstats_recorder."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import SysStatsConfig, load_config, validate_config

logger = logging.getLogger(__name__)


def _resolve_config(args: argparse.Namespace) -> SysStatsConfig:
    """Load the config file and apply command-line overrides."""
    cfg = load_config(args.config, validate=False)
    if getattr(args, "filename", None) is not None:
        cfg.recorder.output_prefix = args.filename
    if getattr(args, "interval", None) is not None:
        cfg.recorder.interval_ms = args.interval
    validate_config(cfg)
    return cfg


def _cmd_record(args: argparse.Namespace) -> None:
    """Record system metrics until interrupted."""
    try:
        cfg = _resolve_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)

    from .exporter.base import SinkOpenError
    from .lifecycle import RecorderService

    service = RecorderService(cfg.recorder)
    print(
        f"sysstats-recorder running (prefix={cfg.recorder.output_prefix}, "
        f"interval={cfg.recorder.interval_ms}ms)"
    )
    print("Press Ctrl+C to stop.\n")
    try:
        service.run()
    except SinkOpenError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    recorder = service.recorder
    print(f"\nRecording stopped. Output written to {getattr(recorder, 'path', '')}")


def _cmd_probe(_args: argparse.Namespace) -> None:
    """Print one snapshot of the metrics source."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from .collector.system import SystemMetricsSource

    source = SystemMetricsSource()
    table = Table(title="System snapshot", show_lines=False)
    table.add_column("Quantity", style="green", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_column("Unit", style="cyan")

    try:
        for idx, cpu in enumerate(source.get_cpu_identities()):
            table.add_row(f"CPU {idx} Model Name", escape(cpu.model_name), "-")
            table.add_row(f"CPU {idx} Speed", f"{cpu.mhz:.2f}", "MHz")
    except Exception:
        logger.exception("CPU identity query failed")

    try:
        host = source.get_host_identity()
        table.add_row("Hostname", escape(host.hostname), "-")
        table.add_row("Uptime", str(host.uptime_seconds), "s")
        table.add_row("OS", host.os, "-")
        table.add_row("Platform", host.platform, "-")
    except Exception:
        logger.exception("Host identity query failed")

    try:
        mem = source.get_memory_stats()
        table.add_row("Total memory", str(mem.total_bytes), "Bytes")
        table.add_row("Available memory", str(mem.available_bytes), "Bytes")
        table.add_row("Percentage used memory", f"{mem.used_percent:.2f}", "%")
    except Exception:
        logger.exception("Memory query failed")

    Console().print(table)


def _cmd_version(_args: argparse.Namespace) -> None:
    print(f"sysstats-recorder {__version__}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysstats-recorder",
        description="Periodically record host system metrics to a CSV file",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to sysstats_recorder.yaml")
    sub = parser.add_subparsers(dest="command")

    # record
    record_p = sub.add_parser("record", help="Record metrics until interrupted")
    record_p.add_argument(
        "--filename", "-f", default=None,
        help="Filename prefix to store data to (timestamp and .csv get appended automatically)",
    )
    record_p.add_argument(
        "--interval", "-t", type=int, default=None,
        help="Time interval for measurements in ms",
    )
    record_p.set_defaults(func=_cmd_record)

    # probe
    probe_p = sub.add_parser("probe", help="Print a single snapshot of system metrics")
    probe_p.set_defaults(func=_cmd_probe)

    # version
    ver_p = sub.add_parser("version", help="Print version")
    ver_p.set_defaults(func=_cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the sysstats-recorder CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        level = load_config(args.config, validate=False).logging.level
    except ValueError as exc:
        parser.error(str(exc))
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
