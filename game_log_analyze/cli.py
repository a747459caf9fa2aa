#!/usr/bin/env python3
"""
Command-line interface for the live combat log tracker.
"""

import time
import click
import logging
from typing import Callable, Optional
from rich.console import Console

from .analyzer.displays import DisplayBuilder
from .analyzer.live import LiveDamageAnalyzer
from .config.loader import load_settings
from .config.settings import TRIM_POLICIES, TrackerSettings
from .parser.tokenizer import LineTokenizer
from .streaming.source import LogTailer


# Set up rich console for pretty output
console = Console()

logger = logging.getLogger(__name__)


def run_tracker(
    tailer: LogTailer,
    analyzer: LiveDamageAnalyzer,
    settings: TrackerSettings,
    max_ticks: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    monotonic: Callable[[], float] = time.monotonic,
) -> int:
    """
    Poll the log and redraw the statistics until interrupted.

    Args:
        tailer: Source of events
        analyzer: Statistics core fed once per tick
        settings: Loop timing configuration
        max_ticks: Stop after this many ticks (runs forever if None)
        sleep: Called with the poll interval when a tick read nothing
        monotonic: Clock used to throttle redraws

    Returns:
        Number of ticks run
    """
    last_draw = None
    ticks = 0

    while max_ticks is None or ticks < max_ticks:
        event = tailer.poll()
        analyzer.tick(event)
        ticks += 1

        now = monotonic()
        if last_draw is None or now - last_draw > settings.refresh_interval:
            console.clear()
            console.print(DisplayBuilder.create_tracker_view(analyzer.snapshot()))
            last_draw = now

        if event is None and settings.poll_interval > 0:
            sleep(settings.poll_interval)

    return ticks


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """Game Log Analyzer - live damage statistics from a combat log"""
    try:
        settings = load_settings(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}")
    if verbose:
        settings.log_level = "debug"
    settings.setup_logging(console=console)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("file_name", type=click.Path(exists=True, dir_okay=False))
@click.option("--window", type=float, default=None, help="Seconds of history used for DPS")
@click.option("--refresh", type=float, default=None, help="Seconds between redraws")
@click.option("--poll-interval", type=float, default=None, help="Seconds to wait when no new lines")
@click.option("--trim-policy", type=click.Choice(TRIM_POLICIES), default=None)
@click.option("--pattern", default=None, help="Regex with 'time' and 'damage' named groups")
@click.option("--max-ticks", type=int, default=None, hidden=True)
@click.pass_context
def track(ctx, file_name, window, refresh, poll_interval, trim_policy, pattern, max_ticks):
    """Track stats for the log at FILE_NAME."""
    settings: TrackerSettings = ctx.obj["settings"]

    overrides = {
        "window_seconds": window,
        "refresh_interval": refresh,
        "poll_interval": poll_interval,
        "trim_policy": trim_policy,
        "attack_pattern": pattern,
    }
    for attribute, value in overrides.items():
        if value is not None:
            setattr(settings, attribute, value)

    try:
        settings.validate()
    except ValueError as e:
        raise click.ClickException(str(e))

    settings.log_configuration()

    with open(file_name, "r", encoding="utf-8", errors="ignore") as f:
        tailer = LogTailer(f, LineTokenizer(settings.attack_pattern))
        tailer.skip_existing()
        analyzer = LiveDamageAnalyzer.from_settings(settings)

        try:
            run_tracker(tailer, analyzer, settings, max_ticks=max_ticks)
        except KeyboardInterrupt:
            console.print("")

    logger.debug(f"Tailer stats: {tailer.stats}")


def main():
    """Entry point for the console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
