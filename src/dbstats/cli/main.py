"""Main CLI entry point for dbstats."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import click
from rich.console import Console

from dbstats import __version__
from dbstats.core.exceptions import DBStatsError
from dbstats.core.models import MetricKey

if TYPE_CHECKING:
    from dbstats.core.config import StatsConfig
    from dbstats.core.models import TimeSeries
    from dbstats.stats.system_stats import SystemStats

console = Console()


class StatsContext:
    """Shared context for CLI commands with lazy initialization."""

    def __init__(self, config_path: str):
        """Initialize context with config path.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = config_path
        self._config: StatsConfig | None = None
        self._stats: SystemStats | None = None

    @property
    def config(self) -> StatsConfig:
        """Get or create config lazily."""
        if self._config is None:
            from dbstats.core.config import StatsConfig
            from dbstats.utils.logging import setup_logging

            self._config = StatsConfig.from_file(self.config_path)
            setup_logging(
                level=self._config.logging.level,
                format=self._config.logging.format,
                output=self._config.logging.output,
            )
        return self._config

    @property
    def stats(self) -> SystemStats:
        """Get or create SystemStats lazily."""
        if self._stats is None:
            from dbstats.stats.system_stats import SystemStats

            self._stats = SystemStats.from_config(self.config)
        return self._stats


def render_series(data: TimeSeries, title: str, format: str) -> None:
    """Print a time series as a table or JSON."""
    if format == "json":
        print(json.dumps({t.isoformat(): v for t, v in data.items()}, indent=2))
        return

    from rich.table import Table

    table = Table(title=f"{title} ({len(data)} points)")
    table.add_column("Timestamp (UTC)", style="cyan")
    table.add_column("Value", justify="right")

    for time, value in data.items():
        table.add_row(time.isoformat(), "-" if value is None else f"{value:.2f}")

    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default="~/.dbstats/config.yaml",
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config: str) -> None:
    """Query database system stats from the hosting cloud provider."""
    ctx.obj = StatsContext(config_path=config)


@cli.command()
@click.argument("metric", type=click.Choice([k.value for k in MetricKey]))
@click.option("--duration", type=int, default=None, help="Window length in seconds")
@click.option("--period", type=int, default=None, help="Sampling period in seconds")
@click.option("--offset", type=int, default=None, help="Shift the window back by seconds")
@click.option("--series", is_flag=True, help="Fill missing periods with empty values")
@click.option("--format", type=click.Choice(["table", "json"]), default="table")
@click.pass_context
def query(
    ctx: click.Context,
    metric: str,
    duration: int | None,
    period: int | None,
    offset: int | None,
    series: bool,
    format: str,
) -> None:
    """Fetch METRIC for the configured database."""
    overrides = {
        name: value
        for name, value in (("duration", duration), ("period", period), ("offset", offset))
        if value is not None
    }
    if series:
        overrides["series"] = True

    try:
        data = asyncio.run(ctx.obj.stats.query_metric(metric, **overrides))
    except DBStatsError as e:
        raise click.ClickException(str(e)) from e

    render_series(data, title=metric, format=format)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the active provider and the metrics it supports."""
    try:
        stats = ctx.obj.stats
        console.print(f"Provider: [bold]{stats.provider.value}[/bold]")

        if not stats.enabled:
            console.print("[yellow]System stats not enabled[/yellow]")
            return

        metrics = ", ".join(key.value for key in stats.supported_metrics())
        console.print(f"Metrics: {metrics}")
    except DBStatsError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
