"""Rate schedule CLI commands."""

import json

import click
from rich.console import Console

from payportal.sdk import (
    UnconfiguredScheduleError,
    get_schedules_dir,
    list_schedule_years,
    load_rate_schedules,
)

from .renderers.period_renderer import render_schedule


@click.group()
def schedules():
    """Inspect statutory rate schedules.

    Schedules are read from settings.json 'schedules_dir' (if set), then
    from the schedules packaged with pay-portal.
    """
    pass


@schedules.command("list")
def schedules_list():
    """List years with a configured rate schedule."""
    custom = get_schedules_dir()
    if custom:
        click.echo(f"Custom schedules dir: {custom}")

    years = list_schedule_years()
    if not years:
        click.echo("No rate schedules found.")
        return

    for year in years:
        click.echo(str(year))


@schedules.command("show")
@click.argument("year", required=False, type=int)
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", show_default=True)
def schedules_show(year, output_format):
    """Show the rate schedule for YEAR (default: settings or 2025)."""
    try:
        rates = load_rate_schedules(year)
    except UnconfiguredScheduleError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(rates.model_dump(mode="json"), indent=2))
        return

    render_schedule(Console(), rates)
