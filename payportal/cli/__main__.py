"""Pay Portal CLI - command-line interface for pay-period and contribution calculations."""

import json
import logging
import os

import click
from rich.console import Console

from payportal import __version__
from payportal.sdk import (
    ContributionCalculator,
    InvalidInputError,
    UnconfiguredScheduleError,
    SOCIAL_INSURANCE_MODES,
    compute_pay_period,
    get_setting,
    load_rate_schedules,
    to_decimal,
)

from .renderers.period_renderer import render_contributions, render_pay_period
from .schedules_commands import schedules as schedules_group
from .settings_commands import settings as settings_group


def _configure_logging(verbose: bool) -> None:
    """Configure logging from --verbose or the LOG_LEVEL environment variable."""
    level_name = "DEBUG" if verbose else os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_calculator(year, mode) -> ContributionCalculator:
    """Resolve year/mode from options, then settings.json, then defaults."""
    mode = mode or get_setting("social_insurance_mode", "bracket_table")
    if mode not in SOCIAL_INSURANCE_MODES:
        raise click.BadParameter(
            f"'{mode}' is not one of: {', '.join(SOCIAL_INSURANCE_MODES)}",
            param_hint="--mode / social_insurance_mode setting",
        )
    try:
        return ContributionCalculator(load_rate_schedules(year), mode)
    except UnconfiguredScheduleError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="pay-portal")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """Pay Portal - statutory payroll deduction calculator.

    Computes gross pay, social-insurance, health-insurance and housing-fund
    contributions, and net pay for a pay period.

    Settings are loaded from (in order):

    \b
    1. PAY_PORTAL_CONFIG_PATH environment variable
    2. ~/.config/pay-portal/settings.json (XDG default)

    Run 'pay-portal settings show' to see effective settings.
    """
    _configure_logging(verbose)


cli.add_command(schedules_group)
cli.add_command(settings_group)


@cli.command("compute")
@click.option("--rate", "hourly_rate", required=True, help="Hourly rate.")
@click.option("--regular-hours", "-r", required=True, help="Regular hours worked.")
@click.option("--overtime-hours", "-o", default="0", show_default=True, help="Overtime hours worked.")
@click.option("--overtime-multiplier", default="1.25", show_default=True, help="Overtime pay multiplier.")
@click.option("--deductions", "manual_deductions", default="0", show_default=True, help="Manual deductions.")
@click.option("--night-diff-hours", default="0", show_default=True, help="Hours in the 22:00-06:00 window.")
@click.option("--regular-holiday-hours", default="0", show_default=True)
@click.option("--regular-holiday-ot-hours", default="0", show_default=True)
@click.option("--special-holiday-hours", default="0", show_default=True)
@click.option("--special-holiday-ot-hours", default="0", show_default=True)
@click.option("--allowance", default="0", show_default=True, help="Flat allowance for the period.")
@click.option("--year", type=int, help="Rate-schedule year (default: settings or 2025).")
@click.option("--mode", type=click.Choice(SOCIAL_INSURANCE_MODES), help="Social-insurance mode.")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", show_default=True)
def compute_cmd(hourly_rate, regular_hours, overtime_hours, overtime_multiplier, manual_deductions,
                night_diff_hours, regular_holiday_hours, regular_holiday_ot_hours,
                special_holiday_hours, special_holiday_ot_hours, allowance, year, mode, output_format):
    """Compute gross pay, contributions and net pay for one pay period.

    Example:
        pay-portal compute --rate 58.75 -r 80 -o 5
    """
    calc = _load_calculator(year, mode)

    try:
        result = compute_pay_period(
            hourly_rate,
            regular_hours,
            overtime_hours,
            overtime_multiplier,
            manual_deductions,
            schedules=calc.schedules,
            social_insurance_mode=calc.social_insurance_mode,
            night_diff_hours=night_diff_hours,
            regular_holiday_hours=regular_holiday_hours,
            regular_holiday_ot_hours=regular_holiday_ot_hours,
            special_holiday_hours=special_holiday_hours,
            special_holiday_ot_hours=special_holiday_ot_hours,
            allowance=allowance,
        )
    except InvalidInputError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    render_pay_period(Console(), result)


def contributions_data(calc: ContributionCalculator, salary) -> dict:
    """Per-scheme breakdown for one salary, as plain data."""
    social = calc.social_insurance_breakdown(salary)
    health = calc.health_insurance_breakdown(salary)
    housing = calc.housing_fund_breakdown(salary)
    return {
        "salary": to_decimal(salary, "salary"),
        "year": calc.schedules.year,
        "social_insurance": social.model_dump(),
        "health_insurance": health.model_dump(),
        "housing_fund": housing.model_dump(),
        "employee_total": social.contribution + health.employee_share + housing.employee_share,
    }


@cli.command("contributions")
@click.argument("salary")
@click.option("--year", type=int, help="Rate-schedule year (default: settings or 2025).")
@click.option("--mode", type=click.Choice(SOCIAL_INSURANCE_MODES), help="Social-insurance mode.")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", show_default=True)
def contributions_cmd(salary, year, mode, output_format):
    """Show statutory contributions for a monthly SALARY (basic pay)."""
    calc = _load_calculator(year, mode)

    try:
        data = contributions_data(calc, salary)
    except InvalidInputError as e:
        raise click.BadParameter(str(e), param_hint="SALARY")

    if output_format == "json":
        click.echo(json.dumps(data, indent=2, default=str))
        return

    render_contributions(Console(), data["salary"], data)


def main():
    cli()


if __name__ == "__main__":
    main()
