"""Settings CLI commands for Pay Portal.

Manages settings.json - schedule year, social-insurance mode, schedules dir.
"""

import click
from pathlib import Path

from payportal.sdk import (
    KNOWN_SETTINGS,
    SOCIAL_INSURANCE_MODES,
    clear_schedule_cache,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - schedule_year: default rate-schedule year
    - social_insurance_mode: bracket_table (default) or formula
    - schedules_dir: directory of custom {year}.yaml rate schedules
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


def _validate_value(key: str, value: str):
    """Check and convert a setting value. Returns the value to store."""
    if key == "schedule_year":
        if not value.isdigit() or len(value) != 4:
            raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")
        return int(value)

    if key == "social_insurance_mode":
        if value not in SOCIAL_INSURANCE_MODES:
            raise click.BadParameter(
                f"Invalid mode '{value}'. Must be one of: {', '.join(SOCIAL_INSURANCE_MODES)}"
            )
        return value

    if key == "schedules_dir":
        path = Path(value).expanduser().resolve()
        if not path.is_dir():
            raise click.BadParameter(f"Not a directory: {path}")
        return str(path)

    return value


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE in settings.json.

    Examples:
        pay-portal settings set schedule_year 2025
        pay-portal settings set social_insurance_mode formula
    """
    stored = _validate_value(key, value)
    saved_to = set_setting(key, stored)
    clear_schedule_cache()
    click.echo(f"Set {key}: {stored}")
    click.echo(f"Saved to: {saved_to}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
def settings_unset(key):
    """Remove KEY from settings.json, reverting to the default."""
    if unset_setting(key):
        clear_schedule_cache()
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
