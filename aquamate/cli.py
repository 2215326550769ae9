"""
Flask CLI commands for inspecting and resetting reminders.

Usage:
    flask reminders-today                 # List reminders due today
    flask reminders-today --date 2026-05-01
    flask clear-reminders                 # Dry run (count reminders)
    flask clear-reminders --confirm       # Delete all reminders
"""

from __future__ import annotations

from datetime import datetime

import click
from flask.cli import with_appcontext


@click.command("reminders-today")
@click.option("--date", "on_date", default=None,
              help="Show reminders for this day (YYYY-MM-DD) instead of today.")
@with_appcontext
def reminders_today_command(on_date: str | None) -> None:
    """Print reminders due today, earliest first."""
    from aquamate.constants import GENERAL_PLANT_LABEL
    from aquamate.services import plants as plant_service
    from aquamate.services import reminders as reminder_service
    from aquamate.utils.filters import short_time

    now = datetime.now()
    if on_date:
        try:
            now = datetime.fromisoformat(on_date)
        except ValueError:
            raise click.BadParameter("Use the YYYY-MM-DD format.", param_hint="--date")

    todays = reminder_service.todays_reminders(reminder_service.load_reminders(), now)
    if not todays:
        click.echo("No reminders today.")
        return

    plants = plant_service.get_plants()
    for reminder in todays:
        plant = reminder_service.plant_for(reminder, plants)
        due = reminder_service.reminder_due(reminder)
        plant_name = plant["name"] if plant else GENERAL_PLANT_LABEL
        click.echo(f"{short_time(due):>8}  {reminder['title']}  ({plant_name})")


@click.command("clear-reminders")
@click.option("--confirm", is_flag=True, default=False,
              help="Actually delete. Without this flag, only counts reminders (dry run).")
@with_appcontext
def clear_reminders_command(confirm: bool) -> None:
    """Delete every reminder and cancel its notification."""
    from aquamate.services import reminders as reminder_service

    count = len(reminder_service.load_reminders())
    if not count:
        click.echo("No reminders stored.")
        return

    click.echo(f"Found {count} reminder(s).")

    if not confirm:
        click.echo("\nDry run - nothing deleted. Use --confirm to delete.")
        return

    removed, error = reminder_service.clear_reminders()
    if error:
        raise click.ClickException(error)
    click.echo(f"Deleted {removed} reminder(s).")
