"""Tests for the Flask CLI commands."""

from datetime import datetime, timedelta

from aquamate.services import reminders as reminder_service
from aquamate.services.storage import get_store


def _seed(app, *reminders):
    with app.app_context():
        reminder_service.save_reminders(list(reminders))


def test_reminders_today(app):
    day = datetime(2026, 10, 19)
    _seed(
        app,
        reminder_service.build_reminder("Evening mist", day.replace(hour=18, minute=30)),
        reminder_service.build_reminder("Morning water", day.replace(hour=8)),
        reminder_service.build_reminder("Tomorrow", day.replace(hour=8) + timedelta(days=1)),
    )

    result = app.test_cli_runner().invoke(args=["reminders-today", "--date", "2026-10-19"])

    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 2
    assert "Morning water" in lines[0] and "8:00 AM" in lines[0] and "(General)" in lines[0]
    assert "Evening mist" in lines[1] and "6:30 PM" in lines[1]


def test_reminders_today_empty(app):
    result = app.test_cli_runner().invoke(args=["reminders-today"])
    assert "No reminders today." in result.output


def test_reminders_today_bad_date(app):
    result = app.test_cli_runner().invoke(args=["reminders-today", "--date", "soon"])
    assert result.exit_code != 0


def test_clear_reminders_dry_run_then_confirm(app):
    future = datetime.now() + timedelta(days=1)
    _seed(app, reminder_service.build_reminder("Water", future))

    runner = app.test_cli_runner()
    dry = runner.invoke(args=["clear-reminders"])
    assert "Found 1 reminder(s)." in dry.output
    assert "Dry run" in dry.output
    with app.app_context():
        assert len(reminder_service.load_reminders()) == 1

    done = runner.invoke(args=["clear-reminders", "--confirm"])
    assert "Deleted 1 reminder(s)." in done.output
    with app.app_context():
        assert reminder_service.load_reminders() == []


def test_clear_reminders_reports_failed_save(app, monkeypatch):
    future = datetime.now() + timedelta(days=1)
    _seed(app, reminder_service.build_reminder("Water", future))

    def broken_set(key, value):
        raise OSError("disk full")

    with app.app_context():
        monkeypatch.setattr(get_store(), "set", broken_set)

    result = app.test_cli_runner().invoke(args=["clear-reminders", "--confirm"])

    assert result.exit_code != 0
    assert "Could not delete the reminders." in result.output
    assert "Deleted" not in result.output
    with app.app_context():
        assert len(reminder_service.load_reminders()) == 1
