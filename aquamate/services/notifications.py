"""
Local notification scheduling.

Plays the role of the device's notification center:
- permission is requested at most once per process and answered from config
- each reminder gets a one-shot APScheduler job keyed by the reminder id, so
  one identity maps to at most one pending notification
- fired jobs move to an in-memory "delivered" list
- cancel() removes both the pending job and any delivered notification

Failures are logged and swallowed here; callers never see them and the
reminder store is not rolled back.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, Callable, Iterable
from datetime import datetime
import logging
import threading
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)


def trigger_time_for(due: datetime) -> datetime:
    """Calendar trigger for a reminder: year/month/day/hour/minute, seconds dropped."""
    return due.replace(second=0, microsecond=0)


class NotificationManager:
    """Schedules, delivers and cancels one-shot local notifications."""

    def __init__(self):
        self._scheduler: Optional[BackgroundScheduler] = None
        self._lock = threading.Lock()
        self._delivered: Dict[str, Dict[str, Any]] = {}
        self._permission_answer = "granted"
        self._requested = False
        self._granted = False
        self._logger = logger
        self._clock: Callable[[], datetime] = datetime.now

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init_app(self, app, clock: Optional[Callable[[], datetime]] = None) -> None:
        """
        Configure from app config and start the scheduler.

        In TESTING the scheduler starts paused: jobs are stored and can be
        inspected, but never fire on their own.
        """
        self.shutdown()

        self._logger = app.logger
        self._permission_answer = app.config.get("NOTIFICATIONS_PERMISSION", "granted")
        self._requested = False
        self._granted = False
        self._clock = clock or datetime.now
        with self._lock:
            self._delivered.clear()

        if not app.config.get("NOTIFICATIONS_ENABLED", True):
            self._logger.info("[Notifications] Disabled (NOTIFICATIONS_ENABLED=false)")
            return

        scheduler = BackgroundScheduler()
        scheduler.start(paused=app.config.get("TESTING", False))
        self._scheduler = scheduler
        self._logger.info("[Notifications] Scheduler started")

    def shutdown(self) -> None:
        if self._scheduler is not None:
            try:
                self._scheduler.shutdown(wait=False)
            except Exception as e:
                self._logger.warning(f"[Notifications] Scheduler shutdown failed: {e}")
            self._scheduler = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    # ------------------------------------------------------------------
    # Permission
    # ------------------------------------------------------------------

    def request_authorization_if_needed(self) -> bool:
        """Ask for notification permission once per process; later calls reuse the answer."""
        if self._requested:
            return self._granted

        self._requested = True
        self._granted = self._permission_answer == "granted"
        self._logger.info(f"[Notifications] Notification permission granted: {self._granted}")
        return self._granted

    @property
    def permission_requested(self) -> bool:
        return self._requested

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def schedule_notification(self, reminder: Dict[str, Any], plant_name: Optional[str] = None) -> bool:
        """
        Schedule a one-shot notification for a reminder.

        Title is the reminder title; subtitle is the plant name when there is one.

        Returns:
            True if a notification is now pending for the reminder id
        """
        from aquamate.services.reminders import reminder_due

        granted = self.request_authorization_if_needed()

        if self._scheduler is None:
            self._logger.info(f"[Notifications] Scheduler not running; skipped {reminder.get('id')}")
            return False

        if not granted:
            self._logger.warning(f"[Notifications] Permission denied; not scheduling {reminder.get('id')}")
            return False

        try:
            run_at = trigger_time_for(reminder_due(reminder))
        except (KeyError, ValueError) as e:
            self._logger.error(f"Failed to schedule notification: {e}")
            return False

        if run_at <= self._clock():
            self._logger.warning(
                f"[Notifications] Trigger time {run_at.isoformat()} already passed; "
                f"not scheduling {reminder['id']}"
            )
            return False

        try:
            self._scheduler.add_job(
                func=self._deliver,
                trigger="date",
                run_date=run_at,
                args=[reminder["id"], reminder["title"], plant_name],
                id=reminder["id"],
                name=reminder["title"],
                replace_existing=True,
                misfire_grace_time=None,
            )
        except Exception as e:
            self._logger.error(f"Failed to schedule notification: {e}")
            return False

        self._logger.info(f"[Notifications] Scheduled notif: {reminder['title']} at {run_at.isoformat()}")
        return True

    def cancel_notification(self, identifier: str) -> None:
        """Remove pending and delivered notifications with this identifier."""
        if self._scheduler is not None:
            try:
                self._scheduler.remove_job(identifier)
            except JobLookupError:
                pass
            except Exception as e:
                self._logger.error(f"[Notifications] Failed to cancel {identifier}: {e}")

        with self._lock:
            self._delivered.pop(identifier, None)

    def restore(self, reminders: Iterable[Dict[str, Any]], plant_name_for: Callable[[Dict[str, Any]], Optional[str]]) -> int:
        """
        Reschedule notifications for persisted reminders that are still in the future.

        Returns:
            Number of notifications scheduled
        """
        if self._scheduler is None:
            return 0

        from aquamate.services.reminders import reminder_due

        now = self._clock()
        scheduled = 0
        for reminder in reminders:
            if trigger_time_for(reminder_due(reminder)) <= now:
                continue
            if self.schedule_notification(reminder, plant_name_for(reminder)):
                scheduled += 1

        self._logger.info(f"[Notifications] Restored {scheduled} pending notification(s)")
        return scheduled

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def _deliver(self, identifier: str, title: str, subtitle: Optional[str]) -> None:
        notification = {
            "id": identifier,
            "title": title,
            "subtitle": subtitle,
            "delivered_at": self._clock().isoformat(timespec="seconds"),
        }
        with self._lock:
            self._delivered[identifier] = notification
        self._logger.info(f"[Notifications] Delivered: {title}" + (f" ({subtitle})" if subtitle else ""))

    def fire(self, identifier: str) -> bool:
        """Deliver a pending notification immediately. Returns False if none is pending."""
        if self._scheduler is None:
            return False

        job = self._scheduler.get_job(identifier)
        if job is None:
            return False

        self._scheduler.remove_job(identifier)
        job.func(*job.args)
        return True

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def is_pending(self, identifier: str) -> bool:
        return self._scheduler is not None and self._scheduler.get_job(identifier) is not None

    def pending(self) -> List[Dict[str, Any]]:
        if self._scheduler is None:
            return []
        return [
            {
                "id": job.id,
                "title": job.args[1],
                "subtitle": job.args[2],
                "trigger_at": job.trigger.run_date.replace(tzinfo=None).isoformat(timespec="seconds"),
            }
            for job in self._scheduler.get_jobs()
        ]

    def pending_ids(self) -> List[str]:
        return [n["id"] for n in self.pending()]

    def delivered(self) -> List[Dict[str, Any]]:
        with self._lock:
            return sorted(self._delivered.values(), key=lambda n: n["delivered_at"])
