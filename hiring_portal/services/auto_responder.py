"""
Auto-Responder

Simulates the candidate answering a manager: every manager message arms one
fire-once job that, after a fixed delay, posts a canned reply from the
project's candidate into the same room.

Armed replies cannot be cancelled and are never coalesced. The job re-reads
the project and the candidate when it fires; if either is gone the reply is
dropped quietly, since the original sender has long since been answered.
"""

from typing import Optional

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from hiring_portal.config import settings
from hiring_portal.core.scheduler import schedule_once
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)


class AutoResponder:
    """Schedules and delivers simulated candidate replies."""

    def __init__(
        self,
        repository: Repository,
        scheduler: AsyncIOScheduler,
        delay_seconds: float = None,
        reply_body: str = None,
    ):
        self.repository = repository
        self.scheduler = scheduler
        self.delay_seconds = settings.AUTO_REPLY_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self.reply_body = reply_body or settings.AUTO_REPLY_MESSAGE
        self.hub = None
        self.armed = 0
        self.delivered = 0
        self.dropped = 0

    def attach(self, hub) -> None:
        """Bind the hub replies are published through."""
        self.hub = hub

    def arm(self, project_id: str):
        """Schedule one reply for `project_id` without blocking the caller."""
        job = schedule_once(
            self.scheduler,
            self.fire,
            self.delay_seconds,
            args=[project_id],
            name=f"auto_reply:{project_id}",
        )
        self.armed += 1
        logger.debug("auto_reply_armed", project_id=project_id, job_id=job.id, delay=self.delay_seconds)
        return job

    async def fire(self, project_id: str) -> Optional[str]:
        """
        Deliver the reply. Returns the new message id, or None when dropped.

        Never raises: failures here have no caller to report to.
        """
        try:
            project = self.repository.find_project_by_id(project_id)
            if project is None:
                self._drop(project_id, "project_missing")
                return None

            candidate = self.repository.find_user(email=project.email)
            if candidate is None:
                self._drop(project_id, "candidate_missing")
                return None

            message = self.repository.create_message(project_id, candidate.id, self.reply_body)
            if self.hub is not None:
                self.hub.publish(message, sender=candidate)

            self.delivered += 1
            logger.info("auto_reply_sent", project_id=project_id, message_id=message.id)
            return message.id

        except Exception:
            self.dropped += 1
            logger.exception("auto_reply_failed", project_id=project_id)
            return None

    def _drop(self, project_id: str, reason: str) -> None:
        self.dropped += 1
        logger.info("auto_reply_dropped", project_id=project_id, reason=reason)

    def stats(self) -> dict:
        return {
            "delay_seconds": self.delay_seconds,
            "armed": self.armed,
            "delivered": self.delivered,
            "dropped": self.dropped,
        }
