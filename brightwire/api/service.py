"""Submission service.

Validates and stores contact form submissions, lists them for the admin
dashboard, updates their triage status, and computes the dashboard counters.
Errors are raised, never swallowed; the HTTP boundary translates them.
"""

import logging
import re
from datetime import timedelta

from brightwire.api.errors import StoreError, ValidationError
from brightwire.api.models import (
    DashboardStats,
    Submission,
    SubmissionDraft,
    SubmissionStatus,
)
from brightwire.api.storage import Clock, RowStore, utc_now

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
REQUIRED_FIELDS = ("name", "email", "service", "message")
WEEK = timedelta(days=7)
NO_TOP_SERVICE = "None"


def _is_missing(value: str | None) -> bool:
    return not value


def top_service(services: list[str]) -> str:
    """Most frequent service, ties going to the one seen first.

    Args:
        services: Service value of every submission, in store order

    Returns:
        The winning service, or "None" for an empty list
    """
    counts: dict[str, int] = {}
    for service in services:
        counts[service] = counts.get(service, 0) + 1

    best, best_count = NO_TOP_SERVICE, 0
    for service, count in counts.items():
        if count > best_count:
            best, best_count = service, count
    return best


class SubmissionService:
    """Operations on contact submissions backed by a row store."""

    def __init__(self, store: RowStore, clock: Clock = utc_now) -> None:
        """
        Args:
            store: Row store holding the contact_submissions table
            clock: Source of "now" for the weekly counter
        """
        self.store = store
        self._clock = clock

    async def submit(self, draft: SubmissionDraft) -> Submission:
        """Validate a contact form payload and store it.

        Args:
            draft: Payload from the contact form

        Returns:
            The stored submission with its id and created_at

        Raises:
            ValidationError: On a missing field or malformed email
            StoreError: If the insert fails
        """
        if any(_is_missing(getattr(draft, field)) for field in REQUIRED_FIELDS):
            logger.warning("Contact submission rejected: missing required fields")
            raise ValidationError("Missing required fields")

        if not EMAIL_PATTERN.fullmatch(draft.email):
            logger.warning("Contact submission rejected: invalid email format")
            raise ValidationError("Invalid email format")

        row = {
            "name": draft.name,
            "email": draft.email,
            "phone": draft.phone or None,
            "service": draft.service,
            "message": draft.message,
            "status": SubmissionStatus.NEW.value,
        }
        stored = await self.store.insert(row)
        submission = Submission.model_validate(stored)

        logger.info(
            "Contact submission stored",
            extra={"submission_id": submission.id, "service": submission.service},
        )
        return submission

    async def list_submissions(self) -> list[Submission]:
        """All submissions, newest first.

        Raises:
            StoreError: If the select fails
        """
        rows = await self.store.select_all()
        return [Submission.model_validate(row) for row in rows]

    async def update_status(self, submission_id: int, new_status: str | None) -> None:
        """Overwrite the status of one submission.

        An id that matches no row is not an error; the update simply affects
        nothing.

        Raises:
            ValidationError: If new_status is not a known status
            StoreError: If the update fails
        """
        if new_status not in SubmissionStatus.values():
            raise ValidationError("Invalid status")
        new_status = SubmissionStatus(new_status).value

        affected = await self.store.update(submission_id, {"status": new_status})
        if affected:
            logger.info(
                "Submission status updated",
                extra={"submission_id": submission_id, "status": new_status},
            )
        else:
            logger.info(
                "Status update matched no submission",
                extra={"submission_id": submission_id},
            )

    async def stats(self) -> DashboardStats:
        """Compute the dashboard counters.

        The three queries run one after another and are not read from a single
        snapshot. Any failure discards the partial results.

        Raises:
            StoreError: If any of the queries fails
        """
        week_start = self._clock() - WEEK
        try:
            total = await self.store.count()
            this_week = await self.store.count(created_since=week_start)
            services = await self.store.select_column("service")
        except StoreError:
            logger.error("Dashboard statistics unavailable", exc_info=True)
            raise

        return DashboardStats(
            total=total,
            this_week=this_week,
            top_service=top_service(services),
        )
