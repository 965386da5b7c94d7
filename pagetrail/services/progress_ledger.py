"""Reading-session ledger and the derived current page counter.

Logging a session is two separate writes: the session row is appended first
and is the source of truth, then the work's ``current_page_number`` is bumped.
The counter is a cache of ``sum(pages_read_in_session)``. If the second write
fails the session still stands and the caller gets
``SessionLoggedPageUpdateFailed`` so it can repair the counter on its own.

Concurrent sessions on the same work race on the counter's read-modify-write
and the last write wins. ``check_drift`` detects the resulting mismatch and
``repair_current_page`` rewrites the counter from the ledger.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from pagetrail.errors import Forbidden, Internal, InvalidInput, NotFound
from pagetrail.models import ReadingSession, UserBook
from pagetrail.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


@dataclass
class SessionLogged:
    session: ReadingSession
    work: UserBook

    @property
    def updated_current_page(self) -> int:
        return self.work.current_page_number


@dataclass
class SessionLoggedPageUpdateFailed:
    session: ReadingSession
    expected_current_page: int


@dataclass
class DriftReport:
    work_id: int
    current_page_number: int
    recomputed_page: int

    @property
    def drifted(self) -> bool:
        return self.current_page_number != self.recomputed_page


# Largest value a 32-bit INTEGER column holds
MAX_PAGES_READ = 2**31 - 1


def validate_pages_read(pages_read) -> int:
    # bool is an int subclass but never a page count
    if isinstance(pages_read, bool) or not isinstance(pages_read, int) or pages_read <= 0:
        raise InvalidInput("Pages read must be a positive number.")
    if pages_read > MAX_PAGES_READ:
        raise InvalidInput(f"Pages read must be at most {MAX_PAGES_READ}.")
    return pages_read


class ProgressLedger:
    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    async def log_session(
        self,
        user_id: str,
        work_id: int,
        pages_read,
        notes: str | None = None,
    ) -> SessionLogged | SessionLoggedPageUpdateFailed:
        work = await self.store.get_tracked_work(user_id, work_id)
        if work is None:
            raise Forbidden()
        pages_read = validate_pages_read(pages_read)

        try:
            session = await self.store.append_progress_event(work.id, pages_read, notes or None)
        except SQLAlchemyError as e:
            logger.error("Error inserting reading session for user_book %s: %s", work.id, e)
            raise Internal("Failed to log reading session.") from e

        expected = work.current_page_number + pages_read
        try:
            updated = await self.store.update_current_page(user_id, work.id, expected)
        except Exception:
            # the session is already committed, so any failure here is partial
            logger.exception("Error updating current_page_number for user_book %s", work.id)
            updated = None
        if updated is None:
            logger.error(
                "Reading session %s logged but current page of user_book %s was not updated to %d",
                session.id, work.id, expected,
            )
            return SessionLoggedPageUpdateFailed(session=session, expected_current_page=expected)

        return SessionLogged(session=session, work=updated)

    async def recompute_current_page(self, work_id: int) -> int:
        """Current page derived from the ledger alone."""
        return await self.store.sum_pages_read(work_id)

    async def check_drift(self, user_id: str, work_id: int) -> DriftReport:
        work = await self.store.get_tracked_work(user_id, work_id)
        if work is None:
            raise NotFound()
        recomputed = await self.recompute_current_page(work.id)
        report = DriftReport(work.id, work.current_page_number, recomputed)
        if report.drifted:
            logger.warning(
                "user_book %s current page %d differs from ledger sum %d",
                work.id, report.current_page_number, recomputed,
            )
        return report

    async def repair_current_page(self, user_id: str, work_id: int) -> UserBook:
        work = await self.store.get_tracked_work(user_id, work_id)
        if work is None:
            raise NotFound()
        recomputed = await self.recompute_current_page(work.id)
        updated = await self.store.update_current_page(user_id, work.id, recomputed)
        if updated is None:
            raise NotFound()
        if recomputed != work.current_page_number:
            logger.info(
                "Repaired current page of user_book %s: %d -> %d", work.id, work.current_page_number, recomputed
            )
        return updated
