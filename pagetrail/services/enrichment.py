"""Merge a tracked work with live catalog data and its reading sessions."""

import asyncio
import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from pagetrail.config import ENRICHMENT_TIMEOUT
from pagetrail.models import ReadingSession, UserBook
from pagetrail.services.ledger_store import LedgerStore
from pagetrail.services.openlibrary import Enrichment, OpenLibraryClient, work_key_to_olid

logger = logging.getLogger(__name__)


@dataclass
class AugmentedWork:
    work: UserBook
    enrichment: Enrichment = field(default_factory=Enrichment)
    enriched: bool = False
    sessions: list[ReadingSession] = field(default_factory=list)


class EnrichmentAssembler:
    def __init__(
        self,
        catalog: OpenLibraryClient,
        store: LedgerStore,
        timeout: float = ENRICHMENT_TIMEOUT,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.timeout = timeout

    async def _enrichment(self, work: UserBook) -> Enrichment | None:
        olid = work_key_to_olid(work.open_library_key)
        if olid is None:
            logger.warning("Tracked work %s has no work id in key %r", work.id, work.open_library_key)
            return None
        try:
            return await asyncio.wait_for(self.catalog.fetch_bibliographic_data(olid), self.timeout)
        except TimeoutError:
            logger.warning("Open Library enrichment timed out for %s", work.open_library_key)
        except Exception:
            logger.exception("Open Library enrichment failed for %s", work.open_library_key)
        return None

    async def _sessions(self, work: UserBook) -> list[ReadingSession]:
        try:
            return await self.store.list_progress_events(work.id)
        except SQLAlchemyError:
            logger.exception("Error fetching reading sessions for user_book %s", work.id)
            return []

    async def assemble(self, work: UserBook) -> AugmentedWork:
        """Fetch enrichment and session history concurrently.

        Either half may fail without affecting the other: a missing enrichment
        falls back to the N/A defaults and missing history to an empty list.
        """
        enrichment, sessions = await asyncio.gather(self._enrichment(work), self._sessions(work))
        return AugmentedWork(
            work=work,
            enrichment=enrichment or Enrichment(),
            enriched=enrichment is not None,
            sessions=sessions,
        )
