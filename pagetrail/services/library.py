"""User-facing library operations, composed from the ledger and the catalog."""

import asyncio

from pagetrail.errors import Conflict, InvalidInput, NotFound
from pagetrail.models import UserBook
from pagetrail.services.enrichment import AugmentedWork, EnrichmentAssembler
from pagetrail.services.ledger_store import LedgerStore
from pagetrail.services.openlibrary import OpenLibraryClient
from pagetrail.services.progress_ledger import (
    DriftReport,
    ProgressLedger,
    SessionLogged,
    SessionLoggedPageUpdateFailed,
)


class LibraryService:
    def __init__(
        self,
        store: LedgerStore,
        catalog: OpenLibraryClient,
        assembler: EnrichmentAssembler | None = None,
        ledger: ProgressLedger | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.assembler = assembler or EnrichmentAssembler(catalog, store)
        self.ledger = ledger or ProgressLedger(store)

    async def add_work(
        self,
        user_id: str,
        catalog_key: str,
        title: str,
        author_name: str,
        image_url: str | None = None,
    ) -> UserBook:
        catalog_key, title, author_name = (v.strip() if v else "" for v in (catalog_key, title, author_name))
        if not (catalog_key and title and author_name):
            raise InvalidInput("Book key, title, and author are required.")

        if await self.store.find_tracked_work(user_id, catalog_key) is not None:
            raise Conflict()
        return await self.store.create_tracked_work(user_id, catalog_key, title, author_name, image_url or None)

    async def list_library(self, user_id: str) -> list[AugmentedWork]:
        works = await self.store.list_tracked_works(user_id)
        return list(await asyncio.gather(*(self.assembler.assemble(w) for w in works)))

    async def get_work(self, user_id: str, work_id: int) -> AugmentedWork:
        work = await self.store.get_tracked_work(user_id, work_id)
        if work is None:
            raise NotFound()
        return await self.assembler.assemble(work)

    async def log_session(
        self, user_id: str, work_id: int, pages_read, notes: str | None = None
    ) -> SessionLogged | SessionLoggedPageUpdateFailed:
        return await self.ledger.log_session(user_id, work_id, pages_read, notes)

    async def check_drift(self, user_id: str, work_id: int) -> DriftReport:
        return await self.ledger.check_drift(user_id, work_id)

    async def repair_current_page(self, user_id: str, work_id: int) -> UserBook:
        return await self.ledger.repair_current_page(user_id, work_id)
