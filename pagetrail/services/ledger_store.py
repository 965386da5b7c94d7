"""Persistence for tracked works and their reading sessions.

Every operation opens its own short-lived session from the injected factory
and commits before returning, so each write is durable on its own and
independent operations can run concurrently.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pagetrail.errors import Conflict
from pagetrail.models import ReadingSession, UserBook

logger = logging.getLogger(__name__)


class LedgerStore:
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self.sessions = sessions

    async def find_tracked_work(self, user_id: str, catalog_key: str) -> UserBook | None:
        async with self.sessions() as session:
            result = await session.execute(
                select(UserBook).where(UserBook.user_id == user_id, UserBook.open_library_key == catalog_key)
            )
            return result.scalar_one_or_none()

    async def create_tracked_work(
        self,
        user_id: str,
        catalog_key: str,
        title: str,
        author_name: str,
        image_url: str | None = None,
    ) -> UserBook:
        work = UserBook(
            user_id=user_id,
            open_library_key=catalog_key,
            title=title,
            author_name=author_name,
            image_url=image_url,
            current_page_number=0,
            status="to-read",
        )
        async with self.sessions() as session:
            session.add(work)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.info("Duplicate tracked work for user %s: %s (%s)", user_id, catalog_key, e.orig)
                raise Conflict("Book already exists in your library.") from e
            await session.refresh(work)
            return work

    async def list_tracked_works(self, user_id: str) -> list[UserBook]:
        async with self.sessions() as session:
            result = await session.execute(
                select(UserBook).where(UserBook.user_id == user_id).order_by(UserBook.created_at)
            )
            return list(result.scalars().all())

    async def get_tracked_work(self, user_id: str, work_id: int) -> UserBook | None:
        async with self.sessions() as session:
            result = await session.execute(
                select(UserBook).where(UserBook.id == work_id, UserBook.user_id == user_id)
            )
            return result.scalar_one_or_none()

    async def append_progress_event(self, work_id: int, pages_read: int, notes: str | None = None) -> ReadingSession:
        event = ReadingSession(user_book_id=work_id, pages_read_in_session=pages_read, notes=notes)
        async with self.sessions() as session:
            session.add(event)
            await session.commit()
            await session.refresh(event)
            return event

    async def list_progress_events(self, work_id: int) -> list[ReadingSession]:
        """Sessions for a work, newest first."""
        async with self.sessions() as session:
            result = await session.execute(
                select(ReadingSession)
                .where(ReadingSession.user_book_id == work_id)
                .order_by(ReadingSession.session_date.desc(), ReadingSession.id.desc())
            )
            return list(result.scalars().all())

    async def update_current_page(self, user_id: str, work_id: int, new_value: int) -> UserBook | None:
        async with self.sessions() as session:
            result = await session.execute(
                select(UserBook).where(UserBook.id == work_id, UserBook.user_id == user_id)
            )
            work = result.scalar_one_or_none()
            if work is None:
                return None
            work.current_page_number = new_value
            await session.commit()
            await session.refresh(work)
            return work

    async def sum_pages_read(self, work_id: int) -> int:
        async with self.sessions() as session:
            result = await session.execute(
                select(func.coalesce(func.sum(ReadingSession.pages_read_in_session), 0)).where(
                    ReadingSession.user_book_id == work_id
                )
            )
            return int(result.scalar_one())
