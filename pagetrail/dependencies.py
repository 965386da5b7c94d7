"""FastAPI dependency providers wiring the services together.

Tests swap collaborators through ``app.dependency_overrides``.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pagetrail.config import SESSION_COOKIE
from pagetrail.database import get_sessionmaker
from pagetrail.errors import Unauthorized
from pagetrail.services.identity import LocalIdentityProvider
from pagetrail.services.ledger_store import LedgerStore
from pagetrail.services.library import LibraryService
from pagetrail.services.openlibrary import OpenLibraryClient


def get_catalog_client() -> OpenLibraryClient:
    return OpenLibraryClient()


def get_ledger_store(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> LedgerStore:
    return LedgerStore(sessions)


def get_library_service(
    store: LedgerStore = Depends(get_ledger_store),
    catalog: OpenLibraryClient = Depends(get_catalog_client),
) -> LibraryService:
    return LibraryService(store, catalog)


def get_identity_provider(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> LocalIdentityProvider:
    return LocalIdentityProvider(sessions)


def get_session_token(request: Request) -> str | None:
    """Bearer token from the Authorization header, else the session cookie."""
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(SESSION_COOKIE)


async def get_current_user_id(
    token: str | None = Depends(get_session_token),
    identity: LocalIdentityProvider = Depends(get_identity_provider),
) -> str:
    user_id = await identity.resolve(token)
    if user_id is None:
        raise Unauthorized()
    return user_id
