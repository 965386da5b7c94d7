import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pagetrail.app import create_app
from pagetrail.database import Base, get_sessionmaker
from pagetrail.dependencies import get_catalog_client
from pagetrail.services.ledger_store import LedgerStore
from pagetrail.services.openlibrary import BookDetail, BookSummary, Enrichment
import pagetrail.models  # noqa: F401


class FakeCatalog:
    """In-memory stand-in for OpenLibraryClient."""

    def __init__(self) -> None:
        self.enrichment: Enrichment | None = Enrichment(
            description="Set on the desert planet Arrakis...",
            number_of_pages=412,
            isbn_10="0441172717",
            isbn_13="9780441172719",
            subjects=["Science Fiction"],
            publish_date="1965",
        )
        self.failing: set[str] = set()
        self.summaries: list[BookSummary] | None = [
            BookSummary(title="Dune", author_name="Frank Herbert", first_publish_year=1965, open_library_key="/works/OL1W")
        ]
        self.detail: BookDetail | None = BookDetail(open_library_key="/works/OL1W", title="Dune", author_name="Frank Herbert")
        self.bib_calls: list[str] = []

    async def fetch_bibliographic_data(self, olid: str) -> Enrichment | None:
        self.bib_calls.append(olid)
        if olid in self.failing:
            return None
        return self.enrichment

    async def fetch_work_detail(self, catalog_key: str) -> BookDetail | None:
        return self.detail

    async def search(self, query: str, limit: int = 10) -> list[BookSummary] | None:
        return self.summaries

    async def trending(self) -> list[BookSummary] | None:
        return self.summaries


@pytest.fixture
async def sessions(tmp_path):
    # file-backed so that concurrent sessions get their own connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pagetrail-test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def store(sessions):
    return LedgerStore(sessions)


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
async def client(sessions, catalog):
    app = create_app()
    app.dependency_overrides[get_sessionmaker] = lambda: sessions
    app.dependency_overrides[get_catalog_client] = lambda: catalog
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _sign_up(client, username: str) -> dict:
    resp = await client.post(
        "/api/auth/signup",
        json={"username": username, "email": f"{username}@example.com", "password": "correct horse"},
    )
    assert resp.status_code == 201
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
async def alice(client):
    return await _sign_up(client, "alice")


@pytest.fixture
async def bob(client):
    return await _sign_up(client, "bob")
