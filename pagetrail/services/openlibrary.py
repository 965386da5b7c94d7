"""Open Library API client for catalog lookups and bibliographic enrichment.

Every public method returns ``None`` when the upstream call fails, so callers
treat absence as an ordinary outcome rather than an exception.
"""

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from pagetrail.config import (
    OPENLIBRARY_BASE_URL,
    OPENLIBRARY_COVERS_URL,
    OPENLIBRARY_TIMEOUT,
    PLACEHOLDER_COVER_URL,
)

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
WORK_KEY_PREFIX = "/works/"


@dataclass
class BookSummary:
    """One search hit, shaped for browsing."""

    title: str = NOT_AVAILABLE
    author_name: str = NOT_AVAILABLE
    first_publish_year: int | str = NOT_AVAILABLE
    open_library_key: str = NOT_AVAILABLE
    image_url: str = PLACEHOLDER_COVER_URL


@dataclass
class AuthorDetail:
    name: str = NOT_AVAILABLE
    bio: str = "No bio available"
    birth_date: str = "Unknown"
    death_date: str = "Unknown"


@dataclass
class BookDetail:
    open_library_key: str
    title: str = NOT_AVAILABLE
    author_name: str = NOT_AVAILABLE
    image_url: str = PLACEHOLDER_COVER_URL
    description: str = "No description available"
    subjects: list[str] = field(default_factory=list)
    first_publish_date: str = "Unknown"
    covers: list[str] = field(default_factory=list)
    authors: list[AuthorDetail] = field(default_factory=list)


@dataclass
class Enrichment:
    """Bibliographic data for a tracked work. Every field defaults to N/A."""

    description: str = NOT_AVAILABLE
    excerpts: str = NOT_AVAILABLE
    number_of_pages: int | str = NOT_AVAILABLE
    isbn_10: str = NOT_AVAILABLE
    isbn_13: str = NOT_AVAILABLE
    subjects: list[str] = field(default_factory=list)
    publish_date: str = NOT_AVAILABLE


def work_key_to_olid(catalog_key: str | None) -> str | None:
    """Return the id after the ``/works/`` prefix, e.g. ``OL1W``."""
    if not catalog_key or WORK_KEY_PREFIX not in catalog_key:
        return None
    olid = catalog_key.split(WORK_KEY_PREFIX, 1)[1].strip("/")
    return olid or None


def _unwrap_text(value) -> str | None:
    """Open Library text fields can be a string or a {"type", "value"} dict."""
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, str) and value:
        return value
    return None


def _first(values) -> str | None:
    if isinstance(values, list) and values:
        return values[0]
    return None


def _subject_names(subjects) -> list[str]:
    names = []
    for subject in subjects or []:
        if isinstance(subject, dict):
            subject = subject.get("name")
        if isinstance(subject, str) and subject:
            names.append(subject)
    return names


class OpenLibraryClient:
    """Stateless wrapper around the Open Library HTTP API."""

    def __init__(
        self,
        base_url: str = OPENLIBRARY_BASE_URL,
        covers_url: str = OPENLIBRARY_COVERS_URL,
        timeout: float = OPENLIBRARY_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.covers_url = covers_url.rstrip("/")
        self.timeout = timeout

    def cover_url(self, cover_id: int | None, size: str = "M") -> str:
        if not cover_id:
            return PLACEHOLDER_COVER_URL
        return f"{self.covers_url}/b/id/{cover_id}-{size}.jpg"

    def _summary(self, doc: dict) -> BookSummary:
        return BookSummary(
            title=doc.get("title") or NOT_AVAILABLE,
            author_name=_first(doc.get("author_name")) or NOT_AVAILABLE,
            first_publish_year=doc.get("first_publish_year") or NOT_AVAILABLE,
            open_library_key=doc.get("key") or NOT_AVAILABLE,
            image_url=self.cover_url(doc.get("cover_i")),
        )

    async def search(self, query: str, limit: int = 10) -> list[BookSummary] | None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(f"{self.base_url}/search.json", params={"q": query})
                if resp.status_code != 200:
                    logger.warning("Open Library search failed: %r -> %d", query, resp.status_code)
                    return None
                docs = resp.json().get("docs") or []
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Open Library search error for %r: %s", query, e)
            return None
        return [self._summary(doc) for doc in docs[:limit]]

    async def trending(self) -> list[BookSummary] | None:
        return await self.search("Trending", limit=10)

    async def _fetch_author(self, client: httpx.AsyncClient, author_key: str | None) -> AuthorDetail:
        """Resolve one author. Any failure yields the placeholder author."""
        if not author_key:
            return AuthorDetail()
        try:
            resp = await client.get(f"{self.base_url}{author_key}.json")
            if resp.status_code != 200:
                logger.warning("Could not fetch details for author %s: HTTP %d", author_key, resp.status_code)
                return AuthorDetail()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not fetch details for author %s: %s", author_key, e)
            return AuthorDetail()
        return AuthorDetail(
            name=data.get("name") or NOT_AVAILABLE,
            bio=_unwrap_text(data.get("bio")) or "No bio available",
            birth_date=data.get("birth_date") or "Unknown",
            death_date=data.get("death_date") or "Unknown",
        )

    async def _fetch_authors(self, client: httpx.AsyncClient, work: dict) -> list[AuthorDetail]:
        keys = []
        for entry in work.get("authors") or []:
            author = entry.get("author") if isinstance(entry, dict) else None
            keys.append(author.get("key") if isinstance(author, dict) else None)
        return list(await asyncio.gather(*(self._fetch_author(client, key) for key in keys)))

    async def fetch_work_detail(self, catalog_key: str) -> BookDetail | None:
        """Fetch a work and its authors. Returns None when the work is unavailable."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(f"{self.base_url}{catalog_key}.json")
                if resp.status_code != 200:
                    logger.warning("Open Library work lookup failed: %s -> %d", catalog_key, resp.status_code)
                    return None
                work = resp.json()
                authors = await self._fetch_authors(client, work)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Open Library API error for work %s: %s", catalog_key, e)
            return None

        covers = [c for c in work.get("covers") or [] if isinstance(c, int) and c > 0]
        author_name = authors[0].name if authors else _first(work.get("author_names"))
        return BookDetail(
            open_library_key=catalog_key,
            title=work.get("title") or NOT_AVAILABLE,
            author_name=author_name or NOT_AVAILABLE,
            image_url=self.cover_url(covers[0] if covers else None),
            description=_unwrap_text(work.get("description")) or "No description available",
            subjects=_subject_names(work.get("subjects")),
            first_publish_date=work.get("first_publish_date") or "Unknown",
            covers=[self.cover_url(c, size="L") for c in covers],
            authors=authors,
        )

    async def fetch_bibliographic_data(self, olid: str) -> Enrichment | None:
        """Look up a work through the books API by its OLID bibkey."""
        bibkey = f"OLID:{olid}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(
                    f"{self.base_url}/api/books",
                    params={"bibkeys": bibkey, "format": "json", "jscmd": "data"},
                )
                if resp.status_code != 200:
                    logger.warning("Open Library books API failed: %s -> %d", bibkey, resp.status_code)
                    return None
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Open Library books API error for %s: %s", bibkey, e)
            return None

        entry = payload.get(bibkey) if isinstance(payload, dict) else None
        if not isinstance(entry, dict):
            return None
        data = entry.get("details") if isinstance(entry.get("details"), dict) else entry
        identifiers = data.get("identifiers") or {}

        excerpts = [e.get("text") for e in data.get("excerpts") or [] if isinstance(e, dict) and e.get("text")]
        return Enrichment(
            description=_unwrap_text(data.get("description")) or NOT_AVAILABLE,
            excerpts="\n\n".join(excerpts) if excerpts else NOT_AVAILABLE,
            number_of_pages=data.get("number_of_pages") or NOT_AVAILABLE,
            isbn_10=_first(data.get("isbn_10")) or _first(identifiers.get("isbn_10")) or NOT_AVAILABLE,
            isbn_13=_first(data.get("isbn_13")) or _first(identifiers.get("isbn_13")) or NOT_AVAILABLE,
            subjects=_subject_names(data.get("subjects")),
            publish_date=data.get("publish_date") or NOT_AVAILABLE,
        )
