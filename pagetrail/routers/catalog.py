from fastapi import APIRouter, Depends, Query

from pagetrail.dependencies import get_catalog_client
from pagetrail.errors import InvalidInput, NotFound, UpstreamUnavailable
from pagetrail.schemas.catalog import BookDetailResponse, BookSummaryResponse
from pagetrail.services.openlibrary import WORK_KEY_PREFIX, OpenLibraryClient

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/trending", response_model=list[BookSummaryResponse])
async def trending_books(catalog: OpenLibraryClient = Depends(get_catalog_client)):
    books = await catalog.trending()
    if books is None:
        raise UpstreamUnavailable("Error fetching trending books.")
    return books


@router.get("/search", response_model=list[BookSummaryResponse])
async def search_catalog(
    q: str | None = Query(None, description="Free-text catalog query"),
    limit: int = Query(10, ge=1, le=100),
    catalog: OpenLibraryClient = Depends(get_catalog_client),
):
    if not q or not q.strip():
        raise InvalidInput("Query param 'q' is required (e.g. /api/catalog/search?q=python).")
    books = await catalog.search(q.strip(), limit=limit)
    if books is None:
        raise UpstreamUnavailable("Error fetching search results.")
    return books


@router.get("/works/{work_id}", response_model=BookDetailResponse)
async def get_catalog_work(work_id: str, catalog: OpenLibraryClient = Depends(get_catalog_client)):
    detail = await catalog.fetch_work_detail(f"{WORK_KEY_PREFIX}{work_id}")
    if detail is None:
        raise NotFound("Book work details not found.")
    return detail
