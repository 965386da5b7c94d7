from pagetrail.mcp.client import PagetrailClient


async def search_catalog(client: PagetrailClient, query: str, limit: int = 10) -> list[dict] | dict:
    return await client.get("/api/catalog/search", params={"q": query, "limit": limit})


async def trending_books(client: PagetrailClient) -> list[dict] | dict:
    return await client.get("/api/catalog/trending")


async def get_catalog_work(client: PagetrailClient, work_key: str) -> dict:
    work_id = work_key.rstrip("/").rsplit("/", 1)[-1]
    return await client.get(f"/api/catalog/works/{work_id}")
