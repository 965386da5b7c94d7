from pagetrail.mcp.client import PagetrailClient


async def add_work(
    client: PagetrailClient,
    open_library_key: str,
    title: str,
    author_name: str,
    image_url: str | None = None,
) -> dict:
    body = {"open_library_key": open_library_key, "title": title, "author_name": author_name}
    if image_url is not None:
        body["image_url"] = image_url
    result = await client.post("/api/library", json=body)
    if isinstance(result, dict) and result.get("error"):
        return result
    return result["work"]


async def list_library(client: PagetrailClient) -> list[dict] | dict:
    return await client.get("/api/library")


async def get_work(client: PagetrailClient, work_id: int) -> dict:
    return await client.get(f"/api/library/{work_id}")


async def log_session(
    client: PagetrailClient,
    work_id: int,
    pages_read: int,
    notes: str | None = None,
) -> dict:
    body = {"pages_read": pages_read}
    if notes is not None:
        body["notes"] = notes
    return await client.post(f"/api/library/{work_id}/sessions", json=body)


async def check_progress(client: PagetrailClient, work_id: int, repair: bool = False) -> dict:
    if repair:
        return await client.post(f"/api/library/{work_id}/reconcile")
    return await client.get(f"/api/library/{work_id}/reconcile")
