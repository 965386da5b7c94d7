import pytest
from pagetrail.mcp.client import PagetrailClient

DUNE = {"open_library_key": "/works/OL1W", "title": "Dune", "author_name": "Frank Herbert"}


@pytest.fixture
async def pt(client):
    await client.post("/api/auth/signup", json={"username": "mcp", "email": "mcp@example.com", "password": "pw"})
    client.cookies.clear()
    pt = PagetrailClient(client)
    await pt.login("mcp@example.com", "pw")
    return pt


@pytest.mark.asyncio
async def test_login_sets_bearer_header(pt):
    assert pt.http.headers["Authorization"].startswith("Bearer ")
    result = await pt.get("/api/auth/session")
    assert result["message"].startswith("Session is active")


@pytest.mark.asyncio
async def test_login_bad_credentials(client):
    pt = PagetrailClient(client)
    result = await pt.login("nobody@example.com", "pw")
    assert result["error"] is True
    assert result["status"] == 401
    assert "Authorization" not in pt.http.headers


@pytest.mark.asyncio
async def test_client_get_success(pt):
    await pt.post("/api/library", json=DUNE)
    result = await pt.get("/api/library")
    assert isinstance(result, list)
    assert result[0]["title"] == "Dune"


@pytest.mark.asyncio
async def test_client_get_404(pt):
    result = await pt.get("/api/library/999")
    assert result["error"] is True
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_client_post_409(pt):
    await pt.post("/api/library", json=DUNE)
    result = await pt.post("/api/library", json=DUNE)
    assert result["error"] is True
    assert result["status"] == 409
    assert result["detail"] == "Book already added to your library."
