import pytest
from pagetrail.mcp.client import PagetrailClient
from pagetrail.mcp.server import create_mcp_server


@pytest.mark.asyncio
async def test_mcp_server_name(client):
    mcp = create_mcp_server(PagetrailClient(client))
    assert mcp.name == "pagetrail"
