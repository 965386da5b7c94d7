from httpx import AsyncClient, Response


class PagetrailClient:
    """Thin wrapper around httpx.AsyncClient that translates HTTP responses
    into dicts suitable for MCP tool returns."""

    def __init__(self, http: AsyncClient) -> None:
        self.http = http

    async def login(self, email: str, password: str) -> dict:
        """Sign in and send the session token with every later request."""
        result = await self.post("/api/auth/login", json={"email": email, "password": password})
        if not result.get("error"):
            self.http.headers["Authorization"] = f"Bearer {result['token']}"
        return result

    async def get(self, path: str, **kwargs) -> dict | list:
        resp = await self.http.get(path, **kwargs)
        return self._handle(resp)

    async def post(self, path: str, **kwargs) -> dict | list:
        resp = await self.http.post(path, **kwargs)
        return self._handle(resp)

    def _handle(self, resp: Response) -> dict | list:
        body = resp.json() if resp.content else {}
        if resp.status_code >= 500 and not (isinstance(body, dict) and body.get("partial")):
            raise RuntimeError(f"Server error {resp.status_code}: {resp.text}")
        if resp.status_code >= 400:
            detail = body.get("message", resp.text) if isinstance(body, dict) else resp.text
            result = {"error": True, "status": resp.status_code, "detail": detail}
            if isinstance(body, dict) and body.get("partial"):
                result["partial"] = True
                result["session"] = body.get("session")
            return result
        return body
