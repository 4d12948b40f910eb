"""
Sanity query executor: runs rendered GROQ against the HTTP query API.
Auth: optional read token (Bearer). Drafts are only returned with a token on private datasets.
"""
import json
import logging
from typing import Any

import httpx

from docpager.config import Settings, settings
from docpager.schemas.query import Document, QueryDescription
from docpager.services.groq import render_count, render_query
from docpager.services.http_client import get_http_client

logger = logging.getLogger(__name__)


class SanityQueryError(RuntimeError):
    """Query API answered 2xx but the body is not a usable query result."""


def query_url(project_id: str, dataset: str, api_version: str, use_cdn: bool = False) -> str:
    host = "apicdn.sanity.io" if use_cdn else "api.sanity.io"
    version = api_version.strip().lstrip("v")
    return f"https://{project_id}.{host}/v{version}/data/query/{dataset}"


def _log_response_error(method: str, url: str, response: httpx.Response) -> None:
    """Log HTTP error without the auth header."""
    body = (response.text or "")[:500]
    logger.warning(
        "Sanity %s %s -> %s body=%s",
        method,
        url,
        response.status_code,
        body,
    )


class SanityExecutor:
    """QueryExecutor backed by https://<project>.api.sanity.io/v<version>/data/query/<dataset>.

    Uses `client` when given, otherwise the shared client from http_client.
    """

    def __init__(
        self,
        project_id: str,
        dataset: str = "production",
        *,
        api_version: str = "2021-03-25",
        token: str = "",
        use_cdn: bool = False,
        perspective: str = "raw",
        client: httpx.AsyncClient | None = None,
    ):
        if not project_id.strip():
            raise ValueError("project_id is required")
        self.url = query_url(project_id.strip(), dataset, api_version, use_cdn)
        self._token = token.strip()
        self._perspective = perspective
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings = settings, client: httpx.AsyncClient | None = None) -> "SanityExecutor":
        config.validate_sanity_config()
        return cls(
            config.sanity_project_id,
            config.sanity_dataset,
            api_version=config.sanity_api_version,
            token=config.sanity_token,
            use_cdn=config.sanity_use_cdn,
            perspective=config.sanity_perspective,
            client=client,
        )

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"} if self._token else {}

    def _params(self, query: str, params: dict[str, Any] | None) -> dict[str, str]:
        out = {"query": query}
        if self._perspective:
            out["perspective"] = self._perspective
        for name, value in (params or {}).items():
            out[f"${name}"] = json.dumps(value)
        return out

    async def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """GET a GROQ query and return its `result`."""
        client = self._client or get_http_client()
        r = await client.get(self.url, params=self._params(query, params), headers=self._headers())
        if r.status_code >= 400:
            _log_response_error("GET", self.url, r)
        r.raise_for_status()
        data = r.json() if r.content else {}
        if not isinstance(data, dict) or "result" not in data:
            raise SanityQueryError(f"Sanity response has no 'result': {str(data)[:200]}")
        logger.debug("Sanity query took %sms", data.get("ms"))
        return data["result"]

    async def execute(self, description: QueryDescription) -> list[Document]:
        query, params = render_query(description)
        result = await self.fetch(query, params)
        if result is None:
            return []
        if not isinstance(result, list):
            raise SanityQueryError(f"Expected a list of documents, got {type(result).__name__}")
        return [item for item in result if isinstance(item, dict)]

    async def count(self, description: QueryDescription) -> int:
        query, params = render_count(description)
        result = await self.fetch(query, params)
        if not isinstance(result, (int, float)):
            raise SanityQueryError(f"Expected a count, got {type(result).__name__}")
        return int(result)
