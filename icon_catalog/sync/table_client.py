"""
Client for the external "Icon Inventory" table (AppSheet API v2).

Rows are requested with the ``Find`` action, one page at a time. A response is
either a bare JSON array (a single page) or an object with ``Rows`` and
``NextPageToken``; an empty or missing token ends the listing.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging

import httpx

from icon_catalog.config import Settings, get_settings
from icon_catalog.errors import SourceError

logger = logging.getLogger("uvicorn")

Row = Dict[str, Any]


@dataclass
class RowPage:
    rows: List[Row]
    next_page_token: Optional[str] = None


class TableClient:
    """Cliente paginado da tabela externa; o ``httpx.AsyncClient`` pode ser injetado."""

    def __init__(
        self,
        access_key: Optional[str],
        region: str,
        app_id: str,
        table: str,
        page_size: int = 500,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.access_key = access_key
        self.region = region
        self.app_id = app_id
        self.table = table
        self.page_size = page_size
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "TableClient":
        settings = settings or get_settings()
        return cls(
            access_key=settings.appsheet_access_key,
            region=settings.appsheet_region,
            app_id=settings.appsheet_app_id,
            table=settings.appsheet_table,
            page_size=settings.table_page_size,
            timeout=settings.table_timeout,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"<TableClient(app_id='{self.app_id}', table='{self.table}')>"

    @property
    def base_url(self) -> str:
        return f"https://{self.region}/api/v2/apps/{self.app_id}/tables/{quote(self.table)}/Action"

    def _payload(self, page_token: Optional[str]) -> Dict[str, Any]:
        properties: Dict[str, Any] = {"Locale": "en-US", "PageSize": self.page_size}
        if page_token:
            properties["PageToken"] = page_token
        return {"Action": "Find", "Properties": properties}

    @staticmethod
    def _parse_page(body: Any) -> RowPage:
        if isinstance(body, list):
            return RowPage(rows=body)
        if isinstance(body, dict):
            rows = body.get("Rows")
            if not isinstance(rows, list):
                raise SourceError("Failed to parse response: 'Rows' is missing or not a list")
            token = body.get("NextPageToken")
            return RowPage(rows=rows, next_page_token=str(token) if token else None)
        raise SourceError(f"Failed to parse response: unexpected {type(body).__name__}")

    async def _post(self, client: httpx.AsyncClient, page_token: Optional[str]) -> RowPage:
        try:
            response = await client.post(
                self.base_url,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "ApplicationAccessKey": self.access_key or "",
                },
                json=self._payload(page_token),
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            raise SourceError(f"Failed to perform inventory table request: {e}") from e
        if response.status_code != 200:
            raise SourceError(f"Inventory table request failed with status {response.status_code}")
        try:
            body = response.json()
        except ValueError as e:
            raise SourceError("Failed to parse response: invalid JSON") from e
        return self._parse_page(body)

    async def fetch_page(self, page_token: Optional[str] = None) -> RowPage:
        if not self.access_key:
            raise SourceError("Missing APPSHEET_ACCESS_KEY")
        if self._http_client is not None:
            return await self._post(self._http_client, page_token)
        async with httpx.AsyncClient() as client:
            return await self._post(client, page_token)
