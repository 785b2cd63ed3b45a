import logging
from typing import List, Optional

import httpx

from app.errors import MissingConfiguration, UpstreamUnavailable
from app.schemas.notion import QueryResponse
from app.settings import Settings

logger = logging.getLogger(__name__)


class NotionClient:
    """Thin async wrapper over the Notion REST API."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "NotionClient":
        if not config.NOTION_TOKEN:
            raise MissingConfiguration("NOTION_TOKEN")
        return cls(
            config.NOTION_TOKEN,
            base_url=config.NOTION_API_URL,
            notion_version=config.NOTION_VERSION,
            timeout=config.NOTION_TIMEOUT,
            transport=transport,
        )

    async def query_database(
        self,
        database_id: str,
        *,
        filter: Optional[dict] = None,
        sorts: Optional[List[dict]] = None,
    ) -> List[dict]:
        """Run a database query and return the raw result objects of the first page."""
        body: dict = {}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts

        try:
            response = await self.http.post(
                f"/databases/{database_id}/query", json=body
            )
            response.raise_for_status()
            payload = QueryResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Notion query for {database_id} failed with {e.response.status_code}: {e.response.text}"
            )
            raise UpstreamUnavailable(
                f"Notion answered {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"HTTP connection error querying Notion: {e}")
            raise UpstreamUnavailable(str(e)) from e
        except ValueError as e:
            logger.error(f"Unreadable Notion response for {database_id}: {e}")
            raise UpstreamUnavailable("Invalid response from Notion") from e

        if payload.has_more:
            logger.debug(
                f"Notion query for {database_id} has more results; only the first page is used"
            )
        return payload.results

    async def aclose(self) -> None:
        await self.http.aclose()

