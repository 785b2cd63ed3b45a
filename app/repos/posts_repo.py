import logging
from typing import List, Optional

from app.schemas.blog import SortKind
from app.schemas.notion import (
    DATE_PROPERTY,
    PUBLISHED,
    SLUG_PROPERTY,
    STATUS_PROPERTY,
    TAGS_PROPERTY,
)

logger = logging.getLogger(__name__)

ALL_TAG_ID = "all"


def published_condition() -> dict:
    return {"property": STATUS_PROPERTY, "select": {"equals": PUBLISHED}}


class NotionPostsRepo:
    def __init__(self, client, database_id: str, all_tag_name: str = "전체"):
        self.client = client
        self.database_id = database_id
        self.all_tag_name = all_tag_name

    def is_all_tag(self, tag: Optional[str]) -> bool:
        return not tag or tag in (ALL_TAG_ID, self.all_tag_name)

    async def list_published_pages(
        self, tag: Optional[str] = None, sort: SortKind = SortKind.LATEST
    ) -> List[dict]:
        conditions = [published_condition()]
        if not self.is_all_tag(tag):
            conditions.append(
                {"property": TAGS_PROPERTY, "multi_select": {"contains": tag}}
            )
        query_filter = conditions[0] if len(conditions) == 1 else {"and": conditions}

        logger.debug(f"Querying published pages (tag={tag!r}, sort={sort.value})")
        return await self.client.query_database(
            self.database_id,
            filter=query_filter,
            sorts=[{"property": DATE_PROPERTY, "direction": sort.direction}],
        )

    async def find_pages_by_slug(self, slug: str) -> List[dict]:
        return await self.client.query_database(
            self.database_id,
            filter={
                "and": [
                    {"property": SLUG_PROPERTY, "rich_text": {"equals": slug}},
                    published_condition(),
                ]
            },
        )
