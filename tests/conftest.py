from app.errors import NotFound
from app.schemas.blog import Post, SortKind, TagFilterItem


def make_page(
    page_id: str,
    *,
    title: str | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
    author: str | None = None,
    date: str | None = None,
    slug: str | None = None,
    status: str = "Published",
    cover: dict | None = None,
    last_edited_time: str = "2024-05-01T00:00:00.000Z",
    **overrides,
) -> dict:
    """
    Build a Notion page payload the way the database query endpoint returns it.
    Pass ``overrides`` to replace individual raw properties.
    """

    def rich_text(value):
        return [{"type": "text", "plain_text": value}] if value is not None else []

    properties = {
        "제목": {"id": "title", "type": "title", "title": rich_text(title)},
        "Description": {
            "id": "desc",
            "type": "rich_text",
            "rich_text": rich_text(description),
        },
        "Tags": {
            "id": "tags",
            "type": "multi_select",
            "multi_select": [{"id": name, "name": name} for name in tags or []],
        },
        "Author": {
            "id": "author",
            "type": "people",
            "people": (
                [{"object": "user", "id": "u1", "name": author}] if author else []
            ),
        },
        "Date": {
            "id": "date",
            "type": "date",
            "date": {"start": date, "end": None} if date else None,
        },
        "slug": {"id": "slug", "type": "rich_text", "rich_text": rich_text(slug)},
        "Status": {
            "id": "status",
            "type": "select",
            "select": {"id": "s", "name": status},
        },
    }
    properties.update(overrides)
    return {
        "object": "page",
        "id": page_id,
        "cover": cover,
        "last_edited_time": last_edited_time,
        "properties": properties,
    }


def _matches(page: dict, condition: dict) -> bool:
    if "and" in condition:
        return all(_matches(page, c) for c in condition["and"])

    prop = page.get("properties", {}).get(condition["property"], {})
    if "select" in condition:
        selected = prop.get("select") or {}
        return selected.get("name") == condition["select"]["equals"]
    if "multi_select" in condition:
        names = [o["name"] for o in prop.get("multi_select", [])]
        return condition["multi_select"]["contains"] in names
    if "rich_text" in condition:
        runs = prop.get("rich_text", [])
        text = "".join(r.get("plain_text", "") for r in runs)
        return text == condition["rich_text"]["equals"]
    raise AssertionError(f"Unsupported filter condition: {condition}")


def _date_key(page: dict) -> str:
    date = page.get("properties", {}).get("Date", {}).get("date") or {}
    return date.get("start") or ""


class FakeNotionClient:
    """
    In-memory Notion stand-in that evaluates the filter and sort expressions
    it receives against a fixed list of raw pages.
    """

    def __init__(self, pages: list[dict], error: Exception | None = None):
        self.pages = pages
        self.error = error
        self.queries = []

    async def query_database(self, database_id, *, filter=None, sorts=None):
        self.queries.append({"database_id": database_id, "filter": filter, "sorts": sorts})
        if self.error:
            raise self.error

        results = [
            page
            for page in self.pages
            if "properties" not in page or filter is None or _matches(page, filter)
        ]
        for sort in reversed(sorts or []):
            assert sort["property"] == "Date"
            results.sort(key=_date_key, reverse=sort["direction"] == "descending")
        return results


class FakeRepo:
    """
    Minimal repo stand-in used in service tests.
    """

    def __init__(self, pages, all_tag_name: str = "전체"):
        self.pages = pages
        self.all_tag_name = all_tag_name
        self.calls = []

    async def list_published_pages(self, tag=None, sort=None):
        self.calls.append(("list", tag, sort))
        return list(self.pages)

    async def find_pages_by_slug(self, slug):
        self.calls.append(("slug", slug))
        return [
            page
            for page in self.pages
            if any(
                run.get("plain_text") == slug
                for run in page["properties"]["slug"]["rich_text"]
            )
        ]


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, posts=None, tags=None, error: Exception | None = None):
        self.posts = posts or []
        self.tags = tags or []
        self.error = error
        self.calls = []

    async def list_posts(self, tag=None, sort=None):
        self.calls.append(("list_posts", tag, sort))
        if self.error:
            raise self.error
        SortKind.parse(sort)
        return self.posts

    async def get_post(self, slug: str):
        self.calls.append(("get_post", slug))
        if self.error:
            raise self.error
        for post in self.posts:
            if post.slug == slug:
                return post
        raise NotFound(slug)

    async def list_tags(self):
        self.calls.append(("list_tags",))
        if self.error:
            raise self.error
        return self.tags


def make_post(slug: str, **fields) -> Post:
    data = {
        "id": f"id-{slug}",
        "title": slug.replace("-", " ").title(),
        "modifiedDate": "2024-05-01T00:00:00.000Z",
        "slug": slug,
    }
    data.update(fields)
    return Post(**data)


def make_tag(name: str, count: int, tag_id: str | None = None) -> TagFilterItem:
    return TagFilterItem(id=tag_id or name, name=name, count=count)
