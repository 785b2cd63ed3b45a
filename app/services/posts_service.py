import logging
from collections import Counter
from typing import Callable, List, Optional, TypeVar

from pydantic import ValidationError

from app.errors import MalformedDocument, NotFound
from app.repos.posts_repo import ALL_TAG_ID
from app.schemas.blog import Post, SortKind, TagFilterItem
from app.schemas.notion import (
    AUTHOR_PROPERTY,
    DATE_PROPERTY,
    DESCRIPTION_PROPERTY,
    SLUG_PROPERTY,
    TAGS_PROPERTY,
    TITLE_PROPERTY,
    DateProperty,
    ExternalCover,
    FileCover,
    MultiSelectProperty,
    NotionPage,
    PeopleProperty,
    RichTextProperty,
    TitleProperty,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PostsService:
    def __init__(self, repo):
        self.repo = repo

    async def list_posts(
        self, tag: Optional[str] = None, sort: str | SortKind | None = None
    ) -> List[Post]:
        sort_kind = sort if isinstance(sort, SortKind) else SortKind.parse(sort)
        pages = await self.repo.list_published_pages(tag=tag, sort=sort_kind)
        return parse_pages(pages)

    async def get_post(self, slug: str) -> Post:
        pages = await self.repo.find_pages_by_slug(slug)
        posts = parse_pages(pages)
        if not posts:
            raise NotFound(f"No published post with slug {slug!r}")
        if len(posts) > 1:
            logger.warning(f"{len(posts)} published posts share slug {slug!r}")
        return posts[0]

    async def list_tags(self) -> List[TagFilterItem]:
        posts = await self.list_posts()
        return count_tags(posts, all_tag_name=self.repo.all_tag_name)


def parse_pages(pages: List[dict]) -> List[Post]:
    posts = []
    for raw in pages:
        page = _load_page(raw)
        if page:
            posts.append(get_post_metadata(page))
    return posts


def _load_page(raw: dict) -> Optional[NotionPage]:
    if "properties" not in raw:
        logger.warning(f"Skipping Notion result without properties: {raw.get('id')}")
        return None
    try:
        return NotionPage.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Skipping malformed Notion page {raw.get('id')}: {e}")
        return None


def get_post_metadata(page: NotionPage) -> Post:
    """Map a Notion page onto a Post, defaulting each field on its own."""
    return Post(
        id=page.id,
        title=_field(page, TITLE_PROPERTY, _title, ""),
        description=_field(page, DESCRIPTION_PROPERTY, _first_rich_text, ""),
        coverImage=_cover_image(page),
        tags=_field(page, TAGS_PROPERTY, _tag_names, []),
        author=_field(page, AUTHOR_PROPERTY, _first_person, ""),
        date=_field(page, DATE_PROPERTY, _date_start, ""),
        modifiedDate=page.last_edited_time,
        slug=_field(page, SLUG_PROPERTY, _first_rich_text, "") or page.id,
    )


def _field(
    page: NotionPage, name: str, extract: Callable[[object], Optional[T]], default: T
) -> T:
    try:
        prop = page.get_property(name)
    except MalformedDocument as e:
        logger.debug(f"Using default for {name}: {e}")
        return default
    value = extract(prop)
    return default if value is None else value


def _title(prop) -> Optional[str]:
    if isinstance(prop, TitleProperty) and prop.title:
        return prop.title[0].plain_text
    return None


def _first_rich_text(prop) -> Optional[str]:
    if isinstance(prop, RichTextProperty) and prop.rich_text:
        return prop.rich_text[0].plain_text
    return None


def _tag_names(prop) -> Optional[List[str]]:
    if isinstance(prop, MultiSelectProperty):
        return [option.name for option in prop.multi_select]
    return None


def _first_person(prop) -> Optional[str]:
    if isinstance(prop, PeopleProperty) and prop.people:
        return prop.people[0].name
    return None


def _date_start(prop) -> Optional[str]:
    if isinstance(prop, DateProperty) and prop.date:
        return prop.date.start
    return None


def _cover_image(page: NotionPage) -> str:
    try:
        cover = page.get_cover()
    except MalformedDocument as e:
        logger.debug(f"Using default cover: {e}")
        return ""
    if isinstance(cover, ExternalCover):
        return cover.external.url
    if isinstance(cover, FileCover):
        return cover.file.url
    return ""


def count_tags(posts: List[Post], all_tag_name: str = "전체") -> List[TagFilterItem]:
    """Count tag occurrences; the "all" entry always comes first."""
    counts = Counter(tag for post in posts for tag in post.tags)
    tags = sorted(
        (
            TagFilterItem(id=name, name=name, count=count)
            for name, count in counts.items()
        ),
        key=lambda item: tag_sort_key(item.name),
    )
    return [TagFilterItem(id=ALL_TAG_ID, name=all_tag_name, count=len(posts)), *tags]


def tag_sort_key(name: str):
    # case-insensitive first, lowercase ahead of uppercase on ties
    return (name.casefold(), name.swapcase())
