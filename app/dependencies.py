from fastapi import Depends

from app.db.notion import NotionClient
from app.errors import MissingConfiguration
from app.repos.posts_repo import NotionPostsRepo
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


async def get_notion(current_settings: Settings = Depends(get_settings)):
    """
    Create a Notion client for the duration of one request.
    Configuration is checked here so a missing token fails on first use.
    """
    client = NotionClient.from_settings(current_settings)
    try:
        yield client
    finally:
        await client.aclose()


def get_posts_repo(
    notion=Depends(get_notion),
    current_settings: Settings = Depends(get_settings),
):
    if not current_settings.NOTION_DATABASE_ID:
        raise MissingConfiguration("NOTION_DATABASE_ID")
    return NotionPostsRepo(
        notion,
        database_id=current_settings.NOTION_DATABASE_ID,
        all_tag_name=current_settings.ALL_TAG_NAME,
    )


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)
