from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Notion
    NOTION_TOKEN: str = ""
    NOTION_DATABASE_ID: str = ""
    NOTION_API_URL: str = "https://api.notion.com/v1"
    NOTION_VERSION: str = "2022-06-28"
    NOTION_TIMEOUT: float = 10.0

    # Blog
    ALL_TAG_NAME: str = "전체"
    BLOG_TITLE: str = "Blog"
    BLOG_AUTHOR: str = ""
    BLOG_BIO: str = ""
    CONTACT_EMAIL: str = ""
    GITHUB_URL: str = ""

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
