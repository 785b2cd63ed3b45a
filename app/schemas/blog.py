from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.errors import UnsupportedSortKind


class SortKind(str, Enum):
    LATEST = "latest"
    OLDEST = "oldest"

    @classmethod
    def parse(cls, value: str | None) -> "SortKind":
        if not value:
            return cls.LATEST
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedSortKind(value) from None

    @property
    def direction(self) -> str:
        return "descending" if self is SortKind.LATEST else "ascending"


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    description: str = ""
    coverImage: str = ""
    tags: List[str] = Field(default_factory=list)
    author: str = ""
    date: str = ""
    modifiedDate: str
    slug: str


class TagFilterItem(BaseModel):
    id: str
    name: str
    count: int
