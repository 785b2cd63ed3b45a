"""
Typed views over the subset of Notion's page payload the blog reads.

Notion tags every property value and every cover with a ``type`` field and
nests the variant payload under a key of the same name. Each variant gets its
own model and the unions below dispatch on ``type``.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from app.errors import MalformedDocument

# Property names in the blog database
TITLE_PROPERTY = "제목"
DESCRIPTION_PROPERTY = "Description"
TAGS_PROPERTY = "Tags"
AUTHOR_PROPERTY = "Author"
DATE_PROPERTY = "Date"
SLUG_PROPERTY = "slug"
STATUS_PROPERTY = "Status"
PUBLISHED = "Published"


class NotionModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RichTextItem(NotionModel):
    plain_text: str = ""


class SelectOption(NotionModel):
    name: str


class NotionUser(NotionModel):
    # partial user objects only carry an id
    id: str
    name: Optional[str] = None


class DateValue(NotionModel):
    start: Optional[str] = None
    end: Optional[str] = None


class TitleProperty(NotionModel):
    type: Literal["title"]
    title: List[RichTextItem] = Field(default_factory=list)


class RichTextProperty(NotionModel):
    type: Literal["rich_text"]
    rich_text: List[RichTextItem] = Field(default_factory=list)


class MultiSelectProperty(NotionModel):
    type: Literal["multi_select"]
    multi_select: List[SelectOption] = Field(default_factory=list)


class SelectProperty(NotionModel):
    type: Literal["select"]
    select: Optional[SelectOption] = None


class PeopleProperty(NotionModel):
    type: Literal["people"]
    people: List[NotionUser] = Field(default_factory=list)


class DateProperty(NotionModel):
    type: Literal["date"]
    date: Optional[DateValue] = None


PropertyValue = Annotated[
    Union[
        TitleProperty,
        RichTextProperty,
        MultiSelectProperty,
        SelectProperty,
        PeopleProperty,
        DateProperty,
    ],
    Field(discriminator="type"),
]


class FileObject(NotionModel):
    url: str
    expiry_time: Optional[str] = None


class ExternalCover(NotionModel):
    type: Literal["external"]
    external: FileObject


class FileCover(NotionModel):
    type: Literal["file"]
    file: FileObject


Cover = Annotated[Union[ExternalCover, FileCover], Field(discriminator="type")]

_property_adapter = TypeAdapter(PropertyValue)
_cover_adapter = TypeAdapter(Cover)


class NotionPage(NotionModel):
    id: str
    last_edited_time: str
    cover: Optional[Any] = None
    properties: Dict[str, Any]

    def get_property(self, name: str) -> Optional[PropertyValue]:
        """
        Return the typed value of a property, or None when the page has no
        property by that name or its value is null.

        Raises MalformedDocument when the property carries an unknown type tag
        or its payload does not match the tag.
        """
        raw = self.properties.get(name)
        if raw is None:
            return None
        try:
            return _property_adapter.validate_python(raw)
        except ValidationError as e:
            raise MalformedDocument(
                f"Property {name!r} on page {self.id} is malformed: {e}"
            ) from e

    def get_cover(self) -> Optional[Union[ExternalCover, FileCover]]:
        if not self.cover:
            return None
        try:
            return _cover_adapter.validate_python(self.cover)
        except ValidationError as e:
            raise MalformedDocument(f"Cover on page {self.id} is malformed: {e}") from e


class QueryResponse(NotionModel):
    results: List[dict] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None
