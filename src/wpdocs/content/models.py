"""Read models returned by the API layer.

Attributes are snake_case in Python; serialized output uses the camelCase
names the PHP front end consumes (``model_dump(by_alias=True)``).
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ReadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TranslationRef(ReadModel):
    id: int
    label: str = ""


class Attachment(ReadModel):
    label: str = ""
    mime_type: str = Field("", alias="mimeType")
    url: str = ""
    size: Union[int, str] = ""  # "" when the size could not be resolved


class Box(ReadModel):
    title: str
    body: str = ""


class Document(ReadModel):
    """A post or page.

    Category buckets and translations are always present. body, attachments
    and boxes are only set in full fidelity.
    """
    id: int
    type: str
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    lang: Optional[str] = None
    title: str = ""
    short_title: str = Field("", alias="shortTitle")
    sub_title: str = Field("", alias="subTitle")
    period: str = ""
    description: str = ""
    abstract: str = ""
    image: str = ""
    types: List[int] = []
    themes: List[int] = []
    regions: List[int] = []
    tags: List[str] = []
    translations: Dict[str, TranslationRef] = {}
    body: Optional[str] = None
    attachments: Optional[List[Attachment]] = None
    boxes: Optional[List[Box]] = None


class FilteredList(ReadModel):
    list: List[Document] = []
    count: int = 0


class MenuNode(ReadModel):
    id: int
    label: str = ""
    pages: List["MenuNode"] = []


class CategoryEntry(ReadModel):
    id: int
    label: str = ""
    description: str = ""
    external_ref: Optional[str] = Field(None, alias="I.Stat")
    pages: List["CategoryEntry"] = []

    def to_dict(self) -> dict:
        # I.Stat is part of the output contract even when empty
        return self.model_dump(mode="json", by_alias=True)


class CategoryFamilyNode(ReadModel):
    label: str = ""
    pages: List[CategoryEntry] = []

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TagCount(ReadModel):
    name: str
    count: int


MenuNode.model_rebuild()
CategoryEntry.model_rebuild()
