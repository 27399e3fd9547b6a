"""Plain row records returned by the repository functions."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class MenuRootRow:
    id: int
    label: str


@dataclass(frozen=True)
class ChildRow:
    id: int
    parent_id: int
    title: str
    short_title: Optional[str] = None


@dataclass(frozen=True)
class FamilyRow:
    family: str
    label: str


@dataclass(frozen=True)
class CategoryEntryRow:
    id: int
    label: str
    family: Optional[str]
    description: str = ""
    external_ref: Optional[str] = None


@dataclass(frozen=True)
class TagCountRow:
    name: str
    count: int


@dataclass(frozen=True)
class DocumentRow:
    id: int
    post_type: str
    created: Optional[datetime]
    modified: Optional[datetime]
    lang: Optional[str]
    title: str
    body: Optional[str] = None  # only fetched in full fidelity


@dataclass(frozen=True)
class CategoryLinkRow:
    id: int
    family: Optional[str]
    taxonomy: Optional[str]
    target_id: int
    label: Optional[str]


@dataclass(frozen=True)
class MetaRow:
    id: int
    key: Optional[str]
    value: Optional[str]


@dataclass(frozen=True)
class TranslationRow:
    lang: str
    target_id: int
    title: str
    short_title: Optional[str] = None


@dataclass(frozen=True)
class AttachmentRow:
    label: str
    mime_type: str
    url: str


@dataclass(frozen=True)
class BodyRow:
    id: int
    body: str


@dataclass(frozen=True)
class FilteredIds:
    ids: List[int]
    count: int
