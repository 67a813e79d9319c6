"""Shared data model for the documentation API and its clients."""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class DocType(str, Enum):
    """Documentation collection a request targets."""
    DOC = "Doc"
    GUIDE = "Guide"


class IndexItem(BaseModel):
    """One documentation folder and its pages, in display order."""
    category: str
    children: List[str] = Field(default_factory=list)


class FolderItem(BaseModel):
    """Display metadata for a category."""
    category: str
    icon: str = ""
    name: str


class RecommendedItem(BaseModel):
    """A curated shortcut link."""
    id: int
    title: str
    anchor: str = ""
    category: str = ""
    page: str = ""
    time: int = 0
    icon: str = ""


class DocumentationFile(BaseModel):
    file: str


class FilesResponse(BaseModel):
    files: List[str]


class IndexResponse(BaseModel):
    index: List[IndexItem]


class CategoriesResponse(BaseModel):
    categories: List[FolderItem]


class RecommendedItemsResponse(BaseModel):
    recommended_items: List[RecommendedItem]


class RefreshResponse(BaseModel):
    """Everything the client store caches, fetched in one call."""
    docIndex: List[IndexItem]
    guideIndex: List[IndexItem]
    recommendedDocItems: List[RecommendedItem]
    recommendedGuideItems: List[RecommendedItem]


class UplinkMessage(BaseModel):
    """Message delivered on the platform exchange."""
    task: str
    sender: str = "unknown"


def placeholder_item() -> RecommendedItem:
    """Item shown when no recommendations are configured."""
    return RecommendedItem(id=1, title="None_Available", anchor="", category="", page="", time=1, icon="")


def with_placeholder(items: List[RecommendedItem]) -> List[RecommendedItem]:
    """Return ``items``, or the one-element placeholder list when empty."""
    return items if items else [placeholder_item()]
