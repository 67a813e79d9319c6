"""Client-side cache of documentation indices and recommended items.

Indices, version and language live in persistent (local) storage; recommended
items only in session storage. Cached values are replaced only by a forced
fetch, a fetch into an empty slot, or ``refresh()``.
"""

import logging
from typing import Dict, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from server.models import DocType, IndexItem, RecommendedItem
from .fetch import DocumentationClient
from .storage import MemoryStorage

logger = logging.getLogger(__name__)

VALID_VERSIONS = ["v1"]
VALID_LANGUAGES = ["en-US"]
DEFAULT_VERSION = "v1"
DEFAULT_LANGUAGE = "en-US"

VERSION_KEY = "documentationVersion"
LANGUAGE_KEY = "language"

# Storage slot of each collection, per documentation type
INDEX_SLOTS: Dict[DocType, str] = {
    DocType.DOC: "docIndex",
    DocType.GUIDE: "guideIndex",
}
RECOMMENDED_SLOTS: Dict[DocType, str] = {
    DocType.DOC: "recommendedDocItems",
    DocType.GUIDE: "recommendedGuideItems",
}

_index_adapter = TypeAdapter(List[IndexItem])
_recommended_adapter = TypeAdapter(List[RecommendedItem])


def _read_slot(storage: MemoryStorage, slot: str, adapter: TypeAdapter) -> list:
    """Cached list in ``slot``; a stale or corrupt entry reads as empty."""
    try:
        return adapter.validate_python(storage.get(slot, []))
    except ValidationError as e:
        logger.warning(f"Discarding invalid cached {slot}: {e.error_count()} error(s)")
        return []


class DocumentationStore:
    """Owned cache over the documentation API."""

    def __init__(self, client: DocumentationClient, local: Optional[MemoryStorage] = None,
                 session: Optional[MemoryStorage] = None):
        self.client = client
        self.local = local if local is not None else MemoryStorage()
        self.session = session if session is not None else MemoryStorage()

    # Version / language

    @property
    def version(self) -> str:
        return self.local.get(VERSION_KEY, DEFAULT_VERSION)

    @property
    def language(self) -> str:
        return self.local.get(LANGUAGE_KEY, DEFAULT_LANGUAGE)

    def set_version(self, new_version: str) -> None:
        """Change the documentation version; unknown versions are ignored."""
        if new_version not in VALID_VERSIONS:
            return
        self.local.set(VERSION_KEY, new_version)

    def set_language(self, new_language: str) -> None:
        """Change the documentation language; unknown languages are ignored."""
        if new_language not in VALID_LANGUAGES:
            return
        self.local.set(LANGUAGE_KEY, new_language)

    # Cached collections

    def cached_index(self, doc_type: Union[str, DocType]) -> List[IndexItem]:
        return _read_slot(self.local, INDEX_SLOTS[DocType(doc_type)], _index_adapter)

    def cached_recommended_items(self, doc_type: Union[str, DocType]) -> List[RecommendedItem]:
        return _read_slot(self.session, RECOMMENDED_SLOTS[DocType(doc_type)], _recommended_adapter)

    async def get_index(self, force: bool, doc_type: Union[str, DocType]) -> List[IndexItem]:
        """Return the index, fetching it when the cache is empty or ``force`` is set.

        When the fetch fails the existing cache is returned untouched.
        """
        doc_type = DocType(doc_type)
        cached = self.cached_index(doc_type)
        if cached and not force:
            return cached

        data = await self.client.fetch_documentation_index(self.version, self.language, doc_type)
        if data is False:
            return cached
        try:
            self.local.set(INDEX_SLOTS[doc_type], _index_adapter.dump_python(data.index))
        except OSError as e:
            logger.warning(f"Could not persist the {doc_type.value} index: {e}")
        return data.index

    async def get_recommended_items(self, force: bool, doc_type: Union[str, DocType]) -> List[RecommendedItem]:
        """Return recommended items, fetching them when empty or forced."""
        doc_type = DocType(doc_type)
        cached = self.cached_recommended_items(doc_type)
        if cached and not force:
            return cached

        data = await self.client.fetch_recommended_items(self.language, doc_type)
        if data is False:
            return cached
        self.session.set(RECOMMENDED_SLOTS[doc_type], _recommended_adapter.dump_python(data.recommended_items))
        return data.recommended_items

    # Lookups against the cached index

    def validate_folder(self, folder: Optional[str], doc_type: Union[str, DocType]) -> Optional[IndexItem]:
        """Return the index entry for ``folder``, or None when it is unknown."""
        if not folder:
            return None
        for item in self.cached_index(doc_type):
            if item.category == folder:
                return item
        return None

    def validate_page(self, folder: Optional[str], name: Optional[str],
                      doc_type: Union[str, DocType]) -> bool:
        """True when ``name`` is a page of ``folder``."""
        if not folder or not name:
            return False
        target = self.validate_folder(folder, doc_type)
        if target is None:
            return False
        return name in target.children

    def get_category_list(self, doc_type: Union[str, DocType], category_name: str) -> Optional[List[str]]:
        """Page names of a category, None when the category is not cached."""
        target = self.validate_folder(category_name, doc_type)
        return target.children if target else None

    async def refresh(self) -> bool:
        """Reload every cached collection with one request.

        Either all four slots are replaced or, on failure, none are.
        """
        data = await self.client.fetch_documentation_refresh(self.version, self.language)
        if data is False:
            logger.info("Documentation refresh failed, keeping cached data")
            return False

        try:
            self.local.update({
                INDEX_SLOTS[DocType.DOC]: _index_adapter.dump_python(data.docIndex),
                INDEX_SLOTS[DocType.GUIDE]: _index_adapter.dump_python(data.guideIndex),
            })
        except OSError as e:
            logger.warning(f"Could not persist refreshed indices, keeping cached data: {e}")
            return False
        self.session.update({
            RECOMMENDED_SLOTS[DocType.DOC]: _recommended_adapter.dump_python(data.recommendedDocItems),
            RECOMMENDED_SLOTS[DocType.GUIDE]: _recommended_adapter.dump_python(data.recommendedGuideItems),
        })
        return True
