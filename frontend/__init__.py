"""Client-side documentation store and API helpers."""

from .documentation_store import DocumentationStore, VALID_LANGUAGES, VALID_VERSIONS
from .fetch import DocumentationClient
from .storage import JSONFileStorage, MemoryStorage

__all__ = [
    'DocumentationStore',
    'DocumentationClient',
    'JSONFileStorage',
    'MemoryStorage',
    'VALID_LANGUAGES',
    'VALID_VERSIONS'
]
