"""Filesystem access to documentation content.

The documentation tree is produced out of band by the deployment script and is
only ever read here. Layout::

    <root>/<version>/<language>/<Type>/index.json
    <root>/<version>/<language>/<Type>/categories.json
    <root>/<version>/<language>/<Type>/<folder>/<name>.html
    <root>/<version>/<language>/<Type>/<folder>/default.html
    <root>/recommended/<language>/<Type>.json

Every lookup either returns parsed content or raises a ``FileStoreError`` whose
``status_code`` is the HTTP status the caller should answer with.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .models import DocType, FolderItem, IndexItem, RecommendedItem
from .security.paths import is_safe_segment, is_within

logger = logging.getLogger(__name__)

DEFAULT_PAGE = "default"
PAGE_SUFFIX = ".html"
INDEX_FILE = "index.json"
CATEGORIES_FILE = "categories.json"
RECOMMENDED_DIR = "recommended"

_index_adapter = TypeAdapter(List[IndexItem])
_categories_adapter = TypeAdapter(List[FolderItem])
_recommended_adapter = TypeAdapter(List[RecommendedItem])


class FileStoreError(Exception):
    """Base error for documentation lookups."""
    status_code = 500

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class DocumentNotFound(FileStoreError):
    """Requested file or folder does not exist (404)."""
    status_code = 404


class DocumentReadError(FileStoreError):
    """File exists but could not be read or parsed (500)."""
    status_code = 500


def parse_doc_type(value: Union[str, DocType]) -> DocType:
    """Map a raw type parameter to ``DocType``; unknown types are a miss."""
    try:
        return DocType(value)
    except ValueError:
        raise DocumentNotFound(f"Unknown documentation type: {value!r}")


class DocumentStore:
    """Read-only accessor over a documentation tree."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _resolve(self, *segments: Optional[str]) -> Path:
        for segment in segments:
            if not is_safe_segment(segment):
                raise DocumentNotFound(f"Invalid path segment: {segment!r}")
        path = self.root.joinpath(*segments)
        if not is_within(self.root, path):
            raise DocumentNotFound("Path escapes documentation root", path)
        return path

    def _type_dir(self, version: str, language: str, doc_type: Union[str, DocType]) -> Path:
        doc_type = parse_doc_type(doc_type)
        path = self._resolve(version, language, doc_type.value)
        if not path.is_dir():
            raise DocumentNotFound("Documentation collection not found", path)
        return path

    def _folder_dir(self, folder: str, version: str, language: str, doc_type: Union[str, DocType]) -> Path:
        base = self._type_dir(version, language, doc_type)
        if not is_safe_segment(folder):
            raise DocumentNotFound(f"Invalid folder: {folder!r}")
        path = base / folder
        if not path.is_dir():
            raise DocumentNotFound("Folder not found", path)
        return path

    @staticmethod
    def _read_text(path: Path) -> str:
        if not path.is_file():
            raise DocumentNotFound("File not found", path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise DocumentReadError(f"Failed to read {path.name}", path) from e

    def _read_json(self, path: Path, adapter: TypeAdapter) -> Any:
        raw = self._read_text(path)
        try:
            return adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Malformed documentation data in {path}: {e}")
            raise DocumentReadError(f"Malformed data in {path.name}", path) from e

    def get_file(self, folder: str, name: str, version: str, language: str,
                 doc_type: Union[str, DocType]) -> str:
        """Return the HTML of page ``name`` in ``folder``."""
        folder_dir = self._folder_dir(folder, version, language, doc_type)
        if not is_safe_segment(name):
            raise DocumentNotFound(f"Invalid page name: {name!r}")
        return self._read_text(folder_dir / f"{name}{PAGE_SUFFIX}")

    def get_files(self, folder: str, version: str, language: str,
                  doc_type: Union[str, DocType]) -> List[str]:
        """Return the page names of ``folder``, without the landing page."""
        folder_dir = self._folder_dir(folder, version, language, doc_type)
        try:
            pages = [
                entry.stem for entry in folder_dir.iterdir()
                if entry.is_file() and entry.suffix == PAGE_SUFFIX and entry.stem != DEFAULT_PAGE
            ]
        except OSError as e:
            logger.error(f"Failed to list {folder_dir}: {e}")
            raise DocumentReadError("Failed to list folder", folder_dir) from e
        return sorted(pages)

    def get_default_file(self, folder: str, version: str, language: str,
                         doc_type: Union[str, DocType]) -> str:
        """Return the landing page of ``folder``."""
        folder_dir = self._folder_dir(folder, version, language, doc_type)
        return self._read_text(folder_dir / f"{DEFAULT_PAGE}{PAGE_SUFFIX}")

    def get_index(self, version: str, language: str, doc_type: Union[str, DocType]) -> List[IndexItem]:
        """Return the table of contents of a collection."""
        type_dir = self._type_dir(version, language, doc_type)
        return self._read_json(type_dir / INDEX_FILE, _index_adapter)

    def get_categories(self, version: str, language: str,
                       doc_type: Union[str, DocType]) -> List[FolderItem]:
        """Return display metadata for every category of a collection."""
        type_dir = self._type_dir(version, language, doc_type)
        return self._read_json(type_dir / CATEGORIES_FILE, _categories_adapter)

    def get_recommended_items(self, language: str, doc_type: Union[str, DocType]) -> List[RecommendedItem]:
        """Return the curated links for a language; may be empty."""
        doc_type = parse_doc_type(doc_type)
        path = self._resolve(RECOMMENDED_DIR, language, f"{doc_type.value}.json")
        return self._read_json(path, _recommended_adapter)
