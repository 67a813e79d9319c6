"""HTTP helpers for the documentation API.

Every call returns parsed data, or ``False`` when the request failed. Network
errors are logged and never raised, so callers can keep whatever they already
have cached.
"""

import logging
from typing import List, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from server.models import (
    CategoriesResponse,
    DocType,
    DocumentationFile,
    FilesResponse,
    IndexResponse,
    RecommendedItemsResponse,
    RefreshResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class DocumentationClient:
    """Async client for the documentation API."""

    def __init__(self, base_url: str = "http://localhost:3001", timeout: float = 10.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip('/')
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> 'DocumentationClient':
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get(self, path: str, model: Type[ModelT], params: Optional[dict] = None,
                   empty_on_404: Optional[ModelT] = None) -> Union[ModelT, bool]:
        try:
            response = await self.http_client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {path} failed: {e}")
            return False

        if response.is_success:
            try:
                return model.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                logger.warning(f"Unexpected response from {path}: {e}")
                return False
        if response.status_code == 404 and empty_on_404 is not None:
            return empty_on_404
        logger.debug(f"{path} answered {response.status_code}")
        return False

    async def fetch_documentation_page(self, folder: str, name: str, version: str, language: str,
                                       doc_type: DocType = DocType.DOC) -> Union[str, bool]:
        """Fetch a specific documentation page.

        Args:
            folder: Folder name with underscores instead of spaces, e.g. ``Get_Started``
            name: Page name without ``.html``, e.g. ``Introduction``
            version: Documentation version, e.g. ``v1``
            language: Documentation language, e.g. ``en-US``

        Returns:
            HTML as a string, or False on error.
        """
        data = await self._get(
            f"/getFile/{version}/{language}/{DocType(doc_type).value}",
            DocumentationFile,
            params={"folder": folder, "name": name}
        )
        return data.file if data else False

    async def fetch_documentation_pages(self, folder: str, version: str, language: str,
                                        doc_type: DocType = DocType.DOC) -> Union[List[str], bool]:
        """Fetch the page names of a category, or False on error."""
        data = await self._get(
            f"/getFiles/{version}/{language}/{DocType(doc_type).value}",
            FilesResponse,
            params={"folder": folder}
        )
        return data.files if data else False

    async def fetch_documentation_default(self, folder: str, version: str, language: str,
                                          doc_type: DocType = DocType.DOC) -> Union[str, bool]:
        """Fetch the landing page of a category, or False on error."""
        data = await self._get(
            f"/getDefault/{version}/{language}/{DocType(doc_type).value}",
            DocumentationFile,
            params={"folder": folder}
        )
        return data.file if data else False

    async def fetch_documentation_index(self, version: str, language: str,
                                        doc_type: DocType = DocType.DOC) -> Union[IndexResponse, bool]:
        """Fetch the table of contents.

        A missing index (404) is an empty index, not a failure.
        """
        return await self._get(
            f"/getIndex/{version}/{language}/{DocType(doc_type).value}",
            IndexResponse,
            empty_on_404=IndexResponse(index=[])
        )

    async def fetch_documentation_categories(self, version: str, language: str,
                                             doc_type: DocType = DocType.DOC) -> Union[CategoriesResponse, bool]:
        """Fetch icons and names of the categories; 404 means none."""
        return await self._get(
            f"/getCategories/{version}/{language}/{DocType(doc_type).value}",
            CategoriesResponse,
            empty_on_404=CategoriesResponse(categories=[])
        )

    async def fetch_recommended_items(self, language: str,
                                      doc_type: DocType = DocType.DOC) -> Union[RecommendedItemsResponse, bool]:
        return await self._get(
            f"/getRecommendedItems/{language}/{DocType(doc_type).value}",
            RecommendedItemsResponse
        )

    async def fetch_documentation_refresh(self, version: str, language: str) -> Union[RefreshResponse, bool]:
        """Fetch both indices and both recommended-item lists at once."""
        return await self._get(f"/refresh/{version}/{language}", RefreshResponse)
