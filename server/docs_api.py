"""HTTP API serving file-backed documentation.

Each content route maps one-to-one onto a ``DocumentStore`` lookup. Lookup
failures are raised as ``FileStoreError`` and answered with a bare status code
by a single exception handler.
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse

from config import ServerSettings
from .deploy import DeployRunner
from .file_store import DocumentStore, FileStoreError
from .models import (
    CategoriesResponse,
    DocType,
    DocumentationFile,
    FilesResponse,
    IndexResponse,
    RecommendedItemsResponse,
    RefreshResponse,
    with_placeholder,
)
from .monitoring import RequestLoggingMiddleware
from .security import create_limiter, require_deployment_key, setup_cors, setup_rate_limiting
from .uplink import UplinkListener

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

STATUS_BADGE = {
    "schemaVersion": 1,
    "label": "Docs Status",
    "message": "online",
    "color": "brightgreen"
}


async def file_store_error_handler(request: Request, exc: FileStoreError):
    """Answer with the bare status code, like express' ``res.sendStatus``."""
    if exc.status_code >= 500:
        logger.error(f"{request.url.path}: {exc}")
    else:
        logger.debug(f"{request.url.path}: {exc}")
    return PlainTextResponse(HTTPStatus(exc.status_code).phrase, status_code=exc.status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Consume platform tasks for the lifetime of the app when an uplink is configured."""
    settings: ServerSettings = app.state.settings
    if settings.uplink_url:
        listener = UplinkListener(
            settings.uplink_url,
            app.state.deploy_runner,
            exchange_name=settings.uplink_exchange,
            routing_key=settings.uplink_routing_key
        )
        await listener.start()
        app.state.uplink = listener
    else:
        logger.warning("UPLINK_URL not set, deploy listener disabled")

    try:
        yield
    finally:
        if app.state.uplink:
            await app.state.uplink.close()
            app.state.uplink = None


def create_app(settings: Optional[ServerSettings] = None,
               deploy_runner: Optional[DeployRunner] = None) -> FastAPI:
    """Build the documentation API for ``settings`` (environment by default)."""
    settings = settings or ServerSettings.from_env()
    store = DocumentStore(settings.docs_root)
    runner = deploy_runner or DeployRunner(settings.deploy_script)
    limiter = create_limiter(settings.rate_limit_storage_url)

    app = FastAPI(title="Platform Documentation API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.deploy_runner = runner
    app.state.uplink = None

    setup_cors(app, settings.allowed_origins)
    app.add_middleware(RequestLoggingMiddleware)
    setup_rate_limiting(app, limiter)
    app.add_exception_handler(FileStoreError, file_store_error_handler)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(settings.redirect_url, status_code=308)

    @app.get("/api/status/badge")
    async def status_badge():
        """Shields.io endpoint badge."""
        return STATUS_BADGE

    @app.get("/refresh/{version}/{language}", response_model=RefreshResponse)
    @limiter.limit(settings.refresh_rate_limit)
    async def refresh(request: Request, response: Response, version: str, language: str):
        """Both indices and both recommended-item lists in one response."""
        doc_index = store.get_index(version, language, DocType.DOC)
        guide_index = store.get_index(version, language, DocType.GUIDE)
        recommended_doc_items = with_placeholder(store.get_recommended_items(language, DocType.DOC))
        recommended_guide_items = with_placeholder(store.get_recommended_items(language, DocType.GUIDE))
        return RefreshResponse(
            docIndex=doc_index,
            guideIndex=guide_index,
            recommendedDocItems=recommended_doc_items,
            recommendedGuideItems=recommended_guide_items
        )

    @app.get("/getFile/{version}/{language}/{doc_type}", response_model=DocumentationFile)
    async def get_file(version: str, language: str, doc_type: str,
                       folder: Optional[str] = None, name: Optional[str] = None):
        return DocumentationFile(file=store.get_file(folder, name, version, language, doc_type))

    @app.get("/getFiles/{version}/{language}/{doc_type}", response_model=FilesResponse)
    async def get_files(version: str, language: str, doc_type: str, folder: Optional[str] = None):
        return FilesResponse(files=store.get_files(folder, version, language, doc_type))

    @app.get("/getDefault/{version}/{language}/{doc_type}", response_model=DocumentationFile)
    async def get_default(version: str, language: str, doc_type: str, folder: Optional[str] = None):
        """Landing page of a category."""
        return DocumentationFile(file=store.get_default_file(folder, version, language, doc_type))

    @app.get("/getIndex/{version}/{language}/{doc_type}", response_model=IndexResponse)
    async def get_index(version: str, language: str, doc_type: str):
        return IndexResponse(index=store.get_index(version, language, doc_type))

    @app.get("/getRecommendedItems/{language}/{doc_type}", response_model=RecommendedItemsResponse)
    async def get_recommended_items(language: str, doc_type: str):
        items = store.get_recommended_items(language, doc_type)
        return RecommendedItemsResponse(recommended_items=with_placeholder(items))

    @app.get("/getCategories/{version}/{language}/{doc_type}", response_model=CategoriesResponse)
    async def get_categories(version: str, language: str, doc_type: str):
        return CategoriesResponse(categories=store.get_categories(version, language, doc_type))

    @app.post("/deploy", status_code=202, dependencies=[Depends(require_deployment_key)])
    async def deploy(background_tasks: BackgroundTasks):
        """Run the deployment script after responding."""
        if not runner.supported:
            return PlainTextResponse(HTTPStatus.NOT_IMPLEMENTED.phrase, status_code=501)
        logger.info("Deployment requested over HTTP. Running Documentation deployment script.")
        background_tasks.add_task(runner.run)
        return {"status": "scheduled"}

    return app
