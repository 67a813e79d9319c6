#!/usr/bin/env python3

import asyncio
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from config import ClientSettings, ServerSettings
from frontend import DocumentationClient, DocumentationStore, JSONFileStorage
from observability import setup_logging
from server.models import DocType

console = Console()
app = typer.Typer(help="Platform documentation server and client")


def _store(settings: ClientSettings) -> DocumentationStore:
    client = DocumentationClient(settings.api_base, timeout=settings.timeout)
    return DocumentationStore(client, local=JSONFileStorage(settings.storage_path))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="HTTP port"),
    docs_root: Optional[str] = typer.Option(None, "--docs-root", help="Documentation tree")
):
    """Run the documentation API"""
    settings = ServerSettings.from_env()
    overrides = {k: v for k, v in {"host": host, "port": port, "docs_root": docs_root}.items() if v is not None}
    settings = settings.model_copy(update=overrides)

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        use_json=settings.log_json
    )

    from server.docs_api import create_app
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


@app.command()
def refresh():
    """Reload the local documentation cache"""
    settings = ClientSettings.from_env()

    async def run() -> bool:
        store = _store(settings)
        try:
            return await store.refresh()
        finally:
            await store.client.close()

    with console.status("[bold blue]Refreshing documentation cache..."):
        ok = asyncio.run(run())
    if not ok:
        console.print("❌ Refresh failed, cached data kept", style="bold red")
        raise typer.Exit(1)
    console.print("✅ Documentation cache refreshed", style="bold green")


@app.command()
def index(
    doc_type: DocType = typer.Option(DocType.DOC, "--type", help="Doc or Guide"),
    force: bool = typer.Option(False, "--force", help="Ignore the cached index")
):
    """Show the table of contents"""
    settings = ClientSettings.from_env()

    async def run():
        store = _store(settings)
        try:
            return await store.get_index(force, doc_type)
        finally:
            await store.client.close()

    items = asyncio.run(run())
    if not items:
        console.print("No index available", style="yellow")
        return

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Category", style="bold")
    table.add_column("Pages")
    for item in items:
        table.add_row(item.category.replace("_", " "), ", ".join(item.children))
    console.print(table)


@app.command()
def page(
    folder: str = typer.Argument(..., help="Folder, e.g. Get_Started"),
    name: Optional[str] = typer.Argument(None, help="Page name; the landing page when omitted"),
    doc_type: DocType = typer.Option(DocType.DOC, "--type", help="Doc or Guide")
):
    """Print the HTML of a documentation page"""
    settings = ClientSettings.from_env()

    async def run():
        store = _store(settings)
        try:
            if name:
                return await store.client.fetch_documentation_page(
                    folder, name, store.version, store.language, doc_type
                )
            return await store.client.fetch_documentation_default(
                folder, store.version, store.language, doc_type
            )
        finally:
            await store.client.close()

    html = asyncio.run(run())
    if html is False:
        console.print(f"❌ Page not found: {folder}/{name or 'default'}", style="bold red")
        raise typer.Exit(1)
    console.print(html, markup=False, highlight=False)


if __name__ == "__main__":
    app()
