"""Shared fixtures: a small documentation tree and an app serving it."""

import json
import pytest
from fastapi.testclient import TestClient

from config import ServerSettings
from server.docs_api import create_app

DOC_INDEX = [
    {"category": "Get_Started", "children": ["Introduction", "Installation"]},
    {"category": "Community", "children": ["Collaborating"]},
]
GUIDE_INDEX = [
    {"category": "Deploying", "children": ["Docker"]},
]
DOC_CATEGORIES = [
    {"category": "Get_Started", "icon": "rocket", "name": "Get Started"},
    {"category": "Community", "icon": "people", "name": "Community"},
]
RECOMMENDED_DOC_ITEMS = [
    {"id": 7, "title": "Introduction", "anchor": "overview", "category": "Get_Started",
     "page": "Introduction", "time": 3, "icon": "rocket"},
]


class FakeRunner:
    """Stands in for DeployRunner and records runs."""

    def __init__(self, supported: bool = True):
        self.supported = supported
        self.platform = "linux" if supported else "darwin"
        self.calls = 0

    async def run(self):
        self.calls += 1
        return 0, "", ""


@pytest.fixture
def docs_root(tmp_path):
    """Documentation tree with a Doc and a Guide collection."""
    root = tmp_path / "documentation"
    doc = root / "v1" / "en-US" / "Doc"
    guide = root / "v1" / "en-US" / "Guide"

    (doc / "Get_Started").mkdir(parents=True)
    (doc / "Community").mkdir(parents=True)
    (guide / "Deploying").mkdir(parents=True)
    (root / "recommended" / "en-US").mkdir(parents=True)

    (doc / "index.json").write_text(json.dumps(DOC_INDEX), encoding="utf-8")
    (doc / "categories.json").write_text(json.dumps(DOC_CATEGORIES), encoding="utf-8")
    (doc / "Get_Started" / "Introduction.html").write_text("<h1>Introduction</h1>", encoding="utf-8")
    (doc / "Get_Started" / "Installation.html").write_text("<h1>Installation</h1>", encoding="utf-8")
    (doc / "Get_Started" / "default.html").write_text("<h1>Get Started</h1>", encoding="utf-8")
    (doc / "Community" / "Collaborating.html").write_text("<h1>Collaborating</h1>", encoding="utf-8")

    (guide / "index.json").write_text(json.dumps(GUIDE_INDEX), encoding="utf-8")
    (guide / "Deploying" / "Docker.html").write_text("<h1>Docker</h1>", encoding="utf-8")

    (root / "recommended" / "en-US" / "Doc.json").write_text(json.dumps(RECOMMENDED_DOC_ITEMS), encoding="utf-8")
    (root / "recommended" / "en-US" / "Guide.json").write_text("[]", encoding="utf-8")
    return root


@pytest.fixture
def settings(docs_root):
    return ServerSettings(
        docs_root=str(docs_root),
        deployment_key="secret-key",
        redirect_url="https://docs.example.com/documentation",
    )


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def app(settings, runner):
    return create_app(settings, deploy_runner=runner)


@pytest.fixture
def client(app):
    return TestClient(app)
