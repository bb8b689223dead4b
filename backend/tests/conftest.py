from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from tests.testkit import FakeFilesProvider, signed_url
from ui_resolvers.api.deps import get_file_url_cache, get_provider
from ui_resolvers.main import app
from ui_resolvers.services.file_references import FileUrlCache
from ui_resolvers.services.files_provider import HttpFilesProvider


@pytest.fixture
def fake_provider() -> FakeFilesProvider:
    return FakeFilesProvider(
        urls={"abc123": signed_url("abc123"), "42": signed_url(42), "7": signed_url(7)},
        failing={"broken"},
    )


@pytest.fixture
def url_cache() -> FileUrlCache:
    return FileUrlCache()


@pytest.fixture
def client(fake_provider, url_cache):
    app.dependency_overrides[get_provider] = lambda: fake_provider
    app.dependency_overrides[get_file_url_cache] = lambda: url_cache
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def files_api() -> HttpFilesProvider:
    if os.getenv("RUN_FILES_API_INTEGRATION", "0") != "1":
        pytest.skip("Files API integration tests disabled. Use RUN_FILES_API_INTEGRATION=1.")

    base_url = os.getenv("TEST_FILES_API_BASE_URL", "http://localhost:8000/api/v1")
    return HttpFilesProvider(base_url, token=os.getenv("TEST_FILES_API_TOKEN"))
