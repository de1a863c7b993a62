"""Shared fixtures: a manifest declaring every resource and recording handlers."""

import copy

import pytest
from fastapi.testclient import TestClient

from stremio_rewired import create_app, create_handler

MANIFEST = {
    "id": "org.example.test",
    "version": "1.0.0",
    "name": "Test Addon",
    "description": "Addon used by the test suite",
    "types": ["movie", "series"],
    "catalogs": [
        {
            "id": "top",
            "type": "movie",
            "name": "Top",
            "extra": [{"name": "search"}, {"name": "genre"}, {"name": "skip"}],
        },
        "legacy",
    ],
    "resources": [
        "stream",
        "catalog",
        {"name": "meta", "types": ["series"], "idPrefixes": ["au"]},
        "subtitles",
        "addon_catalog",
    ],
    "addonCatalogs": [{"type": "movie", "id": "community", "name": "Community"}],
}


class Recorder:
    """Handler table whose handlers remember the arguments they got."""

    def __init__(self):
        self.calls = []
        self.meta = {"meta": {"id": "au1", "type": "series", "name": "Show"}}

    async def on_stream_request(self, type, id, config=None):
        self.calls.append(("stream", type, id, config))
        return {"streams": [{"title": "Stream", "url": "https://example.com/a.mp4"}]}

    async def on_catalog_request(self, type, id, extra_args=None, config=None):
        self.calls.append(("catalog", type, id, extra_args, config))
        return {"metas": [], "cacheMaxAge": 60, "staleRevalidate": 30}

    async def on_meta_request(self, type, id, config=None):
        self.calls.append(("meta", type, id, config))
        return self.meta

    async def on_subtitles_request(self, type, id, extra_args=None, config=None):
        self.calls.append(("subtitles", type, id, extra_args, config))
        return {"subtitles": [{"id": "1", "url": "https://example.com/a.srt", "lang": "eng"}]}

    async def on_addon_catalog_request(self, type, id, config=None):
        self.calls.append(("addon_catalog", type, id, config))
        return {"addons": []}

    def handlers(self, *omit):
        names = (
            "on_stream_request",
            "on_catalog_request",
            "on_meta_request",
            "on_subtitles_request",
            "on_addon_catalog_request",
        )
        return {name: getattr(self, name) for name in names if name not in omit}


@pytest.fixture
def manifest():
    return copy.deepcopy(MANIFEST)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def handler(manifest, recorder):
    return create_handler(manifest, **recorder.handlers())


@pytest.fixture
def client(handler):
    return TestClient(create_app(handler))
