"""Tests for the example addon wiring in unity_addon.main."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from unity_addon import main
from unity_addon.extractors import ProviderError


class FakeSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


@pytest.fixture
def client():
    with patch("unity_addon.main.new_session", FakeSession):
        yield TestClient(main.app)


@pytest.mark.unit
class TestUnityAddon:
    def test_manifest(self, client):
        data = client.get("/manifest.json").json()
        assert data["id"] == "org.stremio.unity"
        assert data["resources"] == ["stream", "catalog", "meta"]
        assert data["behaviorHints"] == {"configurable": True}

    @pytest.mark.parametrize("path", ["/", "/configure"])
    def test_configure_page(self, client, path):
        response = client.get(path)
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert 'name="dub"' in response.text

    def test_catalog_search(self, client):
        records = [
            {"title": "Naruto", "id": "au1-naruto", "imageUrl": "a.jpg"},
            {"title": "Naruto (ITA)", "id": "au2-naruto-ita", "imageUrl": "b.jpg"},
        ]
        with patch.object(main.PROVIDER, "search", AsyncMock(return_value=records)) as search:
            response = client.get("/catalog/series/unity/search=naruto.json")

        assert response.status_code == 200
        assert [m["id"] for m in response.json()["metas"]] == ["au1-naruto", "au2-naruto-ita"]
        assert search.call_args.args[0] == "naruto"

    def test_catalog_dub_config(self, client):
        records = [
            {"title": "Naruto", "id": "au1-naruto", "imageUrl": "a.jpg"},
            {"title": "Naruto (ITA)", "id": "au2-naruto-ita", "imageUrl": "b.jpg"},
        ]
        with patch.object(main.PROVIDER, "search", AsyncMock(return_value=records)):
            response = client.get("/catalog/series/unity/search=naruto.json?config=%7B%22dub%22%3Atrue%7D")

        assert [m["name"] for m in response.json()["metas"]] == ["Naruto (ITA)"]

    def test_catalog_without_search(self, client):
        with patch.object(main.PROVIDER, "search", AsyncMock()) as search:
            response = client.get("/catalog/series/unity.json")
        assert response.json() == {"metas": []}
        search.assert_not_called()

    def test_stream_cache_header(self, client):
        streams = [{"id": "au1-naruto", "title": "Stream", "url": "https://cdn.example/a.mp4"}]
        with patch.object(main.PROVIDER, "get_streams", AsyncMock(return_value=streams)) as get_streams:
            response = client.get("/stream/series/au1-naruto.json")

        assert response.status_code == 200
        assert response.headers["cache-control"] == "max-age=3600"
        assert response.json()["streams"] == streams
        assert get_streams.call_args.args[0] == "1-naruto"

    def test_catalog_provider_error(self, client):
        with patch.object(main.PROVIDER, "search", AsyncMock(side_effect=ProviderError("CSRF/XSRF token not found"))):
            response = client.get("/catalog/series/unity/search=naruto.json")
        assert response.status_code == 200
        assert response.json() == {"metas": []}

    def test_stream_provider_error(self, client):
        with patch.object(main.PROVIDER, "get_streams", AsyncMock(side_effect=ProviderError("gone"))):
            response = client.get("/stream/series/au1-naruto.json")
        assert response.status_code == 200
        assert response.json() == {"streams": []}

    def test_meta(self, client):
        meta = {"id": "au1-naruto", "name": "Naruto", "type": "series"}
        with patch.object(main.PROVIDER, "get_meta", AsyncMock(return_value=meta)):
            response = client.get("/meta/series/au1-naruto.json")
        assert response.json() == {"meta": meta}

    def test_meta_not_found(self, client):
        with patch.object(main.PROVIDER, "get_meta", AsyncMock(side_effect=ProviderError("gone"))):
            response = client.get("/meta/series/au1-naruto.json")
        assert response.status_code == 404

    def test_undeclared_movie_type(self, client):
        assert client.get("/stream/movie/tt1.json").status_code == 404
