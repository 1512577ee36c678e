"""
SimpleNote: Page Renderer & Page Route Tests
============================================
"""

from pathlib import Path

import pytest

from simplenote.exceptions import StartupError
from simplenote.main import create_app
from simplenote.services.page import PageRenderer


class TestPageRenderer:

    def test_renders_template_verbatim(self, settings):
        renderer = PageRenderer(settings.template_dir, settings.template_name)
        source = (Path(settings.template_dir) / settings.template_name).read_text(encoding="utf-8")

        assert renderer.render() == source

    def test_missing_template_is_startup_error(self, tmp_path):
        with pytest.raises(StartupError, match="missing"):
            PageRenderer(str(tmp_path), "index.html")

    def test_unparsable_template_is_startup_error(self, tmp_path):
        (tmp_path / "index.html").write_text("<p>{% if %}</p>", encoding="utf-8")

        with pytest.raises(StartupError, match="could not be parsed"):
            PageRenderer(str(tmp_path), "index.html")

    def test_create_app_fails_without_template(self, tmp_path, memory_store):
        from simplenote.config import Settings

        settings = Settings(template_dir=str(tmp_path))

        with pytest.raises(StartupError):
            create_app(settings=settings, store=memory_store)


class TestIndexRoute:

    @pytest.mark.asyncio
    async def test_root_serves_page(self, test_client, settings):
        source = (Path(settings.template_dir) / settings.template_name).read_text(encoding="utf-8")

        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert response.text == source

    @pytest.mark.asyncio
    async def test_page_uses_custom_template(self, tmp_path, memory_store):
        from httpx import ASGITransport, AsyncClient

        (tmp_path / "index.html").write_text("<h1>notes</h1>\n", encoding="utf-8")
        app = create_app(store=memory_store, page=PageRenderer(str(tmp_path)))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/")

        assert response.text == "<h1>notes</h1>\n"

    @pytest.mark.asyncio
    async def test_other_paths_not_found(self, test_client):
        assert (await test_client.get("/anything-else")).status_code == 404
        assert (await test_client.get("/index.html")).status_code == 404
