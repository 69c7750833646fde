"""Tests for server module and HTML page routes."""

import logging
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from factorsite.app_keys import dispatcher_key, templates_key, verbose_key
from factorsite.config import Config
from factorsite.server import create_app


class TestCreateApp:
    """Tests for create_app()."""

    def test__valid_config__returns_configured_app(self, test_config: Config) -> None:
        """Create app with valid configuration."""
        app = create_app(test_config)

        assert dispatcher_key in app
        assert templates_key in app
        assert app[verbose_key] is False
        dispatcher = app[dispatcher_key]
        assert dispatcher.loader.content_dir == test_config.content.source_dir
        assert [topic.id for topic in dispatcher.topics] == ["a", "b", "c"]
        assert dispatcher.locales.default == "en"

    def test__invalid_locales__raises(self, test_config: Config) -> None:
        """Reject a default locale missing from the available set."""
        test_config.content.default_locale = "de"

        with pytest.raises(ValueError, match="Default locale"):
            create_app(test_config)


class TestPageRoutes:
    """Tests for HTML page routes."""

    @pytest.fixture
    def app(self, test_config: Config) -> web.Application:
        return create_app(test_config)

    @pytest.mark.asyncio
    async def test__middle_topic__links_neighbors(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /b renders previous /a and next /c."""
        client = await aiohttp_client(app)
        response = await client.get("/b")

        assert response.status == 200
        assert "text/html" in response.headers["Content-Type"]
        html = await response.text()
        assert 'rel="prev" href="/a"' in html
        assert 'rel="next" href="/c"' in html
        assert "<p>Second topic.</p>" in html
        assert "<title>II. Beta</title>" in html

    @pytest.mark.asyncio
    async def test__first_topic__omits_previous(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /a renders no previous link."""
        client = await aiohttp_client(app)
        response = await client.get("/a")

        assert response.status == 200
        html = await response.text()
        assert 'rel="prev"' not in html
        assert 'rel="next" href="/b"' in html

    @pytest.mark.asyncio
    async def test__localized_last_topic__omits_next(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /fr/c renders in French with prefixed previous link and no next."""
        client = await aiohttp_client(app)
        response = await client.get("/fr/c")

        assert response.status == 200
        html = await response.text()
        assert '<html lang="fr">' in html
        assert 'rel="prev" href="/fr/b"' in html
        assert 'rel="next"' not in html
        assert "Troisième sujet" in html

    @pytest.mark.asyncio
    async def test__unknown_topic__returns_404(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /d returns 404 with a static body."""
        client = await aiohttp_client(app)
        response = await client.get("/d")

        assert response.status == 404
        assert await response.text() == "Page not found"

    @pytest.mark.asyncio
    async def test__unknown_locale_segment__returns_404(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /xx/a returns 404."""
        client = await aiohttp_client(app)
        response = await client.get("/xx/a")

        assert response.status == 404
        assert await response.text() == "Page not found"

    @pytest.mark.asyncio
    async def test__root__serves_home(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET / serves the home page with the topic list."""
        client = await aiohttp_client(app)
        response = await client.get("/")

        assert response.status == 200
        html = await response.text()
        assert '<a href="/a">I. A</a>' in html
        assert '<a href="/c">III. C</a>' in html

    @pytest.mark.asyncio
    async def test__locale_root__serves_localized_home(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /fr/ links topics under the French prefix."""
        client = await aiohttp_client(app)
        response = await client.get("/fr/")

        assert response.status == 200
        html = await response.text()
        assert '<a href="/fr/b">II. B</a>' in html

    @pytest.mark.asyncio
    async def test__missing_translation__renders_empty_content(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """GET /fr/a returns 200 with navigation and an empty content region."""
        client = await aiohttp_client(app)
        response = await client.get("/fr/a")

        assert response.status == 200
        html = await response.text()
        assert 'rel="next" href="/fr/b"' in html
        assert '<div class="content">\n  </div>' in html

    @pytest.mark.asyncio
    async def test__locale_switcher__links_every_locale(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Render one locale link per available locale."""
        client = await aiohttp_client(app)
        response = await client.get("/fr/b")

        html = await response.text()
        assert 'href="/b" hreflang="en"' in html
        assert '<span class="locale current" lang="fr">fr</span>' in html

    @pytest.mark.asyncio
    async def test__unreadable_document__renders_empty_content(
        self,
        aiohttp_client: Any,
        app: web.Application,
        content_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Serve a known topic with an empty content region when its document can't be read."""
        (content_dir / "en" / "a.md").write_bytes(b"# Caf\xe9\n")

        client = await aiohttp_client(app)
        with caplog.at_level(logging.ERROR, logger="factorsite.core.dispatcher"):
            response = await client.get("/a")

        assert response.status == 200
        html = await response.text()
        assert '<div class="content">\n  </div>' in html
        assert 'rel="next" href="/b"' in html
        assert any(
            record.levelno == logging.ERROR and "a.md" in record.getMessage()
            for record in caplog.records
        )
