"""aiohttp server for factorsite.

Application factory and route registration.
"""

import logging

from aiohttp import web
from jinja2 import Environment, PackageLoader, select_autoescape

from factorsite.api.pages import create_pages_routes
from factorsite.api.topics import create_topics_routes
from factorsite.app_keys import dispatcher_key, templates_key, verbose_key
from factorsite.config import Config
from factorsite.core.content import ContentLoader
from factorsite.core.dispatcher import PageDispatcher
from factorsite.core.locales import LocaleSet
from factorsite.core.renderer import MarkdownRenderer
from factorsite.core.topics import TopicIndex
from factorsite.views import create_page_routes

logger = logging.getLogger(__name__)


def create_templates() -> Environment:
    """Create the jinja2 environment for bundled page templates."""
    return Environment(
        loader=PackageLoader("factorsite", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def create_dispatcher(config: Config) -> PageDispatcher:
    """Build the page dispatcher from configuration.

    Raises:
        ValueError: If the configured locales or topics are inconsistent
    """
    content = config.content
    return PageDispatcher(
        topics=TopicIndex(content.topics),
        locales=LocaleSet(content.locales, content.default_locale),
        loader=ContentLoader(content.source_dir),
        renderer=MarkdownRenderer(),
    )


def create_app(config: Config, *, verbose: bool = False) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        verbose: Enable verbose output (log missing translations)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[dispatcher_key] = create_dispatcher(config)
    app[templates_key] = create_templates()
    app[verbose_key] = verbose

    # API routes (must be registered first to take precedence over page routes)
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_topics_routes())

    # Page routes - must be last to catch all non-API paths
    app.router.add_routes(create_page_routes())

    return app


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Enable verbose output (log missing translations)
    """
    app = create_app(config, verbose=verbose)
    logger.info(f"Serving {config.content.source_dir} on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port, print=None)
