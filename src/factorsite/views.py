"""HTML page routes.

Serves the home page and topic pages, optionally prefixed with a locale.
"""

import logging

from aiohttp import web

from factorsite.app_keys import dispatcher_key, templates_key, verbose_key
from factorsite.core.dispatcher import PageResult

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "Page not found"


def create_page_routes() -> list[web.RouteDef]:
    return [
        web.get("/{path:.*}", get_page),
    ]


async def get_page(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    result = dispatch(request, path)

    if not result.found:
        return web.Response(text=NOT_FOUND_TEXT, status=404)

    template_name = "home.html" if result.is_home else "topic.html"
    template = request.app[templates_key].get_template(template_name)
    html = template.render(page=result, locale=result.context.locale)
    return web.Response(text=html, content_type="text/html")


def dispatch(request: web.Request, path: str) -> PageResult:
    """Dispatch ``path``, logging missing documents in verbose mode."""
    result = request.app[dispatcher_key].dispatch(path)

    missing = result.topic is not None and result.body is None and not result.content_error
    if request.app[verbose_key] and missing:
        logger.info(f"{request.path}: no {result.context.locale!r} document for {result.topic.id!r}")

    return result
