"""Pages API endpoint.

Returns the dispatch result of a page as JSON with metadata, navigation, ToC
and HTML content.
"""

from datetime import UTC, datetime
from email.utils import formatdate
from hashlib import md5
from time import mktime

from aiohttp import web

from factorsite.core.dispatcher import PageResult
from factorsite.views import NOT_FOUND_TEXT, dispatch


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages/{path:.*}", get_page),
    ]


async def get_page(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    result = dispatch(request, path)

    if not result.found:
        return web.json_response(
            {"error": NOT_FOUND_TEXT, "path": path},
            status=404,
        )

    content = result.body or ""
    etag = _compute_etag(f"{result.context.locale}:{result.context.path}:{content}")

    if_none_match = request.headers.get("If-None-Match")
    if if_none_match == etag:
        return web.Response(status=304)

    headers = {
        "ETag": etag,
        "Cache-Control": "private, max-age=60",
    }
    last_modified = _last_modified(result)
    if last_modified is not None:
        headers["Last-Modified"] = formatdate(mktime(last_modified.timetuple()), usegmt=True)

    response_data = {
        "meta": {
            "title": result.title,
            "locale": result.context.locale,
            "path": result.context.path,
            "topic": result.topic.id if result.topic else None,
            "source_file": str(result.source_path) if result.source_path else None,
            "last_modified": last_modified.isoformat() if last_modified else None,
            "content_error": result.content_error,
        },
        "navigation": result.navigation.to_dict(),
        "toc": [entry.to_dict() for entry in result.toc],
        "content": result.body,
    }

    return web.json_response(response_data, headers=headers)


def _last_modified(result: PageResult) -> datetime | None:
    if result.source_path is None:
        return None
    try:
        source_mtime = result.source_path.stat().st_mtime
    except FileNotFoundError:
        return None
    return datetime.fromtimestamp(source_mtime, tz=UTC)


def _compute_etag(content: str) -> str:
    # First 16 hex chars (64 bits) are enough for cache validation
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
