"""Topics API endpoint.

Lists the topic sequence with links under a locale.
"""

from aiohttp import web

from factorsite.app_keys import dispatcher_key
from factorsite.core.navigation import build_topic_links


def create_topics_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/topics", get_topics),
    ]


async def get_topics(request: web.Request) -> web.Response:
    dispatcher = request.app[dispatcher_key]
    locale = dispatcher.locales.get(request.query.get("locale"))

    items = []
    for link in build_topic_links(dispatcher.topics, dispatcher.locales, locale):
        item = dict(link.to_dict())
        item["translated"] = dispatcher.loader.source_path(locale, link.topic.id).is_file()
        items.append(item)

    return web.json_response(
        {
            "locale": locale,
            "default_locale": dispatcher.locales.default,
            "locales": list(dispatcher.locales),
            "items": items,
        },
    )
