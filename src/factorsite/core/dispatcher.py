"""Per-request page dispatch.

Resolves the locale, validates the topic, loads and renders its document and
computes navigation. Each call works on its own ``RequestContext``; the
dispatcher only holds read-only collaborators.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from factorsite.core.content import ContentError, ContentLoader
from factorsite.core.locales import LocaleSet
from factorsite.core.navigation import (
    NavLink,
    PageNavigation,
    build_locale_links,
    build_navigation,
    build_topic_links,
)
from factorsite.core.renderer import MarkdownRenderer, TocEntry
from factorsite.core.topics import Topic, TopicIndex
from factorsite.core.types import Locale, URLPath

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Terminal outcome of a dispatch."""

    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RequestContext:
    """Resolved locale and requested path of a single request."""

    locale: Locale
    path: URLPath


@dataclass
class PageResult:
    """Result of dispatching a request."""

    outcome: Outcome
    context: RequestContext
    topic: Topic | None = None
    body: str | None = None
    title: str | None = None
    toc: list[TocEntry] = field(default_factory=list)
    navigation: PageNavigation = field(default_factory=PageNavigation)
    topics: list[NavLink] = field(default_factory=list)
    source_path: Path | None = None
    home_path: URLPath = URLPath("/")
    content_error: bool = False

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def is_home(self) -> bool:
        return self.found and self.topic is None


class PageDispatcher:
    """Dispatches request paths to home, topic or not-found results."""

    def __init__(
        self,
        topics: TopicIndex,
        locales: LocaleSet,
        loader: ContentLoader,
        renderer: MarkdownRenderer,
    ) -> None:
        self._topics = topics
        self._locales = locales
        self._loader = loader
        self._renderer = renderer

    @property
    def topics(self) -> TopicIndex:
        return self._topics

    @property
    def locales(self) -> LocaleSet:
        return self._locales

    @property
    def loader(self) -> ContentLoader:
        return self._loader

    def dispatch(self, path: str) -> PageResult:
        """Dispatch a request path.

        Args:
            path: Request path, optionally prefixed with a locale
                  (e.g., "/", "/config", "/fr/config")

        Returns:
            PageResult with outcome OK for the home page and known topics,
            NOT_FOUND otherwise. A topic whose document exists but cannot be
            read is still OK, with no body and ``content_error`` set.
        """
        resolved = self._locales.resolve(path)
        context = RequestContext(locale=resolved.locale, path=resolved.path)

        if resolved.is_root:
            return self._home(context)

        topic_id = context.path[1:]
        topic = self._topics.get(topic_id)
        if topic is None:
            logger.debug(f"Unknown topic {topic_id!r} requested as {path!r}")
            return PageResult(
                outcome=Outcome.NOT_FOUND,
                context=context,
                home_path=self._locales.url_for(context.locale, "/"),
            )

        return self._topic_page(context, topic)

    def _home(self, context: RequestContext) -> PageResult:
        return PageResult(
            outcome=Outcome.OK,
            context=context,
            navigation=PageNavigation(
                locales=build_locale_links(self._locales, context.locale, "/"),
            ),
            topics=build_topic_links(self._topics, self._locales, context.locale),
            home_path=self._locales.url_for(context.locale, "/"),
        )

    def _topic_page(self, context: RequestContext, topic: Topic) -> PageResult:
        result = PageResult(
            outcome=Outcome.OK,
            context=context,
            topic=topic,
            title=topic.title,
            navigation=build_navigation(self._topics, self._locales, context.locale, topic),
            topics=build_topic_links(self._topics, self._locales, context.locale),
            home_path=self._locales.url_for(context.locale, "/"),
        )

        try:
            document = self._loader.load(context.locale, topic.id)
        except ContentError as e:
            logger.error(f"{context.locale}/{topic.id}: {e}")
            result.content_error = True
            return result

        if document is None:
            return result

        rendered = self._renderer.render(document.text)
        result.body = rendered.html
        result.title = rendered.title or topic.title
        result.toc = rendered.toc
        result.source_path = document.source_path
        return result
