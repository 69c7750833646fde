"""Navigation links for topic pages.

Builds previous/next links within the topic sequence and locale-switcher
links. All links are computed for an explicit locale; nothing here depends on
request state.
"""

from dataclasses import dataclass, field
from typing import TypedDict

from factorsite.core.locales import LocaleSet
from factorsite.core.topics import Topic, TopicIndex
from factorsite.core.types import Locale, URLPath


class NavLinkDict(TypedDict):
    """Dictionary representation of a topic link."""

    id: str
    title: str
    ordinal: str
    path: str


class LocaleLinkDict(TypedDict):
    """Dictionary representation of a locale-switcher link."""

    locale: str
    path: str
    current: bool


class PageNavigationDict(TypedDict):
    """Dictionary representation of page navigation."""

    previous: NavLinkDict | None
    next: NavLinkDict | None
    locales: list[LocaleLinkDict]


@dataclass(frozen=True)
class NavLink:
    """Link to a topic under a given locale."""

    topic: Topic
    path: URLPath

    @property
    def title(self) -> str:
        return self.topic.title

    def to_dict(self) -> NavLinkDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.topic.id,
            "title": self.topic.title,
            "ordinal": self.topic.ordinal,
            "path": self.path,
        }


@dataclass(frozen=True)
class LocaleLink:
    """Link to the current page under another locale."""

    locale: Locale
    path: URLPath
    current: bool

    def to_dict(self) -> LocaleLinkDict:
        """Convert to dictionary for JSON serialization."""
        return {"locale": self.locale, "path": self.path, "current": self.current}


@dataclass(frozen=True)
class PageNavigation:
    """Navigation controls of a page. Absent links are None."""

    previous: NavLink | None = None
    next: NavLink | None = None
    locales: list[LocaleLink] = field(default_factory=list)

    def to_dict(self) -> PageNavigationDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "previous": self.previous.to_dict() if self.previous else None,
            "next": self.next.to_dict() if self.next else None,
            "locales": [link.to_dict() for link in self.locales],
        }


def topic_link(locales: LocaleSet, locale: Locale, topic: Topic) -> NavLink:
    """Build the link to ``topic`` under ``locale``."""
    return NavLink(topic=topic, path=locales.url_for(locale, topic.id))


def build_topic_links(topics: TopicIndex, locales: LocaleSet, locale: Locale) -> list[NavLink]:
    """Build links to every topic in sequence order."""
    return [topic_link(locales, locale, topic) for topic in topics]


def build_locale_links(locales: LocaleSet, current: Locale, path: str) -> list[LocaleLink]:
    """Build locale-switcher links for a locale-free path.

    Args:
        locales: Available locales
        current: Locale of the page being rendered
        path: Locale-free path of the page (e.g., "/config" or "/")

    Returns:
        One link per available locale, in configured order
    """
    return [
        LocaleLink(locale=locale, path=locales.url_for(locale, path), current=locale == current)
        for locale in locales
    ]


def build_navigation(
    topics: TopicIndex,
    locales: LocaleSet,
    locale: Locale,
    topic: Topic,
) -> PageNavigation:
    """Build navigation for a topic page.

    Args:
        topics: Topic sequence
        locales: Available locales
        locale: Resolved locale of the request
        topic: Topic being rendered

    Returns:
        PageNavigation with previous/next links under ``locale`` (None at
        the ends of the sequence) and locale-switcher links for ``topic``
    """
    previous = topics.previous(topic)
    following = topics.next(topic)
    return PageNavigation(
        previous=topic_link(locales, locale, previous) if previous is not None else None,
        next=topic_link(locales, locale, following) if following is not None else None,
        locales=build_locale_links(locales, locale, topic.id),
    )
