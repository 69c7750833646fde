"""Locale resolution from URL paths.

The default locale is never represented by a path prefix: canonical URLs for
the default locale omit it, every other locale is served under ``/<locale>``.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from factorsite.core.types import Locale, URLPath


@dataclass(frozen=True)
class ResolvedPath:
    """Effective locale and the path left for routing."""

    locale: Locale
    path: URLPath

    @property
    def is_root(self) -> bool:
        return self.path == "/"


class LocaleSet:
    """Fixed, ordered set of available locales with a designated default.

    Built once at startup and never mutated, so a single instance is shared by
    all requests.
    """

    __slots__ = ("_default", "_locales")

    def __init__(self, locales: Iterable[str], default: str) -> None:
        """Initialize locale set.

        Args:
            locales: Available locales in display order
            default: Default locale, must be one of ``locales``

        Raises:
            ValueError: If the set is empty, has duplicates, or lacks the default
        """
        ordered = tuple(Locale(locale) for locale in locales)
        if not ordered:
            raise ValueError("At least one locale must be available")
        if len(set(ordered)) != len(ordered):
            raise ValueError(f"Duplicate locales in {list(ordered)}")
        if default not in ordered:
            raise ValueError(f"Default locale {default!r} is not in {list(ordered)}")

        self._locales = ordered
        self._default = Locale(default)

    @property
    def default(self) -> Locale:
        return self._default

    def __contains__(self, locale: object) -> bool:
        return locale in self._locales

    def __iter__(self) -> Iterator[Locale]:
        return iter(self._locales)

    def get(self, locale: str | None) -> Locale:
        """Return ``locale`` if available, otherwise the default locale."""
        if locale is not None and locale in self._locales:
            return Locale(locale)
        return self._default

    def resolve(self, path: str) -> ResolvedPath:
        """Split an optional leading locale segment off a URL path.

        Args:
            path: Request path (e.g., "/fr/config", "config", "/")

        Returns:
            ResolvedPath with the effective locale and the remaining path.
            Segments that are not available locales stay part of the path
            and the default locale applies.
        """
        normalized = _normalize(path)
        head, _, rest = normalized[1:].partition("/")

        if head and head in self._locales:
            return ResolvedPath(locale=Locale(head), path=_normalize(rest))

        return ResolvedPath(locale=self._default, path=normalized)

    def prefix(self, locale: str) -> str:
        """Return the URL prefix for a locale.

        Raises:
            ValueError: If locale is not available
        """
        if locale not in self._locales:
            raise ValueError(f"Unknown locale: {locale!r}")
        if locale == self._default:
            return ""
        return f"/{locale}"

    def url_for(self, locale: str, path: str) -> URLPath:
        """Build the canonical URL of ``path`` under ``locale``.

        Args:
            locale: Available locale
            path: Locale-free path (e.g., "/config" or "/")

        Returns:
            URL such as "/config", "/fr/config", "/" or "/fr/"
        """
        return URLPath(f"{self.prefix(locale)}{_normalize(path)}")


def _normalize(path: str) -> URLPath:
    """Normalize path to a leading slash and no trailing slash."""
    stripped = path.strip("/")
    return URLPath(f"/{stripped}")
