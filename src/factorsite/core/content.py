"""Content document loading.

Documents live at ``<content_dir>/<locale>/<topic>.md``. A missing file is a
missing translation, reported as ``None``; other I/O failures raise
``ContentError``.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from factorsite.core.types import Locale, TopicId

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """Content document exists but could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path


@dataclass(frozen=True)
class ContentDocument:
    """Raw markdown source of one (locale, topic) pair."""

    locale: Locale
    topic: TopicId
    text: str
    source_path: Path


class ContentLoader:
    """Reads markdown sources from the content directory.

    Holds no state besides the content root, so one instance serves all
    requests. Nothing is cached: every load reads the file.
    """

    def __init__(self, content_dir: Path) -> None:
        """Initialize loader.

        Args:
            content_dir: Root directory with one subdirectory per locale
        """
        self._content_dir = content_dir

    @property
    def content_dir(self) -> Path:
        """Root directory containing markdown sources."""
        return self._content_dir

    def source_path(self, locale: str, topic: str) -> Path:
        """Return the conventional location of a document."""
        return self._content_dir / locale / f"{topic}.md"

    def load(self, locale: Locale, topic: TopicId) -> ContentDocument | None:
        """Load the markdown source for a (locale, topic) pair.

        Args:
            locale: Resolved locale
            topic: Validated topic identifier

        Returns:
            ContentDocument, or None if no document exists for the pair

        Raises:
            ContentError: If the file exists but cannot be read or decoded
        """
        path = self.source_path(locale, topic)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No {locale!r} document for topic {topic!r} at {path}")
            return None
        except UnicodeDecodeError as e:
            raise ContentError(path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise ContentError(path, e.strerror or str(e)) from e

        return ContentDocument(locale=locale, topic=topic, text=text, source_path=path)

    def available_locales(self, topic: str, locales: Iterable[str]) -> list[str]:
        """List the locales that have a document for ``topic``."""
        return [locale for locale in locales if self.source_path(locale, topic).is_file()]
