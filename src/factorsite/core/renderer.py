"""Markdown rendering.

Wraps mistune with heading anchors, title extraction and a heading table of
contents. Rendering never fails: if the parser raises, the escaped source is
returned instead.

Raw HTML in documents is passed through unescaped. Documents are trusted
files from the content directory; do not render untrusted input with this
module.
"""

import html
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

import mistune
from mistune.toc import add_toc_hook

logger = logging.getLogger(__name__)

_PLUGINS = ["table", "strikethrough", "footnotes", "url"]
_SLUG_STRIP = re.compile(r"[^\w\s-]")
_SLUG_SPACES = re.compile(r"[\s_-]+")


@dataclass(frozen=True)
class TocEntry:
    """Heading of a rendered document."""

    level: int
    title: str
    id: str

    def to_dict(self) -> dict[str, str | int]:
        """Convert to dictionary for JSON serialization."""
        return {"level": self.level, "title": self.title, "id": self.id}


@dataclass
class RenderResult:
    """Result of rendering a markdown document."""

    html: str
    title: str | None
    toc: list[TocEntry] = field(default_factory=list)
    fallback: bool = False


class MarkdownRenderer:
    """Renders markdown text to HTML.

    A new mistune instance is created for every call, so the renderer can be
    shared by concurrent requests.
    """

    def __init__(self, *, toc_levels: tuple[int, int] = (2, 3)) -> None:
        """Initialize renderer.

        Args:
            toc_levels: Inclusive range of heading levels listed in the ToC.
                        The first H1 is reported as the title instead.
        """
        self._toc_levels = toc_levels

    def render(self, text: str) -> RenderResult:
        """Render markdown text.

        Args:
            text: Markdown source

        Returns:
            RenderResult with HTML, title and ToC. ``fallback`` is set when
            the source could not be parsed and was rendered as escaped text.
        """
        try:
            return self._render(text)
        except Exception as e:
            logger.warning(f"Markdown rendering failed, falling back to plain text: {e!r}")
            return RenderResult(
                html=f"<pre>{html.escape(text)}</pre>",
                title=None,
                fallback=True,
            )

    def _render(self, text: str) -> RenderResult:
        md = mistune.create_markdown(escape=False, plugins=_PLUGINS)
        add_toc_hook(md, min_level=1, max_level=max(self._toc_levels), heading_id=_heading_ids())
        rendered, state = md.parse(text)

        title: str | None = None
        toc: list[TocEntry] = []
        min_level, max_level = self._toc_levels
        for level, anchor, heading in state.env.get("toc_items", []):
            if level == 1 and title is None:
                title = html.unescape(heading)
            elif min_level <= level <= max_level:
                toc.append(TocEntry(level=level, title=html.unescape(heading), id=anchor))

        return RenderResult(html=str(rendered), title=title, toc=toc)


def _heading_ids() -> Callable[[dict, int], str]:
    """Build a heading id generator producing unique slugs per document."""
    seen: dict[str, int] = {}

    def heading_id(token: dict, index: int) -> str:
        base = slugify(token.get("text", "")) or f"section-{index + 1}"
        count = seen.get(base, 0)
        seen[base] = count + 1
        return base if count == 0 else f"{base}-{count}"

    return heading_id


def slugify(text: str) -> str:
    """Convert heading text to an anchor id.

    Examples:
        "Getting Started" -> "getting-started"
        "What's new?" -> "whats-new"
    """
    slug = _SLUG_STRIP.sub("", text.lower())
    return _SLUG_SPACES.sub("-", slug).strip("-")
