"""Shared test fixtures."""

from pathlib import Path

import pytest
from factorsite.config import Config, ContentConfig, ServerConfig
from factorsite.core.content import ContentLoader
from factorsite.core.dispatcher import PageDispatcher
from factorsite.core.locales import LocaleSet
from factorsite.core.renderer import MarkdownRenderer
from factorsite.core.topics import TopicIndex


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create content directory with English documents for a, b, c and French for b, c."""
    content = tmp_path / "content"
    (content / "en").mkdir(parents=True)
    (content / "fr").mkdir()
    (content / "en" / "a.md").write_text("# Alpha\n\nFirst topic.\n")
    (content / "en" / "b.md").write_text("# Beta\n\nSecond topic.\n\n## Details\n\nMore.\n")
    (content / "en" / "c.md").write_text("# Gamma\n\nThird topic.\n")
    (content / "fr" / "b.md").write_text("# Bêta\n\nDeuxième sujet.\n")
    (content / "fr" / "c.md").write_text("# Gamma\n\nTroisième sujet.\n")
    return content


@pytest.fixture
def test_config(content_dir: Path) -> Config:
    """Create a test configuration with topics [a, b, c] and locales en (default), fr."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(
            source_dir=content_dir,
            default_locale="en",
            locales=["en", "fr"],
            topics=["a", "b", "c"],
        ),
    )


@pytest.fixture
def topics() -> TopicIndex:
    return TopicIndex(["a", "b", "c"])


@pytest.fixture
def locales() -> LocaleSet:
    return LocaleSet(["en", "fr"], "en")


@pytest.fixture
def dispatcher(topics: TopicIndex, locales: LocaleSet, content_dir: Path) -> PageDispatcher:
    return PageDispatcher(topics, locales, ContentLoader(content_dir), MarkdownRenderer())
