"""CLI interface for factorsite.

Command-line tool for serving and checking the topic documents.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from factorsite.config import Config


@click.group()
def cli() -> None:
    """factorsite - localized documentation for an ordered set of topics."""


def _config_option(func):
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(exists=True, path_type=Path),
        default=None,
        help="Path to configuration file (default: auto-discover factorsite.toml)",
    )(func)


@cli.command()
@_config_option
@click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content source directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log missing translations)",
)
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the documentation server."""
    from factorsite.server import run_server

    _setup_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        source_dir=source_dir,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content directory: {config.content.source_dir}")
    click.echo(
        f"Locales: {', '.join(config.content.locales)} (default: {config.content.default_locale})",
    )
    click.echo(f"Topics: {len(config.content.topics)}")

    run_server(config, verbose=verbose)


@cli.command()
@_config_option
@click.option(
    "--locale",
    "-l",
    default=None,
    help="Locale for the listed links (default: configured default locale)",
)
def topics(config_path: Path | None, locale: str | None) -> None:
    """List topics in navigation order."""
    from factorsite.core.locales import LocaleSet
    from factorsite.core.navigation import build_topic_links
    from factorsite.core.topics import TopicIndex

    config = _load_config(config_path)
    locales = LocaleSet(config.content.locales, config.content.default_locale)
    if locale is not None and locale not in locales:
        _fail(f"unknown locale {locale!r} (available: {', '.join(locales)})")

    effective_locale = locales.get(locale)
    for link in build_topic_links(TopicIndex(config.content.topics), locales, effective_locale):
        click.echo(f"{link.topic.ordinal:>5}  {link.topic.id:<24} {link.path}")


@cli.command()
@_config_option
def check(config_path: Path | None) -> None:
    """Report topics without a document in some locale.

    Missing translations are not an error; the command only lists them.
    """
    from factorsite.core.content import ContentLoader
    from factorsite.core.topics import TopicIndex

    config = _load_config(config_path)
    loader = ContentLoader(config.content.source_dir)
    locales = config.content.locales

    missing_total = 0
    for topic in TopicIndex(config.content.topics):
        present = loader.available_locales(topic.id, locales)
        missing = [locale for locale in locales if locale not in present]
        if missing:
            missing_total += len(missing)
            click.echo(f"{topic.id}: missing {', '.join(missing)}")

    if missing_total:
        click.echo(
            click.style(f"\n{missing_total} document(s) missing", fg="yellow"),
        )
    else:
        click.echo(click.style("All documents present", fg="green"))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None) -> Config:
    """Load configuration or exit with error.

    Raises:
        SystemExit: If the configuration is missing or invalid
    """
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
