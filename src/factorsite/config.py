"""Configuration management for factorsite.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from factorsite.core.topics import DEFAULT_TOPICS

CONFIG_FILENAME = "factorsite.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ContentConfig:
    """Content configuration."""

    source_dir: Path = field(default_factory=lambda: Path("content"))
    default_locale: str = "en"
    locales: list[str] = field(default_factory=lambda: ["en"])
    topics: list[str] = field(default_factory=lambda: list(DEFAULT_TOPICS))


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for factorsite.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(server=ServerConfig(), content=ContentConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        server = cls._parse_server(data.get("server"))
        content = cls._parse_content(data.get("content"), config_dir)

        return cls(server=server, content=content, config_path=path)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig(source_dir=config_dir / "content")

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        source_dir = data.get("source_dir", "content")
        if not isinstance(source_dir, str):
            raise ValueError("content.source_dir must be a string")

        default_locale = data.get("default_locale", "en")
        if not isinstance(default_locale, str):
            raise ValueError("content.default_locale must be a string")

        locales = _parse_string_list(data, "locales", [default_locale])
        if default_locale not in locales:
            raise ValueError(
                f"content.default_locale {default_locale!r} must be listed in content.locales",
            )
        if len(set(locales)) != len(locales):
            raise ValueError("content.locales must not contain duplicates")

        topics = _parse_string_list(data, "topics", list(DEFAULT_TOPICS))
        if len(set(topics)) != len(topics):
            raise ValueError("content.topics must not contain duplicates")
        if any("/" in topic for topic in topics):
            raise ValueError("content.topics items must not contain slashes")

        return ContentConfig(
            source_dir=config_dir / source_dir,
            default_locale=default_locale,
            locales=locales,
            topics=topics,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override content.source_dir

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = self.content
        if source_dir is not None:
            content = replace(self.content, source_dir=source_dir)

        return replace(self, server=server, content=content)


def _parse_string_list(data: dict, key: str, default: list[str]) -> list[str]:
    raw = data.get(key)
    if raw is None:
        return default
    if not isinstance(raw, list):
        raise ValueError(f"content.{key} must be a list")
    if not raw:
        raise ValueError(f"content.{key} must not be empty")
    items: list[str] = []
    for item in raw:
        if not isinstance(item, str) or not item:
            raise ValueError(f"content.{key} items must be non-empty strings")
        items.append(item)
    return items
