"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "/config", "/fr/config")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Locale identifier (e.g., "en", "fr")
Locale = NewType("Locale", str)

# Topic identifier, one entry of the ordered topic sequence (e.g., "config")
TopicId = NewType("TopicId", str)
