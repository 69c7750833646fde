"""factorsite - localized documentation site for an ordered set of topics."""

__version__ = "0.1.0"
