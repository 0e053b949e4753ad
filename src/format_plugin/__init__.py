"""Run swiftformat from a package plugin context."""

__version__ = "0.1.0"
