"""Hierarchical category logging with appenders, layouts, filters and property-file configuration."""

__version__ = "1.0.0"