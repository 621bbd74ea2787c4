"""Catalog, configuration, type mapping and error types for a cached query engine."""

__version__ = "0.1.0"