"""Centralized version information for connectorgen."""

# Package version - follows semantic versioning (MAJOR.MINOR.PATCH)
__version__ = "0.1.0"
