"""Task Service - single-resource task tracking over HTTP."""

__version__ = "1.0.0"
