"""Trace headers, daemon endpoints, wildcard patterns and host metadata for distributed tracing."""

__version__ = "0.1.0"