"""Observability helpers.

Request IDs and access logs via structlog contextvars, Prometheus metrics on a
private registry, response security headers and optional OTLP tracing.
"""
