"""
Application Layer

This package implements the web application layer for the ENS lookup service using the
aiohttp framework, along with its configuration and metrics.

Key Components:
- cli.py: Entry point for running the web server
- server.py: Web application factory, middleware and startup/shutdown
- config.py: Configuration management using Pydantic settings
- metrics.py: Metrics abstraction with Telegraf and no-op backends
- handlers/: Request handlers for lookup and internal endpoints
- tasks.py: Background task decaying the failure gauge

The application uses two middleware layers:
- Metrics middleware for request counts and timings
- Sentry middleware for error reporting

It provides the following endpoints:
- Lookup endpoints (/api/lookup, /api/lookup/name, /api/lookup/address)
- Probes (/internal/alive, /internal/ready)
"""
