"""Request-scoped observability: request IDs, structlog access logs, panic recovery,
and an in-memory metrics snapshot for local development.
"""
