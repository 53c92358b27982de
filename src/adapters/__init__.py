"""Adaptadores de I/O: httpx, GraphQL y exportación JSON."""
