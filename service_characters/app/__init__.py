"""
Characters Service package for the Character Cache Proxy.

The service fronts the public character API with a Redis cache-aside layer:
- Resource queries: list, by id, and by name search, each with its own TTL
- Cache statistics and global invalidation
- Pass-through of upstream payloads annotated with cache provenance

Structure:
- app.main: FastAPI app, routes, and lifecycle wiring.
- app.adapters: HTTP client for the upstream character API.
- app.caching: Redis store wrapper, cache policies, cache-aside resolver.
- app.stats: Process-wide hit/miss bookkeeping.
"""
