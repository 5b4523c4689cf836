"""
Characters service for the Character Cache Proxy.
"""

from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Request

from shared.base_service import BaseService
from shared.errors import CacheStoreError

from .adapters.character_client import CharacterApiClient
from .caching.policies import CachePolicies, CachePolicy
from .caching.resolver import CacheAsideResolver
from .caching.store import RedisStore
from .stats.aggregator import StatsAggregator, format_uptime


ENDPOINTS = {
    "GET /characters": "Get all characters",
    "GET /character/:id": "Get character by ID",
    "GET /characters/search/:name": "Search characters by name",
    "GET /stats": "Get cache statistics",
    "DELETE /cache": "Clear all cache",
}


class CharactersService(BaseService):
    """Cache-aside proxy for the upstream character API."""

    def __init__(
        self,
        *,
        store: Optional[RedisStore] = None,
        upstream: Optional[CharacterApiClient] = None,
        stats: Optional[StatsAggregator] = None,
        **config_overrides: Any,
    ):
        super().__init__("characters", **config_overrides)

        self.store = store or RedisStore(
            self.config.redis_url,
            socket_timeout=self.config.redis_socket_timeout,
        )
        self.upstream = upstream or CharacterApiClient(
            self.config.upstream_base_url,
            timeout=self.config.upstream_timeout,
        )
        self.stats = stats or StatsAggregator()
        self.policies = CachePolicies(
            ttl_all=self.config.ttl_all,
            ttl_by_id=self.config.ttl_by_id,
            ttl_search=self.config.ttl_search,
        )
        self.resolver = CacheAsideResolver(self.store, self.stats, metrics=self.metrics)

        self._setup_character_routes()
        self._setup_cache_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.characters_service = self

    async def on_startup(self) -> None:
        # A Redis outage at boot is fatal: the exception aborts the lifespan.
        await self.store.start()
        self.logger.info(
            "Characters service started",
            port=self.config.port,
            upstream=self.config.upstream_base_url,
            endpoints=list(ENDPOINTS),
        )

    async def on_shutdown(self) -> None:
        await self.upstream.close()
        await self.store.stop()

    async def _check_dependencies(self) -> Dict[str, str]:
        return {"redis": "ok" if await self.store.is_connected() else "error"}

    async def _cached_response(
        self,
        policy: CachePolicy,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Dict[str, Any]:
        """Resolve through the cache and annotate the payload with provenance."""
        result = await self.resolver.resolve(key, policy.ttl_seconds, fetch, cache_type=policy.name)

        body = result.value if isinstance(result.value, dict) else {"data": result.value}
        return {
            **body,
            "_cache": result.cached,
            "_responseTime": result.elapsed_ms,
        }

    def _setup_character_routes(self):
        """Set up character query routes."""

        async def get_all_characters():
            """Get all characters (cached)."""
            return await self._cached_response(
                self.policies.all,
                self.policies.all_key(),
                self.upstream.list_characters,
            )

        async def get_character_by_id(character_id: str):
            """Get a character by id (cached)."""
            return await self._cached_response(
                self.policies.by_id,
                self.policies.by_id_key(character_id),
                lambda: self.upstream.get_character(character_id),
            )

        for path in ("/characters", "/character"):
            self.app.add_api_route(path, get_all_characters, methods=["GET"])

        @self.app.get("/characters/search/{name}")
        async def search_characters(name: str):
            """Search characters by name (cached, case-insensitive key)."""
            return await self._cached_response(
                self.policies.search,
                self.policies.search_key(name),
                lambda: self.upstream.search_characters(name),
            )

        for path in ("/characters/{character_id}", "/character/{character_id}"):
            self.app.add_api_route(path, get_character_by_id, methods=["GET"])

    def _setup_cache_routes(self):
        """Set up stats, invalidation and index routes."""

        @self.app.get("/stats")
        async def get_stats():
            """Cache statistics.

            ``hitRate`` is a number (percent, two decimals) and ``uptime`` is whole
            seconds, not the ``"12.50%"`` / ``"42s"`` strings older clients may expect.
            """
            snapshot = self.stats.snapshot()
            keys = await self.store.key_count()

            return {
                "cache": {
                    "hits": snapshot.hits,
                    "misses": snapshot.misses,
                    "hitRate": snapshot.hit_rate,
                    "totalKeys": keys
                },
                "requests": {
                    "total": snapshot.total
                },
                "server": {
                    "uptime": snapshot.uptime_seconds,
                    "uptimeFormatted": format_uptime(snapshot.uptime_seconds)
                },
                "redis": {
                    "connected": await self.store.is_connected(),
                    "keysInCache": keys
                }
            }

        @self.app.delete("/cache")
        async def clear_cache():
            """Flush every cached entry."""
            result = await self.store.flush()
            if result != "OK":
                raise CacheStoreError("Redis did not acknowledge the flush", details={"result": result})

            self.logger.info("Cache cleared")
            return {
                "message": "Cache cleared successfully",
                "result": result
            }

        @self.app.get("/")
        async def root(request: Request):
            """Describe the available endpoints."""
            base_url = str(request.base_url).rstrip("/")
            return {
                "message": "Redis Caching Demo API",
                "endpoints": ENDPOINTS,
                "example": {
                    "getAll": f"{base_url}/characters",
                    "getById": f"{base_url}/character/1",
                    "search": f"{base_url}/characters/search/rick",
                    "stats": f"{base_url}/stats"
                }
            }


def create_app(**kwargs: Any):
    """Create FastAPI application."""
    service = CharactersService(**kwargs)
    return service.app


def main():
    """Run the service under uvicorn."""
    service = CharactersService()
    service.run()


if __name__ == "__main__":
    main()
