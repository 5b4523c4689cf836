"""
Characters caching package.

Provides the cache-aside primitives used by the Characters Service: a thin
Redis store wrapper, per-endpoint cache policies (key derivation and TTL), and
the resolver that ties them to an upstream fetch. Entries are short-lived and
only removed by expiry or a global flush.
"""

from .policies import CachePolicy, CachePolicies
from .resolver import CacheAsideResolver, CacheResult
from .store import RedisStore

__all__ = [
    "CachePolicy",
    "CachePolicies",
    "CacheAsideResolver",
    "CacheResult",
    "RedisStore",
]
