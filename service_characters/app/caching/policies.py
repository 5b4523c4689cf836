"""
Cache key derivation and TTL assignment per endpoint.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachePolicy:
    """A named key template and expiry for one kind of upstream query.

    ``key_template`` is a ``str.format`` template; the ``search`` policy
    lower-cases its ``name`` argument so differently cased queries share an
    entry.
    """

    name: str
    key_template: str
    ttl_seconds: int

    def key(self, **params: str) -> str:
        return self.key_template.format(**params)


class CachePolicies:
    """The three policies the service routes through the resolver."""

    def __init__(self, ttl_all: int = 10, ttl_by_id: int = 15, ttl_search: int = 30):
        self.all = CachePolicy("all", "characters:all", ttl_all)
        self.by_id = CachePolicy("by_id", "character:{id}", ttl_by_id)
        self.search = CachePolicy("search", "character:search:{name}", ttl_search)

    def all_key(self) -> str:
        return self.all.key()

    def by_id_key(self, character_id: str) -> str:
        return self.by_id.key(id=str(character_id))

    def search_key(self, name: str) -> str:
        return self.search.key(name=name.lower())
