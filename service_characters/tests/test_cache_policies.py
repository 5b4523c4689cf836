"""
Unit tests for cache key derivation and TTLs.
"""

from service_characters.app.caching.policies import CachePolicies, CachePolicy


def test_default_ttls():
    policies = CachePolicies()

    assert policies.all.ttl_seconds == 10
    assert policies.by_id.ttl_seconds == 15
    assert policies.search.ttl_seconds == 30


def test_list_key():
    assert CachePolicies().all_key() == "characters:all"


def test_by_id_key():
    policies = CachePolicies()

    assert policies.by_id_key("1") == "character:1"
    assert policies.by_id_key(42) == "character:42"


def test_search_key_is_case_insensitive():
    policies = CachePolicies()

    assert policies.search_key("Rick") == "character:search:rick"
    assert policies.search_key("RICK") == policies.search_key("rick")


def test_search_key_keeps_spaces():
    assert CachePolicies().search_key("Morty Smith") == "character:search:morty smith"


def test_custom_ttls():
    policies = CachePolicies(ttl_all=1, ttl_by_id=2, ttl_search=3)

    assert [p.ttl_seconds for p in (policies.all, policies.by_id, policies.search)] == [1, 2, 3]


def test_policy_formats_template():
    policy = CachePolicy("custom", "thing:{a}:{b}", 5)

    assert policy.key(a="x", b="y") == "thing:x:y"
