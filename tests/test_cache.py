# tests/test_cache.py

"""
Tests for caching functionality.
"""

from unittest.mock import Mock, patch

from core.cache import cache_clear, cache_delete, cache_get, cache_set, cached, get_cache


def test_cache_set_and_get():
    cache_set("test_key", "test_value", ttl_seconds=60)
    assert cache_get("test_key") == "test_value"


def test_cache_expiration():
    with patch("core.cache.time.monotonic", return_value=1000.0):
        cache_set("expiring_key", "expired_value", ttl_seconds=30)

    with patch("core.cache.time.monotonic", return_value=1029.0):
        assert cache_get("expiring_key") == "expired_value"

    with patch("core.cache.time.monotonic", return_value=1030.0):
        assert cache_get("expiring_key") is None


def test_expired_entries_are_dropped_on_set():
    with patch("core.cache.time.monotonic", return_value=1000.0):
        for n in range(100):
            cache_set(f"permission-log:editor/resource-{n}/edit", True, ttl_seconds=5)

    assert get_cache().size() == 100

    with patch("core.cache.time.monotonic", return_value=1005.0):
        cache_set("election:latest", "record", ttl_seconds=30)

    assert get_cache().size() == 1


def test_cleanup_expired():
    with patch("core.cache.time.monotonic", return_value=1000.0):
        cache_set("short", "value", ttl_seconds=5)
        cache_set("long", "value", ttl_seconds=60)

    with patch("core.cache.time.monotonic", return_value=1010.0):
        get_cache().cleanup_expired()
        assert get_cache().size() == 1
        assert cache_get("long") == "value"


def test_cache_delete():
    cache_set("delete_key", "delete_value")
    cache_delete("delete_key")
    assert cache_get("delete_key") is None


def test_cache_clear():
    cache_set("key1", "value1")
    cache_set("key2", "value2")

    cache_clear()

    assert cache_get("key1") is None
    assert cache_get("key2") is None


def test_cached_decorator_skips_none_results():
    loader = Mock(side_effect=[None, "record", "newer record"])

    @cached(ttl_seconds=60, key_prefix="election")
    def load():
        return loader()

    assert load() is None
    assert load() == "record"
    assert load() == "record"
    assert loader.call_count == 2


def test_election_record_fetch_is_cached():
    from services.backend_client import fetch_election_record

    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"isActive": True, "date": "2025-05-15", "endTime": "16:00"}

    with patch("services.backend_client.requests.get", return_value=response) as mock_get:
        first = fetch_election_record()
        second = fetch_election_record()

    assert first == second
    assert first.is_active is True
    assert mock_get.call_count == 1
    assert mock_get.call_args.kwargs["headers"]["Cache-Control"] == "no-cache"


def test_monitor_loader_bypasses_cache():
    from services.backend_client import load_current_election

    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"isActive": True, "date": "2025-05-15", "endTime": "16:00"}

    with patch("services.backend_client.requests.get", return_value=response) as mock_get:
        load_current_election()
        load_current_election()

    assert mock_get.call_count == 2
    assert get_cache().size() == 0
