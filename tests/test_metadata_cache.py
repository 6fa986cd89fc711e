import json

import pytest

from metadata_cache import MemoryCache, MetadataCache, sanitize_key

from conftest import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(tmp_path, clock):
    return MetadataCache(tmp_path / "cache", clock=clock)


def test_set_and_get(cache, tmp_path):
    assert cache.set("ascii_art_metadata", [{"name": "cat"}], "art", ttl_ms=1000)
    assert cache.get("ascii_art_metadata", "art") == [{"name": "cat"}]

    entry = json.loads((tmp_path / "cache" / "art" / "ascii_art_metadata.json").read_text())
    assert entry["key"] == "ascii_art_metadata"
    assert entry["namespace"] == "art"
    assert entry["ttl"] == 1000
    assert entry["expires_at"] == entry["timestamp"] + 1000


def test_miss_returns_none(cache):
    assert cache.get("missing") is None


def test_expired_entry_is_removed(cache, clock, tmp_path):
    cache.set("k", "v", "art", ttl_ms=500)
    clock.now += 501

    assert cache.get("k", "art") is None
    assert not (tmp_path / "cache" / "art" / "k.json").exists()


def test_entry_valid_until_expiry(cache, clock):
    cache.set("k", "v", ttl_ms=500)
    clock.now += 500
    assert cache.get("k") == "v"


def test_corrupt_entry_is_a_miss(cache, tmp_path):
    path = tmp_path / "cache" / "art" / "k.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    assert cache.get("k", "art") is None
    assert not path.exists()


def test_invalidate_and_clear_namespace(cache):
    cache.set("a", 1, "art")
    cache.set("b", 2, "art")
    cache.set("c", 3, "other")

    assert cache.invalidate("a", "art")
    assert not cache.invalidate("a", "art")
    assert cache.clear_namespace("art") == 1
    assert cache.clear_namespace("art") == 0
    assert cache.get("c", "other") == 3


def test_stats(cache):
    cache.set("a", 1, "art")
    cache.set("b", 2, "other")
    stats = cache.stats()

    assert stats["total_entries"] == 2
    assert set(stats["namespaces"]) == {"art", "other"}
    assert stats["total_size"] > 0


def test_unserializable_value_fails_cleanly(cache, tmp_path):
    assert cache.set("bad", object(), "art") is False
    assert list((tmp_path / "cache" / "art").glob("*")) == []


def test_sanitize_key():
    assert sanitize_key('a/b\\c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"
    assert sanitize_key("two words\tand tab") == "two_words_and_tab"
    assert sanitize_key("trailing...") == "trailing"
    assert len(sanitize_key("x" * 500)) == 200


def test_memory_cache(clock):
    cache = MemoryCache(clock=clock)
    value = {"tags": ["a"]}
    cache.set("k", value, "art", ttl_ms=10)
    value["tags"].append("b")

    assert cache.get("k", "art") == {"tags": ["a"]}
    clock.now += 11
    assert cache.get("k", "art") is None

    cache.set("x", 1, "art")
    assert cache.clear_namespace("art") == 1
