import random

import pytest

from art_catalog import (ArtCatalog, ArtEntry, FileSystemStorage, METADATA_CACHE_KEY,
                         METADATA_NAMESPACE, calculate_difficulty, fuzzy_match,
                         generate_description, generate_tags, levenshtein_distance)
from errors import CatalogLoadError, NotInitializedError
from metadata_cache import MemoryCache, MetadataCache

from conftest import FixedPopularity, SAMPLE_TREE, write_art_tree


def test_entries_derive_line_count_and_width(catalog):
    for category in catalog.get_categories():
        for entry in catalog.get_category(category):
            lines = entry.content.split("\n")
            assert entry.line_count == len(lines)
            assert entry.max_width == max(len(line) for line in lines)
            assert entry.byte_size == len(entry.content)


def test_metadata_ranges(catalog):
    for category in catalog.get_categories():
        for entry in catalog.get_category(category):
            metadata = catalog.get_metadata(entry)
            assert 1 <= metadata.difficulty <= 10
            assert 0 <= metadata.popularity <= 99


def test_single_cat_scenario(tmp_path, make_catalog):
    root = write_art_tree(tmp_path / "art", {"animals": {"cat": "ΛΛ\n(•ㅅ•)"}})
    catalog = make_catalog(root)
    catalog.initialize()

    assert catalog.get_art("cat", "animals").line_count == 2
    results = catalog.search_art("cat")
    assert len(results) == 1
    assert results[0].score == 100


def test_fuzzy_threshold_rejects_short_query(tmp_path, make_catalog):
    root = write_art_tree(tmp_path / "art", {"animals": {"cat": "ΛΛ\n(•ㅅ•)"}})
    catalog = make_catalog(root)
    catalog.initialize()

    assert catalog.search_art("kat", fuzzy=True) == []


def test_fuzzy_match_within_threshold(catalog):
    results = catalog.search_art("batmn")
    assert [(r.name, r.score) for r in results] == [("batman", 20)]

    assert catalog.search_art("batmn", fuzzy=False) == []


@pytest.mark.parametrize("name", ["batman", "superman", "github", "node", "cat", "owl"])
def test_exact_name_comes_first(catalog, name):
    results = catalog.search_art(name, fuzzy=False)
    assert results[0].name == name
    assert results[0].score == 100


def test_exact_match_ignores_case(catalog):
    results = catalog.search_art("BATMAN")
    assert results[0].name == "batman"
    assert results[0].score == 100


def test_search_scores_name_substring_and_tags(catalog):
    partial = catalog.search_art("man")
    assert [(r.name, r.score) for r in partial] == [("batman", 50), ("superman", 50)]

    tagged = catalog.search_art("hero")
    assert [(r.name, r.score) for r in tagged] == [("batman", 30), ("superman", 30)]


def test_search_results_sorted(catalog):
    results = catalog.search_art("a", limit=100)
    assert results
    for a, b in zip(results, results[1:]):
        assert a.score > b.score or (a.score == b.score and a.name <= b.name)


def test_search_category_filter_and_limit(catalog):
    results = catalog.search_art("a", category="animals")
    assert [(r.name, r.score) for r in results] == [("cat", 50), ("owl", 30)]

    assert len(catalog.search_art("a", limit=1)) == 1
    assert catalog.search_art("a", limit=0) == []


def test_empty_query_matches_everything(catalog):
    results = catalog.search_art("", limit=100)
    assert len(results) == 6
    assert {r.score for r in results} == {50}


def test_get_category_unknown_is_empty(catalog):
    assert catalog.get_category("nonexistent") == []


def test_get_categories_priority_then_sorted_extras(tmp_path, make_catalog):
    tree = dict(SAMPLE_TREE)
    tree["zzz"] = {"thing": "z"}
    tree["birds"] = {"robin": "r"}
    root = write_art_tree(tmp_path / "art", tree)
    (root / "empty").mkdir()
    (root / "_private").mkdir()
    (root / "_private" / "hidden.txt").write_text("x", encoding="utf-8")

    catalog = make_catalog(root)
    catalog.initialize()

    assert catalog.get_categories() == ["superheroes", "logos", "animals", "birds", "zzz"]
    stats = catalog.get_statistics()
    assert "empty" not in stats["category_breakdown"]
    assert stats["categories"] == len(stats["category_breakdown"]) == 5


def test_get_art_resolves_duplicates_by_priority(tmp_path, make_catalog):
    root = write_art_tree(tmp_path / "art", {
        "animals": {"cat": "animal cat"},
        "logos": {"cat": "logo cat"},
    })
    catalog = make_catalog(root)
    catalog.initialize()

    assert catalog.get_art("cat").category == "logos"
    assert catalog.get_art("cat", "animals").content == "animal cat"
    assert [e.category for e in catalog.find_all("cat")] == ["logos", "animals"]
    assert catalog.get_art("dog") is None
    assert catalog.get_art("cat", "superheroes") is None


def test_queries_before_initialize_raise(art_root, make_catalog):
    catalog = make_catalog(art_root)
    assert not catalog.is_initialized()
    with pytest.raises(NotInitializedError):
        catalog.get_art("batman")
    with pytest.raises(NotInitializedError):
        catalog.search_art("batman")
    with pytest.raises(NotInitializedError):
        catalog.get_categories()
    with pytest.raises(NotInitializedError):
        catalog.get_statistics()


def test_initialize_is_idempotent(catalog, popularity):
    calls = len(popularity.calls)
    catalog.initialize()
    assert len(popularity.calls) == calls


def test_missing_root_raises(tmp_path, make_catalog):
    catalog = make_catalog(tmp_path / "missing")
    with pytest.raises(CatalogLoadError):
        catalog.initialize()


def test_unreadable_file_is_skipped(tmp_path, make_catalog):
    root = write_art_tree(tmp_path / "art", {"animals": {"cat": "=^.^="}})
    (root / "animals" / "broken.txt").write_bytes(b"\xff\xfe\xfa")
    catalog = make_catalog(root)
    catalog.initialize()

    assert catalog.total_count() == 1
    assert catalog.get_art("broken") is None


def test_empty_catalog(tmp_path, make_catalog):
    root = tmp_path / "art"
    root.mkdir()
    catalog = make_catalog(root)
    catalog.initialize()

    assert catalog.get_random_art() is None
    assert catalog.get_categories() == []
    stats = catalog.get_statistics()
    assert stats["total_art"] == 0
    assert stats["average_size"] == 0
    assert stats["largest_art"] is None
    assert stats["smallest_art"] is None


def test_random_art_uses_injected_rng(art_root, make_catalog):
    catalog = make_catalog(art_root, rng=random.Random(7))
    catalog.initialize()

    for _ in range(10):
        art = catalog.get_random_art("animals")
        assert art.category == "animals"
    assert catalog.get_random_art("nonexistent") is None


def test_popular_art_ordering(tmp_path, make_catalog):
    root = write_art_tree(tmp_path / "art", {"animals": {"ant": "a", "bee": "b", "cow": "c"}})
    provider = FixedPopularity({"ant": 10, "bee": 90, "cow": 50})
    catalog = make_catalog(root, provider=provider)
    catalog.initialize()

    assert [r.popularity for r in catalog.get_popular_art(3)] == [90, 50, 10]
    assert [r.name for r in catalog.get_popular_art(2)] == ["bee", "cow"]


def test_popular_art_ties_keep_catalog_order(catalog):
    popular = catalog.get_popular_art(limit=10)
    assert [r.name for r in popular] == ["batman", "superman", "github", "node", "cat", "owl"]


def test_popularity_is_clamped(tmp_path, make_catalog):
    root = write_art_tree(tmp_path / "art", {"animals": {"cat": "c"}})
    catalog = make_catalog(root, provider=FixedPopularity({"cat": 250}))
    catalog.initialize()
    assert catalog.get_metadata(catalog.get_art("cat")).popularity == 99


def test_statistics(catalog):
    stats = catalog.get_statistics()
    assert stats["total_art"] == 6
    assert stats["categories"] == 3
    assert stats["category_breakdown"] == {"superheroes": 2, "logos": 2, "animals": 2}
    assert stats["average_size"] == 12
    assert stats["largest_art"] == {"name": "batman", "category": "superheroes", "size": 19}
    assert stats["smallest_art"] == {"name": "github", "category": "logos", "size": 5}


def test_average_size_rounds_half_up(tmp_path, make_catalog):
    # sizes 2 and 3 average to 2.5, which must round to 3
    root = write_art_tree(tmp_path / "art", {"animals": {"ant": "ab", "bee": "abc"}})
    catalog = make_catalog(root)
    catalog.initialize()
    assert catalog.get_statistics()["average_size"] == 3


def test_refresh_picks_up_new_files(catalog, art_root, popularity):
    (art_root / "animals" / "fox.txt").write_text("/\\ /\\", encoding="utf-8")
    calls = len(popularity.calls)

    catalog.refresh()

    assert catalog.get_statistics()["total_art"] == 7
    assert catalog.get_art("fox") is not None
    # the metadata cache was invalidated, so every entry is regenerated
    assert len(popularity.calls) - calls == 7


def test_cached_metadata_is_reused(art_root, memory_cache, make_catalog):
    first = make_catalog(art_root, provider=FixedPopularity({"owl": 77}))
    first.initialize()

    provider = FixedPopularity({"owl": 1})
    second = make_catalog(art_root, cache=memory_cache, provider=provider)
    second.initialize()

    assert provider.calls == []
    assert second.get_metadata(second.get_art("owl")).popularity == 77


def test_cached_metadata_reconciled_with_storage(art_root, memory_cache, make_catalog):
    make_catalog(art_root).initialize()
    (art_root / "animals" / "owl.txt").unlink()
    (art_root / "animals" / "fox.txt").write_text("fox", encoding="utf-8")

    provider = FixedPopularity()
    catalog = make_catalog(art_root, provider=provider)
    catalog.initialize()

    assert provider.calls == [("animals", "fox")]
    cached = memory_cache.get(METADATA_CACHE_KEY, METADATA_NAMESPACE)
    names = sorted(item["name"] for item in cached)
    assert names == ["batman", "cat", "fox", "github", "node", "superman"]


def test_corrupt_cached_items_are_regenerated(art_root, memory_cache, make_catalog):
    memory_cache.set(METADATA_CACHE_KEY, [{"name": "cat", "category": "animals"},
                                          "garbage"], METADATA_NAMESPACE)
    catalog = make_catalog(art_root)
    catalog.initialize()

    assert catalog.get_metadata(catalog.get_art("cat")).tags[0] == "animals"


def test_metadata_persisted_to_file_cache(art_root, tmp_path, popularity):
    cache = MetadataCache(tmp_path / "cache")
    catalog = ArtCatalog(FileSystemStorage(art_root), cache=cache, popularity=popularity)
    catalog.initialize()

    assert (tmp_path / "cache" / "art" / "ascii_art_metadata.json").exists()
    assert len(cache.get(METADATA_CACHE_KEY, METADATA_NAMESPACE)) == 6


def test_catalog_without_cache(art_root, popularity):
    catalog = ArtCatalog(FileSystemStorage(art_root), cache=None, popularity=popularity)
    catalog.initialize()
    catalog.refresh()
    assert catalog.total_count() == 6


def test_bundled_art_loads():
    import mdsaad_art

    catalog = ArtCatalog(FileSystemStorage(mdsaad_art.ART_ROOT), cache=MemoryCache(),
                         popularity=FixedPopularity())
    catalog.initialize()

    assert catalog.get_categories() == ["superheroes", "logos", "animals"]
    assert catalog.get_art("batman").category == "superheroes"
    assert catalog.get_metadata(catalog.get_art("batman")).description == "The Dark Knight of Gotham City"


# --- Derived metadata ---

def test_generate_tags():
    assert generate_tags("iron-man_mk2", "superheroes") == [
        "superheroes", "iron", "man", "mk2", "hero", "comic", "character", "fiction", "superhero"]
    assert generate_tags("cat", "animals") == ["animals", "cat", "nature", "creature", "wildlife"]
    assert generate_tags("robin", "birds") == ["birds", "robin"]


def test_generate_description():
    assert generate_description("batman", "superheroes") == "The Dark Knight of Gotham City"
    assert generate_description("robin", "birds") == "ASCII art of robin"


def test_calculate_difficulty_buckets():
    small = ArtEntry.from_content("tiny", "animals", "x")
    assert calculate_difficulty(small) == 3

    medium = ArtEntry.from_content("mid", "animals", "\n".join(["y" * 50] * 25))
    assert calculate_difficulty(medium) == 6

    large = ArtEntry.from_content("big", "animals", "\n".join(["z" * 100] * 60))
    assert calculate_difficulty(large) == 9


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("cat", "cat") == 0
    assert levenshtein_distance("kat", "cat") == 1


def test_fuzzy_match_threshold():
    assert not fuzzy_match("kat", "cat")
    assert fuzzy_match("batmn", "batman")
    assert fuzzy_match("spidermn", "spiderman")
    assert not fuzzy_match("python", "")
