#!/usr/bin/env python3
"""
ASCII Art Catalog
Loads categorized text art from storage, derives metadata and answers
lookup, search and listing queries.
"""

import random
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from errors import CatalogLoadError, NotInitializedError
from logger import get_logger

# Category priority: cross-category name lookups resolve in this order,
# then any extra category directories in sorted order.
KNOWN_CATEGORIES = ("superheroes", "logos", "animals")

METADATA_CACHE_KEY = "ascii_art_metadata"
METADATA_NAMESPACE = "art"
METADATA_TTL_MS = 24 * 60 * 60 * 1000

ART_SUFFIX = ".txt"

CATEGORY_TAGS = {
    "superheroes": ["hero", "comic", "character", "fiction"],
    "logos": ["brand", "company", "tech", "software"],
    "animals": ["nature", "creature", "wildlife"],
}

DESCRIPTIONS = {
    "superheroes": {
        "batman": "The Dark Knight of Gotham City",
        "superman": "The Man of Steel from Krypton",
        "spiderman": "Your friendly neighborhood web-slinger",
    },
    "logos": {
        "mdsaad": "MDSAAD CLI Tool logo",
        "node": "Node.js runtime logo",
        "github": "GitHub code repository platform",
        "python": "Python programming language logo",
    },
    "animals": {
        "cat": "Adorable feline ASCII art",
        "owl": "Wise nocturnal bird",
        "penguin": "Antarctic tuxedo bird",
    },
}

SCORE_EXACT = 100
SCORE_PARTIAL = 50
SCORE_TAG = 30
SCORE_FUZZY = 20

log = get_logger("catalog")


# --- Records ---

@dataclass(frozen=True)
class ArtEntry:
    name: str
    category: str
    content: str
    file_path: str
    line_count: int
    max_width: int
    byte_size: int

    @classmethod
    def from_content(cls, name: str, category: str, content: str, file_path: str = "") -> "ArtEntry":
        lines = content.split("\n")
        return cls(
            name=name,
            category=category,
            content=content,
            file_path=file_path,
            line_count=len(lines),
            max_width=max(len(line) for line in lines),
            byte_size=len(content),
        )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.category, self.name)


@dataclass
class ArtMetadata:
    name: str
    category: str
    tags: List[str]
    description: str
    difficulty: int
    popularity: int

    @property
    def key(self) -> Tuple[str, str]:
        return (self.category, self.name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArtMetadata":
        difficulty = int(data["difficulty"])
        popularity = int(data["popularity"])
        if not 1 <= difficulty <= 10 or not 0 <= popularity <= 99:
            raise ValueError(f"metadata out of range for {data.get('name')!r}")
        return cls(
            name=str(data["name"]),
            category=str(data["category"]),
            tags=[str(t) for t in data["tags"]],
            description=str(data["description"]),
            difficulty=difficulty,
            popularity=popularity,
        )


@dataclass
class ArtRecord:
    """An entry together with its metadata."""
    metadata: ArtMetadata
    art: ArtEntry

    @property
    def name(self) -> str:
        return self.art.name

    @property
    def category(self) -> str:
        return self.art.category

    @property
    def description(self) -> str:
        return self.metadata.description

    @property
    def tags(self) -> List[str]:
        return self.metadata.tags

    @property
    def popularity(self) -> int:
        return self.metadata.popularity

    @property
    def difficulty(self) -> int:
        return self.metadata.difficulty


@dataclass
class SearchResult(ArtRecord):
    score: int


# --- Derived metadata ---

def generate_tags(name: str, category: str) -> List[str]:
    """Tags from the category, the name tokens and a per-category vocabulary."""
    tags = [category]
    tags.extend(token for token in _split_name(name.lower()) if token)
    tags.extend(CATEGORY_TAGS.get(category, []))
    if category == "superheroes" and "man" in name:
        tags.append("superhero")
    return list(dict.fromkeys(tags))


def _split_name(name: str) -> List[str]:
    for sep in ("-", "_"):
        name = name.replace(sep, " ")
    return name.split()


def generate_description(name: str, category: str) -> str:
    return DESCRIPTIONS.get(category, {}).get(name, f"ASCII art of {name}")


def calculate_difficulty(art: ArtEntry) -> int:
    """Complexity score 1-10 from line count, width and size buckets."""
    score = 0

    if art.line_count > 50:
        score += 3
    elif art.line_count > 20:
        score += 2
    else:
        score += 1

    if art.max_width > 80:
        score += 3
    elif art.max_width > 40:
        score += 2
    else:
        score += 1

    if art.byte_size > 2000:
        score += 3
    elif art.byte_size > 500:
        score += 2
    else:
        score += 1

    return min(score, 10)


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def fuzzy_match(query: str, target: str) -> bool:
    """Accept when the edit distance is within 30% of the query length."""
    if not query:
        return True
    if not target:
        return False
    max_distance = (len(query) * 3) // 10
    return levenshtein_distance(query, target) <= max_distance


# --- Collaborators ---

class PopularityProvider:
    """Source of popularity scores in [0, 99] for an art identifier."""

    def score(self, category: str, name: str) -> int:
        raise NotImplementedError


class RandomPopularityProvider(PopularityProvider):
    """Uniform draw per generation; the metadata cache keeps it stable."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def score(self, category: str, name: str) -> int:
        return self._rng.randint(0, 99)


class FileSystemStorage:
    """Read-only ``<root>/<category>/<name>.txt`` asset tree."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def list_categories(self) -> List[str]:
        """Category directories, known ones first in priority order."""
        if not self.root.is_dir():
            raise CatalogLoadError(f"Art storage not found: {self.root}")
        try:
            present = sorted(p.name for p in self.root.iterdir()
                             if p.is_dir() and not p.name.startswith(("_", ".")))
        except OSError as e:
            raise CatalogLoadError(f"Cannot read art storage {self.root}: {e}") from e
        known = [c for c in KNOWN_CATEGORIES if c in present]
        return known + [c for c in present if c not in KNOWN_CATEGORIES]

    def list_files(self, category: str) -> List[str]:
        """Art names in a category, sorted."""
        category_path = self.root / category
        return sorted(p.stem for p in category_path.iterdir()
                      if p.is_file() and p.suffix == ART_SUFFIX)

    def read_text(self, category: str, name: str) -> str:
        return (self.root / category / f"{name}{ART_SUFFIX}").read_text(encoding="utf-8")

    def path_for(self, category: str, name: str) -> str:
        return str(self.root / category / f"{name}{ART_SUFFIX}")


# --- Catalog ---

class ArtCatalog:
    """In-memory index of text art and its derived metadata."""

    def __init__(self, storage: FileSystemStorage, cache=None,
                 popularity: Optional[PopularityProvider] = None,
                 rng: Optional[random.Random] = None,
                 metadata_ttl_ms: int = METADATA_TTL_MS):
        self.storage = storage
        self.cache = cache
        self.popularity = popularity or RandomPopularityProvider()
        self._rng = rng or random.Random()
        self.metadata_ttl_ms = metadata_ttl_ms
        self._entries: Dict[str, Dict[str, ArtEntry]] = {}
        self._metadata: Dict[Tuple[str, str], ArtMetadata] = {}
        self._initialized = False

    # Lifecycle

    def initialize(self):
        """Load every art file and its metadata. No-op when already initialized."""
        if self._initialized:
            return
        self._load_entries()
        self._load_metadata()
        self._initialized = True
        log.info("ASCII art catalog initialized with %d artworks", self.total_count())

    def is_initialized(self) -> bool:
        return self._initialized

    def refresh(self):
        """Drop everything, invalidate the metadata cache and reload."""
        self._entries.clear()
        self._metadata.clear()
        self._initialized = False
        if self.cache is not None:
            self.cache.invalidate(METADATA_CACHE_KEY, METADATA_NAMESPACE)
        self.initialize()

    def _load_entries(self):
        for category in self.storage.list_categories():
            try:
                names = self.storage.list_files(category)
            except OSError as e:
                log.warning("Failed to read category %s: %s", category, e)
                continue

            category_entries = self._entries.setdefault(category, {})
            for name in names:
                try:
                    content = self.storage.read_text(category, name)
                except (OSError, UnicodeDecodeError) as e:
                    log.warning("Failed to load art file %s/%s: %s", category, name, e)
                    continue
                category_entries[name] = ArtEntry.from_content(
                    name, category, content, self.storage.path_for(category, name))

    def _load_metadata(self):
        cached = self._read_cached_metadata()
        generated = False
        for art in self._iter_entries():
            metadata = cached.get(art.key)
            if metadata is None:
                metadata = self._generate_metadata(art)
                generated = True
            self._metadata[art.key] = metadata

        if (generated or len(cached) != len(self._metadata)) and self.cache is not None:
            self.cache.set(METADATA_CACHE_KEY,
                           [m.to_dict() for m in self._metadata.values()],
                           METADATA_NAMESPACE, self.metadata_ttl_ms)

    def _read_cached_metadata(self) -> Dict[Tuple[str, str], ArtMetadata]:
        if self.cache is None:
            return {}
        raw = self.cache.get(METADATA_CACHE_KEY, METADATA_NAMESPACE)
        if not isinstance(raw, list):
            return {}
        cached = {}
        for item in raw:
            try:
                metadata = ArtMetadata.from_dict(item)
            except (KeyError, TypeError, ValueError) as e:
                log.debug("Ignoring cached metadata item: %s", e)
                continue
            cached[metadata.key] = metadata
        return cached

    def _generate_metadata(self, art: ArtEntry) -> ArtMetadata:
        popularity = int(self.popularity.score(art.category, art.name))
        return ArtMetadata(
            name=art.name,
            category=art.category,
            tags=generate_tags(art.name, art.category),
            description=generate_description(art.name, art.category),
            difficulty=calculate_difficulty(art),
            popularity=max(0, min(99, popularity)),
        )

    # Queries

    def _require_initialized(self):
        if not self._initialized:
            raise NotInitializedError("ASCII art catalog not initialized")

    def _iter_entries(self, category: Optional[str] = None) -> Iterable[ArtEntry]:
        if category is not None:
            yield from self._entries.get(category, {}).values()
            return
        for category_entries in self._entries.values():
            yield from category_entries.values()

    def get_art(self, name: str, category: Optional[str] = None) -> Optional[ArtEntry]:
        """Exact lookup; without a category the first match in priority order wins."""
        self._require_initialized()
        if category:
            return self._entries.get(category, {}).get(name)
        for category_entries in self._entries.values():
            art = category_entries.get(name)
            if art is not None:
                return art
        return None

    def find_all(self, name: str) -> List[ArtEntry]:
        """Every entry called ``name``, in category priority order."""
        self._require_initialized()
        return [entries[name] for entries in self._entries.values() if name in entries]

    def get_metadata(self, art: ArtEntry) -> Optional[ArtMetadata]:
        self._require_initialized()
        return self._metadata.get(art.key)

    def search_art(self, query: str, category: Optional[str] = None,
                   limit: int = 10, fuzzy: bool = True) -> List[SearchResult]:
        """Score entries against ``query`` and return the best ``limit`` matches."""
        self._require_initialized()
        query_lower = query.lower()
        results = []

        for key, metadata in self._metadata.items():
            cat, art_name = key
            if category and cat != category:
                continue

            name_lower = art_name.lower()
            if name_lower == query_lower:
                score = SCORE_EXACT
            elif query_lower in name_lower:
                score = SCORE_PARTIAL
            elif any(query_lower in tag.lower() for tag in metadata.tags):
                score = SCORE_TAG
            elif fuzzy and fuzzy_match(query_lower, name_lower):
                score = SCORE_FUZZY
            else:
                continue

            results.append(SearchResult(metadata=metadata,
                                        art=self._entries[cat][art_name],
                                        score=score))

        results.sort(key=lambda r: (-r.score, r.name))
        return results[:max(0, limit)]

    def get_categories(self) -> List[str]:
        """Categories holding at least one entry, in priority order."""
        self._require_initialized()
        return [category for category, entries in self._entries.items() if entries]

    def get_category(self, category: str) -> List[ArtEntry]:
        self._require_initialized()
        return list(self._entries.get(category, {}).values())

    def get_random_art(self, category: Optional[str] = None) -> Optional[ArtEntry]:
        self._require_initialized()
        pool = list(self._iter_entries(category))
        if not pool:
            return None
        return pool[self._rng.randrange(len(pool))]

    def get_popular_art(self, limit: int = 5, category: Optional[str] = None) -> List[ArtRecord]:
        """Entries by popularity, highest first; ties keep catalog order."""
        self._require_initialized()
        records = [ArtRecord(metadata=self._metadata[art.key], art=art)
                   for art in self._iter_entries(category)]
        records.sort(key=lambda r: r.popularity, reverse=True)
        return records[:max(0, limit)]

    def total_count(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def get_statistics(self) -> Dict[str, Any]:
        """Counts, average size and the largest and smallest artworks."""
        self._require_initialized()
        stats = {
            "total_art": self.total_count(),
            "categories": len(self.get_categories()),
            "category_breakdown": {},
            "average_size": 0,
            "largest_art": None,
            "smallest_art": None,
        }

        total_size = 0
        largest = None
        smallest = None
        for category, entries in self._entries.items():
            if not entries:
                continue
            stats["category_breakdown"][category] = len(entries)
            for art in entries.values():
                total_size += art.byte_size
                if largest is None or art.byte_size > largest.byte_size:
                    largest = art
                if smallest is None or art.byte_size < smallest.byte_size:
                    smallest = art

        if stats["total_art"]:
            stats["average_size"] = int(total_size / stats["total_art"] + 0.5)
        if largest is not None:
            stats["largest_art"] = {"name": largest.name, "category": largest.category,
                                    "size": largest.byte_size}
        if smallest is not None:
            stats["smallest_art"] = {"name": smallest.name, "category": smallest.category,
                                     "size": smallest.byte_size}
        return stats
