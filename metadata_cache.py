#!/usr/bin/env python3
"""
Metadata cache for mdsaad
File-based JSON key/value store with per-entry TTL, grouped by namespace
"""

import os
import re
import json
import time
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, Union

from logger import get_logger

DEFAULT_TTL_MS = 3600000  # 1 hour

log = get_logger("cache")

_INVALID_KEY_CHARS = re.compile(r'[<>:"|?*/\\]')
_WHITESPACE = re.compile(r'\s+')
_TRAILING_DOTS = re.compile(r'\.+$')


def _now_ms() -> int:
    return int(time.time() * 1000)


def sanitize_key(key: str) -> str:
    """Make a cache key safe to use as a file name."""
    key = _INVALID_KEY_CHARS.sub('_', key)
    key = _WHITESPACE.sub('_', key)
    key = _TRAILING_DOTS.sub('', key)
    return key[:200]


class MetadataCache:
    """JSON cache stored as ``<cache_dir>/<namespace>/<key>.json``."""

    def __init__(self, cache_dir: Union[str, Path], clock=None):
        self.cache_dir = Path(cache_dir)
        self._clock = clock or _now_ms

    def _entry_path(self, key: str, namespace: str) -> Path:
        return self.cache_dir / sanitize_key(namespace) / f"{sanitize_key(key)}.json"

    def set(self, key: str, value: Any, namespace: str = "general",
            ttl_ms: int = DEFAULT_TTL_MS) -> bool:
        """Store ``value`` under ``key`` for ``ttl_ms`` milliseconds."""
        path = self._entry_path(key, namespace)
        temp_file = path.with_suffix('.tmp')
        now = self._clock()
        entry = {
            "key": key,
            "namespace": namespace,
            "data": value,
            "timestamp": now,
            "ttl": ttl_ms,
            "expires_at": now + ttl_ms,
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with temp_file.open('w', encoding='utf-8') as f:
                json.dump(entry, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            temp_file.replace(path)
            log.debug("Cache entry stored: %s:%s (TTL: %sms)", namespace, key, ttl_ms)
            return True
        except (OSError, TypeError, ValueError) as e:
            log.error("Failed to store cache entry %s:%s: %s", namespace, key, e)
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def get(self, key: str, namespace: str = "general") -> Optional[Any]:
        """Return the cached value, or None on a miss, expiry or corrupt entry."""
        path = self._entry_path(key, namespace)
        if not path.exists():
            log.debug("Cache miss: %s:%s", namespace, key)
            return None

        try:
            entry = json.loads(path.read_text(encoding='utf-8'))
            expires_at = int(entry["expires_at"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            log.warning("Discarding unreadable cache entry %s:%s: %s", namespace, key, e)
            self.invalidate(key, namespace)
            return None

        if self._clock() > expires_at:
            log.debug("Cache expired: %s:%s", namespace, key)
            self.invalidate(key, namespace)
            return None

        log.debug("Cache hit: %s:%s", namespace, key)
        return entry.get("data")

    def invalidate(self, key: str, namespace: str = "general") -> bool:
        """Remove one entry. Returns True if something was removed."""
        path = self._entry_path(key, namespace)
        try:
            if path.exists():
                path.unlink()
                log.debug("Cache entry invalidated: %s:%s", namespace, key)
                return True
        except OSError as e:
            log.error("Failed to invalidate cache entry %s:%s: %s", namespace, key, e)
        return False

    def clear_namespace(self, namespace: str) -> int:
        """Remove every entry in a namespace and return how many were removed."""
        ns_dir = self.cache_dir / sanitize_key(namespace)
        if not ns_dir.is_dir():
            return 0
        removed = len(list(ns_dir.glob("*.json")))
        shutil.rmtree(ns_dir, ignore_errors=True)
        return removed

    def stats(self) -> Dict[str, Any]:
        """Summarize entries and on-disk size per namespace."""
        namespaces = {}
        total_entries = 0
        total_size = 0
        if self.cache_dir.is_dir():
            for ns_dir in sorted(p for p in self.cache_dir.iterdir() if p.is_dir()):
                files = list(ns_dir.glob("*.json"))
                size = sum(f.stat().st_size for f in files)
                namespaces[ns_dir.name] = {"entries": len(files), "size": size}
                total_entries += len(files)
                total_size += size
        return {
            "cache_dir": str(self.cache_dir),
            "total_entries": total_entries,
            "total_size": total_size,
            "namespaces": namespaces,
        }


class MemoryCache:
    """In-process cache with the same interface as MetadataCache."""

    def __init__(self, clock=None):
        self._entries: Dict[tuple, tuple] = {}
        self._clock = clock or _now_ms

    def set(self, key: str, value: Any, namespace: str = "general",
            ttl_ms: int = DEFAULT_TTL_MS) -> bool:
        self._entries[(namespace, key)] = (json.loads(json.dumps(value)), self._clock() + ttl_ms)
        return True

    def get(self, key: str, namespace: str = "general") -> Optional[Any]:
        item = self._entries.get((namespace, key))
        if item is None:
            return None
        value, expires_at = item
        if self._clock() > expires_at:
            del self._entries[(namespace, key)]
            return None
        return value

    def invalidate(self, key: str, namespace: str = "general") -> bool:
        return self._entries.pop((namespace, key), None) is not None

    def clear_namespace(self, namespace: str) -> int:
        keys = [k for k in self._entries if k[0] == namespace]
        for k in keys:
            del self._entries[k]
        return len(keys)
