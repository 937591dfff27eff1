"""In-memory cache of loaded repair files.

Decrypting a large file in pure Python takes a while, so loaded files are
kept keyed on their resolved path and invalidated when the file's size or
modification time changes.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from pathlib import Path
from typing import Any

from .constants import CACHE_MAX_FILES
from .fz import RepairFile
from .logging_config import create_logger

logger = create_logger(__name__)

_Stamp = tuple[int, int]


def _stamp(path: Path) -> _Stamp:
    st = path.stat()
    return st.st_mtime_ns, st.st_size


class RepairFileCache:
    """LRU cache of RepairFile objects, validated against file stat."""

    def __init__(self, max_size: int = CACHE_MAX_FILES) -> None:
        self.max_size = max_size
        self._entries: OrderedDict[Path, tuple[_Stamp, RepairFile]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, path: Path) -> RepairFile | None:
        """Return the cached file if it is still current on disk."""
        key = path.resolve()
        try:
            current = _stamp(key)
        except OSError:
            current = None
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] == current:
                self._entries.move_to_end(key)
                self._hits += 1
                logger.debug("Cache hit: %s", key)
                return entry[1]
            if entry is not None:
                logger.debug("Cache entry stale: %s", key)
                del self._entries[key]
            self._misses += 1
            return None

    def put(self, path: Path, repair_file: RepairFile) -> None:
        key = path.resolve()
        with self._lock:
            self._entries[key] = (_stamp(key), repair_file)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted from cache: %s", evicted)

    def load(self, path: str | Path) -> RepairFile:
        """Return the cached file or load, cache and return it."""
        path = Path(path)
        cached = self.get(path)
        if cached is not None:
            return cached
        repair_file = RepairFile.load(path)
        self.put(path, repair_file)
        return repair_file

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.info("Repair file cache cleared")

    @property
    def stats(self) -> dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "hit_rate": self._hits / total if total > 0 else 0.0,
                "size": len(self._entries),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __len__(self) -> int:
        return len(self._entries)


_repair_file_cache = RepairFileCache()


def get_repair_file_cache() -> RepairFileCache:
    """Get the shared repair file cache."""
    return _repair_file_cache
