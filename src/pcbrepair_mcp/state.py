"""Global repair-file state for the MCP server.

Holds the currently opened repair file and its summary.
Thread-safe: all reads and writes go through a module-level lock.
"""

from __future__ import annotations

import threading

from .cache import get_repair_file_cache
from .exceptions import NoFileLoadedError
from .fz import RepairFile
from .logging_config import create_logger
from .schema import BoardSummary

logger = create_logger(__name__)

_lock = threading.Lock()
_current_file: RepairFile | None = None
_current_summary: BoardSummary | None = None


def load_file(path: str) -> BoardSummary:
    """Load a repair file, make it current and return its summary."""
    global _current_file, _current_summary
    # Decode outside the lock
    repair_file = get_repair_file_cache().load(path)
    summary = repair_file.summary()
    with _lock:
        _current_file = repair_file
        _current_summary = summary
    logger.info(
        "Loaded %s (board %s, key %s, %d footprints)",
        path,
        summary.board_model,
        summary.key,
        summary.footprint_count,
    )
    return summary


def set_current(repair_file: RepairFile) -> BoardSummary:
    """Make an already decoded repair file current."""
    global _current_file, _current_summary
    summary = repair_file.summary()
    with _lock:
        _current_file = repair_file
        _current_summary = summary
    return summary


def get_file() -> RepairFile:
    """Get the currently loaded repair file, or raise."""
    with _lock:
        if _current_file is None:
            raise NoFileLoadedError()
        return _current_file


def get_summary() -> BoardSummary:
    """Get the current board summary, or raise."""
    with _lock:
        if _current_summary is None:
            raise NoFileLoadedError()
        return _current_summary


def is_loaded() -> bool:
    with _lock:
        return _current_file is not None


def clear() -> None:
    """Forget the current file."""
    global _current_file, _current_summary
    with _lock:
        _current_file = None
        _current_summary = None
