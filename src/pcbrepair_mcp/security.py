"""Path validation for files opened and written by the tools.

Rejects traversal and null bytes, restricts input extensions to repair
files and, when trusted roots are configured, keeps every path under them.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from .constants import REPAIR_FILE_EXTENSIONS, TRUSTED_ROOTS_ENV
from .exceptions import SecurityError

OUTPUT_EXTENSIONS = frozenset({".kicad_mod", ".json", ".csv"})


class PathValidator:
    """Validates file paths against trusted roots and extension whitelists.

    Usage::

        validator = PathValidator(trusted_roots=[Path("/data/boards")])
        validator.validate_input("/data/boards/x570.fz")  # OK
        validator.validate_input("/etc/passwd")  # raises SecurityError
        validator.validate_input("../../etc/passwd")  # raises SecurityError
    """

    def __init__(self, trusted_roots: list[Path] | None = None) -> None:
        self.trusted_roots = [Path(r).resolve() for r in (trusted_roots or [])]

    def validate_input(self, path: str | Path) -> Path:
        """Validate a repair file path (must exist, ``.fz`` or ``.cae``)."""
        resolved = self._resolve(path)
        self._check_trusted_root(resolved)
        if resolved.suffix.lower() not in REPAIR_FILE_EXTENSIONS:
            raise SecurityError(
                f"Extension not allowed: {resolved.suffix!r} (file: {resolved.name})"
            )
        if not resolved.is_file():
            raise SecurityError(f"File does not exist: {resolved}")
        return resolved

    def validate_output(self, path: str | Path) -> Path:
        """Validate an output file path (extension must be a known export type)."""
        resolved = self._resolve(path)
        self._check_trusted_root(resolved)
        if resolved.suffix.lower() not in OUTPUT_EXTENSIONS:
            raise SecurityError(
                f"Extension not allowed: {resolved.suffix!r} (file: {resolved.name})"
            )
        return resolved

    def validate_directory(self, path: str | Path) -> Path:
        """Validate an output directory path (it may not exist yet)."""
        resolved = self._resolve(path)
        self._check_trusted_root(resolved)
        if resolved.exists() and not resolved.is_dir():
            raise SecurityError(f"Not a directory: {resolved}")
        return resolved

    @staticmethod
    def _resolve(path: str | Path) -> Path:
        path_str = str(path)
        if "\x00" in path_str:
            raise SecurityError("Path contains null bytes")
        if ".." in Path(path_str).parts:
            raise SecurityError(f"Path contains traversal: {path_str}")
        try:
            return Path(path_str).expanduser().resolve(strict=False)
        except (OSError, ValueError) as e:
            raise SecurityError(f"Invalid path: {path_str} ({e})") from e

    def _check_trusted_root(self, resolved: Path) -> None:
        if not self.trusted_roots:
            return
        for root in self.trusted_roots:
            if resolved == root or root in resolved.parents:
                return
        roots = [str(r) for r in self.trusted_roots]
        raise SecurityError(f"Path {resolved} is not under any trusted root: {roots}")


# ── Singleton helpers ───────────────────────────────────────────────

_validator: PathValidator | None = None
_validator_lock = threading.Lock()


def _roots_from_env() -> list[Path]:
    raw = os.environ.get(TRUSTED_ROOTS_ENV, "")
    return [Path(p) for p in raw.split(os.pathsep) if p.strip()]


def get_validator() -> PathValidator:
    """Get the shared PathValidator (roots from PCBREPAIR_TRUSTED_ROOTS)."""
    global _validator
    if _validator is None:
        with _validator_lock:
            if _validator is None:
                _validator = PathValidator(trusted_roots=_roots_from_env())
    return _validator


def reset_validator() -> None:
    """Drop the shared validator so the environment is re-read on next use."""
    global _validator
    with _validator_lock:
        _validator = None
