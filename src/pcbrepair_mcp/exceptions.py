"""Exception hierarchy for decoding, parsing and serving repair files.

Every error carries a stable ``error_code`` plus any structured context
(offsets, line numbers, paths) so tool handlers can return it verbatim.
"""

from __future__ import annotations

from typing import Any


class PcbRepairError(Exception):
    """Base exception for all pcbrepair errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {
                k: v
                for k, v in self.__dict__.items()
                if k not in ["message", "error_code"] and _is_plain(v)
            }
        )
        return result


def _is_plain(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


class FileLoadingError(PcbRepairError):
    """Raised when a repair file cannot be read from disk."""

    error_code = "FILE_LOADING_ERROR"

    def __init__(self, message: str, file_path: str | None = None, **kwargs: Any):
        super().__init__(message, file_path=file_path, **kwargs)


# ── Container decoding ──────────────────────────────────────────────


class DecodeError(PcbRepairError):
    """Raised when a container cannot be decrypted, framed or decompressed."""

    error_code = "DECODE_ERROR"


class InvalidMagicError(DecodeError):
    """The candidate plaintext does not carry a zlib header at offset 4."""

    error_code = "INVALID_MAGIC"

    def __init__(self, message: str, found: int | None = None, **kwargs: Any):
        super().__init__(message, found=found, **kwargs)


class SizeMismatchError(DecodeError):
    """A stream decompressed to a different length than its header declares."""

    error_code = "SIZE_MISMATCH"

    def __init__(self, message: str, stream: str, expected: int, actual: int, **kwargs: Any):
        super().__init__(message, stream=stream, expected=expected, actual=actual, **kwargs)


class FramingOutOfBoundsError(DecodeError):
    """A length or pointer slot resolves outside the buffer."""

    error_code = "FRAMING_OUT_OF_BOUNDS"

    def __init__(self, message: str, slot: str, offset: int, length: int, **kwargs: Any):
        super().__init__(message, slot=slot, offset=offset, length=length, **kwargs)


class CorruptStreamError(DecodeError):
    """A zlib stream is malformed or ends before its end-of-stream marker."""

    error_code = "CORRUPT_STREAM"

    def __init__(self, message: str, stream: str, **kwargs: Any):
        super().__init__(message, stream=stream, **kwargs)


class ContainerDecodeError(DecodeError):
    """Raised when no key trial produced a valid container."""

    error_code = "CONTAINER_DECODE_ERROR"

    def __init__(self, message: str, attempts: list[tuple[str, DecodeError]], **kwargs: Any):
        super().__init__(message, **kwargs)
        self.attempts = attempts

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["attempts"] = [
            {"key": key, "error_code": err.error_code, "message": err.message}
            for key, err in self.attempts
        ]
        return result


# ── Text parsing ────────────────────────────────────────────────────


class ParseError(PcbRepairError):
    """Raised when a decoded document cannot be parsed."""

    error_code = "PARSE_ERROR"

    def __init__(self, message: str, line: int | None = None, **kwargs: Any):
        super().__init__(message, line=line, **kwargs)


class MalformedRecordError(ParseError):
    """A row has the wrong shape for the current section."""

    error_code = "MALFORMED_RECORD"


class BadIntegerError(ParseError):
    """An integer field is not a valid unsigned base-10 number."""

    error_code = "BAD_INTEGER"


class BadDecimalError(ParseError):
    """A coordinate or radius field is not a valid decimal number."""

    error_code = "BAD_DECIMAL"


class MissingHeaderError(ParseError):
    """The description header line has fewer than five fields."""

    error_code = "MISSING_HEADER"


# ── Server surface ──────────────────────────────────────────────────


class ValidationError(PcbRepairError):
    """Raised when tool input validation fails."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, **kwargs: Any):
        super().__init__(message, field=field, **kwargs)


class SecurityError(PcbRepairError):
    """Raised when a path fails security checks."""

    error_code = "SECURITY_ERROR"


class NoFileLoadedError(PcbRepairError):
    """Raised when a tool needs a repair file but none is open."""

    error_code = "NO_FILE_LOADED"

    def __init__(self, message: str = "No repair file loaded. Use open_repair_file first."):
        super().__init__(message)


class ToolExecutionError(PcbRepairError):
    """Raised when a tool execution fails."""

    error_code = "TOOL_EXECUTION_ERROR"

    def __init__(self, message: str, tool_name: str | None = None, **kwargs: Any):
        super().__init__(message, tool_name=tool_name, **kwargs)


__all__ = [
    "PcbRepairError",
    "FileLoadingError",
    "DecodeError",
    "InvalidMagicError",
    "SizeMismatchError",
    "FramingOutOfBoundsError",
    "CorruptStreamError",
    "ContainerDecodeError",
    "ParseError",
    "MalformedRecordError",
    "BadIntegerError",
    "BadDecimalError",
    "MissingHeaderError",
    "ValidationError",
    "SecurityError",
    "NoFileLoadedError",
    "ToolExecutionError",
]
