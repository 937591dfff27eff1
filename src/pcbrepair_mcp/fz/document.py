"""Document wrapper for ASUS FZ and ASRock CAE repair files.

Runs the whole pipeline for one file and keeps every intermediate result.
"""

from __future__ import annotations

from pathlib import Path

from ..exceptions import FileLoadingError
from ..schema.content import ParsedContent
from ..schema.description import Description
from ..schema.footprint import BoardSummary, FootprintInfo
from ..schema.interpret import interpret, summarize
from .container import DecodedContainer, decode
from .content import parse_content
from .description import parse_description


class RepairFile:
    """A decoded and parsed repair file.

    Usage::

        rf = RepairFile.load("board.fz")
        rf.description.board_model      # "X570-A"
        rf.content.unit                 # Unit.MILS
        rf.footprints["U1"].pins[0]     # centred InterpretedPin
    """

    __slots__ = ("path", "decoded", "content", "description", "_footprints")

    def __init__(
        self,
        decoded: DecodedContainer,
        content: ParsedContent,
        description: Description,
        path: Path | None = None,
    ) -> None:
        self.path = path
        self.decoded = decoded
        self.content = content
        self.description = description
        self._footprints: dict[str, FootprintInfo] | None = None

    @classmethod
    def from_decoded(cls, decoded: DecodedContainer, path: Path | None = None) -> RepairFile:
        """Parse both payloads of an already decoded container."""
        return cls(
            decoded=decoded,
            content=parse_content(decoded.content),
            description=parse_description(decoded.description),
            path=path,
        )

    @classmethod
    def from_bytes(cls, raw: bytes, path: Path | None = None) -> RepairFile:
        """Decode and parse a raw container.

        Raises:
            DecodeError: If no key trial yields a valid container.
            ParseError: If either payload cannot be parsed.
        """
        return cls.from_decoded(decode(raw), path=path)

    @classmethod
    def load(cls, path: str | Path) -> RepairFile:
        """Read, decode and parse a repair file from disk.

        Raises:
            FileLoadingError: If the file does not exist or cannot be read.
            DecodeError: If no key trial yields a valid container.
            ParseError: If either payload cannot be parsed.
        """
        path = Path(path)
        if not path.is_file():
            raise FileLoadingError(f"File not found: {path}", file_path=str(path))
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise FileLoadingError(f"Error reading {path}: {e}", file_path=str(path)) from e
        return cls.from_bytes(raw, path=path)

    @property
    def footprints(self) -> dict[str, FootprintInfo]:
        """Centred footprints keyed by refdes (computed on first access)."""
        if self._footprints is None:
            self._footprints = interpret(self.content)
        return self._footprints

    @property
    def stem(self) -> str:
        """File name without extension, or ``"board"`` for in-memory files."""
        return self.path.stem if self.path is not None else "board"

    def summary(self) -> BoardSummary:
        return summarize(
            self.content,
            self.description,
            self.footprints,
            key_name=self.decoded.key_name,
            file_path=str(self.path) if self.path is not None else None,
        )

    def __repr__(self) -> str:
        name = self.path.name if self.path is not None else "<memory>"
        return f"RepairFile({name!r}, board={self.description.board_model!r})"
