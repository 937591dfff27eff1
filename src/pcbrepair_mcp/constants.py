"""Global constants for pcbrepair."""

from decimal import Decimal

MM_PER_MIL = Decimal("0.0254")
"""Exact millimetres per mil used for unit conversion."""

REPAIR_FILE_EXTENSIONS = frozenset({".fz", ".cae"})
"""Input file extensions accepted by the tools (ASUS FZ, ASRock CAE)."""

KICAD_GENERATOR = "pcbrepair_fpextract"
"""Generator name written into exported .kicad_mod files."""

KICAD_COORD_QUANTUM = Decimal("0.000001")
"""KiCad stores board coordinates with nanometre resolution."""

CACHE_MAX_FILES = 8
"""Number of decoded repair files kept in memory."""

TRUSTED_ROOTS_ENV = "PCBREPAIR_TRUSTED_ROOTS"
"""Environment variable listing directories file paths must live under."""
