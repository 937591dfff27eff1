"""Writers that turn interpreted repair-file data into other formats."""

from .kicad_mod import build_footprint, default_library_dir, export_footprints, footprint_to_string

__all__ = ["build_footprint", "default_library_dir", "export_footprints", "footprint_to_string"]
