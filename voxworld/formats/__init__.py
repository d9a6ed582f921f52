"""
VoxWorld Formats Module
=======================

File format readers and writers for worlds.
"""

from pathlib import Path
from typing import Optional

from voxworld.core.world import World
from voxworld.formats.json_format import WorldJsonFormat, CubeJsonFormat
from voxworld.formats.mesh import VoxelMesher, ObjExporter


class FormatManager:
    """
    Centralized file format manager.

    Handles importing and exporting worlds in the supported formats.
    """

    # Supported import formats
    IMPORT_FORMATS = {
        '.json': ('VoxWorld JSON', WorldJsonFormat),
    }

    # Supported export formats
    EXPORT_FORMATS = {
        '.json': ('VoxWorld JSON', WorldJsonFormat),
        '.obj': ('Wavefront OBJ', ObjExporter),
    }

    def import_file(self, filepath: str) -> World:
        """
        Import a world from a file.

        Args:
            filepath: Path to the file to import

        Returns:
            The loaded World

        Raises:
            ValueError: If the file format is not supported
            IOError: If the file cannot be read
        """
        ext = Path(filepath).suffix.lower()

        if ext not in self.IMPORT_FORMATS:
            raise ValueError(f"Unsupported import format: {ext}")

        _, handler_class = self.IMPORT_FORMATS[ext]
        return handler_class.load(filepath)

    def export_file(self, filepath: str, world: World, scale: float = 1.0,
                    optimize: bool = True, indent: Optional[int] = None):
        """
        Export a world to a file.

        Mesh formats export the world built into a single cube.

        Args:
            filepath: Path for the output file
            world: World to export
            scale: Mesh scale factor (mesh formats only)
            optimize: Use greedy meshing (mesh formats only)
            indent: JSON indentation (JSON only)

        Raises:
            ValueError: If the file format is not supported
            IntegrityError: If a mesh is requested for a world that is not intact
        """
        ext = Path(filepath).suffix.lower()

        if ext not in self.EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {ext}")

        _, handler_class = self.EXPORT_FORMATS[ext]

        if handler_class is ObjExporter:
            handler_class.export(filepath, world.to_cube(), scale=scale, optimize=optimize)
        else:
            handler_class.save(filepath, world, indent=indent)

    def can_import(self, filepath: str) -> bool:
        """Check if a file can be imported."""
        return Path(filepath).suffix.lower() in self.IMPORT_FORMATS

    def can_export(self, filepath: str) -> bool:
        """Check if a file can be exported to the given format."""
        return Path(filepath).suffix.lower() in self.EXPORT_FORMATS


__all__ = [
    'FormatManager',
    'WorldJsonFormat',
    'CubeJsonFormat',
    'VoxelMesher',
    'ObjExporter',
]
