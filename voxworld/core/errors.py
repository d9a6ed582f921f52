"""
Errors
======

Exceptions raised by the world model and its readers.
"""

from typing import Optional


class VoxWorldError(ValueError):
    """Base class for every error raised by voxworld."""


class IntegrityError(VoxWorldError):
    """The space or the palette cubes are not dimensionally consistent."""


class EmptyPaletteError(VoxWorldError):
    """Cube dimensions were requested before any cube was defined."""

    def __init__(self, message: str = "No block defined yet, therefore no cube dimensions present"):
        super().__init__(message)


class IncompatibleCubeError(VoxWorldError):
    """A cube does not match the dimensions of the cubes already in a world."""


class ParseError(VoxWorldError):
    """
    Serialized data does not describe a valid voxel, cube or world.

    Attributes:
        path: Location of the offending value, e.g. ``cube[0].vox[1][2][0]``
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
