"""
VoxWorld Core Module
====================

The world model: voxels, cubes built from voxels, and worlds tiled from cubes.
"""

from voxworld.core.voxel import Voxel
from voxworld.core.cube import Cube
from voxworld.core.world import World
from voxworld.core.errors import (VoxWorldError, IntegrityError, EmptyPaletteError,
                                  IncompatibleCubeError, ParseError)

__all__ = [
    'Voxel',
    'Cube',
    'World',
    'VoxWorldError',
    'IntegrityError',
    'EmptyPaletteError',
    'IncompatibleCubeError',
    'ParseError',
]
