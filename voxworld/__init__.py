"""
VoxWorld - Block Based Voxel Worlds
===================================

Build voxel worlds out of reusable cubes:
- Cubes of colored voxels with per-color occupancy masks
- Worlds that tile cubes on a grid and expand into one dense cube
- JSON world files and OBJ mesh export

Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"

from voxworld.core import Voxel, Cube, World

__all__ = ['Voxel', 'Cube', 'World', '__version__']
