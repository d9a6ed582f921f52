"""
Cube - Reusable Voxel Block
===========================

A cube is a dense rectangular volume of voxels together with some
identifying information. Worlds are tiled out of cubes.
"""

import math
import numpy as np
from typing import Any, Callable, List, Optional, Tuple
from dataclasses import dataclass, field

from voxworld.core.errors import IntegrityError
from voxworld.core.schema import (expect_list, expect_mapping, join_path,
                                  optional_str, required)
from voxworld.core.voxel import Voxel

VoxelGrid = List[List[List[Voxel]]]


@dataclass
class Cube:
    """
    Block of voxel data.

    Attributes:
        name: Name of the cube
        description: A short use case for this cube
        vox: Voxel data indexed ``[x][y][z]``; invisible voxels mean
             no voxel present
        author: Who made the cube
    """

    name: str = ''
    description: str = ''
    vox: VoxelGrid = field(default_factory=lambda: [[[Voxel()]]])
    author: str = ''

    @property
    def width(self) -> int:
        if not self.vox:
            raise IntegrityError("The cube has no voxel data")
        return len(self.vox)

    @property
    def height(self) -> int:
        if not self.vox or not self.vox[0]:
            raise IntegrityError("The cube has no voxel data")
        return len(self.vox[0])

    @property
    def depth(self) -> int:
        if not self.vox or not self.vox[0] or not self.vox[0][0]:
            raise IntegrityError("The cube has no voxel data")
        return len(self.vox[0][0])

    def dimensions(self) -> Tuple[int, int, int]:
        """Return ``(width, height, depth)``."""
        return (self.width, self.height, self.depth)

    def is_rectangular(self) -> bool:
        """Check that every column and row of the voxel data has the same length."""
        try:
            w, h, d = self.dimensions()
        except IntegrityError:
            return False
        return all(len(column) == h and all(len(row) == d for row in column)
                   for column in self.vox)

    def center(self) -> Tuple[float, float, float]:
        """Center of the cube."""
        return (self.width / 2, self.height / 2, self.depth / 2)

    def radius(self) -> float:
        """Distance from the center of the cube to its corners."""
        return math.hypot(*self.center())

    def voxel_types(self) -> List[Voxel]:
        """
        Get all different visible voxels used in this cube.

        Returns:
            Distinct voxels in the order they are first met scanning x, y, z
        """
        seen = {}
        for column in self.vox:
            for row in column:
                for voxel in row:
                    if voxel.visible and voxel not in seen:
                        seen[voxel] = None
        return list(seen)

    def to_array(self) -> np.ndarray:
        """
        Get the voxel channels as a numpy array.

        Returns:
            Float array of shape ``(width, height, depth, 4)``
        """
        w, h, d = self.dimensions()
        array = np.zeros((w, h, d, 4), dtype=np.float64)
        for x, column in enumerate(self.vox):
            for y, row in enumerate(column):
                for z, voxel in enumerate(row):
                    array[x, y, z] = voxel.to_tuple()
        return array

    def voxel_masks(self) -> List[Tuple[np.ndarray, Voxel]]:
        """
        Break the voxel data down into occupancy masks, one per voxel type.

        Each mask has the shape of the cube and is True where that voxel
        type is placed. This is the input a mesher needs to build one
        geometry per color.

        Returns:
            List of ``(mask, voxel)`` pairs in ``voxel_types()`` order
        """
        array = self.to_array()
        return [(np.all(array == np.asarray(voxel.to_tuple()), axis=-1), voxel)
                for voxel in self.voxel_types()]

    def get_voxel(self, x: int, y: int, z: int) -> Voxel:
        self._check_position(x, y, z)
        return self.vox[x][y][z]

    def set_voxel(self, x: int, y: int, z: int, voxel: Voxel):
        """Replace the voxel at ``(x, y, z)``."""
        self._check_position(x, y, z)
        self.vox[x][y][z] = voxel

    def _check_position(self, x: int, y: int, z: int):
        w, h, d = self.dimensions()
        if not (0 <= x < w and 0 <= y < h and 0 <= z < d):
            raise IndexError(f"voxel ({x}, {y}, {z}) is outside a {w}x{h}x{d} cube")

    def map(self, f: Callable[[Voxel, int, int, int], Voxel]) -> 'Cube':
        """
        Map every voxel to some other voxel.

        Example:
            # a diagonal staircase
            Cube.empty(16, 16, 16).map(
                lambda _, x, y, z: Voxel(255, 255, 255, 1) if y == x - z else Voxel())

        Args:
            f: Called as ``f(voxel, x, y, z)`` for every position

        Returns:
            New Cube with the same name, description and author
        """
        return Cube(
            self.name,
            self.description,
            [[[f(voxel, x, y, z) for z, voxel in enumerate(row)]
              for y, row in enumerate(column)]
             for x, column in enumerate(self.vox)],
            self.author,
        )

    @classmethod
    def empty(cls, x: int, y: int, z: int) -> 'Cube':
        """
        Create a cube of invisible voxels.

        Args:
            x: Width
            y: Height
            z: Depth
        """
        return cls('', '', [[[Voxel() for _ in range(z)] for _ in range(y)] for _ in range(x)], '')

    def to_serialized(self) -> dict:
        return {
            'name': self.name,
            'description': self.description,
            'author': self.author,
            'vox': [[[voxel.to_serialized() for voxel in row] for row in column]
                    for column in self.vox],
        }

    @classmethod
    def from_serialized(cls, data: Any, path: Optional[str] = None) -> 'Cube':
        """
        Create a cube from its serialized form.

        Args:
            data: Mapping with a ``vox`` 3D list and optional
                  ``name``, ``description`` and ``author``
            path: Location of ``data`` in the document, used in error messages

        Raises:
            ParseError: If a field is missing or has the wrong type
        """
        data = expect_mapping(data, path)
        vox_path = join_path(path, 'vox')
        vox = []
        for x, column in enumerate(expect_list(required(data, 'vox', path), vox_path)):
            column_path = join_path(vox_path, x)
            vox.append([])
            for y, row in enumerate(expect_list(column, column_path)):
                row_path = join_path(column_path, y)
                vox[x].append([Voxel.from_serialized(v, join_path(row_path, z))
                               for z, v in enumerate(expect_list(row, row_path))])

        return cls(
            optional_str(data, 'name', path),
            optional_str(data, 'description', path),
            vox,
            optional_str(data, 'author', path),
        )
