"""
World - Block Map
=================

A world is a 3D grid of block ids together with the palette of cubes
those ids point to. Id 0 is empty space, id ``n`` refers to ``cube[n - 1]``.
"""

from typing import Any, Callable, List, Optional, Tuple
from dataclasses import dataclass, field

from voxworld.core.cube import Cube
from voxworld.core.errors import (EmptyPaletteError, IncompatibleCubeError,
                                  IntegrityError, ParseError)
from voxworld.core.schema import (expect_int, expect_list, expect_mapping,
                                  join_path, optional_str, required)
from voxworld.core.voxel import Voxel

Space = List[List[List[int]]]

UNEQUAL_SPACE = "The space has unequal dimensionality"
UNEQUAL_CUBES = "The cubes have unequal sizes"


@dataclass
class World:
    """
    A map: a space of cube ids plus the cubes used in it.

    Attributes:
        name: Name of the world
        description: Description of this world
        cube: Cubes used in this world (ids are 1-based)
        space: Cube id at each block position, indexed ``[x][y][z]``
        author: Who made the world
    """

    name: str = ''
    description: str = ''
    cube: List[Cube] = field(default_factory=list)
    space: Space = field(default_factory=lambda: [[[0]]])
    author: str = ''

    # Dimensions ---------------------------------------------------------

    @property
    def width(self) -> int:
        return len(self.space)

    @property
    def height(self) -> int:
        return len(self.space[0]) if self.space else 0

    @property
    def depth(self) -> int:
        return len(self.space[0][0]) if self.space and self.space[0] else 0

    @property
    def cube_width(self) -> int:
        """Width of the cubes used in this world."""
        return self._first_cube().width

    @property
    def cube_height(self) -> int:
        """Height of the cubes used in this world."""
        return self._first_cube().height

    @property
    def cube_depth(self) -> int:
        """Depth of the cubes used in this world."""
        return self._first_cube().depth

    def cube_dimensions(self) -> Tuple[int, int, int]:
        return self._first_cube().dimensions()

    def _first_cube(self) -> Cube:
        if not self.cube:
            raise EmptyPaletteError()
        return self.cube[0]

    # Integrity ----------------------------------------------------------

    def integrity_error(self) -> Optional[str]:
        """
        Find out why this world cannot be built into a cube.

        The space must be perfectly rectangular and every cube in the
        palette must have the same dimensions.

        Returns:
            None if the world is intact, otherwise the reason it is not
        """
        w, h, d = self.width, self.height, self.depth
        count = sum(len(row) for column in self.space for row in column)
        if w * h * d != count:
            return UNEQUAL_SPACE
        if any(len(column) != h or any(len(row) != d for row in column)
               for column in self.space):
            return UNEQUAL_SPACE

        if self.cube:
            if not all(c.is_rectangular() for c in self.cube):
                return UNEQUAL_CUBES
            dims = self.cube_dimensions()
            if any(c.dimensions() != dims for c in self.cube):
                return UNEQUAL_CUBES
        return None

    @property
    def is_intact(self) -> bool:
        return self.integrity_error() is None

    def check_integrity(self) -> bool:
        """
        Check if this world can be used to generate a voxel map.

        Returns:
            True

        Raises:
            IntegrityError: With the reason the world is not intact
        """
        reason = self.integrity_error()
        if reason is not None:
            raise IntegrityError(reason)
        return True

    # Derived data -------------------------------------------------------

    def to_cube(self) -> Cube:
        """
        Replace every id in space with the cube it refers to.

        The result is one dense cube ``cube_width`` times wider (and so on
        for the other axes) than the space, carrying this world's name,
        description and author.

        Raises:
            IntegrityError: If the world is not intact or references a
                            cube id that does not exist
            EmptyPaletteError: If no cube is defined
        """
        self.check_integrity()
        cw, ch, cd = self.cube_dimensions()

        for bx, column in enumerate(self.space):
            for by, row in enumerate(column):
                for bz, block_id in enumerate(row):
                    if not 0 <= block_id <= len(self.cube):
                        raise IntegrityError(
                            f"Block ({bx}, {by}, {bz}) refers to cube id {block_id}, "
                            f"but only {len(self.cube)} cube(s) are defined")

        empty = Voxel()
        xs = [divmod(x, cw) for x in range(self.width * cw)]
        ys = [divmod(y, ch) for y in range(self.height * ch)]
        zs = [divmod(z, cd) for z in range(self.depth * cd)]

        def voxel_at(bx, rx, by, ry, bz, rz):
            block_id = self.space[bx][by][bz]
            if block_id == 0:
                return empty
            return self.cube[block_id - 1].vox[rx][ry][rz]

        return Cube(
            self.name,
            self.description,
            [[[voxel_at(bx, rx, by, ry, bz, rz) for bz, rz in zs]
              for by, ry in ys]
             for bx, rx in xs],
            self.author,
        )

    def voxel_types(self) -> List[Voxel]:
        """Get all the distinct visible voxels used in this world."""
        seen = {}
        for c in self.cube:
            for voxel in c.voxel_types():
                seen.setdefault(voxel, None)
        return list(seen)

    # Editing ------------------------------------------------------------

    def add_cube(self, cube: Cube) -> int:
        """
        Add a cube to the palette.

        A cube is only compatible with a world if it has the same
        dimensions as the other cubes in the world.

        Returns:
            The id the new cube is referred to by in ``space``

        Raises:
            IncompatibleCubeError: If the dimensions do not match
        """
        if self.cube and cube.dimensions() != self.cube_dimensions():
            raise IncompatibleCubeError(
                "Cube dimensions {} do not conform to the other cubes' dimensions {}".format(
                    cube.dimensions(), self.cube_dimensions()))
        self.cube.append(cube)
        return len(self.cube)

    def new_cube(self) -> int:
        """Add an empty cube with the palette's dimensions and return its id."""
        return self.add_cube(Cube.empty(*self.cube_dimensions()))

    def get_block(self, x: int, y: int, z: int) -> int:
        self._check_position(x, y, z)
        return self.space[x][y][z]

    def set_block(self, x: int, y: int, z: int, block_id: int):
        """
        Place a cube id at block position ``(x, y, z)``.

        Raises:
            IndexError: If the position is outside the space
            IntegrityError: If no cube with that id exists
        """
        self._check_position(x, y, z)
        if not 0 <= block_id <= len(self.cube):
            raise IntegrityError(
                f"Cube id {block_id} is not defined (palette has {len(self.cube)} cube(s))")
        self.space[x][y][z] = block_id

    def _check_position(self, x: int, y: int, z: int):
        if not (0 <= x < len(self.space) and 0 <= y < len(self.space[x])
                and 0 <= z < len(self.space[x][y])):
            raise IndexError(f"block ({x}, {y}, {z}) is outside the world")

    def resized(self, x: int, y: int, z: int) -> 'World':
        """
        Get a copy of this world with a space of a different size.

        Existing ids keep their position from the origin, new blocks are empty.
        """
        return World(
            self.name,
            self.description,
            list(self.cube),
            [[[self.space[i][j][k]
               if i < len(self.space) and j < len(self.space[i]) and k < len(self.space[i][j])
               else 0
               for k in range(z)]
              for j in range(y)]
             for i in range(x)],
            self.author,
        )

    def map(self, f: Callable[[int, int, int, int], int]) -> 'World':
        """
        Map every id in the space to another id.

        Args:
            f: Called as ``f(id, x, y, z)`` for every block position

        Returns:
            New World with the same metadata and cubes
        """
        return World(
            self.name,
            self.description,
            list(self.cube),
            [[[f(block_id, x, y, z) for z, block_id in enumerate(row)]
              for y, row in enumerate(column)]
             for x, column in enumerate(self.space)],
            self.author,
        )

    # Construction -------------------------------------------------------

    @classmethod
    def empty(cls, x: int, y: int, z: int) -> 'World':
        """
        Create a world without cubes and an all empty space.

        Args:
            x: Width
            y: Height
            z: Depth
        """
        return cls('', '', [], [[[0] * z for _ in range(y)] for _ in range(x)])

    def to_serialized(self) -> dict:
        return {
            'name': self.name,
            'description': self.description,
            'author': self.author,
            'cube': [c.to_serialized() for c in self.cube],
            'space': [[list(row) for row in column] for column in self.space],
        }

    @classmethod
    def from_serialized(cls, data: Any) -> 'World':
        """
        Create a world from its serialized form.

        Args:
            data: Parsed JSON document, see ``to_serialized``

        Raises:
            ParseError: If a field is missing or has the wrong type
        """
        data = expect_mapping(data)
        cubes = [Cube.from_serialized(c, join_path('cube', i))
                 for i, c in enumerate(expect_list(required(data, 'cube'), 'cube'))]

        space = []
        for x, column in enumerate(expect_list(required(data, 'space'), 'space')):
            column_path = join_path('space', x)
            space.append([])
            for y, row in enumerate(expect_list(column, column_path)):
                row_path = join_path(column_path, y)
                space[x].append([_block_id(v, join_path(row_path, z))
                                 for z, v in enumerate(expect_list(row, row_path))])

        return cls(
            optional_str(data, 'name'),
            optional_str(data, 'description'),
            cubes,
            space,
            optional_str(data, 'author'),
        )


def _block_id(data: Any, path: str) -> int:
    block_id = expect_int(data, path)
    if block_id < 0:
        raise ParseError(f"cube ids cannot be negative, got {block_id}", path)
    return block_id
