"""
Voxel
=====

A single colored cell, the 3D analogue of a pixel.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from voxworld.core.errors import ParseError
from voxworld.core.schema import expect_number, join_path

CHANNELS = ('r', 'g', 'b', 'a')


@dataclass(frozen=True)
class Voxel:
    """
    Immutable RGBA voxel.

    The alpha channel doubles as a presence flag: 0 means there is no voxel
    at this position, anything else means it is drawn.

    Attributes:
        r: Red value (0-255)
        g: Green value (0-255)
        b: Blue value (0-255)
        a: Alpha/opacity value
    """

    r: float = 0
    g: float = 0
    b: float = 0
    a: float = 0

    @property
    def visible(self) -> bool:
        """True if this voxel should be drawn."""
        return self.a != 0

    @staticmethod
    def equals(a: 'Voxel', b: 'Voxel') -> bool:
        """Check if two voxels have identical channels."""
        return a.r == b.r and a.g == b.g and a.b == b.b and a.a == b.a

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Return the voxel as an RGBA tuple."""
        return (self.r, self.g, self.b, self.a)

    def to_float(self) -> Tuple[float, float, float, float]:
        """
        Return the color as normalized floats (0-1 range).

        Alpha values above 1 are treated as 0-255 opacities, smaller ones
        are taken as they are.
        """
        alpha = self.a / 255.0 if self.a > 1 else float(self.a)
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, alpha)

    def to_serialized(self) -> List[float]:
        return [self.r, self.g, self.b, self.a]

    @classmethod
    def from_serialized(cls, data: Any, path: Optional[str] = None) -> 'Voxel':
        """
        Create a voxel from its serialized form.

        Args:
            data: Either ``[r, g, b, a]`` or ``{"r": .., "g": .., "b": .., "a": ..}``
            path: Location of ``data`` in the document, used in error messages

        Returns:
            New Voxel instance

        Raises:
            ParseError: If ``data`` is not one of the accepted shapes
        """
        if isinstance(data, Mapping):
            missing = [c for c in CHANNELS if c not in data]
            if missing:
                raise ParseError(f"voxel is missing channel(s) {', '.join(missing)}", path)
            values = [data[c] for c in CHANNELS]
            paths = [join_path(path, c) for c in CHANNELS]
        elif isinstance(data, (list, tuple)):
            if len(data) != 4:
                raise ParseError(f"voxel needs 4 channels, got {len(data)}", path)
            values = list(data)
            paths = [join_path(path, i) for i in range(4)]
        else:
            raise ParseError(f"expected a voxel, got {type(data).__name__}", path)

        return cls(*(expect_number(v, p) for v, p in zip(values, paths)))
