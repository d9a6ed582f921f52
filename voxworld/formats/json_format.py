"""
JSON World Format
=================

Reads and writes worlds as JSON documents of the form::

    {
        "name": "...", "description": "...", "author": "...",
        "cube": [{"name": "...", "description": "...", "author": "...",
                  "vox": [[[[r, g, b, a], ...], ...], ...]}],
        "space": [[[0, 1, ...], ...], ...]
    }
"""

import json
import logging
from pathlib import Path
from typing import Optional

from voxworld.core.cube import Cube
from voxworld.core.errors import ParseError
from voxworld.core.world import World

logger = logging.getLogger(__name__)


def _parse_json(text: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e


class WorldJsonFormat:
    """Load and save worlds as JSON."""

    @classmethod
    def loads(cls, text: str) -> World:
        return World.from_serialized(_parse_json(text))

    @classmethod
    def dumps(cls, world: World, indent: Optional[int] = None) -> str:
        return json.dumps(world.to_serialized(), indent=indent)

    @classmethod
    def load(cls, filepath: str) -> World:
        """
        Load a world from a JSON file.

        Args:
            filepath: Path to the file

        Returns:
            The loaded World

        Raises:
            ParseError: If the file does not hold a valid world
            IOError: If the file cannot be read
        """
        logger.info(f"Loading world from: {filepath}")
        try:
            text = Path(filepath).read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(f"file is not valid UTF-8: {e.reason} at byte {e.start}") from e
        world = cls.loads(text)
        logger.debug(f"Loaded world '{world.name}' with {len(world.cube)} cube(s), "
                     f"space {world.width}x{world.height}x{world.depth}")
        return world

    @classmethod
    def save(cls, filepath: str, world: World, indent: Optional[int] = None):
        """
        Save a world to a JSON file.

        Args:
            filepath: Output file path
            world: World to save
            indent: Pretty-print indentation, None for compact output
        """
        logger.info(f"Saving world to: {filepath}")
        Path(filepath).write_text(cls.dumps(world, indent), encoding='utf-8')


class CubeJsonFormat:
    """Single cubes as JSON, for editing one block at a time."""

    @classmethod
    def loads(cls, text: str) -> Cube:
        return Cube.from_serialized(_parse_json(text))

    @classmethod
    def dumps(cls, cube: Cube, indent: Optional[int] = None) -> str:
        return json.dumps(cube.to_serialized(), indent=indent)
