#!/usr/bin/env python3
"""
VoxWorld - Block Based Voxel World Tool
=======================================

Command line entry point for creating, editing, inspecting and exporting
VoxWorld JSON files.

Usage:
    python main.py new world.json --size 4x2x4 --cube-size 8x8x8
    python main.py info world.json
    python main.py add-cube world.json [--from cube.json]
    python main.py set-block world.json X Y Z ID
    python main.py show-cube world.json ID
    python main.py resize world.json --size 8x2x8
    python main.py export world.json out.obj
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional, Tuple

# Add the project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from voxworld import __version__
from voxworld.core import Cube, World, VoxWorldError
from voxworld.formats import FormatManager, WorldJsonFormat, CubeJsonFormat

DEFAULT_WORLD_SIZE = '1x1x1'
DEFAULT_CUBE_SIZE = '8x8x8'
DEFAULT_SCALE = 1.0


def parse_size(text: str) -> Tuple[int, int, int]:
    """Parse a ``WxHxD`` size string."""
    try:
        parts = text.lower().split('x')
        if len(parts) != 3:
            raise ValueError(text)
        size = (int(parts[0]), int(parts[1]), int(parts[2]))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxHxD, got '{text}'")
    if min(size) <= 0:
        raise argparse.ArgumentTypeError(f"dimensions must be positive, got '{text}'")
    return size


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='voxworld',
        description='VoxWorld - block based voxel worlds',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Supported formats:
  Import: .json
  Export: .json, .obj

Examples:
  %(prog)s new world.json --size 4x1x4     Create an empty 4x1x4 world
  %(prog)s export world.json world.obj    Export the built world as a mesh
        """
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    new = commands.add_parser('new', help='Create a new world file')
    new.add_argument('file', help='World file to create')
    new.add_argument('--size', type=parse_size, default=parse_size(DEFAULT_WORLD_SIZE),
                     help=f'World size in blocks (default: {DEFAULT_WORLD_SIZE})')
    new.add_argument('--cube-size', type=parse_size, default=parse_size(DEFAULT_CUBE_SIZE),
                     help=f'Size of the first, empty cube (default: {DEFAULT_CUBE_SIZE})')
    new.add_argument('--name', default='', help='World name')
    new.add_argument('--description', default='', help='World description')
    new.add_argument('--author', default='', help='World author')

    info = commands.add_parser('info', help='Describe a world file')
    info.add_argument('file', help='World file')

    add_cube = commands.add_parser('add-cube', help='Add a cube to a world')
    add_cube.add_argument('file', help='World file')
    add_cube.add_argument('--from', dest='cube_file',
                          help='Cube JSON file to add (default: an empty cube)')

    set_block = commands.add_parser('set-block', help='Place a cube id in the world')
    set_block.add_argument('file', help='World file')
    set_block.add_argument('x', type=int)
    set_block.add_argument('y', type=int)
    set_block.add_argument('z', type=int)
    set_block.add_argument('id', type=int, help='Cube id, 0 for empty')

    show_cube = commands.add_parser('show-cube', help='Print a cube as JSON')
    show_cube.add_argument('file', help='World file')
    show_cube.add_argument('id', type=int, help='Cube id (1-based)')

    resize = commands.add_parser('resize', help='Change the size of the world')
    resize.add_argument('file', help='World file')
    resize.add_argument('--size', type=parse_size, required=True,
                        help='New world size in blocks')

    export = commands.add_parser('export', help='Export a world')
    export.add_argument('file', help='World file')
    export.add_argument('output', help='Output file (.json or .obj)')
    export.add_argument('--scale', type=float, default=DEFAULT_SCALE,
                        help=f'Mesh scale factor (default: {DEFAULT_SCALE})')
    export.add_argument('--no-optimize', action='store_true',
                        help='Write one quad per voxel face instead of greedy meshing')

    return parser.parse_args(argv)


def cmd_new(args) -> int:
    world = World.empty(*args.size)
    world.name = args.name
    world.description = args.description
    world.author = args.author
    world.add_cube(Cube.empty(*args.cube_size))
    WorldJsonFormat.save(args.file, world)
    print(f"Created {args.file}")
    return 0


def cmd_info(args) -> int:
    world = WorldJsonFormat.load(args.file)
    print(f"Name:        {world.name}")
    print(f"Description: {world.description}")
    print(f"Author:      {world.author}")
    print(f"Space:       {world.width}x{world.height}x{world.depth}")
    if world.cube:
        cw, ch, cd = world.cube_dimensions()
        print(f"Cubes:       {len(world.cube)} of {cw}x{ch}x{cd}")
    else:
        print("Cubes:       none")
    print(f"Voxel types: {len(world.voxel_types())}")
    reason = world.integrity_error()
    print(f"Integrity:   {'ok' if reason is None else reason}")
    return 0


def cmd_add_cube(args) -> int:
    world = WorldJsonFormat.load(args.file)
    if args.cube_file:
        cube = CubeJsonFormat.loads(Path(args.cube_file).read_text(encoding='utf-8'))
        cube_id = world.add_cube(cube)
    else:
        cube_id = world.new_cube()
    WorldJsonFormat.save(args.file, world)
    print(f"Added cube {cube_id}")
    return 0


def cmd_set_block(args) -> int:
    world = WorldJsonFormat.load(args.file)
    world.set_block(args.x, args.y, args.z, args.id)
    WorldJsonFormat.save(args.file, world)
    return 0


def cmd_show_cube(args) -> int:
    world = WorldJsonFormat.load(args.file)
    if not 1 <= args.id <= len(world.cube):
        print(f"Error: cube {args.id} does not exist", file=sys.stderr)
        return 1
    print(CubeJsonFormat.dumps(world.cube[args.id - 1], indent=2))
    return 0


def cmd_resize(args) -> int:
    world = WorldJsonFormat.load(args.file)
    WorldJsonFormat.save(args.file, world.resized(*args.size))
    return 0


def cmd_export(args) -> int:
    manager = FormatManager()
    if not manager.can_import(args.file):
        print(f"Error: unsupported import format: {Path(args.file).suffix}", file=sys.stderr)
        return 1
    if not manager.can_export(args.output):
        print(f"Error: unsupported export format: {Path(args.output).suffix}", file=sys.stderr)
        return 1
    world = manager.import_file(args.file)
    manager.export_file(args.output, world, scale=args.scale, optimize=not args.no_optimize)
    print(f"Exported {args.output}")
    return 0


COMMANDS = {
    'new': cmd_new,
    'info': cmd_info,
    'add-cube': cmd_add_cube,
    'set-block': cmd_set_block,
    'show-cube': cmd_show_cube,
    'resize': cmd_resize,
    'export': cmd_export,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    try:
        return COMMANDS[args.command](args)
    except (VoxWorldError, IndexError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
