"""
Mesh Export
===========

Turn cubes into polygon meshes and write them as Wavefront OBJ.

Every voxel type of a cube becomes its own material. Faces are generated
from the per-type occupancy masks of ``Cube.voxel_masks``, either one quad
per exposed voxel face or with greedy meshing that merges coplanar
neighbours into larger quads.
"""

import logging
import numpy as np
from typing import List, Tuple, Dict, Any
from pathlib import Path
from dataclasses import dataclass, field

from voxworld.core.cube import Cube
from voxworld.core.voxel import Voxel

logger = logging.getLogger(__name__)


@dataclass
class Vertex:
    """3D vertex with position, normal and color."""
    position: Tuple[float, float, float]
    normal: Tuple[float, float, float] = (0, 0, 0)
    color: Tuple[float, float, float, float] = (1, 1, 1, 1)


@dataclass
class Face:
    """Triangle face."""
    vertices: List[int]
    material_id: int = 0


@dataclass
class Mesh:
    """Collection of vertices and faces."""
    vertices: List[Vertex] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)
    materials: Dict[int, Dict[str, Any]] = field(default_factory=dict)


class VoxelMesher:
    """
    Converts voxel masks to a polygon mesh.

    A face is emitted wherever a voxel of one type borders a cell that does
    not hold the same type, so touching voxels of different colors keep
    their shared faces.
    """

    # Face directions with normals
    FACES = {
        'right':  ((1, 0, 0), [(1, 0, 0), (1, 1, 0), (1, 1, 1), (1, 0, 1)]),
        'left':   ((-1, 0, 0), [(0, 0, 1), (0, 1, 1), (0, 1, 0), (0, 0, 0)]),
        'top':    ((0, 1, 0), [(0, 1, 0), (0, 1, 1), (1, 1, 1), (1, 1, 0)]),
        'bottom': ((0, -1, 0), [(0, 0, 1), (0, 0, 0), (1, 0, 0), (1, 0, 1)]),
        'front':  ((0, 0, 1), [(0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)]),
        'back':   ((0, 0, -1), [(1, 0, 0), (0, 0, 0), (0, 1, 0), (1, 1, 0)]),
    }

    @classmethod
    def generate_mesh(cls, cube: Cube, scale: float = 1.0, center: bool = True,
                      optimize: bool = True) -> Mesh:
        """
        Generate a mesh from a cube.

        Args:
            cube: Cube to convert
            scale: Scale factor for the mesh
            center: If True, center the mesh at origin
            optimize: If True, use greedy meshing (fewer polygons)

        Returns:
            Mesh object with vertices, faces and one material per voxel type
        """
        mesh = Mesh()
        size = cube.dimensions()

        if center:
            offset = (-size[0] / 2, -size[1] / 2, -size[2] / 2)
        else:
            offset = (0, 0, 0)

        for material_id, (mask, voxel) in enumerate(cube.voxel_masks(), start=1):
            if optimize:
                cls._generate_greedy_mesh(mask, voxel, material_id, mesh, scale, offset)
            else:
                cls._generate_simple_mesh(mask, voxel, material_id, mesh, scale, offset)

            r, g, b, a = voxel.to_float()
            mesh.materials[material_id] = {
                'name': f'voxel_{material_id}',
                'diffuse': (r, g, b),
                'alpha': a,
            }

        logger.debug(f"Meshed {size[0]}x{size[1]}x{size[2]} cube: "
                     f"{len(mesh.vertices)} vertices, {len(mesh.faces)} faces")
        return mesh

    @staticmethod
    def _add_quad(mesh: Mesh, corners, normal, color, material_id: int,
                  scale: float, offset: Tuple[float, float, float]):
        base_idx = len(mesh.vertices)
        for corner in corners:
            pos = (
                (corner[0] + offset[0]) * scale,
                (corner[1] + offset[1]) * scale,
                (corner[2] + offset[2]) * scale
            )
            mesh.vertices.append(Vertex(position=pos, normal=normal, color=color))

        # Two triangles per quad
        mesh.faces.append(Face(vertices=[base_idx, base_idx + 1, base_idx + 2], material_id=material_id))
        mesh.faces.append(Face(vertices=[base_idx, base_idx + 2, base_idx + 3], material_id=material_id))

    @classmethod
    def _generate_simple_mesh(cls, mask: np.ndarray, voxel: Voxel, material_id: int,
                              mesh: Mesh, scale: float, offset: Tuple[float, float, float]):
        """Generate mesh with per-voxel faces (unoptimized)."""
        size = mask.shape
        color = voxel.to_float()

        for x, y, z in np.argwhere(mask):
            for normal, corners in cls.FACES.values():
                nx, ny, nz = x + normal[0], y + normal[1], z + normal[2]
                inside = 0 <= nx < size[0] and 0 <= ny < size[1] and 0 <= nz < size[2]
                if inside and mask[nx, ny, nz]:
                    continue  # Hidden face

                cls._add_quad(mesh, [(x + c[0], y + c[1], z + c[2]) for c in corners],
                              normal, color, material_id, scale, offset)

    @classmethod
    def _generate_greedy_mesh(cls, mask: np.ndarray, voxel: Voxel, material_id: int,
                              mesh: Mesh, scale: float, offset: Tuple[float, float, float]):
        """Generate mesh using greedy meshing algorithm."""
        # Pad with empty cells so every boundary face has an empty neighbour
        padded = np.pad(mask, 1, constant_values=False)
        size = mask.shape
        color = voxel.to_float()

        for axis in range(3):
            # Move the sweep axis to the front: slices are padded[d] vs padded[d + 1]
            swept = np.moveaxis(padded, axis, 0)
            for d in range(size[axis] + 1):
                previous = swept[d][1:-1, 1:-1]
                current = swept[d + 1][1:-1, 1:-1]

                faces = {}
                for u, v in np.argwhere(current & ~previous):
                    faces[(int(u), int(v))] = -1
                for u, v in np.argwhere(previous & ~current):
                    faces[(int(u), int(v))] = 1

                cls._merge_and_add_faces(faces, axis, d, color, material_id, mesh, scale, offset)

    @classmethod
    def _merge_and_add_faces(cls, faces: Dict[Tuple[int, int], int], axis: int, d: int,
                             color, material_id: int, mesh: Mesh,
                             scale: float, offset: Tuple[float, float, float]):
        """Merge adjacent faces with the same direction and add them to the mesh."""
        visited = set()

        for (u, v), direction in sorted(faces.items()):
            if (u, v) in visited:
                continue

            # Find width of merged face
            width = 1
            while faces.get((u + width, v)) == direction and (u + width, v) not in visited:
                width += 1

            # Find height of merged face
            height = 1
            done = False
            while not done:
                for w in range(width):
                    if faces.get((u + w, v + height)) != direction or (u + w, v + height) in visited:
                        done = True
                        break
                if not done:
                    height += 1

            for w in range(width):
                for h in range(height):
                    visited.add((u + w, v + h))

            normal = [0, 0, 0]
            normal[axis] = direction
            corners = cls._quad_corners(axis, d, u, v, width, height, direction)
            cls._add_quad(mesh, corners, tuple(normal), color, material_id, scale, offset)

    @staticmethod
    def _quad_corners(axis: int, d: int, u: int, v: int, width: int, height: int,
                      direction: int) -> List[Tuple[int, int, int]]:
        """Corners of a merged face, wound counter-clockwise seen from its normal."""
        plane = [(u, v), (u + width, v), (u + width, v + height), (u, v + height)]
        # axis 1 slices are (x, z), which is a left handed (u, v) pair
        if (direction < 0) != (axis == 1):
            plane.reverse()

        corners = []
        for pu, pv in plane:
            corner = [pu, pv]
            corner.insert(axis, d)
            corners.append(tuple(corner))
        return corners


class ObjExporter:
    """Export cubes to Wavefront OBJ format."""

    @classmethod
    def export(cls, filepath: str, cube: Cube, scale: float = 1.0, optimize: bool = True):
        """
        Export a cube to OBJ format.

        Args:
            filepath: Output file path
            cube: Cube to export
            scale: Scale factor
            optimize: Use greedy meshing
        """
        mesh = VoxelMesher.generate_mesh(cube, scale, center=True, optimize=optimize)
        logger.info(f"Exporting {len(mesh.faces)} faces to: {filepath}")

        # Write MTL file
        mtl_path = Path(filepath).with_suffix('.mtl')
        cls._write_mtl(mtl_path, mesh)

        # Write OBJ file
        with open(filepath, 'w') as f:
            f.write("# VoxWorld OBJ Export\n")
            if cube.name:
                f.write(f"# {cube.name}\n")
            f.write(f"# Vertices: {len(mesh.vertices)}\n")
            f.write(f"# Faces: {len(mesh.faces)}\n")
            f.write(f"mtllib {mtl_path.name}\n\n")

            for v in mesh.vertices:
                f.write(f"v {v.position[0]:.6f} {v.position[1]:.6f} {v.position[2]:.6f}\n")

            f.write("\n")

            for v in mesh.vertices:
                f.write(f"vn {v.normal[0]:.6f} {v.normal[1]:.6f} {v.normal[2]:.6f}\n")

            f.write("\n")

            # Vertex colors as comments (some software supports this)
            f.write("# Vertex colors (non-standard)\n")
            for v in mesh.vertices:
                f.write(f"# vc {v.color[0]:.3f} {v.color[1]:.3f} {v.color[2]:.3f}\n")

            # Group faces by material
            faces_by_material: Dict[int, List[Face]] = {}
            for face in mesh.faces:
                faces_by_material.setdefault(face.material_id, []).append(face)

            for material_id, faces in faces_by_material.items():
                f.write(f"\nusemtl {mesh.materials[material_id]['name']}\n")
                for face in faces:
                    indices = " ".join(f"{v+1}//{v+1}" for v in face.vertices)
                    f.write(f"f {indices}\n")

    @classmethod
    def _write_mtl(cls, filepath: Path, mesh: Mesh):
        """Write material library file."""
        with open(filepath, 'w') as f:
            f.write("# VoxWorld Material Library\n\n")

            for mat in mesh.materials.values():
                f.write(f"newmtl {mat['name']}\n")
                f.write(f"Kd {mat['diffuse'][0]:.3f} {mat['diffuse'][1]:.3f} {mat['diffuse'][2]:.3f}\n")
                f.write("Ka 0.1 0.1 0.1\nKs 0.0 0.0 0.0\nNs 10.0\n")
                if mat['alpha'] < 1.0:
                    f.write(f"d {mat['alpha']:.3f}\n")
                f.write("\n")
