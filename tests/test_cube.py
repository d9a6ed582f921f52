import math

import numpy as np
import pytest

from voxworld.core import Cube, IntegrityError, ParseError, Voxel

RED = Voxel(255, 0, 0, 255)
BLUE = Voxel(0, 0, 255, 255)
GHOST = Voxel(9, 9, 9, 0)


def make_cube(w, h, d, f):
    return Cube.empty(w, h, d).map(lambda _, x, y, z: f(x, y, z))


def test_empty_dimensions():
    cube = Cube.empty(2, 3, 4)
    assert cube.dimensions() == (2, 3, 4)
    assert (cube.width, cube.height, cube.depth) == (2, 3, 4)
    assert all(v == Voxel() for column in cube.vox for row in column for v in row)


def test_empty_does_not_alias_rows():
    cube = Cube.empty(2, 2, 2)
    cube.set_voxel(0, 0, 0, RED)
    assert cube.get_voxel(0, 0, 0) == RED
    assert cube.get_voxel(1, 0, 0) == Voxel()
    assert cube.get_voxel(0, 1, 0) == Voxel()
    assert cube.get_voxel(0, 0, 1) == Voxel()


def test_dimensions_of_empty_data_fail():
    with pytest.raises(IntegrityError):
        Cube('', '', []).dimensions()
    with pytest.raises(IntegrityError):
        Cube('', '', [[]]).depth


def test_is_rectangular():
    assert Cube.empty(2, 2, 2).is_rectangular()
    ragged = Cube('', '', [[[RED, RED]], [[RED]]])
    assert not ragged.is_rectangular()


def test_center_and_radius():
    cube = Cube.empty(2, 4, 4)
    assert cube.center() == (1.0, 2.0, 2.0)
    assert cube.radius() == pytest.approx(3.0)
    assert Cube.empty(1, 1, 1).radius() == pytest.approx(math.sqrt(0.75))


def test_voxel_types_are_distinct_visible_first_seen():
    cube = make_cube(2, 2, 2, lambda x, y, z: [BLUE, RED, GHOST, Voxel()][(x + y + z) % 4])
    types = cube.voxel_types()
    assert types == [BLUE, RED]
    assert all(v.visible for v in types)
    assert len(set(types)) == len(types)


def test_voxel_types_empty_cube():
    assert Cube.empty(3, 3, 3).voxel_types() == []


def test_voxel_masks():
    cube = make_cube(2, 1, 2, lambda x, y, z: RED if x == z else BLUE)
    masks = cube.voxel_masks()
    assert [v for _, v in masks] == [RED, BLUE]

    red_mask, _ = masks[0]
    assert red_mask.shape == (2, 1, 2)
    assert red_mask.dtype == np.bool_
    assert red_mask.tolist() == [[[True, False]], [[False, True]]]

    blue_mask, _ = masks[1]
    assert np.array_equal(blue_mask, ~red_mask)


def test_voxel_masks_skip_invisible():
    cube = make_cube(2, 2, 2, lambda x, y, z: GHOST if x else RED)
    masks = cube.voxel_masks()
    assert len(masks) == 1
    assert masks[0][1] == RED
    assert masks[0][0].sum() == 4


def test_to_array():
    cube = make_cube(1, 1, 2, lambda x, y, z: RED if z else Voxel())
    array = cube.to_array()
    assert array.shape == (1, 1, 2, 4)
    assert array[0, 0, 1].tolist() == [255, 0, 0, 255]
    assert array[0, 0, 0].tolist() == [0, 0, 0, 0]


def test_map_identity_is_equal():
    cube = make_cube(3, 2, 1, lambda x, y, z: RED if x == y else BLUE)
    cube.name, cube.description, cube.author = 'stairs', 'a staircase', 'me'
    mapped = cube.map(lambda v, x, y, z: v)
    assert mapped == cube
    assert mapped is not cube
    assert mapped.vox is not cube.vox


def test_map_passes_coordinates_and_keeps_metadata():
    cube = Cube('n', 'd', Cube.empty(2, 2, 2).vox, 'a')
    seen = []

    def f(voxel, x, y, z):
        seen.append((x, y, z))
        return RED if y == x - z else voxel

    mapped = cube.map(f)
    assert sorted(seen) == [(x, y, z) for x in range(2) for y in range(2) for z in range(2)]
    assert (mapped.name, mapped.description, mapped.author) == ('n', 'd', 'a')
    assert mapped.get_voxel(1, 0, 1) == RED
    assert mapped.get_voxel(1, 1, 0) == RED
    assert cube.get_voxel(1, 1, 0) == Voxel()


def test_set_voxel_out_of_range():
    cube = Cube.empty(2, 2, 2)
    with pytest.raises(IndexError):
        cube.set_voxel(2, 0, 0, RED)
    with pytest.raises(IndexError):
        cube.get_voxel(0, -1, 0)


def test_serialized_round_trip():
    cube = make_cube(2, 3, 1, lambda x, y, z: RED if x else BLUE)
    cube.name = 'brick'
    data = cube.to_serialized()
    assert data['vox'][1][0][0] == [255, 0, 0, 255]
    assert Cube.from_serialized(data) == cube


def test_from_serialized_defaults_metadata():
    cube = Cube.from_serialized({'vox': [[[[1, 2, 3, 4]]]]})
    assert (cube.name, cube.description, cube.author) == ('', '', '')
    assert cube.vox == [[[Voxel(1, 2, 3, 4)]]]


@pytest.mark.parametrize('data, path', [
    ({}, None),
    ({'vox': 'nope'}, 'vox'),
    ({'vox': [[[[1, 2, 3]]]]}, 'vox[0][0][0]'),
    ({'vox': [[5]]}, 'vox[0][0]'),
    ({'vox': [[[[1, 2, 3, 4]]]], 'name': 7}, 'name'),
])
def test_from_serialized_errors(data, path):
    with pytest.raises(ParseError) as info:
        Cube.from_serialized(data)
    assert info.value.path == path
