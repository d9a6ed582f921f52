from voxworld.core import ParseError, Voxel

import pytest


def test_defaults_are_invisible():
    voxel = Voxel()
    assert voxel.to_tuple() == (0, 0, 0, 0)
    assert not voxel.visible


def test_any_nonzero_alpha_is_visible():
    assert Voxel(0, 0, 0, 1).visible
    assert Voxel(10, 20, 30, 255).visible
    assert Voxel(10, 20, 30, 0.5).visible


def test_equality_is_by_value():
    a = Voxel(1, 2, 3, 4)
    b = Voxel(1, 2, 3, 4)
    assert a == b
    assert Voxel.equals(a, b)
    assert not Voxel.equals(a, Voxel(1, 2, 3, 5))
    assert len({a, b}) == 1


def test_immutable():
    voxel = Voxel(1, 2, 3, 4)
    with pytest.raises(AttributeError):
        voxel.r = 5


def test_from_serialized_list_and_mapping():
    assert Voxel.from_serialized([255, 0, 10, 1]) == Voxel(255, 0, 10, 1)
    assert Voxel.from_serialized({'r': 1, 'g': 2, 'b': 3, 'a': 4}) == Voxel(1, 2, 3, 4)
    assert Voxel.from_serialized(Voxel(5, 6, 7, 8).to_serialized()) == Voxel(5, 6, 7, 8)


@pytest.mark.parametrize('data', [
    [1, 2, 3],
    [1, 2, 3, 4, 5],
    [1, 2, 'x', 4],
    [1, 2, True, 4],
    {'r': 1, 'g': 2, 'b': 3},
    'red',
    None,
])
def test_from_serialized_rejects_malformed(data):
    with pytest.raises(ParseError):
        Voxel.from_serialized(data)


def test_parse_error_reports_path():
    with pytest.raises(ParseError) as info:
        Voxel.from_serialized([1, 2, None, 4], 'vox[0][0][0]')
    assert info.value.path == 'vox[0][0][0][2]'
    assert 'vox[0][0][0][2]' in str(info.value)


def test_to_float():
    assert Voxel(255, 0, 51, 255).to_float() == (1.0, 0.0, 0.2, 1.0)
    assert Voxel(0, 0, 0, 1).to_float()[3] == 1.0
    assert Voxel(0, 0, 0, 0.5).to_float()[3] == 0.5
