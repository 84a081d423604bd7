import dataclasses

import pytest

from cryptcore.mathtypes import Mat4f, Quat, Rect, Vec2f, Vec3f, Vec2i


def test_zeros_matches_explicit_construction():
    assert Mat4f.zeros() == Mat4f(((0, 0, 0, 0),) * 4)


def test_values_are_converted_to_float():
    ints = ((1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12), (13, 14, 15, 16))
    floats = tuple(tuple(float(v) for v in row) for row in ints)
    mat = Mat4f(ints)
    assert mat == Mat4f(floats)
    assert mat.row(0) == (1.0, 2.0, 3.0, 4.0)
    assert [type(v) for row in mat for v in row] == [float] * 16


def test_row_returns_given_row():
    rows = ((1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12), (13, 14, 15, 16))
    mat = Mat4f(rows)
    assert mat.row(2) == tuple(float(v) for v in rows[2])


def test_getitem_by_row_and_column():
    rows = ((1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12), (13, 14, 15, 16))
    mat = Mat4f(rows)
    assert mat[3, 1] == rows[3][1]


def test_iteration_yields_four_rows():
    mat = Mat4f.zeros()
    assert len(list(mat)) == len(mat.m)


@pytest.mark.parametrize(
    "rows",
    [
        ((1, 2, 3, 4),) * 3,
        ((1, 2, 3),) * 4,
        ((1, 2, 3, 4),) * 5,
    ],
)
def test_bad_shape_is_rejected(rows):
    with pytest.raises(ValueError):
        Mat4f(rows)


def test_vectors_are_immutable():
    v = Vec3f(1.0, 2.0, 3.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5.0
    assert v == Vec3f(1.0, 2.0, 3.0)
    assert dataclasses.replace(v, x=5.0) == Vec3f(5.0, 2.0, 3.0)


def test_value_equality():
    assert Vec2i(3, 4) == Vec2i(3, 4)
    assert Quat(1.0, 0.0, 0.0, 0.0) == Quat(w=1.0)
    assert Rect(Vec2f(1, 2), Vec2f(3, 4)).size == Vec2f(3, 4)