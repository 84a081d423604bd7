"""Plain value types for vectors, matrices, rectangles and quaternions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

Row = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Vec2i:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Vec3i:
    x: int = 0
    y: int = 0
    z: int = 0


@dataclass(frozen=True)
class Vec4i:
    x: int = 0
    y: int = 0
    z: int = 0
    w: int = 0


@dataclass(frozen=True)
class Vec2f:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Vec3f:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Vec4f:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0


@dataclass(frozen=True)
class Mat4f:
    """A 4x4 matrix stored as four rows of four floats."""

    m: Tuple[Row, Row, Row, Row]

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(value) for value in row) for row in self.m)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("a Mat4f needs exactly 4 rows of 4 values")
        object.__setattr__(self, "m", rows)

    @staticmethod
    def zeros() -> "Mat4f":
        """Return the all-zero matrix."""
        return Mat4f(((0.0,) * 4,) * 4)

    def row(self, index: int) -> Row:
        """Return one row of the matrix."""
        return self.m[index]

    def __getitem__(self, key: Tuple[int, int]) -> float:
        row, col = key
        return self.m[row][col]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.m)


@dataclass(frozen=True)
class Rect:
    min: Vec2f = Vec2f()
    size: Vec2f = Vec2f()


@dataclass(frozen=True)
class Quat:
    w: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0