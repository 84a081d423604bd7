"""Vector, matrix and quaternion operations."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .mathtypes import Mat4f, Quat, Vec2f, Vec3f, Vec4f

# Smallest positive single-precision value and the float just below 1.0.
_FLT_TRUE_MIN = 1.401298464324817e-45
_ONE_MINUS_ULP = 0.99999994039535522


def _mat(rows: Iterable[Sequence[float]]) -> Mat4f:
    return Mat4f(tuple(tuple(row) for row in rows))


def mat4_multiply(a: Mat4f, b: Mat4f) -> Mat4f:
    """Return the product a * b."""
    cols = list(zip(*b.m))
    return _mat(
        tuple(sum(x * y for x, y in zip(row, col)) for col in cols) for row in a.m
    )


def mat4_identity() -> Mat4f:
    return _mat(
        tuple(1.0 if r == c else 0.0 for c in range(4)) for r in range(4)
    )


def mat4_translate(x: float, y: float, z: float) -> Mat4f:
    """Translation matrix with the offset in the last row."""
    return _mat(
        (
            (1.0, 0.0, 0.0, 0.0),
            (0.0, 1.0, 0.0, 0.0),
            (0.0, 0.0, 1.0, 0.0),
            (x, y, z, 1.0),
        )
    )


def mat4_scale(x: float, y: float, z: float) -> Mat4f:
    return _mat(
        (
            (x, 0.0, 0.0, 0.0),
            (0.0, y, 0.0, 0.0),
            (0.0, 0.0, z, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def mat4_rotate(axis: Vec3f, theta: float) -> Mat4f:
    """Rotation by theta radians around an axis (normalised first)."""
    a = vec3_normalize(axis)
    c = math.cos(theta)
    s = math.sin(theta)
    k = 1.0 - c
    return _mat(
        (
            (c + a.x * a.x * k, a.x * a.y * k - a.z * s, a.x * a.z * k + a.y * s, 0.0),
            (a.y * a.x * k + a.z * s, c + a.y * a.y * k, a.y * a.z * k - a.x * s, 0.0),
            (a.z * a.x * k - a.y * s, a.z * a.y * k + a.x * s, c + a.z * a.z * k, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def mat4_rotate_w_quat(quat: Quat) -> Mat4f:
    return quat_to_rot_mat4(quat)


def mat4_look_at(eye: Vec3f, target: Vec3f, up: Vec3f) -> Mat4f:
    """View matrix looking from eye towards target."""
    forward = vec3_normalize(vec3_subtract(eye, target))
    right = vec3_normalize(vec3_cross(up, forward))
    true_up = vec3_cross(forward, right)
    return _mat(
        (
            (right.x, true_up.x, forward.x, 0.0),
            (right.y, true_up.y, forward.y, 0.0),
            (right.z, true_up.z, forward.z, 0.0),
            (
                -vec3_dot(right, eye),
                -vec3_dot(true_up, eye),
                -vec3_dot(forward, eye),
                1.0,
            ),
        )
    )


def mat4_orthographic(
    bottom: float, top: float, left: float, right: float, near: float, far: float
) -> Mat4f:
    return _mat(
        (
            (2 / (right - left), 0.0, 0.0, 0.0),
            (0.0, 2 / (top - bottom), 0.0, 0.0),
            (0.0, 0.0, -2 / (far - near), 0.0),
            (
                -(right + left) / (right - left),
                -(top + bottom) / (top - bottom),
                -(far + near) / (far - near),
                1.0,
            ),
        )
    )


def mat4_perspective(half_theta: float, aspect: float, near: float, far: float) -> Mat4f:
    tan_half = math.tan(half_theta)
    return _mat(
        (
            (1.0 / (aspect * tan_half), 0.0, 0.0, 0.0),
            (0.0, 1.0 / tan_half, 0.0, 0.0),
            (0.0, 0.0, far / (near - far), -1.0),
            (0.0, 0.0, -(far * near) / (far - near), 0.0),
        )
    )


def mat4_transpose(mat: Mat4f) -> Mat4f:
    return _mat(zip(*mat.m))


def mat4_inverse(mat: Mat4f) -> Mat4f:
    """Return the inverse; raises ValueError for a singular matrix."""
    m = mat.m
    t0 = m[2][2] * m[3][3]
    t1 = m[3][2] * m[2][3]
    t2 = m[1][2] * m[3][3]
    t3 = m[3][2] * m[1][3]
    t4 = m[1][2] * m[2][3]
    t5 = m[2][2] * m[1][3]
    t6 = m[0][2] * m[3][3]
    t7 = m[3][2] * m[0][3]
    t8 = m[0][2] * m[2][3]
    t9 = m[2][2] * m[0][3]
    t10 = m[0][2] * m[1][3]
    t11 = m[1][2] * m[0][3]
    t12 = m[2][0] * m[3][1]
    t13 = m[3][0] * m[2][1]
    t14 = m[1][0] * m[3][1]
    t15 = m[3][0] * m[1][1]
    t16 = m[1][0] * m[2][1]
    t17 = m[2][0] * m[1][1]
    t18 = m[0][0] * m[3][1]
    t19 = m[3][0] * m[0][1]
    t20 = m[0][0] * m[2][1]
    t21 = m[2][0] * m[0][1]
    t22 = m[0][0] * m[1][1]
    t23 = m[1][0] * m[0][1]

    r00 = (t0 * m[1][1] + t3 * m[2][1] + t4 * m[3][1]) - (t1 * m[1][1] + t2 * m[2][1] + t5 * m[3][1])
    r01 = (t1 * m[0][1] + t6 * m[2][1] + t9 * m[3][1]) - (t0 * m[0][1] + t7 * m[2][1] + t8 * m[3][1])
    r02 = (t2 * m[0][1] + t7 * m[1][1] + t10 * m[3][1]) - (t3 * m[0][1] + t6 * m[1][1] + t11 * m[3][1])
    r03 = (t5 * m[0][1] + t8 * m[1][1] + t11 * m[2][1]) - (t4 * m[0][1] + t9 * m[1][1] + t10 * m[2][1])

    det = m[0][0] * r00 + m[1][0] * r01 + m[2][0] * r02 + m[3][0] * r03
    if det == 0.0:
        raise ValueError("matrix is singular")
    d = 1.0 / det

    row0 = (r00 * d, r01 * d, r02 * d, r03 * d)
    row1 = (
        d * ((t1 * m[1][0] + t2 * m[2][0] + t5 * m[3][0]) - (t0 * m[1][0] + t3 * m[2][0] + t4 * m[3][0])),
        d * ((t0 * m[0][0] + t7 * m[2][0] + t8 * m[3][0]) - (t1 * m[0][0] + t6 * m[2][0] + t9 * m[3][0])),
        d * ((t3 * m[0][0] + t6 * m[1][0] + t11 * m[3][0]) - (t2 * m[0][0] + t7 * m[1][0] + t10 * m[3][0])),
        d * ((t4 * m[0][0] + t9 * m[1][0] + t10 * m[2][0]) - (t5 * m[0][0] + t8 * m[1][0] + t11 * m[2][0])),
    )
    row2 = (
        d * ((t12 * m[1][3] + t15 * m[2][3] + t16 * m[3][3]) - (t13 * m[1][3] + t14 * m[2][3] + t17 * m[3][3])),
        d * ((t13 * m[0][3] + t18 * m[2][3] + t21 * m[3][3]) - (t12 * m[0][3] + t19 * m[2][3] + t20 * m[3][3])),
        d * ((t14 * m[0][3] + t19 * m[1][3] + t22 * m[3][3]) - (t15 * m[0][3] + t18 * m[1][3] + t23 * m[3][3])),
        d * ((t17 * m[0][3] + t20 * m[1][3] + t23 * m[2][3]) - (t16 * m[0][3] + t21 * m[1][3] + t22 * m[2][3])),
    )
    row3 = (
        d * ((t14 * m[2][2] + t17 * m[3][2] + t13 * m[1][2]) - (t16 * m[3][2] + t12 * m[1][2] + t15 * m[2][2])),
        d * ((t20 * m[3][2] + t12 * m[0][2] + t19 * m[2][2]) - (t18 * m[2][2] + t21 * m[3][2] + t13 * m[0][2])),
        d * ((t18 * m[1][2] + t23 * m[3][2] + t15 * m[0][2]) - (t22 * m[3][2] + t14 * m[0][2] + t19 * m[1][2])),
        d * ((t22 * m[2][2] + t16 * m[0][2] + t21 * m[1][2]) - (t20 * m[1][2] + t23 * m[2][2] + t17 * m[0][2])),
    )
    return _mat((row0, row1, row2, row3))


def transform_from_trs(
    transform: Mat4f, translation: Vec3f, rotation: Quat, scale: Vec3f
) -> Mat4f:
    """Apply scale, then rotation, then translation to a transform."""
    scaled = mat4_multiply(transform, mat4_scale(scale.x, scale.y, scale.z))
    rotated = mat4_multiply(scaled, mat4_rotate_w_quat(rotation))
    return mat4_multiply(
        rotated, mat4_translate(translation.x, translation.y, translation.z)
    )


def vec2_normalize(v: Vec2f) -> Vec2f:
    """Unit vector in the direction of v, or the zero vector if v is zero."""
    length = math.sqrt(v.x * v.x + v.y * v.y)
    if length > _FLT_TRUE_MIN:
        return Vec2f(v.x / length, v.y / length)
    return Vec2f(0.0, 0.0)


def vec2_divide(a: Vec2f, b: Vec2f) -> Vec2f:
    return Vec2f(a.x / b.x, a.y / b.y)


def vec2_subtract(a: Vec2f, b: Vec2f) -> Vec2f:
    return Vec2f(a.x - b.x, a.y - b.y)


def vec2_multiply(a: Vec2f, b: Vec2f) -> Vec2f:
    return Vec2f(a.x * b.x, a.y * b.y)


def vec2_add(a: Vec2f, b: Vec2f) -> Vec2f:
    return Vec2f(a.x + b.x, a.y + b.y)


def vec3_normalize(v: Vec3f) -> Vec3f:
    """Unit vector in the direction of v; raises ValueError for a zero vector."""
    length = math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)
    if not length > _FLT_TRUE_MIN:
        raise ValueError("cannot normalise a zero-length vector")
    return Vec3f(v.x / length, v.y / length, v.z / length)


def vec3_subtract(a: Vec3f, b: Vec3f) -> Vec3f:
    return Vec3f(a.x - b.x, a.y - b.y, a.z - b.z)


def vec3_add(a: Vec3f, b: Vec3f) -> Vec3f:
    return Vec3f(a.x + b.x, a.y + b.y, a.z + b.z)


def vec3_dot(a: Vec3f, b: Vec3f) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def vec3_cross(a: Vec3f, b: Vec3f) -> Vec3f:
    return Vec3f(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def vec3_lerp(a: Vec3f, b: Vec3f, t: float) -> Vec3f:
    return Vec3f(
        a.x * (1.0 - t) + b.x * t,
        a.y * (1.0 - t) + b.y * t,
        a.z * (1.0 - t) + b.z * t,
    )


def vec4_normalize(v: Vec4f) -> Vec4f:
    """Unit vector in the direction of v; raises ValueError for a zero vector."""
    length = math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z + v.w * v.w)
    if not length > _FLT_TRUE_MIN:
        raise ValueError("cannot normalise a zero-length vector")
    return Vec4f(v.x / length, v.y / length, v.z / length, v.w / length)


def vec4_lerp(a: Vec4f, b: Vec4f, t: float) -> Vec4f:
    return Vec4f(
        a.x * (1.0 - t) + b.x * t,
        a.y * (1.0 - t) + b.y * t,
        a.z * (1.0 - t) + b.z * t,
        a.w * (1.0 - t) + b.w * t,
    )


def _quat_dot(a: Quat, b: Quat) -> float:
    return a.w * b.w + a.x * b.x + a.y * b.y + a.z * b.z


def quat_to_rot_mat4(quat: Quat) -> Mat4f:
    w, x, y, z = quat.w, quat.x, quat.y, quat.z
    return _mat(
        (
            (1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y + w * z), 2.0 * (x * z - w * y), 0.0),
            (2.0 * (x * y - w * z), 1.0 - 2.0 * (z * z + x * x), 2.0 * (y * z + w * x), 0.0),
            (2.0 * (x * z + w * y), 2.0 * (y * z - w * x), 1.0 - 2.0 * (x * x + y * y), 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def quat_normalize(quat: Quat) -> Quat:
    """Unit quaternion, or the zero quaternion if the input has no length."""
    length = math.sqrt(
        quat.x * quat.x + quat.y * quat.y + quat.z * quat.z + quat.w * quat.w
    )
    if length < _FLT_TRUE_MIN:
        return Quat()
    return Quat(quat.w / length, quat.x / length, quat.y / length, quat.z / length)


def quat_lerp(a: Quat, b: Quat, t: float) -> Quat:
    return Quat(
        a.w * (1.0 - t) + b.w * t,
        a.x * (1.0 - t) + b.x * t,
        a.y * (1.0 - t) + b.y * t,
        a.z * (1.0 - t) + b.z * t,
    )


def quat_slerp(a: Quat, b: Quat, t: float) -> Quat:
    """Spherical interpolation, taking the short way round."""
    z = b
    cos_theta = _quat_dot(a, b)
    if cos_theta < 0:
        z = Quat(-b.w, -b.x, -b.y, -b.z)
        cos_theta = -cos_theta

    if cos_theta > _ONE_MINUS_ULP:
        return quat_lerp(a, z, t)

    angle = math.acos(cos_theta)
    s_a = math.sin((1.0 - t) * angle)
    s_b = math.sin(t * angle) / math.sin(angle)
    return Quat(
        a.w * s_a + z.w * s_b,
        a.x * s_a + z.x * s_b,
        a.y * s_a + z.y * s_b,
        a.z * s_a + z.z * s_b,
    )