"""Vector and matrix arithmetic for row-vector, row-major 4x4 transforms."""

from __future__ import annotations

import math

from .structs import Matrix4x4, Vector2, Vector3

_Scalar = (int, float)


def _both(a, b, kind) -> bool:
    return isinstance(a, kind) and isinstance(b, kind)


def _elementwise(m1: Matrix4x4, m2: Matrix4x4, op) -> Matrix4x4:
    return Matrix4x4(
        [[op(x, y) for x, y in zip(row1, row2)] for row1, row2 in zip(m1.m, m2.m)]
    )


def add(a, b):
    """Add two Vector3s, two Vector2s or two matrices."""
    if _both(a, b, Vector3):
        return Vector3(a.x + b.x, a.y + b.y, a.z + b.z)
    if _both(a, b, Vector2):
        return Vector2(a.x + b.x, a.y + b.y)
    if _both(a, b, Matrix4x4):
        return _elementwise(a, b, lambda x, y: x + y)
    raise TypeError(f"cannot add {type(a).__name__} and {type(b).__name__}")


def subtract(a, b):
    """Subtract two Vector3s or two matrices."""
    if _both(a, b, Vector3):
        return Vector3(a.x - b.x, a.y - b.y, a.z - b.z)
    if _both(a, b, Matrix4x4):
        return _elementwise(a, b, lambda x, y: x - y)
    raise TypeError(f"cannot subtract {type(b).__name__} from {type(a).__name__}")


def multiply(a, b):
    """Matrix product, component-wise Vector3 product, or scalar scaling."""
    if _both(a, b, Matrix4x4):
        columns = list(zip(*b.m))
        return Matrix4x4(
            [[sum(x * y for x, y in zip(row, col)) for col in columns] for row in a.m]
        )
    if _both(a, b, Vector3):
        return Vector3(a.x * b.x, a.y * b.y, a.z * b.z)
    if isinstance(a, _Scalar) and isinstance(b, Vector3):
        return Vector3(b.x * a, b.y * a, b.z * a)
    if isinstance(a, Vector3) and isinstance(b, _Scalar):
        return Vector3(a.x * b, a.y * b, a.z * b)
    raise TypeError(f"cannot multiply {type(a).__name__} and {type(b).__name__}")


def dot(v1: Vector3, v2: Vector3) -> float:
    return v1.x * v2.x + v1.y * v2.y + v1.z * v2.z


def length(v) -> float:
    """Length of a Vector3, or magnitude of a scalar."""
    if isinstance(v, Vector3):
        return math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)
    if isinstance(v, _Scalar):
        return math.sqrt(v * v)
    raise TypeError(f"cannot take the length of {type(v).__name__}")


def clamp(t: float, minimum: float = 0.0, maximum: float = 1.0) -> float:
    """Clamp t into [minimum, maximum]; the lower bound wins if they cross."""
    if maximum <= t:
        t = maximum
    if minimum >= t:
        t = minimum
    return t


def distance(point1: Vector3, point2: Vector3) -> float:
    return math.sqrt(
        (point1.x - point2.x) ** 2 + (point1.y - point2.y) ** 2 + (point1.z - point2.z) ** 2
    )


def normalize(v: Vector3) -> Vector3:
    """Unit vector in the direction of v; the zero vector stays zero."""
    size = length(v)
    if size == 0.0:
        return Vector3()
    return Vector3(v.x / size, v.y / size, v.z / size)


def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
    """Blend weighted by t towards a and by (1 - t) towards b."""
    return Vector3(
        t * a.x + (1.0 - t) * b.x,
        t * a.y + (1.0 - t) * b.y,
        t * a.z + (1.0 - t) * b.z,
    )


def bezier(p0: Vector3, p1: Vector3, p2: Vector3, t: float) -> Vector3:
    """Quadratic Bezier point built from nested lerps."""
    return lerp(lerp(p0, p1, t), lerp(p1, p2, t), t)


def cross(v1: Vector3, v2: Vector3) -> Vector3:
    return Vector3(
        v1.y * v2.z - v1.z * v2.y,
        v1.z * v2.x - v1.x * v2.z,
        v1.x * v2.y - v1.y * v2.x,
    )


def project(v1: Vector3, v2: Vector3) -> Vector3:
    """Projection of v1 onto v2."""
    factor = dot(v1, v2) / dot(v2, v2)
    return Vector3(factor * v2.x, factor * v2.y, factor * v2.z)


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    twice = 2.0 * dot(incident, normal)
    return Vector3(
        incident.x - normal.x * twice,
        incident.y - normal.y * twice,
        incident.z - normal.z * twice,
    )


def perpendicular(vector: Vector3) -> Vector3:
    if vector.x != 0.0 or vector.y != 0.0:
        return Vector3(-vector.y, vector.x, 0.0)
    return Vector3(0.0, -vector.z, vector.y)


def make_identity4x4() -> Matrix4x4:
    return Matrix4x4.identity()


def make_translate_matrix(translate: Vector3) -> Matrix4x4:
    return Matrix4x4(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [translate.x, translate.y, translate.z, 1.0],
        ]
    )


def make_scale_matrix(scale: Vector3) -> Matrix4x4:
    return Matrix4x4(
        [
            [scale.x, 0.0, 0.0, 0.0],
            [0.0, scale.y, 0.0, 0.0],
            [0.0, 0.0, scale.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def make_rotate_x_matrix(angle: float) -> Matrix4x4:
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4x4(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, s, 0.0],
            [0.0, -s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def make_rotate_y_matrix(angle: float) -> Matrix4x4:
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4x4(
        [
            [c, 0.0, -s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def make_rotate_z_matrix(angle: float) -> Matrix4x4:
    c, s = math.cos(angle), math.sin(angle)
    return Matrix4x4(
        [
            [c, s, 0.0, 0.0],
            [-s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def _det3(rows: list[list[float]]) -> float:
    (a, b, c), (d, e, f), (g, h, i) = rows
    return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


def _minor(rows: list[list[float]], skip_row: int, skip_col: int) -> list[list[float]]:
    return [
        [value for col, value in enumerate(row) if col != skip_col]
        for r, row in enumerate(rows)
        if r != skip_row
    ]


def inverse(m: Matrix4x4) -> Matrix4x4:
    """Inverse via the adjugate; raises ValueError for a singular matrix."""
    cofactors = [
        [(-1) ** (r + c) * _det3(_minor(m.m, r, c)) for c in range(4)] for r in range(4)
    ]
    det = sum(value * cof for value, cof in zip(m.m[0], cofactors[0]))
    if det == 0.0:
        raise ValueError("matrix is singular")
    scale = 1.0 / det
    return Matrix4x4([[cof * scale for cof in column] for column in zip(*cofactors)])


def transpose(m: Matrix4x4) -> Matrix4x4:
    return Matrix4x4([list(column) for column in zip(*m.m)])


def make_affine_matrix(scale: Vector3, rotate: Vector3, translate: Vector3) -> Matrix4x4:
    """Scale, then rotate X*Y*Z, then translate."""
    rotation = multiply(
        make_rotate_x_matrix(rotate.x),
        multiply(make_rotate_y_matrix(rotate.y), make_rotate_z_matrix(rotate.z)),
    )
    rows = [
        [factor * value for value in row[:3]] + [0.0]
        for factor, row in zip((scale.x, scale.y, scale.z), rotation.m)
    ]
    rows.append([translate.x, translate.y, translate.z, 1.0])
    return Matrix4x4(rows)


def make_orthographic_matrix(
    left: float, top: float, right: float, bottom: float, near_clip: float, far_clip: float
) -> Matrix4x4:
    return Matrix4x4(
        [
            [2.0 / (right - left), 0.0, 0.0, 0.0],
            [0.0, 2.0 / (top - bottom), 0.0, 0.0],
            [0.0, 0.0, 1.0 / (far_clip - near_clip), 0.0],
            [
                (left + right) / (left - right),
                (top + bottom) / (bottom - top),
                near_clip / (near_clip - far_clip),
                1.0,
            ],
        ]
    )


def make_perspective_fov_matrix(
    fov_y: float, aspect_ratio: float, near_clip: float, far_clip: float
) -> Matrix4x4:
    cot = 1.0 / math.tan(fov_y / 2.0)
    depth = far_clip - near_clip
    return Matrix4x4(
        [
            [cot / aspect_ratio, 0.0, 0.0, 0.0],
            [0.0, cot, 0.0, 0.0],
            [0.0, 0.0, far_clip / depth, 1.0],
            [0.0, 0.0, (-near_clip * far_clip) / depth, 0.0],
        ]
    )


def make_viewport_matrix(
    left: float, top: float, width: float, height: float, min_depth: float, max_depth: float
) -> Matrix4x4:
    return Matrix4x4(
        [
            [width / 2.0, 0.0, 0.0, 0.0],
            [0.0, -height / 2.0, 0.0, 0.0],
            [0.0, 0.0, max_depth - min_depth, 0.0],
            [left + width / 2.0, top + height / 2.0, min_depth, 1.0],
        ]
    )


def transform(vector: Vector3, matrix: Matrix4x4) -> Vector3:
    """Transform a point and divide by w; raises ValueError when w is zero."""
    row = (vector.x, vector.y, vector.z, 1.0)
    x, y, z, w = (sum(a * b for a, b in zip(row, column)) for column in zip(*matrix.m))
    if w == 0.0:
        raise ValueError("homogeneous w component is zero")
    return Vector3(x / w, y / w, z / w)


def transform_normal(v: Vector3, m: Matrix4x4) -> Vector3:
    """Transform a direction, ignoring translation."""
    return Vector3(
        v.x * m.m[0][0] + v.y * m.m[1][0] + v.z * m.m[2][0],
        v.x * m.m[0][1] + v.y * m.m[1][1] + v.z * m.m[2][1],
        v.x * m.m[0][2] + v.y * m.m[1][2] + v.z * m.m[2][2],
    )