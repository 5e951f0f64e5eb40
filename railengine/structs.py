"""Plain value types shared by the math, geometry and particle modules."""

from __future__ import annotations

from dataclasses import dataclass, field


def _square(size: int, diagonal: float) -> list[list[float]]:
    return [[diagonal if row == col else 0.0 for col in range(size)] for row in range(size)]


def _checked_square(rows, size: int) -> list[list[float]]:
    rows = [list(row) for row in rows]
    if len(rows) != size or any(len(row) != size for row in rows):
        raise ValueError(f"expected a {size}x{size} matrix")
    return [[float(value) for value in row] for row in rows]


@dataclass
class Vector2:
    """Two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass
class Vector3:
    """Three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z


@dataclass
class Vector4:
    """Four-component vector, also used for RGBA colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w


@dataclass
class Matrix4x4:
    """Row-major 4x4 matrix; vectors are treated as rows."""

    m: list[list[float]] = field(default_factory=lambda: _square(4, 0.0))

    def __post_init__(self) -> None:
        self.m = _checked_square(self.m, 4)

    @classmethod
    def identity(cls) -> Matrix4x4:
        return cls(_square(4, 1.0))

    @classmethod
    def zero(cls) -> Matrix4x4:
        return cls()


@dataclass
class Matrix3x3:
    """Row-major 3x3 matrix."""

    m: list[list[float]] = field(default_factory=lambda: _square(3, 0.0))

    def __post_init__(self) -> None:
        self.m = _checked_square(self.m, 3)


@dataclass
class Transform:
    """Scale, Euler rotation and translation of an object."""

    scale: Vector3 = field(default_factory=Vector3)
    rotate: Vector3 = field(default_factory=Vector3)
    translate: Vector3 = field(default_factory=Vector3)


@dataclass
class AABB:
    """Axis-aligned bounding box."""

    min: Vector3 = field(default_factory=Vector3)
    max: Vector3 = field(default_factory=Vector3)


@dataclass
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0


@dataclass
class Sphere:
    center: Vector3 = field(default_factory=Vector3)
    radius: float = 0.0


@dataclass
class Plane:
    """Plane given by its normal and its distance from the origin."""

    normal: Vector3 = field(default_factory=Vector3)
    distance: float = 0.0


@dataclass
class Line:
    origin: Vector3 = field(default_factory=Vector3)
    diff: Vector3 = field(default_factory=Vector3)


@dataclass
class Ray:
    origin: Vector3 = field(default_factory=Vector3)
    diff: Vector3 = field(default_factory=Vector3)


@dataclass
class Segment:
    origin: Vector3 = field(default_factory=Vector3)
    diff: Vector3 = field(default_factory=Vector3)


@dataclass
class Triangle:
    """Triangle given by exactly three vertices."""

    vertices: tuple[Vector3, Vector3, Vector3] = field(
        default_factory=lambda: (Vector3(), Vector3(), Vector3())
    )

    def __post_init__(self) -> None:
        self.vertices = tuple(self.vertices)
        if len(self.vertices) != 3:
            raise ValueError("a triangle needs exactly three vertices")


@dataclass
class Spring:
    anchor: Vector3 = field(default_factory=Vector3)
    natural_length: float = 0.0
    stiffness: float = 0.0
    damping_coefficient: float = 0.0


@dataclass
class Ball:
    position: Vector3 = field(default_factory=Vector3)
    velocity: Vector3 = field(default_factory=Vector3)
    acceleration: Vector3 = field(default_factory=Vector3)
    mass: float = 0.0
    radius: float = 0.0
    color: int = 0


@dataclass
class Pendulum:
    anchor: Vector3 = field(default_factory=Vector3)
    length: float = 0.0
    angle: float = 0.0
    angular_velocity: float = 0.0
    angular_acceleration: float = 0.0


@dataclass
class ConicalPendulum:
    anchor: Vector3 = field(default_factory=Vector3)
    length: float = 0.0
    half_apex_angle: float = 0.0
    angle: float = 0.0
    angular_velocity: float = 0.0


@dataclass
class Capsule:
    segment: Segment = field(default_factory=Segment)
    radius: float = 0.0