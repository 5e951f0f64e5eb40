"""Closest-point queries and collision tests between simple shapes."""

from __future__ import annotations

import math

from .linalg import add, clamp, cross, distance, dot, length, normalize, subtract
from .structs import AABB, Plane, Segment, Sphere, Triangle, Vector3

_PARALLEL_EPSILON = 1e-6


def closest_point(point: Vector3, segment: Segment) -> Vector3:
    """Point on the segment nearest to point; segment.diff is its end point here."""
    d = subtract(segment.diff, segment.origin)
    v = subtract(point, segment.origin)
    squared = dot(d, d)
    if squared == 0.0:
        return segment.origin
    t = clamp(dot(v, d) / squared)
    return Vector3(
        segment.origin.x + d.x * t,
        segment.origin.y + d.y * t,
        segment.origin.z + d.z * t,
    )


def closest_point_aabb_sphere(sphere: Sphere, aabb: AABB) -> Vector3:
    """Point of the box nearest to the sphere's centre."""
    return Vector3(
        clamp(sphere.center.x, aabb.min.x, aabb.max.x),
        clamp(sphere.center.y, aabb.min.y, aabb.max.y),
        clamp(sphere.center.z, aabb.min.z, aabb.max.z),
    )


def plane_from_points(p1: Vector3, p2: Vector3, p3: Vector3) -> Plane:
    """Plane through three points; the normal is not normalised."""
    normal = cross(subtract(p2, p1), subtract(p3, p1))
    return Plane(normal, dot(normal, p1))


def is_point_inside_aabb(point: Vector3, aabb: AABB) -> bool:
    return (
        aabb.min.x <= point.x <= aabb.max.x
        and aabb.min.y <= point.y <= aabb.max.y
        and aabb.min.z <= point.z <= aabb.max.z
    )


def _sphere_sphere(s1: Sphere, s2: Sphere) -> bool:
    return length(subtract(s2.center, s1.center)) <= s1.radius + s2.radius


def _sphere_plane(sphere: Sphere, plane: Plane) -> bool:
    signed = dot(sphere.center, normalize(plane.normal)) - plane.distance
    return abs(signed) < sphere.radius


def _segment_plane(segment: Segment, plane: Plane) -> bool:
    diff = subtract(segment.diff, segment.origin)
    denominator = dot(plane.normal, diff)
    if denominator == 0.0:
        return False
    t = (plane.distance - dot(segment.origin, plane.normal)) / denominator
    return 0.0 <= t <= 1.0


def _triangle_segment(triangle: Triangle, segment: Segment) -> bool:
    diff = subtract(segment.diff, segment.origin)
    v0, v1, v2 = triangle.vertices
    plane = plane_from_points(v0, v1, v2)
    denominator = dot(plane.normal, diff)
    if denominator == 0.0:
        return False
    t = (plane.distance - dot(segment.origin, plane.normal)) / denominator
    hit = Vector3(
        segment.origin.x + t * diff.x,
        segment.origin.y + t * diff.y,
        segment.origin.z + t * diff.z,
    )
    edges = (
        (subtract(v0, v1), subtract(v1, hit)),
        (subtract(v1, v2), subtract(v2, hit)),
        (subtract(v2, v0), subtract(v0, hit)),
    )
    inside = all(dot(cross(edge, to_hit), plane.normal) >= 0.0 for edge, to_hit in edges)
    return inside and 0.0 <= t <= 1.0


def _aabb_aabb(a: AABB, b: AABB) -> bool:
    return (
        a.min.x <= b.max.x
        and a.max.x >= b.min.x
        and a.min.y <= b.max.y
        and a.max.y >= b.min.y
        and a.min.z <= b.max.z
        and a.max.z >= b.min.z
    )


def _aabb_sphere(aabb: AABB, sphere: Sphere) -> bool:
    nearest = closest_point_aabb_sphere(sphere, aabb)
    return distance(sphere.center, nearest) <= sphere.radius


def _aabb_segment(aabb: AABB, segment: Segment) -> bool:
    if is_point_inside_aabb(segment.origin, aabb) or is_point_inside_aabb(segment.diff, aabb):
        return True

    diff = subtract(segment.diff, segment.origin)
    near_values = []
    far_values = []
    for axis in ("x", "y", "z"):
        direction = getattr(diff, axis)
        start = getattr(segment.origin, axis)
        low = getattr(aabb.min, axis)
        high = getattr(aabb.max, axis)
        if abs(direction) < _PARALLEL_EPSILON:
            if start < low or start > high:
                return False
            if direction == 0.0:
                # Parallel inside the slab: this axis places no limit on t.
                near_values.append(-math.inf)
                far_values.append(math.inf)
                continue
        t_low = (low - start) / direction
        t_high = (high - start) / direction
        near_values.append(min(t_low, t_high))
        far_values.append(max(t_low, t_high))

    return max(near_values) <= min(far_values)


def _sphere_segment(sphere: Sphere, segment: Segment) -> bool:
    """Here segment.diff is the direction from the origin to the end point."""
    m = subtract(segment.origin, sphere.center)
    d = segment.diff
    a = dot(d, d)
    if a == 0.0:
        return False
    b = dot(m, d)
    c = dot(m, m) - sphere.radius * sphere.radius
    discriminant = b * b - a * c
    if discriminant < 0.0:
        return False
    root = math.sqrt(discriminant)
    t1 = (-b - root) / a
    t2 = (-b + root) / a
    return 0.0 <= t1 <= 1.0 or 0.0 <= t2 <= 1.0


_TESTS = {
    (AABB, Vector3): lambda aabb, point: is_point_inside_aabb(point, aabb),
    (Sphere, Sphere): _sphere_sphere,
    (Sphere, Plane): _sphere_plane,
    (Segment, Plane): _segment_plane,
    (Triangle, Segment): _triangle_segment,
    (AABB, AABB): _aabb_aabb,
    (AABB, Sphere): _aabb_sphere,
    (AABB, Segment): _aabb_segment,
    (Sphere, Segment): _sphere_segment,
}


def is_collision(a, b) -> bool:
    """Collision test for any supported pair of shapes, in either order."""
    test = _TESTS.get((type(a), type(b)))
    if test is not None:
        return test(a, b)
    test = _TESTS.get((type(b), type(a)))
    if test is not None:
        return test(b, a)
    raise TypeError(f"no collision test for {type(a).__name__} and {type(b).__name__}")