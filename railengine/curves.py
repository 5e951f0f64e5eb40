"""Catmull-Rom splines, arc-length tables and curvature-driven sampling."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .linalg import add, clamp, distance, dot, multiply, normalize, subtract
from .structs import Vector3

_CURVATURE_STEP = 0.01
_MIN_SAMPLE_RATE = 0.01
_MAX_SAMPLE_RATE = 0.2


def catmull_rom(p0: Vector3, p1: Vector3, p2: Vector3, p3: Vector3, t: float) -> Vector3:
    """Point at t in [0, 1] on the segment from p1 to p2."""
    t2 = t * t
    t3 = t2 * t

    def axis(a0: float, a1: float, a2: float, a3: float) -> float:
        e3 = -a0 + 3.0 * a1 - 3.0 * a2 + a3
        e2 = 2.0 * a0 - 5.0 * a1 + 4.0 * a2 - a3
        e1 = a2 - a0
        e0 = 2.0 * a1
        return (e3 * t3 + e2 * t2 + e1 * t + e0) * 0.5

    return Vector3(*(axis(*components) for components in zip(p0, p1, p2, p3)))


def catmull_rom_path(points: Sequence[Vector3], t: float) -> Vector3:
    """Point at t in [0, 1] along an open spline through at least four points.

    The end points are repeated to supply the missing outer neighbours.
    """
    points = list(points)
    if len(points) < 4:
        raise ValueError("at least four control points are required")

    division = len(points) - 1
    area_width = 1.0 / division
    local_t = clamp(math.fmod(t, area_width) * division, 0.0, 1.0)

    index = max(int(t / area_width), 0)
    if index >= division:
        index = division - 1

    index1 = index
    index0 = index1 if index == 0 else index - 1
    index2 = index + 1
    index3 = index + 2
    if index3 >= len(points):
        index3 = index2

    return catmull_rom(points[index0], points[index1], points[index2], points[index3], local_t)


def catmull_rom_loop(control_points: Sequence[Vector3], t: float) -> Vector3:
    """Point on a closed spline; the integer part of t selects the segment."""
    count = len(control_points)
    if count == 0:
        raise ValueError("at least one control point is required")

    i1 = int(t)
    i2 = (i1 + 1) % count
    i3 = (i2 + 1) % count
    i0 = (i1 - 1 + count) % count
    i1 %= count

    t -= int(t)
    t2 = t * t
    t3 = t2 * t

    return add(
        add(
            multiply(control_points[i0], -0.5 * t3 + t2 - 0.5 * t),
            multiply(control_points[i1], 1.5 * t3 - 2.5 * t2 + 1.0),
        ),
        add(
            multiply(control_points[i2], -1.5 * t3 + 2.0 * t2 + 0.5 * t),
            multiply(control_points[i3], 0.5 * t3 - 0.5 * t2),
        ),
    )


def _sample_positions(control_points: Sequence[Vector3], num_samples: int):
    """Yield (t, step length) for each sample after the start of the path."""
    previous = catmull_rom_path(control_points, 0.0)
    for i in range(1, num_samples + 1):
        t = i / num_samples
        current = catmull_rom_path(control_points, t)
        yield t, distance(previous, current)
        previous = current


def calculate_arc_length(control_points: Sequence[Vector3], num_samples: int) -> float:
    """Approximate length of the open spline using num_samples chords."""
    return sum(step for _, step in _sample_positions(control_points, num_samples))


def find_t_by_arc_length(
    control_points: Sequence[Vector3], target_length: float, num_samples: int
) -> float:
    """First sampled t whose accumulated length reaches target_length, else 1.0."""
    travelled = 0.0
    for t, step in _sample_positions(control_points, num_samples):
        travelled += step
        if travelled >= target_length:
            return t
    return 1.0


def calculate_arc_lengths(
    control_points: Sequence[Vector3], num_samples: int
) -> list[tuple[float, float]]:
    """Table of (t, accumulated length), starting with (0.0, 0.0)."""
    table = [(0.0, 0.0)]
    total = 0.0
    for t, step in _sample_positions(control_points, num_samples):
        total += step
        table.append((t, total))
    return table


def get_t_from_arc_length(
    arc_lengths: Sequence[tuple[float, float]], target_length: float
) -> float:
    """Interpolate t for target_length from a table of (t, length); 1.0 past the end."""
    for (t1, l1), (t2, l2) in zip(arc_lengths, arc_lengths[1:]):
        if l2 >= target_length:
            if l2 == l1:
                return t1
            return t1 + (target_length - l1) / (l2 - l1) * (t2 - t1)
    return 1.0


def curvature(p0: Vector3, p1: Vector3, p2: Vector3) -> float:
    """Turning angle at p1 divided by the length from p0 to p1."""
    cosine = dot(normalize(subtract(p1, p0)), normalize(subtract(p2, p1)))
    angle = math.acos(max(-1.0, min(1.0, cosine)))
    span = distance(p0, p1)
    if span == 0.0:
        return math.inf
    return angle / span


def adaptive_sampling(control_points: Sequence[Vector3], base_samples: int) -> list[float]:
    """Accumulated sample positions whose spacing shrinks where the loop bends."""
    samples = [0.0]
    for i in range(1, base_samples):
        t = i / base_samples
        p0 = catmull_rom_loop(control_points, max(t - _CURVATURE_STEP, 0.0))
        p1 = catmull_rom_loop(control_points, t)
        p2 = catmull_rom_loop(control_points, min(t + _CURVATURE_STEP, 1.0))
        bend = curvature(p0, p1, p2)
        rate = clamp(1.0 / (bend + 0.1), _MIN_SAMPLE_RATE, _MAX_SAMPLE_RATE)
        samples.append(samples[-1] + rate)
    return samples