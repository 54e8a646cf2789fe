"""
Geometry utilities for the pendulum tracer.

This module provides:
- Joint positions of the two-arm rig from its angles and arm lengths
- Distance helper for the emission test
- The two drawable primitives (Segment, Dot)
- Outline polygons for primitives, clipped to the canvas
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from pendulum_trace import config

Point = Tuple[float, float]
Polygon = Tuple[Point, ...]

ORIGIN: Point = (0.0, 0.0)


@dataclass(frozen=True)
class Segment:
    """Straight stroke between two consecutive emission points."""

    start: Point
    end: Point
    width: float


@dataclass(frozen=True)
class Dot:
    """Small disk at an emission point, ``diameter`` wide."""

    center: Point
    diameter: float


Primitive = Union[Segment, Dot]


def joint_positions(rotation1: float, rotation2: float, length1: float, length2: float) -> Tuple[Point, Point]:
    """Return ((x1, y1), (x2, y2)) for the rig pivoted at the origin.

    Angle 0 points along +y (downwards on screen). Each arm's angle is absolute,
    not relative to the previous arm.
    """
    x1 = math.cos(rotation1 + math.pi / 2) * length1
    y1 = math.sin(rotation1 + math.pi / 2) * length1
    x2 = x1 + math.cos(rotation2 + math.pi / 2) * length2
    y2 = y1 + math.sin(rotation2 + math.pi / 2) * length2
    return (x1, y1), (x2, y2)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def segment_outline(start: Point, end: Point, width: float) -> Polygon:
    """Rectangle covering a butt-capped stroke of ``width`` from start to end."""
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    length = math.hypot(dx, dy)
    if length <= 0.0:
        return (start, start, end, end)
    half = 0.5 * width
    nx = -dy / length * half
    ny = dx / length * half
    return (
        (start[0] + nx, start[1] + ny),
        (end[0] + nx, end[1] + ny),
        (end[0] - nx, end[1] - ny),
        (start[0] - nx, start[1] - ny),
    )


def _circle(cx: float, cy: float, radius: float, segments: int) -> List[Point]:
    return [
        (cx + radius * math.cos(2.0 * math.pi * i / segments), cy + radius * math.sin(2.0 * math.pi * i / segments))
        for i in range(segments)
    ]


def dot_outline(center: Point, diameter: float, segments: int = config.DOT_OUTLINE_SEGMENTS) -> Polygon:
    """Ring left by stroking a circle of ``diameter`` with a ``DOT_STROKE`` pen.

    The ring is a single keyhole polygon: the outer circle, then the inner
    circle walked the other way. A dot no wider than the pen has no hole and
    comes back as a plain ``segments``-gon.
    """
    cx, cy = center
    outer = 0.5 * diameter + 0.5 * config.DOT_STROKE
    inner = 0.5 * diameter - 0.5 * config.DOT_STROKE
    ring = _circle(cx, cy, outer, segments)
    if inner <= 0.0:
        return tuple(ring)
    hole = _circle(cx, cy, inner, segments)
    return tuple(ring + [ring[0], hole[0]] + hole[:0:-1] + [hole[0]])


def _clip_edge(polygon: List[Point], inside, cross) -> List[Point]:
    clipped: List[Point] = []
    if not polygon:
        return clipped
    prev = polygon[-1]
    for point in polygon:
        if inside(point):
            if not inside(prev):
                clipped.append(cross(prev, point))
            clipped.append(point)
        elif inside(prev):
            clipped.append(cross(prev, point))
        prev = point
    return clipped


def _at_x(x: float):
    def cross(a: Point, b: Point) -> Point:
        t = (x - a[0]) / (b[0] - a[0])
        return (x, a[1] + t * (b[1] - a[1]))
    return cross


def _at_y(y: float):
    def cross(a: Point, b: Point) -> Point:
        t = (y - a[1]) / (b[1] - a[1])
        return (a[0] + t * (b[0] - a[0]), y)
    return cross


def clip_to_canvas(polygon: Polygon, canvas_size: Tuple[float, float]) -> Polygon:
    """Clip ``polygon`` to the canvas rectangle centred on the pivot.

    Sutherland-Hodgman against the four canvas edges. Parts inside the canvas
    keep their exact shape; a polygon wholly outside comes back empty.
    """
    hw = 0.5 * float(canvas_size[0])
    hh = 0.5 * float(canvas_size[1])
    points = list(polygon)
    points = _clip_edge(points, lambda p: p[0] >= -hw, _at_x(-hw))
    points = _clip_edge(points, lambda p: p[0] <= hw, _at_x(hw))
    points = _clip_edge(points, lambda p: p[1] >= -hh, _at_y(-hh))
    points = _clip_edge(points, lambda p: p[1] <= hh, _at_y(hh))
    return tuple(points)


def primitive_outline(primitive: Primitive, canvas_size: Tuple[float, float]) -> Polygon:
    if isinstance(primitive, Segment):
        polygon = segment_outline(primitive.start, primitive.end, primitive.width)
    elif isinstance(primitive, Dot):
        polygon = dot_outline(primitive.center, primitive.diameter)
    else:
        raise TypeError(f"unsupported primitive: {type(primitive).__name__}")
    return clip_to_canvas(polygon, canvas_size)
