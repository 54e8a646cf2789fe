"""Settings, defaults and caller-side bounds for the pendulum tracer."""

from __future__ import annotations

import math
import os
from typing import Dict, Optional, Tuple

# Simulation constants
STEP_DEGREES = 0.2  # angular increment of rotation1 per tick
STEP = math.radians(STEP_DEGREES)
EMIT_DISTANCE = 5.0  # end point travel needed before a primitive is emitted
FLUSH_THRESHOLD = 1000  # primitives per active path before it is frozen

# Outline tessellation
DOT_OUTLINE_SEGMENTS = 12
DOT_STROKE = 1.0

# Slider bounds, enforced by callers (the core assumes validated input)
MIN_ARM_LENGTH = 25.0
BOUNDS: Dict[str, Tuple[float, float]] = {
    "speed": (1.0, 100.0),
    "rotation_coefficient": (0.0, 7.0),
    "stroke_width": (0.5, 5.0),
}

DEFAULTS = {
    "speed": 2.0,
    "rotation_coefficient": math.pi,
    "arm_length1": 90.0,
    "arm_length2": 90.0,
    "trace_style": "line",
    "stroke_width": 1.0,
    "running": False,
}

# Renderer
CANVAS_SIZE = (400.0, 400.0)
FRAME_INTERVAL = 1.0 / 30.0  # s
JOINT_MARKER_SIZE = 10.0

LOG_LEVEL = os.environ.get("PENDULUM_TRACE_LOG_LEVEL", "WARNING").upper()


def max_arm_length(canvas_size: Tuple[float, float]) -> float:
    """Upper slider bound for an arm: a quarter of the canvas width."""
    width = float(canvas_size[0])
    return max(MIN_ARM_LENGTH, width / 4.0)


def clamp(name: str, value: float, canvas_size: Optional[Tuple[float, float]] = None) -> float:
    """Clamp ``value`` into the bounds of setting ``name``.

    Arm lengths need ``canvas_size`` for their upper bound; speed is rounded to
    whole ticks.
    """
    if name in ("arm_length1", "arm_length2"):
        if canvas_size is None:
            raise ValueError("canvas_size is required to clamp an arm length")
        lo, hi = MIN_ARM_LENGTH, max_arm_length(canvas_size)
    elif name in BOUNDS:
        lo, hi = BOUNDS[name]
    else:
        raise KeyError(name)
    v = min(hi, max(lo, float(value)))
    if name == "speed":
        v = float(round(v))
    return v
