from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from pendulum_trace import config
from pendulum_trace.geometry import ORIGIN, Dot, Point, Primitive, Segment, distance, joint_positions
from pendulum_trace.path_accumulator import IdentifiablePath, Outline, PathAccumulator

logger = logging.getLogger(__name__)


class TraceStyle(str, Enum):
    DOTTED = "dotted"
    LINE = "line"


@dataclass(frozen=True)
class RigGeometry:
    pivot: Point
    joint1: Point
    joint2: Point
    rotation1: float
    rotation2: float
    arm_length1: float
    arm_length2: float


@dataclass(frozen=True)
class FrameGeometry:
    """Everything a renderer needs for one frame."""

    rig: RigGeometry
    active_outline: Outline
    pending_flush: Optional[IdentifiablePath]
    history: Tuple[Tuple[str, Outline], ...]


class PendulumState(object):
    """Angular state, configuration and trace of the two-arm pendulum.

    The motion is kinematic: every tick turns the first arm by a fixed step and
    the second arm by ``rotation_coefficient`` times that step. Whenever the end
    point has travelled more than ``config.EMIT_DISTANCE`` since the last
    emission, a Segment (line style) or Dot (dotted style) is handed to the
    path accumulator.

    Bounds on the configuration (see ``config.BOUNDS``) are the caller's
    responsibility; nothing here validates them.
    """

    def __init__(
        self,
        arm_length1: float = config.DEFAULTS["arm_length1"],
        arm_length2: float = config.DEFAULTS["arm_length2"],
        speed: float = config.DEFAULTS["speed"],
        rotation_coefficient: float = config.DEFAULTS["rotation_coefficient"],
        trace_style: TraceStyle = TraceStyle(config.DEFAULTS["trace_style"]),
        stroke_width: float = config.DEFAULTS["stroke_width"],
        accumulator: Optional[PathAccumulator] = None,
    ):
        # settings read on the next advance
        self.speed = float(speed)
        self.rotation_coefficient = float(rotation_coefficient)
        self.trace_style = TraceStyle(trace_style)
        self.stroke_width = float(stroke_width)

        self.rotation1 = 0.0
        self.rotation2 = 0.0
        self._arm_length1 = float(arm_length1)
        self._arm_length2 = float(arm_length2)
        self._running = bool(config.DEFAULTS["running"])

        self.accumulator = accumulator if accumulator is not None else PathAccumulator()

        self.joint1: Point = ORIGIN
        self.joint2: Point = ORIGIN
        self.recalculate_positions()
        self.last_emitted_position: Point = self.joint2

    # --- configuration -------------------------------------------------

    @property
    def arm_length1(self) -> float:
        return self._arm_length1

    @arm_length1.setter
    def arm_length1(self, value: float) -> None:
        self.set_arm_length(1, value)

    @property
    def arm_length2(self) -> float:
        return self._arm_length2

    @arm_length2.setter
    def arm_length2(self, value: float) -> None:
        self.set_arm_length(2, value)

    def set_arm_length(self, which: int, value: float) -> None:
        """Change arm 1 or 2 and recompute the joints right away."""
        if which == 1:
            self._arm_length1 = float(value)
        elif which == 2:
            self._arm_length2 = float(value)
        else:
            raise ValueError(f"arm index must be 1 or 2, got {which!r}")
        self.recalculate_positions()

    @property
    def running(self) -> bool:
        return self._running

    @running.setter
    def running(self, flag: bool) -> None:
        self.set_running(flag)

    def set_running(self, flag: bool) -> None:
        flag = bool(flag)
        if flag and not self._running:
            # start the next primitive at the current tip, not the pre-pause one
            self.last_emitted_position = self.joint2
        if flag != self._running:
            logger.debug("Pendulum %s", "started" if flag else "paused")
        self._running = flag

    # --- simulation ----------------------------------------------------

    def recalculate_positions(self) -> None:
        self.joint1, self.joint2 = joint_positions(
            self.rotation1, self.rotation2, self._arm_length1, self._arm_length2
        )

    def advance(self, tick_count: int, canvas_size: Tuple[float, float]) -> None:
        """Apply ``tick_count`` angular steps, emitting trace primitives.

        The accumulator's flush check runs once after the last tick.
        """
        for _ in range(int(tick_count)):
            self.rotation1 -= config.STEP
            self.rotation2 -= config.STEP * self.rotation_coefficient
            self.recalculate_positions()

            if distance(self.last_emitted_position, self.joint2) > config.EMIT_DISTANCE:
                self.accumulator.append(self._make_primitive(), canvas_size)
                self.last_emitted_position = self.joint2
        self.accumulator.maybe_flush()

    def frame(self, canvas_size: Tuple[float, float]) -> None:
        """Per-frame entry point: advance by ``speed`` ticks while running."""
        if self._running:
            self.advance(int(self.speed), canvas_size)

    def _make_primitive(self) -> Primitive:
        if self.trace_style is TraceStyle.LINE:
            return Segment(start=self.last_emitted_position, end=self.joint2, width=self.stroke_width)
        return Dot(center=self.joint2, diameter=self.stroke_width)

    # --- trace management ----------------------------------------------

    def erase(self) -> None:
        """Drop the trace; angles and the running flag stay as they are."""
        self.accumulator.clear()
        logger.debug("Trace erased")

    def reset(self) -> None:
        """Drop the trace and return both arms to the zero angle."""
        self.accumulator.clear()
        self.rotation1 = 0.0
        self.rotation2 = 0.0
        self.recalculate_positions()
        self.last_emitted_position = self.joint2
        logger.debug("Pendulum reset")

    def take_pending_flush(self) -> Optional[IdentifiablePath]:
        return self.accumulator.take_pending_flush()

    def take_old_paths(self) -> Tuple[Tuple[str, Outline], ...]:
        return self.accumulator.take_old_paths()

    def current_geometry(self) -> FrameGeometry:
        """Snapshot for rendering. Consumes the pending flush, if any."""
        rig = RigGeometry(
            pivot=ORIGIN,
            joint1=self.joint1,
            joint2=self.joint2,
            rotation1=self.rotation1,
            rotation2=self.rotation2,
            arm_length1=self._arm_length1,
            arm_length2=self._arm_length2,
        )
        return FrameGeometry(
            rig=rig,
            active_outline=self.accumulator.active_outline(),
            pending_flush=self.accumulator.take_pending_flush(),
            history=self.accumulator.take_old_paths(),
        )
