from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional, Tuple

import plotly.graph_objects as go
import streamlit as st

from pendulum_trace import config
from pendulum_trace.path_accumulator import Outline
from pendulum_trace.pendulum import FrameGeometry, PendulumState, TraceStyle

logger = logging.getLogger(__name__)

TRACE_COLOR = "rgba(255,255,255,0.9)"
RIG_COLOR = "#FFFFFF"

XY = Tuple[List[Optional[float]], List[Optional[float]]]


def _ensure_session() -> PendulumState:
    if "pendulum" not in st.session_state:
        st.session_state.pendulum = PendulumState()
    if "path_traces" not in st.session_state:
        # plot coordinates of finalized paths, keyed by path id
        st.session_state.path_traces = {}
    return st.session_state.pendulum


def _update_params_from_sidebar(pendulum: PendulumState) -> None:
    speed_lo, speed_hi = config.BOUNDS["speed"]
    coef_lo, coef_hi = config.BOUNDS["rotation_coefficient"]
    width_lo, width_hi = config.BOUNDS["stroke_width"]
    arm_hi = config.max_arm_length(config.CANVAS_SIZE)

    speed = st.sidebar.slider("Speed", min_value=speed_lo, max_value=speed_hi, value=float(pendulum.speed), step=1.0)
    pendulum.speed = config.clamp("speed", speed)

    coef = st.sidebar.slider("Rotation", min_value=coef_lo, max_value=coef_hi, value=float(pendulum.rotation_coefficient))
    pendulum.rotation_coefficient = config.clamp("rotation_coefficient", coef)

    l1 = st.sidebar.slider("Length 1", min_value=config.MIN_ARM_LENGTH, max_value=arm_hi, value=float(min(arm_hi, pendulum.arm_length1)))
    l2 = st.sidebar.slider("Length 2", min_value=config.MIN_ARM_LENGTH, max_value=arm_hi, value=float(min(arm_hi, pendulum.arm_length2)))
    if l1 != pendulum.arm_length1:
        pendulum.set_arm_length(1, config.clamp("arm_length1", l1, config.CANVAS_SIZE))
    if l2 != pendulum.arm_length2:
        pendulum.set_arm_length(2, config.clamp("arm_length2", l2, config.CANVAS_SIZE))

    styles = [s.value for s in TraceStyle]
    style = st.sidebar.radio("Style", styles, index=styles.index(pendulum.trace_style.value), horizontal=True)
    pendulum.trace_style = TraceStyle(style)

    width = st.sidebar.slider("Stroke", min_value=width_lo, max_value=width_hi, value=float(pendulum.stroke_width), step=0.1)
    pendulum.stroke_width = config.clamp("stroke_width", width)


def _outline_xy(outline: Outline) -> XY:
    # polygons separated by None so one filled scatter trace holds all of them
    xs: List[Optional[float]] = []
    ys: List[Optional[float]] = []
    for polygon in outline:
        for x, y in polygon:
            xs.append(x)
            ys.append(-y)
        if polygon:
            xs.append(polygon[0][0])
            ys.append(-polygon[0][1])
        xs.append(None)
        ys.append(None)
    return xs, ys


def _outline_trace(xs: List[Optional[float]], ys: List[Optional[float]]) -> go.Scatter:
    return go.Scatter(
        x=xs, y=ys, mode="lines", fill="toself", fillcolor=TRACE_COLOR,
        line=dict(color=TRACE_COLOR, width=0), hoverinfo="skip", showlegend=False,
    )


def _history_traces(geometry: FrameGeometry, cache: Dict[str, XY]) -> List[go.Scatter]:
    if geometry.pending_flush is not None:
        cache[geometry.pending_flush.id] = _outline_xy(geometry.pending_flush.outline)
    live_ids = set()
    traces = []
    for path_id, outline in geometry.history:
        live_ids.add(path_id)
        if path_id not in cache:
            cache[path_id] = _outline_xy(outline)
        traces.append(_outline_trace(*cache[path_id]))
    for stale in set(cache) - live_ids:
        del cache[stale]
    return traces


def _build_figure(geometry: FrameGeometry, cache: Dict[str, XY]) -> go.Figure:
    rig = geometry.rig
    # Invert y for plotting (upwards positive)
    px, py = rig.pivot[0], -rig.pivot[1]
    x1, y1 = rig.joint1[0], -rig.joint1[1]
    x2, y2 = rig.joint2[0], -rig.joint2[1]
    half_w = config.CANVAS_SIZE[0] / 2.0
    half_h = config.CANVAS_SIZE[1] / 2.0

    fig = go.Figure()

    for trace in _history_traces(geometry, cache):
        fig.add_trace(trace)
    if geometry.active_outline:
        fig.add_trace(_outline_trace(*_outline_xy(geometry.active_outline)))

    # sticks
    fig.add_trace(go.Scatter(x=[px, x1, x2], y=[py, y1, y2], mode="lines", line=dict(color=RIG_COLOR, width=1), hoverinfo="skip", showlegend=False))

    # joints: pivot and elbow hollow, end point filled
    marker = config.JOINT_MARKER_SIZE
    fig.add_trace(go.Scatter(x=[px, x1], y=[py, y1], mode="markers", marker=dict(size=marker, color="rgba(0,0,0,0)", line=dict(color=RIG_COLOR, width=1)), hoverinfo="skip", showlegend=False))
    fig.add_trace(go.Scatter(x=[x2], y=[y2], mode="markers", marker=dict(size=marker, color=RIG_COLOR), hoverinfo="skip", showlegend=False))

    fig.update_layout(
        template="plotly_dark",
        paper_bgcolor="black",
        plot_bgcolor="black",
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis=dict(scaleanchor="y", scaleratio=1.0, range=[-half_w, half_w], visible=False),
        yaxis=dict(range=[-half_h, half_h], visible=False),
        dragmode=False,
    )
    return fig


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)
    st.set_page_config(page_title="Pendulum", layout="centered")
    pendulum = _ensure_session()

    _update_params_from_sidebar(pendulum)

    col_a, col_b, col_c = st.columns([1, 1, 1])
    with col_a:
        if not pendulum.running:
            if st.button("Start", type="primary"):
                pendulum.running = True
        else:
            if st.button("Stop", type="secondary"):
                pendulum.running = False
    with col_b:
        if st.button("Erase"):
            pendulum.erase()
    with col_c:
        if st.button("Reset"):
            pendulum.reset()

    # one simulation frame per rerun
    try:
        pendulum.frame(config.CANVAS_SIZE)
    except Exception:
        logger.exception("Frame update failed, pausing")
        pendulum.running = False

    geometry = pendulum.current_geometry()
    fig = _build_figure(geometry, st.session_state.path_traces)
    st.plotly_chart(fig, use_container_width=True, config={"staticPlot": True, "displayModeBar": False})

    with st.expander("Details (State)", expanded=False):
        st.write({
            "rotation1": pendulum.rotation1,
            "rotation2": pendulum.rotation2,
            "speed": pendulum.speed,
            "rotation_coefficient": pendulum.rotation_coefficient,
            "points": pendulum.accumulator.point_count,
            "old_paths": len(geometry.history),
        })

    if pendulum.running:
        time.sleep(config.FRAME_INTERVAL)
        st.rerun()


if __name__ == "__main__":
    main()
