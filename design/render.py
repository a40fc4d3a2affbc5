"""Scene rendering for the layout editor.

render_scene() only reads the session and returns a new Plotly figure; the
editor calls it after every state change. Canvas pixel coordinates are used
directly as axis units with the y axis reversed (origin at the top left).

Layer order: plan image or grid, feed pipe, rooms with serpentines, corridor
route, boiler/manifold, calibration guide.
"""

import numpy as np
import plotly.graph_objects as go

from design.geometry import Point, spiral_path
from design.session import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_METERS_PER_PIXEL,
    Calibrating,
    DesignSession,
    DrawingRoom,
    Idle,
    Routing,
)

GRID_STEP = 20
OBJECT_RADIUS = 20
ROUTE_OFFSET = 4            # px between supply and return lines
SERPENTINE_STEP_CM = 15
SERPENTINE_MARGIN = 5

SUPPLY_COLOR = "#ef4444"
RETURN_COLOR = "#3b82f6"
FEED_PIPE_COLOR = "#94a3b8"
WAYPOINT_COLOR = "#64748b"
ACTIVE_WAYPOINT_COLOR = "#fbbf24"
GUIDE_COLOR = "#3b82f6"

# Boiler and manifold are always the first layout shapes, so the editor can
# map shape edits back to objects.
OBJECT_SHAPE_INDEX = {"boiler": 0, "collector": 1}


def _rgba(hex_color: str, alpha: float) -> str:
    h = hex_color.lstrip("#")
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def _line(points: list[Point], color: str, width: float, dash: str | None = None,
          name: str | None = None) -> go.Scatter:
    return go.Scatter(
        x=[p.x for p in points],
        y=[p.y for p in points],
        mode="lines",
        line=dict(color=color, width=width, dash=dash),
        hoverinfo="skip",
        showlegend=False,
        name=name,
    )


def _click_layer() -> go.Heatmap:
    """Invisible heatmap covering the canvas so clicks anywhere report coordinates."""
    xs = np.arange(0, CANVAS_WIDTH + 1, 5)
    ys = np.arange(0, CANVAS_HEIGHT + 1, 5)
    return go.Heatmap(
        x=xs,
        y=ys,
        z=np.zeros((len(ys), len(xs))),
        opacity=0,
        showscale=False,
        hoverinfo="none",
        name="canvas",
    )


def _serpentine_traces(session: DesignSession, rect, color: str) -> list[go.Scatter]:
    pixels_per_meter = (
        session.calibration.pixels_per_meter
        if session.calibration.is_calibrated
        else 1 / DEFAULT_METERS_PER_PIXEL
    )
    step = SERPENTINE_STEP_CM / 100 * pixels_per_meter
    if rect.w < step or rect.h < step:
        return []

    m = SERPENTINE_MARGIN
    supply = spiral_path(rect.x + m, rect.y + m, rect.w - 2 * m, rect.h - 2 * m, step)
    ret = spiral_path(
        rect.x + m + step / 2, rect.y + m + step / 2,
        rect.w - 2 * m - step, rect.h - 2 * m - step, step,
    )
    return [
        _line(supply, color, 2, name="serpentine-supply"),
        _line(ret, RETURN_COLOR, 2, name="serpentine-return"),
    ]


def render_scene(session: DesignSession) -> go.Figure:
    """Build the full editor scene for the current session state."""
    fig = go.Figure()
    shapes: list[dict] = []
    annotations: list[dict] = []
    images: list[dict] = []

    fig.add_trace(_click_layer())

    idle = isinstance(session.mode, Idle)

    # Boiler and manifold shapes first (see OBJECT_SHAPE_INDEX)
    for obj_id in OBJECT_SHAPE_INDEX:
        obj = session.objects[obj_id]
        p = obj.position
        shapes.append(dict(
            type="circle",
            x0=p.x - OBJECT_RADIUS, y0=p.y - OBJECT_RADIUS,
            x1=p.x + OBJECT_RADIUS, y1=p.y + OBJECT_RADIUS,
            fillcolor=obj.color,
            line=dict(color="white", width=1),
            editable=idle,
            layer="above",
        ))
        annotations.append(dict(
            x=p.x, y=p.y + OBJECT_RADIUS + 15, text=f"<b>{obj.label}</b>",
            showarrow=False, font=dict(color="white", size=10),
        ))

    # Background
    if session.plan is not None:
        images.append(dict(
            source=session.plan.source,
            xref="x", yref="y", x=0, y=0,
            sizex=CANVAS_WIDTH, sizey=CANVAS_HEIGHT,
            xanchor="left", yanchor="top",
            sizing="stretch", layer="below",
        ))

    # Feed pipe, drawn square for readability
    boiler = session.boiler.position
    collector = session.collector.position
    fig.add_trace(_line(
        [boiler, Point(boiler.x, collector.y), collector],
        FEED_PIPE_COLOR, 8, name="feed-pipe",
    ))
    annotations.append(dict(
        x=(boiler.x + collector.x) / 2, y=collector.y - 10, text='<i>Feed 1"</i>',
        showarrow=False, font=dict(color="white", size=10),
    ))

    # Rooms
    for room in session.rooms.values():
        for rect in room.rects:
            shapes.append(dict(
                type="rect",
                x0=rect.x, y0=rect.y, x1=rect.x + rect.w, y1=rect.y + rect.h,
                line=dict(color=room.color, width=1),
                fillcolor=_rgba(room.color, 0.13),
                editable=False,
                layer="below",
            ))
            annotations.append(dict(
                x=rect.x + 5, y=rect.y + 15, text=f"<b>{room.name}</b>",
                xanchor="left", showarrow=False,
                font=dict(color=room.color, size=10),
            ))
            for trace in _serpentine_traces(session, rect, room.color):
                fig.add_trace(trace)

    if isinstance(session.mode, DrawingRoom) and session.mode.live_rect is not None:
        live = session.mode.live_rect
        shapes.append(dict(
            type="rect",
            x0=live.start.x, y0=live.start.y,
            x1=live.start.x + live.w, y1=live.start.y + live.h,
            line=dict(color=GUIDE_COLOR, dash="dash"),
            editable=False,
        ))

    # Corridor route, supply and return side by side
    if session.waypoints:
        path = [collector, *session.waypoints]
        fig.add_trace(_line(path, SUPPLY_COLOR, 3, name="route-supply"))
        fig.add_trace(_line(
            [p.offset(ROUTE_OFFSET, ROUTE_OFFSET) for p in path],
            RETURN_COLOR, 3, name="route-return",
        ))
        routing = isinstance(session.mode, Routing)
        colors = [WAYPOINT_COLOR] * len(session.waypoints)
        if routing:
            colors[-1] = ACTIVE_WAYPOINT_COLOR
        fig.add_trace(go.Scatter(
            x=[p.x for p in session.waypoints],
            y=[p.y for p in session.waypoints],
            mode="markers",
            marker=dict(color=colors, size=8),
            hoverinfo="skip",
            showlegend=False,
            name="waypoints",
        ))

    # Calibration guide
    cal_points = session.calibration.points
    if cal_points:
        fig.add_trace(go.Scatter(
            x=[p.x for p in cal_points],
            y=[p.y for p in cal_points],
            mode="markers",
            marker=dict(color=GUIDE_COLOR, size=8),
            hoverinfo="skip",
            showlegend=False,
            name="calibration-points",
        ))
        calibrating = isinstance(session.mode, Calibrating)
        if len(cal_points) == 1 and calibrating and session.cursor is not None:
            fig.add_trace(_line([cal_points[0], session.cursor], GUIDE_COLOR, 2,
                                dash="dash", name="calibration-guide"))
        elif len(cal_points) == 2:
            fig.add_trace(_line(cal_points, GUIDE_COLOR, 2, name="calibration-guide"))

    show_grid = session.plan is None
    axis = dict(
        showgrid=show_grid, gridcolor="#1e293b", gridwidth=0.5, dtick=GRID_STEP,
        zeroline=False, showticklabels=False, fixedrange=True,
    )
    fig.update_layout(
        template="plotly_dark",
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(axis, range=[0, CANVAS_WIDTH]),
        yaxis=dict(axis, range=[CANVAS_HEIGHT, 0], scaleanchor="x"),
        shapes=shapes,
        annotations=annotations,
        images=images,
        dragmode="drawrect" if isinstance(session.mode, DrawingRoom) else False,
        newshape=dict(line=dict(color=GUIDE_COLOR, dash="dash")),
        showlegend=False,
        uirevision=str(session.id),
    )
    return fig
