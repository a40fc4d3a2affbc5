"""Dash callbacks for the underfloor designer: editor events and API calls."""

import logging

import requests
from dash import Input, Output, State, ctx, html, no_update
import dash_bootstrap_components as dbc

from backend.core.config import settings
from design.distances import calculation_payload, feed_distance, route_distance, rooms_summary
from design.events import (
    ApplyCalibration,
    CancelCalibration,
    ClearAll,
    ClearRooms,
    ClearWaypoints,
    FinishRouting,
    LoadPlan,
    PointerDown,
    PointerMove,
    PointerUp,
    RemovePlan,
    StartCalibration,
    StartRoom,
    StartRouting,
)
from design.manager import DesignSessionManager
from design.render import OBJECT_SHAPE_INDEX, render_scene
from design.session import Calibrating, DesignSession, DrawingRoom, EditorError, Idle, Routing

logger = logging.getLogger(__name__)

CALCULATE_URL = f"{settings.API_BASE_URL}{settings.API_V1_STR}/underfloor/calculate"
CONNECTION_ERROR = "Cannot reach the calculation server. Check that the API is running."

manager = DesignSessionManager()

MODE_HINTS = {
    "idle": "Drag the boiler or manifold to place them.",
    "calibrating": "Click two points of a known distance on the plan.",
    "drawing_room": "Click and drag on the canvas to trace the room.",
    "routing": "Click along the corridors. Press 'Finish route' when done.",
}

BUTTON_EVENTS = {
    "btn-calibrate": StartCalibration,
    "btn-calibration-cancel": CancelCalibration,
    "btn-route": StartRouting,
    "btn-finish-route": FinishRouting,
    "btn-clear-route": ClearWaypoints,
    "btn-clear-rooms": ClearRooms,
    "btn-clear-all": ClearAll,
    "btn-remove-plan": RemovePlan,
}


# ── Translating UI input into editor events ───────────────────


def click_events(click_data: dict | None) -> list:
    if not click_data or not click_data.get("points"):
        return []
    pt = click_data["points"][0]
    x, y = float(pt["x"]), float(pt["y"])
    return [PointerDown(x, y), PointerUp(x, y)]


def drawn_rect_events(relayout: dict | None) -> list:
    """Press/drag/release for a rectangle drawn with the drawrect tool."""
    shapes = (relayout or {}).get("shapes")
    if not shapes:
        return []
    shape = shapes[-1]
    if shape.get("type") != "rect":
        return []
    x0, y0, x1, y1 = (float(shape[k]) for k in ("x0", "y0", "x1", "y1"))
    return [PointerDown(x0, y0), PointerMove(x1, y1), PointerUp(x1, y1)]


def shape_drag_events(session: DesignSession, relayout: dict | None) -> list:
    """Press on an object's old position, move and release on the new one."""
    relayout = relayout or {}
    for obj_id, index in OBJECT_SHAPE_INDEX.items():
        keys = [f"shapes[{index}].{k}" for k in ("x0", "x1", "y0", "y1")]
        if not all(k in relayout for k in keys):
            continue
        x0, x1, y0, y1 = (float(relayout[k]) for k in keys)
        old = session.objects[obj_id].position
        new_x, new_y = (x0 + x1) / 2, (y0 + y1) / 2
        return [PointerDown(old.x, old.y), PointerMove(new_x, new_y), PointerUp(new_x, new_y)]
    return []


def canvas_events(session: DesignSession, relayout: dict | None) -> list:
    if isinstance(session.mode, DrawingRoom):
        return drawn_rect_events(relayout)
    # Objects can only be dragged while no other mode is active
    if isinstance(session.mode, Idle):
        return shape_drag_events(session, relayout)
    return []


def events_for_trigger(
    trigger: str | None,
    prop: str | None,
    session: DesignSession,
    click_data: dict | None = None,
    relayout: dict | None = None,
    upload: str | None = None,
    room_name: str | None = None,
    calibration_distance: float | None = None,
) -> list:
    if trigger in BUTTON_EVENTS:
        return [BUTTON_EVENTS[trigger]()]
    if trigger == "btn-calibration-apply":
        distance = float(calibration_distance) if calibration_distance is not None else None
        return [ApplyCalibration(distance)]
    if trigger == "btn-room":
        return [StartRoom(room_name or session.suggest_room_name())]
    if trigger == "plan-upload" and upload:
        return [LoadPlan(upload)]
    if trigger == "layout-canvas":
        if prop == "clickData":
            return click_events(click_data)
        return canvas_events(session, relayout)
    return []


# ── Display helpers ───────────────────────────────────────────


def editor_hint(trigger: str | None, session: DesignSession) -> str:
    if trigger == "btn-calibration-apply" and not isinstance(session.mode, Calibrating):
        return f"Scale calibrated: {session.calibration.pixels_per_meter:.0f} px/m"
    if trigger == "plan-upload" and session.plan is not None:
        return "Plan loaded. Calibrate the scale for accurate distances."
    return MODE_HINTS[session.mode.name]


def rooms_panel(session: DesignSession):
    summary = rooms_summary(session)
    if not summary.rooms:
        return ""
    rows = [
        html.Li(f"{r.name}: {r.area:.2f} m2, approx. {r.pipe_length:.1f} m of pipe")
        for r in summary.rooms
    ]
    children = [html.Ul(rows, className="mb-1")]
    children.extend(html.Div(w, className="text-warning") for w in summary.warnings)
    return html.Div(children)


def _data_card(title: str, value, unit: str, subtitle: str):
    return dbc.Col(
        dbc.Card(
            dbc.CardBody(
                [
                    html.Div(title, className="text-muted small"),
                    html.H3([f"{value} ", html.Small(unit, className="text-muted")]),
                    html.Div(subtitle, className="small"),
                ]
            ),
            color="dark",
            outline=True,
        ),
        md=3,
    )


ADVISORY_COLORS = {"CRITICAL": "danger", "WARNING": "warning", "INFO": "info"}


def results_view(data: dict):
    circuits = data["numeroCircuitos"]
    cards = dbc.Row(
        [
            _data_card(
                "Total length", data["longitudTotal"], "m",
                f"Serpentine: {data['longitudSerpentina']}m | Feed run: {data['longitudAcometida']}m",
            ),
            _data_card(
                "Circuits", circuits, "circuit" if circuits == 1 else "circuits",
                "Maximum 120 m per circuit",
            ),
            _data_card("Pipe step", data["pasoSeleccionado"], "cm",
                       f"Density: {data['densidadTuberia']} m/m2"),
            _data_card("Max floor power", data["potenciaMaximaSuelo"], "W/m2",
                       "Depends on the floor finish"),
        ],
        className="mb-3",
    )

    children = [cards]
    advisory = data.get("advisoryMessage")
    if advisory:
        children.append(dbc.Alert(
            html.Div(advisory["message"], style={"whiteSpace": "pre-line"}),
            color=ADVISORY_COLORS.get(advisory["level"], "info"),
        ))
    children.append(html.P(data["notaDiseno"], className="text-muted small"))

    budget = data["presupuesto"]
    header = html.Thead(html.Tr([
        html.Th("Product"), html.Th("Qty"), html.Th("Unit"),
        html.Th("Unit price"), html.Th("Subtotal"),
    ]))
    body = html.Tbody([
        html.Tr([
            html.Td([item["nombre"], html.Div(f"ID: {item['productoId']}", className="small text-muted")]),
            html.Td(item["cantidad"]),
            html.Td(item["unidad"]),
            html.Td(f"$ {item['precioUnitario']:.2f}"),
            html.Td(f"$ {item['subtotal']:.2f}"),
        ])
        for item in budget["items"]
    ])
    children.append(dbc.Table([header, body], bordered=False, hover=True, size="sm"))
    children.append(html.H4(f"Total: $ {budget['totalFinal']:.2f}", className="text-end"))
    return html.Div(children)


def error_message(status_code: int, body: dict) -> str:
    if body.get("details"):
        return ", ".join(d["message"] for d in body["details"])
    return body.get("message") or f"Calculation failed (HTTP {status_code})"


def request_calculation(payload: dict) -> tuple[dict | None, str | None]:
    """POST the calculation; returns (data, error message)."""
    try:
        resp = requests.post(CALCULATE_URL, json=payload, timeout=settings.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("Calculation request failed: %s", e)
        return None, CONNECTION_ERROR

    try:
        body = resp.json()
    except ValueError:
        return None, f"Unexpected response from the server (HTTP {resp.status_code})"

    if not resp.ok:
        return None, error_message(resp.status_code, body)
    return body["data"], None


# ── Callbacks ─────────────────────────────────────────────────


def register_callbacks(app):
    """Register all designer callbacks with the Dash app."""

    @app.callback(
        [
            Output("layout-canvas", "figure"),
            Output("editor-hint", "children"),
            Output("editor-scale", "children"),
            Output("editor-waypoints", "children"),
            Output("editor-feed", "children"),
            Output("editor-rooms", "children"),
            Output("calibration-modal", "is_open"),
            Output("input-area", "value"),
            Output("input-distance", "value"),
            Output("design-session-id", "data"),
        ],
        [
            Input("layout-canvas", "clickData"),
            Input("layout-canvas", "relayoutData"),
            Input("plan-upload", "contents"),
            Input("btn-remove-plan", "n_clicks"),
            Input("btn-calibrate", "n_clicks"),
            Input("btn-calibration-apply", "n_clicks"),
            Input("btn-calibration-cancel", "n_clicks"),
            Input("btn-room", "n_clicks"),
            Input("btn-route", "n_clicks"),
            Input("btn-finish-route", "n_clicks"),
            Input("btn-clear-route", "n_clicks"),
            Input("btn-clear-rooms", "n_clicks"),
            Input("btn-clear-all", "n_clicks"),
        ],
        [
            State("design-session-id", "data"),
            State("input-room-name", "value"),
            State("input-calibration-distance", "value"),
        ],
    )
    def update_editor(click_data, relayout, upload, *args):
        session_id, room_name, calibration_distance = args[-3:]
        session = manager.get_or_create(session_id)

        rooms_before = round(sum(r.area for r in session.rooms.values()), 4)
        route_before = route_distance(session)

        prop = ctx.triggered[0]["prop_id"].split(".")[-1] if ctx.triggered else None
        events = events_for_trigger(
            ctx.triggered_id, prop, session,
            click_data=click_data, relayout=relayout, upload=upload,
            room_name=room_name, calibration_distance=calibration_distance,
        )
        try:
            for event in events:
                manager.apply(session.id, event)
            hint = editor_hint(ctx.triggered_id, session)
        except EditorError as e:
            hint = str(e)

        summary = rooms_summary(session)
        area_out = no_update
        if round(summary.total_area, 4) != rooms_before and summary.total_area > 0:
            area_out = round(summary.total_area, 1)
        distance_out = no_update
        route_now = route_distance(session)
        route_changed = route_now != route_before or ctx.triggered_id == "btn-finish-route"
        if route_changed and session.waypoints and not isinstance(session.mode, Routing):
            distance_out = round(route_now, 1)

        scale = (
            f"Scale: {session.calibration.pixels_per_meter:.0f} px/m"
            if session.calibration.is_calibrated else "Scale: not calibrated (50 px/m)"
        )
        return (
            render_scene(session),
            hint,
            scale,
            f"Waypoints: {len(session.waypoints)}",
            f"Feed run: {feed_distance(session):.2f} m",
            rooms_panel(session),
            session.awaiting_calibration_distance,
            area_out,
            distance_out,
            str(session.id),
        )

    @app.callback(
        [
            Output("calc-results", "children"),
            Output("calc-error", "children"),
            Output("calc-error", "is_open"),
        ],
        Input("btn-calculate", "n_clicks"),
        [
            State("design-session-id", "data"),
            State("input-area", "value"),
            State("input-load", "value"),
            State("input-floor", "value"),
            State("input-distance", "value"),
        ],
        prevent_initial_call=True,
    )
    def calculate(n_clicks, session_id, area, load, floor, distance):
        if not n_clicks:
            return no_update, no_update, no_update
        if not floor:
            return no_update, "Select a floor finish", True

        session = manager.get_or_create(session_id)
        payload = calculation_payload(session, area, load, floor, distance)
        data, error = request_calculation(payload)
        if error:
            return no_update, error, True
        return results_view(data), "", False
