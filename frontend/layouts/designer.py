"""Underfloor designer layout: calculation form, plan editor and results."""

from dash import html, dcc
import dash_bootstrap_components as dbc

from design.session import CANVAS_HEIGHT, CANVAS_WIDTH
from underfloor.rules import FloorType

FLOOR_LABELS = {
    FloorType.PETREO: "Stone / ceramic",
    FloorType.MADERA_MACIZA: "Solid wood",
    FloorType.MADERA_FLOTANTE: "Floating wood",
    FloorType.MOQUETA: "Carpet",
}


def _form_card():
    return dbc.Card(
        [
            dbc.CardHeader("Installation data"),
            dbc.CardBody(
                [
                    dbc.Label("Area (m2)"),
                    dbc.Input(id="input-area", type="number", min=1, max=1000, step=0.1, value=20),
                    dbc.Label("Thermal load (W/m2)", className="mt-2"),
                    dbc.Input(id="input-load", type="number", min=10, max=150, value=70),
                    dbc.Label("Floor finish", className="mt-2"),
                    dcc.Dropdown(
                        id="input-floor",
                        options=[{"label": v, "value": k.value} for k, v in FLOOR_LABELS.items()],
                        value=FloorType.PETREO.value,
                        clearable=False,
                        className="text-dark",
                    ),
                    dbc.Label("Distance to manifold (m)", className="mt-2"),
                    dbc.Input(id="input-distance", type="number", min=0, max=50, step=0.1, value=5),
                    html.Small(
                        "A traced corridor route replaces this value.",
                        className="text-muted",
                    ),
                    dbc.Button(
                        "Calculate", id="btn-calculate", color="success",
                        className="mt-3 w-100",
                    ),
                ]
            ),
        ],
        color="dark",
        outline=True,
    )


def _editor_toolbar():
    return html.Div(
        [
            dcc.Upload(
                id="plan-upload",
                children=dbc.Button("Load plan", color="secondary", size="sm"),
                accept="image/*",
                className="d-inline-block me-2",
            ),
            dbc.Button("Remove plan", id="btn-remove-plan", color="secondary",
                       size="sm", className="me-2"),
            dbc.Button("Calibrate scale", id="btn-calibrate", color="info",
                       size="sm", className="me-2"),
            dbc.Input(id="input-room-name", placeholder="Room name", size="sm",
                      className="d-inline-block me-2", style={"width": "160px"}),
            dbc.Button("Draw room", id="btn-room", color="primary", size="sm",
                       className="me-2"),
            dbc.Button("Trace corridor", id="btn-route", color="primary", size="sm",
                       className="me-2"),
            dbc.Button("Finish route", id="btn-finish-route", color="primary",
                       outline=True, size="sm", className="me-2"),
            dbc.Button("Clear route", id="btn-clear-route", color="warning",
                       outline=True, size="sm", className="me-2"),
            dbc.Button("Clear rooms", id="btn-clear-rooms", color="warning",
                       outline=True, size="sm", className="me-2"),
            dbc.Button("Clear all", id="btn-clear-all", color="danger",
                       outline=True, size="sm"),
        ],
        className="mb-2",
    )


def _calibration_modal():
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Calibrate scale")),
            dbc.ModalBody(
                [
                    dbc.Label("Real distance between the two points (m)"),
                    dbc.Input(id="input-calibration-distance", type="number", min=0, step=0.01),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id="btn-calibration-cancel", color="secondary"),
                    dbc.Button("Apply", id="btn-calibration-apply", color="primary"),
                ]
            ),
        ],
        id="calibration-modal",
        is_open=False,
    )


def create_designer_layout():
    return dbc.Container(
        [
            dcc.Store(id="design-session-id", storage_type="session"),
            _calibration_modal(),
            dbc.Row(
                [
                    dbc.Col(_form_card(), md=3),
                    dbc.Col(
                        [
                            _editor_toolbar(),
                            html.Div(id="editor-hint", className="text-info mb-1"),
                            dcc.Graph(
                                id="layout-canvas",
                                config={"displayModeBar": False, "edits": {"shapePosition": True}},
                                style={"width": f"{CANVAS_WIDTH}px", "height": f"{CANVAS_HEIGHT}px"},
                            ),
                            html.Div(
                                [
                                    html.Span(id="editor-scale", className="me-3"),
                                    html.Span(id="editor-waypoints", className="me-3"),
                                    html.Span(id="editor-feed"),
                                ],
                                className="small text-muted mt-1",
                            ),
                            html.Div(id="editor-rooms", className="small mt-2"),
                        ],
                        md=9,
                    ),
                ],
                className="mb-3",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        [
                            dbc.Alert(id="calc-error", color="danger", is_open=False),
                            dcc.Loading(html.Div(id="calc-results")),
                        ],
                    ),
                ]
            ),
        ],
        fluid=True,
    )
