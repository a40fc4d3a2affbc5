"""Underfloor Heating Designer - Plotly Dash Frontend Application.

Plan editor (calibration, room tracing, corridor routing) and calculation
form talking to the FastAPI backend.
"""

import dash
from dash import html
import dash_bootstrap_components as dbc

from backend.core.config import settings
from frontend.callbacks.designer_callbacks import register_callbacks
from frontend.layouts.designer import create_designer_layout

app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    title="Underfloor Heating Designer",
)

app.layout = dbc.Container(
    [
        # Header
        dbc.Navbar(
            dbc.Container(
                [
                    dbc.NavbarBrand("Underfloor Heating Designer", className="ms-2"),
                    html.Span(f"v{settings.VERSION}", className="text-light small"),
                ],
            ),
            color="primary",
            dark=True,
        ),
        html.Div(create_designer_layout(), className="mt-3"),
    ],
    fluid=True,
)

register_callbacks(app)

server = app.server

if __name__ == "__main__":
    app.run(debug=settings.DEBUG, host=settings.HOST, port=settings.FRONTEND_PORT)
