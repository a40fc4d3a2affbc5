"""Unit tests for the designer callback helpers."""

import pytest
import requests
from dash import html

from design.events import (
    ApplyCalibration,
    CancelCalibration,
    ClearAll,
    LoadPlan,
    PointerDown,
    PointerMove,
    PointerUp,
    StartCalibration,
    StartRoom,
    StartRouting,
)
from design.geometry import Point, Rect
from design.machine import handle_input
from design.session import DesignSession, DrawingRoom
from frontend.callbacks import designer_callbacks as cb


class FakeResponse:
    def __init__(self, status_code, body=None, raw=False):
        self.status_code = status_code
        self._body = body
        self._raw = raw

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._raw:
            raise ValueError("not json")
        return self._body


@pytest.fixture
def session():
    return DesignSession()


class TestEventsForTrigger:
    def test_buttons(self, session):
        assert cb.events_for_trigger("btn-clear-all", "n_clicks", session) == [ClearAll()]

    def test_calibration_apply(self, session):
        events = cb.events_for_trigger(
            "btn-calibration-apply", "n_clicks", session, calibration_distance="4.5",
        )
        assert events == [ApplyCalibration(4.5)]
        events = cb.events_for_trigger("btn-calibration-apply", "n_clicks", session)
        assert events == [ApplyCalibration(None)]

    def test_room_name_defaults_to_suggestion(self, session):
        assert cb.events_for_trigger("btn-room", "n_clicks", session) == [StartRoom("Room 1")]
        events = cb.events_for_trigger("btn-room", "n_clicks", session, room_name="Kitchen")
        assert events == [StartRoom("Kitchen")]

    def test_upload(self, session):
        events = cb.events_for_trigger("plan-upload", "contents", session, upload="data:x")
        assert events == [LoadPlan("data:x")]
        assert cb.events_for_trigger("plan-upload", "contents", session, upload=None) == []

    def test_canvas_click(self, session):
        click = {"points": [{"x": 12, "y": 34}]}
        events = cb.events_for_trigger("layout-canvas", "clickData", session, click_data=click)
        assert events == [PointerDown(12.0, 34.0), PointerUp(12.0, 34.0)]

    def test_initial_call(self, session):
        assert cb.events_for_trigger(None, None, session) == []


class TestCanvasEvents:
    def test_empty_click(self):
        assert cb.click_events(None) == []
        assert cb.click_events({"points": []}) == []

    def test_drawn_rect_while_drawing(self, session):
        session.mode = DrawingRoom(room_name="A")
        relayout = {"shapes": [
            {"type": "circle", "x0": 0, "y0": 0, "x1": 1, "y1": 1},
            {"type": "rect", "x0": 10, "y0": 20, "x1": 110, "y1": 220},
        ]}
        assert cb.canvas_events(session, relayout) == [
            PointerDown(10.0, 20.0), PointerMove(110.0, 220.0), PointerUp(110.0, 220.0),
        ]

    def test_object_shape_drag(self, session):
        relayout = {
            "shapes[1].x0": 280, "shapes[1].x1": 320,
            "shapes[1].y0": 80, "shapes[1].y1": 120,
        }
        events = cb.canvas_events(session, relayout)
        old = session.collector.position
        assert events == [
            PointerDown(old.x, old.y), PointerMove(300.0, 100.0), PointerUp(300.0, 100.0),
        ]

    def test_object_drag_ignored_outside_idle(self):
        relayout = {
            "shapes[0].x0": 180, "shapes[0].x1": 220,
            "shapes[0].y0": 180, "shapes[0].y1": 220,
        }
        for start in (StartRouting(), StartCalibration()):
            session = DesignSession()
            handle_input(session, start)
            events = cb.events_for_trigger(
                "layout-canvas", "relayoutData", session, relayout=relayout,
            )
            assert events == []
            assert session.waypoints == []
            assert session.calibration.points == []
            assert session.boiler.position == Point(50, 50)

    def test_unrelated_relayout(self, session):
        assert cb.canvas_events(session, {"xaxis.range[0]": 3}) == []
        assert cb.canvas_events(session, None) == []


class TestDisplay:
    def test_rooms_panel(self, session):
        assert cb.rooms_panel(session) == ""
        session.add_room_rect("Living", Rect(0, 0, 100, 100))
        assert isinstance(cb.rooms_panel(session), html.Div)

    def test_error_message(self):
        body = {"details": [{"field": "area", "message": "too small"},
                            {"field": "tipoDeSuelo", "message": "bad floor"}]}
        assert cb.error_message(400, body) == "too small, bad floor"
        assert cb.error_message(422, {"message": "no manifold"}) == "no manifold"
        assert cb.error_message(500, {}) == "Calculation failed (HTTP 500)"

    def test_results_view(self):
        data = {
            "pasoSeleccionado": 15, "densidadTuberia": 6.7,
            "longitudSerpentina": 335.0, "longitudAcometida": 20.0, "longitudTotal": 355.0,
            "numeroCircuitos": 3, "potenciaMaximaSuelo": 100,
            "advisoryMessage": {"level": "WARNING", "message": "split"},
            "notaDiseno": "note",
            "presupuesto": {
                "items": [{"productoId": "TUB-PEX-20", "nombre": "Pipe", "cantidad": 373,
                           "unidad": "m", "precioUnitario": 1.35, "subtotal": 503.55}],
                "totalMateriales": 503.55, "desperdicioEstimado": 17.75, "totalFinal": 503.55,
            },
        }
        assert isinstance(cb.results_view(data), html.Div)


class TestRequestCalculation:
    def test_success(self, monkeypatch):
        monkeypatch.setattr(cb.requests, "post", lambda *a, **kw: FakeResponse(
            200, {"success": True, "data": {"longitudTotal": 1}}))
        assert cb.request_calculation({}) == ({"longitudTotal": 1}, None)

    def test_validation_error(self, monkeypatch):
        monkeypatch.setattr(cb.requests, "post", lambda *a, **kw: FakeResponse(
            400, {"success": False, "details": [{"field": "area", "message": "bad area"}]}))
        assert cb.request_calculation({}) == (None, "bad area")

    def test_connection_error(self, monkeypatch):
        def refuse(*args, **kwargs):
            raise requests.ConnectionError("refused")
        monkeypatch.setattr(cb.requests, "post", refuse)
        assert cb.request_calculation({}) == (None, cb.CONNECTION_ERROR)

    def test_non_json_response(self, monkeypatch):
        monkeypatch.setattr(cb.requests, "post", lambda *a, **kw: FakeResponse(502, raw=True))
        data, error = cb.request_calculation({})
        assert data is None
        assert "502" in error


class TestEditorHint:
    def test_mode_hint(self, session):
        assert cb.editor_hint(None, session) == cb.MODE_HINTS["idle"]
        handle_input(session, StartRouting())
        assert cb.editor_hint("btn-route", session) == cb.MODE_HINTS["routing"]

    def test_scale_after_apply(self, session):
        handle_input(session, StartCalibration())
        handle_input(session, PointerDown(0, 0))
        handle_input(session, PointerDown(100, 0))
        handle_input(session, ApplyCalibration(5.0))
        assert cb.editor_hint("btn-calibration-apply", session) == "Scale calibrated: 20 px/m"

    def test_cancelled_recalibration_is_not_reported(self, session):
        session.calibration.is_calibrated = True
        handle_input(session, StartCalibration())
        handle_input(session, CancelCalibration())
        assert cb.editor_hint("btn-calibration-cancel", session) == cb.MODE_HINTS["idle"]
