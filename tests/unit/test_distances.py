"""Unit tests for real-world distances derived from the editor."""

import pytest

from design.distances import (
    calculation_payload,
    collector_distance,
    feed_distance,
    route_distance,
    route_distance_to_room,
    rooms_summary,
)
from design.geometry import Point, Rect
from design.session import DesignSession


@pytest.fixture
def session():
    s = DesignSession()
    s.calibration.meters_per_pixel = 0.05
    s.calibration.is_calibrated = True
    return s


@pytest.fixture
def routed(session):
    # manifold (150, 250) -> up 100 px -> right 200 px
    session.waypoints = [Point(150, 150), Point(350, 150)]
    return session


class TestFeedDistance:
    def test_default_scale(self):
        s = DesignSession()
        # boiler (50, 50) to manifold (150, 250) at 50 px/m
        assert feed_distance(s) == pytest.approx((100 ** 2 + 200 ** 2) ** 0.5 / 50)

    def test_follows_objects(self, session):
        session.collector.position = Point(50, 250)
        assert feed_distance(session) == pytest.approx(10.0)


class TestRouteDistance:
    def test_no_route(self, session):
        assert route_distance(session) == 0.0
        assert collector_distance(session, 7.5) == 7.5
        assert collector_distance(session, None) is None

    def test_route_from_manifold(self, routed):
        assert route_distance(routed) == pytest.approx(15.0)

    def test_route_overrides_manual_value(self, routed):
        assert collector_distance(routed, 3.0) == pytest.approx(15.0)

    def test_route_to_room_adds_final_hop(self, routed):
        room = routed.add_room_rect("A", Rect(350, 200, 100, 100))
        # last waypoint (350, 150) to centre (400, 250)
        hop = (50 ** 2 + 100 ** 2) ** 0.5 * 0.05
        assert route_distance_to_room(routed, room) == pytest.approx(15.0 + hop)

    def test_route_to_room_without_route(self, session):
        room = session.add_room_rect("A", Rect(0, 0, 100, 100))
        assert route_distance_to_room(session, room) == 0.0


class TestRoomsSummary:
    def test_empty(self, session):
        summary = rooms_summary(session)
        assert summary.rooms == []
        assert summary.total_area == 0.0
        assert summary.warnings == []

    def test_per_room_estimate(self, routed):
        routed.add_room_rect("Living", Rect(300, 100, 100, 100))   # 25 m2, centre on route end
        routed.add_room_rect("Bath", Rect(0, 0, 40, 40))           # 4 m2
        summary = rooms_summary(routed)

        living, bath = summary.rooms
        assert living.area == pytest.approx(25.0)
        assert living.route_distance == pytest.approx(15.0)
        assert living.pipe_length == pytest.approx(25 * 6.7 + 30)
        assert summary.total_area == pytest.approx(29.0)
        assert summary.total_length == pytest.approx(living.pipe_length + bath.pipe_length)

        assert len(summary.warnings) == 1
        assert '"Living"' in summary.warnings[0]
        assert "1.6 circuits" in summary.warnings[0]

    def test_split_room_counts_once(self, session):
        session.add_room_rect("L", Rect(0, 0, 100, 100))
        session.add_room_rect("L", Rect(200, 0, 100, 100))
        summary = rooms_summary(session)
        assert len(summary.rooms) == 1
        assert summary.rooms[0].area == pytest.approx(50.0)


class TestCalculationPayload:
    def test_keys_and_values(self, routed):
        payload = calculation_payload(routed, 20.0, 65.0, "MOQUETA", 3.0)
        assert payload["area"] == 20.0
        assert payload["cargaTermicaRequerida"] == 65.0
        assert payload["tipoDeSuelo"] == "MOQUETA"
        assert payload["distanciaAlColector"] == pytest.approx(15.0)
        assert payload["distanciaAlimentacion"] == pytest.approx(feed_distance(routed))

    def test_manual_distance_without_route(self, session):
        payload = calculation_payload(session, 20.0, 65.0, "MOQUETA", 3.0)
        assert payload["distanciaAlColector"] == 3.0
