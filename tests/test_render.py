from __future__ import annotations

from busfeed.render import format_vehicle_line, render_vehicles

from helpers import FETCHED_AT_MS, make_annotated


def test_empty_selection_renders_placeholder() -> None:
    assert render_vehicles([], FETCHED_AT_MS) == "(no vehicles)"


def test_line_format() -> None:
    vehicle = make_annotated("1", sector=2, distance_m=1113.2, route_tag="E", observed_at_ms=FETCHED_AT_MS - 30_000)

    assert format_vehicle_line(vehicle, FETCHED_AT_MS) == "E: 0.69 mi N (30 sec)\n"


def test_multiple_lines_keep_order() -> None:
    vehicles = [
        make_annotated("1", sector=0, distance_m=100.0, route_tag="49", observed_at_ms=FETCHED_AT_MS - 5_000),
        make_annotated("2", sector=4, distance_m=3000.0, route_tag="E", observed_at_ms=FETCHED_AT_MS - 61_000),
    ]

    assert render_vehicles(vehicles, FETCHED_AT_MS) == "49: 0.06 mi E (5 sec)\nE: 1.86 mi W (61 sec)\n"


def test_age_rounds_half_up() -> None:
    vehicle = make_annotated("1", sector=6, distance_m=0.0, observed_at_ms=FETCHED_AT_MS - 2_500)

    assert format_vehicle_line(vehicle, FETCHED_AT_MS) == "E: 0.00 mi S (3 sec)\n"
