from __future__ import annotations

from busfeed.ingestion.nextbus import parse_attributes, parse_error_message, parse_vehicle_locations

from helpers import FETCHED_AT_MS, feed_xml, vehicle_xml


def test_single_vehicle_element() -> None:
    payload = '<vehicle id="1" routeTag="E" lat="37.0" lon="-122.0" secsSinceReport="5"/>'

    vehicles = parse_vehicle_locations(payload, FETCHED_AT_MS)

    assert len(vehicles) == 1
    vehicle = vehicles[0]
    assert vehicle.id == "1"
    assert vehicle.route_tag == "E"
    assert vehicle.lat == 37.0
    assert vehicle.lon == -122.0
    assert vehicle.secs_since_report == 5
    assert vehicle.observed_at_epoch_ms == FETCHED_AT_MS - 5000


def test_no_vehicle_elements_returns_empty() -> None:
    assert parse_vehicle_locations("<error/>", FETCHED_AT_MS) == []
    assert parse_vehicle_locations("", FETCHED_AT_MS) == []


def test_full_feed_keeps_document_order_and_extra_attributes() -> None:
    payload = feed_xml(
        vehicle_xml("1001", "E"),
        vehicle_xml("1002", "49", secs="12"),
    )

    vehicles = parse_vehicle_locations(payload, FETCHED_AT_MS)

    assert [v.id for v in vehicles] == ["1001", "1002"]
    assert vehicles[1].route_tag == "49"
    assert vehicles[1].observed_at_epoch_ms == FETCHED_AT_MS - 12_000
    assert vehicles[0].raw["dirTag"] == "E____O_F00"
    assert vehicles[0].dir_tag == "E____O_F00"
    assert vehicles[0].heading == 90
    assert vehicles[0].speed_kmh == 12.0
    assert vehicles[0].predictable is True


def test_malformed_element_is_skipped_not_fatal() -> None:
    payload = feed_xml(
        vehicle_xml("1", lat="not-a-number"),
        vehicle_xml("2"),
        '<vehicle id="3" routeTag="E" lat="37.0" lon="-122.0"/>',
        vehicle_xml("4", secs="-3"),
        vehicle_xml("5", lon="NaN"),
    )

    vehicles = parse_vehicle_locations(payload, FETCHED_AT_MS)

    assert [v.id for v in vehicles] == ["2"]


def test_observed_time_never_after_fetch_time() -> None:
    vehicles = parse_vehicle_locations(feed_xml(vehicle_xml(secs="0"), vehicle_xml(secs="90")), FETCHED_AT_MS)

    assert all(v.observed_at_epoch_ms <= FETCHED_AT_MS for v in vehicles)


def test_elements_with_spaces_before_self_close() -> None:
    payload = '<vehicle id="7" routeTag="E" lat="37.1" lon="-122.1" secsSinceReport="1" / >'

    assert [v.id for v in parse_vehicle_locations(payload, FETCHED_AT_MS)] == ["7"]


def test_non_self_closing_vehicle_is_ignored() -> None:
    payload = '<vehicle id="8" routeTag="E" lat="37.1" lon="-122.1" secsSinceReport="1"></vehicle>'

    assert parse_vehicle_locations(payload, FETCHED_AT_MS) == []


def test_attribute_entities_are_unescaped() -> None:
    attributes = parse_attributes('<vehicle id="1" routeTag="A&amp;B"/>')

    assert attributes == {"id": "1", "routeTag": "A&B"}


def test_parse_error_message() -> None:
    payload = '<body><Error shouldRetry="false">\n  Agency parameter "a=nope" is not valid.\n</Error></body>'

    assert parse_error_message(payload) == 'Agency parameter "a=nope" is not valid.'
    assert parse_error_message(feed_xml()) is None


def test_embedded_timestamp_is_ignored() -> None:
    payload = '<vehicle id="1" routeTag="E" lat="37.0" lon="-122.0" secsSinceReport="5" observedAtEpochMs="99"/>'

    vehicles = parse_vehicle_locations(payload, FETCHED_AT_MS)

    assert len(vehicles) == 1
    assert vehicles[0].observed_at_epoch_ms == FETCHED_AT_MS - 5000
    assert vehicles[0].raw["observedAtEpochMs"] == "99"


def test_attributes_named_like_fields_stay_in_raw() -> None:
    payload = (
        '<vehicle id="1" routeTag="E" lat="37.0" lon="-122.0" secsSinceReport="5"'
        ' raw="x" route_tag="bogus" observed_at_epoch_ms="1"/>'
    )

    vehicles = parse_vehicle_locations(payload, FETCHED_AT_MS)

    assert len(vehicles) == 1
    vehicle = vehicles[0]
    assert vehicle.route_tag == "E"
    assert vehicle.observed_at_epoch_ms == FETCHED_AT_MS - 5000
    assert vehicle.raw["raw"] == "x"
    assert vehicle.raw["route_tag"] == "bogus"
