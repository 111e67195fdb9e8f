"""Tests for the smart checkout calculator."""

from datetime import date

import pytest

from app.core.exceptions import RouteUnavailable, UpstreamRateLimited
from app.schemas.trip.sub_resources import FlightSegment, HotelBooking, RideLeg
from app.services.itineraries.day_buckets import checkout_marker_time
from app.services.itineraries.smart_checkout import SmartCheckoutCalculator, earliest_departure, ride_exists
from tests.factories import flight_payload, hotel_payload

CHECKOUT_DAY = date(2025, 6, 3)


def _hotel(**overrides) -> HotelBooking:
    return HotelBooking(**hotel_payload(**overrides))


def _outbound(departure: str, number: str = "TP200") -> FlightSegment:
    return FlightSegment(**flight_payload(
        number=number, departure=departure, arrival="2025-06-03T23:00", origin="LIS", destination="JFK",
    ))


async def test_no_flight_on_checkout_day_gives_no_advisory(distance_service) -> None:
    calculator = SmartCheckoutCalculator(distance_service)

    advisory = await calculator.advise(_hotel(), [FlightSegment(**flight_payload())])

    assert advisory is None
    assert checkout_marker_time(advisory, "12:00") == "12:00"
    assert distance_service.calls == []


async def test_checkout_is_departure_minus_drive(distance_service) -> None:
    distance_service.duration_seconds = 1800
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00", buffer_minutes=0)

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T10:00")], hotel_index=0)

    assert advisory.checkout_time == "09:30"
    assert advisory.late_night_flight is False
    assert advisory.should_create_ride is True
    assert advisory.hotel_index == 0
    assert advisory.airport_code == "LIS"
    assert distance_service.calls == [("Rua Augusta 10, Lisbon", "LIS")]


async def test_partial_drive_minutes_round_up(distance_service) -> None:
    distance_service.duration_seconds = 1850
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00")

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T10:00")])

    assert advisory.checkout_time == "09:29"


async def test_buffer_is_subtracted(distance_service) -> None:
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00", buffer_minutes=90)

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T12:00")])

    assert advisory.checkout_time == "10:00"


async def test_early_flight_is_flagged_late_night(distance_service) -> None:
    distance_service.duration_seconds = 600
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00")

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T03:00")])

    assert advisory.late_night_flight is True
    assert advisory.checkout_time is None
    assert "2025-06-02" in advisory.message
    assert checkout_marker_time(advisory, "12:00") is None


async def test_checkout_clamps_to_midnight(distance_service) -> None:
    distance_service.duration_seconds = 3600
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="00:00")

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T00:20")])

    assert advisory.late_night_flight is False
    assert advisory.checkout_time == "00:00"


async def test_earliest_flight_of_the_day_wins(distance_service) -> None:
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00")
    flights = [_outbound("2025-06-03T14:00", "TP300"), _outbound("2025-06-03T09:00", "TP100")]

    advisory = await calculator.advise(_hotel(), flights)

    assert advisory.flight_number == "TP100"
    assert earliest_departure(flights, CHECKOUT_DAY).flight_number == "TP100"


async def test_existing_ride_suppresses_ride_suggestion(distance_service) -> None:
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00")
    rides = [RideLeg(pickup="Hotel Lux", dropoff="LIS Airport", date="2025-06-03", time="08:00")]

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T11:00")], rides)

    assert advisory.should_create_ride is False


def test_ride_on_another_day_does_not_count() -> None:
    rides = [RideLeg(pickup="Hotel Lux", dropoff="LIS Airport", date="2025-06-02")]

    assert ride_exists(rides, CHECKOUT_DAY, "LIS", hotel_name="Hotel Lux") is False


def test_airport_code_inside_a_word_is_not_the_airport() -> None:
    rides = [RideLeg(pickup="Hotel Lux", dropoff="Lisbon Oriente station", date="2025-06-03")]

    assert ride_exists(
        rides, CHECKOUT_DAY, "LIS", hotel_name="Hotel Lux", hotel_address="Rua Augusta 10, Lisbon"
    ) is False


def test_pickup_contained_in_hotel_address_is_not_the_hotel() -> None:
    rides = [RideLeg(pickup="Lisbon", dropoff="LIS Airport", date="2025-06-03")]

    assert ride_exists(
        rides, CHECKOUT_DAY, "LIS", hotel_name="Hotel Lux", hotel_address="Rua Augusta 10, Lisbon"
    ) is False


@pytest.mark.parametrize("dropoff", ["LIS Airport", "Airport (lis)", "Terminal 1, LIS"])
def test_airport_code_matches_as_a_word(dropoff: str) -> None:
    rides = [RideLeg(pickup="Rua Augusta 10, Lisbon", dropoff=dropoff, date="2025-06-03")]

    assert ride_exists(
        rides, CHECKOUT_DAY, "LIS", hotel_name="Hotel Lux", hotel_address="Rua Augusta 10, Lisbon"
    ) is True


async def test_distance_failure_is_absorbed(distance_service) -> None:
    distance_service.error = RouteUnavailable("no route", upstream_status="ZERO_RESULTS")
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00")

    advisory = await calculator.advise(_hotel(), [_outbound("2025-06-03T10:00")])

    assert advisory is None


async def test_rate_limit_is_absorbed(distance_service) -> None:
    distance_service.error = UpstreamRateLimited("quota", upstream_status="OVER_QUERY_LIMIT")
    calculator = SmartCheckoutCalculator(distance_service, late_night_threshold="06:00")

    assert await calculator.advise(_hotel(), [_outbound("2025-06-03T10:00")]) is None


async def test_hotel_without_address_is_skipped(distance_service) -> None:
    calculator = SmartCheckoutCalculator(distance_service)

    advisory = await calculator.advise(_hotel(address=None), [_outbound("2025-06-03T10:00")])

    assert advisory is None
    assert distance_service.calls == []
