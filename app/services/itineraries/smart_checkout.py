"""
Smart checkout: suggests when to leave a hotel on the day of an outbound flight.

The advisory is optional enrichment. Any failure of the distance lookup is
logged and absorbed so the itinerary falls back to the default checkout time.
"""
import math
import re
from datetime import date, timedelta
from typing import Iterable, List, Optional

from app.core.config import settings
from app.core.exceptions import AdvisoryUnavailable, ExternalServiceError
from app.core.logger import logger
from app.schemas.itineraries.itinerary import CheckoutAdvisory
from app.schemas.itineraries.route import DistanceResult
from app.schemas.trip.sub_resources import FlightSegment, HotelBooking, RideLeg
from app.services.distance.distance_service import DistanceService
from app.utils.time_utils import format_minutes, minutes_of_day, normalize_time


def _contains(haystack: Optional[str], needle: Optional[str]) -> bool:
    if not haystack or not needle:
        return False
    return needle.strip().lower() in haystack.strip().lower()


def _mentions_code(text: Optional[str], code: Optional[str]) -> bool:
    """Whole-word, case-insensitive match of an airport code."""
    if not text or not code or not code.strip():
        return False
    return re.search(rf"\b{re.escape(code.strip())}\b", text, re.IGNORECASE) is not None


def ride_exists(
    rides: Iterable[RideLeg],
    on_date: date,
    airport_code: str,
    hotel_name: Optional[str] = None,
    hotel_address: Optional[str] = None,
) -> bool:
    """True when a ride on ``on_date`` already goes from the hotel to the airport."""
    for ride in rides:
        if ride.date_key() != on_date:
            continue
        from_hotel = _contains(ride.pickup, hotel_name) or _contains(ride.pickup, hotel_address)
        if from_hotel and _mentions_code(ride.dropoff, airport_code):
            return True
    return False


def earliest_departure(flights: Iterable[FlightSegment], on_date: date) -> Optional[FlightSegment]:
    """Earliest timed flight departing on ``on_date``; the first one listed wins ties."""
    departing = [f for f in flights if f.departure_date() == on_date and f.departure_time()]
    if not departing:
        return None
    return min(departing, key=lambda f: f.departure_time())


class SmartCheckoutCalculator:
    def __init__(
        self,
        distance_service: DistanceService,
        late_night_threshold: str = settings.LATE_NIGHT_FLIGHT_THRESHOLD,
        buffer_minutes: int = settings.CHECKOUT_BUFFER_MINUTES,
    ):
        self.distance_service = distance_service
        self.late_night_threshold = normalize_time(late_night_threshold) or "00:00"
        self.buffer_minutes = max(0, buffer_minutes)

    async def advise(
        self,
        hotel: HotelBooking,
        flights: List[FlightSegment],
        rides: Iterable[RideLeg] = (),
        hotel_index: Optional[int] = None,
    ) -> Optional[CheckoutAdvisory]:
        """Advisory for a hotel in a trip, or None when no flight leaves on its checkout day."""
        flight = earliest_departure(flights, hotel.check_out)
        if flight is None:
            return None
        if not hotel.address or not flight.departure_airport_code:
            logger.info(f"No smart checkout for {hotel.name}: missing hotel address or airport code")
            return None

        return await self.advise_for_departure(
            hotel_address=hotel.address,
            airport_code=flight.departure_airport_code,
            checkout_date=hotel.check_out,
            departure_time=flight.departure_time(),
            hotel_name=hotel.name,
            flight_number=flight.flight_number,
            rides=rides,
            hotel_index=hotel_index,
        )

    async def advise_for_departure(
        self,
        hotel_address: str,
        airport_code: str,
        checkout_date: date,
        departure_time: str,
        hotel_name: Optional[str] = None,
        flight_number: Optional[str] = None,
        rides: Iterable[RideLeg] = (),
        hotel_index: Optional[int] = None,
    ) -> Optional[CheckoutAdvisory]:
        try:
            drive = await self._drive_to_airport(hotel_address, airport_code)
        except AdvisoryUnavailable as exc:
            logger.warning(f"Smart checkout unavailable for {hotel_name or hotel_address}: {exc.message} ({exc.upstream_status})")
            return None

        departure_time = normalize_time(departure_time)
        if departure_time is None:
            logger.warning(f"Smart checkout skipped for {hotel_name or hotel_address}: flight has no departure time")
            return None
        flight_ref = f"flight {flight_number}" if flight_number else "your flight"
        should_create_ride = not ride_exists(rides, checkout_date, airport_code, hotel_name, hotel_address)

        advisory = CheckoutAdvisory(
            hotel_index=hotel_index,
            hotel_name=hotel_name,
            checkout_date=checkout_date,
            flight_number=flight_number,
            airport_code=airport_code,
            flight_departure_time=departure_time,
            drive_distance=drive.distance,
            drive_duration=drive.duration,
            drive_duration_seconds=drive.duration_seconds,
            should_create_ride=should_create_ride,
            message="",
        )

        if departure_time < self.late_night_threshold:
            night_before = checkout_date - timedelta(days=1)
            advisory.late_night_flight = True
            advisory.message = (
                f"Late-night flight: {flight_ref} leaves {airport_code} at {departure_time} "
                f"({drive.duration} drive). Plan to check out the night before ({night_before.isoformat()})."
            )
            return advisory

        drive_minutes = math.ceil(drive.duration_seconds / 60)
        leave_at = minutes_of_day(departure_time) - drive_minutes - self.buffer_minutes
        # clamped to 00:00 of the checkout day
        advisory.checkout_time = format_minutes(leave_at)
        advisory.message = (
            f"Check out by {advisory.checkout_time} to reach {airport_code} "
            f"({drive.duration} drive) for {flight_ref} at {departure_time}."
        )
        return advisory

    async def _drive_to_airport(self, hotel_address: str, airport_code: str) -> DistanceResult:
        try:
            return await self.distance_service.get_route(hotel_address, airport_code)
        except ExternalServiceError as exc:
            raise AdvisoryUnavailable(exc.message, upstream_status=exc.upstream_status) from exc
