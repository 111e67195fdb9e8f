from typing import Dict, Optional
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.logger import logger
from app.schemas.itineraries.itinerary import (
    CheckoutAdvisory, ItineraryResponse, SmartCheckoutRequest, SmartCheckoutResponse
)
from app.schemas.trip.trip_schema import Trip
from app.services.itineraries.day_buckets import checkout_marker_time, group_trip_by_day, unscheduled_rides
from app.services.itineraries.smart_checkout import SmartCheckoutCalculator
from app.utils.time_utils import parse_date, split_date_time


class ItineraryService:
    def __init__(self, calculator: SmartCheckoutCalculator):
        self.calculator = calculator

    async def checkout_advisories(self, trip: Trip) -> Dict[int, CheckoutAdvisory]:
        """Smart checkout advisories keyed by hotel index; hotels without one are left out."""
        advisories = {}
        for index, hotel in enumerate(trip.hotels):
            advisory = await self.calculator.advise(hotel, trip.flights, trip.rides, hotel_index=index)
            if advisory is not None:
                advisories[index] = advisory
        return advisories

    async def build_itinerary(self, trip: Trip, smart_checkout: bool = True) -> ItineraryResponse:
        advisories = await self.checkout_advisories(trip) if smart_checkout else {}
        days = group_trip_by_day(trip, advisories)
        logger.info(f"Itinerary for trip {trip.id}: {len(days)} days, {len(advisories)} checkout advisories")
        return ItineraryResponse(
            trip_id=trip.id,
            start_date=trip.start_date,
            end_date=trip.end_date,
            days=days,
            advisories=list(advisories.values()),
            unscheduled_rides=[ride for _, ride in unscheduled_rides(trip)],
        )

    async def smart_checkout(self, request: SmartCheckoutRequest, trip: Optional[Trip] = None) -> SmartCheckoutResponse:
        day, time = split_date_time(request.flight_departure)
        try:
            checkout_date = parse_date(day)
        except ValueError:
            checkout_date = None
        if checkout_date is None or time is None:
            raise ValidationError("flight_departure must look like YYYY-MM-DDTHH:MM", missing_fields=["flight_departure"])

        advisory = await self.calculator.advise_for_departure(
            hotel_address=request.hotel_address,
            airport_code=request.airport_code,
            checkout_date=checkout_date,
            departure_time=time,
            hotel_name=request.hotel_name,
            flight_number=request.flight_number,
            rides=trip.rides if trip else (),
        )
        return SmartCheckoutResponse(
            checkout_time=checkout_marker_time(advisory, settings.DEFAULT_CHECKOUT_TIME),
            advisory=advisory,
        )
