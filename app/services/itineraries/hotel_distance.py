"""Airport-to-hotel distance, optionally written back onto a trip's hotel booking."""
from typing import Optional

from app.core.exceptions import IndexOutOfRange, ValidationError
from app.core.logger import logger
from app.schemas.itineraries.route import AirportDistance
from app.schemas.trip.sub_resources import HotelBooking
from app.schemas.trip.trip_schema import Trip
from app.services.distance.distance_service import DistanceService
from app.services.trips.trip_service import TripService


def hotel_query(hotel_place_id: Optional[str] = None, hotel_address: Optional[str] = None) -> str:
    if hotel_place_id:
        return f"place_id:{hotel_place_id}"
    if hotel_address:
        return hotel_address
    raise ValidationError("hotel_place_id or hotel_address is required", missing_fields=["hotel_place_id"])


def arrival_airport_for(trip: Trip, hotel: HotelBooking) -> Optional[str]:
    """Arrival airport of the last flight landing on the hotel's check-in day."""
    landing = [
        f for f in trip.flights
        if f.arrival_date() == hotel.check_in and f.arrival_airport_code
    ]
    if not landing:
        return None
    return max(landing, key=lambda f: f.arrival_time() or "").arrival_airport_code


async def distance_from_airport(
    distance_service: DistanceService,
    airport_code: str,
    hotel_place_id: Optional[str] = None,
    hotel_address: Optional[str] = None,
) -> AirportDistance:
    """Driving distance from the airport to the hotel. Lookup failures propagate."""
    hotel = hotel_query(hotel_place_id, hotel_address)
    route = await distance_service.get_route(airport_code, hotel)
    return AirportDistance(airport_code=airport_code, hotel=hotel, **route.model_dump())


async def annotate_hotel_from_airport(
    trip_service: TripService,
    distance_service: DistanceService,
    trip_id: str,
    index: int,
    user_id: int,
    airport_code: Optional[str] = None,
) -> Trip:
    """Fill ``distance_from_airport`` and ``travel_time_from_airport`` of hotel ``index``."""
    trip = await trip_service.get_trip_for_owner(trip_id, user_id)
    if index < 0 or index >= len(trip.hotels):
        raise IndexOutOfRange("hotels", index, len(trip.hotels))

    hotel = trip.hotels[index]
    airport_code = airport_code or arrival_airport_for(trip, hotel)
    if not airport_code:
        raise ValidationError("airport_code is required: no flight lands on the check-in day",
                              missing_fields=["airport_code"])

    result = await distance_from_airport(distance_service, airport_code, hotel.place_id, hotel.address)

    def annotate(current: Trip) -> Trip:
        hotels = list(current.hotels)
        if index >= len(hotels):
            raise IndexOutOfRange("hotels", index, len(hotels))
        hotels[index] = hotels[index].model_copy(update={
            "distance_from_airport": result.distance,
            "travel_time_from_airport": result.duration,
        })
        return current.model_copy(update={"hotels": hotels})

    updated = await trip_service.mutate(trip_id, annotate)
    logger.info(f"Hotel #{index} of trip {trip_id} is {result.distance} from {airport_code}")
    return updated
