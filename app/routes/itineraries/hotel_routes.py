from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_distance_service, get_trip_service
from app.models.user.user import User
from app.schemas.itineraries.route import AirportDistance, AirportDistanceRequest
from app.schemas.trip.trip_schema import TripResponse
from app.services.distance.distance_service import DistanceService
from app.services.itineraries.hotel_distance import annotate_hotel_from_airport, distance_from_airport
from app.services.trips.trip_service import TripService

router = APIRouter(tags=["Hotels"])


@router.get("/hotels/distance-from-airport", response_model=AirportDistance)
async def hotel_distance_from_airport(
    airport_code: str = Query(..., min_length=1),
    hotel_place_id: Optional[str] = Query(None),
    hotel_address: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    distance_service: DistanceService = Depends(get_distance_service)
):
    return await distance_from_airport(distance_service, airport_code, hotel_place_id, hotel_address)


@router.post("/trips/{trip_id}/hotels/{index}/airport-distance", response_model=TripResponse)
async def set_hotel_airport_distance(
    trip_id: str,
    index: int,
    body: AirportDistanceRequest,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
    distance_service: DistanceService = Depends(get_distance_service)
):
    updated = await annotate_hotel_from_airport(
        trip_service, distance_service, trip_id, index, current_user.id, body.airport_code
    )
    return TripResponse.for_viewer(updated, current_user.id)
