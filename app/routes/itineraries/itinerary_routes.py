from fastapi import APIRouter, Depends, Query
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_trip_service, get_itinerary_service
from app.models.user.user import User
from app.schemas.itineraries.itinerary import ItineraryResponse, SmartCheckoutRequest, SmartCheckoutResponse
from app.services.itineraries.itinerary_service import ItineraryService
from app.services.trips.trip_service import TripService

router = APIRouter(tags=["Itinerary"])


@router.get("/trips/{trip_id}/itinerary", response_model=ItineraryResponse)
async def get_trip_itinerary(
    trip_id: str,
    smart_checkout: bool = Query(True),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    """Day-by-day view of a trip, with smart checkout applied to each hotel stay."""
    trip = await trip_service.get_trip_for_viewer(trip_id, current_user.id)
    return await itinerary_service.build_itinerary(trip, smart_checkout=smart_checkout)


@router.post("/itinerary/smart-checkout", response_model=SmartCheckoutResponse)
async def calculate_smart_checkout(
    body: SmartCheckoutRequest,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
    itinerary_service: ItineraryService = Depends(get_itinerary_service)
):
    trip = None
    if body.trip_id:
        trip = await trip_service.get_trip_for_viewer(body.trip_id, current_user.id)
    return await itinerary_service.smart_checkout(body, trip)
