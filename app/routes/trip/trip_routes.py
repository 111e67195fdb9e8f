from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends, status
from app.schemas.trip.trip_schema import TripCreate, TripUpdate, TripResponse
from app.models.user.user import User
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_trip_service
from app.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=['Trips'])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    created = await trip_service.create_trip(trip, current_user.id)
    return TripResponse.for_viewer(created, current_user.id)


@router.get("", response_model=List[TripResponse])
async def get_my_trips(
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    trips = await trip_service.list_trips(current_user.id)
    return [TripResponse.for_viewer(trip, current_user.id) for trip in trips]


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.get_trip_for_viewer(trip_id, current_user.id)
    return TripResponse.for_viewer(trip, current_user.id)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip_route(
    trip_id: str,
    trip_update: TripUpdate,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    updated = await trip_service.update_trip(trip_id, trip_update, current_user.id)
    return TripResponse.for_viewer(updated, current_user.id)


@router.delete("/{trip_id}")
async def delete_trip_route(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    await trip_service.delete_trip(trip_id, current_user.id)
    return {"success": True, "message": "Trip deleted successfully"}


# Sub-resources: kind is one of flights | hotels | rides | attractions
@router.post("/{trip_id}/{kind}", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def add_sub_resource(
    trip_id: str,
    kind: str,
    item: Dict[str, Any] = Body(...),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    updated = await trip_service.append_sub_resource(trip_id, kind, item, current_user.id)
    return TripResponse.for_viewer(updated, current_user.id)


@router.delete("/{trip_id}/{kind}/{index}", response_model=TripResponse)
async def remove_sub_resource(
    trip_id: str,
    kind: str,
    index: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    updated = await trip_service.remove_sub_resource(trip_id, kind, index, current_user.id)
    return TripResponse.for_viewer(updated, current_user.id)
