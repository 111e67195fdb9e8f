from typing import List
from fastapi import APIRouter, Depends, Query
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_trip_service, get_ride_generator
from app.models.user.user import User
from app.schemas.itineraries.route import (
    AnchorPoint, GenerateRideRequest, RideDraft, RideEstimateRequest, RideEstimateResponse, RouteEstimate,
    RouteRequest, TravelMode
)
from app.services.itineraries.ride_generator import RideGenerator, collect_anchor_points
from app.services.trips.trip_service import TripService

router = APIRouter(tags=["Rides"])


@router.get("/trips/{trip_id}/anchors", response_model=List[AnchorPoint])
async def list_anchor_points(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.get_trip_for_viewer(trip_id, current_user.id)
    return collect_anchor_points(trip)


@router.post("/trips/{trip_id}/rides/generate", response_model=RideDraft)
async def generate_ride(
    trip_id: str,
    body: GenerateRideRequest,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
    ride_generator: RideGenerator = Depends(get_ride_generator)
):
    # Returns a draft only; the client appends it through POST /trips/{id}/rides
    trip = await trip_service.get_trip_for_viewer(trip_id, current_user.id)
    return await ride_generator.generate_for_trip(trip, body.start_anchor_id, body.end_anchor_id)


@router.post("/rides/calculate-route", response_model=RideDraft)
async def calculate_route(
    body: RouteRequest,
    current_user: User = Depends(get_current_user),
    ride_generator: RideGenerator = Depends(get_ride_generator)
):
    return await ride_generator.generate_between_addresses(
        origin=body.origin,
        destination=body.destination,
        origin_label=body.origin_label,
        destination_label=body.destination_label,
    )


@router.get("/rides/distance", response_model=RouteEstimate)
async def ride_distance(
    origin: str = Query(..., alias="from", min_length=1),
    destination: str = Query(..., alias="to", min_length=1),
    mode: TravelMode = Query("driving"),
    current_user: User = Depends(get_current_user),
    ride_generator: RideGenerator = Depends(get_ride_generator)
):
    return await ride_generator.distance(origin, destination, mode)


@router.post("/rides/estimate", response_model=RideEstimateResponse)
async def estimate_ride(
    body: RideEstimateRequest,
    current_user: User = Depends(get_current_user),
    ride_generator: RideGenerator = Depends(get_ride_generator)
):
    return await ride_generator.estimate(body.pickup, body.dropoff, body.modes)
