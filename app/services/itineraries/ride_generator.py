from typing import Iterable, List, Optional
from app.core.exceptions import ExternalServiceError, RouteUnavailable, ValidationError
from app.core.logger import logger
from app.schemas.itineraries.route import (
    AnchorPoint, RideDraft, RideEstimateResponse, RidePlace, RouteEstimate, TravelMode
)
from app.schemas.trip.trip_schema import Trip
from app.services.distance.distance_service import DistanceService
from app.utils.time_utils import normalize_time, split_date_time


def collect_anchor_points(trip: Trip) -> List[AnchorPoint]:
    """Every location of a trip a ride can start or end at."""
    anchors: List[AnchorPoint] = []

    for index, flight in enumerate(trip.flights):
        if flight.departure_airport_code:
            day, time = split_date_time(flight.departure_date_time)
            anchors.append(AnchorPoint(
                id=f"flight-dep-{index}",
                type="airport",
                label=f"{flight.departure_airport_code} Airport",
                address=flight.departure_airport_code,
                date=day,
                time=time,
            ))
        if flight.arrival_airport_code:
            day, time = split_date_time(flight.arrival_date_time)
            anchors.append(AnchorPoint(
                id=f"flight-arr-{index}",
                type="airport",
                label=f"{flight.arrival_airport_code} Airport",
                address=flight.arrival_airport_code,
                date=day,
                time=time,
            ))

    for index, hotel in enumerate(trip.hotels):
        if hotel.address:
            anchors.append(AnchorPoint(
                id=f"hotel-{index}",
                type="hotel",
                label=hotel.name,
                address=hotel.address,
                date=hotel.check_in.isoformat(),
            ))

    for index, attraction in enumerate(trip.attractions):
        if attraction.address:
            anchors.append(AnchorPoint(
                id=f"attraction-{index}",
                type="attraction",
                label=attraction.name,
                address=attraction.address,
                date=attraction.scheduled_date.isoformat(),
                time=normalize_time(attraction.scheduled_time),
            ))

    return anchors


def find_anchor(anchors: List[AnchorPoint], anchor_id: str) -> AnchorPoint:
    for anchor in anchors:
        if anchor.id == anchor_id:
            return anchor
    raise ValidationError(f"Unknown anchor point '{anchor_id}'")


class RideGenerator:
    """Builds draft rides between anchor points. Drafts are never persisted here."""

    def __init__(self, distance_service: DistanceService):
        self.distance_service = distance_service

    async def generate(self, start: AnchorPoint, end: AnchorPoint) -> RideDraft:
        return await self.generate_between_addresses(
            origin=start.address,
            destination=end.address,
            origin_label=start.label,
            destination_label=end.label,
            date=start.date,
            time=start.time,
        )

    async def generate_between_addresses(
        self,
        origin: str,
        destination: str,
        origin_label: Optional[str] = None,
        destination_label: Optional[str] = None,
        date: Optional[str] = None,
        time: Optional[str] = None,
    ) -> RideDraft:
        """Raises RouteUnavailable / UpstreamRateLimited when the route cannot be computed."""
        route = await self.distance_service.get_route(origin, destination)
        logger.info(f"Generated ride draft {origin} -> {destination}")
        return RideDraft(
            pickup=origin_label or origin,
            dropoff=destination_label or destination,
            distance=route.distance,
            duration=route.duration,
            distance_meters=route.distance_meters,
            duration_seconds=route.duration_seconds,
            origin_address=route.origin_address or origin,
            destination_address=route.destination_address or destination,
            date=date,
            time=time,
        )

    async def generate_for_trip(self, trip: Trip, start_anchor_id: str, end_anchor_id: str) -> RideDraft:
        anchors = collect_anchor_points(trip)
        start = find_anchor(anchors, start_anchor_id)
        end = find_anchor(anchors, end_anchor_id)
        if start.id == end.id:
            raise ValidationError("Start and end anchor points must differ")
        return await self.generate(start, end)

    async def distance(self, origin: str, destination: str, mode: TravelMode = "driving") -> RouteEstimate:
        route = await self.distance_service.get_route(origin, destination, mode)
        return RouteEstimate(mode=mode, **route.model_dump())

    async def estimate(self, pickup: RidePlace, dropoff: RidePlace, modes: Iterable[TravelMode]) -> RideEstimateResponse:
        """
        Route the same leg once per travel mode.

        Modes that fail are skipped; RouteUnavailable is raised only when no
        mode could be routed.
        """
        origin = place_query(pickup, "pickup")
        destination = place_query(dropoff, "dropoff")

        estimates = []
        last_error: Optional[ExternalServiceError] = None
        for mode in dict.fromkeys(modes):
            try:
                estimates.append(await self.distance(origin, destination, mode))
            except ExternalServiceError as exc:
                logger.warning(f"No {mode} estimate for {origin} -> {destination}: {exc.message}")
                last_error = exc

        if not estimates:
            raise RouteUnavailable(
                "Could not calculate distance for any mode",
                upstream_status=last_error.upstream_status if last_error else None,
            )
        return RideEstimateResponse(pickup=pickup, dropoff=dropoff, estimates=estimates)


def place_query(place: RidePlace, role: str) -> str:
    """Distance Matrix origin/destination for a place: its place id when known, else its address or name."""
    if place.place_id:
        return f"place_id:{place.place_id}"
    query = place.formatted_address or place.name
    if not query:
        raise ValidationError(f"{role} needs a place_id, formatted_address or name", missing_fields=[f"{role}.place_id"])
    return query
