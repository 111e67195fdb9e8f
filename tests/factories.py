"""Builders for trips, sub-resource payloads and a fake distance lookup."""

from datetime import date
from typing import Dict, List, Optional, Tuple

from app.core.exceptions import TripPlannerError
from app.schemas.itineraries.route import DistanceResult
from app.schemas.trip.trip_schema import Trip
from app.utils.time_utils import format_duration

OWNER_ID = 1


class FakeDistanceService:
    """Stands in for the Distance Matrix lookup; records every call."""

    def __init__(self, duration_seconds: int = 1800, distance_meters: int = 12000) -> None:
        self.duration_seconds = duration_seconds
        self.distance_meters = distance_meters
        self.error: Optional[TripPlannerError] = None
        self.calls: List[Tuple[str, str]] = []
        self.modes: List[str] = []
        self.failing_modes: Dict[str, TripPlannerError] = {}

    async def get_route(self, origin: str, destination: str, mode: str = "driving") -> DistanceResult:
        self.calls.append((origin, destination))
        self.modes.append(mode)
        if self.error is not None:
            raise self.error
        if mode in self.failing_modes:
            raise self.failing_modes[mode]
        return DistanceResult(
            distance=f"{self.distance_meters / 1000:.1f} km",
            duration=format_duration(self.duration_seconds),
            distance_meters=self.distance_meters,
            duration_seconds=self.duration_seconds,
            origin_address=origin,
            destination_address=destination,
        )


def flight_payload(number="TP123", departure="2025-06-01T08:00", arrival="2025-06-01T10:00",
                   origin="JFK", destination="LIS", **extra) -> dict:
    return {
        "airline": "TAP",
        "flight_number": number,
        "departure_airport_code": origin,
        "arrival_airport_code": destination,
        "departure_date_time": departure,
        "arrival_date_time": arrival,
        **extra,
    }


def hotel_payload(name="Hotel Lux", check_in="2025-06-01", check_out="2025-06-03",
                  address="Rua Augusta 10, Lisbon", **extra) -> dict:
    return {"name": name, "address": address, "check_in": check_in, "check_out": check_out, **extra}


def make_trip(**overrides) -> Trip:
    data = {
        "id": "trip-1",
        "owner_id": OWNER_ID,
        "name": "Lisbon getaway",
        "destinations": ["Lisbon"],
        "start_date": date(2025, 6, 1),
        "end_date": date(2025, 6, 3),
    }
    data.update(overrides)
    return Trip.model_validate(data)
