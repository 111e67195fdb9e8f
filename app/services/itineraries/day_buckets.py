"""
Day bucketing: turns a trip into one bucket per calendar day.

Buckets are a pure view over a trip snapshot. Each bucket keeps the records
that belong to the day, grouped per kind in insertion order, plus a timeline of
events (real records and synthesised hotel markers) sorted by time of day.
"""
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple

from app.core.config import settings
from app.schemas.itineraries.itinerary import CheckoutAdvisory, DayBucket, TimelineEvent
from app.schemas.trip.sub_resources import RideLeg
from app.schemas.trip.trip_schema import Trip
from app.utils.time_utils import date_range


def timeline_sort_key(event: TimelineEvent) -> Tuple[int, str]:
    # untimed events first; HH:MM is zero padded so string order is time order
    if event.time is None:
        return (0, "")
    return (1, event.time)


def sort_timeline(events: List[TimelineEvent]) -> List[TimelineEvent]:
    """Stable sort, so equal keys keep insertion order."""
    return sorted(events, key=timeline_sort_key)


def checkout_marker_time(advisory: Optional[CheckoutAdvisory], default: str) -> Optional[str]:
    if advisory is None:
        return default
    if advisory.late_night_flight:
        return None
    return advisory.checkout_time or default


def unscheduled_rides(trip: Trip) -> List[Tuple[int, RideLeg]]:
    """Rides with no date, no date_time and no pickup_date: they fit in no bucket."""
    return [(index, ride) for index, ride in enumerate(trip.rides) if ride.date_key() is None]


def group_trip_by_day(
    trip: Trip,
    advisories: Optional[Mapping[int, CheckoutAdvisory]] = None,
    checkin_time: str = settings.DEFAULT_CHECKIN_TIME,
    checkout_time: str = settings.DEFAULT_CHECKOUT_TIME,
) -> List[DayBucket]:
    """
    Bucket every record of ``trip`` by calendar day.

    Args:
        trip: trip snapshot, not modified
        advisories: smart checkout advisories keyed by hotel index; they
            replace the default checkout marker time for that hotel
        checkin_time: time of the synthesised check-in marker
        checkout_time: default time of the synthesised checkout marker

    Returns:
        Buckets in ascending date order. Every day of the trip range is
        present even when empty; records dated outside the range get a bucket
        of their own instead of being dropped.
    """
    advisories = advisories or {}
    buckets: Dict[date, DayBucket] = {day: DayBucket(date=day) for day in date_range(trip.start_date, trip.end_date)}

    def bucket_for(day: date) -> DayBucket:
        if day not in buckets:
            buckets[day] = DayBucket(date=day)
        return buckets[day]

    for index, flight in enumerate(trip.flights):
        bucket = bucket_for(flight.date_key())
        bucket.flights.append(flight)
        bucket.events.append(TimelineEvent(
            kind="flight",
            time=flight.time_key(),
            title=f"{flight.airline or ''} {flight.flight_number}".strip(),
            index=index,
            details={
                "from": flight.departure_airport_code,
                "to": flight.arrival_airport_code,
                "arrival_time": flight.arrival_time(),
            },
        ))

    for index, hotel in enumerate(trip.hotels):
        bucket = bucket_for(hotel.check_in)
        bucket.hotels.append(hotel)
        bucket.events.append(TimelineEvent(
            kind="hotel_checkin",
            time=checkin_time,
            title=f"Check-in: {hotel.name}",
            index=index,
            synthesized=True,
            details={"address": hotel.address},
        ))

        advisory = advisories.get(index)
        details = {"address": hotel.address, "smart_checkout": advisory is not None}
        if advisory is not None:
            details["late_night_flight"] = advisory.late_night_flight
            details["message"] = advisory.message
        bucket_for(hotel.check_out).events.append(TimelineEvent(
            kind="hotel_checkout",
            time=checkout_marker_time(advisory, checkout_time),
            title=f"Check-out: {hotel.name}",
            index=index,
            synthesized=True,
            details=details,
        ))

    for index, ride in enumerate(trip.rides):
        day = ride.date_key()
        if day is None:
            continue
        bucket = bucket_for(day)
        bucket.rides.append(ride)
        bucket.events.append(TimelineEvent(
            kind="ride",
            time=ride.time_key(),
            title=f"{ride.pickup} to {ride.dropoff}",
            index=index,
            details={"type": ride.type, "duration": ride.duration, "distance": ride.distance},
        ))

    for index, attraction in enumerate(trip.attractions):
        bucket = bucket_for(attraction.date_key())
        bucket.attractions.append(attraction)
        bucket.events.append(TimelineEvent(
            kind="attraction",
            time=attraction.time_key(),
            title=attraction.name,
            index=index,
            details={"address": attraction.address},
        ))

    for bucket in buckets.values():
        bucket.events = sort_timeline(bucket.events)

    return [buckets[day] for day in sorted(buckets)]
