from pydantic import BaseModel
from datetime import date as dt
from typing import Any, Dict, List, Literal, Optional
from app.schemas.trip.sub_resources import FlightSegment, HotelBooking, RideLeg, AttractionVisit

EventKind = Literal["flight", "hotel_checkin", "hotel_checkout", "ride", "attraction"]


class TimelineEvent(BaseModel):
    kind: EventKind
    time: Optional[str] = None
    title: str
    # position of the source record in its trip collection
    index: int
    synthesized: bool = False
    details: Dict[str, Any] = {}


class DayBucket(BaseModel):
    date: dt
    flights: List[FlightSegment] = []
    hotels: List[HotelBooking] = []
    rides: List[RideLeg] = []
    attractions: List[AttractionVisit] = []
    events: List[TimelineEvent] = []


class CheckoutAdvisory(BaseModel):
    hotel_index: Optional[int] = None
    hotel_name: Optional[str] = None
    checkout_date: dt
    flight_number: Optional[str] = None
    airport_code: str
    flight_departure_time: str
    drive_distance: Optional[str] = None
    drive_duration: Optional[str] = None
    drive_duration_seconds: Optional[int] = None
    checkout_time: Optional[str] = None
    late_night_flight: bool = False
    should_create_ride: bool = False
    message: str


class ItineraryResponse(BaseModel):
    trip_id: str
    start_date: dt
    end_date: dt
    days: List[DayBucket]
    advisories: List[CheckoutAdvisory] = []
    unscheduled_rides: List[RideLeg] = []


class SmartCheckoutRequest(BaseModel):
    hotel_address: str
    airport_code: str
    # naive local departure, YYYY-MM-DDTHH:MM
    flight_departure: str
    hotel_name: Optional[str] = None
    flight_number: Optional[str] = None
    trip_id: Optional[str] = None


class SmartCheckoutResponse(BaseModel):
    checkout_time: Optional[str]
    advisory: Optional[CheckoutAdvisory] = None
