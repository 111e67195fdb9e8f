from pydantic import BaseModel, field_validator
from typing import ClassVar, Literal, Optional, Tuple, Type
from datetime import date
from enum import Enum
from app.utils.time_utils import normalize_time, parse_date, split_date_time


class SubResource(BaseModel):
    """
    Common capability set of the four itinerary record shapes.

    ``date_key`` picks the calendar day the record belongs to and ``time_key``
    the ``HH:MM`` it is shown at on that day (None when it carries no time).
    """

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()

    class Config:
        extra = "allow"

    @classmethod
    def required_fields(cls) -> Tuple[str, ...]:
        return cls.REQUIRED_FIELDS

    def date_key(self) -> Optional[date]:
        raise NotImplementedError

    def time_key(self) -> Optional[str]:
        return None


class TerminalInfo(BaseModel):
    departure: Optional[str] = None
    arrival: Optional[str] = None


class FlightSegment(SubResource):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("flight_number", "departure_date_time", "arrival_date_time")

    airline: Optional[str] = None
    flight_number: str
    departure_airport_code: Optional[str] = None
    arrival_airport_code: Optional[str] = None
    departure_date_time: str
    arrival_date_time: str
    duration_minutes: Optional[int] = None
    aircraft_type: Optional[str] = None
    terminal: Optional[TerminalInfo] = None
    gate: Optional[TerminalInfo] = None
    cost: Optional[float] = None
    number_of_tickets: Optional[int] = None
    cost_type: Optional[Literal["per-ticket", "total"]] = None
    carry_on: Optional[bool] = None
    checked_bag: Optional[bool] = None
    booking_number: Optional[str] = None
    booking_agency: Optional[str] = None

    @field_validator("departure_date_time", "arrival_date_time")
    @classmethod
    def check_date_time(cls, value: str) -> str:
        day, _ = split_date_time(value)
        if day is None:
            raise ValueError("expected YYYY-MM-DDTHH:MM")
        parse_date(day)
        return value

    def departure_date(self) -> Optional[date]:
        return parse_date(split_date_time(self.departure_date_time)[0])

    def departure_time(self) -> Optional[str]:
        return split_date_time(self.departure_date_time)[1]

    def arrival_date(self) -> Optional[date]:
        return parse_date(split_date_time(self.arrival_date_time)[0])

    def arrival_time(self) -> Optional[str]:
        return split_date_time(self.arrival_date_time)[1]

    def date_key(self) -> Optional[date]:
        return self.departure_date()

    def time_key(self) -> Optional[str]:
        return self.departure_time()


class HotelBooking(SubResource):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "check_in", "check_out")

    place_id: Optional[str] = None
    name: str
    address: Optional[str] = None
    check_in: date
    check_out: date
    nights: Optional[int] = None
    cost: Optional[float] = None
    rating: Optional[float] = None
    meal_plan: Optional[str] = None
    room_type: Optional[str] = None
    distance_from_airport: Optional[str] = None
    travel_time_from_airport: Optional[str] = None

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def strip_time(cls, value):
        if isinstance(value, str):
            return value.strip()[:10]
        return value

    def date_key(self) -> Optional[date]:
        return self.check_in


class RideLeg(SubResource):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("pickup", "dropoff")

    type: Literal["taxi", "rental"] = "taxi"
    pickup: str
    dropoff: str
    pickup_place_id: Optional[str] = None
    dropoff_place_id: Optional[str] = None
    distance: Optional[str] = None
    duration: Optional[str] = None
    distance_meters: Optional[int] = None
    duration_seconds: Optional[int] = None
    mode: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    date_time: Optional[str] = None
    cost: Optional[float] = None
    notes: Optional[str] = None
    # rental legs
    rental_company: Optional[str] = None
    voucher_number: Optional[str] = None
    pickup_date: Optional[str] = None
    pickup_time: Optional[str] = None
    return_date: Optional[str] = None
    return_time: Optional[str] = None

    def date_key(self):
        for candidate in (self.date, split_date_time(self.date_time)[0], self.pickup_date):
            if candidate:
                try:
                    return parse_date(candidate)
                except ValueError:
                    continue
        return None

    def time_key(self) -> Optional[str]:
        return (
            normalize_time(self.time)
            or split_date_time(self.date_time)[1]
            or normalize_time(self.pickup_time)
        )


class AttractionVisit(SubResource):
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "scheduled_date")

    place_id: Optional[str] = None
    name: str
    address: Optional[str] = None
    scheduled_date: date
    scheduled_time: Optional[str] = None
    rating: Optional[float] = None
    website: Optional[str] = None
    cost: Optional[float] = None
    number_of_tickets: Optional[int] = None
    cost_type: Optional[Literal["per-ticket", "total"]] = None

    @field_validator("scheduled_date", mode="before")
    @classmethod
    def strip_time(cls, value):
        if isinstance(value, str):
            return value.strip()[:10]
        return value

    def date_key(self) -> Optional[date]:
        return self.scheduled_date

    def time_key(self) -> Optional[str]:
        return normalize_time(self.scheduled_time)


class SubResourceKind(str, Enum):
    flights = "flights"
    hotels = "hotels"
    rides = "rides"
    attractions = "attractions"

    @property
    def model(self) -> Type[SubResource]:
        return _KIND_MODELS[self]


_KIND_MODELS = {
    SubResourceKind.flights: FlightSegment,
    SubResourceKind.hotels: HotelBooking,
    SubResourceKind.rides: RideLeg,
    SubResourceKind.attractions: AttractionVisit,
}
