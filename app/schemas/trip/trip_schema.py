from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from app.schemas.trip.checklist import ChecklistCategory, UserChecklist
from app.schemas.trip.share import SharedUser
from app.schemas.trip.sub_resources import FlightSegment, HotelBooking, RideLeg, AttractionVisit


class TripBase(BaseModel):
    name: str
    destinations: List[str] = []
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class TripCreate(TripBase):
    flights: Optional[List[FlightSegment]] = None
    hotels: Optional[List[HotelBooking]] = None
    rides: Optional[List[RideLeg]] = None
    attractions: Optional[List[AttractionVisit]] = None
    checklist: Optional[List[ChecklistCategory]] = None


class Trip(TripBase):
    id: str
    owner_id: int
    flights: List[FlightSegment] = Field(default_factory=list)
    hotels: List[HotelBooking] = Field(default_factory=list)
    rides: List[RideLeg] = Field(default_factory=list)
    attractions: List[AttractionVisit] = Field(default_factory=list)
    checklist: List[ChecklistCategory] = Field(default_factory=list)
    user_checklists: List[UserChecklist] = Field(default_factory=list)
    shared_with: List[SharedUser] = Field(default_factory=list)
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_viewer(self, user_id: int) -> bool:
        return user_id == self.owner_id or any(s.user_id == user_id for s in self.shared_with)


class TripResponse(Trip):
    is_owner: bool = False
    is_shared: bool = False

    @classmethod
    def for_viewer(cls, trip: Trip, viewer_id: int) -> "TripResponse":
        """Response copy of a trip that only exposes the viewer's own personal checklist."""
        data = trip.model_dump()
        data["user_checklists"] = [uc for uc in data["user_checklists"] if uc["user_id"] == viewer_id]
        is_owner = trip.owner_id == viewer_id
        return cls(**data, is_owner=is_owner, is_shared=not is_owner)


class TripUpdate(BaseModel):
    name: Optional[str] = None
    destinations: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    flights: Optional[List[FlightSegment]] = None
    hotels: Optional[List[HotelBooking]] = None
    rides: Optional[List[RideLeg]] = None
    attractions: Optional[List[AttractionVisit]] = None
    checklist: Optional[List[ChecklistCategory]] = None
    # when given, the write is rejected if the stored trip moved on
    version: Optional[int] = None
