from pydantic import BaseModel, Field
from typing import List, Literal, Optional

AnchorType = Literal["airport", "hotel", "attraction"]


class AnchorPoint(BaseModel):
    id: str
    type: AnchorType
    label: str
    # airport anchors carry the airport code here
    address: str
    date: Optional[str] = None
    time: Optional[str] = None


class DistanceResult(BaseModel):
    distance: str
    duration: str
    distance_meters: int
    duration_seconds: int
    origin_address: Optional[str] = None
    destination_address: Optional[str] = None


class RouteRequest(BaseModel):
    origin: str
    destination: str
    origin_label: Optional[str] = None
    destination_label: Optional[str] = None


class GenerateRideRequest(BaseModel):
    start_anchor_id: str
    end_anchor_id: str


class RideDraft(BaseModel):
    type: Literal["taxi", "rental"] = "taxi"
    pickup: str
    dropoff: str
    distance: str
    duration: str
    distance_meters: int
    duration_seconds: int
    origin_address: Optional[str] = None
    destination_address: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None


TravelMode = Literal["driving", "walking", "bicycling", "transit"]


class RouteEstimate(BaseModel):
    mode: TravelMode
    distance: str
    duration: str
    distance_meters: int
    duration_seconds: int
    origin_address: Optional[str] = None
    destination_address: Optional[str] = None


class RidePlace(BaseModel):
    place_id: Optional[str] = None
    name: Optional[str] = None
    formatted_address: Optional[str] = None


class RideEstimateRequest(BaseModel):
    pickup: RidePlace
    dropoff: RidePlace
    modes: List[TravelMode] = Field(default_factory=lambda: ["driving"], min_length=1)


class RideEstimateResponse(BaseModel):
    pickup: RidePlace
    dropoff: RidePlace
    # modes the distance service could not route are left out
    estimates: List[RouteEstimate]


class AirportDistance(BaseModel):
    airport_code: str
    hotel: str
    distance: str
    duration: str
    distance_meters: int
    duration_seconds: int
    origin_address: Optional[str] = None
    destination_address: Optional[str] = None


class AirportDistanceRequest(BaseModel):
    # defaults to the arrival airport of the flight landing on the check-in day
    airport_code: Optional[str] = None
