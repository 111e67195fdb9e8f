from .user.user import User
from .trips.trip_model import TripRecord, TripShare
