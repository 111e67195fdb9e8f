from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.database import get_db
from app.core.redis_lifecyle import get_cache
from app.services.auth.user_directory import SqlUserDirectory
from app.services.distance.distance_service import DistanceService
from app.services.itineraries.itinerary_service import ItineraryService
from app.services.itineraries.ride_generator import RideGenerator
from app.services.itineraries.smart_checkout import SmartCheckoutCalculator
from app.services.trips.share_service import ShareService
from app.services.trips.trip_repository import SqlTripRepository
from app.services.trips.trip_service import TripService


async def get_trip_repository(db: AsyncSession = Depends(get_db)) -> SqlTripRepository:
    return SqlTripRepository(db)


async def get_trip_service(repository=Depends(get_trip_repository)) -> TripService:
    return TripService(repository)


async def get_user_directory(db: AsyncSession = Depends(get_db)) -> SqlUserDirectory:
    return SqlUserDirectory(db)


async def get_share_service(
    trip_service: TripService = Depends(get_trip_service),
    users=Depends(get_user_directory)
) -> ShareService:
    return ShareService(trip_service, users)


async def get_distance_service(cache=Depends(get_cache)) -> DistanceService:
    return DistanceService(api_key=settings.GOOGLE_API_KEY, cache=cache)


async def get_itinerary_service(
    distance_service: DistanceService = Depends(get_distance_service)
) -> ItineraryService:
    return ItineraryService(SmartCheckoutCalculator(distance_service))


async def get_ride_generator(
    distance_service: DistanceService = Depends(get_distance_service)
) -> RideGenerator:
    return RideGenerator(distance_service)
