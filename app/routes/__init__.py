# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.trip import trip_routes, share, checklist
from app.routes.itineraries import itinerary_routes, ride_routes, hotel_routes


api_router = APIRouter()

# Trip-scoped routes with fixed segments go before the generic /trips/{trip_id}/{kind} routes
api_router.include_router(share.router)
api_router.include_router(checklist.router)
api_router.include_router(itinerary_routes.router)
api_router.include_router(ride_routes.router)
api_router.include_router(hotel_routes.router)

# Trip routes
api_router.include_router(trip_routes.router)
