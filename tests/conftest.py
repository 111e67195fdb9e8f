"""Shared pytest fixtures for all test suites."""

from datetime import date

import pytest

from app.schemas.trip.trip_schema import Trip, TripCreate
from app.services.auth.user_directory import InMemoryUserDirectory
from app.services.trips.trip_repository import InMemoryTripRepository
from app.services.trips.trip_service import TripService
from tests.factories import OWNER_ID, FakeDistanceService


@pytest.fixture
def distance_service() -> FakeDistanceService:
    return FakeDistanceService()


@pytest.fixture
def trip_repository() -> InMemoryTripRepository:
    return InMemoryTripRepository()


@pytest.fixture
def trip_service(trip_repository) -> TripService:
    return TripService(trip_repository)


@pytest.fixture
def user_directory() -> InMemoryUserDirectory:
    directory = InMemoryUserDirectory()
    # id 1, matches OWNER_ID
    directory.add("owner@example.com", "Owner")
    return directory


@pytest.fixture
async def stored_trip(trip_service) -> Trip:
    trip_in = TripCreate(
        name="Lisbon getaway",
        destinations=["Lisbon"],
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 3),
    )
    return await trip_service.create_trip(trip_in, OWNER_ID)
