from datetime import datetime
from typing import Any, Callable, Dict, List, Union
from uuid import uuid4
from pydantic import ValidationError as PydanticValidationError
from app.core.config import settings
from app.core.exceptions import Forbidden, IndexOutOfRange, NotFound, ValidationError, VersionConflict
from app.core.logger import logger
from app.schemas.trip.sub_resources import SubResource, SubResourceKind
from app.schemas.trip.trip_schema import Trip, TripCreate, TripUpdate
from app.services.trips.checklist_defaults import default_checklist
from app.services.trips.trip_repository import TripRepository

Mutator = Callable[[Trip], Trip]


def parse_kind(kind: Union[str, SubResourceKind]) -> SubResourceKind:
    try:
        return SubResourceKind(kind)
    except ValueError:
        valid = ", ".join(k.value for k in SubResourceKind)
        raise ValidationError(f"Invalid type '{kind}', expected one of: {valid}") from None


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ())) or "value"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def build_sub_resource(kind: SubResourceKind, raw: Dict[str, Any]) -> SubResource:
    """Check the minimal required fields for ``kind`` and parse ``raw`` into its model."""
    if not isinstance(raw, dict):
        raise ValidationError(f"{kind.value} item must be an object")
    missing = [field for field in kind.model.required_fields() if raw.get(field) in (None, "")]
    if missing:
        raise ValidationError(f"{', '.join(missing)} required", missing_fields=missing)
    try:
        return kind.model.model_validate(raw)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid {kind.value} item: {_describe(exc)}") from None


class TripService:
    """Trip aggregate operations. Every write is an optimistic read-modify-write."""

    def __init__(self, repository: TripRepository):
        self.repository = repository

    async def mutate(self, trip_id: str, mutator: Mutator) -> Trip:
        """
        Apply ``mutator`` to the latest stored trip and save it.

        A concurrent write between our read and our put raises VersionConflict
        in the repository; the whole cycle is then retried against the fresh
        snapshot so neither write is lost.
        """
        attempts = max(1, settings.TRIP_WRITE_RETRIES)
        for attempt in range(1, attempts + 1):
            trip = await self.get_trip(trip_id)
            updated = mutator(trip)
            try:
                return await self.repository.put(updated, expected_version=trip.version)
            except VersionConflict:
                if attempt == attempts:
                    raise
                logger.warning(f"Version conflict on trip {trip_id}, retrying ({attempt}/{attempts})")

    async def create_trip(self, trip_data: TripCreate, owner_id: int) -> Trip:
        now = datetime.utcnow()
        payload = trip_data.model_dump(exclude={"flights", "hotels", "rides", "attractions", "checklist"})
        trip = Trip(
            **payload,
            id=uuid4().hex,
            owner_id=owner_id,
            flights=trip_data.flights or [],
            hotels=trip_data.hotels or [],
            rides=trip_data.rides or [],
            attractions=trip_data.attractions or [],
            checklist=trip_data.checklist or default_checklist(),
            version=1,
            created_at=now,
            updated_at=now,
        )
        await self.repository.add(trip)
        logger.info(f"Trip {trip.id} created by user {owner_id}")
        return trip

    async def get_trip(self, trip_id: str) -> Trip:
        trip = await self.repository.get(trip_id)
        if not trip:
            logger.warning(f"Trip not found: ID {trip_id}")
            raise NotFound(f"Trip {trip_id} not found")
        return trip

    async def get_trip_for_viewer(self, trip_id: str, user_id: int) -> Trip:
        trip = await self.get_trip(trip_id)
        if not trip.is_viewer(user_id):
            logger.warning(f"Unauthorized access attempt: trip {trip_id} for user {user_id}")
            raise Forbidden("Access denied")
        return trip

    async def get_trip_for_owner(self, trip_id: str, user_id: int) -> Trip:
        trip = await self.get_trip(trip_id)
        self._require_owner(trip, user_id)
        return trip

    async def list_trips(self, user_id: int) -> List[Trip]:
        trips = await self.repository.list_for_viewer(user_id)
        logger.info(f"Retrieved {len(trips)} trips for user {user_id}")
        return trips

    async def update_trip(self, trip_id: str, trip_data: TripUpdate, user_id: int) -> Trip:
        await self.get_trip_for_owner(trip_id, user_id)

        update_data = trip_data.model_dump(exclude_unset=True)
        base_version = update_data.pop("version", None)
        # null never clears a field; collections stay lists
        update_data = {key: value for key, value in update_data.items() if value is not None}

        def merge(trip: Trip) -> Trip:
            if base_version is not None and base_version != trip.version:
                raise VersionConflict(trip.id, base_version, trip.version)
            merged = trip.model_dump()
            merged.update(update_data)
            try:
                return Trip.model_validate(merged)
            except PydanticValidationError as exc:
                raise ValidationError(f"Invalid trip update: {_describe(exc)}") from None

        if base_version is not None:
            trip = await self.get_trip(trip_id)
            updated = await self.repository.put(merge(trip), expected_version=trip.version)
        else:
            updated = await self.mutate(trip_id, merge)
        logger.info(f"Trip {trip_id} updated by user {user_id}")
        return updated

    async def delete_trip(self, trip_id: str, user_id: int) -> bool:
        await self.get_trip_for_owner(trip_id, user_id)
        deleted = await self.repository.delete(trip_id)
        logger.info(f"Trip {trip_id} deleted by user {user_id}")
        return deleted

    async def append_sub_resource(self, trip_id: str, kind: Union[str, SubResourceKind], item: Dict[str, Any], user_id: int) -> Trip:
        kind = parse_kind(kind)
        await self.get_trip_for_owner(trip_id, user_id)
        record = build_sub_resource(kind, item)

        def append(trip: Trip) -> Trip:
            return trip.model_copy(update={kind.value: [*getattr(trip, kind.value), record]})

        updated = await self.mutate(trip_id, append)
        logger.info(f"Added {kind.value[:-1]} to trip {trip_id}")
        return updated

    async def remove_sub_resource(self, trip_id: str, kind: Union[str, SubResourceKind], index: Union[int, str], user_id: int) -> Trip:
        kind = parse_kind(kind)
        await self.get_trip_for_owner(trip_id, user_id)

        def remove(trip: Trip) -> Trip:
            items = list(getattr(trip, kind.value))
            try:
                position = int(index)
            except (TypeError, ValueError):
                raise IndexOutOfRange(kind.value, index, len(items)) from None
            if position < 0 or position >= len(items):
                raise IndexOutOfRange(kind.value, position, len(items))
            del items[position]
            return trip.model_copy(update={kind.value: items})

        updated = await self.mutate(trip_id, remove)
        logger.info(f"Removed {kind.value} #{index} from trip {trip_id}")
        return updated

    @staticmethod
    def _require_owner(trip: Trip, user_id: int) -> None:
        if trip.owner_id != user_id:
            logger.warning(f"User {user_id} attempted to modify trip {trip.id} without ownership")
            raise Forbidden("Only the trip owner can modify this trip")
