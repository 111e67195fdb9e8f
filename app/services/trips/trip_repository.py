"""
Storage for trip aggregates.

A trip is one document keyed by its id. Both implementations honour the same
optimistic concurrency contract: ``put`` only succeeds when the stored version
still equals ``expected_version`` and bumps it by one, otherwise it raises
``VersionConflict``.
"""
import asyncio
import copy
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from sqlalchemy import delete as sa_delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound, VersionConflict
from app.models.trips.trip_model import TripRecord, TripShare
from app.schemas.trip.trip_schema import Trip


class TripRepository(Protocol):
    async def get(self, trip_id: str) -> Optional[Trip]: ...

    async def add(self, trip: Trip) -> Trip: ...

    async def put(self, trip: Trip, expected_version: int) -> Trip: ...

    async def delete(self, trip_id: str) -> bool: ...

    async def list_for_viewer(self, user_id: int) -> List[Trip]: ...


def _next_revision(trip: Trip, expected_version: int) -> Trip:
    return trip.model_copy(update={"version": expected_version + 1, "updated_at": datetime.utcnow()})


class InMemoryTripRepository:
    """Dict-backed store for tests and local development."""

    def __init__(self) -> None:
        self._documents: Dict[str, dict] = {}
        self._lock = asyncio.Lock()

    async def get(self, trip_id: str) -> Optional[Trip]:
        document = self._documents.get(trip_id)
        if document is None:
            return None
        return Trip.model_validate(copy.deepcopy(document))

    async def add(self, trip: Trip) -> Trip:
        async with self._lock:
            self._documents[trip.id] = trip.model_dump(mode="json")
        return trip

    async def put(self, trip: Trip, expected_version: int) -> Trip:
        async with self._lock:
            current = self._documents.get(trip.id)
            if current is None:
                raise NotFound(f"Trip {trip.id} not found")
            if current["version"] != expected_version:
                raise VersionConflict(trip.id, expected_version, current["version"])
            saved = _next_revision(trip, expected_version)
            self._documents[trip.id] = saved.model_dump(mode="json")
        return saved

    async def delete(self, trip_id: str) -> bool:
        async with self._lock:
            return self._documents.pop(trip_id, None) is not None

    async def list_for_viewer(self, user_id: int) -> List[Trip]:
        trips = [Trip.model_validate(copy.deepcopy(doc)) for doc in self._documents.values()]
        visible = [t for t in trips if t.is_viewer(user_id)]
        return sorted(visible, key=lambda t: t.created_at or datetime.min, reverse=True)


class SqlTripRepository:
    """SQLAlchemy-backed store: JSON document per trip plus a viewer index table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _to_trip(record: TripRecord) -> Trip:
        return Trip.model_validate({**record.document, "version": record.version})

    async def _sync_shares(self, trip: Trip) -> None:
        await self.db.execute(sa_delete(TripShare).where(TripShare.trip_id == trip.id))
        for shared in trip.shared_with:
            self.db.add(TripShare(trip_id=trip.id, user_id=shared.user_id))

    async def get(self, trip_id: str) -> Optional[Trip]:
        result = await self.db.execute(select(TripRecord).where(TripRecord.id == trip_id))
        record = result.scalar_one_or_none()
        return self._to_trip(record) if record else None

    async def add(self, trip: Trip) -> Trip:
        record = TripRecord(
            id=trip.id,
            owner_id=trip.owner_id,
            version=trip.version,
            document=trip.model_dump(mode="json"),
        )
        self.db.add(record)
        await self._sync_shares(trip)
        await self.db.commit()
        return trip

    async def put(self, trip: Trip, expected_version: int) -> Trip:
        saved = _next_revision(trip, expected_version)
        result = await self.db.execute(
            update(TripRecord)
            .where(TripRecord.id == trip.id, TripRecord.version == expected_version)
            .values(version=saved.version, document=saved.model_dump(mode="json"))
        )
        if result.rowcount == 0:
            await self.db.rollback()
            current = await self.db.execute(select(TripRecord.version).where(TripRecord.id == trip.id))
            actual = current.scalar_one_or_none()
            if actual is None:
                raise NotFound(f"Trip {trip.id} not found")
            raise VersionConflict(trip.id, expected_version, actual)

        await self._sync_shares(saved)
        await self.db.commit()
        return saved

    async def delete(self, trip_id: str) -> bool:
        await self.db.execute(sa_delete(TripShare).where(TripShare.trip_id == trip_id))
        result = await self.db.execute(sa_delete(TripRecord).where(TripRecord.id == trip_id))
        await self.db.commit()
        return result.rowcount > 0

    async def list_for_viewer(self, user_id: int) -> List[Trip]:
        shared_ids = select(TripShare.trip_id).where(TripShare.user_id == user_id)
        result = await self.db.execute(
            select(TripRecord)
            .where(or_(TripRecord.owner_id == user_id, TripRecord.id.in_(shared_ids)))
            .order_by(TripRecord.created_at.desc())
        )
        return [self._to_trip(record) for record in result.scalars().all()]
