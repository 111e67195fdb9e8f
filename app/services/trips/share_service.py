from datetime import datetime
from typing import List
from app.core.exceptions import ValidationError
from app.core.logger import logger
from app.schemas.trip.share import SharedUser
from app.schemas.trip.trip_schema import Trip
from app.services.auth.user_directory import UserDirectory
from app.services.trips.trip_service import TripService


class ShareService:
    def __init__(self, trip_service: TripService, users: UserDirectory):
        self.trip_service = trip_service
        self.users = users

    async def share(self, trip_id: str, emails: List[str], owner_id: int) -> List[SharedUser]:
        """Grant read access to every email, creating minimal users for unknown addresses."""
        emails = [email.strip() for email in emails if email and email.strip()]
        if not emails:
            raise ValidationError("emails array is required", missing_fields=["emails"])

        await self.trip_service.get_trip_for_owner(trip_id, owner_id)

        identities = [await self.users.resolve_or_create(email) for email in emails]
        shared_at = datetime.utcnow()

        def grant(trip: Trip) -> Trip:
            shared_with = list(trip.shared_with)
            known = {shared.user_id for shared in shared_with}
            for identity in identities:
                if identity.id == trip.owner_id or identity.id in known:
                    continue
                shared_with.append(SharedUser(
                    user_id=identity.id,
                    email=identity.email,
                    name=identity.name,
                    shared_at=shared_at,
                ))
                known.add(identity.id)
            return trip.model_copy(update={"shared_with": shared_with})

        updated = await self.trip_service.mutate(trip_id, grant)
        logger.info(f"Trip {trip_id} shared with {len(updated.shared_with)} user(s)")
        return updated.shared_with

    async def revoke(self, trip_id: str, viewer_id: int, owner_id: int) -> List[SharedUser]:
        """
        Remove a viewer's access. Unknown viewers are a no-op.

        The viewer's personal checklist stays on the trip and becomes active
        again if access is granted anew.
        """
        trip = await self.trip_service.get_trip_for_owner(trip_id, owner_id)
        if not any(shared.user_id == viewer_id for shared in trip.shared_with):
            logger.info(f"Revoke on trip {trip_id}: user {viewer_id} had no access")
            return trip.shared_with

        def drop(current: Trip) -> Trip:
            return current.model_copy(
                update={"shared_with": [s for s in current.shared_with if s.user_id != viewer_id]}
            )

        updated = await self.trip_service.mutate(trip_id, drop)
        logger.info(f"Access to trip {trip_id} revoked for user {viewer_id}")
        return updated.shared_with
