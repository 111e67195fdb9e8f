from fastapi import APIRouter, Depends
from app.dependencies.auth import get_current_user
from app.dependencies.services import get_share_service
from app.models.user.user import User
from app.schemas.trip.share import ShareRequest, ShareResponse
from app.services.trips.share_service import ShareService

router = APIRouter(prefix="/trips", tags=["Trip Sharing"])


@router.post("/{trip_id}/share", response_model=ShareResponse)
async def share_trip(
    trip_id: str,
    body: ShareRequest,
    current_user: User = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service)
):
    shared_with = await share_service.share(trip_id, body.emails, current_user.id)
    return ShareResponse(message=f"Trip shared with {len(shared_with)} user(s)", shared_with=shared_with)


@router.delete("/{trip_id}/share/{user_id}", response_model=ShareResponse)
async def revoke_access(
    trip_id: str,
    user_id: int,
    current_user: User = Depends(get_current_user),
    share_service: ShareService = Depends(get_share_service)
):
    shared_with = await share_service.revoke(trip_id, user_id, current_user.id)
    return ShareResponse(message="Access revoked successfully", shared_with=shared_with)
