from fastapi import APIRouter, Depends, status

from app.dependencies.auth import get_current_user
from app.dependencies.services import get_trip_service
from app.models.user.user import User
from app.services.trips.trip_service import TripService
from app.services.trips.checklist_service import (
    find_user_checklist, get_checklist_for, get_checklist_progress,
    upsert_user_checklist, toggle_checklist_item, add_custom_item, delete_checklist_item
)
from app.schemas.trip.checklist import (
    ChecklistUpsert, ChecklistItemCreate, ChecklistView, ChecklistProgress
)

router = APIRouter(prefix="/trips", tags=["Trip Checklist"])


def _view(user_id: int, checklist, is_personal: bool = True) -> ChecklistView:
    return ChecklistView(user_id=user_id, is_personal=is_personal, checklist=checklist)


@router.get("/{trip_id}/checklist", response_model=ChecklistView)
async def get_my_checklist(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    """The caller's personal checklist, or the trip default until they change something."""
    trip = await trip_service.get_trip_for_viewer(trip_id, current_user.id)
    is_personal = find_user_checklist(trip, current_user.id) is not None
    return _view(current_user.id, get_checklist_for(trip, current_user.id), is_personal)


@router.put("/{trip_id}/checklist", response_model=ChecklistView)
async def put_my_checklist(
    trip_id: str,
    body: ChecklistUpsert,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    checklist = await upsert_user_checklist(trip_service, trip_id, current_user.id, body.checklist)
    return _view(current_user.id, checklist)


@router.get("/{trip_id}/checklist/progress", response_model=ChecklistProgress)
async def get_my_checklist_progress(
    trip_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    trip = await trip_service.get_trip_for_viewer(trip_id, current_user.id)
    return get_checklist_progress(get_checklist_for(trip, current_user.id))


@router.post(
    "/{trip_id}/checklist/{category_id}/items",
    response_model=ChecklistView,
    status_code=status.HTTP_201_CREATED
)
async def add_my_checklist_item(
    trip_id: str,
    category_id: str,
    body: ChecklistItemCreate,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    checklist = await add_custom_item(trip_service, trip_id, current_user.id, category_id, body.label)
    return _view(current_user.id, checklist)


@router.patch("/{trip_id}/checklist/{category_id}/items/{item_id}/toggle", response_model=ChecklistView)
async def toggle_my_checklist_item(
    trip_id: str,
    category_id: str,
    item_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    checklist = await toggle_checklist_item(trip_service, trip_id, current_user.id, category_id, item_id)
    return _view(current_user.id, checklist)


@router.delete("/{trip_id}/checklist/{category_id}/items/{item_id}", response_model=ChecklistView)
async def delete_my_checklist_item(
    trip_id: str,
    category_id: str,
    item_id: str,
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service)
):
    checklist = await delete_checklist_item(trip_service, trip_id, current_user.id, category_id, item_id)
    return _view(current_user.id, checklist)
