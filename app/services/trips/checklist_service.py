from datetime import datetime
from typing import Callable, List, Optional
from uuid import uuid4

from app.core.exceptions import Forbidden, NotFound
from app.core.logger import logger
from app.schemas.trip.checklist import (
    ChecklistCategory, ChecklistItem, UserChecklist, ChecklistProgress, CategoryProgress
)
from app.schemas.trip.trip_schema import Trip
from app.services.trips.trip_service import TripService

ChecklistEdit = Callable[[List[ChecklistCategory]], List[ChecklistCategory]]


# Read side
def find_user_checklist(trip: Trip, viewer_id: int) -> Optional[UserChecklist]:
    for user_checklist in trip.user_checklists:
        if user_checklist.user_id == viewer_id:
            return user_checklist
    return None


def get_checklist_for(trip: Trip, viewer_id: int) -> List[ChecklistCategory]:
    """The viewer's personal checklist when they have one, otherwise the trip default. Never merged."""
    user_checklist = find_user_checklist(trip, viewer_id)
    if user_checklist is not None:
        return user_checklist.checklist
    return trip.checklist


def get_checklist_progress(checklist: List[ChecklistCategory]) -> ChecklistProgress:
    """Checked/total counts overall and per category."""
    by_category = {}
    total_items = 0
    checked_items = 0
    for category in checklist:
        total = len(category.items)
        checked = sum(1 for item in category.items if item.checked)
        by_category[category.id] = CategoryProgress(
            total=total,
            checked=checked,
            percentage=round(checked / total * 100, 2) if total else 0.0,
        )
        total_items += total
        checked_items += checked

    return ChecklistProgress(
        total_items=total_items,
        checked_items=checked_items,
        completion_percentage=round(checked_items / total_items * 100, 2) if total_items else 0.0,
        by_category=by_category,
    )


# Write side
def with_user_checklist(trip: Trip, viewer_id: int, edit: ChecklistEdit) -> Trip:
    """
    Return a copy of ``trip`` where only ``viewer_id``'s checklist has been edited.

    The first edit by a viewer materialises their checklist from a copy of the
    trip default; the default itself and other viewers' checklists are untouched.
    """
    current = get_checklist_for(trip, viewer_id)
    base = [category.model_copy(deep=True) for category in current]
    updated = UserChecklist(user_id=viewer_id, checklist=edit(base), updated_at=datetime.utcnow())

    user_checklists = [uc for uc in trip.user_checklists if uc.user_id != viewer_id]
    user_checklists.append(updated)
    return trip.model_copy(update={"user_checklists": user_checklists})


def _find_category(checklist: List[ChecklistCategory], category_id: str) -> ChecklistCategory:
    for category in checklist:
        if category.id == category_id:
            return category
    raise NotFound(f"Checklist category '{category_id}' not found")


def _find_item(category: ChecklistCategory, item_id: str) -> ChecklistItem:
    for item in category.items:
        if item.id == item_id:
            return item
    raise NotFound(f"Checklist item '{item_id}' not found in '{category.id}'")


async def _edit_viewer_checklist(
    trip_service: TripService,
    trip_id: str,
    viewer_id: int,
    edit: ChecklistEdit
) -> List[ChecklistCategory]:
    trip = await trip_service.get_trip(trip_id)
    if not trip.is_viewer(viewer_id):
        logger.warning(f"User {viewer_id} attempted to edit checklist of trip {trip_id} without access")
        raise Forbidden("Access denied")

    updated = await trip_service.mutate(trip_id, lambda t: with_user_checklist(t, viewer_id, edit))
    return get_checklist_for(updated, viewer_id)


async def upsert_user_checklist(
    trip_service: TripService,
    trip_id: str,
    viewer_id: int,
    checklist: List[ChecklistCategory]
) -> List[ChecklistCategory]:
    """Replace the viewer's personal checklist wholesale."""
    result = await _edit_viewer_checklist(trip_service, trip_id, viewer_id, lambda _: list(checklist))
    logger.info(f"User checklist updated for trip {trip_id}, user {viewer_id}")
    return result


async def toggle_checklist_item(
    trip_service: TripService,
    trip_id: str,
    viewer_id: int,
    category_id: str,
    item_id: str
) -> List[ChecklistCategory]:
    def toggle(checklist: List[ChecklistCategory]) -> List[ChecklistCategory]:
        item = _find_item(_find_category(checklist, category_id), item_id)
        item.checked = not item.checked
        return checklist

    return await _edit_viewer_checklist(trip_service, trip_id, viewer_id, toggle)


async def add_custom_item(
    trip_service: TripService,
    trip_id: str,
    viewer_id: int,
    category_id: str,
    label: str
) -> List[ChecklistCategory]:
    label = label.strip()

    def add(checklist: List[ChecklistCategory]) -> List[ChecklistCategory]:
        category = _find_category(checklist, category_id)
        category.items.append(ChecklistItem(id=f"custom-{uuid4().hex[:8]}", label=label, is_custom=True))
        return checklist

    return await _edit_viewer_checklist(trip_service, trip_id, viewer_id, add)


async def delete_checklist_item(
    trip_service: TripService,
    trip_id: str,
    viewer_id: int,
    category_id: str,
    item_id: str
) -> List[ChecklistCategory]:
    def remove(checklist: List[ChecklistCategory]) -> List[ChecklistCategory]:
        category = _find_category(checklist, category_id)
        _find_item(category, item_id)
        category.items = [item for item in category.items if item.id != item_id]
        return checklist

    return await _edit_viewer_checklist(trip_service, trip_id, viewer_id, remove)
