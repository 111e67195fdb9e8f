"""Tests for per-viewer checklists layered over the trip default."""

import pytest

from app.core.exceptions import Forbidden, NotFound
from app.schemas.trip.checklist import ChecklistCategory, ChecklistItem
from app.services.trips.checklist_service import (
    add_custom_item, delete_checklist_item, find_user_checklist, get_checklist_for, get_checklist_progress,
    toggle_checklist_item, upsert_user_checklist,
)
from app.services.trips.share_service import ShareService
from tests.factories import OWNER_ID

STRANGER_ID = 99


@pytest.fixture
async def viewer_id(trip_service, user_directory, stored_trip) -> int:
    share_service = ShareService(trip_service, user_directory)
    shared = await share_service.share(stored_trip.id, ["viewer@example.com"], OWNER_ID)
    return shared[0].user_id


def _item(checklist, category_id, item_id):
    category = next(c for c in checklist if c.id == category_id)
    return next(i for i in category.items if i.id == item_id)


async def test_viewer_without_personal_checklist_sees_default(trip_service, stored_trip, viewer_id) -> None:
    trip = await trip_service.get_trip(stored_trip.id)

    assert find_user_checklist(trip, viewer_id) is None
    assert get_checklist_for(trip, viewer_id) == trip.checklist


async def test_first_edit_copies_default_for_that_viewer_only(trip_service, stored_trip, viewer_id) -> None:
    checklist = await toggle_checklist_item(trip_service, stored_trip.id, viewer_id, "documents", "passport")

    assert _item(checklist, "documents", "passport").checked is True

    trip = await trip_service.get_trip(stored_trip.id)
    assert _item(trip.checklist, "documents", "passport").checked is False
    assert _item(get_checklist_for(trip, OWNER_ID), "documents", "passport").checked is False
    assert [uc.user_id for uc in trip.user_checklists] == [viewer_id]


async def test_toggle_twice_unchecks(trip_service, stored_trip) -> None:
    await toggle_checklist_item(trip_service, stored_trip.id, OWNER_ID, "health", "firstaid")
    checklist = await toggle_checklist_item(trip_service, stored_trip.id, OWNER_ID, "health", "firstaid")

    assert _item(checklist, "health", "firstaid").checked is False


async def test_personal_checklist_is_never_merged_with_default(trip_service, stored_trip, viewer_id) -> None:
    mine = [ChecklistCategory(id="gear", name="Gear", items=[ChecklistItem(id="tent", label="Tent")])]

    checklist = await upsert_user_checklist(trip_service, stored_trip.id, viewer_id, mine)

    assert [category.id for category in checklist] == ["gear"]


async def test_add_custom_item(trip_service, stored_trip) -> None:
    checklist = await add_custom_item(trip_service, stored_trip.id, OWNER_ID, "comfort", "  Earplugs  ")

    added = next(c for c in checklist if c.id == "comfort").items[-1]
    assert added.label == "Earplugs"
    assert added.is_custom is True
    assert added.id.startswith("custom-")


async def test_delete_item(trip_service, stored_trip) -> None:
    checklist = await delete_checklist_item(trip_service, stored_trip.id, OWNER_ID, "toiletries", "makeup")

    assert "makeup" not in [item.id for item in next(c for c in checklist if c.id == "toiletries").items]


async def test_unknown_category_or_item(trip_service, stored_trip) -> None:
    with pytest.raises(NotFound):
        await toggle_checklist_item(trip_service, stored_trip.id, OWNER_ID, "snorkelling", "mask")
    with pytest.raises(NotFound):
        await delete_checklist_item(trip_service, stored_trip.id, OWNER_ID, "documents", "mask")

    trip = await trip_service.get_trip(stored_trip.id)
    assert trip.user_checklists == []


async def test_non_viewer_cannot_edit(trip_service, stored_trip) -> None:
    with pytest.raises(Forbidden):
        await toggle_checklist_item(trip_service, stored_trip.id, STRANGER_ID, "documents", "passport")


async def test_progress(trip_service, stored_trip) -> None:
    await toggle_checklist_item(trip_service, stored_trip.id, OWNER_ID, "documents", "passport")
    checklist = await toggle_checklist_item(trip_service, stored_trip.id, OWNER_ID, "documents", "insurance")

    progress = get_checklist_progress(checklist)

    assert progress.total_items == 40
    assert progress.checked_items == 2
    assert progress.completion_percentage == 5.0
    assert progress.by_category["documents"].checked == 2
    assert progress.by_category["documents"].total == 7


def test_progress_of_empty_checklist() -> None:
    progress = get_checklist_progress([])

    assert progress.total_items == 0
    assert progress.completion_percentage == 0.0
