"""Tests for granting and revoking read access."""

import pytest

from app.core.exceptions import Forbidden, ValidationError
from app.services.trips.checklist_service import find_user_checklist, toggle_checklist_item
from app.services.trips.share_service import ShareService
from tests.factories import OWNER_ID


@pytest.fixture
def share_service(trip_service, user_directory) -> ShareService:
    return ShareService(trip_service, user_directory)


async def test_share_creates_unknown_users(share_service, user_directory, stored_trip) -> None:
    shared = await share_service.share(stored_trip.id, ["a@x.com", "B@X.com "], OWNER_ID)

    assert [s.email for s in shared] == ["a@x.com", "b@x.com"]
    assert [s.name for s in shared] == ["a", "b"]
    assert (await user_directory.resolve_or_create("A@x.com")).id == shared[0].user_id


async def test_share_skips_owner_and_duplicates(share_service, stored_trip) -> None:
    await share_service.share(stored_trip.id, ["a@x.com"], OWNER_ID)

    shared = await share_service.share(stored_trip.id, ["owner@example.com", "a@x.com", "A@x.com"], OWNER_ID)

    assert [s.email for s in shared] == ["a@x.com"]


async def test_share_requires_emails(share_service, stored_trip) -> None:
    with pytest.raises(ValidationError):
        await share_service.share(stored_trip.id, [" ", ""], OWNER_ID)


async def test_only_owner_can_share(share_service, stored_trip) -> None:
    shared = await share_service.share(stored_trip.id, ["a@x.com"], OWNER_ID)

    with pytest.raises(Forbidden):
        await share_service.share(stored_trip.id, ["b@x.com"], shared[0].user_id)


async def test_shared_user_can_read(share_service, trip_service, stored_trip) -> None:
    viewer = (await share_service.share(stored_trip.id, ["a@x.com"], OWNER_ID))[0]

    trip = await trip_service.get_trip_for_viewer(stored_trip.id, viewer.user_id)

    assert trip.is_viewer(viewer.user_id)
    assert [t.id for t in await trip_service.list_trips(viewer.user_id)] == [stored_trip.id]


async def test_revoke_keeps_personal_checklist(share_service, trip_service, stored_trip) -> None:
    viewer_id = (await share_service.share(stored_trip.id, ["a@x.com"], OWNER_ID))[0].user_id
    await toggle_checklist_item(trip_service, stored_trip.id, viewer_id, "documents", "passport")

    remaining = await share_service.revoke(stored_trip.id, viewer_id, OWNER_ID)

    assert remaining == []
    trip = await trip_service.get_trip(stored_trip.id)
    assert not trip.is_viewer(viewer_id)
    assert find_user_checklist(trip, viewer_id) is not None
    with pytest.raises(Forbidden):
        await trip_service.get_trip_for_viewer(stored_trip.id, viewer_id)


async def test_revoke_unknown_viewer_is_noop(share_service, trip_service, stored_trip) -> None:
    remaining = await share_service.revoke(stored_trip.id, 4242, OWNER_ID)

    assert remaining == []
    assert (await trip_service.get_trip(stored_trip.id)).version == stored_trip.version
