"""Tests for /trips CRUD and sub-resource endpoints."""

from httpx import AsyncClient

from tests.factories import flight_payload, hotel_payload


async def test_create_trip_returns_empty_collections(client: AsyncClient, auth, trip_id) -> None:
    response = await client.get(f"/trips/{trip_id}", headers=auth["owner"])

    assert response.status_code == 200
    data = response.json()
    assert data["is_owner"] is True
    assert data["version"] == 1
    for kind in ("flights", "hotels", "rides", "attractions"):
        assert data[kind] == []
    assert data["checklist"][0]["id"] == "documents"


async def test_create_trip_validates_body(client: AsyncClient, auth) -> None:
    response = await client.post("/trips", json={"start_date": "2025-06-01"}, headers=auth["owner"])

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert "name" in body["missing_fields"]


async def test_requests_need_a_token(client: AsyncClient) -> None:
    response = await client.get("/trips")

    assert response.status_code in (401, 403)


async def test_list_trips(client: AsyncClient, auth, trip_id) -> None:
    owned = await client.get("/trips", headers=auth["owner"])
    other = await client.get("/trips", headers=auth["stranger"])

    assert [trip["id"] for trip in owned.json()] == [trip_id]
    assert other.json() == []


async def test_append_flight(client: AsyncClient, auth, trip_id) -> None:
    response = await client.post(f"/trips/{trip_id}/flights", json=flight_payload(), headers=auth["owner"])

    assert response.status_code == 201
    data = response.json()
    assert [f["flight_number"] for f in data["flights"]] == ["TP123"]
    assert data["version"] == 2


async def test_append_with_missing_fields(client: AsyncClient, auth, trip_id) -> None:
    response = await client.post(f"/trips/{trip_id}/hotels", json={"name": "Hotel Lux"}, headers=auth["owner"])

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["missing_fields"] == ["check_in", "check_out"]


async def test_append_with_unknown_kind(client: AsyncClient, auth, trip_id) -> None:
    response = await client.post(f"/trips/{trip_id}/boats", json={"name": "Ferry"}, headers=auth["owner"])

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


async def test_remove_by_index(client: AsyncClient, auth, trip_id) -> None:
    await client.post(f"/trips/{trip_id}/hotels", json=hotel_payload(name="First"), headers=auth["owner"])
    await client.post(f"/trips/{trip_id}/hotels", json=hotel_payload(name="Second"), headers=auth["owner"])

    response = await client.delete(f"/trips/{trip_id}/hotels/0", headers=auth["owner"])

    assert response.status_code == 200
    assert [h["name"] for h in response.json()["hotels"]] == ["Second"]


async def test_remove_out_of_range(client: AsyncClient, auth, trip_id) -> None:
    await client.post(f"/trips/{trip_id}/hotels", json=hotel_payload(), headers=auth["owner"])

    for index in ("1", "-1", "first"):
        response = await client.delete(f"/trips/{trip_id}/hotels/{index}", headers=auth["owner"])
        assert response.status_code == 400
        assert response.json()["error"] == "index_out_of_range"

    trip = (await client.get(f"/trips/{trip_id}", headers=auth["owner"])).json()
    assert len(trip["hotels"]) == 1
    assert trip["version"] == 2


async def test_remove_with_unknown_kind(client: AsyncClient, auth, trip_id) -> None:
    response = await client.delete(f"/trips/{trip_id}/boats/0", headers=auth["owner"])

    assert response.status_code == 400


async def test_strangers_are_forbidden(client: AsyncClient, auth, trip_id) -> None:
    read = await client.get(f"/trips/{trip_id}", headers=auth["stranger"])
    write = await client.post(f"/trips/{trip_id}/hotels", json=hotel_payload(), headers=auth["stranger"])

    assert read.status_code == 403
    assert read.json()["error"] == "forbidden"
    assert write.status_code == 403


async def test_unknown_trip(client: AsyncClient, auth) -> None:
    response = await client.get("/trips/does-not-exist", headers=auth["owner"])

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


async def test_update_trip(client: AsyncClient, auth, trip_id) -> None:
    response = await client.put(
        f"/trips/{trip_id}", json={"name": "Lisbon & Sintra", "end_date": "2025-06-05"}, headers=auth["owner"],
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Lisbon & Sintra"
    assert response.json()["end_date"] == "2025-06-05"


async def test_update_with_stale_version(client: AsyncClient, auth, trip_id) -> None:
    await client.post(f"/trips/{trip_id}/hotels", json=hotel_payload(), headers=auth["owner"])

    response = await client.put(f"/trips/{trip_id}", json={"name": "Old", "version": 1}, headers=auth["owner"])

    assert response.status_code == 409
    assert response.json()["error"] == "version_conflict"
    assert response.json()["current_version"] == 2


async def test_delete_trip(client: AsyncClient, auth, trip_id) -> None:
    response = await client.delete(f"/trips/{trip_id}", headers=auth["owner"])

    assert response.status_code == 200
    assert (await client.get(f"/trips/{trip_id}", headers=auth["owner"])).status_code == 404
