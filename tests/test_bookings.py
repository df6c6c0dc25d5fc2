import pytest

from labdesk.core.config import settings

WINDOW = {"start_time": "2030-03-01T09:00:00Z", "end_time": "2030-03-01T11:00:00Z"}
OVERLAPPING = {"start_time": "2030-03-01T10:00:00Z", "end_time": "2030-03-01T12:00:00Z"}
TOUCHING = {"start_time": "2030-03-01T11:00:00Z", "end_time": "2030-03-01T12:00:00Z"}


async def book(client, headers, computer_id, window):
    return await client.post("/api/bookings", json={"computer_id": computer_id, **window}, headers=headers)


@pytest.mark.asyncio
async def test_new_booking_is_pending(client, student, lab_computer):
    user, headers = student
    res = await book(client, headers, lab_computer["id"], WINDOW)
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "pending"
    assert body["user_id"] == str(user.id)
    assert body["conflicts"] == []


@pytest.mark.asyncio
async def test_end_before_start_rejected(client, student, lab_computer):
    _, headers = student
    res = await book(client, headers, lab_computer["id"], {
        "start_time": "2030-03-01T11:00:00Z", "end_time": "2030-03-01T09:00:00Z",
    })
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_unknown_computer(client, student):
    _, headers = student
    res = await book(client, headers, "00000000-0000-0000-0000-000000000000", WINDOW)
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_overlap_allowed_by_default(client, student, lab_computer):
    _, headers = student
    assert (await book(client, headers, lab_computer["id"], WINDOW)).status_code == 201
    res = await book(client, headers, lab_computer["id"], OVERLAPPING)
    assert res.status_code == 201
    assert res.json()["conflicts"] == []


@pytest.mark.asyncio
async def test_overlap_rejected_under_reject_policy(client, student, lab_computer, monkeypatch):
    monkeypatch.setattr(settings, "BOOKING_OVERLAP_POLICY", "reject")
    _, headers = student

    assert (await book(client, headers, lab_computer["id"], WINDOW)).status_code == 201
    res = await book(client, headers, lab_computer["id"], OVERLAPPING)
    assert res.status_code == 409

    # Half-open windows: back-to-back is fine
    assert (await book(client, headers, lab_computer["id"], TOUCHING)).status_code == 201


@pytest.mark.asyncio
async def test_overlap_reported_under_warn_policy(client, student, lab_computer, monkeypatch):
    monkeypatch.setattr(settings, "BOOKING_OVERLAP_POLICY", "warn")
    _, headers = student

    first = (await book(client, headers, lab_computer["id"], WINDOW)).json()
    res = await book(client, headers, lab_computer["id"], OVERLAPPING)
    assert res.status_code == 201
    assert res.json()["conflicts"] == [first["id"]]


@pytest.mark.asyncio
async def test_cancelled_booking_does_not_conflict(client, student, staff, lab_computer, monkeypatch):
    monkeypatch.setattr(settings, "BOOKING_OVERLAP_POLICY", "reject")
    _, headers = student
    _, staff_headers = staff

    first = (await book(client, headers, lab_computer["id"], WINDOW)).json()
    await client.patch(f"/api/bookings/{first['id']}/status", json={"status": "cancelled"}, headers=staff_headers)

    assert (await book(client, headers, lab_computer["id"], OVERLAPPING)).status_code == 201


@pytest.mark.asyncio
async def test_status_lifecycle(client, student, staff, lab_computer):
    _, headers = student
    _, staff_headers = staff
    booking = (await book(client, headers, lab_computer["id"], WINDOW)).json()
    url = f"/api/bookings/{booking['id']}/status"

    # Students cannot move bookings
    assert (await client.patch(url, json={"status": "confirmed"}, headers=headers)).status_code == 403

    # pending -> completed skips confirmation
    assert (await client.patch(url, json={"status": "completed"}, headers=staff_headers)).status_code == 409

    res = await client.patch(url, json={"status": "confirmed"}, headers=staff_headers)
    assert res.status_code == 200
    assert res.json()["status"] == "confirmed"

    # confirmed bookings can no longer be cancelled
    assert (await client.patch(url, json={"status": "cancelled"}, headers=staff_headers)).status_code == 409

    res = await client.patch(url, json={"status": "completed"}, headers=staff_headers)
    assert res.json()["status"] == "completed"

    # terminal
    assert (await client.patch(url, json={"status": "pending"}, headers=staff_headers)).status_code == 409


@pytest.mark.asyncio
async def test_invalid_status_value(client, student, staff, lab_computer):
    _, headers = student
    _, staff_headers = staff
    booking = (await book(client, headers, lab_computer["id"], WINDOW)).json()

    res = await client.patch(
        f"/api/bookings/{booking['id']}/status", json={"status": "approved"}, headers=staff_headers
    )
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_status_filter(client, student, staff, lab_computer):
    _, headers = student
    _, staff_headers = staff
    first = (await book(client, headers, lab_computer["id"], WINDOW)).json()
    await book(client, headers, lab_computer["id"], TOUCHING)
    await client.patch(f"/api/bookings/{first['id']}/status", json={"status": "confirmed"}, headers=staff_headers)

    res = await client.get("/api/bookings?status=confirmed", headers=headers)
    assert [b["id"] for b in res.json()] == [first["id"]]
