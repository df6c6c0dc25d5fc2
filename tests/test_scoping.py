import pytest

from labdesk.core.scoping import AccessScope, scope_for_role
from labdesk.models.enums import AppRole

WINDOW = {"start_time": "2030-05-01T09:00:00Z", "end_time": "2030-05-01T10:00:00Z"}


def test_scope_for_role():
    assert scope_for_role(AppRole.admin) == AccessScope.all
    assert scope_for_role(AppRole.lab_staff) == AccessScope.all
    assert scope_for_role(AppRole.student) == AccessScope.own
    assert scope_for_role("lab_staff") == AccessScope.all
    assert scope_for_role(None) == AccessScope.own


async def seed(client, headers, staff_headers, user, computer_id):
    await client.post("/api/bookings", json={"computer_id": computer_id, **WINDOW}, headers=headers)
    await client.post("/api/issues", json={
        "computer_id": computer_id, "title": "t", "description": "d",
    }, headers=headers)
    await client.post("/api/sessions", json={
        "computer_id": computer_id, "user_id": str(user.id),
    }, headers=staff_headers)
    await client.post("/api/notifications", json={
        "user_id": str(user.id), "title": "t", "message": "m",
    }, headers=staff_headers)


@pytest.mark.asyncio
@pytest.mark.parametrize("path,owner_field", [
    ("/api/bookings", "user_id"),
    ("/api/issues", "reported_by"),
    ("/api/sessions", "user_id"),
    ("/api/notifications", "user_id"),
])
async def test_students_only_see_own_rows(client, make_user, staff, lab_computer, path, owner_field):
    _, staff_headers = staff
    alice, alice_headers = await make_user(full_name="Alice")
    bob, bob_headers = await make_user(full_name="Bob")

    await seed(client, alice_headers, staff_headers, alice, lab_computer["id"])
    await seed(client, bob_headers, staff_headers, bob, lab_computer["id"])

    alice_rows = (await client.get(path, headers=alice_headers)).json()
    assert len(alice_rows) == 1
    assert {r[owner_field] for r in alice_rows} == {str(alice.id)}

    staff_rows = (await client.get(path, headers=staff_headers)).json()
    assert {r[owner_field] for r in staff_rows} == {str(alice.id), str(bob.id)}


@pytest.mark.asyncio
async def test_student_cannot_fetch_other_users_booking(client, make_user, lab_computer):
    _, alice_headers = await make_user()
    _, bob_headers = await make_user()

    booking = (await client.post("/api/bookings", json={
        "computer_id": lab_computer["id"], **WINDOW,
    }, headers=alice_headers)).json()

    assert (await client.get(f"/api/bookings/{booking['id']}", headers=alice_headers)).status_code == 200
    assert (await client.get(f"/api/bookings/{booking['id']}", headers=bob_headers)).status_code == 403
