import pytest
from sqlmodel import select

from conftest import random_str
from labdesk.models.booking import Booking
from labdesk.models.issue import Issue
from labdesk.models.notification import Notification
from labdesk.models.session_log import SessionLog
from labdesk.models.user import User, Profile, UserRole


@pytest.mark.asyncio
async def test_change_password(client):
    email = f"{random_str('pwd')}@lab.edu"
    await client.post("/api/auth/register", json={
        "full_name": "Pwd Changer", "email": email, "password": "oldpassword123",
    })
    login_res = await client.post("/api/auth/login", json={"email": email, "password": "oldpassword123"})
    headers = {"Authorization": f"Bearer {login_res.json()['access_token']}"}

    res = await client.post("/api/account/change-password", json={
        "old_password": "oldpassword123", "new_password": "newpassword456",
    }, headers=headers)
    assert res.status_code == 200
    assert res.json()["detail"] == "Password changed successfully"

    res_fail = await client.post("/api/auth/login", json={"email": email, "password": "oldpassword123"})
    assert res_fail.status_code == 401

    res_success = await client.post("/api/auth/login", json={"email": email, "password": "newpassword456"})
    assert res_success.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_old(client, student):
    _, headers = student
    res = await client.post("/api/account/change-password", json={
        "old_password": "nope", "new_password": "newpassword456",
    }, headers=headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "Old password incorrect"


@pytest.mark.asyncio
async def test_delete_account_requires_confirmation(client, student):
    _, headers = student
    res = await client.request("DELETE", "/api/account", json={"confirm": "yes"}, headers=headers)
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_delete_account_removes_owned_rows(client, session_maker, student, staff, lab_computer):
    student_user, headers = student
    _, staff_headers = staff

    await client.post("/api/bookings", json={
        "computer_id": lab_computer["id"],
        "start_time": "2030-01-01T09:00:00Z",
        "end_time": "2030-01-01T10:00:00Z",
    }, headers=headers)
    await client.post("/api/issues", json={
        "computer_id": lab_computer["id"], "title": "Broken mouse", "description": "Left click dead",
    }, headers=headers)
    await client.post("/api/sessions", json={
        "computer_id": lab_computer["id"], "user_id": str(student_user.id),
    }, headers=staff_headers)
    await client.post("/api/notifications", json={
        "user_id": str(student_user.id), "title": "Hi", "message": "Welcome",
    }, headers=staff_headers)

    res = await client.request("DELETE", "/api/account", json={"confirm": "DELETE"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["detail"] == "Account deleted"

    async with session_maker() as session:
        for model, column in (
            (Booking, Booking.user_id),
            (Issue, Issue.reported_by),
            (SessionLog, SessionLog.user_id),
            (Notification, Notification.user_id),
            (UserRole, UserRole.user_id),
            (Profile, Profile.id),
            (User, User.id),
        ):
            rows = (await session.execute(select(model).where(column == student_user.id))).all()
            assert rows == [], model.__tablename__

    # Token no longer resolves to a user
    me = await client.get("/api/auth/me", headers=headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_delete_account_keeps_resolved_issues(client, session_maker, student, staff, lab_computer):
    _, student_headers = student
    staff_user, staff_headers = staff

    issue = (await client.post("/api/issues", json={
        "computer_id": lab_computer["id"], "title": "No display", "description": "Monitor black",
    }, headers=student_headers)).json()
    await client.patch(f"/api/issues/{issue['id']}/status", json={"status": "resolved"}, headers=staff_headers)

    res = await client.request("DELETE", "/api/account", json={"confirm": "DELETE"}, headers=staff_headers)
    assert res.status_code == 200

    async with session_maker() as session:
        row = (await session.execute(select(Issue).where(Issue.title == "No display"))).scalar_one()
        assert row.resolved_by is None
        assert row.resolved_at is not None
