import pytest


@pytest.mark.asyncio
async def test_broadcast_to_all(client, staff, make_user):
    _, staff_headers = staff
    _, alice_headers = await make_user()
    _, bob_headers = await make_user()

    res = await client.post("/api/notifications", json={
        "user_id": "all", "title": "Lab closed", "message": "Closed Friday", "type": "system",
    }, headers=staff_headers)
    assert res.status_code == 201
    # staff + alice + bob
    assert res.json() == {"created": 3}

    alice_items = (await client.get("/api/notifications", headers=alice_headers)).json()
    assert len(alice_items) == 1
    assert alice_items[0]["title"] == "Lab closed"
    assert alice_items[0]["read"] is False
    assert alice_items[0]["metadata"] == {}


@pytest.mark.asyncio
async def test_unknown_recipient(client, staff):
    _, headers = staff
    res = await client.post("/api/notifications", json={
        "user_id": "00000000-0000-0000-0000-000000000000", "title": "t", "message": "m",
    }, headers=headers)
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_student_cannot_send(client, student):
    user, headers = student
    res = await client.post("/api/notifications", json={
        "user_id": str(user.id), "title": "t", "message": "m",
    }, headers=headers)
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_mark_read_and_delete(client, staff, make_user):
    _, staff_headers = staff
    alice, alice_headers = await make_user()
    _, bob_headers = await make_user()

    for title in ("one", "two"):
        await client.post("/api/notifications", json={
            "user_id": str(alice.id), "title": title, "message": "m",
        }, headers=staff_headers)

    items = (await client.get("/api/notifications", headers=alice_headers)).json()
    target = items[0]["id"]

    # Not bob's to touch
    assert (await client.post(f"/api/notifications/{target}/read", headers=bob_headers)).status_code == 403

    res = await client.post(f"/api/notifications/{target}/read", headers=alice_headers)
    assert res.json()["read"] is True

    unread = (await client.get("/api/notifications?unread_only=true", headers=alice_headers)).json()
    assert len(unread) == 1

    res = await client.post("/api/notifications/read-all", headers=alice_headers)
    assert res.json() == {"updated": 1}

    assert (await client.delete(f"/api/notifications/{target}", headers=alice_headers)).status_code == 200
    assert len((await client.get("/api/notifications", headers=alice_headers)).json()) == 1
