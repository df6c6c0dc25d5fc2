import pytest


@pytest.mark.asyncio
async def test_log_maintenance(client, staff, lab_computer):
    staff_user, headers = staff
    res = await client.post("/api/maintenance", json={
        "computer_id": lab_computer["id"],
        "maintenance_type": "Hardware Upgrade",
        "description": "RAM to 32GB",
        "cost": "120.50",
        "started_at": "2030-01-01T09:00:00Z",
        "completed_at": "2030-01-01T10:30:00Z",
    }, headers=headers)
    assert res.status_code == 201
    log = res.json()
    assert log["performed_by"] == str(staff_user.id)
    assert log["performer_name"] == "Lab_Staff User"

    listing = (await client.get(f"/api/maintenance?computer_id={lab_computer['id']}", headers=headers)).json()
    assert [entry["id"] for entry in listing] == [log["id"]]


@pytest.mark.asyncio
async def test_completed_before_started_rejected(client, staff, lab_computer):
    _, headers = staff
    res = await client.post("/api/maintenance", json={
        "computer_id": lab_computer["id"],
        "maintenance_type": "Repair",
        "description": "PSU",
        "started_at": "2030-01-02T09:00:00Z",
        "completed_at": "2030-01-01T09:00:00Z",
    }, headers=headers)
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_update_and_delete(client, staff, lab_computer):
    _, headers = staff
    log = (await client.post("/api/maintenance", json={
        "computer_id": lab_computer["id"], "maintenance_type": "Inspection", "description": "Check fans",
    }, headers=headers)).json()
    assert log["completed_at"] is None

    res = await client.patch(f"/api/maintenance/{log['id']}", json={"notes": "All good"}, headers=headers)
    assert res.json()["notes"] == "All good"

    assert (await client.delete(f"/api/maintenance/{log['id']}", headers=headers)).status_code == 200


@pytest.mark.asyncio
async def test_students_locked_out(client, student):
    _, headers = student
    assert (await client.get("/api/maintenance", headers=headers)).status_code == 403


@pytest.mark.asyncio
async def test_maintenance_types(client, staff):
    _, headers = staff
    res = await client.get("/api/maintenance/types", headers=headers)
    assert "Hardware Upgrade" in res.json()
    assert len(res.json()) == 8
