import pytest


async def report(client, headers, computer_id, **extra):
    payload = {"computer_id": computer_id, "title": "Keyboard", "description": "Sticky keys", **extra}
    return await client.post("/api/issues", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_report_issue_defaults(client, student, lab_computer):
    user, headers = student
    res = await report(client, headers, lab_computer["id"])
    assert res.status_code == 201
    issue = res.json()
    assert issue["status"] == "pending"
    assert issue["priority"] == "medium"
    assert issue["reported_by"] == str(user.id)


@pytest.mark.asyncio
async def test_resolving_stamps_resolver(client, student, staff, lab_computer):
    _, headers = student
    staff_user, staff_headers = staff
    issue = (await report(client, headers, lab_computer["id"], priority="high")).json()

    res = await client.patch(f"/api/issues/{issue['id']}/status", json={"status": "in_progress"}, headers=staff_headers)
    assert res.json()["resolved_at"] is None

    res = await client.patch(f"/api/issues/{issue['id']}/status", json={
        "status": "resolved", "resolution_notes": "Replaced keyboard",
    }, headers=staff_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["resolved_by"] == str(staff_user.id)
    assert body["resolved_at"] is not None
    assert body["resolution_notes"] == "Replaced keyboard"


@pytest.mark.asyncio
async def test_student_cannot_triage(client, student, lab_computer):
    _, headers = student
    issue = (await report(client, headers, lab_computer["id"])).json()
    res = await client.patch(f"/api/issues/{issue['id']}/status", json={"status": "closed"}, headers=headers)
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_staff_deletes_issue(client, student, staff, lab_computer):
    _, headers = student
    _, staff_headers = staff
    issue = (await report(client, headers, lab_computer["id"])).json()

    assert (await client.delete(f"/api/issues/{issue['id']}", headers=staff_headers)).status_code == 200
    assert (await client.get(f"/api/issues/{issue['id']}", headers=staff_headers)).status_code == 404


@pytest.mark.asyncio
async def test_reopening_clears_resolution(client, student, staff, lab_computer):
    _, headers = student
    _, staff_headers = staff
    issue = (await report(client, headers, lab_computer["id"])).json()
    url = f"/api/issues/{issue['id']}/status"

    await client.patch(url, json={"status": "closed"}, headers=staff_headers)
    res = await client.patch(url, json={"status": "in_progress"}, headers=staff_headers)
    assert res.status_code == 200
    assert res.json()["resolved_at"] is None
    assert res.json()["resolved_by"] is None
