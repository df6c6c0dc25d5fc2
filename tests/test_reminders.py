import uuid
from datetime import timedelta

import pytest

from labdesk.core.clock import utc_now
from labdesk.core.scoping import AccessScope
from labdesk.models.booking import Booking
from labdesk.models.maintenance import MaintenanceLog
from labdesk.models.software import Software
from labdesk.services.reminder_service import (
    booking_urgency,
    collect,
    license_urgency,
    maintenance_due,
)


def test_booking_urgency_thresholds():
    assert booking_urgency(0) == "critical"
    assert booking_urgency(1) == "critical"
    assert booking_urgency(6) == "warning"
    assert booking_urgency(7) == "info"


def test_license_urgency_thresholds():
    assert license_urgency(-3) == "critical"
    assert license_urgency(0) == "critical"
    assert license_urgency(7) == "warning"
    assert license_urgency(8) == "info"


@pytest.mark.asyncio
async def test_student_gets_only_own_bookings(db, make_user, lab_computer):
    alice, _ = await make_user()
    bob, _ = await make_user()
    now = utc_now()
    computer_id = uuid.UUID(lab_computer["id"])

    db.add_all([
        Booking(computer_id=computer_id, user_id=alice.id,
                start_time=now + timedelta(minutes=30), end_time=now + timedelta(hours=2)),
        Booking(computer_id=computer_id, user_id=alice.id,
                start_time=now + timedelta(hours=30), end_time=now + timedelta(hours=31)),
        Booking(computer_id=computer_id, user_id=bob.id,
                start_time=now + timedelta(hours=3), end_time=now + timedelta(hours=4)),
    ])
    db.add(Software(name="Licensed", license_expiry=(now + timedelta(days=3)).date()))
    await db.commit()

    reminders = await collect(db, alice.id, AccessScope.own)
    assert len(reminders.bookings) == 1
    assert reminders.bookings[0].urgency == "critical"
    assert reminders.bookings[0].computer_name == "Lab PC 01"
    assert reminders.licenses == []
    assert reminders.maintenance == []
    assert reminders.total == 1

    everything = await collect(db, alice.id, AccessScope.all)
    assert len(everything.bookings) == 2
    assert [lic.urgency for lic in everything.licenses] == ["warning"]


@pytest.mark.asyncio
async def test_maintenance_due(db, client, admin):
    _, headers = admin
    now = utc_now()

    fresh = (await client.post("/api/computers", json={"system_id": "M-1", "name": "Fresh"}, headers=headers)).json()
    stale = (await client.post("/api/computers", json={"system_id": "M-2", "name": "Stale"}, headers=headers)).json()
    (await client.post("/api/computers", json={"system_id": "M-3", "name": "Never"}, headers=headers)).json()

    db.add_all([
        MaintenanceLog(computer_id=uuid.UUID(fresh["id"]), maintenance_type="Cleaning", description="d",
                       started_at=now - timedelta(days=5), completed_at=now - timedelta(days=5)),
        MaintenanceLog(computer_id=uuid.UUID(stale["id"]), maintenance_type="Cleaning", description="d",
                       started_at=now - timedelta(days=45), completed_at=now - timedelta(days=45)),
    ])
    await db.commit()

    due = await maintenance_due(db, now)
    assert [(d.computer_name, d.days_since_last_maintenance) for d in due] == [("Never", None), ("Stale", 45)]


@pytest.mark.asyncio
async def test_reminders_endpoint(client, student):
    _, headers = student
    res = await client.get("/api/reminders", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"bookings": [], "licenses": [], "maintenance": [], "total": 0}
