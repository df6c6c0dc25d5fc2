import csv
import io

import pytest

from labdesk.services.data_service import flatten, parse_csv, to_csv


def test_flatten_one_level():
    row = {"id": 1, "computers": {"name": "PC", "system_id": "S1"}}
    assert flatten(row) == {"id": 1, "computers_name": "PC", "computers_system_id": "S1"}


def test_to_csv_quotes_every_field():
    text = to_csv([
        {"name": 'Say "hi"', "n": 1},
        {"name": "plain", "n": None},
    ])
    lines = text.split("\n")
    assert lines == ['"name","n"', '"Say ""hi""","1"', '"plain",""']


def test_to_csv_empty():
    with pytest.raises(ValueError):
        to_csv([])


def test_parse_csv_trims_and_skips_short_rows():
    text = "name , version,vendor\n  VS Code , 1.90 ,Microsoft\n\nlonely\nGIMP,,\n"
    assert parse_csv(text) == [
        {"name": "VS Code", "version": "1.90", "vendor": "Microsoft"},
        {"name": "GIMP", "version": None, "vendor": None},
    ]


@pytest.mark.asyncio
async def test_export_bookings_flattens_relations(client, student, staff, lab_computer):
    _, headers = student
    _, staff_headers = staff
    for day in ("01", "02", "03"):
        await client.post("/api/bookings", json={
            "computer_id": lab_computer["id"],
            "start_time": f"2030-06-{day}T09:00:00Z",
            "end_time": f"2030-06-{day}T10:00:00Z",
            "purpose": "Thesis, chapter 2",
        }, headers=headers)

    res = await client.get("/api/data/export/bookings", headers=staff_headers)
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert "bookings_" in res.headers["content-disposition"]

    lines = res.text.split("\n")
    assert len(lines) == 4

    rows = list(csv.reader(io.StringIO(res.text)))
    header = rows[0]
    assert "computers_name" in header
    assert "profiles_email" in header
    assert all(len(r) == len(header) for r in rows)
    assert all(line.startswith('"') and line.endswith('"') for line in lines)

    first = dict(zip(header, rows[1]))
    assert first["computers_system_id"] == lab_computer["system_id"]
    assert first["purpose"] == "Thesis, chapter 2"
    assert first["status"] == "pending"


@pytest.mark.asyncio
async def test_export_empty_returns_404(client, staff):
    _, headers = staff
    res = await client.get("/api/data/export/issues", headers=headers)
    assert res.status_code == 404
    assert res.json()["detail"] == "No data to export"


@pytest.mark.asyncio
async def test_export_unknown_kind(client, staff):
    _, headers = staff
    res = await client.get("/api/data/export/passwords", headers=headers)
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_export_requires_staff(client, student):
    _, headers = student
    res = await client.get("/api/data/export/computers", headers=headers)
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_import_computers(client, admin):
    _, headers = admin
    body = (
        "system_id,name,location,unknown_column\n"
        " LAB-01 , Desk 1 ,Room A,ignored\n"
        "LAB-02,Desk 2,Room A,ignored\n"
        "\n"
    )
    res = await client.post("/api/data/import/computers", content=body, headers=headers)
    assert res.status_code == 200
    assert res.json() == {"imported": 2}

    computers = (await client.get("/api/computers", headers=headers)).json()
    assert sorted(c["system_id"] for c in computers) == ["LAB-01", "LAB-02"]
    assert computers[0]["name"] == "Desk 1"


@pytest.mark.asyncio
async def test_import_is_all_or_nothing(client, admin, lab_computer):
    _, headers = admin
    body = (
        "system_id,name\n"
        "NEW-01,Fresh\n"
        f"{lab_computer['system_id']},Clash\n"
    )
    res = await client.post("/api/data/import/computers", content=body, headers=headers)
    assert res.status_code == 400

    computers = (await client.get("/api/computers", headers=headers)).json()
    assert [c["system_id"] for c in computers] == [lab_computer["system_id"]]


@pytest.mark.asyncio
async def test_import_software_and_export_round(client, staff):
    _, headers = staff
    body = "name,version,license_expiry\nMATLAB,R2024a,2031-01-31\nPython,3.12,\n"
    res = await client.post("/api/data/import/software", content=body, headers=headers)
    assert res.json() == {"imported": 2}

    res = await client.get("/api/data/export/software", headers=headers)
    assert res.status_code == 200
    assert len(res.text.split("\n")) == 3
