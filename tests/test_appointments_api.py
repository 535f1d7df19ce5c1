from __future__ import annotations


def _book(client, **overrides):
    body = {"pet_id": 7, "vet_id": 2, "date": "2025-11-20", "time": "10:00", "duration_minutes": 30, "reason": "Control"}
    body.update(overrides)
    return client.post("/appointments", json=body)


def test_root(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_create_appointment(client) -> None:
    resp = _book(client, time="9:5", duration_minutes=45)

    assert resp.status_code == 201
    data = resp.json()
    assert data["time"] == "09:05:00"
    assert data["end_time"] == "09:50:00"
    assert data["start_at"] == "2025-11-20T09:05:00"
    assert data["end_at"] == "2025-11-20T09:50:00"
    assert data["status"] == "programada"


def test_conflicting_booking_returns_409(client) -> None:
    assert _book(client, pet_id=7, time="10:00").status_code == 201

    clash = _book(client, pet_id=8, time="10:15")
    assert clash.status_code == 409
    assert clash.json()["detail"] == "El veterinario ya tiene una cita en ese horario."

    pet_clash = _book(client, vet_id=3, pet_id=7, time="10:20")
    assert pet_clash.status_code == 409
    assert pet_clash.json()["detail"] == "La mascota ya tiene una cita en ese horario."

    assert _book(client, pet_id=8, time="10:30").status_code == 201


def test_validation_errors_return_400(client) -> None:
    assert _book(client, duration_minutes=3).status_code == 400
    bad_date = _book(client, date="2025-02-30")
    assert bad_date.status_code == 400
    assert bad_date.json()["detail"] == "Fecha u hora invalidas."


def test_get_update_and_cancel(client) -> None:
    created = _book(client).json()

    got = client.get(f"/appointments/{created['id']}")
    assert got.status_code == 200
    assert got.json()["reason"] == "Control"

    moved = client.put(f"/appointments/{created['id']}", json={"time": "10:10", "duration_minutes": 60})
    assert moved.status_code == 200
    assert moved.json()["end_time"] == "11:10:00"

    cancelled = client.post(f"/appointments/{created['id']}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json() == {"ok": True, "appointment_id": created["id"], "status": "cancelada"}

    assert client.get(f"/appointments/{created['id']}").status_code == 404


def test_update_missing_appointment_returns_404(client) -> None:
    resp = client.put("/appointments/999", json={"time": "10:00"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Cita no encontrada"


def test_list_appointments(client) -> None:
    _book(client, pet_id=1, time="15:00")
    _book(client, pet_id=2, time="09:00")
    _book(client, pet_id=3, date="2025-11-21")

    resp = client.get("/appointments", params={"date": "2025-11-20"})
    assert resp.status_code == 200
    assert [a["time"] for a in resp.json()] == ["09:00:00", "15:00:00"]

    assert client.get("/appointments", params={"date": "no-es-fecha"}).status_code == 400


def test_availability_grid(client) -> None:
    _book(client, time="09:00")

    resp = client.get("/availability", params={
        "vetId": 2, "date": "2025-11-20", "durationMinutes": 30,
        "openingTime": "09:00", "closingTime": "10:00", "stepMinutes": 30,
    })

    assert resp.status_code == 200
    data = resp.json()
    assert data["slots"] == [
        {"start": "09:00", "end": "09:30", "available": False},
        {"start": "09:30", "end": "10:00", "available": True},
    ]
    assert data["vet_id"] == 2
    assert data["duration_minutes"] == 30
    assert data["step_minutes"] == 30
    assert [a["time"] for a in data["appointments"]] == ["09:00:00"]


def test_availability_uses_clinic_hours_by_default(client) -> None:
    resp = client.get("/availability", params={"vetId": 2, "date": "2025-11-20"})

    data = resp.json()
    assert data["opening_time"] == "09:00"
    assert data["closing_time"] == "18:00"
    assert len(data["slots"]) == 18


def test_availability_errors(client) -> None:
    assert client.get("/availability", params={"date": "2025-11-20"}).status_code == 400
    hours = client.get("/availability", params={
        "vetId": 2, "date": "2025-11-20", "openingTime": "18:00", "closingTime": "09:00",
    })
    assert hours.status_code == 400
    assert client.get("/availability", params={"vetId": 2, "date": "2025-11-20", "stepMinutes": 300}).status_code == 400


def test_fractional_duration_is_a_validation_error(client) -> None:
    resp = _book(client, duration_minutes=30.5)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "La duracion debe estar entre 5 y 480 minutos."


def test_non_numeric_duration_defaults_to_30(client) -> None:
    created = _book(client, duration_minutes="abc")
    assert created.status_code == 201
    assert created.json()["duration_minutes"] == 30
    assert created.json()["end_time"] == "10:30:00"

    numeric_text = _book(client, pet_id=8, time="11:00", duration_minutes="45")
    assert numeric_text.json()["end_time"] == "11:45:00"


def test_update_with_blank_duration_keeps_current(client) -> None:
    created = _book(client, duration_minutes=60).json()

    moved = client.put(f"/appointments/{created['id']}", json={"time": "12:00", "duration_minutes": ""})
    assert moved.status_code == 200
    assert moved.json()["duration_minutes"] == 60
    assert moved.json()["end_time"] == "13:00:00"


def test_non_canonical_time_is_rejected(client) -> None:
    resp = _book(client, time="1000")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Fecha u hora invalidas."
