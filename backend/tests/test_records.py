# tests/test_records.py
from conftest import login


async def test_appointments_are_soonest_first(client, clinician, pregnancy):
    for title, when in (("Later", "2030-03-01T09:00:00Z"), ("Sooner", "2030-01-01T09:00:00Z")):
        response = await client.post("/api/appointments", headers=clinician.headers, json={
            "pregnancyId": pregnancy["id"], "title": title, "dateTime": when,
        })
        assert response.status_code == 201
        assert response.json()["status"] == "scheduled"
        assert response.json()["duration"] == 30

    response = await client.get("/api/appointments", headers=clinician.headers,
                                params={"pregnancyId": pregnancy["id"]})
    assert [a["title"] for a in response.json()] == ["Sooner", "Later"]


async def test_patient_lists_own_appointments_ignoring_query(client, patient, pregnancy, other_pregnancy, clinician):
    await client.post("/api/appointments", headers=clinician.headers, json={
        "pregnancyId": other_pregnancy["id"], "title": "Not yours", "dateTime": "2030-01-01T09:00:00Z",
    })
    await client.post("/api/appointments", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "title": "Mine", "dateTime": "2030-01-02T09:00:00Z",
    })

    response = await client.get("/api/appointments", headers=patient.headers,
                                params={"pregnancyId": other_pregnancy["id"]})
    assert [a["title"] for a in response.json()] == ["Mine"]


async def test_update_and_delete_appointment(client, patient, pregnancy):
    created = await client.post("/api/appointments", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "title": "Midwife visit", "dateTime": "2030-01-01T09:00:00Z",
    })
    appointment_id = created.json()["id"]

    updated = await client.patch(f"/api/appointments/{appointment_id}", headers=patient.headers,
                                 json={"status": "cancelled", "notes": "Rebooking"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "cancelled"
    assert updated.json()["title"] == "Midwife visit"

    deleted = await client.delete(f"/api/appointments/{appointment_id}", headers=patient.headers)
    assert deleted.status_code == 204

    listing = await client.get("/api/appointments", headers=patient.headers)
    assert listing.json() == []


async def test_invalid_appointment_status_is_400(client, patient, pregnancy):
    response = await client.post("/api/appointments", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "title": "Visit", "dateTime": "2030-01-01T09:00:00Z", "status": "maybe",
    })
    assert response.status_code == 400


async def test_vital_stats_are_newest_first(client, clinician, patient, pregnancy):
    for day in ("2024-03-01", "2024-05-01", "2024-04-01"):
        await client.post("/api/vital-stats", headers=clinician.headers, json={
            "pregnancyId": pregnancy["id"], "date": day, "weight": 70,
        })

    response = await client.get("/api/vital-stats", headers=patient.headers)
    assert [v["date"] for v in response.json()] == ["2024-05-01", "2024-04-01", "2024-03-01"]
    assert all(v["clinicianId"] == clinician.id for v in response.json())


async def test_scans_stamp_clinician(client, clinician, patient, pregnancy):
    by_clinician = await client.post("/api/scans", headers=clinician.headers, json={
        "pregnancyId": pregnancy["id"], "date": "2024-05-01", "title": "Morphology",
    })
    by_patient = await client.post("/api/scans", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "date": "2024-05-02", "title": "Private 3D scan",
    })
    assert by_clinician.json()["clinicianId"] == clinician.id
    assert by_patient.json()["clinicianId"] is None


async def test_mark_read_only_by_recipient(client, clinician, patient, other_patient, pregnancy):
    sent = await client.post("/api/messages", headers=clinician.headers, json={
        "pregnancyId": pregnancy["id"], "toId": patient.id, "message": "Results are in",
    })
    assert sent.status_code == 201
    assert sent.json()["fromId"] == clinician.id
    assert sent.json()["read"] is False
    message_id = sent.json()["id"]

    for intruder in (clinician, other_patient):
        response = await client.post(f"/api/messages/{message_id}/read", headers=intruder.headers)
        assert response.status_code == 403

    thread = await client.get("/api/messages", headers=patient.headers)
    assert thread.json()[0]["read"] is False

    response = await client.post(f"/api/messages/{message_id}/read", headers=patient.headers)
    assert response.status_code == 204

    thread = await client.get("/api/messages", headers=patient.headers)
    assert thread.json()[0]["read"] is True


async def test_mark_read_missing_message_is_404(client, patient, pregnancy):
    response = await client.post("/api/messages/9999/read", headers=patient.headers)
    assert response.status_code == 404


async def test_message_from_id_is_forced(client, clinician, patient, pregnancy):
    sent = await client.post("/api/messages", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "toId": clinician.id, "fromId": clinician.id, "message": "Hello",
    })
    assert sent.json()["fromId"] == patient.id


async def test_message_to_unknown_recipient_is_400(client, patient, pregnancy):
    response = await client.post("/api/messages", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "toId": 9999, "message": "Anyone?",
    })
    assert response.status_code == 400


async def test_message_thread_filter(client, clinician, patient, pregnancy):
    midwife = await login(client, "midwife-sub-0001", role="clinician", email="mw@example.org")
    await client.post("/api/messages", headers=clinician.headers, json={
        "pregnancyId": pregnancy["id"], "toId": patient.id, "message": "From the doctor",
    })
    await client.post("/api/messages", headers=midwife.headers, json={
        "pregnancyId": pregnancy["id"], "toId": patient.id, "message": "From the midwife",
    })
    await client.post("/api/messages", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "toId": clinician.id, "message": "Thanks doctor",
    })

    everything = await client.get("/api/messages", headers=patient.headers)
    assert [m["message"] for m in everything.json()] == ["From the doctor", "From the midwife", "Thanks doctor"]

    thread = await client.get("/api/messages", headers=patient.headers, params={"otherUserId": clinician.id})
    assert [m["message"] for m in thread.json()] == ["From the doctor", "Thanks doctor"]


async def test_pregnancy_lifecycle(client, clinician, patient, pregnancy):
    duplicate = await client.post("/api/pregnancy", headers=clinician.headers, json={
        "patientId": patient.id, "startDate": "2024-01-01", "dueDate": "2024-10-07",
    })
    assert duplicate.status_code == 409

    updated = await client.patch(f"/api/pregnancy/{pregnancy['id']}", headers=clinician.headers, json={
        "bloodGroup": "A", "rhFactor": "negative", "substanceUse": {"smoking": "never"},
    })
    assert updated.status_code == 200
    assert updated.json()["bloodGroup"] == "A"
    assert updated.json()["substanceUse"] == {"smoking": "never"}
    assert updated.json()["dueDate"] == pregnancy["dueDate"]

    fetched = await client.get("/api/pregnancy", headers=clinician.headers, params={"patientId": patient.id})
    assert fetched.json()["rhFactor"] == "negative"


async def test_pregnancy_for_clinician_target_is_400(client, clinician):
    response = await client.post("/api/pregnancy", headers=clinician.headers, json={
        "patientId": clinician.id, "startDate": "2024-01-01", "dueDate": "2024-10-07",
    })
    assert response.status_code == 400


async def test_clinician_pregnancy_lookup_requires_patient_id(client, clinician):
    assert (await client.get("/api/pregnancy", headers=clinician.headers)).status_code == 400
    response = await client.get("/api/pregnancy", headers=clinician.headers, params={"patientId": 9999})
    assert response.status_code == 404


async def test_immunisation_history(client, clinician, patient, pregnancy):
    missing = await client.get("/api/immunisation-history", headers=patient.headers)
    assert missing.status_code == 404

    created = await client.post("/api/immunisation-history", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "fluDate": "2024-04-01",
    })
    assert created.status_code == 201

    duplicate = await client.post("/api/immunisation-history", headers=clinician.headers, json={
        "pregnancyId": pregnancy["id"],
    })
    assert duplicate.status_code == 409

    updated = await client.patch(f"/api/immunisation-history/{created.json()['id']}", headers=clinician.headers,
                                 json={"covidDate": "2024-06-01"})
    assert updated.json()["fluDate"] == "2024-04-01"
    assert updated.json()["covidDate"] == "2024-06-01"

    fetched = await client.get("/api/immunisation-history", headers=clinician.headers,
                               params={"pregnancyId": pregnancy["id"]})
    assert fetched.json()["covidDate"] == "2024-06-01"


async def test_patient_directory(client, clinician, patient, other_patient):
    listing = await client.get("/api/patients", headers=clinician.headers)
    assert {p["id"] for p in listing.json()} == {patient.id, other_patient.id}

    one = await client.get(f"/api/patients/{patient.id}", headers=clinician.headers)
    assert one.json()["email"] == "pat@example.org"

    not_a_patient = await client.get(f"/api/patients/{clinician.id}", headers=clinician.headers)
    assert not_a_patient.status_code == 404


async def test_clinician_overview(client, clinician, pregnancy, other_pregnancy):
    for pregnancy_id, when in ((other_pregnancy["id"], "2030-02-01T09:00:00Z"), (pregnancy["id"], "2030-01-01T09:00:00Z")):
        await client.post("/api/appointments", headers=clinician.headers, json={
            "pregnancyId": pregnancy_id, "title": "Check", "dateTime": when,
        })
    await client.post("/api/test-results", headers=clinician.headers, json={
        "pregnancyId": pregnancy["id"], "date": "2024-05-01", "title": "GTT", "category": "Blood",
        "status": "follow_up",
    })
    await client.post("/api/test-results", headers=clinician.headers, json={
        "pregnancyId": pregnancy["id"], "date": "2024-05-02", "title": "FBC", "category": "Blood",
    })

    appointments = await client.get("/api/clinician/appointments", headers=clinician.headers)
    assert [a["pregnancyId"] for a in appointments.json()] == [pregnancy["id"], other_pregnancy["id"]]

    pending = await client.get("/api/clinician/test-results/pending", headers=clinician.headers)
    assert [r["title"] for r in pending.json()] == ["GTT"]

    statistics = await client.get("/api/clinician/statistics", headers=clinician.headers)
    assert statistics.json()["patientCount"] == 2
    assert statistics.json()["pendingTestResults"] == 1
    assert statistics.json()["patientsByTrimester"] == {"first": 0, "second": 1, "third": 1}


async def test_profile_update(client, patient, other_patient):
    updated = await client.patch("/api/user/profile", headers=patient.headers, json={
        "firstName": "Patricia", "role": "clinician",
    })
    assert updated.status_code == 200
    assert updated.json()["firstName"] == "Patricia"
    assert updated.json()["role"] == "patient"

    clash = await client.patch("/api/user/profile", headers=patient.headers, json={
        "email": other_patient.user["email"],
    })
    assert clash.status_code == 409


async def test_null_for_required_appointment_field_is_400(client, patient, pregnancy):
    created = await client.post("/api/appointments", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "title": "Midwife visit", "dateTime": "2030-01-01T09:00:00Z",
    })
    appointment_id = created.json()["id"]

    for field in ("title", "dateTime", "duration", "status"):
        response = await client.patch(f"/api/appointments/{appointment_id}", headers=patient.headers,
                                      json={field: None})
        assert response.status_code == 400, field

    cleared = await client.patch(f"/api/appointments/{appointment_id}", headers=patient.headers,
                                 json={"notes": None, "location": None})
    assert cleared.status_code == 200

    listing = await client.get("/api/appointments", headers=patient.headers)
    assert listing.status_code == 200
    assert listing.json()[0]["title"] == "Midwife visit"
    assert listing.json()[0]["status"] == "scheduled"


async def test_null_for_required_profile_field_is_400(client, patient):
    for field in ("username", "email", "firstName", "lastName"):
        response = await client.patch("/api/user/profile", headers=patient.headers, json={field: None})
        assert response.status_code == 400, field

    response = await client.get("/api/user", headers=patient.headers)
    assert response.status_code == 200
    assert response.json() == patient.user


async def test_null_for_required_pregnancy_field_is_400(client, clinician, patient, pregnancy):
    for field in ("dueDate", "startDate"):
        response = await client.patch(f"/api/pregnancy/{pregnancy['id']}", headers=clinician.headers,
                                      json={field: None})
        assert response.status_code == 400, field

    cleared = await client.patch(f"/api/pregnancy/{pregnancy['id']}", headers=clinician.headers,
                                 json={"notes": None})
    assert cleared.status_code == 200

    response = await client.get("/api/pregnancy", headers=patient.headers)
    assert response.status_code == 200
    assert response.json()["dueDate"] == pregnancy["dueDate"]


async def test_immunisation_dates_can_be_cleared(client, patient, pregnancy):
    created = await client.post("/api/immunisation-history", headers=patient.headers, json={
        "pregnancyId": pregnancy["id"], "fluDate": "2024-04-01", "rsvDate": "2024-05-01",
    })

    updated = await client.patch(f"/api/immunisation-history/{created.json()['id']}", headers=patient.headers,
                                 json={"fluDate": None})
    assert updated.status_code == 200
    assert updated.json()["fluDate"] is None
    assert updated.json()["rsvDate"] == "2024-05-01"

    fetched = await client.get("/api/immunisation-history", headers=patient.headers)
    assert fetched.status_code == 200
    assert fetched.json()["pregnancyId"] == pregnancy["id"]
