"""HTTP surface: routers translate to service calls and domain errors to status codes."""

import uuid

import pytest

API = "/api/v1"


async def _exercise(client, name="Bench Press", tracking_type="weight_and_reps", muscle="chest"):
    resp = await client.post(
        f"{API}/exercises",
        json={"name": name, "primary_muscle": muscle, "tracking_type": tracking_type, "secondary_muscles": ["triceps"]},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _workout_with_exercise(client):
    exercise = await _exercise(client)
    workout = (await client.post(f"{API}/workouts", json={"workout_type": "gym"})).json()
    resp = await client.post(f"{API}/workouts/{workout['id']}/exercises", json={"exercise_id": exercise["id"]})
    assert resp.status_code == 201, resp.text
    return workout["id"], resp.json()


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    ready = await client.get(f"{API}/health/ready")
    assert ready.json() == {"status": "ok", "database": "connected"}


@pytest.mark.asyncio
async def test_exercise_create_and_list(client):
    created = await _exercise(client)
    assert created["icon_name"] == "figure.arms.open"
    assert created["secondary_muscles"] == ["triceps"]
    assert created["is_system_exercise"] is False

    listed = (await client.get(f"{API}/exercises")).json()
    assert [e["name"] for e in listed] == ["Bench Press"]
    assert (await client.get(f"{API}/exercises/{created['id']}")).status_code == 200
    assert (await client.get(f"{API}/exercises/{uuid.uuid4()}")).status_code == 404


@pytest.mark.asyncio
async def test_set_flow_and_personal_records(client):
    workout_id, we = await _workout_with_exercise(client)
    first_set = we["sets"][0]
    assert first_set["set_number"] == 1

    resp = await client.patch(f"{API}/workouts/{workout_id}/sets/{first_set['id']}", json={"weight": 135, "reps": 10})
    assert resp.status_code == 200
    assert resp.json()["is_completed"] is False

    resp = await client.post(f"{API}/workouts/{workout_id}/sets/{first_set['id']}/complete")
    body = resp.json()
    assert body["set"]["is_completed"] is True
    assert body["set"]["volume"] == 1350
    assert body["set"]["is_personal_record"] is True
    assert {r["record_type"] for r in body["personal_records"]} == {"max_weight", "max_reps", "max_volume"}

    resp = await client.post(f"{API}/workouts/{workout_id}/exercises/{we['id']}/sets")
    assert resp.status_code == 201
    assert (resp.json()["set_number"], resp.json()["weight"], resp.json()["reps"]) == (2, 135, 10)

    detail = (await client.get(f"{API}/workouts/{workout_id}")).json()
    assert detail["total_volume"] == 1350
    assert detail["total_sets"] == 2
    assert detail["completed_sets"] == 1

    records = (await client.get(f"{API}/pr", params={"current_only": True})).json()
    assert len(records) == 3


@pytest.mark.asyncio
async def test_delete_set_renumbers(client):
    workout_id, we = await _workout_with_exercise(client)
    for _ in range(2):
        await client.post(f"{API}/workouts/{workout_id}/exercises/{we['id']}/sets")

    resp = await client.delete(f"{API}/workouts/{workout_id}/sets/{we['sets'][0]['id']}")
    assert resp.status_code == 204

    detail = (await client.get(f"{API}/workouts/{workout_id}")).json()
    assert [s["set_number"] for s in detail["exercises"][0]["sets"]] == [1, 2]


@pytest.mark.asyncio
async def test_measurement_mismatch_is_422(client):
    workout_id, we = await _workout_with_exercise(client)
    set_id = we["sets"][0]["id"]
    resp = await client.put(
        f"{API}/workouts/{workout_id}/sets/{set_id}/measurement",
        json={"measurement": {"kind": "time_only", "duration": 60}},
    )
    assert resp.status_code == 422
    ok = await client.put(
        f"{API}/workouts/{workout_id}/sets/{set_id}/measurement",
        json={"measurement": {"kind": "weight_and_reps", "weight": 80, "reps": 5}},
    )
    assert ok.status_code == 200
    assert (ok.json()["weight"], ok.json()["reps"]) == (80, 5)


@pytest.mark.asyncio
async def test_lifecycle_and_terminal_conflict(client):
    workout_id, _ = await _workout_with_exercise(client)

    assert (await client.post(f"{API}/workouts/{workout_id}/resume")).status_code == 409
    assert (await client.post(f"{API}/workouts/{workout_id}/pause")).json()["status"] == "paused"
    assert (await client.post(f"{API}/workouts/{workout_id}/resume")).json()["status"] == "in_progress"

    done = await client.post(f"{API}/workouts/{workout_id}/complete")
    assert done.status_code == 200
    assert done.json()["status"] == "completed"
    assert done.json()["ended_at"] is not None

    again = await client.post(f"{API}/workouts/{workout_id}/cancel")
    assert again.status_code == 409
    assert "completed" in again.json()["detail"]

    streak = (await client.get(f"{API}/streak")).json()
    assert streak["current_streak"] == 1
    summary = (await client.get(f"{API}/analytics/summary")).json()
    assert summary["total_workouts"] == 1
    types = (await client.get(f"{API}/analytics/workout-types")).json()
    assert types == [{"workout_type": "gym", "count": 1, "percentage": 100.0}]


@pytest.mark.asyncio
async def test_progress_series_is_zero_filled(client):
    resp = await client.get(f"{API}/analytics/progress", params={"granularity": "day", "metric": "volume"})
    body = resp.json()
    assert resp.status_code == 200
    assert len(body["points"]) == 7
    assert all(p["value"] == 0 for p in body["points"])


@pytest.mark.asyncio
async def test_cancelled_workout_listed_by_status(client):
    workout = (await client.post(f"{API}/workouts", json={"workout_type": "gym"})).json()
    await client.post(f"{API}/workouts/{workout['id']}/cancel")

    cancelled = (await client.get(f"{API}/workouts", params={"status": "cancelled"})).json()
    assert [w["id"] for w in cancelled] == [workout["id"]]
    assert (await client.get(f"{API}/workouts", params={"status": "completed"})).json() == []


@pytest.mark.asyncio
async def test_unknown_workout_is_404(client):
    resp = await client.get(f"{API}/workouts/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert "not found" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_free_tier_gates(client):
    assert (await client.post(f"{API}/workouts", json={"workout_type": "yoga"})).status_code == 403

    workout_id, _ = await _workout_with_exercise(client)
    await client.post(f"{API}/workouts/{workout_id}/complete")
    assert (await client.post(f"{API}/workouts/{workout_id}/health-export")).status_code == 403


@pytest.mark.asyncio
async def test_delete_workout(client):
    workout_id, _ = await _workout_with_exercise(client)
    assert (await client.delete(f"{API}/workouts/{workout_id}")).status_code == 204
    assert (await client.get(f"{API}/workouts/{workout_id}")).status_code == 404


@pytest.mark.asyncio
async def test_workout_details_patch(client):
    workout = (await client.post(f"{API}/workouts", json={"workout_type": "gym"})).json()
    resp = await client.patch(
        f"{API}/workouts/{workout['id']}",
        json={"name": "Push day", "calories_burned": 380, "pre_workout_mood": 2, "rating": 5},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert (body["name"], body["calories_burned"], body["pre_workout_mood"], body["rating"]) == ("Push day", 380, 2, 5)
    assert body["post_workout_mood"] is None

    assert (await client.patch(f"{API}/workouts/{workout['id']}", json={"rating": 0})).status_code == 422
    assert (await client.get(f"{API}/workouts/{workout['id']}")).json()["rating"] == 5


@pytest.mark.asyncio
async def test_profile_units_and_record_count(client):
    profile = (await client.get(f"{API}/profile")).json()
    assert (profile["weight_unit"], profile["distance_unit"]) == ("pounds", "miles")
    assert profile["personal_records"] == 0

    resp = await client.patch(f"{API}/profile", json={"weight_unit": "kilograms", "distance_unit": "kilometers"})
    assert resp.status_code == 200
    assert (resp.json()["weight_unit"], resp.json()["distance_unit"]) == ("kilograms", "kilometers")
    assert (await client.patch(f"{API}/profile", json={"tz_name": "Mars/Olympus"})).status_code == 422

    workout_id, we = await _workout_with_exercise(client)
    set_id = we["sets"][0]["id"]
    await client.patch(f"{API}/workouts/{workout_id}/sets/{set_id}", json={"weight": 100, "reps": 5})
    await client.post(f"{API}/workouts/{workout_id}/sets/{set_id}/complete")
    await client.post(f"{API}/workouts/{workout_id}/complete")
    profile = (await client.get(f"{API}/profile")).json()
    assert profile["personal_records"] == 3
    assert profile["total_workouts"] == 1


@pytest.mark.asyncio
async def test_insights(client):
    empty = (await client.get(f"{API}/analytics/insights")).json()
    assert empty == {
        "recovery_score": 100.0,
        "suggest_rest_day": False,
        "suggested_workout_type": "gym",
        "message": "Start your fitness journey with a workout today!",
    }

    workout_id, _ = await _workout_with_exercise(client)
    await client.post(f"{API}/workouts/{workout_id}/complete")
    after = (await client.get(f"{API}/analytics/insights")).json()
    assert after["suggested_workout_type"] == "running"
    assert after["message"] == "You're on a 1-day streak! Don't break it."
    assert after["recovery_score"] > 99


@pytest.mark.asyncio
async def test_exercise_suggestions(client):
    await _exercise(client)
    await _exercise(client, name="Back Squat", muscle="quadriceps")

    resp = await client.get(f"{API}/exercises/suggestions", params={"muscle": ["chest"]})
    assert resp.status_code == 200
    assert [e["name"] for e in resp.json()] == ["Bench Press"]
    assert (await client.get(f"{API}/exercises/suggestions")).status_code == 422
