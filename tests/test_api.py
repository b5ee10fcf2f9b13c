"""End-to-end tests through the HTTP API."""

import uuid
from datetime import timedelta


def create_user(client, name="Reader", email=None):
    response = client.post("/api/users", json={"name": name, "email": email})
    assert response.status_code == 201
    return response.json()["id"]


def publish(client, day, title="Genesis"):
    response = client.post("/api/readings/", json={"date": day.isoformat(), "title": title})
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_profile_me_requires_identity(client):
    user_id = create_user(client, "Ruth")

    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"X-User-Id": "not-a-uuid"}).status_code == 401

    response = client.get("/api/users/me", headers={"X-User-Id": user_id})
    assert response.status_code == 200
    assert response.json()["name"] == "Ruth"


def test_duplicate_email_conflicts(client):
    create_user(client, "Ruth", "ruth@example.com")
    response = client.post("/api/users", json={"name": "Other", "email": "ruth@example.com"})
    assert response.status_code == 409


def test_publish_rejects_second_reading_on_same_day(client, today):
    publish(client, today)
    response = client.post("/api/readings/", json={"date": today.isoformat(), "title": "Again"})
    assert response.status_code == 409


def test_today_reading(client, today):
    publish(client, today - timedelta(days=1), "Yesterday")

    response = client.get("/api/readings/today", params={"as_of": today.isoformat()})
    assert response.status_code == 404

    publish(client, today, "Today")
    response = client.get("/api/readings/today", params={"as_of": today.isoformat()})
    assert response.status_code == 200
    assert response.json()["title"] == "Today"


def test_list_readings_newest_first(client, today):
    for offset in range(3):
        publish(client, today - timedelta(days=offset), f"Day {offset}")

    response = client.get("/api/readings/", params={"limit": 2})

    assert [r["title"] for r in response.json()] == ["Day 0", "Day 1"]


def test_toggle_and_progress_flow(client, today):
    user_id = create_user(client)
    headers = {"X-User-Id": user_id}
    day_minus_2 = publish(client, today - timedelta(days=2), "Genesis 1-3")
    day_minus_1 = publish(client, today - timedelta(days=1), "Genesis 4-6")
    day_0 = publish(client, today, "Genesis 7-9")
    params = {"as_of": today.isoformat()}

    response = client.post(f"/api/readings/{day_minus_1}/toggle", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["completed"] is True

    progress = client.get(f"/api/users/{user_id}/progress", params=params).json()
    assert progress["snapshot"] == {
        "completed_count": 1,
        "due_count": 3,
        "overdue_count": 2,
        "remaining_count": 1188,
        "completion_percentage": 0.1,
    }

    pending = client.get(f"/api/users/{user_id}/pending", params=params).json()
    assert [r["id"] for r in pending["readings"]] == [day_minus_2, day_0]

    client.post(f"/api/readings/{day_0}/toggle", headers=headers)
    pending = client.get(f"/api/users/{user_id}/pending", params=params).json()
    assert [r["id"] for r in pending["readings"]] == [day_minus_2]

    # Toggle back
    response = client.post(f"/api/readings/{day_0}/toggle", headers=headers)
    assert response.json()["status"] == "pending"
    assert response.json()["completed_at"] is None


def test_toggle_requires_identity_and_known_reading(client, today):
    reading_id = publish(client, today)
    assert client.post(f"/api/readings/{reading_id}/toggle").status_code == 401

    user_id = create_user(client)
    response = client.post(f"/api/readings/{uuid.uuid4()}/toggle", headers={"X-User-Id": user_id})
    assert response.status_code == 404


def test_progress_for_unknown_user(client):
    assert client.get(f"/api/users/{uuid.uuid4()}/progress").status_code == 404


def test_calendar_and_dashboard(client, today):
    user_id = create_user(client)
    reading_id = publish(client, today, "Psalm 1")
    publish(client, today + timedelta(days=1), "Psalm 2")
    params = {"as_of": today.isoformat()}

    calendar = client.get(f"/api/users/{user_id}/calendar", params=params).json()
    assert [e["status"] for e in calendar] == ["upcoming", "today"]

    dashboard = client.get("/api/users/me/dashboard", params=params, headers={"X-User-Id": user_id}).json()
    assert dashboard["today"]["reading"]["id"] == reading_id
    assert dashboard["today"]["status"] == "today"
    assert dashboard["snapshot"]["due_count"] == 1


def test_leaderboard(client, today):
    leader = create_user(client, "Leader")
    follower = create_user(client, "Follower")
    readings = [publish(client, today - timedelta(days=i)) for i in range(3)]
    for reading_id in readings:
        client.post(f"/api/readings/{reading_id}/toggle", headers={"X-User-Id": leader})

    response = client.get("/api/leaderboard", params={"as_of": today.isoformat()})
    assert response.status_code == 200

    entries = response.json()["entries"]
    assert [e["user_id"] for e in entries] == [leader, follower]
    assert entries[0]["rank"] == 1
    assert entries[0]["snapshot"]["completed_count"] == 3
    assert entries[1]["snapshot"]["completed_count"] == 0


def test_announcements_empty(client):
    response = client.get("/api/announcements")
    assert response.status_code == 200
    assert response.json() == []
