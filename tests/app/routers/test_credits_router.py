"""Tests for the ending credits API."""

from uuid import uuid4


def _conversation_with_messages(client, n=3):
    sid = client.post("/conversations").json()["data"]["session_id"]
    for i in range(n):
        client.post(f"/conversations/{sid}/messages", json={"role": "USER", "content": f"m{i}"})
    return sid


def test_generate_credits(client):
    sid = _conversation_with_messages(client)
    r = client.post("/ending-credits", json={"session_id": sid})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["session_id"] == sid
    assert data["stats"]["message_count"] == 3
    assert data["stats"]["duration_sec"] >= 0
    assert len(data["lines"]) == 10
    assert data["lines"][0] == "Our conversation carried on across 3 messages"
    assert data["credits"] == [
        {"role": "User", "name": "You"},
        {"role": "Assistant", "name": "Chat-Orchestra"},
    ]
    assert data["generated_at"]


def test_credits_for_new_conversation(client):
    sid = client.post("/conversations").json()["data"]["session_id"]
    data = client.post("/ending-credits", json={"session_id": sid}).json()["data"]
    assert data["stats"]["message_count"] == 0
    assert data["lines"][0] == "A new conversation has begun"


def test_credits_without_duration(client):
    sid = _conversation_with_messages(client, 1)
    data = client.get(
        f"/ending-credits/{sid}", params={"include_duration": "false"}
    ).json()["data"]
    assert data["stats"]["duration_sec"] == 0


def test_credits_after_end_are_reused(client):
    sid = _conversation_with_messages(client, 2)
    client.put(f"/conversations/{sid}/end")
    first = client.get(f"/ending-credits/{sid}").json()["data"]
    second = client.post("/ending-credits", json={"session_id": sid}).json()["data"]
    assert first["lines"] == second["lines"]
    assert first["generated_at"] == second["generated_at"]


def test_credits_unknown_session(client):
    r = client.post("/ending-credits", json={"session_id": str(uuid4())})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_credits_missing_session_id(client):
    r = client.post("/ending-credits", json={})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"
