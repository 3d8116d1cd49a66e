def send(client, sender_id, receiver_id, content):
    return client.post(
        "/api/messages",
        json={"senderId": sender_id, "receiverId": receiver_id, "content": content},
    )


def test_send_and_read_thread(client, make_user):
    a, b = make_user(), make_user()

    first = send(client, a.id, b.id, "ping")
    second = send(client, b.id, a.id, "pong")

    assert first.status_code == 201
    assert first.json()["isRead"] is False

    thread = client.get(f"/api/messages/conversation/{b.id}/{a.id}").json()
    assert [m["content"] for m in thread] == ["ping", "pong"]
    assert thread[1]["id"] == second.json()["id"]


def test_send_validation(client, make_user):
    a, b = make_user(), make_user()

    assert send(client, a.id, b.id, "").status_code == 422
    assert send(client, a.id, b.id, "   ").status_code == 400
    assert send(client, a.id, 404, "hello?").status_code == 404


def test_conversations_then_mark_read(client, make_user):
    u1, u2 = make_user(), make_user()
    for text in ("one", "two", "three"):
        send(client, u1.id, u2.id, text)

    convos = client.get(f"/api/messages/conversations/{u2.id}").json()
    assert len(convos) == 1
    assert convos[0]["user"]["id"] == u1.id
    assert convos[0]["lastMessage"]["content"] == "three"
    assert convos[0]["unreadCount"] == 3
    assert "password" not in convos[0]["user"]

    body = {"senderId": u1.id, "receiverId": u2.id}
    first = client.post("/api/messages/mark-read", json=body).json()
    second = client.post("/api/messages/mark-read", json=body).json()
    assert first == {"message": "Messages marked as read", "updated": 3}
    assert second["updated"] == 0

    convos = client.get(f"/api/messages/conversations/{u2.id}").json()
    assert convos[0]["unreadCount"] == 0


def test_conversations_empty(client, make_user):
    a = make_user()
    assert client.get(f"/api/messages/conversations/{a.id}").json() == []
