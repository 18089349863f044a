from app import crud


def send(db, recipient, message="hello", type="system", sender=None):
    return crud.notification.send(
        db, recipient_id=recipient.id, message=message, type=type, sender_id=sender.id if sender else None
    )


def test_send(client, db, users, headers):
    response = client.post(
        "/api/notifications/send",
        json={"recipientId": users["clerk"].id, "message": "Count aisle 4", "metadata": {"aisle": 4}},
        headers=headers["manager"],
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == "system"
    assert data["metadata"] == {"aisle": 4}
    assert data["sender"]["email"] == "manager@inventra.test"
    assert data["isRead"] is False


def test_send_errors(client, users, headers):
    response = client.post(
        "/api/notifications/send", json={"recipientId": 999, "message": "hi"}, headers=headers["manager"]
    )
    assert response.status_code == 404

    response = client.post("/api/notifications/send", json={"message": "hi"}, headers=headers["manager"])
    assert response.status_code == 400

    response = client.post(
        "/api/notifications/send",
        json={"recipientId": users["clerk"].id, "message": "hi", "type": "spam"},
        headers=headers["manager"],
    )
    assert response.status_code == 400


def test_feed_is_scoped_per_recipient(client, db, users, headers):
    send(db, users["clerk"], "for clerk")
    send(db, users["manager"], "for manager 1")
    send(db, users["manager"], "for manager 2", type="reorder")

    body = client.get("/api/notifications/", headers=headers["clerk"]).json()
    assert [n["message"] for n in body["data"]] == ["for clerk"]
    assert body["unreadCount"] == 1

    body = client.get("/api/notifications/?type=reorder", headers=headers["manager"]).json()
    assert [n["message"] for n in body["data"]] == ["for manager 2"]

    body = client.get("/api/notifications/?limit=1", headers=headers["manager"]).json()
    assert [n["message"] for n in body["data"]] == ["for manager 2"]
    assert body["unreadCount"] == 2


def test_admin_sees_global_feed(client, db, users, headers):
    send(db, users["clerk"])
    send(db, users["manager"])
    send(db, users["auditor"])

    body = client.get("/api/notifications/", headers=headers["admin"]).json()
    assert len(body["data"]) == 3
    assert client.get("/api/notifications/unread-count", headers=headers["admin"]).json()["data"] == {"count": 3}


def test_mark_as_read(client, db, users, headers):
    notification = send(db, users["manager"])

    assert client.put(f"/api/notifications/{notification.id}/read", headers=headers["clerk"]).status_code == 403
    assert client.put("/api/notifications/999/read", headers=headers["manager"]).status_code == 404

    response = client.put(f"/api/notifications/{notification.id}/read", headers=headers["manager"])
    assert response.status_code == 200
    assert response.json()["data"]["isRead"] is True
    assert response.json()["data"]["readAt"] is not None

    body = client.get("/api/notifications/?isRead=false", headers=headers["manager"]).json()
    assert body["data"] == []


def test_admin_can_mark_anyones_notification(client, db, users, headers):
    notification = send(db, users["clerk"])
    assert client.put(f"/api/notifications/{notification.id}/read", headers=headers["admin"]).status_code == 200


def test_read_all(client, db, users, headers):
    send(db, users["clerk"])
    send(db, users["clerk"])
    other = send(db, users["manager"])

    response = client.put("/api/notifications/read-all", headers=headers["clerk"])
    assert response.json()["data"] == {"modifiedCount": 2}

    response = client.put("/api/notifications/read-all", headers=headers["clerk"])
    assert response.json()["data"] == {"modifiedCount": 0}

    db.refresh(other)
    assert other.is_read is False
