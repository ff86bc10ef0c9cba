import pytest


@pytest.mark.notifications
class TestNotifications:
    def _send(self, client, headers, user_id, **overrides):
        body = {"user_id": user_id, "title": "Hello", "message": "Your table is ready"}
        body.update(overrides)
        return client.post("/api/notifications", json=body, headers=headers)

    def test_staff_can_send(self, client, customer, cashier_headers, customer_headers):
        """Test staff can send a notification."""
        response = self._send(client, cashier_headers, customer.id)

        assert response.status_code == 201
        notification = response.get_json()["notification"]
        assert notification["status"] == "unread"
        assert notification["type"] == "system"

        listing = client.get("/api/notifications", headers=customer_headers).get_json()
        assert listing["unread_count"] == 1

    def test_customer_cannot_send(self, client, customer, customer_headers):
        """Test customers cannot send notifications."""
        response = self._send(client, customer_headers, customer.id)

        assert response.status_code == 403

    def test_missing_title(self, client, customer, cashier_headers):
        """Test sending without a title."""
        response = self._send(client, cashier_headers, customer.id, title="")

        assert response.status_code == 400

    def test_unknown_type(self, client, customer, cashier_headers):
        """Test an unknown notification type."""
        response = self._send(client, cashier_headers, customer.id, type="sms")

        assert response.status_code == 400

    def test_unknown_user(self, client, db, cashier_headers):
        """Test notifying a user that does not exist."""
        response = self._send(client, cashier_headers, 9999)

        assert response.status_code == 404

    def test_newest_first(self, client, customer, cashier_headers, customer_headers):
        """Test notifications come back newest first."""
        self._send(client, cashier_headers, customer.id, title="First")
        self._send(client, cashier_headers, customer.id, title="Second")

        titles = [
            n["title"]
            for n in client.get("/api/notifications", headers=customer_headers).get_json()[
                "notifications"
            ]
        ]
        assert titles == ["Second", "First"]

    def test_mark_as_read_twice(self, client, customer, cashier_headers, customer_headers):
        """Test marking read twice is harmless."""
        notification_id = self._send(client, cashier_headers, customer.id).get_json()[
            "notification"
        ]["id"]

        first = client.put(f"/api/notifications/{notification_id}/read", headers=customer_headers)
        second = client.put(f"/api/notifications/{notification_id}/read", headers=customer_headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.get_json()["notification"] == second.get_json()["notification"]
        assert second.get_json()["notification"]["status"] == "read"

        listing = client.get("/api/notifications", headers=customer_headers).get_json()
        assert listing["unread_count"] == 0
        assert len(listing["notifications"]) == 1

    def test_mark_someone_elses(self, client, customer, cashier_headers, make_user, login):
        """Test a user cannot read another user's notification."""
        notification_id = self._send(client, cashier_headers, customer.id).get_json()[
            "notification"
        ]["id"]
        other = login(make_user("other@example.com").email)

        response = client.put(f"/api/notifications/{notification_id}/read", headers=other)

        assert response.status_code == 403

    def test_mark_missing(self, client, customer_headers):
        """Test marking a missing notification."""
        response = client.put("/api/notifications/12345/read", headers=customer_headers)

        assert response.status_code == 404
