"""Request helpers shared by the API tests."""
import uuid

SESSION_COOKIE = "helping_hand_session"
PASSWORD = "secret123"


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


def signup(client, email=None, username="Tester", password=PASSWORD):
    response = client.post(
        "/api/auth/signup",
        json={"email": email or unique_email(), "username": username, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


def create_donation(client, **overrides):
    body = {
        "category": "food",
        "title": "Vegetable soup",
        "description": "Four portions",
        "latitude": 37.7849,
        "longitude": -122.4094,
        "availabilityStart": "9:00 AM",
        "availabilityEnd": "5:00 PM",
    }
    body.update(overrides)
    response = client.post("/api/donations", json=body)
    assert response.status_code == 200, response.text
    return response.json()
