"""
Pytest configuration and shared fixtures for the cafe backend tests.

The app runs against in-memory SQLite; every test gets freshly created tables
with the 50-table floor plan seeded.
"""

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

test_env_path = Path(__file__).parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

os.environ["FLASK_ENV"] = "testing"
os.environ["TESTING"] = "True"

from cafe.config import is_production_database  # noqa: E402
from cafe.extensions import db as database  # noqa: E402
from cafe.models import Base, User  # noqa: E402
from cafe.seed import seed_menu, seed_tables  # noqa: E402
from cafe.services.user_service import hash_password  # noqa: E402
from main import create_app  # noqa: E402

from fakes import InMemoryStore  # noqa: E402


@pytest.fixture(scope="session")
def app():
    """Create and configure a test app instance."""
    app = create_app()
    app.config.update(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret-key-for-testing-only",
            "STRICT_ORDER_TRANSITIONS": False,
        }
    )

    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if is_production_database(db_uri):
        print(f" DANGER: Database URL appears to be production: {db_uri}")
        sys.exit(1)

    yield app


@pytest.fixture
def db(app):
    """Fresh schema per test, seeded with the dining tables."""
    with app.app_context():
        Base.metadata.drop_all(bind=database.engine)
        Base.metadata.create_all(bind=database.engine)
        seed_tables(database.session)

        yield database

        database.session.remove()
        Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def client(app, db):
    return app.test_client()


@pytest.fixture
def menu(db):
    seed_menu(db.session)
    return db


@pytest.fixture
def make_user(db):
    """Insert a user directly; the password is always 'password123'."""

    def _make(email, role="customer", status=None, name="Test User"):
        user = User(
            email=email,
            name=name,
            password_hash=hash_password("password123"),
            role=role,
            status=status,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def login(client):
    """Log in through the API and return bearer headers."""

    def _login(email, password="password123"):
        response = client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.get_json()
        return {"Authorization": f"Bearer {response.get_json()['token']}"}

    return _login


@pytest.fixture
def customer(make_user):
    return make_user("customer@example.com", name="Casey Customer")


@pytest.fixture
def customer_headers(customer, login):
    return login(customer.email)


@pytest.fixture
def cashier_headers(make_user, login):
    user = make_user("cashier@rcoffee.com", role="cashier", status="approved")
    return login(user.email)


@pytest.fixture
def admin_headers(make_user, login):
    user = make_user("admin@rcoffee.com", role="admin")
    return login(user.email)


@pytest.fixture
def super_admin_headers(make_user, login):
    user = make_user("super_admin@rcoffee.com", role="super_admin")
    return login(user.email)


@pytest.fixture
def reservation_data():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "5551234567",
        "date": "2025-06-01",
        "time": "7:00 PM",
        "guests": 4,
    }


@pytest.fixture
def store():
    """Empty in-memory store for service-level tests."""
    return InMemoryStore()
