from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import settings
from core.security import TokenData, create_access_token, get_password_hash
from database import DatabaseConnection
from database.models import User


PASSWORD = "Secret@123"


@pytest.fixture
def database():
    db = DatabaseConnection("sqlite+pysqlite:///:memory:")
    db.initialize(create_tables=True)
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.get_session() as s:
        yield s


@pytest.fixture
def client(database):
    return TestClient(create_app(database))


def _add_user(session, id, name, email, role, is_active=True):
    user = User(
        id=id,
        name=name,
        email=email,
        phone="08011111111",
        password_hash=get_password_hash(PASSWORD),
        role=role,
        is_active=is_active,
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def admin(session):
    return _add_user(session, settings.primary_admin_id, "Admin User", "admin@estateiq.ng", "admin")


@pytest.fixture
def manager(session):
    return _add_user(session, "manager-001", "Mary Manager", "manager@estateiq.ng", "manager")


@pytest.fixture
def staff(session):
    return _add_user(session, "staff-001", "Sam Staff", "staff@estateiq.ng", "staff")


def token_for(user, expires_delta: timedelta = None) -> str:
    data = TokenData(id=user.id, name=user.name, email=user.email, role=user.role).to_dict()
    return create_access_token(data, expires_delta)


def headers_for(user) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def admin_headers(admin):
    return headers_for(admin)


@pytest.fixture
def manager_headers(manager):
    return headers_for(manager)


@pytest.fixture
def staff_headers(staff):
    return headers_for(staff)


@pytest.fixture
def make_tenant(client, admin_headers):
    """Create a tenant through the API and return its JSON."""

    def _make(**fields):
        payload = {"tenant_name": "Tunde Bakare", "rent_per_annum": 200000}
        payload.update(fields)
        response = client.post("/api/tenants", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def add_user(session):
    def _add(id, name, email, role="staff", is_active=True):
        return _add_user(session, id, name, email, role, is_active)

    return _add


@pytest.fixture
def auth_headers():
    return headers_for
