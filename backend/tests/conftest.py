import os

# Configure before any app module reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

import app.models  # noqa: F401
from app.database import Base, SessionLocal, engine
from app.models.user import User, UserRole
from app.schemas.user import UserCreate
from app.services.users import create_user
from helpers import PASSWORD
from main import app as fastapi_app


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(fastapi_app)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(
        role: UserRole = UserRole.OPERATOR, full_name: str | None = None, **kwargs
    ) -> User:
        counter["n"] += 1
        dto = UserCreate(
            email=kwargs.pop("email", f"{role.value}{counter['n']}@couriertrack.com"),
            password=kwargs.pop("password", PASSWORD),
            full_name=full_name or f"{role.value.title()} {counter['n']}",
            role=role,
        )
        return create_user(db, dto)

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, full_name="Alice Admin")


@pytest.fixture
def operator(make_user):
    return make_user(UserRole.OPERATOR, full_name="Oscar Operator")


@pytest.fixture
def viewer(make_user):
    return make_user(UserRole.VIEWER, full_name="Vera Viewer")
