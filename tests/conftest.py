"""
Pytest configuration and shared fixtures.

The app runs against a single in-memory SQLite database (StaticPool keeps
one connection alive so every session sees the same tables). Tables are
recreated for each test.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["RESTAURANT_DELETE_POLICY"] = "orphan"

from typing import Callable, Dict  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.application.services import auth_service  # noqa: E402
from app.application.services.auth_service import create_user_token  # noqa: E402
from app.application.services.menu_service import MenuService  # noqa: E402
from app.application.services.restaurant_service import RestaurantService  # noqa: E402
from app.application.services.user_service import UserService  # noqa: E402
from app.config import get_settings  # noqa: E402
from app.domain.models.menu import Menu  # noqa: E402
from app.domain.models.restaurant import Restaurant  # noqa: E402
from app.domain.models.user import User  # noqa: E402
from app.infrastructure.database import Base, get_db  # noqa: E402
from app.infrastructure.repositories.menu_repository import SQLAlchemyMenuRepository  # noqa: E402
from app.infrastructure.repositories.restaurant_repository import SQLAlchemyRestaurantRepository  # noqa: E402
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository  # noqa: E402
from app.main import app  # noqa: E402

get_settings.cache_clear()

# Cheap hashes; the cost factor is irrelevant to behaviour
auth_service.pwd_context.update(bcrypt__rounds=4)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "unit: Unit tests (no HTTP layer)")
    config.addinivalue_line("markers", "api: Tests driving the HTTP surface")


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user_service(db_session) -> UserService:
    return UserService(SQLAlchemyUserRepository(db_session, User))


@pytest.fixture
def restaurant_service(db_session) -> RestaurantService:
    return RestaurantService(
        SQLAlchemyRestaurantRepository(db_session, Restaurant),
        menus=SQLAlchemyMenuRepository(db_session, Menu),
    )


@pytest.fixture
def menu_service(db_session, restaurant_service) -> MenuService:
    return MenuService(SQLAlchemyMenuRepository(db_session, Menu), restaurant_service)


@pytest.fixture
def make_user(user_service) -> Callable[..., User]:
    counter = {"n": 0}

    def factory(roles=None, password="password123", **overrides) -> User:
        counter["n"] += 1
        data = {
            "email": f"user{counter['n']}@example.com",
            "username": f"user_{counter['n']}",
            "password": password,
            "roles": roles or ["user"],
        }
        data.update(overrides)
        return user_service.add(data)

    return factory


@pytest.fixture
def admin(make_user) -> User:
    return make_user(roles=["user", "admin"], email="admin@example.com", username="admin")


@pytest.fixture
def regular_user(make_user) -> User:
    return make_user(email="jane@example.com", username="jane")


def bearer(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def headers_for() -> Callable[[User], Dict[str, str]]:
    return bearer


@pytest.fixture
def admin_headers(admin) -> Dict[str, str]:
    return bearer(admin)


@pytest.fixture
def user_headers(regular_user) -> Dict[str, str]:
    return bearer(regular_user)


@pytest.fixture
def make_restaurant(restaurant_service) -> Callable[..., Restaurant]:
    counter = {"n": 0}

    def factory(**overrides) -> Restaurant:
        counter["n"] += 1
        data = {
            "name": f"Restaurant {counter['n']}",
            "address": f"{counter['n']} Main Street",
            "phone": "+15551234567",
            "opening_hours": "Mon-Fri 9am-10pm",
        }
        data.update(overrides)
        return restaurant_service.add(data)

    return factory


@pytest.fixture
def make_menu(menu_service) -> Callable[..., Menu]:
    counter = {"n": 0}

    def factory(restaurant: Restaurant, **overrides) -> Menu:
        counter["n"] += 1
        data = {
            "name": f"Dish {counter['n']}",
            "price": 10.0,
            "restaurantId": restaurant.id,
        }
        data.update(overrides)
        return menu_service.add(data)

    return factory
