import pytest
import os
import sys
import datetime
from typing import Callable, Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import database  # noqa: E402  включает PRAGMA foreign_keys для всех SQLite движков
from config import Settings  # noqa: E402

TODAY = datetime.date(2030, 6, 15)


@pytest.fixture(scope="session")
def test_database_url():
    """URL тестовой базы данных"""
    return "sqlite:///:memory:"


@pytest.fixture(scope="session")
def engine(test_database_url):
    """Движок тестовой БД"""
    engine = create_engine(
        test_database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    return engine


@pytest.fixture(scope="session")
def create_tables(engine):
    """Создание таблиц перед всеми тестами"""
    import models  # noqa: F401
    database.Base.metadata.create_all(bind=engine)
    yield
    database.Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine, create_tables) -> Generator[Session, None, None]:
    """Фикстура для сессии БД с rollback после каждого теста"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def settings() -> Settings:
    """Настройки для тестов: быстрый bcrypt и фиксированный секрет"""
    return Settings(
        database_url="sqlite:///:memory:",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
    )


@pytest.fixture
def clock() -> Callable[[], datetime.date]:
    """Управляемая "сегодняшняя" дата: clock.today можно менять в тесте"""
    class Clock:
        today = TODAY

        def __call__(self):
            return self.today

    return Clock()


@pytest.fixture
def make_user(db_session):
    """Создать пользователя напрямую в хранилище"""
    from auth import hash_password
    from crud.user import create_user

    def _make_user(username: str, email: str = None, password: str = "Secret123"):
        return create_user(
            db_session,
            username=username,
            email=email or f"{username}@example.com",
            password_hash=hash_password(password, rounds=4)
        )

    return _make_user


@pytest.fixture
def sample_user_data():
    """Тестовые данные пользователя"""
    return {
        "username": "testuser",
        "email": "testuser@example.com",
        "password": "Secret123"
    }


@pytest.fixture
def client(db_session, settings):
    """TestClient с подменой сессии БД и настроек"""
    from fastapi.testclient import TestClient
    from config import get_settings
    from database import get_db
    from main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Зарегистрировать пользователя через API и вернуть заголовки авторизации"""
    def _register(username: str = "testuser", email: str = None, password: str = "Secret123"):
        response = client.post("/auth/register", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password
        })
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register
