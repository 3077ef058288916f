"""Pytest fixtures: a fresh seeded store and app per test."""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-key"
AUTH = {"x-api-key": API_KEY}


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, environment="production")


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def new_product():
    return {"name": "X", "description": "Y", "price": 10, "category": "z", "inStock": True}


@pytest.fixture
def auth():
    return dict(AUTH)
