import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ALLOWED_HOSTS"] = '["*"]'

import pytest
from fastapi.testclient import TestClient

from flatmate.core.database import Base, SessionLocal, engine
from flatmate.core.security import create_access_token
from flatmate.main import app
from flatmate.schemas.listing import ContactVisibility, ListingCreate, Location


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


def new_listing(**overrides) -> ListingCreate:
    data = {
        "title": "Sunny room in Indiranagar",
        "description": "Two flatmates, quiet street.",
        "location": Location(address="12 CMH Road", city="Bengaluru", state="Karnataka", postal_code="560038"),
        "rent_amount": 12000,
        "number_of_flatmates": 2,
        "gender_preference": "any",
        "amenities": {"wifi": True},
        "is_available": True,
        "user_name": "Asha",
        "user_phone": "+91 98765-43210",
        "user_email": "asha@example.com",
        "user_contact_visibility": ContactVisibility(show_phone=True, show_email=True, show_whatsapp=True),
    }
    data.update(overrides)
    return ListingCreate(**data)
