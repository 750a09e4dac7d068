# tests/conftest.py
"""
Shared fixtures. Every test gets its own in-memory SQLite database with
the full schema; the API client is wired to the same session.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_KEY"] = ""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from garage.database import create_tables, get_db
from garage.models import Customer, Garage, GarageAuth, Motorcycle, User


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from garage.main import app

    def _override():
        yield db

    app.dependency_overrides[get_db] = _override
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db):
    """Garage owner Raj Kumar of garage G123, with users + garage_auth rows."""
    user = User(
        user_uid="uid-owner",
        garage_uid="guid-123",
        garage_id="G123",
        first_name="Raj",
        last_name="Kumar",
        garage_name="Speed Motors",
        user_role="Owner",
        login_id="raj.kumar@g123",
        email="raj@example.com",
        phone_number="9876543210",
    )
    db.add(user)
    db.add(GarageAuth(
        user_uid="uid-owner",
        garage_id="G123",
        garage_name="Speed Motors",
        first_name="Raj",
        last_name="Kumar",
        login_id="raj.kumar@g123",
        user_role="Owner",
        password_hash="hashed",
    ))
    db.add(Garage(garage_id="G123", owner_id="uid-owner", garage_name="Speed Motors"))
    db.commit()
    return user


def add_motorcycle(db, make, model, category="Scooter", year_start=2015, year_end=None,
                   cc=110, country="India", status="In Production", created_at=None):
    bike = Motorcycle(
        make=make, model=model, category=category, year_start=year_start,
        year_end=year_end, engine_displacement_cc=cc, country_of_origin=country,
        production_status=status, created_at=created_at or datetime.utcnow(),
    )
    db.add(bike)
    db.commit()
    return bike


def add_customer(db, garage_id="G123", first_name="Anita", last_name="Rao",
                 phone="9123456780", email="anita@example.com"):
    customer = Customer(garage_id=garage_id, first_name=first_name, last_name=last_name,
                        phone_number=phone, email=email)
    db.add(customer)
    db.commit()
    return customer
