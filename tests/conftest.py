"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from coaching_planner.api.main import create_app
from coaching_planner.domain.models import Visit


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def monthly_visits() -> list[Visit]:
    """Four $250 visits on the 15th of Jan-Apr 2024"""
    return [
        Visit(id=f"v{month}", date=date(2024, month, 15), travel_fee=50.0, consulting_fee=200.0)
        for month in range(1, 5)
    ]


@pytest.fixture
def front_loaded_visits() -> list[Visit]:
    """$1000 package with $900 billed in the first month"""
    return [
        Visit(id="kickoff", date=date(2024, 1, 10), travel_fee=150.0, consulting_fee=750.0),
        Visit(id="checkin", date=date(2024, 2, 12), travel_fee=0.0, consulting_fee=50.0),
        Visit(id="review", date=date(2024, 3, 8), travel_fee=0.0, consulting_fee=50.0),
    ]
