"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def monthly_payload() -> list[dict]:
    """Four $250 visits, one per month"""
    return [
        {"id": f"v{month}", "date": f"2024-0{month}-15", "travel_fee": 50, "consulting_fee": 200}
        for month in range(1, 5)
    ]


@pytest.fixture
def front_loaded_payload() -> list[dict]:
    return [
        {"id": "kickoff", "date": "2024-01-10", "travel_fee": 150, "consulting_fee": 750},
        {"id": "checkin", "date": "2024-02-12", "consulting_fee": 50},
        {"id": "review", "date": "2024-03-08", "consulting_fee": 50},
    ]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "planner_plans_total" in response.text


def test_request_id_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_options_endpoint(client: TestClient, monthly_payload: list[dict]):
    """Test POST /v1/options builds 1, 2 and 3 month plans"""
    response = client.post("/v1/options", json={"visits": monthly_payload})

    assert response.status_code == 200
    data = response.json()
    assert data["total_value"] == 1000.0
    assert data["max_duration"] == 3
    assert [o["plan_id"] for o in data["options"]] == ["simple-1m", "simple-2m", "simple-3m"]
    for option in data["options"]:
        assert option["is_valid"] is True
        assert option["max_outstanding"] == 200.0
        assert [e["date"] for e in option["cash_flow"]] == [
            "2024-01-15", "2024-02-15", "2024-03-15", "2024-04-15",
        ]


def test_options_endpoint_empty_visits(client: TestClient):
    response = client.post("/v1/options", json={"visits": []})

    assert response.status_code == 200
    assert response.json()["options"] == []


def test_options_endpoint_rejects_draft_visits(client: TestClient, monthly_payload: list[dict]):
    """Test POST /v1/options with a visit missing its date"""
    payload = monthly_payload + [{"id": "draft", "consulting_fee": 100}]

    response = client.post("/v1/options", json={"visits": payload})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["visits"] == {"draft": {"date": "Please select a date"}}


def test_negative_fee_rejected(client: TestClient):
    response = client.post(
        "/v1/options",
        json={"visits": [{"id": "a", "date": "2024-01-15", "consulting_fee": -5}]},
    )
    assert response.status_code == 422


def test_design_plan_endpoint(client: TestClient, front_loaded_payload: list[dict]):
    """Test POST /v1/plan/design raises a low deposit to the minimum"""
    response = client.post(
        "/v1/plan/design",
        json={"visits": front_loaded_payload, "duration": 3, "deposit": 100},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["plan_id"] == "interactive-3m"
    assert data["deposit"] == pytest.approx(550.0, abs=1e-6)
    assert data["monthly_payment"] == pytest.approx(150.0, abs=1e-6)
    assert data["is_valid"] is True
    assert len(data["cash_flow"]) == 3


def test_design_plan_requires_positive_duration(client: TestClient, front_loaded_payload: list[dict]):
    response = client.post(
        "/v1/plan/design",
        json={"visits": front_loaded_payload, "duration": 0, "deposit": 100},
    )
    assert response.status_code == 422


def test_tune_plan_endpoint(client: TestClient, front_loaded_payload: list[dict]):
    """Test POST /v1/plan/tune derives the monthly payment for a fixed deposit"""
    response = client.post(
        "/v1/plan/tune",
        json={"visits": front_loaded_payload, "duration": 3, "deposit": 550},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["plan_id"] == "tuned"
    assert data["deposit"] == 550.0
    assert data["monthly_payment"] == pytest.approx(150.0, abs=1e-6)
    assert data["end_date"] == "2024-03-08"


def test_tune_plan_endpoint_without_visits(client: TestClient):
    response = client.post("/v1/plan/tune", json={"visits": [], "duration": 3, "deposit": 0})
    assert response.status_code == 422


def test_minimum_deposit_endpoint(client: TestClient, front_loaded_payload: list[dict]):
    response = client.post(
        "/v1/plan/minimum-deposit",
        json={"visits": front_loaded_payload, "duration": 3},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["deposit"] == pytest.approx(550.0, abs=1e-6)
    assert data["monthly_payment"] == pytest.approx(150.0, abs=1e-6)
    assert data["total_value"] == 1000.0
    assert data["is_valid"] is True


def test_cashflow_endpoint(client: TestClient, monthly_payload: list[dict]):
    """Test POST /v1/cashflow for a plan that pays each visit as it happens"""
    response = client.post(
        "/v1/cashflow",
        json={"visits": monthly_payload, "deposit": 0, "monthly_payment": 250, "duration": 4},
    )

    assert response.status_code == 200
    data = response.json()
    assert [e["balance"] for e in data["cash_flow"]] == [0.0, 0.0, 0.0, 0.0]
    assert data["minimum_balance"] == 0.0
    assert data["max_outstanding"] == 200.0
    assert data["is_valid"] is True


def test_cashflow_endpoint_over_cap(client: TestClient, front_loaded_payload: list[dict]):
    response = client.post(
        "/v1/cashflow",
        json={"visits": front_loaded_payload, "deposit": 0, "monthly_payment": 100, "duration": 3},
    )

    data = response.json()
    assert data["minimum_balance"] == -800.0
    assert data["is_valid"] is False


def test_summary_endpoint_reports_issues(client: TestClient, monthly_payload: list[dict]):
    """Test POST /v1/summary accepts drafts and lists what is missing"""
    payload = monthly_payload + [{"id": "draft", "travel_fee": 40}]

    response = client.post("/v1/summary", json={"visits": payload})

    assert response.status_code == 200
    data = response.json()
    assert data["total_value"] == 1040.0
    assert data["onsite_count"] == 5
    assert data["virtual_count"] == 0
    assert data["issues"] == {"draft": {"date": "Please select a date"}}
