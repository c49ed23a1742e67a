"""Unit tests for package summary"""

import pytest
from datetime import date
from coaching_planner.domain.models import Visit
from coaching_planner.domain.summary import summarize_package, value_distribution


def test_summarize_package_totals():
    visits = [
        Visit("draft", None, 50.0, 0.0),
        Visit("a", date(2024, 1, 10), 100.0, 400.0),
        Visit("b", date(2024, 2, 10), 0.0, 300.0),
        Visit("c", date(2024, 3, 10), 0.0, 200.0),
    ]

    summary = summarize_package(visits)

    assert summary.total_value == 1050.0
    assert summary.total_travel == 150.0
    assert summary.total_consulting == 900.0
    assert summary.onsite_count == 2
    assert summary.virtual_count == 2
    assert summary.max_duration == 2  # 60 days


def test_value_distribution_undated_visits_sort_last():
    visits = [
        Visit("draft", None, 50.0, 0.0),
        Visit("a", date(2024, 1, 10), 100.0, 400.0),
        Visit("b", date(2024, 2, 10), 0.0, 300.0),
        Visit("c", date(2024, 3, 10), 0.0, 200.0),
    ]

    dist = value_distribution(visits)

    # Thirds of 4 visits: [a], [b], [c, draft]
    assert dist.front == pytest.approx(500 / 1050)
    assert dist.mid == pytest.approx(300 / 1050)
    assert dist.back == pytest.approx(250 / 1050)
    assert dist.label == "balanced"


def test_value_distribution_front_heavy(front_loaded_visits):
    dist = value_distribution(front_loaded_visits)

    assert dist.front == pytest.approx(0.9)
    assert dist.label == "front heavy"


def test_value_distribution_back_heavy():
    visits = [
        Visit("a", date(2024, 1, 1), 0.0, 100.0),
        Visit("b", date(2024, 2, 1), 0.0, 100.0),
        Visit("c", date(2024, 3, 1), 0.0, 800.0),
    ]

    assert value_distribution(visits).label == "back heavy"


def test_value_distribution_empty():
    dist = value_distribution([])

    assert (dist.front, dist.mid, dist.back, dist.label) == (0.0, 0.0, 0.0, "balanced")


def test_summarize_package_empty():
    summary = summarize_package([])

    assert summary.total_value == 0
    assert summary.onsite_count == 0
    assert summary.max_duration == 1
    assert summary.distribution.label == "balanced"
