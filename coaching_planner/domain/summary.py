"""Package summary - totals, visit mix and how value is spread over the schedule"""

from datetime import date
from typing import Sequence
from coaching_planner.domain.models import Distribution, PackageSummary, Visit
from coaching_planner.domain.cashflow import total_value
from coaching_planner.domain.options import max_duration

# A third of the schedule holding more than this share of value dominates it
HEAVY_SHARE = 0.5


def value_distribution(visits: Sequence[Visit]) -> Distribution:
    """
    Split visits into front/mid/back thirds by date and report each share.

    Undated visits sort last, keeping their input order. The label names the
    dominant third when it holds over half the value, otherwise "balanced".
    """
    if not visits:
        return Distribution(front=0.0, mid=0.0, back=0.0, label="balanced")

    ordered = sorted(
        enumerate(visits),
        key=lambda pair: (pair[1].date is None, pair[1].date or date.min, pair[0]),
    )
    amounts = [visit.amount for _, visit in ordered]

    n = len(amounts)
    third = max(1, n // 3)
    front_end = third
    mid_end = min(n, third * 2)

    front_sum = sum(amounts[:front_end])
    mid_sum = sum(amounts[front_end:mid_end])
    back_sum = sum(amounts[mid_end:])
    total = max(1.0, front_sum + mid_sum + back_sum)

    front, mid, back = front_sum / total, mid_sum / total, back_sum / total
    largest = max(front, mid, back)

    label = "balanced"
    if largest > HEAVY_SHARE:
        if front == largest:
            label = "front heavy"
        elif mid == largest:
            label = "mid heavy"
        else:
            label = "back heavy"

    return Distribution(front=front, mid=mid, back=back, label=label)


def summarize_package(visits: Sequence[Visit]) -> PackageSummary:
    onsite = sum(1 for v in visits if v.travel_fee > 0)

    return PackageSummary(
        total_value=total_value(visits),
        total_travel=sum(v.travel_fee for v in visits),
        total_consulting=sum(v.consulting_fee for v in visits),
        onsite_count=onsite,
        virtual_count=len(visits) - onsite,
        max_duration=max_duration(visits),
        distribution=value_distribution(visits),
    )
