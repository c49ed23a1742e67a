"""Plan assembly - candidate options, interactive design and tuning"""

import math
from typing import List, Optional, Sequence
from coaching_planner.domain.models import PaymentPlan, Visit
from coaching_planner.domain.cashflow import get_latest_visit_date, total_value, validate_payment_plan
from coaching_planner.domain.solver import find_minimum_deposit, find_minimum_monthly_payment, find_monthly_payment
from coaching_planner.utils.date_utils import add_months, months_spanned


def max_duration(visits: Sequence[Visit]) -> int:
    """Longest plan the schedule supports: months spanned by the dated visits"""
    dates = sorted(v.date for v in visits if v.date is not None)
    if not dates:
        return 1
    return months_spanned(dates[0], dates[-1])


def _with_validity(plan: PaymentPlan) -> PaymentPlan:
    plan.is_valid = validate_payment_plan(plan)
    return plan


def generate_simple_options(visits: Sequence[Visit]) -> List[PaymentPlan]:
    """
    Build minimum-deposit plans for a short, medium and full-length duration.

    Durations are the distinct values of 1, half the schedule span (rounded
    up) and the full span. Each option's validity is re-checked since the
    deposit search may fall back to its upper bound.
    """
    if not visits:
        return []

    snapshot = tuple(visits)
    value = total_value(snapshot)
    longest = max_duration(snapshot)
    first_date = min((v.date for v in snapshot if v.date is not None), default=None)

    options = []
    for duration in sorted({1, math.ceil(longest / 2), longest}):
        solution = find_minimum_deposit(snapshot, value, duration)
        plan = PaymentPlan(
            id=f"simple-{duration}m",
            deposit=solution.deposit,
            monthly_payment=solution.monthly_payment,
            duration=duration,
            total_value=value,
            visits=snapshot,
            end_date=add_months(first_date, duration - 1) if first_date else None,
        )
        options.append(_with_validity(plan))

    return options


def design_plan(visits: Sequence[Visit], duration: int, deposit: float) -> PaymentPlan:
    """
    Plan for a user-picked duration and deposit.

    The requested deposit is raised to the minimum the duration needs, and
    the remainder is amortized evenly.
    """
    snapshot = tuple(visits)
    value = total_value(snapshot)

    minimum = find_minimum_deposit(snapshot, value, duration).deposit
    actual_deposit = max(deposit, minimum)

    plan = PaymentPlan(
        id=f"interactive-{duration}m",
        deposit=actual_deposit,
        monthly_payment=find_monthly_payment(value, duration, actual_deposit),
        duration=duration,
        total_value=value,
        visits=snapshot,
        end_date=get_latest_visit_date(snapshot),
    )
    return _with_validity(plan)


def tune_plan(visits: Sequence[Visit], duration: int, deposit: float) -> Optional[PaymentPlan]:
    """
    Plan for a fixed deposit, deriving the smallest monthly payment that keeps
    the client within the cap. Returns None when there are no visits.
    """
    snapshot = tuple(visits)
    latest = get_latest_visit_date(snapshot)
    if not snapshot or latest is None:
        return None

    value = total_value(snapshot)
    effective_deposit = min(max(0.0, deposit), value)

    plan = PaymentPlan(
        id="tuned",
        deposit=effective_deposit,
        monthly_payment=find_minimum_monthly_payment(snapshot, value, duration, effective_deposit),
        duration=duration,
        total_value=value,
        visits=snapshot,
        end_date=latest,
    )
    return _with_validity(plan)
