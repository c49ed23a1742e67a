"""Cash-flow simulation and the 20% outstanding-balance check"""

from datetime import date
from typing import Iterable, List, Optional, Sequence
from coaching_planner.domain.models import CashFlowEntry, PaymentPlan, Visit, OUTSTANDING_CAP_RATIO
from coaching_planner.utils.date_utils import MonthRange, same_month


def total_value(visits: Iterable[Visit]) -> float:
    """Sum of travel and consulting fees across all visits"""
    return sum(visit.amount for visit in visits)


def outstanding_cap(value: float) -> float:
    """Largest amount the client may owe for a package worth `value`"""
    return value * OUTSTANDING_CAP_RATIO


def get_latest_visit_date(visits: Sequence[Visit]) -> Optional[date]:
    dates = [v.date for v in visits if v.date is not None]
    return max(dates) if dates else None


def month_buckets(visits: Sequence[Visit]) -> MonthRange | None:
    """
    Calendar months a plan must be simulated over.

    Spans the month of the earliest visit through the month of the latest
    one, anchored on the 15th. Returns None when there is nothing to bucket.
    """
    dated = sorted((v for v in visits if v.date is not None), key=lambda v: v.date)
    if not dated:
        return None
    return MonthRange(dated[0].date, dated[-1].date)


def generate_cash_flow(plan: PaymentPlan) -> List[CashFlowEntry]:
    """
    Project the running balance month by month for a plan.

    Per bucket:
    - deposit credited in the first bucket only
    - monthly installment credited while the bucket offset < duration
    - fees of visits dated in that calendar month debited
    Balance is cumulative across buckets. No rounding is applied.
    """
    buckets = month_buckets(plan.visits)
    if buckets is None:
        return []

    flow = []
    running_balance = 0.0

    for offset, anchor in enumerate(buckets):
        payment = 0.0
        if offset == 0 and plan.deposit > 0:
            payment += plan.deposit
        if offset < plan.duration:
            payment += plan.monthly_payment

        visit_cost = sum(
            v.amount for v in plan.visits
            if v.date is not None and same_month(v.date, anchor)
        )

        running_balance += payment - visit_cost
        flow.append(
            CashFlowEntry(
                date=anchor,
                balance=running_balance,
                payment=payment,
                visit_cost=visit_cost,
            )
        )

    return flow


def minimum_balance(cash_flow: Iterable[CashFlowEntry]) -> float:
    """Lowest running balance, seeded at 0 so an empty flow is trivially safe"""
    return min(0.0, min((entry.balance for entry in cash_flow), default=0.0))


def max_owed(cash_flow: Iterable[CashFlowEntry]) -> float:
    """Largest amount the client owes at any bucket (0 if never in debt)"""
    return max(0.0, -minimum_balance(cash_flow))


def is_within_cap(cash_flow: Iterable[CashFlowEntry], value: float) -> bool:
    return minimum_balance(cash_flow) >= -outstanding_cap(value)


def validate_payment_plan(plan: PaymentPlan) -> bool:
    """
    Check the plan never lets the client owe more than 20% of package value.

    The cap is recomputed from the visit snapshot rather than read from
    `plan.max_outstanding`.
    """
    return is_within_cap(generate_cash_flow(plan), total_value(plan.visits))
