"""Bisection searches for the cheapest plan that respects the outstanding cap"""

from typing import Callable, Sequence
from coaching_planner.domain.models import DepositSolution, PaymentPlan, Visit
from coaching_planner.domain.cashflow import generate_cash_flow, get_latest_visit_date, is_within_cap

# Each refinement halves the bracket: total_value / 2**40 is well below a cent
SEARCH_ITERATIONS = 40


def find_monthly_payment(total_value: float, duration: int, deposit: float) -> float:
    """Even installment that amortizes whatever the deposit leaves unpaid"""
    if duration <= 0:
        return 0.0
    return max(0.0, total_value - deposit) / duration


def _bisect_minimum(high: float, is_feasible: Callable[[float], bool]) -> tuple[float, bool]:
    """
    Smallest feasible value in [0, high], assuming feasibility is monotone.

    Returns (best, found). When no midpoint was ever feasible, best is `high`
    and found is False.
    """
    low = 0.0
    best = high
    found = False

    for _ in range(SEARCH_ITERATIONS):
        mid = (low + high) / 2
        if is_feasible(mid):
            best = mid
            found = True
            high = mid
        else:
            low = mid

    return best, found


def _trial_plan(
    plan_id: str,
    visits: Sequence[Visit],
    total_value: float,
    duration: int,
    deposit: float,
    monthly_payment: float,
) -> PaymentPlan:
    return PaymentPlan(
        id=plan_id,
        deposit=deposit,
        monthly_payment=monthly_payment,
        duration=duration,
        total_value=total_value,
        visits=tuple(visits),
        end_date=get_latest_visit_date(visits),
    )


def find_minimum_deposit(visits: Sequence[Visit], total_value: float, duration: int) -> DepositSolution:
    """
    Minimum deposit for a fixed duration, with the remainder spread evenly.

    A larger deposit both offsets early debits and lowers the amortized
    remainder, so feasibility is monotone in the deposit and bisection over
    [0, total_value] applies.

    Returns:
        DepositSolution(deposit, monthly_payment). If no deposit in the
        bracket was feasible, deposit is total_value and monthly_payment is 0;
        callers must re-validate before presenting such a plan as valid.
    """
    if duration <= 0:
        return DepositSolution(deposit=0.0, monthly_payment=0.0)

    snapshot = tuple(visits)

    def feasible(deposit: float) -> bool:
        plan = _trial_plan(
            "deposit-search",
            snapshot,
            total_value,
            duration,
            deposit,
            find_monthly_payment(total_value, duration, deposit),
        )
        return is_within_cap(generate_cash_flow(plan), total_value)

    deposit, found = _bisect_minimum(total_value, feasible)
    if not found:
        return DepositSolution(deposit=total_value, monthly_payment=0.0)

    return DepositSolution(
        deposit=deposit,
        monthly_payment=find_monthly_payment(total_value, duration, deposit),
    )


def find_minimum_monthly_payment(
    visits: Sequence[Visit],
    total_value: float,
    duration: int,
    deposit: float,
) -> float:
    """
    Minimum monthly installment for a fixed deposit and duration.

    Searches [0, max(0, total_value - deposit)]; paying the whole remainder
    in the first month is the upper bound and is returned when nothing
    smaller was feasible.
    """
    if duration <= 0:
        return 0.0

    snapshot = tuple(visits)

    def feasible(monthly_payment: float) -> bool:
        plan = _trial_plan("search", snapshot, total_value, duration, deposit, monthly_payment)
        return is_within_cap(generate_cash_flow(plan), total_value)

    monthly_payment, _ = _bisect_minimum(max(0.0, total_value - deposit), feasible)
    return monthly_payment
