"""POST /v1/cashflow - balance projection for a fully specified plan"""

import logging
from fastapi import APIRouter, HTTPException, Request

from coaching_planner.api.v1.schemas import CashFlowRequest, CashFlowResponse, CashFlowEntrySchema
from coaching_planner.api.dependencies import get_request_id
from coaching_planner.domain.models import PaymentPlan
from coaching_planner.domain.cashflow import (
    generate_cash_flow,
    get_latest_visit_date,
    is_within_cap,
    minimum_balance,
    total_value,
)
from coaching_planner.domain.visits import ensure_plannable
from coaching_planner.domain.exceptions import InvalidVisitError
from coaching_planner.infrastructure.observability.metrics import record_plan, invalid_visits_counter

router = APIRouter()


@router.post("/cashflow", response_model=CashFlowResponse)
def project_cash_flow(request_body: CashFlowRequest, request: Request):
    """
    Simulate month-by-month balance for the given deposit, payment and duration.

    Returns:
        Ordered monthly entries, the lowest balance reached and whether it
        stays within 20% of the package value
    """
    request_id = get_request_id(request)
    visits = request_body.domain_visits()

    try:
        ensure_plannable(visits)
    except InvalidVisitError as e:
        invalid_visits_counter.inc()
        logging.warning(f"Invalid visits: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail={"message": str(e), "visits": e.issues})

    value = total_value(visits)
    plan = PaymentPlan(
        id="projection",
        deposit=request_body.deposit,
        monthly_payment=request_body.monthly_payment,
        duration=request_body.duration,
        total_value=value,
        visits=tuple(visits),
        end_date=get_latest_visit_date(visits),
    )

    cash_flow = generate_cash_flow(plan)
    is_valid = is_within_cap(cash_flow, value)
    record_plan("cashflow", is_valid, plan.duration)

    return CashFlowResponse(
        cash_flow=[CashFlowEntrySchema.from_domain(e) for e in cash_flow],
        minimum_balance=minimum_balance(cash_flow),
        max_outstanding=plan.max_outstanding,
        is_valid=is_valid,
    )
