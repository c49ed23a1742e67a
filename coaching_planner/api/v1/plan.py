"""POST /v1/plan/* - design, tune and solve a single payment plan"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from coaching_planner.api.v1.schemas import (
    PlanRequest,
    PlanSchema,
    MinimumDepositRequest,
    MinimumDepositResponse,
)
from coaching_planner.api.dependencies import get_request_id
from coaching_planner.domain.models import PaymentPlan
from coaching_planner.domain.cashflow import generate_cash_flow, total_value, validate_payment_plan
from coaching_planner.domain.options import design_plan, tune_plan
from coaching_planner.domain.solver import find_minimum_deposit
from coaching_planner.domain.visits import ensure_plannable
from coaching_planner.domain.exceptions import InvalidVisitError
from coaching_planner.infrastructure.observability.metrics import (
    record_plan,
    solver_latency_histogram,
    invalid_visits_counter,
)
from coaching_planner.infrastructure.observability.logging import log_plan_computed

router = APIRouter()


def _plan_response(plan: PaymentPlan, operation: str, request_id: str, start_time: float) -> PlanSchema:
    record_plan(operation, plan.is_valid, plan.duration)
    log_plan_computed(
        request_id, operation, len(plan.visits), plan.duration, plan.is_valid, (time.time() - start_time) * 1000
    )
    return PlanSchema.from_domain(plan, generate_cash_flow(plan))


def _reject_invalid_visits(e: InvalidVisitError, request_id: str) -> HTTPException:
    invalid_visits_counter.inc()
    logging.warning(f"Invalid visits: {e}", extra={"request_id": request_id})
    return HTTPException(status_code=422, detail={"message": str(e), "visits": e.issues})


@router.post("/plan/design", response_model=PlanSchema)
def create_designed_plan(request_body: PlanRequest, request: Request):
    """
    Plan for a chosen duration and deposit.

    A deposit below the minimum the duration needs is raised to that minimum;
    the monthly payment amortizes the rest.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    visits = request_body.domain_visits()

    try:
        ensure_plannable(visits)
        with solver_latency_histogram.labels(operation="design").time():
            plan = design_plan(visits, request_body.duration, request_body.deposit)
        return _plan_response(plan, "design", request_id, start_time)

    except InvalidVisitError as e:
        raise _reject_invalid_visits(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/plan/tune", response_model=PlanSchema)
def create_tuned_plan(request_body: PlanRequest, request: Request):
    """
    Plan for a fixed deposit with the smallest monthly payment that keeps
    the client within the outstanding cap.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    visits = request_body.domain_visits()

    try:
        ensure_plannable(visits)
        with solver_latency_histogram.labels(operation="tune").time():
            plan = tune_plan(visits, request_body.duration, request_body.deposit)

    except InvalidVisitError as e:
        raise _reject_invalid_visits(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if plan is None:
        raise HTTPException(status_code=422, detail="Add visits to tune a plan")

    return _plan_response(plan, "tune", request_id, start_time)


@router.post("/plan/minimum-deposit", response_model=MinimumDepositResponse)
def get_minimum_deposit(request_body: MinimumDepositRequest, request: Request):
    """
    Smallest deposit that keeps the plan within the cap for a duration.

    `is_valid` re-checks the result, since the search returns the full
    package value when no smaller deposit works.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    visits = request_body.domain_visits()

    try:
        ensure_plannable(visits)
        value = total_value(visits)

        with solver_latency_histogram.labels(operation="minimum_deposit").time():
            solution = find_minimum_deposit(visits, value, request_body.duration)

        plan = PaymentPlan(
            id="minimum-deposit",
            deposit=solution.deposit,
            monthly_payment=solution.monthly_payment,
            duration=request_body.duration,
            total_value=value,
            visits=tuple(visits),
        )
        is_valid = validate_payment_plan(plan)

        record_plan("minimum_deposit", is_valid, request_body.duration)
        log_plan_computed(
            request_id, "minimum_deposit", len(visits), request_body.duration, is_valid,
            (time.time() - start_time) * 1000,
        )

        return MinimumDepositResponse(
            deposit=solution.deposit,
            monthly_payment=solution.monthly_payment,
            total_value=value,
            is_valid=is_valid,
        )

    except InvalidVisitError as e:
        raise _reject_invalid_visits(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
