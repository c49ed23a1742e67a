"""POST /v1/options - minimum-deposit plan options for a visit schedule"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from coaching_planner.api.v1.schemas import VisitsRequest, OptionsResponse, PlanSchema
from coaching_planner.api.dependencies import get_request_id
from coaching_planner.domain.cashflow import generate_cash_flow, total_value
from coaching_planner.domain.options import generate_simple_options, max_duration
from coaching_planner.domain.visits import ensure_plannable
from coaching_planner.domain.exceptions import InvalidVisitError
from coaching_planner.infrastructure.observability.metrics import (
    record_plan,
    solver_latency_histogram,
    invalid_visits_counter,
)
from coaching_planner.infrastructure.observability.logging import log_plan_computed

router = APIRouter()


@router.post("/options", response_model=OptionsResponse)
def create_options(request_body: VisitsRequest, request: Request):
    """
    Build candidate plans for a visit schedule.

    Flow:
    1. Check every visit has a date and a positive fee
    2. Solve the minimum deposit for 1 month, half the span and the full span
    3. Attach each option's projected cash flow
    """
    start_time = time.time()
    request_id = get_request_id(request)
    visits = request_body.domain_visits()

    try:
        ensure_plannable(visits)

        with solver_latency_histogram.labels(operation="options").time():
            plans = generate_simple_options(visits)

        options = []
        for plan in plans:
            record_plan("options", plan.is_valid, plan.duration)
            log_plan_computed(
                request_id, "options", len(visits), plan.duration, plan.is_valid, (time.time() - start_time) * 1000
            )
            options.append(PlanSchema.from_domain(plan, generate_cash_flow(plan)))

        return OptionsResponse(
            total_value=total_value(visits),
            max_duration=max_duration(visits),
            options=options,
        )

    except InvalidVisitError as e:
        invalid_visits_counter.inc()
        logging.warning(f"Invalid visits: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail={"message": str(e), "visits": e.issues})

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
