"""POST /v1/summary - package totals for the schedule being edited"""

from fastapi import APIRouter

from coaching_planner.api.v1.schemas import VisitsRequest, SummaryResponse
from coaching_planner.domain.summary import summarize_package
from coaching_planner.domain.visits import validate_visits

router = APIRouter()


@router.post("/summary", response_model=SummaryResponse)
def get_summary(request_body: VisitsRequest):
    """
    Summarize a schedule, including drafts.

    Unlike the planning endpoints this never rejects visits; problems are
    reported per visit under `issues`.
    """
    visits = request_body.domain_visits()
    issues = {visit_id: issue.as_dict() for visit_id, issue in validate_visits(visits).items()}
    return SummaryResponse.from_domain(summarize_package(visits), issues)
