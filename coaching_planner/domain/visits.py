"""Visit checks run before a plan is generated from a schedule"""

from typing import Dict, Sequence
from coaching_planner.domain.models import Visit, VisitIssue
from coaching_planner.domain.exceptions import InvalidVisitError


def validate_visits(visits: Sequence[Visit]) -> Dict[str, VisitIssue]:
    """
    Find visits that are not ready for planning.

    Requirements:
    - every visit has a date
    - at least one of travel fee / consulting fee is positive

    Returns:
        Mapping of visit id to its issues; empty when all visits are plannable
    """
    issues: Dict[str, VisitIssue] = {}

    for visit in visits:
        issue = VisitIssue()
        if visit.date is None:
            issue.date = "Please select a date"
        if visit.travel_fee <= 0 and visit.consulting_fee <= 0:
            issue.travel_fee = "Enter a positive amount"
            issue.consulting_fee = "Enter a positive amount"

        if issue.as_dict():
            issues[visit.id] = issue

    return issues


def ensure_plannable(visits: Sequence[Visit]) -> None:
    """Raise InvalidVisitError listing every visit that needs fixing"""
    issues = validate_visits(visits)
    if issues:
        raise InvalidVisitError({visit_id: issue.as_dict() for visit_id, issue in issues.items()})
