"""Domain-specific exceptions"""

from typing import Dict


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidVisitError(DomainException):
    """One or more visits cannot be planned (missing date or no fees)"""

    def __init__(self, issues: Dict[str, Dict[str, str]]):
        self.issues = issues
        super().__init__(f"{len(issues)} visit(s) need attention before planning")
