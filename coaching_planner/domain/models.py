"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple

# Share of the package value a client may owe at any point
OUTSTANDING_CAP_RATIO = 0.2


@dataclass(frozen=True)
class Visit:
    """Billable coaching visit; `date` is None while the visit is a draft"""

    id: str
    date: Optional[date]
    travel_fee: float = 0.0
    consulting_fee: float = 0.0

    @property
    def amount(self) -> float:
        return self.travel_fee + self.consulting_fee


@dataclass(frozen=True)
class CashFlowEntry:
    """One calendar-month bucket of a simulated plan"""

    date: date  # 15th-of-month anchor
    balance: float  # running balance, negative = client owes
    payment: float
    visit_cost: float


@dataclass
class PaymentPlan:
    """Candidate installment plan over a snapshot of visits"""

    id: str
    deposit: float
    monthly_payment: float
    duration: int  # months
    total_value: float
    visits: Tuple[Visit, ...]
    end_date: Optional[date] = None
    is_valid: bool = False

    @property
    def max_outstanding(self) -> float:
        return self.total_value * OUTSTANDING_CAP_RATIO


@dataclass(frozen=True)
class DepositSolution:
    """Result of the minimum-deposit search"""

    deposit: float
    monthly_payment: float


@dataclass
class VisitIssue:
    """Per-field problems found on a visit before planning"""

    date: Optional[str] = None
    travel_fee: Optional[str] = None
    consulting_fee: Optional[str] = None

    def as_dict(self) -> Dict[str, str]:
        return {k: v for k, v in vars(self).items() if v is not None}


@dataclass
class Distribution:
    """Share of package value in the front, middle and back thirds of the schedule"""

    front: float
    mid: float
    back: float
    label: str  # "front heavy" | "mid heavy" | "back heavy" | "balanced"


@dataclass
class PackageSummary:
    """Headline figures for a visit schedule"""

    total_value: float
    total_travel: float
    total_consulting: float
    onsite_count: int
    virtual_count: int
    max_duration: int
    distribution: Distribution = field(default_factory=lambda: Distribution(0.0, 0.0, 0.0, "balanced"))
