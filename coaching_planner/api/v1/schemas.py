"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
import datetime
from typing import Dict, List, Optional

from coaching_planner.config import settings
from coaching_planner.domain.models import CashFlowEntry, PackageSummary, PaymentPlan, Visit


class VisitSchema(BaseModel):
    """Single scheduled visit; date may be omitted for a draft"""

    id: str = Field(..., min_length=1, description="Visit identifier")
    date: Optional[datetime.date] = None
    travel_fee: float = Field(0.0, ge=0, description="Travel fee for on-site visits")
    consulting_fee: float = Field(0.0, ge=0, description="Consulting fee")

    def to_domain(self) -> Visit:
        return Visit(
            id=self.id,
            date=self.date,
            travel_fee=self.travel_fee,
            consulting_fee=self.consulting_fee,
        )


class VisitsRequest(BaseModel):
    """Request body carrying the current visit schedule"""

    visits: List[VisitSchema] = Field(..., max_length=settings.max_visits)

    def domain_visits(self) -> List[Visit]:
        return [v.to_domain() for v in self.visits]


class PlanRequest(VisitsRequest):
    """Request body for POST /v1/plan/design and /v1/plan/tune"""

    duration: int = Field(..., ge=1, description="Plan length in months")
    deposit: float = Field(0.0, ge=0, description="Requested upfront deposit")


class MinimumDepositRequest(VisitsRequest):
    """Request body for POST /v1/plan/minimum-deposit"""

    duration: int = Field(..., ge=1, description="Plan length in months")


class CashFlowRequest(VisitsRequest):
    """Request body for POST /v1/cashflow"""

    deposit: float = Field(0.0, ge=0)
    monthly_payment: float = Field(0.0, ge=0)
    duration: int = Field(..., ge=1)


class CashFlowEntrySchema(BaseModel):
    """Balance projection for one calendar month"""

    date: datetime.date
    balance: float
    payment: float
    visit_cost: float

    @classmethod
    def from_domain(cls, entry: CashFlowEntry) -> "CashFlowEntrySchema":
        return cls(date=entry.date, balance=entry.balance, payment=entry.payment, visit_cost=entry.visit_cost)


class PlanSchema(BaseModel):
    """Payment plan with its projected cash flow"""

    plan_id: str
    deposit: float
    monthly_payment: float
    duration: int
    total_value: float
    end_date: Optional[datetime.date] = None
    is_valid: bool
    max_outstanding: float
    cash_flow: List[CashFlowEntrySchema]

    @classmethod
    def from_domain(cls, plan: PaymentPlan, cash_flow: List[CashFlowEntry]) -> "PlanSchema":
        return cls(
            plan_id=plan.id,
            deposit=plan.deposit,
            monthly_payment=plan.monthly_payment,
            duration=plan.duration,
            total_value=plan.total_value,
            end_date=plan.end_date,
            is_valid=plan.is_valid,
            max_outstanding=plan.max_outstanding,
            cash_flow=[CashFlowEntrySchema.from_domain(e) for e in cash_flow],
        )


class OptionsResponse(BaseModel):
    """Response for POST /v1/options"""

    total_value: float
    max_duration: int
    options: List[PlanSchema]


class MinimumDepositResponse(BaseModel):
    """Response for POST /v1/plan/minimum-deposit"""

    deposit: float
    monthly_payment: float
    total_value: float
    is_valid: bool


class CashFlowResponse(BaseModel):
    """Response for POST /v1/cashflow"""

    cash_flow: List[CashFlowEntrySchema]
    minimum_balance: float
    max_outstanding: float
    is_valid: bool


class DistributionSchema(BaseModel):
    front: float
    mid: float
    back: float
    label: str


class SummaryResponse(BaseModel):
    """Response for POST /v1/summary"""

    total_value: float
    total_travel: float
    total_consulting: float
    onsite_count: int
    virtual_count: int
    max_duration: int
    distribution: DistributionSchema
    issues: Dict[str, Dict[str, str]] = {}

    @classmethod
    def from_domain(cls, summary: PackageSummary, issues: Dict[str, Dict[str, str]]) -> "SummaryResponse":
        d = summary.distribution
        return cls(
            total_value=summary.total_value,
            total_travel=summary.total_travel,
            total_consulting=summary.total_consulting,
            onsite_count=summary.onsite_count,
            virtual_count=summary.virtual_count,
            max_duration=summary.max_duration,
            distribution=DistributionSchema(front=d.front, mid=d.mid, back=d.back, label=d.label),
            issues=issues,
        )
