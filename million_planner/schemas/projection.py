"""Data contracts for the million-goal projection."""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from million_planner.constants import GOAL, MAX_AMOUNT, MAX_HORIZON_MONTHS, MONTHS_PER_YEAR


class CalculationMode(str, Enum):
    CONTRIBUTION = "contribution"  # solve the monthly contribution for a horizon
    TIME = "time"  # solve the horizon for a monthly contribution


class RateType(str, Enum):
    ANNUAL = "annual"
    MONTHLY = "monthly"


class PeriodType(str, Enum):
    YEARS = "years"
    MONTHS = "months"


class ProjectionStatus(str, Enum):
    SOLVED = "solved"
    GOAL_MET = "goal_met"  # goal reached without contributions
    UNREACHABLE = "unreachable"  # no finite forward solution


class YearlyCheckpoint(BaseModel):
    """Cumulative simulation state at the end of a year (or of the last, partial year)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1)
    investedAmount: float = Field(..., description="Contributions so far, excluding the initial balance.")
    interestCumulative: float = Field(..., description="Interest earned since the start.")
    totalInvested: float = Field(..., description="Initial balance plus contributions so far.")
    totalInterest: float
    totalAccumulated: float
    goal: float = GOAL


class ProjectionResult(BaseModel):
    """Solved unknown plus the rounded month-by-month breakdown."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: CalculationMode
    status: ProjectionStatus
    monthlyRate: float = Field(..., description="Effective monthly rate as a decimal.")
    monthlyContribution: float = Field(..., description="Contribution used by the simulation.")
    solvedContribution: Optional[float] = None
    solvedMonths: Optional[float] = Field(
        None,
        description="Exact (unrounded) months to the goal; 0 when no forward solution exists.",
    )
    simulatedMonths: int = Field(..., ge=0)
    truncated: bool = Field(False, description="Breakdown stopped before the full horizon (month cap or amount limit).")
    totalContributed: float
    totalInterest: float
    totalBalance: float
    goal: float = GOAL
    yearlyCheckpoints: List[YearlyCheckpoint] = Field(default_factory=list)


class ProjectionRequest(BaseModel):
    """Inputs accepted by the projection endpoint.

    ``value`` is a duration (in ``periodType`` units) in contribution mode and
    a monthly contribution in time mode.
    """

    model_config = ConfigDict(extra="forbid")

    mode: CalculationMode
    initialBalance: float = Field(0.0, ge=0, le=MAX_AMOUNT)
    rate: float = Field(..., gt=-100, description="Nominal rate in percent.")
    rateType: RateType = RateType.ANNUAL
    value: float = Field(..., ge=0, le=MAX_AMOUNT)
    periodType: PeriodType = PeriodType.YEARS

    @field_validator("initialBalance", "rate", "value")
    @classmethod
    def ensure_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v

    @model_validator(mode="after")
    def ensure_horizon(self) -> "ProjectionRequest":
        if self.mode == CalculationMode.CONTRIBUTION:
            if self.value <= 0:
                raise ValueError("horizon must be greater than zero")
            if self.horizon_months > MAX_HORIZON_MONTHS:
                raise ValueError(f"horizon must not exceed {MAX_HORIZON_MONTHS} months")
        return self

    @property
    def horizon_months(self) -> float:
        if self.periodType == PeriodType.YEARS:
            return self.value * MONTHS_PER_YEAR
        return self.value
