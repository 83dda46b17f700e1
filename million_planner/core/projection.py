from __future__ import annotations

import math
from typing import List, Tuple

from loguru import logger

from million_planner.constants import GOAL, MAX_AMOUNT, MAX_SIMULATION_MONTHS, MONTHS_PER_YEAR
from million_planner.core.money import round_currency
from million_planner.schemas.projection import (
    CalculationMode,
    PeriodType,
    ProjectionResult,
    ProjectionStatus,
    RateType,
    YearlyCheckpoint,
)


def monthly_rate(rate: float, rate_type: RateType) -> float:
    """
    Effective monthly rate (decimal) for a nominal percent rate.

    Annual rates are de-annualized geometrically, since compounding is monthly:
    (1 + annual)^(1/12) - 1.
    """
    if rate_type == RateType.ANNUAL:
        return (1 + rate / 100) ** (1 / MONTHS_PER_YEAR) - 1
    return rate / 100


def horizon_in_months(duration: float, period_type: PeriodType) -> float:
    if period_type == PeriodType.YEARS:
        return duration * MONTHS_PER_YEAR
    return duration


def solve_contribution(
    initial_balance: float,
    rate: float,
    months: float,
    goal: float = GOAL,
) -> Tuple[float, ProjectionStatus]:
    """
    Monthly contribution that takes initial_balance to goal in `months`.

    Inverts FV = PV*(1+r)^n + PMT*((1+r)^n - 1)/r for PMT. A negative PMT
    (the initial balance outgrows the goal on its own) is clamped to 0.
    """
    if months <= 0:
        status = ProjectionStatus.GOAL_MET if initial_balance >= goal else ProjectionStatus.UNREACHABLE
        return 0.0, status
    if 1 + rate <= 0:
        return 0.0, ProjectionStatus.UNREACHABLE

    try:
        compound_factor = (1 + rate) ** months
    except OverflowError:
        # growth outruns any float: the seed alone clears the goal, or a vanishing contribution does
        if initial_balance > 0:
            return 0.0, ProjectionStatus.GOAL_MET
        return goal * rate * math.exp(-months * math.log1p(rate)), ProjectionStatus.SOLVED
    remaining = goal - initial_balance * compound_factor

    if rate == 0:
        contribution = remaining / months
    else:
        contribution = remaining / ((compound_factor - 1) / rate)

    if remaining <= 0 or contribution < 0:
        return 0.0, ProjectionStatus.GOAL_MET
    return contribution, ProjectionStatus.SOLVED


def solve_months(
    initial_balance: float,
    rate: float,
    contribution: float,
    goal: float = GOAL,
) -> Tuple[float, ProjectionStatus]:
    """
    Exact (unrounded) number of months until the balance reaches goal.

    Uses n = ln((FV*r + PMT) / (PV*r + PMT)) / ln(1 + r), or the linear
    form when r == 0. Returns 0 months whenever there is no forward
    solution; the status tells "already there" from "never".
    """
    if initial_balance >= goal:
        return 0.0, ProjectionStatus.GOAL_MET

    if rate == 0:
        if contribution == 0:
            return 0.0, ProjectionStatus.UNREACHABLE
        months = (goal - initial_balance) / contribution
    else:
        if 1 + rate <= 0:
            return 0.0, ProjectionStatus.UNREACHABLE
        numerator = goal * rate + contribution
        denominator = initial_balance * rate + contribution
        if denominator == 0 or numerator / denominator <= 0:
            return 0.0, ProjectionStatus.UNREACHABLE
        months = math.log(numerator / denominator) / math.log(1 + rate)

    if not math.isfinite(months) or months <= 0:
        return 0.0, ProjectionStatus.UNREACHABLE
    return months, ProjectionStatus.SOLVED


def simulate_breakdown(
    initial_balance: float,
    rate: float,
    contribution: float,
    months: int,
    goal: float = GOAL,
) -> Tuple[List[YearlyCheckpoint], int]:
    """
    Re-run the plan month by month with cent rounding and keep yearly checkpoints.

    Order of operations (per month):
      1) interest on the starting balance, rounded to cents
      2) balance = start + interest + contribution, rounded
      3) running contributed / interest totals, rounded
    A checkpoint is taken every 12th month and on the last month.

    Stops early, before any amount would pass MAX_AMOUNT, and closes with a
    checkpoint for the last simulated month. Returns the checkpoints and the
    number of months actually simulated.
    """
    balance = initial_balance
    contributed = initial_balance  # the seed balance counts as contributed
    interest_total = 0.0

    def checkpoint(month: int) -> YearlyCheckpoint:
        return YearlyCheckpoint(
            year=math.ceil(month / MONTHS_PER_YEAR),
            investedAmount=round_currency(contributed - initial_balance),
            interestCumulative=interest_total,
            totalInvested=contributed,
            totalInterest=interest_total,
            totalAccumulated=balance,
            goal=goal,
        )

    checkpoints: List[YearlyCheckpoint] = []
    simulated = 0
    for month in range(1, months + 1):
        # `not x < limit` also catches inf and nan
        if not (
            abs(balance * (1 + rate) + contribution) < MAX_AMOUNT
            and abs(contributed + contribution) < MAX_AMOUNT
        ):
            break

        interest = round_currency(balance * rate)
        balance = round_currency(balance + interest + contribution)
        contributed = round_currency(contributed + contribution)
        interest_total = round_currency(interest_total + interest)
        simulated = month

        if month % MONTHS_PER_YEAR == 0 or month == months:
            checkpoints.append(checkpoint(month))

    if simulated < months and simulated % MONTHS_PER_YEAR != 0:
        checkpoints.append(checkpoint(simulated))

    return checkpoints, simulated


def project(
    mode: CalculationMode,
    initial_balance: float,
    rate: float,
    rate_type: RateType,
    value: float,
    period_type: PeriodType = PeriodType.YEARS,
    *,
    goal: float = GOAL,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> ProjectionResult:
    """
    Solve for the unknown of `mode` and build the yearly breakdown.

    `value` is the horizon (in `period_type` units) in CONTRIBUTION mode and
    the monthly contribution in TIME mode. Inputs are assumed sanitized:
    non-negative balance, finite rate above -100%, positive horizon.

    Headline totals come from the rounded simulation, not from the closed
    form, so they always match the last checkpoint.
    """
    r = monthly_rate(rate, rate_type)

    if mode == CalculationMode.CONTRIBUTION:
        months = horizon_in_months(value, period_type)
        contribution, status = solve_contribution(initial_balance, r, months, goal)
        solved_contribution, solved_months = contribution, None
        logger.debug(f"Solved contribution {contribution:.2f}/month over {months} months ({status.value})")
    else:
        contribution = value
        months, status = solve_months(initial_balance, r, contribution, goal)
        solved_contribution, solved_months = None, months
        logger.debug(f"Solved {months:.4f} months at {contribution:.2f}/month ({status.value})")

    if status == ProjectionStatus.UNREACHABLE:
        logger.info(f"Goal of {goal:,.2f} is unreachable in {mode.value} mode with these inputs")

    simulation_months = max(math.ceil(months), 0)
    truncated = simulation_months > max_months
    if truncated:
        logger.warning(f"Simulation capped at {max_months} months (needed {simulation_months})")
        simulation_months = max_months

    checkpoints, simulated = simulate_breakdown(initial_balance, r, contribution, simulation_months, goal)
    if simulated < simulation_months:
        logger.warning(
            f"Breakdown stopped after {simulated} of {simulation_months} months: "
            f"amounts would pass {MAX_AMOUNT:,.0f}"
        )
        truncated = True
        simulation_months = simulated

    if checkpoints:
        last = checkpoints[-1]
        total_contributed, total_interest, total_balance = (
            last.totalInvested,
            last.totalInterest,
            last.totalAccumulated,
        )
    else:
        total_contributed, total_interest, total_balance = initial_balance, 0.0, initial_balance

    return ProjectionResult(
        mode=mode,
        status=status,
        monthlyRate=r,
        monthlyContribution=contribution,
        solvedContribution=solved_contribution,
        solvedMonths=solved_months,
        simulatedMonths=simulation_months,
        truncated=truncated,
        totalContributed=total_contributed,
        totalInterest=total_interest,
        totalBalance=total_balance,
        goal=goal,
        yearlyCheckpoints=checkpoints,
    )


__all__ = [
    "monthly_rate",
    "horizon_in_months",
    "solve_contribution",
    "solve_months",
    "simulate_breakdown",
    "project",
]
