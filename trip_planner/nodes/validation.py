"""
Input validation node.

The only fatal step of the planning graph: when any rule is violated the
run stops before a single provider is called.
"""

import logging
import math
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from trip_planner.graph.config import DEFAULT_CONFIG, TripPlannerGraphConfig
from trip_planner.graph.state import TripPlannerState, log_prefix
from trip_planner.shared.errors import PlanningValidationError


logger = logging.getLogger(__name__)


def add_years(day: date, years: int) -> date:
    """Shift a date by whole calendar years; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


def compute_days_count(start_date: date, end_date: date) -> int:
    """Trip length in days: ceil(end - start)."""
    return math.ceil((end_date - start_date).days)


def collect_violations(
    state: TripPlannerState,
    today: date,
    config: TripPlannerGraphConfig = DEFAULT_CONFIG,
) -> List[str]:
    """
    Check every input rule and return all violations.

    Args:
        state: Planning state holding the raw user input
        today: Reference date for "in the future" checks
        config: Validation limits

    Returns:
        Violation messages in rule order; empty when the input is valid.
    """
    violations: List[str] = []

    destination = state.get("destination") or ""
    if not destination.strip():
        violations.append("Destination is required")
    elif len(destination) > config.max_destination_length:
        violations.append(
            f"Destination must be {config.max_destination_length} characters or less"
        )

    start_date = state.get("start_date")
    end_date = state.get("end_date")
    if not start_date:
        violations.append("Start date is required")
    if not end_date:
        violations.append("End date is required")

    if start_date and end_date:
        if start_date > end_date:
            violations.append("Start date must be before end date")
        if start_date < today:
            violations.append("Start date must be in the future")
        if start_date > add_years(today, config.max_advance_years):
            violations.append(f"Start date must be within {config.max_advance_years} years")

    budget = state.get("budget_usd")
    if budget is None or not math.isfinite(budget) or budget <= 0:
        violations.append("Budget must be greater than 0")
    elif budget > config.max_budget_usd:
        violations.append(f"Budget must be less than ${config.max_budget_usd:,.0f}")

    if start_date and end_date:
        days_count = compute_days_count(start_date, end_date)
        if days_count < 1:
            violations.append("Trip must be at least 1 day")
        if days_count > config.max_trip_days:
            violations.append(f"Trip must be less than {config.max_trip_days} days")

    return violations


async def validate_input(
    state: TripPlannerState,
    config: TripPlannerGraphConfig = DEFAULT_CONFIG,
    clock: Optional[Callable[[], date]] = None,
) -> Dict[str, Any]:
    """
    Validate user input and derive the trip length.

    Args:
        state: Planning state with the raw user input
        config: Validation limits
        clock: Returns today's date; defaults to date.today

    Returns:
        State update with ``days_count``.

    Raises:
        PlanningValidationError: With every violated rule joined by "; ".
    """
    _log = log_prefix(state, "validate_input")
    today = (clock or date.today)()

    violations = collect_violations(state, today, config)
    if violations:
        logger.info(f"{_log}Rejected input | violations={len(violations)}")
        raise PlanningValidationError(
            f"Input validation failed: {'; '.join(violations)}"
        )

    days_count = compute_days_count(state["start_date"], state["end_date"])
    logger.info(
        f"{_log}Input valid | destination={state['destination']}, "
        f"days={days_count}, budget={state['budget_usd']}"
    )
    return {"days_count": days_count}
