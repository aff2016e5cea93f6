"""
Trip planner entry point.

``TripPlanner`` owns a compiled graph and the providers it was built
with. One instance serves every request of the process; each call to
``execute`` gets its own fresh state.
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional

from trip_planner.graph.build import create_trip_planner_graph
from trip_planner.graph.config import DEFAULT_CONFIG, TripPlannerGraphConfig
from trip_planner.graph.state import TripPlannerState, build_initial_state, log_prefix
from trip_planner.services.base import PlannerServices
from trip_planner.shared.contracts import PlanningInput
from trip_planner.shared.errors import PlanningTimeoutError, PlanningValidationError
from trip_planner.shared.logging import log_state_transition


logger = logging.getLogger(__name__)


class TripPlanner:
    """Runs the planning graph for one input at a time under a timeout."""

    def __init__(
        self,
        services: PlannerServices,
        config: Optional[TripPlannerGraphConfig] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.services = services
        self.config = config or DEFAULT_CONFIG
        self.graph = create_trip_planner_graph(services, self.config, clock)

    async def execute(
        self,
        planning_input: PlanningInput,
        timeout_ms: Optional[int] = None,
        run_id: Optional[str] = None,
    ) -> TripPlannerState:
        """
        Plan a trip.

        Args:
            planning_input: User-supplied trip fields
            timeout_ms: Wall-clock budget for the whole run; defaults to the
                configured timeout
            run_id: Optional identifier used in log lines

        Returns:
            The merged final state, including any non-fatal ``errors``.

        Raises:
            PlanningValidationError: If the input is invalid. No provider is called.
            PlanningTimeoutError: If the graph does not settle in time.
        """
        timeout = timeout_ms if timeout_ms is not None else self.config.timeout_ms
        initial_state = build_initial_state(planning_input, run_id)
        _log = log_prefix(initial_state, "execute")

        logger.info(
            f"{_log}Planning starting | destination={planning_input.destination}, "
            f"origin={planning_input.origin}, timeout_ms={timeout}"
        )
        log_state_transition("planning_start", initial_state, logger=logger)

        try:
            final_state = await asyncio.wait_for(
                self.graph.ainvoke(
                    initial_state,
                    config={"recursion_limit": self.config.recursion_limit},
                ),
                timeout=timeout / 1000,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"{_log}Planning timed out | timeout_ms={timeout}")
            raise PlanningTimeoutError(
                f"Trip planning timed out after {timeout}ms", timeout
            ) from e
        except PlanningValidationError as e:
            logger.info(f"{_log}Planning rejected: {e}")
            raise

        final_state["end_time"] = datetime.now(timezone.utc)
        log_state_transition("planning_complete", final_state, logger=logger)
        logger.info(
            f"{_log}Planning finished | "
            f"pois={len(final_state.get('points_of_interest') or [])}, "
            f"days={len(final_state.get('daily_itinerary') or [])}, "
            f"listings={len(final_state.get('airbnb_recommendations') or [])}, "
            f"errors={len(final_state.get('errors') or [])}"
        )
        return final_state


async def execute_trip_planner(
    planning_input: PlanningInput,
    services: PlannerServices,
    timeout_ms: Optional[int] = None,
    config: Optional[TripPlannerGraphConfig] = None,
) -> TripPlannerState:
    """Build a planner for the given providers and run it once."""
    planner = TripPlanner(services, config)
    return await planner.execute(planning_input, timeout_ms=timeout_ms)
