"""Health-check payload used by the API."""

from million_planner.constants import GOAL
from million_planner.schemas.health import HealthResponse


def get_health() -> HealthResponse:
    """Report liveness and the goal the engine projects towards."""
    return HealthResponse(status="ok", goal=GOAL)
