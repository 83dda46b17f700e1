"""Currency rounding used by the monthly simulation."""

import math

from million_planner.constants import ROUNDING_EPSILON


def round_currency(value: float) -> float:
    """Round to cents, half-up, after nudging by machine epsilon.

    ``1.005`` is stored as ``1.00499999...``; the nudge lets it round to
    ``1.01`` the way a statement would show it.
    """
    return math.floor((value + ROUNDING_EPSILON) * 100 + 0.5) / 100
