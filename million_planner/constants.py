# constants.py

GOAL: float = 1_000_000.0
MONTHS_PER_YEAR: int = 12

# Nudge applied before two-decimal rounding (JavaScript's Number.EPSILON).
ROUNDING_EPSILON: float = 2.220446049250313e-16

# Upper bound on simulated months, and on horizons accepted over HTTP.
MAX_SIMULATION_MONTHS: int = 6000
MAX_HORIZON_MONTHS: int = MAX_SIMULATION_MONTHS

# Largest amount the cent-rounded simulation carries; beyond ~2**53 cents floats lose cent precision.
MAX_AMOUNT: float = 1e15
