"""Compound-interest planner: how much to save, or how long it takes, to reach a million."""
