"""Engine — pure pricing computation over an immutable EngineConfig."""

from srs_pricing.engine.rounding import round_up
from srs_pricing.engine.quote import compute_quote, compute_term_table, resolve_scenario

__all__ = [
    "round_up",
    "compute_quote",
    "compute_term_table",
    "resolve_scenario",
]
