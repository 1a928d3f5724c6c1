"""Parameter-grid reports and pricing-curve regression checks."""

from srs_pricing.reporting.grid import (
    Anomaly,
    GridRow,
    TermGapViolation,
    build_grid,
    find_anomalies,
    find_term_gap_violations,
    format_anomaly,
    grid_frame,
    tier_label,
)

__all__ = [
    "Anomaly",
    "GridRow",
    "TermGapViolation",
    "build_grid",
    "find_anomalies",
    "find_term_gap_violations",
    "format_anomaly",
    "grid_frame",
    "tier_label",
]
