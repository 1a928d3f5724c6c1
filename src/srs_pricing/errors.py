"""Engine error taxonomy.

Construction-time problems surface as pydantic ``ValidationError``.
Everything the engine detects while evaluating a quote is a ``PricingError``.
"""

from __future__ import annotations


class PricingError(ValueError):
    """Base class for every error raised by the pricing engine."""


class ConfigurationError(PricingError):
    """A parameter is missing, non-finite, or yields a zero-width denominator."""


class InvalidScenarioError(PricingError):
    """Scenario inputs cannot be priced (e.g. contract length not offered)."""


class MarginError(PricingError):
    """Margin requested against a price that is zero or negative."""
