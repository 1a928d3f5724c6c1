"""Currency rounding — every final price rounds UP to the configured increment."""

from __future__ import annotations

import math

from srs_pricing.errors import ConfigurationError


def round_up(value: float, increment: float) -> float:
    """Round ``value`` up to the next multiple of ``increment``.

    Idempotent: round_up(round_up(x)) == round_up(x). The quotient is
    rounded to 9 places first so float noise (e.g. 2970.0000000004 / 10)
    does not push an exact multiple up a whole increment.
    """
    if not math.isfinite(increment) or increment <= 0:
        raise ConfigurationError(f"rounding increment must be a positive number, got {increment}")
    if not math.isfinite(value):
        raise ConfigurationError(f"cannot round non-finite price {value}")
    return float(math.ceil(round(value / increment, 9)) * increment)
