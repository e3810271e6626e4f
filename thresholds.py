"""What counts as a meaningful discount.

The numbers here are product policy, not math: a price gap is "meaningful"
when it clears EITHER the relative floor OR the absolute floor. That means a
large saving on an expensive item can qualify at well under 1%.
"""
import math
from dataclasses import dataclass


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    ``round()`` uses banker's rounding (2.5 -> 2), which would report one
    percent less than the storefront shows for exact halves.
    """
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ThresholdPolicy:
    min_percent: float = 1.0
    min_absolute: float = 50000.0  # catalog currency units (VND)
    round_tolerance: float = 0.1
    round_step: int = 5
    default_source: str = "manual"

    def is_meaningful(self, price_difference: float, percent_difference: float) -> bool:
        return (
            percent_difference >= self.min_percent
            or price_difference >= self.min_absolute
        )

    def round_percentage(self, percent_off: float) -> int | None:
        """Return the round percentage ``percent_off`` sits on, if any.

        10.04 -> 10, 2.91 -> None (not a multiple of the step),
        14.8 -> None (too far from 15).
        """
        nearest = round_half_up(percent_off)
        if nearest <= 0:
            return None
        if abs(percent_off - nearest) >= self.round_tolerance:
            return None
        if nearest % self.round_step != 0:
            return None
        return nearest


DEFAULT_POLICY = ThresholdPolicy()
