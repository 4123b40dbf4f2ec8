"""
Complexity & margin — turns a base cost into a final price.

The order of operations is fixed; historical totals are only reproducible
if it never changes:
    1. adjusted = base × complexity multiplier
    2. overhead = adjusted × overhead %
    3. margin   = (adjusted + overhead) × margin %
    4. final    = adjusted + overhead + margin
"""

from __future__ import annotations

import logging
from typing import Iterable

from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import LineItem, PricingResult
from proposal_pricing.pricing.conventions import coerce_complexity
from proposal_pricing.pricing.errors import NegativeCostError

logger = logging.getLogger(__name__)


def apply_complexity_and_margin(
    base_cost: float,
    total_hours: float,
    complexity,
    rates: RateTable,
    line_items: Iterable[LineItem] = (),
) -> PricingResult:
    """Apply complexity, overhead and margin to a base cost."""
    level = coerce_complexity(complexity)
    if base_cost < 0:
        raise NegativeCostError(base_cost)

    multiplier = getattr(rates.complexity_multipliers, level.value)

    adjusted_cost = base_cost * multiplier
    overhead = adjusted_cost * rates.overhead_percentage
    margin = (adjusted_cost + overhead) * rates.margin_percentage
    final_price = adjusted_cost + overhead + margin

    logger.debug(
        f"base={base_cost} ×{multiplier} → adjusted={adjusted_cost}, "
        f"overhead={overhead}, margin={margin}, final={final_price}"
    )

    return PricingResult(
        complexity=level.value,
        line_items=list(line_items),
        total_hours=total_hours,
        base_cost=base_cost,
        complexity_multiplier=multiplier,
        adjusted_cost=adjusted_cost,
        overhead=overhead,
        margin=margin,
        final_price=final_price,
    )
