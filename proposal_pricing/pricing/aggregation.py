"""
Multi-service aggregation — one proposal total from many priced services.

Plain sums in input order. There is no bundling or cross-service discount;
an empty list (a draft with no services yet) is a zero total.
"""

from __future__ import annotations

from typing import Sequence

from proposal_pricing.models.schemas import MultiServiceTotal, PricingResult


def aggregate(results: Sequence[PricingResult]) -> MultiServiceTotal:
    """Sum every constituent field of the per-service results."""
    results = list(results)
    return MultiServiceTotal(
        services=results,
        total_base_cost=sum(r.base_cost for r in results),
        total_adjusted_cost=sum(r.adjusted_cost for r in results),
        total_overhead=sum(r.overhead for r in results),
        total_margin=sum(r.margin for r in results),
        total_final_price=sum(r.final_price for r in results),
        total_hours=sum(r.total_hours for r in results),
        total_line_items=sum(len(r.line_items) for r in results),
    )
