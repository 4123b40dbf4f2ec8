"""
Pricing engine — the four operations exposed to form wizards, proposal
persistence and the reporting / simulation UI.

    price(spec, rates)            -> PricingResult
    price_many(specs, rates)      -> MultiServiceTotal
    snapshot(rates)               -> ProposalPricingSnapshot
    simulate(specs, candidate)    -> MultiServiceTotal

Every operation is a pure function of its arguments. Rates are always
passed in; nothing here reads the live table or touches storage.
"""

from __future__ import annotations

import logging
from typing import Sequence

from proposal_pricing.models.proposal import ProposalPricingSnapshot
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import MultiServiceTotal, PricingResult
from proposal_pricing.models.service_spec import ServiceSpec
from proposal_pricing.pricing.adjustments import apply_complexity_and_margin
from proposal_pricing.pricing.aggregation import aggregate
from proposal_pricing.pricing.calculators import compute_base_cost

logger = logging.getLogger(__name__)


def price(spec: ServiceSpec, rates: RateTable) -> PricingResult:
    """Price one service against the given rate table."""
    breakdown = compute_base_cost(spec, rates)
    result = apply_complexity_and_margin(
        breakdown.base_cost,
        breakdown.total_hours,
        spec.complexity,
        rates,
        breakdown.line_items,
    )
    logger.debug(
        f"Priced {spec.category} service '{spec.service_id}' "
        f"→ {result.final_price} (rates v{rates.version})"
    )
    return result.model_copy(update={
        "service_id": spec.service_id,
        "service_type": spec.service_type,
        "category": spec.category,
    })


def price_many(specs: Sequence[ServiceSpec], rates: RateTable) -> MultiServiceTotal:
    """Price every service in order and sum them into a proposal total."""
    return aggregate([price(spec, rates) for spec in specs])


def snapshot(rates: RateTable) -> ProposalPricingSnapshot:
    """Freeze a by-value copy of a rate table."""
    return ProposalPricingSnapshot(
        rates=rates.model_copy(deep=True),
        fingerprint=rates.fingerprint(),
    )


def simulate(specs: Sequence[ServiceSpec], candidate_rates: RateTable) -> MultiServiceTotal:
    """What-if pricing against caller-supplied rates. Never persists anything."""
    total = price_many(specs, candidate_rates)
    logger.info(
        f"Simulated {len(total.services)} service(s) against candidate rates "
        f"→ {total.total_final_price}"
    )
    return total
