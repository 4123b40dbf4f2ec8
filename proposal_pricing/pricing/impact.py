"""
Impact analysis — how would a candidate rate table move proposal values?

Only proposals without a snapshot follow the live table, so only those are
affected by a rate change; snapshotted proposals are counted as unaffected.
"""

from __future__ import annotations

from typing import Iterable

from proposal_pricing.models.proposal import Proposal
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import ImpactReport, ProposalImpact
from proposal_pricing.pricing import engine


def _percent_change(current: float, simulated: float) -> float:
    if current > 0:
        return (simulated - current) / current * 100
    return 0.0


def analyze_impact(
    proposals: Iterable[Proposal],
    live_rates: RateTable,
    candidate_rates: RateTable,
) -> ImpactReport:
    impacts: list[ProposalImpact] = []
    unaffected = 0

    for proposal in proposals:
        if proposal.has_snapshot:
            unaffected += 1
            continue
        current = engine.price_many(proposal.services, live_rates).total_final_price
        simulated = engine.simulate(proposal.services, candidate_rates).total_final_price
        impacts.append(ProposalImpact(
            proposal_id=proposal.proposal_id,
            client_name=proposal.client_name,
            current_value=current,
            simulated_value=simulated,
            difference=simulated - current,
            percent_change=_percent_change(current, simulated),
        ))

    total_current = sum(i.current_value for i in impacts)
    total_simulated = sum(i.simulated_value for i in impacts)
    return ImpactReport(
        proposal_impacts=impacts,
        total_current_value=total_current,
        total_simulated_value=total_simulated,
        difference=total_simulated - total_current,
        percent_change=_percent_change(total_current, total_simulated),
        unaffected_proposals=unaffected,
    )
