"""
Snapshot Manager — binds a frozen rate table to each priced proposal.

State machine for a proposal's pricing:

    unpriced ──first save──▶ snapshotted ──edit──▶ snapshotted (same snapshot)
                                  │
                                  └─adopt current rates─▶ snapshotted (new snapshot)

Changing the live rate table never re-snapshots anything: the quoted price
of an issued proposal only moves when a caller explicitly asks for it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol, Sequence, Union

from proposal_pricing.models.enums import PricingState
from proposal_pricing.models.proposal import Proposal, ProposalPricingSnapshot
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import MultiServiceTotal, PricingResult
from proposal_pricing.models.service_spec import ServiceSpec
from proposal_pricing.pricing import engine

logger = logging.getLogger(__name__)

SimulationTarget = Union[ServiceSpec, Sequence[ServiceSpec], Proposal]


class LiveRateSource(Protocol):
    """Anything that can hand out the current administrator-saved table."""

    def get_live_rates(self) -> RateTable: ...


class SnapshotManager:
    """Freezes, resolves and (only on request) replaces proposal snapshots."""

    def __init__(self, rate_source: LiveRateSource):
        self._rate_source = rate_source

    # ── Snapshot lifecycle ───────────────────────────────

    def snapshot_on_create(self, live_rates: RateTable) -> ProposalPricingSnapshot:
        """Copy all scalar fields of the live table by value."""
        snap = engine.snapshot(live_rates)
        logger.info(f"Snapshot created from rates v{live_rates.version} ({snap.fingerprint[:12]})")
        return snap

    def ensure_snapshot(self, proposal: Proposal) -> Proposal:
        """
        First save: unpriced → snapshotted. A proposal that already carries a
        snapshot is returned as is; its snapshot is never replaced here.
        """
        if proposal.has_snapshot:
            return proposal
        snap = self.snapshot_on_create(self._rate_source.get_live_rates())
        return self._with_snapshot(proposal, snap)

    def resolve_rates_for_pricing(self, proposal: Proposal) -> RateTable:
        """The proposal's own snapshot, or the live table when it has none."""
        if proposal.has_snapshot:
            return proposal.pricing_snapshot.rates
        return self._rate_source.get_live_rates()

    # ── Pricing ──────────────────────────────────────────

    def price_proposal(self, proposal: Proposal) -> MultiServiceTotal:
        return engine.price_many(proposal.services, self.resolve_rates_for_pricing(proposal))

    def simulate(
        self, target: SimulationTarget, candidate_rates: RateTable
    ) -> PricingResult | MultiServiceTotal:
        """
        Recompute with caller-supplied rates. No snapshot is read for the
        price and none is written; the target is left untouched.
        """
        if isinstance(target, Proposal):
            return engine.simulate(target.services, candidate_rates)
        if isinstance(target, (list, tuple)):
            return engine.simulate(target, candidate_rates)
        return engine.price(target, candidate_rates)

    # ── Explicit re-snapshot actions ─────────────────────

    def adopt_current_rates(self, proposal: Proposal) -> Proposal:
        """Replace the proposal's snapshot with the current live table."""
        return self.apply_and_resnapshot(proposal, self._rate_source.get_live_rates())

    def apply_and_resnapshot(self, proposal: Proposal, rates: RateTable) -> Proposal:
        """Bind `rates` as the proposal's new snapshot."""
        previous = proposal.pricing_snapshot
        snap = self.snapshot_on_create(rates)
        logger.info(
            f"[{proposal.proposal_id}] Re-snapshot: "
            f"{previous.fingerprint[:12] if previous else '<none>'} → {snap.fingerprint[:12]}"
        )
        return self._with_snapshot(proposal, snap)

    # ── Helpers ──────────────────────────────────────────

    def _with_snapshot(self, proposal: Proposal, snap: ProposalPricingSnapshot) -> Proposal:
        # Services are copied; the result never shares them with the caller
        updated = proposal.model_copy(deep=True, update={
            "pricing_snapshot": snap,
            "pricing_state": PricingState.SNAPSHOTTED,
            "updated_at": datetime.now(timezone.utc),
        })
        total = engine.price_many(updated.services, snap.rates)
        return updated.model_copy(update={"total_value": total.total_final_price})
