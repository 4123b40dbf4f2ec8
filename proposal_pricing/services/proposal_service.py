"""
Proposal Service — high-level facade for pricing + persistence.
Coordinates the SnapshotManager, RateTableStore, ProposalRepository and
AuditService for the operations the API and CLI need.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable

from proposal_pricing.models.proposal import Proposal
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import ImpactReport, MultiServiceTotal
from proposal_pricing.models.service_spec import ServiceSpec, parse_service_spec
from proposal_pricing.persistence.proposal_repository import ProposalRepository
from proposal_pricing.persistence.rate_table_store import RateTableStore
from proposal_pricing.pricing.impact import analyze_impact
from proposal_pricing.pricing.snapshots import SnapshotManager
from proposal_pricing.services.audit_service import AuditService

logger = logging.getLogger(__name__)

RATES_SUBJECT = "rates"


class ProposalNotFoundError(LookupError):
    def __init__(self, proposal_id: str):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal {proposal_id} not found")


class ProposalService:
    """Orchestrates proposal pricing, snapshots and persistence."""

    def __init__(
        self,
        rate_store: RateTableStore | None = None,
        repository: ProposalRepository | None = None,
        audit: AuditService | None = None,
    ):
        self.rate_store = rate_store or RateTableStore()
        self.repository = repository or ProposalRepository()
        self.audit = audit or AuditService()
        self.snapshots = SnapshotManager(self.rate_store)

    # ── Proposals ────────────────────────────────────────

    def create_proposal(
        self,
        client_name: str,
        services: Iterable[ServiceSpec | dict[str, Any]],
        freeze_rates: bool = True,
    ) -> Proposal:
        """
        Create and save a proposal. With `freeze_rates` (the default) the live
        table is snapshotted on this first save; otherwise the proposal keeps
        following the live table.
        """
        proposal = Proposal(
            proposal_id=f"PROP-{uuid.uuid4().hex[:8].upper()}",
            client_name=client_name,
            services=self._prepare_services(services),
        )

        if freeze_rates:
            proposal = self.snapshots.ensure_snapshot(proposal)
        else:
            total = self.snapshots.price_proposal(proposal)
            proposal = proposal.model_copy(update={"total_value": total.total_final_price})

        self.repository.save(proposal)
        self._audit_pricing(
            proposal,
            "snapshot_created" if freeze_rates else "priced_live",
            f"{len(proposal.services)} service(s), total {proposal.total_value}",
        )
        return proposal

    def get_proposal(self, proposal_id: str, version: int | None = None) -> Proposal:
        proposal = self.repository.load(proposal_id, version)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return proposal

    def list_proposals(self) -> list[Proposal]:
        return self.repository.list_latest()

    def update_services(
        self, proposal_id: str, services: Iterable[ServiceSpec | dict[str, Any]]
    ) -> Proposal:
        """Edit the services and reprice against the proposal's existing snapshot."""
        proposal = self.get_proposal(proposal_id).model_copy(update={
            "services": self._prepare_services(services),
            "updated_at": datetime.now(timezone.utc),
        })
        total = self.snapshots.price_proposal(proposal)
        proposal = proposal.model_copy(update={"total_value": total.total_final_price})

        self.repository.save(proposal)
        self._audit_pricing(proposal, "repriced", f"total {proposal.total_value}")
        return proposal

    def get_pricing(self, proposal_id: str) -> MultiServiceTotal:
        return self.snapshots.price_proposal(self.get_proposal(proposal_id))

    def adopt_current_rates(self, proposal_id: str) -> Proposal:
        """Explicitly re-snapshot a proposal against the live table."""
        proposal = self.snapshots.adopt_current_rates(self.get_proposal(proposal_id))
        self.repository.save(proposal)
        self._audit_pricing(proposal, "rates_adopted", f"total {proposal.total_value}")
        return proposal

    def apply_rates_to_proposal(self, proposal_id: str, candidate_rates: RateTable) -> Proposal:
        """
        Re-snapshot one proposal on caller-supplied rates (e.g. a simulated
        table the client accepted). The live table is not changed.
        """
        proposal = self.snapshots.apply_and_resnapshot(
            self.get_proposal(proposal_id), candidate_rates
        )
        self.repository.save(proposal)
        self._audit_pricing(proposal, "candidate_rates_applied", f"total {proposal.total_value}")
        return proposal

    def simulate_proposal(self, proposal_id: str, candidate_rates: RateTable) -> MultiServiceTotal:
        """What-if pricing for one proposal; nothing is saved."""
        proposal = self.get_proposal(proposal_id)
        total = self.snapshots.simulate(proposal, candidate_rates)
        self.audit.record(
            proposal_id,
            "simulated",
            f"total {total.total_final_price}",
            rates_version=candidate_rates.version,
            fingerprint=candidate_rates.fingerprint(),
        )
        return total

    def history(self, proposal_id: str) -> list[dict[str, Any]]:
        self.get_proposal(proposal_id)
        return self.repository.history(proposal_id)

    # ── Live rate table (admin path) ─────────────────────

    def live_rates(self) -> RateTable:
        return self.rate_store.get_live_rates()

    def apply_rates(self, candidate_rates: RateTable) -> RateTable:
        """
        Save candidate rates as the new live table. Existing snapshots are
        left alone; only proposals without a snapshot see the new prices.
        """
        saved = self.rate_store.save(candidate_rates)
        self.audit.record(
            RATES_SUBJECT,
            "rates_applied",
            f"live table is now v{saved.version}",
            rates_version=saved.version,
            fingerprint=saved.fingerprint(),
        )
        return saved

    def reset_rates(self) -> RateTable:
        saved = self.rate_store.reset_to_defaults()
        self.audit.record(
            RATES_SUBJECT,
            "rates_reset",
            f"live table is now v{saved.version}",
            rates_version=saved.version,
            fingerprint=saved.fingerprint(),
        )
        return saved

    def impact(self, candidate_rates: RateTable) -> ImpactReport:
        return analyze_impact(self.list_proposals(), self.live_rates(), candidate_rates)

    # ── Helpers ──────────────────────────────────────────

    @staticmethod
    def _prepare_services(services: Iterable[ServiceSpec | dict[str, Any]]) -> list[ServiceSpec]:
        prepared: list[ServiceSpec] = []
        for item in services:
            spec = parse_service_spec(item) if isinstance(item, dict) else item.model_copy(deep=True)
            if not spec.service_id:
                spec = spec.model_copy(update={"service_id": f"SVC-{uuid.uuid4().hex[:8].upper()}"})
            prepared.append(spec)
        return prepared

    def _audit_pricing(self, proposal: Proposal, action: str, details: str) -> None:
        rates = self.snapshots.resolve_rates_for_pricing(proposal)
        self.audit.record(
            proposal.proposal_id,
            action,
            details,
            rates_version=rates.version,
            fingerprint=(
                proposal.pricing_snapshot.fingerprint
                if proposal.has_snapshot
                else rates.fingerprint()
            ),
        )
