"""
Tests: ProposalService orchestration (snapshots + persistence + audit).

Run with:
    pytest proposal_pricing/tests/test_proposal_service.py -v
"""

import pytest

from proposal_pricing.models.enums import PricingState
from proposal_pricing.models.service_spec import ConsultingSpec
from proposal_pricing.pricing.errors import InvalidComplexityError
from proposal_pricing.services import ProposalNotFoundError, ProposalService

CONSULTING = {"category": "consulting", "complexity": "medium", "estimated_duration": 6}
EVENT = {
    "service_type": "photography",
    "coverage_duration": "full_day",
    "staffing": {"photographers": 1, "editors": 1},
    "includes_post_production": True,
}


class TestCreateProposal:
    def test_create_snapshots_and_saves(self):
        service = ProposalService()
        proposal = service.create_proposal("Acme", [CONSULTING, EVENT])

        assert proposal.proposal_id.startswith("PROP-")
        assert proposal.pricing_state == PricingState.SNAPSHOTTED
        assert all(s.service_id for s in proposal.services)
        assert proposal.total_value == service.get_pricing(proposal.proposal_id).total_final_price
        assert service.repository.get_version_count(proposal.proposal_id) == 1
        assert service.audit.get_trail(proposal.proposal_id)[0]["action"] == "snapshot_created"

    def test_create_without_freezing_rates(self):
        service = ProposalService()
        proposal = service.create_proposal("Acme", [EVENT], freeze_rates=False)

        assert proposal.pricing_snapshot is None
        assert proposal.pricing_state == PricingState.UNPRICED
        assert proposal.total_value > 0

    def test_invalid_service_is_rejected(self):
        service = ProposalService()
        with pytest.raises(InvalidComplexityError):
            service.create_proposal("Acme", [{**CONSULTING, "complexity": "extreme"}])
        assert service.list_proposals() == []

    def test_unknown_proposal(self):
        with pytest.raises(ProposalNotFoundError):
            ProposalService().get_proposal("PROP-MISSING")


class TestRateChanges:
    def test_applied_rates_leave_snapshots_alone(self):
        service = ProposalService()
        frozen = service.create_proposal("Frozen", [CONSULTING])
        live = service.create_proposal("Live", [CONSULTING], freeze_rates=False)

        saved = service.apply_rates(
            service.live_rates().with_changes({"consulting_rates.analyst": 50000})
        )

        assert saved.version == 2
        assert service.get_pricing(frozen.proposal_id).total_final_price == frozen.total_value
        assert service.get_pricing(live.proposal_id).total_final_price > live.total_value
        assert service.audit.get_trail("rates")[-1]["rates_version"] == 2

    def test_edit_reprices_on_same_snapshot(self):
        service = ProposalService()
        proposal = service.create_proposal("Acme", [CONSULTING])
        service.apply_rates(service.live_rates().with_changes({"margin_percentage": 0.5}))

        edited = service.update_services(
            proposal.proposal_id, [{**CONSULTING, "estimated_duration": 12}]
        )

        assert edited.pricing_snapshot == proposal.pricing_snapshot
        assert edited.total_value == pytest.approx(proposal.total_value * 2)
        assert [h["version"] for h in service.history(proposal.proposal_id)] == [1, 2]

    def test_adopt_current_rates(self):
        service = ProposalService()
        proposal = service.create_proposal("Acme", [CONSULTING])
        live = service.apply_rates(service.live_rates().with_changes({"margin_percentage": 0.5}))

        adopted = service.adopt_current_rates(proposal.proposal_id)

        assert adopted.pricing_snapshot.fingerprint == live.fingerprint()
        assert adopted.total_value > proposal.total_value
        actions = [e["action"] for e in service.audit.get_trail(proposal.proposal_id)]
        assert actions == ["snapshot_created", "rates_adopted"]

    def test_simulate_proposal_is_not_saved(self):
        service = ProposalService()
        proposal = service.create_proposal("Acme", [CONSULTING])
        candidate = service.live_rates().with_changes({"overhead_percentage": 0.3})

        simulated = service.simulate_proposal(proposal.proposal_id, candidate)

        assert simulated.total_final_price > proposal.total_value
        assert service.repository.get_version_count(proposal.proposal_id) == 1
        assert service.get_pricing(proposal.proposal_id).total_final_price == proposal.total_value

    def test_impact_counts_frozen_proposals_as_unaffected(self):
        service = ProposalService()
        service.create_proposal("Frozen", [CONSULTING])
        service.create_proposal("Live", [EVENT], freeze_rates=False)

        report = service.impact(
            service.live_rates().with_changes({"event_crew_rates.editor": 1_000_000})
        )

        assert report.unaffected_proposals == 1
        assert len(report.proposal_impacts) == 1
        assert report.difference > 0

    def test_reset_rates(self):
        service = ProposalService()
        service.apply_rates(service.live_rates().with_changes({"margin_percentage": 0.5}))
        reset = service.reset_rates()
        assert reset.margin_percentage == 0.25
        assert reset.version == 3

    def test_apply_rates_to_one_proposal(self):
        service = ProposalService()
        proposal = service.create_proposal("Acme", [CONSULTING])
        candidate = service.live_rates().with_changes({"consulting_rates.consultant": 90000})

        rebound = service.apply_rates_to_proposal(proposal.proposal_id, candidate)

        assert rebound.pricing_snapshot.fingerprint == candidate.fingerprint()
        assert service.get_pricing(proposal.proposal_id).total_final_price == rebound.total_value
        assert rebound.total_value > proposal.total_value
        assert service.live_rates().version == 1
        actions = [e["action"] for e in service.audit.get_trail(proposal.proposal_id)]
        assert actions == ["snapshot_created", "candidate_rates_applied"]


class TestServiceOwnership:
    def test_caller_specs_are_copied(self):
        service = ProposalService()
        spec = ConsultingSpec(service_id="svc-1", estimated_duration=6)
        proposal = service.create_proposal("Acme", [spec])

        spec.estimated_duration = 60

        assert proposal.services[0].estimated_duration == 6
        assert service.get_pricing(proposal.proposal_id).total_final_price == proposal.total_value
