"""
Tests: Pricing engine facade and proposal rate snapshots.

Run with:
    pytest proposal_pricing/tests/test_snapshots.py -v
"""

from proposal_pricing.models.enums import PricingState
from proposal_pricing.models.proposal import Proposal
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import MultiServiceTotal, PricingResult
from proposal_pricing.models.service_spec import ConsultingSpec, EventsSpec
from proposal_pricing.persistence.rate_table_store import RateTableStore
from proposal_pricing.pricing import engine
from proposal_pricing.pricing.snapshots import SnapshotManager


def _proposal() -> Proposal:
    return Proposal(
        proposal_id="PROP-TEST",
        client_name="Acme",
        services=[
            ConsultingSpec(service_id="svc-1", complexity="medium", estimated_duration=6),
            EventsSpec(
                service_id="svc-2",
                coverage_duration="multi_day",
                event_days=3,
                staffing={"photographers": 2},
            ),
        ],
    )


class TestEngine:
    def test_price_consulting_example(self):
        rates = RateTable.defaults()
        result = engine.price(
            ConsultingSpec(service_id="c1", complexity="medium", estimated_duration=6), rates
        )

        base = 121_200_000
        adjusted = base * 1.2
        overhead = adjusted * 0.15
        margin = (adjusted + overhead) * 0.25
        assert result.service_id == "c1"
        assert result.category == "consulting"
        assert result.base_cost == base
        assert result.final_price == adjusted + overhead + margin

    def test_price_many_total_equals_sum(self):
        rates = RateTable.defaults()
        specs = _proposal().services
        total = engine.price_many(specs, rates)
        assert total.total_final_price == sum(engine.price(s, rates).final_price for s in specs)

    def test_snapshot_copies_by_value(self):
        rates = RateTable.defaults()
        snap = engine.snapshot(rates)
        assert snap.rates == rates
        assert snap.rates is not rates
        assert snap.fingerprint == rates.fingerprint()


class TestSnapshotManager:
    def test_first_save_snapshots_live_rates(self):
        store = RateTableStore()
        manager = SnapshotManager(store)

        proposal = manager.ensure_snapshot(_proposal())

        assert proposal.pricing_state == PricingState.SNAPSHOTTED
        assert proposal.pricing_snapshot.fingerprint == store.get_live_rates().fingerprint()
        assert proposal.total_value == manager.price_proposal(proposal).total_final_price

    def test_ensure_snapshot_keeps_existing(self):
        store = RateTableStore()
        manager = SnapshotManager(store)
        proposal = manager.ensure_snapshot(_proposal())

        store.save(store.get_live_rates().with_changes({"margin_percentage": 0.4}))
        again = manager.ensure_snapshot(proposal)

        assert again.pricing_snapshot == proposal.pricing_snapshot

    def test_resolve_is_idempotent(self):
        manager = SnapshotManager(RateTableStore())
        proposal = manager.ensure_snapshot(_proposal())

        first = manager.resolve_rates_for_pricing(proposal)
        second = manager.resolve_rates_for_pricing(proposal)
        assert first == second
        assert first.fingerprint() == second.fingerprint()

    def test_live_rate_change_does_not_move_snapshotted_price(self):
        store = RateTableStore()
        manager = SnapshotManager(store)
        proposal = manager.ensure_snapshot(_proposal())
        before = manager.price_proposal(proposal).total_final_price

        store.save(store.get_live_rates().with_changes({
            "consulting_rates.senior_manager": 150000,
            "event_crew_rates.photographer": 600000,
        }))

        assert manager.price_proposal(proposal).total_final_price == before

    def test_unsnapshotted_proposal_follows_live_rates(self):
        store = RateTableStore()
        manager = SnapshotManager(store)
        proposal = _proposal()
        before = manager.price_proposal(proposal).total_final_price

        store.save(store.get_live_rates().with_changes({"margin_percentage": 0.3}))

        assert manager.price_proposal(proposal).total_final_price > before

    def test_simulate_does_not_touch_snapshot(self):
        store = RateTableStore()
        manager = SnapshotManager(store)
        proposal = manager.ensure_snapshot(_proposal())
        original = manager.price_proposal(proposal).total_final_price
        candidate = proposal.pricing_snapshot.rates.with_changes({"overhead_percentage": 0.2})

        simulated = manager.simulate(proposal, candidate)

        assert isinstance(simulated, MultiServiceTotal)
        assert simulated.total_final_price != original
        assert manager.price_proposal(proposal).total_final_price == original

    def test_simulate_single_spec(self):
        manager = SnapshotManager(RateTableStore())
        spec = _proposal().services[1]
        candidate = RateTable.defaults().with_changes({"event_crew_rates.photographer": 1})

        result = manager.simulate(spec, candidate)

        assert isinstance(result, PricingResult)
        assert result.base_cost == 2 * 1 * 3

    def test_adopt_current_rates_resnapshots(self):
        store = RateTableStore()
        manager = SnapshotManager(store)
        proposal = manager.ensure_snapshot(_proposal())
        new_live = store.save(store.get_live_rates().with_changes({"margin_percentage": 0.3}))

        adopted = manager.adopt_current_rates(proposal)

        assert adopted.pricing_snapshot.fingerprint == new_live.fingerprint()
        assert adopted.pricing_snapshot.rates.version == new_live.version
        assert adopted.total_value > proposal.total_value
        # the original value object is untouched
        assert proposal.pricing_snapshot.rates.margin_percentage == 0.25

    def test_snapshotted_proposal_does_not_share_services(self):
        manager = SnapshotManager(RateTableStore())
        original = _proposal()
        snapped = manager.ensure_snapshot(original)

        original.services.append(ConsultingSpec(estimated_duration=12))
        original.services[0].estimated_duration = 24

        assert len(snapped.services) == 2
        assert snapped.services[0].estimated_duration == 6
        assert manager.price_proposal(snapped).total_final_price == snapped.total_value

    def test_apply_and_resnapshot_binds_candidate_rates(self):
        store = RateTableStore()
        manager = SnapshotManager(store)
        proposal = manager.ensure_snapshot(_proposal())
        candidate = proposal.pricing_snapshot.rates.with_changes({
            "consulting_rates.analyst": 50000,
            "event_crew_rates.photographer": 600000,
        })

        rebound = manager.apply_and_resnapshot(proposal, candidate)

        assert rebound.has_snapshot
        assert rebound.pricing_snapshot.fingerprint == candidate.fingerprint()
        assert rebound.total_value == engine.price_many(rebound.services, candidate).total_final_price
        assert rebound.total_value > proposal.total_value
        # the input proposal keeps its snapshot and the live table is untouched
        assert proposal.pricing_snapshot.fingerprint == RateTable.defaults().fingerprint()
        assert store.get_live_rates().fingerprint() == RateTable.defaults().fingerprint()
