"""
Tests: RateTable value object.

Run with:
    pytest proposal_pricing/tests/test_rate_table.py -v
"""

import math

import pytest
from pydantic import ValidationError

from proposal_pricing.models.rate_table import RateTable


class TestDefaults:
    def test_default_values(self):
        rates = RateTable.defaults()
        assert rates.version == 1
        assert rates.consulting_rates.senior_manager == 100000
        assert rates.event_crew_rates.photographer == 520000
        assert rates.technology_fees.maintenance_monthly == 800000
        assert rates.complexity_multipliers.medium == 1.2
        assert rates.overhead_percentage == 0.15
        assert rates.margin_percentage == 0.25

    def test_is_frozen(self):
        rates = RateTable.defaults()
        with pytest.raises(ValidationError):
            rates.margin_percentage = 0.5


class TestValidation:
    def test_negative_rate_rejected(self):
        with pytest.raises(ValidationError):
            RateTable.defaults().with_changes({"consulting_rates.consultant": -1})

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            RateTable.defaults().with_changes({"overhead_percentage": math.nan})

    def test_infinite_multiplier_rejected(self):
        with pytest.raises(ValidationError):
            RateTable.defaults().with_changes({"complexity_multipliers.high": math.inf})

    def test_zero_multiplier_allowed(self):
        rates = RateTable.defaults().with_changes({"complexity_multipliers.low": 0})
        assert rates.complexity_multipliers.low == 0


class TestWithChanges:
    def test_returns_new_table(self):
        original = RateTable.defaults()
        changed = original.with_changes({"margin_percentage": 0.3})
        assert changed.margin_percentage == 0.3
        assert original.margin_percentage == 0.25

    def test_nested_path(self):
        changed = RateTable.defaults().with_changes({"event_extras.drone": 175000})
        assert changed.event_extras.drone == 175000
        assert changed.event_extras.crane == 200000

    def test_unknown_parameter(self):
        with pytest.raises(ValueError, match="Unknown rate parameter"):
            RateTable.defaults().with_changes({"consulting_rates.astronaut": 1})

    def test_unknown_group(self):
        with pytest.raises(ValueError, match="Unknown rate parameter"):
            RateTable.defaults().with_changes({"space_rates.astronaut": 1})


class TestFingerprint:
    def test_equal_tables_share_fingerprint(self):
        assert RateTable.defaults().fingerprint() == RateTable.defaults().fingerprint()

    def test_bookkeeping_fields_ignored(self):
        a = RateTable.defaults()
        b = a.with_changes({"version": 7})
        assert a.fingerprint() == b.fingerprint()

    def test_rate_change_changes_fingerprint(self):
        a = RateTable.defaults()
        b = a.with_changes({"creative_rates.graphic_designer": 56000})
        assert a.fingerprint() != b.fingerprint()
        assert len(a.fingerprint()) == 64
