"""
Rate Table — the versioned set of rates, fees, multipliers and percentages
used to price services (a.k.a. pricing parameters).

Design rules:
  1. A RateTable is an immutable value. Changes produce a new table.
  2. Every rate, fee and percentage is a non-negative finite number;
     bad values are rejected when the table is built.
  3. Multipliers are only required to be finite and non-negative; the
     engine propagates whatever the administrator saved.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from proposal_pricing.utils.hashing import canonical_hash

# Non-negative, finite monetary or percentage value
Amount = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Hourly rates (per professional role) ─────────────────

class ConsultingRates(_FrozenModel):
    senior_manager: Amount = 100000.0
    consultant: Amount = 75000.0
    analyst: Amount = 45000.0
    coordinator: Amount = 60000.0
    trainer: Amount = 50000.0


class CreativeRates(_FrozenModel):
    graphic_designer: Amount = 55000.0
    video_editor: Amount = 60000.0
    videographer: Amount = 85000.0


class TechnologyRates(_FrozenModel):
    web_developer: Amount = 80000.0


# ── Events: flat per crew member per coverage day ────────

class EventCrewRates(_FrozenModel):
    photographer: Amount = 520000.0
    videographer: Amount = 680000.0
    operator: Amount = 544000.0
    sound_technician: Amount = 400000.0
    lighting_technician: Amount = 400000.0
    editor: Amount = 960000.0


class EventExtrasPricing(_FrozenModel):
    """Flat fees, charged once per event."""
    drone: Amount = 150000.0
    slider: Amount = 50000.0
    crane: Amount = 200000.0
    aerial_crane: Amount = 350000.0
    special_lighting: Amount = 120000.0
    multicam_streaming: Amount = 300000.0
    advanced_led_lighting: Amount = 75000.0
    post_production: Amount = 250000.0


# ── Flat fees for creative / technology add-ons ──────────

class CreativeFees(_FrozenModel):
    brand_guidelines: Amount = 250000.0


class TechnologyFees(_FrozenModel):
    payment_integration: Amount = 400000.0
    crm_integration: Amount = 500000.0
    erp_integration: Amount = 800000.0
    maintenance_monthly: Amount = 800000.0


# ── Shared across categories ─────────────────────────────

class ComplexityMultipliers(_FrozenModel):
    low: Amount = 1.0
    medium: Amount = 1.2
    high: Amount = 1.5


class RateTable(_FrozenModel):
    """Immutable bag of scalar pricing parameters."""

    version: int = Field(default=1, ge=1)
    updated_at: Optional[datetime] = None

    consulting_rates: ConsultingRates = Field(default_factory=ConsultingRates)
    creative_rates: CreativeRates = Field(default_factory=CreativeRates)
    technology_rates: TechnologyRates = Field(default_factory=TechnologyRates)
    event_crew_rates: EventCrewRates = Field(default_factory=EventCrewRates)
    event_extras: EventExtrasPricing = Field(default_factory=EventExtrasPricing)
    creative_fees: CreativeFees = Field(default_factory=CreativeFees)
    technology_fees: TechnologyFees = Field(default_factory=TechnologyFees)
    complexity_multipliers: ComplexityMultipliers = Field(default_factory=ComplexityMultipliers)

    half_day_factor: Amount = 0.5
    overhead_percentage: Amount = 0.15
    margin_percentage: Amount = 0.25

    @classmethod
    def defaults(cls) -> RateTable:
        """The table used when no administrator-saved parameters exist."""
        return cls()

    def with_changes(self, changes: dict[str, Any]) -> RateTable:
        """
        Return a new table with the given parameters replaced.

        Keys are dotted paths, e.g. ``"consulting_rates.senior_manager"``
        or ``"margin_percentage"``. The receiver is never modified and the
        result is validated like any freshly built table.
        """
        data = self.model_dump()
        for path, value in changes.items():
            node = data
            parts = path.split(".")
            for part in parts[:-1]:
                if not isinstance(node.get(part), dict):
                    raise ValueError(f"Unknown rate parameter: {path}")
                node = node[part]
            if parts[-1] not in node:
                raise ValueError(f"Unknown rate parameter: {path}")
            node[parts[-1]] = value
        return RateTable.model_validate(data)

    def pricing_fields(self) -> dict[str, Any]:
        """All fields that influence a price (bookkeeping fields excluded)."""
        return self.model_dump(mode="json", exclude={"version", "updated_at"})

    def fingerprint(self) -> str:
        """SHA-256 over the canonical JSON of the pricing fields."""
        return canonical_hash(self.pricing_fields())
