"""
Events calculator — photography, video coverage, streaming, sound & light.

Not hourly: each staffed technical role is billed at a flat crew rate per
coverage day, equipment extras are flat once per event, and post-production
is a flat add-on.
"""

from __future__ import annotations

from proposal_pricing.models.enums import CoverageDuration, ServiceCategory
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import CostBreakdown, LineItem
from proposal_pricing.models.service_spec import EventsSpec
from proposal_pricing.pricing.calculators.base import CategoryCostCalculator
from proposal_pricing.pricing.errors import MissingRequiredFieldError

# (staffing field, crew rate key, label)
CREW_ROLES: list[tuple[str, str, str]] = [
    ("photographers", "photographer", "Photographer"),
    ("videographers", "videographer", "Videographer"),
    ("operators", "operator", "Camera Operator"),
    ("sound_technicians", "sound_technician", "Sound Technician"),
    ("lighting_technicians", "lighting_technician", "Lighting Technician"),
    ("editors", "editor", "Video Editor"),
]

# (extras flag / fee key, label)
EQUIPMENT_EXTRAS: list[tuple[str, str]] = [
    ("drone", "Drone (aerial coverage)"),
    ("slider", "Camera slider"),
    ("crane", "Camera crane"),
    ("aerial_crane", "Aerial crane"),
    ("special_lighting", "Special lighting"),
    ("multicam_streaming", "Multi-camera streaming"),
    ("advanced_led_lighting", "Advanced LED lighting"),
]


class EventsCalculator(CategoryCostCalculator):
    category = ServiceCategory.EVENTS

    def compute_base_cost(self, spec: EventsSpec, rates: RateTable) -> CostBreakdown:
        days = self.coverage_factor(spec, rates)
        items: list[LineItem] = []

        for staffing_field, role, label in CREW_ROLES:
            count = getattr(spec.staffing, staffing_field)
            if count > 0:
                items.append(self.line(
                    f"{label} ({count})",
                    role,
                    getattr(rates.event_crew_rates, role),
                    count * days,
                    unit="crew_day",
                ))

        for flag, label in EQUIPMENT_EXTRAS:
            if getattr(spec.extras, flag):
                items.append(self.line(
                    label, flag, getattr(rates.event_extras, flag), 1, unit="item",
                ))

        if spec.includes_post_production:
            items.append(self.line(
                "Post-production",
                "post_production",
                rates.event_extras.post_production,
                1,
                unit="item",
            ))

        return self.breakdown(items)

    def coverage_factor(self, spec: EventsSpec, rates: RateTable) -> float:
        """Billable coverage days for crew lines."""
        if spec.coverage_duration == CoverageDuration.HALF_DAY:
            return rates.half_day_factor
        if spec.coverage_duration == CoverageDuration.MULTI_DAY:
            if not spec.event_days:
                raise MissingRequiredFieldError(
                    self.category.value,
                    "event_days",
                    "multi-day coverage needs the number of event days",
                )
            return spec.event_days
        return 1
