"""
Consulting calculator — hourly-staffed PMO / advisory engagements.

The team is derived from convention (senior manager, consultants, analysts,
local coordinators, optional trainer); the user only supplies duration,
complexity, locations and deliverables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from proposal_pricing.models.enums import ServiceCategory, ServiceType
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import CostBreakdown
from proposal_pricing.models.service_spec import ConsultingSpec
from proposal_pricing.pricing.calculators.base import CategoryCostCalculator
from proposal_pricing.pricing.conventions import coerce_complexity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamMember:
    label: str
    role: str
    hourly_rate: float
    monthly_hours: float
    dedication: float  # 0-1


class ConsultingCalculator(CategoryCostCalculator):
    category = ServiceCategory.CONSULTING

    def compute_base_cost(self, spec: ConsultingSpec, rates: RateTable) -> CostBreakdown:
        months = self.duration_in_months(spec)
        team = self.compose_team(spec, rates, months)

        items = [
            self.line(
                member.label,
                member.role,
                member.hourly_rate,
                member.monthly_hours * member.dedication * months,
            )
            for member in team
        ]
        logger.debug(f"Consulting team of {len(team)} over {months} months")
        return self.breakdown(items)

    def compose_team(
        self, spec: ConsultingSpec, rates: RateTable, months: float
    ) -> list[TeamMember]:
        conv = self.conventions.consulting
        complexity = coerce_complexity(spec.complexity).value
        hourly = rates.consulting_rates
        team: list[TeamMember] = []

        # Always one senior manager
        team.append(TeamMember(
            label="Senior Manager",
            role="senior_manager",
            hourly_rate=hourly.senior_manager,
            monthly_hours=conv.senior_manager_hours[complexity],
            dedication=conv.senior_manager_dedication,
        ))

        for i in range(conv.consultant_count[complexity]):
            team.append(TeamMember(
                label=f"Consultant {i + 1}",
                role="consultant",
                hourly_rate=hourly.consultant,
                monthly_hours=conv.hours_per_month,
                dedication=conv.consultant_dedication,
            ))

        for i in range(conv.analyst_count):
            team.append(TeamMember(
                label=f"Analyst {i + 1}",
                role="analyst",
                hourly_rate=hourly.analyst,
                monthly_hours=conv.hours_per_month,
                dedication=conv.analyst_dedication,
            ))

        for index, location in enumerate(spec.locations):
            team.append(TeamMember(
                label=f"Local Coordinator ({location or f'Location {index + 1}'})",
                role="coordinator",
                hourly_rate=hourly.coordinator,
                monthly_hours=conv.hours_per_month,
                dedication=conv.coordinator_dedication,
            ))

        if (
            spec.includes_training
            or spec.service_type == ServiceType.TRAINING
            or "training" in spec.deliverables
        ):
            team.append(TeamMember(
                label="Trainer",
                role="trainer",
                hourly_rate=hourly.trainer,
                monthly_hours=conv.hours_per_month,
                dedication=conv.trainer_dedication,
            ))

        if months > conv.min_team_after_months:
            while len(team) < conv.min_team_size:
                team.append(TeamMember(
                    label="Additional Consultant",
                    role="consultant",
                    hourly_rate=hourly.consultant,
                    monthly_hours=conv.hours_per_month,
                    dedication=conv.additional_consultant_dedication,
                ))

        return team
