"""
Creative calculator — graphic design, branding, digital marketing, video editing.

Concepts and revisions are converted to production hours at the rate of the
role doing the work; brand guidelines are a flat fee. Deliverable formats
do not affect the price.
"""

from __future__ import annotations

from proposal_pricing.models.enums import ServiceCategory, ServiceType
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import CostBreakdown
from proposal_pricing.models.service_spec import CreativeSpec
from proposal_pricing.pricing.calculators.base import CategoryCostCalculator
from proposal_pricing.pricing.conventions import or_default


class CreativeCalculator(CategoryCostCalculator):
    category = ServiceCategory.CREATIVE

    def compute_base_cost(self, spec: CreativeSpec, rates: RateTable) -> CostBreakdown:
        conv = self.conventions.creative
        role, label, rate = self.production_role(spec, rates)

        concepts = or_default(spec.number_of_concepts, conv.default_concepts)
        revisions = or_default(spec.number_of_revisions, conv.default_revisions)

        items = [
            self.line(
                f"{label}: concepts ({concepts})",
                role,
                rate,
                concepts * conv.hours_per_concept,
            ),
            self.line(
                f"{label}: revisions ({revisions})",
                role,
                rate,
                revisions * conv.hours_per_revision,
            ),
        ]

        if spec.includes_brand_guidelines:
            items.append(self.line(
                "Brand guidelines",
                "brand_guidelines",
                rates.creative_fees.brand_guidelines,
                1,
                unit="item",
            ))

        return self.breakdown(items)

    @staticmethod
    def production_role(spec: CreativeSpec, rates: RateTable) -> tuple[str, str, float]:
        if spec.service_type == ServiceType.VIDEO_EDITING:
            return "video_editor", "Video Editor", rates.creative_rates.video_editor
        return "graphic_designer", "Graphic Designer", rates.creative_rates.graphic_designer
