"""
Technology calculator — web and systems development.

Effort scales with pages and modules at the web-developer rate; each enabled
integration is a flat fee; maintenance is a monthly fee over the agreed
support period.
"""

from __future__ import annotations

from proposal_pricing.models.enums import ServiceCategory
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import CostBreakdown, LineItem
from proposal_pricing.models.service_spec import TechnologySpec
from proposal_pricing.pricing.calculators.base import CategoryCostCalculator
from proposal_pricing.pricing.conventions import or_default

# (spec flag, fee key, label)
INTEGRATIONS: list[tuple[str, str, str]] = [
    ("has_payment_integration", "payment_integration", "Payment gateway integration"),
    ("has_crm_integration", "crm_integration", "CRM integration"),
    ("has_erp_integration", "erp_integration", "ERP integration"),
]


class TechnologyCalculator(CategoryCostCalculator):
    category = ServiceCategory.TECHNOLOGY

    def compute_base_cost(self, spec: TechnologySpec, rates: RateTable) -> CostBreakdown:
        conv = self.conventions.technology
        developer_rate = rates.technology_rates.web_developer

        pages = or_default(spec.number_of_pages, conv.default_pages)
        modules = or_default(spec.number_of_modules, conv.default_modules)

        items: list[LineItem] = [
            self.line(
                f"Web development: pages ({pages})",
                "web_developer",
                developer_rate,
                pages * conv.hours_per_page,
            ),
            self.line(
                f"Web development: modules ({modules})",
                "web_developer",
                developer_rate,
                modules * conv.hours_per_module,
            ),
        ]

        for flag, fee_key, label in INTEGRATIONS:
            if getattr(spec, flag):
                items.append(self.line(
                    label, fee_key, getattr(rates.technology_fees, fee_key), 1, unit="item",
                ))

        if spec.has_maintenance:
            months = or_default(spec.maintenance_months, conv.default_maintenance_months)
            items.append(self.line(
                f"Support & maintenance ({months} months)",
                "maintenance",
                rates.technology_fees.maintenance_monthly,
                months,
                unit="month",
            ))

        return self.breakdown(items)
