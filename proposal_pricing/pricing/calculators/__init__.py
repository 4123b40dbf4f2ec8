"""Category calculators and the tag → calculator registry."""

from __future__ import annotations

from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import CostBreakdown
from proposal_pricing.pricing.errors import UnsupportedCategoryError

from .base import CategoryCostCalculator
from .consulting import ConsultingCalculator
from .events import EventsCalculator
from .creative import CreativeCalculator
from .technology import TechnologyCalculator

CALCULATORS: dict[str, CategoryCostCalculator] = {
    calc.category.value: calc
    for calc in (
        ConsultingCalculator(),
        EventsCalculator(),
        CreativeCalculator(),
        TechnologyCalculator(),
    )
}


def get_calculator(category) -> CategoryCostCalculator:
    """Look up the calculator for a category tag; unknown tags are a hard error."""
    calculator = CALCULATORS.get(getattr(category, "value", category))
    if calculator is None:
        raise UnsupportedCategoryError(category)
    return calculator


def compute_base_cost(spec, rates: RateTable) -> CostBreakdown:
    """Dispatch one spec to its category calculator."""
    return get_calculator(getattr(spec, "category", None)).compute_base_cost(spec, rates)


__all__ = [
    "CategoryCostCalculator",
    "ConsultingCalculator",
    "EventsCalculator",
    "CreativeCalculator",
    "TechnologyCalculator",
    "CALCULATORS",
    "get_calculator",
    "compute_base_cost",
]
