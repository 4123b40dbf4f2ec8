"""
Base calculator class that every category calculator inherits.

Design:
  - `compute_base_cost()` is the single abstract method, one per category.
  - Calculators are pure: no I/O, no shared state, deterministic for a
    given (spec, rates) pair.
  - Subclasses only read fields of their own category's spec.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from proposal_pricing.models.enums import ServiceCategory
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import CostBreakdown, LineItem
from proposal_pricing.pricing.conventions import DEFAULT_CONVENTIONS, PricingConventions
from proposal_pricing.pricing.errors import MissingRequiredFieldError


class CategoryCostCalculator(ABC):
    """Abstract base for the four category calculators."""

    category: ServiceCategory  # set in each subclass

    def __init__(self, conventions: PricingConventions = DEFAULT_CONVENTIONS):
        self.conventions = conventions

    @abstractmethod
    def compute_base_cost(self, spec, rates: RateTable) -> CostBreakdown:
        """Turn one spec into ordered line items and a base cost."""
        ...

    # ── Helpers shared by subclasses ─────────────────────

    def duration_in_months(self, spec) -> float:
        if spec.estimated_duration is None:
            raise MissingRequiredFieldError(self.category.value, "estimated_duration")
        unit = getattr(spec.duration_unit, "value", spec.duration_unit)
        return spec.estimated_duration * self.conventions.months_per_unit[unit]

    @staticmethod
    def line(
        label: str,
        role: str,
        unit_rate: float,
        quantity: float,
        unit: str = "hour",
    ) -> LineItem:
        return LineItem(
            label=label,
            role=role,
            unit_rate=unit_rate,
            quantity=quantity,
            unit=unit,
            subtotal=unit_rate * quantity,
        )

    @staticmethod
    def breakdown(line_items: list[LineItem]) -> CostBreakdown:
        """Sum line items in order; only hourly lines count towards hours."""
        base_cost = 0.0
        total_hours = 0.0
        for item in line_items:
            base_cost += item.subtotal
            if item.unit == "hour":
                total_hours += item.quantity
        return CostBreakdown(
            line_items=line_items,
            base_cost=base_cost,
            total_hours=total_hours,
        )
