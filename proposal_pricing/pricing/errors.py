"""
Pricing Engine — Errors
=========================
Local-validation failures raised synchronously by the pricing core.

Every one of these is a caller contract violation, not a transient
condition: they are never retried and never converted to a zero price.
"""

from __future__ import annotations

from typing import Any


class PricingError(Exception):
    """Base error for all pricing operations."""
    pass


class UnsupportedCategoryError(PricingError):
    """ServiceSpec tag (or service type) is not a known pricing category."""

    def __init__(self, category: Any, detail: str = ""):
        self.category = category
        message = f"Unsupported service category: {category!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidComplexityError(PricingError):
    """Complexity is outside the low / medium / high enum."""

    def __init__(self, complexity: Any):
        self.complexity = complexity
        super().__init__(
            f"Invalid complexity {complexity!r}, expected one of: low, medium, high"
        )


class MissingRequiredFieldError(PricingError):
    """A category-required field is still undefined after defaulting."""

    def __init__(self, category: str, field_name: str, detail: str = ""):
        self.category = category
        self.field_name = field_name
        message = f"Missing required field '{field_name}' for {category} service"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NegativeCostError(PricingError):
    """A base cost came out negative; refused rather than clamped."""

    def __init__(self, base_cost: float):
        self.base_cost = base_cost
        super().__init__(f"Base cost must not be negative, got {base_cost}")
