"""
Pricing output schemas — the category-agnostic shapes every calculator,
aggregator and consumer (PDF, email, dashboard) agrees on.
All monetary values are plain numbers in the base monetary unit.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel

from .enums import ServiceType


# ── Per-service ──────────────────────────────────────────


class LineItem(BaseModel):
    """One priced role, crew, equipment or fee line."""
    label: str
    role: str  # stable key, e.g. "senior_manager", "drone"
    unit_rate: float
    quantity: float
    unit: str = "hour"  # "hour" | "crew_day" | "item" | "month"
    subtotal: float


class CostBreakdown(BaseModel):
    """Calculator output, before complexity / overhead / margin."""
    line_items: list[LineItem] = []
    base_cost: float = 0.0
    total_hours: float = 0.0


class PricingResult(BaseModel):
    service_id: str = ""
    service_type: Optional[ServiceType] = None
    category: str = ""
    complexity: str = ""
    line_items: list[LineItem] = []
    total_hours: float = 0.0
    base_cost: float = 0.0
    complexity_multiplier: float = 1.0
    adjusted_cost: float = 0.0
    overhead: float = 0.0
    margin: float = 0.0
    final_price: float = 0.0


# ── Proposal level ───────────────────────────────────────


class MultiServiceTotal(BaseModel):
    services: list[PricingResult] = []
    total_base_cost: float = 0.0
    total_adjusted_cost: float = 0.0
    total_overhead: float = 0.0
    total_margin: float = 0.0
    total_final_price: float = 0.0
    total_hours: float = 0.0
    total_line_items: int = 0


# ── Impact analysis ──────────────────────────────────────


class ProposalImpact(BaseModel):
    proposal_id: str
    client_name: str = ""
    current_value: float = 0.0
    simulated_value: float = 0.0
    difference: float = 0.0
    percent_change: float = 0.0


class ImpactReport(BaseModel):
    proposal_impacts: list[ProposalImpact] = []
    total_current_value: float = 0.0
    total_simulated_value: float = 0.0
    difference: float = 0.0
    percent_change: float = 0.0
    unaffected_proposals: int = 0  # carry their own snapshot
