"""
Proposal and its pricing snapshot.

Design rules:
  1. A proposal exclusively owns its snapshot; the snapshot is never mutated.
  2. A proposal without a snapshot is always repriced against the live table.
  3. Only explicit actions (first save, "adopt current rates") set a snapshot.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import PricingState, ProposalStatus
from .rate_table import RateTable
from .service_spec import ServiceSpec


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProposalPricingSnapshot(BaseModel):
    """A RateTable value frozen at the moment a proposal was first priced."""

    model_config = ConfigDict(frozen=True)

    rates: RateTable
    captured_at: datetime = Field(default_factory=_utcnow)
    fingerprint: str = ""


class Proposal(BaseModel):
    proposal_id: str
    client_name: str = ""
    status: ProposalStatus = ProposalStatus.DRAFT
    services: list[ServiceSpec] = []

    # ── Pricing (owner: SnapshotManager) ─────────────────
    pricing_snapshot: Optional[ProposalPricingSnapshot] = None
    pricing_state: PricingState = PricingState.UNPRICED
    total_value: float = 0.0

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def has_snapshot(self) -> bool:
        return self.pricing_snapshot is not None
