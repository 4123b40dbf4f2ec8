"""
API routes — thin HTTP layer that delegates to the pricing engine and
the ProposalService.

Routes:
  GET    /health                                   → API health check
  POST   /api/pricing/price                        → Price one service (live rates)
  POST   /api/pricing/price-many                   → Price several services (live rates)
  POST   /api/pricing/simulate                     → What-if pricing with rate changes
  GET    /api/rates                                → Current live rate table
  PUT    /api/rates                                → Save rate changes as the new live table
  DELETE /api/rates                                → Reset the live table to defaults
  POST   /api/rates/impact                         → Impact of rate changes on live proposals
  POST   /api/proposals                            → Create (and snapshot) a proposal
  GET    /api/proposals                            → List proposals
  GET    /api/proposals/{proposal_id}              → Proposal detail
  PUT    /api/proposals/{proposal_id}/services     → Edit services, reprice on same snapshot
  GET    /api/proposals/{proposal_id}/pricing      → Itemised pricing of a proposal
  POST   /api/proposals/{proposal_id}/adopt-current-rates → Re-snapshot on live rates
  POST   /api/proposals/{proposal_id}/apply-rates  → Re-snapshot on changed rates (live table untouched)
  POST   /api/proposals/{proposal_id}/simulate     → What-if pricing for a proposal
  GET    /api/proposals/{proposal_id}/versions     → Version history
  GET    /api/proposals/{proposal_id}/audit        → Audit trail
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from proposal_pricing.config import get_settings
from proposal_pricing.models.proposal import Proposal
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import ImpactReport, MultiServiceTotal, PricingResult
from proposal_pricing.models.service_spec import parse_service_spec
from proposal_pricing.pricing import engine
from proposal_pricing.services.proposal_service import ProposalNotFoundError, ProposalService

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
pricing_router = APIRouter()
rates_router = APIRouter()
proposals_router = APIRouter()


@lru_cache()
def get_service() -> ProposalService:
    """Process-wide ProposalService (overridable in tests)."""
    return ProposalService()


# ── Request schemas ──────────────────────────────────────
class PriceRequest(BaseModel):
    service: dict[str, Any]


class PriceManyRequest(BaseModel):
    services: list[dict[str, Any]]


class SimulateRequest(BaseModel):
    services: list[dict[str, Any]]
    rate_changes: dict[str, Any] = {}


class RateChangeRequest(BaseModel):
    changes: dict[str, Any] = {}


class CreateProposalRequest(BaseModel):
    client_name: str
    services: list[dict[str, Any]] = []
    freeze_rates: bool = True


class UpdateServicesRequest(BaseModel):
    services: list[dict[str, Any]]


# ── Helpers ──────────────────────────────────────────────

def _candidate(service: ProposalService, changes: dict[str, Any]) -> RateTable:
    try:
        return service.live_rates().with_changes(changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _load(service: ProposalService, proposal_id: str) -> Proposal:
    try:
        return service.get_proposal(proposal_id)
    except ProposalNotFoundError:
        raise HTTPException(status_code=404, detail=f"Proposal {proposal_id} not found")


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.app_name,
        "mock_mode": settings.mock_mode,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Pricing ──────────────────────────────────────────────

@pricing_router.post("/price", response_model=PricingResult)
def price_service(body: PriceRequest, service: ProposalService = Depends(get_service)):
    return engine.price(parse_service_spec(body.service), service.live_rates())


@pricing_router.post("/price-many", response_model=MultiServiceTotal)
def price_services(body: PriceManyRequest, service: ProposalService = Depends(get_service)):
    specs = [parse_service_spec(s) for s in body.services]
    return engine.price_many(specs, service.live_rates())


@pricing_router.post("/simulate", response_model=MultiServiceTotal)
def simulate_services(body: SimulateRequest, service: ProposalService = Depends(get_service)):
    specs = [parse_service_spec(s) for s in body.services]
    return engine.simulate(specs, _candidate(service, body.rate_changes))


# ── Live rate table ──────────────────────────────────────

@rates_router.get("", response_model=RateTable)
def get_rates(service: ProposalService = Depends(get_service)):
    return service.live_rates()


@rates_router.put("", response_model=RateTable)
def update_rates(body: RateChangeRequest, service: ProposalService = Depends(get_service)):
    saved = service.apply_rates(_candidate(service, body.changes))
    logger.info(f"Live rates updated to v{saved.version} ({len(body.changes)} change(s))")
    return saved


@rates_router.delete("", response_model=RateTable)
def reset_rates(service: ProposalService = Depends(get_service)):
    return service.reset_rates()


@rates_router.post("/impact", response_model=ImpactReport)
def rates_impact(body: RateChangeRequest, service: ProposalService = Depends(get_service)):
    return service.impact(_candidate(service, body.changes))


# ── Proposals ────────────────────────────────────────────

@proposals_router.post("", response_model=Proposal, status_code=201)
def create_proposal(body: CreateProposalRequest, service: ProposalService = Depends(get_service)):
    proposal = service.create_proposal(body.client_name, body.services, body.freeze_rates)
    logger.info(f"Created {proposal.proposal_id} for {body.client_name}")
    return proposal


@proposals_router.get("")
def list_proposals(service: ProposalService = Depends(get_service)):
    return [
        {
            "proposal_id": p.proposal_id,
            "client_name": p.client_name,
            "status": p.status,
            "pricing_state": p.pricing_state,
            "total_value": p.total_value,
        }
        for p in service.list_proposals()
    ]


@proposals_router.get("/{proposal_id}", response_model=Proposal)
def get_proposal(proposal_id: str, service: ProposalService = Depends(get_service)):
    return _load(service, proposal_id)


@proposals_router.put("/{proposal_id}/services", response_model=Proposal)
def update_services(
    proposal_id: str,
    body: UpdateServicesRequest,
    service: ProposalService = Depends(get_service),
):
    _load(service, proposal_id)
    return service.update_services(proposal_id, body.services)


@proposals_router.get("/{proposal_id}/pricing", response_model=MultiServiceTotal)
def get_pricing(proposal_id: str, service: ProposalService = Depends(get_service)):
    _load(service, proposal_id)
    return service.get_pricing(proposal_id)


@proposals_router.post("/{proposal_id}/adopt-current-rates", response_model=Proposal)
def adopt_current_rates(proposal_id: str, service: ProposalService = Depends(get_service)):
    _load(service, proposal_id)
    return service.adopt_current_rates(proposal_id)


@proposals_router.post("/{proposal_id}/apply-rates", response_model=Proposal)
def apply_rates_to_proposal(
    proposal_id: str,
    body: RateChangeRequest,
    service: ProposalService = Depends(get_service),
):
    _load(service, proposal_id)
    return service.apply_rates_to_proposal(proposal_id, _candidate(service, body.changes))


@proposals_router.post("/{proposal_id}/simulate", response_model=MultiServiceTotal)
def simulate_proposal(
    proposal_id: str,
    body: RateChangeRequest,
    service: ProposalService = Depends(get_service),
):
    _load(service, proposal_id)
    return service.simulate_proposal(proposal_id, _candidate(service, body.changes))


@proposals_router.get("/{proposal_id}/versions")
def proposal_versions(proposal_id: str, service: ProposalService = Depends(get_service)):
    _load(service, proposal_id)
    return service.history(proposal_id)


@proposals_router.get("/{proposal_id}/audit")
def proposal_audit(proposal_id: str, service: ProposalService = Depends(get_service)):
    _load(service, proposal_id)
    return service.audit.get_trail(proposal_id)
