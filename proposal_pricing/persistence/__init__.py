"""Persistence — RateTableStore, ProposalRepository."""

from proposal_pricing.persistence.rate_table_store import RateTableStore
from proposal_pricing.persistence.proposal_repository import ProposalRepository

__all__ = ["RateTableStore", "ProposalRepository"]
