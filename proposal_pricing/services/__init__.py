"""Services — ProposalService, AuditService."""

from proposal_pricing.services.audit_service import AuditService
from proposal_pricing.services.proposal_service import ProposalNotFoundError, ProposalService

__all__ = ["AuditService", "ProposalService", "ProposalNotFoundError"]
