"""
Proposal Repository — persistence layer for proposals.
Handles save, load and version history.

The pricing snapshot is embedded in the proposal document, so a snapshot
can only ever be written together with the proposal that owns it.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from proposal_pricing.models.proposal import Proposal

logger = logging.getLogger(__name__)


class ProposalRepository:
    """
    Save/load proposals. Each save appends a new version (append-only for
    audit); uses an in-memory dict.
    """

    def __init__(self):
        self._memory_store: dict[str, list[dict[str, Any]]] = {}

    def save(self, proposal: Proposal) -> int:
        """Save a proposal version and return its version number."""
        versions = self._memory_store.setdefault(proposal.proposal_id, [])
        version = len(versions) + 1
        document = proposal.model_dump(mode="json")
        document["_version"] = version
        versions.append(document)
        logger.info(f"Saved proposal v{version} for {proposal.proposal_id}")
        return version

    def load(self, proposal_id: str, version: int | None = None) -> Proposal | None:
        """
        Load the latest (or a specific version) of a proposal.
        Returns None if not found.
        """
        versions = self._memory_store.get(proposal_id, [])
        if not versions:
            return None
        if version is not None:
            matches = [d for d in versions if d.get("_version") == version]
            return self._hydrate(matches[0]) if matches else None
        return self._hydrate(versions[-1])

    def list_ids(self) -> list[str]:
        """List all proposal IDs in the store."""
        return list(self._memory_store.keys())

    def list_latest(self) -> list[Proposal]:
        return [self._hydrate(versions[-1]) for versions in self._memory_store.values()]

    def history(self, proposal_id: str) -> list[dict[str, Any]]:
        """Version summaries (number, timestamp, value) for one proposal."""
        return [
            {
                "version": d["_version"],
                "updated_at": d.get("updated_at"),
                "total_value": d.get("total_value", 0.0),
                "snapshot_fingerprint": (d.get("pricing_snapshot") or {}).get("fingerprint", ""),
            }
            for d in self._memory_store.get(proposal_id, [])
        ]

    def get_version_count(self, proposal_id: str) -> int:
        return len(self._memory_store.get(proposal_id, []))

    @staticmethod
    def _hydrate(document: dict[str, Any]) -> Proposal:
        data = deepcopy(document)
        data.pop("_version", None)
        return Proposal.model_validate(data)
