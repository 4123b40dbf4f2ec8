"""
Audit Service — records pricing actions on proposals and the live rate table.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


class AuditService:
    """
    Records snapshot creation, repricing, rate adoption and rate saves.
    Keeps entries in memory for the lifetime of the process.
    """

    def __init__(self):
        self._entries: list[dict[str, Any]] = []

    def record(
        self,
        subject_id: str,
        action: str,
        details: str = "",
        rates_version: int = 0,
        fingerprint: str = "",
    ) -> dict[str, Any]:
        """Record an audit entry and return it."""
        entry = {
            "subject_id": subject_id,
            "action": action,
            "details": details,
            "rates_version": rates_version,
            "fingerprint": fingerprint,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._entries.append(entry)
        logger.debug(f"[AUDIT] {subject_id} → {action}: {details}")
        return entry

    def get_trail(self, subject_id: str) -> list[dict[str, Any]]:
        """Return all audit entries for a proposal (or "rates")."""
        return [e for e in self._entries if e["subject_id"] == subject_id]
