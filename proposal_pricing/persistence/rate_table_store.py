"""
Rate Table Store — the process-wide, administrator-saved live rate table.

Company-level setting: saved by an admin and cached for the process.
Falls back to RateTable.defaults() when nothing has been saved yet.
Uses MongoDB outside mock mode, in-memory storage otherwise.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pymongo import MongoClient

from proposal_pricing.config import get_settings
from proposal_pricing.models.rate_table import RateTable

logger = logging.getLogger(__name__)

_LIVE_DOC_ID = "live"


class RateTableStore:
    """
    Loads the live table from MongoDB (or memory) and caches it.
    Every save produces a new version; older versions are kept for audit.
    """

    def __init__(self):
        self.settings = get_settings()
        self._db: Any = None
        self._cache: RateTable | None = None
        self._history: list[RateTable] = []

    def _get_db(self) -> Any:
        if self.settings.mock_mode:
            return None
        if self._db is None:
            client = MongoClient(self.settings.mongodb_uri)
            self._db = client[self.settings.mongodb_database]
        return self._db

    # ── Read ─────────────────────────────────────────────

    def get_live_rates(self) -> RateTable:
        if self._cache is not None:
            return self._cache

        rates = RateTable.defaults()
        db = self._get_db()
        if db is not None:
            doc = db[self.settings.rates_collection].find_one({"_id": _LIVE_DOC_ID})
            if doc and "rates" in doc:
                rates = RateTable.model_validate(doc["rates"])
        else:
            logger.debug("Using in-memory rate table")

        self._cache = rates
        return rates

    def history(self) -> list[RateTable]:
        """Tables saved during this process, oldest first."""
        return list(self._history)

    # ── Admin write path ─────────────────────────────────

    def save(self, rates: RateTable) -> RateTable:
        """Store `rates` as the new live table under the next version number."""
        current = self.get_live_rates()
        new_rates = RateTable.model_validate({
            **rates.model_dump(),
            "version": current.version + 1,
            "updated_at": datetime.now(timezone.utc),
        })

        db = self._get_db()
        if db is not None:
            db[self.settings.rates_collection].replace_one(
                {"_id": _LIVE_DOC_ID},
                {"_id": _LIVE_DOC_ID, "rates": new_rates.model_dump(mode="json")},
                upsert=True,
            )

        self._history.append(current)
        self._cache = new_rates
        logger.info(
            f"Saved live rate table v{new_rates.version} ({new_rates.fingerprint()[:12]})"
        )
        return new_rates

    def reset_to_defaults(self) -> RateTable:
        """Restore default parameters as a new version."""
        logger.info("Resetting live rate table to defaults")
        return self.save(RateTable.defaults())
