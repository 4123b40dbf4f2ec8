"""
Proposal Pricing Engine — Main Entry Point

Price a JSON file of services (CLI):
    python -m proposal_pricing path/to/services.json

The file holds either a list of service objects or {"services": [...]}.

Run as an API server:
    python -m proposal_pricing --serve
    # or: uvicorn proposal_pricing.api:app --reload --port 8000

Or import and run programmatically:
    from proposal_pricing.main import run
    total = run("path/to/services.json")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from proposal_pricing.config import get_settings
from proposal_pricing.models.rate_table import RateTable
from proposal_pricing.models.schemas import MultiServiceTotal
from proposal_pricing.models.service_spec import parse_service_spec
from proposal_pricing.persistence.rate_table_store import RateTableStore
from proposal_pricing.pricing import engine
from proposal_pricing.utils.logger import setup_logging


def run(file_path: str) -> MultiServiceTotal:
    """Price every service in `file_path` against the live rate table."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    mode = "MOCK" if settings.mock_mode else "MONGODB"
    logger.info("=" * 60)
    logger.info("  PROPOSAL PRICING ENGINE")
    logger.info(f"  Mode: {mode} | Started: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    payload = json.loads(Path(file_path).read_text(encoding="utf-8"))
    raw_services = payload.get("services", []) if isinstance(payload, dict) else payload
    specs = [parse_service_spec(item) for item in raw_services]

    rates = RateTableStore().get_live_rates()
    total = engine.price_many(specs, rates)

    _print_summary(total, rates, settings.currency)
    return total


def _print_summary(total: MultiServiceTotal, rates: RateTable, currency: str) -> None:
    """Print a human-readable summary of the priced services."""
    logger = logging.getLogger(__name__)

    logger.info("")
    logger.info("-" * 60)
    logger.info("  PRICING SUMMARY")
    logger.info("-" * 60)
    logger.info(f"  Rates:          v{rates.version} ({rates.fingerprint()[:16]}...)")
    logger.info(f"  Services:       {len(total.services)}")

    for result in total.services:
        logger.info(
            f"    {result.service_id or '-'} | {result.category} | "
            f"{result.complexity} | base {result.base_cost:,.2f} → "
            f"{result.final_price:,.2f} {currency}"
        )

    logger.info(f"  Total Hours:    {total.total_hours:,.1f}")
    logger.info(f"  Base Cost:      {total.total_base_cost:,.2f} {currency}")
    logger.info(f"  Overhead:       {total.total_overhead:,.2f} {currency}")
    logger.info(f"  Margin:         {total.total_margin:,.2f} {currency}")
    logger.info(f"  Total Price:    {total.total_final_price:,.2f} {currency}")
    logger.info("-" * 60)
    logger.info("")


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("proposal_pricing.api:app", host=host, port=port, reload=get_settings().debug)


def cli() -> None:
    if "--serve" in sys.argv:
        serve()
    elif len(sys.argv) > 1:
        run(sys.argv[1])
    else:
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    cli()
