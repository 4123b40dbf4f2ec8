"""
Pricing Conventions — category rules that are configuration, not user input:
team composition, hour norms, duration conversion and the minimums applied
when a form leaves an optional quantity empty.

Changing a convention changes prices; RateTable snapshots only freeze rates,
so conventions are versioned with the code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from proposal_pricing.models.enums import Complexity, DurationUnit
from proposal_pricing.pricing.errors import InvalidComplexityError


class _Conventions(BaseModel):
    model_config = ConfigDict(frozen=True)


class ConsultingConventions(_Conventions):
    hours_per_month: float = 160.0

    # Senior manager: base monthly hours by complexity, fixed dedication
    senior_manager_hours: dict[str, float] = {"low": 80.0, "medium": 80.0, "high": 160.0}
    senior_manager_dedication: float = 0.5

    consultant_count: dict[str, int] = {"low": 1, "medium": 1, "high": 2}
    consultant_dedication: float = 0.75

    analyst_count: int = 1
    analyst_dedication: float = 1.0

    coordinator_dedication: float = 0.5  # one coordinator per location
    trainer_dedication: float = 0.25

    # Projects longer than this need at least `min_team_size` profiles
    min_team_after_months: float = 3.0
    min_team_size: int = 3
    additional_consultant_dedication: float = 0.5


class CreativeConventions(_Conventions):
    hours_per_concept: float = 16.0
    hours_per_revision: float = 4.0
    default_concepts: int = 1
    default_revisions: int = 1


class TechnologyConventions(_Conventions):
    hours_per_page: float = 8.0
    hours_per_module: float = 40.0
    default_pages: int = 5
    default_modules: int = 3
    default_maintenance_months: int = 6


class PricingConventions(_Conventions):
    months_per_unit: dict[str, float] = {
        DurationUnit.MONTHS.value: 1.0,
        DurationUnit.WEEKS.value: 0.25,
        DurationUnit.DAYS.value: 0.05,  # 20 working days per month
    }
    consulting: ConsultingConventions = ConsultingConventions()
    creative: CreativeConventions = CreativeConventions()
    technology: TechnologyConventions = TechnologyConventions()


DEFAULT_CONVENTIONS = PricingConventions()


def coerce_complexity(value: Any) -> Complexity:
    """Return the Complexity member for `value` or raise InvalidComplexityError."""
    try:
        return Complexity(getattr(value, "value", value))
    except ValueError:
        raise InvalidComplexityError(value) from None


def or_default(value: int | None, default: int) -> int:
    """Empty form quantities (None or 0) fall back to the documented minimum."""
    return value if value else default
