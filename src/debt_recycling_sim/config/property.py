"""Property value inputs."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from debt_recycling_sim.config.base import MAX_AMOUNT, MAX_RATE_PCT, SectionConfig


class PropertyConfig(SectionConfig):
    """Owner-occupied home — valued the same under both strategies."""

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {
        "home_value_start": MAX_AMOUNT,
        "home_value_growth_pct": MAX_RATE_PCT,
    }

    home_value_start: float = Field(default=900_000.0, description="Current market value of the home ($)")
    home_value_growth_pct: float = Field(
        default=3.0,
        description="Expected long-run property growth, % p.a. (compounded yearly).",
    )
