"""Personal tax inputs."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from debt_recycling_sim.config.base import SectionConfig


class TaxConfig(SectionConfig):
    """Marginal rate applied to investment income, deductions and CGT."""

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {"marginal_tax_rate_pct": 100.0}

    marginal_tax_rate_pct: float = Field(
        default=39.0,
        description="Marginal tax rate including Medicare levy, % (0–100).",
    )
