"""Shared base for every config section — lenient numeric coercion."""

from __future__ import annotations

import math
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

# Caps that keep 100 years of compounding inside float range.
MAX_AMOUNT = 1e12
MAX_RATE_PCT = 1_000.0
MAX_TERM_YEARS = 100.0


def coerce_non_negative(value: Any) -> float:
    """Parse ``value`` as a float.

    Unparseable, non-finite (NaN, ±inf) and negative inputs all become 0.
    """
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class SectionConfig(BaseModel):
    """Frozen config section whose numeric fields never fail validation.

    Out-of-range numbers are coerced instead of rejected so that the engine
    is a total function over its input domain.  Unknown keys are still an
    error — they indicate a malformed request, not a bad number.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    UPPER_BOUNDS: ClassVar[dict[str, float]] = {}
    """Per-field caps applied after coercion (e.g. percentages ≤ 100)."""

    @field_validator("*", mode="before")
    @classmethod
    def _sanitize_number(cls, value: Any, info: ValidationInfo) -> float | int:
        number = coerce_non_negative(value)
        upper = cls.UPPER_BOUNDS.get(info.field_name)
        if upper is not None:
            number = min(number, upper)
        if cls.model_fields[info.field_name].annotation in (int, "int"):
            return int(number)
        return number
