"""Level principal-and-interest repayment.

Key formula:
  r = annual_rate / 12,  n = remaining_years × 12
  payment = P × r / (1 − (1+r)^−n)
"""

from __future__ import annotations


def level_payment(principal: float, annual_rate_pct: float, remaining_years: float) -> float:
    """Monthly P&I payment that clears ``principal`` over ``remaining_years``.

    Parameters
    ----------
    principal : float
        Outstanding balance.  ``<= 0`` returns 0.
    annual_rate_pct : float
        Annual rate in percent (5.99 = 5.99 % p.a.).
    remaining_years : float
        Remaining term; may be fractional.

    Returns
    -------
    float
        Payment per month, never negative.  Degenerate terms (zero periods)
        return 0 rather than dividing by zero.
    """
    if principal <= 0:
        return 0.0

    monthly_rate = annual_rate_pct / 100 / 12
    periods = remaining_years * 12

    if monthly_rate == 0:
        return principal / periods if periods > 0 else 0.0

    denominator = 1 - (1 + monthly_rate) ** -periods
    if denominator == 0:
        return 0.0
    return principal * monthly_rate / denominator
