"""
Buckling Coefficient Table (omega method)

Stepwise approximation of the omega(λ) buckling curve for structural rail
steel. Each bucket covers [previous breakpoint, breakpoint). The table is
coarse and is not a substitute for the continuous norm table.
"""

import math
from typing import Tuple

# (upper slenderness bound, ω); the final entry covers λ >= 160
OMEGA_TABLE: Tuple[Tuple[float, float], ...] = (
    (20, 1.04),
    (40, 1.14),
    (60, 1.30),
    (80, 1.55),
    (100, 2.05),
    (120, 2.89),
    (140, 3.93),
    (160, 5.13),
    (math.inf, 6.50),
)


def omega(slenderness: float) -> float:
    """Get buckling coefficient ω for a slenderness ratio λ.

    A value exactly on a breakpoint takes the coefficient of the bucket
    starting there (the larger one).

    Raises:
        ValueError: If slenderness is negative or not finite
    """
    if not math.isfinite(slenderness) or slenderness < 0:
        raise ValueError(f"Slenderness must be a finite non-negative number, got {slenderness}")

    for bound, coefficient in OMEGA_TABLE:
        if slenderness < bound:
            return coefficient
    return OMEGA_TABLE[-1][1]
