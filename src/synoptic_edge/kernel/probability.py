"""Normal-distribution helpers for turning projections into probabilities."""

from __future__ import annotations

import math

# Chebyshev coefficients for the complementary error function fit
# (Numerical Recipes ``erfcc``), fractional error below 1.2e-7.
_ERFC_COEFFS = (
    -1.26551223,
    1.00002368,
    0.37409196,
    0.09678418,
    -0.18628806,
    0.27886807,
    -1.13520398,
    1.48851587,
    -0.82215223,
    0.17087277,
)


def erf(z: float) -> float:
    t = 1.0 / (1.0 + 0.5 * abs(z))
    poly = 0.0
    for coeff in reversed(_ERFC_COEFFS[1:]):
        poly = t * (coeff + poly)
    ans = 1 - t * math.exp(-z * z + _ERFC_COEFFS[0] + poly)
    return ans if z >= 0 else -ans


def standard_normal_cdf(x: float) -> float:
    return 0.5 * (1.0 + erf(x / math.sqrt(2.0)))


def normal_cdf(x: float, mean: float, std_dev: float) -> float:
    """Return P(X <= x) for X ~ N(mean, std_dev**2).

    A non-positive ``std_dev`` is treated as a point mass at ``mean``.
    """

    if std_dev <= 0:
        return 0.0 if x < mean else 1.0
    return standard_normal_cdf((x - mean) / std_dev)


def over_under_probabilities(line: float, mean: float, std_dev: float) -> tuple[float, float]:
    """Return ``(p_over, p_under)`` for a threshold under a projected outcome."""

    p_under = normal_cdf(line, mean, std_dev)
    return 1 - p_under, p_under
