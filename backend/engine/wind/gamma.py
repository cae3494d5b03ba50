"""Polynomial approximation of the gamma function.

The reciprocal gamma function is entire, and its Taylor series around 1,

.. math::

    \\frac{1}{\\Gamma(x)} = \\sum_{n \\ge 0} a_n (x - 1)^n,

converges quickly for ``1 <= x <= 2``.  :func:`gamma_series` evaluates the
truncated series with Horner's rule and takes the reciprocal;
:func:`gamma` first shifts its argument into that interval with the
recurrence ``Gamma(x + 1) = x * Gamma(x)``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

# ---------------------------------------------------------------------------
# Series coefficients (highest order first, constant term last)
# ---------------------------------------------------------------------------
TAYLOR_COEFFICIENTS: tuple[float, ...] = (
    -0.00000000000000000023,  0.00000000000000000141,  0.00000000000000000119,
    -0.00000000000000011813,  0.00000000000000122678, -0.00000000000000534812,
    -0.00000000000002058326,  0.00000000000051003703, -0.00000000000369680562,
    0.00000000000778226344,  0.00000000010434267117, -0.00000000118127457049,
    0.00000000500200764447,  0.00000000611609510448, -0.00000020563384169776,
    0.00000113302723198170, -0.00000125049348214267, -0.00002013485478078824,
    0.00012805028238811619, -0.00021524167411495097, -0.00116516759185906511,
    0.00721894324666309954, -0.00962197152787697356, -0.04219773455554433675,
    0.16653861138229148950, -0.04200263503409523553, -0.65587807152025388108,
    0.57721566490153286061,  1.00000000000000000000,
)

# Horner accumulator seed; acts as the leading coefficient.
INITIAL_SUM: float = 0.00000000000000000002

_POLYNOMIAL: NDArray[np.float64] = np.array((INITIAL_SUM, *TAYLOR_COEFFICIENTS), dtype=np.float64)
_POLYNOMIAL.setflags(write=False)


def gamma_series(x: ArrayLike) -> float | NDArray[np.float64]:
    """Evaluate the truncated reciprocal-gamma series at *x* and invert it.

    Accurate to roughly machine precision for ``1 <= x <= 2``; no input
    checks are made outside that range.

    Parameters
    ----------
    x : float or array-like
        Argument(s) of the gamma function.

    Returns
    -------
    float or ndarray
        Approximation of Gamma(x); a float for scalar input.
    """
    recip = np.polyval(_POLYNOMIAL, np.asarray(x, dtype=np.float64) - 1.0)
    result = 1.0 / recip
    if np.ndim(result) == 0:
        return float(result)
    return result


def gamma(x: float) -> float:
    """Gamma(x) for real scalar *x*, reduced onto ``[1, 2]`` first.

    Above 2 the recurrence ``Gamma(x) = (x - 1) Gamma(x - 1)`` is applied;
    below 1, ``Gamma(x) = Gamma(x + 1) / x``.  Non-positive integers are
    poles and end in a :class:`ZeroDivisionError`.
    """
    x = float(x)
    scale = 1.0

    while x > 2.0:
        x -= 1.0
        scale *= x
    while x < 1.0:
        scale /= x
        x += 1.0

    return scale * gamma_series(x)
