"""Weibull parameter estimation from measured wind speeds.

The shape factor *k* is the root of the moment-matching characteristic
equation

.. math::

    f(k) = \\frac{\\overline{v^3}}{\\bar{v}^3}\\,
           \\Gamma\\!\\left(1 + \\frac{1}{k}\\right)^3
           - \\Gamma\\!\\left(1 + \\frac{3}{k}\\right)

located with a bracketing search, and the scale factor *c* follows from
*k* and the mean wind speed (Justus, 1978):

.. math::

    c = \\bar{v}\\,\\left(0.586 + \\frac{0.433}{k}\\right)^{-1/k}
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from functools import partial

import numpy as np
from numpy.typing import ArrayLike, NDArray

from engine.wind.errors import (
    EmptySampleError,
    InvalidSampleError,
    NoSignChangeError,
    NotConvergedError,
)
from engine.wind.gamma import gamma
from engine.wind.sorting import median

logger = logging.getLogger(__name__)

# Default search parameters.
DEFAULT_KMIN: float = 1.0
DEFAULT_KMAX: float = 8.0
DEFAULT_TOLERANCE: float = 1e-6
DEFAULT_MAX_ITER: int = 50


# ======================================================================
# Result types
# ======================================================================

class RootStatus(str, enum.Enum):
    CONVERGED = "converged"
    NO_SIGN_CHANGE = "no_sign_change"
    NOT_CONVERGED = "not_converged"


@dataclass(frozen=True)
class RootResult:
    """Outcome of a bracketing root search.

    ``root`` is set only when ``status`` is :attr:`RootStatus.CONVERGED`.
    ``lower`` and ``upper`` hold the bracket as it stood when the search
    stopped.
    """

    status: RootStatus
    root: float | None
    iterations: int
    lower: float
    upper: float

    @property
    def converged(self) -> bool:
        return self.status is RootStatus.CONVERGED


@dataclass(frozen=True)
class WeibullFit:
    """Estimated Weibull parameters and the sample statistics behind them."""

    k: float  # shape factor (dimensionless)
    c: float  # scale factor (m/s)
    mean: float  # mean wind speed (m/s)
    median: float  # median wind speed (m/s)
    iterations: int  # root-finder iterations spent on k

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


# ======================================================================
# Characteristic equation
# ======================================================================

def moment_ratio(wind_speeds: ArrayLike) -> float:
    """Ratio of the third raw moment to the cubed mean, ``mean(v^3) / mean(v)^3``.

    NaN or inf when the mean is zero or the moments overflow float64.
    """
    ws = np.asarray(wind_speeds, dtype=np.float64)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        m1 = np.mean(ws)
        m3 = np.mean(ws ** 3)
        return float(m3 / (m1 * m1 * m1))


def shape_residual(wind_speeds: ArrayLike, k: float) -> float:
    """Residual of the characteristic equation at candidate shape *k*.

    Both raw moments are recomputed on every call.  *k* must be positive;
    this is not checked.
    """
    g1 = gamma(1.0 + 1.0 / k)
    g3 = gamma(1.0 + 3.0 / k)
    return moment_ratio(wind_speeds) * g1 * g1 * g1 - g3


# ======================================================================
# Bracketing root finder
# ======================================================================

def find_root(
    func: Callable[[float], float],
    kmin: float,
    kmax: float,
    eps: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> RootResult:
    """Locate a root of *func* inside ``[kmin, kmax]``.

    Algorithm (per iteration):
    1. Midpoint ``k = (kmin + kmax) / 2`` and ``fk = func(k)``
    2. Secant slope of the current bracket,
       ``(fkmax - fkmin) / (kmax - kmin)``, and Newton-like step
       ``fk / slope``
    3. Non-finite ``fk`` or step: give up (NOT_CONVERGED)
       Exact zero (``step == 0`` or ``fk * fkmin == 0``): done
    4. ``|step| > eps``: keep the half whose endpoints change sign
    5. Otherwise the estimated distance to the root is within *eps*: done

    Args:
        func: scalar residual function
        kmin, kmax: initial bracket, ``kmin < kmax``
        eps: tolerance on the estimated distance to the root
        max_iter: iteration budget

    Returns:
        RootResult tagged CONVERGED, NO_SIGN_CHANGE or NOT_CONVERGED.

    Raises:
        ValueError: if the bracket is empty or the budget is not positive.
    """
    if not kmin < kmax:
        raise ValueError(f"kmin must be < kmax, got [{kmin}, {kmax}]")
    if max_iter < 1:
        raise ValueError(f"max_iter must be >= 1, got {max_iter}")

    fkmin = func(kmin)
    fkmax = func(kmax)

    if not (math.isfinite(fkmin) and math.isfinite(fkmax)):
        logger.warning(
            "Residual not finite on [%g, %g]: f(kmin)=%.6g, f(kmax)=%.6g",
            kmin, kmax, fkmin, fkmax,
        )
        return RootResult(RootStatus.NO_SIGN_CHANGE, None, 0, kmin, kmax)

    if fkmin * fkmax > 0.0:
        logger.warning(
            "No sign change on [%g, %g]: f(kmin)=%.6g, f(kmax)=%.6g",
            kmin, kmax, fkmin, fkmax,
        )
        return RootResult(RootStatus.NO_SIGN_CHANGE, None, 0, kmin, kmax)

    # Root sits on the bracket itself.
    if fkmin == 0.0:
        return RootResult(RootStatus.CONVERGED, kmin, 0, kmin, kmax)
    if fkmax == 0.0:
        return RootResult(RootStatus.CONVERGED, kmax, 0, kmin, kmax)

    for iteration in range(1, max_iter + 1):
        k = (kmin + kmax) / 2.0
        fk = func(k)
        slope = (fkmax - fkmin) / (kmax - kmin)
        step = fk / slope

        if not (math.isfinite(fk) and math.isfinite(step)):
            logger.warning("Residual not finite at k=%.8g after %d iterations", k, iteration)
            return RootResult(RootStatus.NOT_CONVERGED, None, iteration, kmin, kmax)

        if step == 0.0 or fk * fkmin == 0.0:
            logger.debug("Exact root k=%.8g after %d iterations", k, iteration)
            return RootResult(RootStatus.CONVERGED, k, iteration, kmin, kmax)

        if abs(step) > eps:
            if fk * fkmin < 0.0:
                kmax, fkmax = k, fk
            else:
                kmin, fkmin = k, fk
        else:
            logger.debug("Converged k=%.8g after %d iterations", k, iteration)
            return RootResult(RootStatus.CONVERGED, k, iteration, kmin, kmax)

    logger.warning(
        "Root search not converged after %d iterations; bracket [%.8g, %.8g]",
        max_iter, kmin, kmax,
    )
    return RootResult(RootStatus.NOT_CONVERGED, None, max_iter, kmin, kmax)


def find_shape_factor(
    wind_speeds: ArrayLike,
    kmin: float = DEFAULT_KMIN,
    kmax: float = DEFAULT_KMAX,
    eps: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
) -> RootResult:
    """Search ``[kmin, kmax]`` for the shape factor of *wind_speeds*."""
    ws = np.asarray(wind_speeds, dtype=np.float64)
    return find_root(partial(shape_residual, ws), kmin, kmax, eps=eps, max_iter=max_iter)


# ======================================================================
# Parameter pipeline
# ======================================================================

def justus_scale(mean_speed: float, k: float) -> float:
    """Scale factor *c* from the mean wind speed and shape factor *k*."""
    return mean_speed * (0.586 + 0.433 / k) ** (-1.0 / k)


def weibull_params(
    wind_speeds: Sequence[float] | NDArray[np.floating],
    kmin: float = DEFAULT_KMIN,
    kmax: float = DEFAULT_KMAX,
    eps: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITER,
    median_convention: str = "standard",
) -> WeibullFit:
    """Estimate Weibull *k* (shape) and *c* (scale) from wind speed samples.

    The Weibull probability density function is:

    .. math::

        f(v) = \\frac{k}{c}\\left(\\frac{v}{c}\\right)^{k-1}
               \\exp\\!\\left[-\\left(\\frac{v}{c}\\right)^k\\right]

    Parameters
    ----------
    wind_speeds : sequence of float or ndarray
        Observed wind speed samples (m/s).  Copied; never modified.
    kmin, kmax : float, optional
        Search bracket for *k*.  Default ``[1.0, 8.0]``.
    eps : float, optional
        Root-finder tolerance.  Default 1e-6.
    max_iter : int, optional
        Root-finder iteration budget.  Default 50.
    median_convention : {"standard", "legacy"}, optional
        Indexing policy for the reported median, see
        :func:`engine.wind.sorting.median`.

    Returns
    -------
    WeibullFit
        Shape and scale factors with the mean and median wind speed.

    Raises
    ------
    EmptySampleError
        If *wind_speeds* is empty.
    InvalidSampleError
        If any sample is NaN or infinite, the mean is not positive, or the
        third moment overflows.
    NoSignChangeError
        If the residual does not change sign across ``[kmin, kmax]``.
    NotConvergedError
        If the iteration budget is exhausted.
    """
    ws = np.array(wind_speeds, dtype=np.float64).ravel()

    if ws.size == 0:
        raise EmptySampleError("Cannot fit Weibull parameters to an empty sample.")
    if not np.all(np.isfinite(ws)):
        raise InvalidSampleError("Wind speed samples must be finite numbers.")

    mean_v = float(np.sum(ws) / ws.size)
    if not mean_v > 0.0:
        raise InvalidSampleError(
            f"Mean wind speed must be positive to fit a Weibull shape, got {mean_v:g}."
        )
    if not math.isfinite(moment_ratio(ws)):
        raise InvalidSampleError(
            "Wind speed moments overflow float64; rescale the samples before fitting."
        )
    median_v = median(ws, convention=median_convention)

    result = find_shape_factor(ws, kmin=kmin, kmax=kmax, eps=eps, max_iter=max_iter)

    if result.status is RootStatus.NO_SIGN_CHANGE:
        raise NoSignChangeError(
            f"Shape residual does not change sign on [{kmin}, {kmax}]; "
            "widen the search bracket.",
            result,
        )
    if result.status is RootStatus.NOT_CONVERGED:
        raise NotConvergedError(
            f"Shape factor search did not converge within {max_iter} iterations "
            f"(last bracket [{result.lower:.6g}, {result.upper:.6g}]).",
            result,
        )

    k = float(result.root)
    c = justus_scale(mean_v, k)

    logger.info(
        "Weibull fit on %d samples: k=%.4f c=%.4f (%d iterations)",
        ws.size, k, c, result.iterations,
        extra={"n_samples": int(ws.size), "shape_k": k, "scale_c": float(c)},
    )
    return WeibullFit(k=k, c=float(c), mean=mean_v, median=median_v, iterations=result.iterations)
