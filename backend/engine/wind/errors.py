"""Exceptions raised by the Weibull estimator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from engine.wind.weibull import RootResult


class WeibullFitError(ValueError):
    """Base class for failures of the Weibull parameter estimation."""

    code: str = "weibull_fit_error"


class EmptySampleError(WeibullFitError):
    """The sample has no values, so mean and median are undefined."""

    code = "empty_sample"


class NoSignChangeError(WeibullFitError):
    """The shape residual has the same sign at both bracket endpoints."""

    code = "no_sign_change"

    def __init__(self, message: str, result: RootResult) -> None:
        super().__init__(message)
        self.result = result


class NotConvergedError(WeibullFitError):
    """The iteration budget ran out before the tolerance test was met."""

    code = "not_converged"

    def __init__(self, message: str, result: RootResult) -> None:
        super().__init__(message)
        self.result = result


class InvalidSampleError(WeibullFitError):
    """The sample is non-empty but its moments cannot be used to fit *k*."""

    code = "invalid_sample"
