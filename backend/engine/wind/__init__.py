"""Wind resource statistics.

Submodules
----------
sorting
    In-place quicksort and the sample median built on it.
gamma
    Fixed-coefficient polynomial approximation of the gamma function.
weibull
    Characteristic equation, bracketing root finder and the Weibull
    parameter pipeline.
wind_data
    Reading a wind speed column from delimited files.
"""

from engine.wind.errors import (
    EmptySampleError,
    InvalidSampleError,
    NoSignChangeError,
    NotConvergedError,
    WeibullFitError,
)
from engine.wind.gamma import gamma, gamma_series
from engine.wind.sorting import median, quick_sort
from engine.wind.weibull import (
    RootResult,
    RootStatus,
    WeibullFit,
    find_root,
    find_shape_factor,
    justus_scale,
    moment_ratio,
    shape_residual,
    weibull_params,
)
from engine.wind.wind_data import WindDataError, load_wind_csv, parse_wind_csv

__all__ = [
    "EmptySampleError",
    "find_root",
    "find_shape_factor",
    "gamma",
    "gamma_series",
    "InvalidSampleError",
    "justus_scale",
    "load_wind_csv",
    "median",
    "moment_ratio",
    "NoSignChangeError",
    "NotConvergedError",
    "parse_wind_csv",
    "quick_sort",
    "RootResult",
    "RootStatus",
    "shape_residual",
    "WeibullFit",
    "WeibullFitError",
    "weibull_params",
    "WindDataError",
]
