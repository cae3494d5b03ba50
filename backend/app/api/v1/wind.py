"""Weibull parameter estimation endpoint."""
import logging

from fastapi import APIRouter, HTTPException

from app.config import settings
from app.schemas.wind import WeibullFitErrorDetail, WeibullFitRequest, WeibullFitResponse

from engine.wind.errors import WeibullFitError
from engine.wind.weibull import weibull_params

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/weibull",
    response_model=WeibullFitResponse,
    summary="Fit Weibull parameters",
    description="Estimate Weibull shape and scale factors plus mean and median from wind speed samples.",
    responses={422: {"description": "Sample cannot be fitted"}},
)
async def fit_weibull(body: WeibullFitRequest) -> WeibullFitResponse:
    search = settings.search_params
    kmin = body.kmin if body.kmin is not None else search["kmin"]
    kmax = body.kmax if body.kmax is not None else search["kmax"]

    if kmin >= kmax:
        raise HTTPException(
            status_code=422,
            detail=WeibullFitErrorDetail(
                error="invalid_bracket",
                message=f"Search bracket [{kmin}, {kmax}] is empty.",
            ).model_dump(),
        )

    try:
        fit = weibull_params(
            body.wind_speeds,
            kmin=kmin,
            kmax=kmax,
            eps=body.tolerance if body.tolerance is not None else search["eps"],
            max_iter=(
                body.max_iterations if body.max_iterations is not None else search["max_iter"]
            ),
            median_convention=body.median_convention or settings.median_convention,
        )
    except WeibullFitError as exc:
        logger.info("Weibull fit rejected (%s): %s", exc.code, exc)
        raise HTTPException(
            status_code=422,
            detail=WeibullFitErrorDetail(error=exc.code, message=str(exc)).model_dump(),
        ) from exc
    except (ValueError, IndexError) as exc:
        raise HTTPException(
            status_code=422,
            detail=WeibullFitErrorDetail(error="invalid_sample", message=str(exc)).model_dump(),
        ) from exc

    return WeibullFitResponse(
        shape_k=round(fit.k, 6),
        scale_c=round(fit.c, 6),
        mean_wind_speed=round(fit.mean, 6),
        median_wind_speed=round(fit.median, 6),
        iterations=fit.iterations,
        n_samples=len(body.wind_speeds),
    )
