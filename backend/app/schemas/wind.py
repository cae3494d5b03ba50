from typing import Literal

from pydantic import BaseModel, Field, model_validator


class WeibullFitRequest(BaseModel):
    wind_speeds: list[float] = Field(
        description="Wind speed samples (m/s). Must be non-empty and finite."
    )
    kmin: float | None = Field(
        default=None, gt=0, description="Lower end of the shape factor search bracket"
    )
    kmax: float | None = Field(
        default=None, gt=0, description="Upper end of the shape factor search bracket"
    )
    tolerance: float | None = Field(default=None, gt=0)
    max_iterations: int | None = Field(default=None, ge=1, le=10_000)
    median_convention: Literal["standard", "legacy"] | None = None

    @model_validator(mode="after")
    def _check_bracket(self) -> "WeibullFitRequest":
        if self.kmin is not None and self.kmax is not None and self.kmin >= self.kmax:
            raise ValueError("kmin must be less than kmax")
        return self


class WeibullFitResponse(BaseModel):
    shape_k: float
    scale_c: float
    mean_wind_speed: float
    median_wind_speed: float
    iterations: int
    n_samples: int


class WeibullFitErrorDetail(BaseModel):
    error: str
    message: str
