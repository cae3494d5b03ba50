from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "WindWeibull"
    log_json: bool = False
    log_level: str = "INFO"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "http://localhost:3000"

    # Weibull shape factor search
    weibull_kmin: float = 1.0
    weibull_kmax: float = 8.0
    weibull_tolerance: float = 1e-6
    weibull_max_iterations: int = 50
    median_convention: Literal["standard", "legacy"] = "standard"

    @property
    def search_params(self) -> dict[str, float | int]:
        return {
            "kmin": self.weibull_kmin,
            "kmax": self.weibull_kmax,
            "eps": self.weibull_tolerance,
            "max_iter": self.weibull_max_iterations,
        }


settings = Settings()
