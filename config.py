from typing import List
from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class ReportSettings(BaseModel):
    percentiles: List[float] = [0.5, 0.9, 0.95, 0.99]

    @field_validator("percentiles")
    @classmethod
    def check_range(cls, values: List[float]) -> List[float]:
        bad = [p for p in values if not 0.0 <= p <= 1.0]
        if bad:
            raise ValueError(f"percentiles must lie in [0, 1], got {bad}")
        return values

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STATCALC_", env_nested_delimiter="__")

    default_domain: str = "long"
    log_level: str = "INFO"
    report: ReportSettings = ReportSettings()

settings = Settings()
