from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional
import logging


class Settings(BaseSettings):
    """Application settings loaded through Pydantic Settings"""

    # API
    api_host: str = Field(default="0.0.0.0", env="API_HOST")
    api_port: int = Field(default=8000, env="API_PORT")
    api_reload: bool = Field(default=False, env="API_RELOAD")
    debug: bool = Field(default=False, env="DEBUG")

    # Logging
    log_level: str = Field(default="info", env="LOG_LEVEL")

    # CORS
    cors_origins: list[str] = Field(default=["*"], env="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, env="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], env="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], env="CORS_ALLOW_HEADERS")

    # Classifier
    classifier_calibration_a: float = Field(default=1.0, env="CLASSIFIER_CALIBRATION_A")
    classifier_calibration_b: float = Field(default=0.0, env="CLASSIFIER_CALIBRATION_B")
    classifier_cache_capacity: Optional[int] = Field(default=None, env="CLASSIFIER_CACHE_CAPACITY")  # None = unbounded
    classifier_cache_ttl_seconds: Optional[float] = Field(default=None, env="CLASSIFIER_CACHE_TTL_SECONDS")

    # Batch processing
    batch_max_workers: Optional[int] = Field(default=None, env="BATCH_MAX_WORKERS")
    max_batch_size: int = Field(default=1000, env="MAX_BATCH_SIZE")

    # Spectroscopy
    spectral_min_snr: float = Field(default=8.0, env="SPECTRAL_MIN_SNR")
    spectral_smoothing_window: int = Field(default=7, env="SPECTRAL_SMOOTHING_WINDOW")  # must be odd

    # Predictive analytics
    trend_window_years: int = Field(default=10, env="TREND_WINDOW_YEARS")

    # Development
    enable_docs: bool = Field(default=True, env="ENABLE_DOCS")
    enable_redoc: bool = Field(default=True, env="ENABLE_REDOC")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def get_cors_config(self) -> dict:
        """Return the CORS middleware configuration"""
        return {
            "allow_origins": self.cors_origins,
            "allow_credentials": self.cors_allow_credentials,
            "allow_methods": self.cors_allow_methods,
            "allow_headers": self.cors_allow_headers,
        }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Dependency that returns the settings"""
    return settings


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level to the root logger"""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
