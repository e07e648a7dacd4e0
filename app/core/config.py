from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.schemas import CaseHandling, NonAlphaHandling, TransformPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Classical Cipher Workbench"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Cipher defaults
    default_language: str = "ukrainian"
    case_handling: CaseHandling = CaseHandling.PRESERVE
    non_alpha_handling: NonAlphaHandling = NonAlphaHandling.PRESERVE

    # Book cipher
    book_grid_size: int = 10
    book_min_reference_length: int = 100

    # Input limits
    max_text_length: int = 100_000

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def default_policy(self) -> TransformPolicy:
        return TransformPolicy(
            case_handling=self.case_handling,
            non_alpha_handling=self.non_alpha_handling,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
