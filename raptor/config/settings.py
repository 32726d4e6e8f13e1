from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from RAPTOR_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="RAPTOR_", env_file=".env", extra="ignore")

    api_key: str = ""
    base_url: str = "https://api.raptordata.dev"
    dangerously_allow_localhost: bool = False

    log_level: str = "INFO"

    timeout_seconds: float = Field(default=300.0, ge=1.0, le=3600.0)
    max_poll_attempts: int = Field(default=300, ge=1, le=3600)
    poll_timeout_seconds: float = Field(default=300.0, ge=1.0, le=3600.0)
    poll_interval_seconds: float = Field(default=1.0, gt=0.0)
