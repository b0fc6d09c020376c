"""Application settings using Pydantic."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = Field(default="Messenger")
    env: str = Field(default="dev")
    debug: bool = Field(default=True)
    secret_key: str = Field(default="change-me")
    session_cookie: str = Field(default="session")
    session_max_age: int = Field(default=24 * 60 * 60)

    # Where escape()/succeed() send the browser unless a route says otherwise
    default_route: str = Field(default="/")
    auto_close_session: bool = Field(default=True)
    redirect_status: int = Field(default=303)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MSG_",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
