"""
Single source of truth for proxy configuration.
All settings are typed and loaded from environment variables.
"""
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Proxy settings.

    - Upstream credentials are injected into every authenticate call
    - All settings have defaults for local development
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # === Upstream Odoo ===
    ODOO_URL: str = Field(
        default="http://10.122.135.14:8069",
        description="Odoo base URL"
    )
    ODOO_DATABASE: str = Field(
        default="dbbrazen",
        description="Odoo database name"
    )
    ODOO_USERNAME: str = Field(
        default="admin",
        description="Odoo login"
    )
    ODOO_PASSWORD: str = Field(
        default="admin",
        description="Odoo password (never returned or logged)"
    )

    # === Server ===
    HOST: str = Field(default="0.0.0.0", description="Listen host")
    PORT: int = Field(default=3001, ge=1, le=65535, description="Listen port")
    ENVIRONMENT: str = Field(
        default="development",
        description="Deployment environment label"
    )

    # === API Configuration ===
    ALLOWED_ORIGINS: list[str] = Field(
        default=[
            "http://localhost:5173",
            "http://localhost:3000",
            "https://react-odoo-demo.vercel.app",
        ],
        description="CORS allowed origins"
    )

    # === Outbound Calls ===
    UPSTREAM_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    CONTACTS_FETCH_LIMIT: int = Field(default=20, ge=1, le=1000)

    @field_validator("ODOO_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined onto the base URL with a leading slash."""
        return v.strip().rstrip("/")

    @property
    def authenticate_url(self) -> str:
        return f"{self.ODOO_URL}/web/session/authenticate"

    def call_kw_url(self, model: str, method: str) -> str:
        """URL of the generic dataset call for one model method."""
        return f"{self.ODOO_URL}/web/dataset/call_kw/{model}/{method}"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    This is the single entry point for all configuration.
    The LRU cache ensures we only parse env vars once.
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Force reload settings from environment.
    Useful for testing or when env vars change at runtime.
    """
    get_settings.cache_clear()
    return get_settings()
