"""
Application configuration.
All settings are loaded from environment variables (or .env).
The Gemini API key is read from GEMINI_API_KEY, falling back to API_KEY.
"""
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The API key has no default: without it every generation call fails
    with error_api_key_not_configured unless the caller passes its own key.
    """

    # ===========================================
    # APPLICATION
    # ===========================================
    app_env: str = "local"
    # CORS: comma-separated (e.g. http://localhost:3000,http://ui:80). Empty = default list in code.
    cors_origins: str = ""

    # ===========================================
    # GOOGLE GEMINI / IMAGEN
    # ===========================================
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    gemini_api_endpoint: str = "https://generativelanguage.googleapis.com"
    gemini_timeout: float = 180.0  # generation + download of the response body (image)
    imagen_output_mime_type: str = "image/png"

    # ===========================================
    # LOGGING
    # ===========================================
    request_id_header: str = "X-Request-Id"
    log_level: str = "INFO"
    log_file: str | None = None
    log_max_bytes: int = 10_000_000
    log_backup_count: int = 5

    @field_validator("gemini_api_key", "gemini_api_endpoint")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept any case, store upper."""
        level = (v or "INFO").strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log_level: {v}")
        return level

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
