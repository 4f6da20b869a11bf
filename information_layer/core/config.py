"""
Configuration management for the information layer service.

Uses Pydantic Settings for type-safe configuration. Third-party credentials
are only checked for presence; the service never calls those APIs.
"""
from pydantic_settings import BaseSettings
from typing import Dict, List, Optional


# Substrings that mark a value copied verbatim from the env template
PLACEHOLDER_MARKERS = ("your-", "here")

REQUIRED_API_KEYS = ("openai_api_key", "pinecone_api_key", "pinecone_environment")


class Settings(BaseSettings):
    """Application settings."""

    # Environment
    environment: str = "development"
    app_version: str = "1.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"

    # Request limits
    rate_limit_enabled: bool = True
    rate_limit: str = "1000 per 15 minutes"
    max_request_body_bytes: int = 1024 * 1024

    # Observability
    enable_prometheus_metrics: bool = False

    # Demo mode keeps the service usable without real credentials
    enable_demo_mode: bool = False

    # External services (presence-checked only)
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4-vision-preview"
    pinecone_api_key: Optional[str] = None
    pinecone_environment: Optional[str] = None
    pinecone_index_name: str = "magnetica-vde-vectors"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins into list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def missing_api_keys(self) -> List[str]:
        """Names of required credentials that are unset or still template placeholders."""
        missing = []
        for key in REQUIRED_API_KEYS:
            value = getattr(self, key)
            if not value or any(marker in value for marker in PLACEHOLDER_MARKERS):
                missing.append(key.upper())
        return missing

    def configuration_status(self) -> Dict[str, object]:
        missing = self.missing_api_keys()
        return {
            "configured": not missing or self.enable_demo_mode,
            "environment": self.environment,
            "required_keys": len(REQUIRED_API_KEYS),
            "configured_keys": len(REQUIRED_API_KEYS) - len(missing),
            "missing_keys": missing,
            "openai_configured": "OPENAI_API_KEY" not in missing,
            "pinecone_configured": "PINECONE_API_KEY" not in missing
            and "PINECONE_ENVIRONMENT" not in missing,
            "demo_mode": self.enable_demo_mode,
        }

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
