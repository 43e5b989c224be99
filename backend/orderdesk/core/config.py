"""
Configuración centralizada de la aplicación
"""
import json
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings, read from the environment and .env"""

    # API Settings
    API_TITLE: str = "OrderDesk API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Order processing backend: customers, catalog stock and order workflow"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    API_DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Storage
    # "postgres" uses DATABASE_URL, "memory" keeps everything in process
    STORAGE_BACKEND: str = "postgres"
    DATABASE_URL: Optional[str] = None
    DB_CONNECT_RETRIES: int = 3
    DB_RETRY_DELAY: float = 1.0

    # Order workflow
    PAYMENT_DELAY_SECONDS: float = 2.0
    # When true, cancel after Completed and pay after Cancelled are rejected
    ENFORCE_TERMINAL_STATUS: bool = False

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000,http://localhost:3001"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
