from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    env: str = "dev"
    secret_key: str = "change-me-tenant-service-jwt-secret-0123456789"
    jwt_algorithm: str = "HS256"
    # Both TTLs are in milliseconds; expires_in in login responses uses the same unit
    jwt_expiration_ms: int = 24 * 60 * 60 * 1000
    jwt_refresh_expiration_ms: int = 7 * 24 * 60 * 60 * 1000
    bcrypt_rounds: int = 12
    database_url: str = "postgresql+psycopg2://tenant:tenant@db:5432/tenant_service"
    backend_cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        origins = self.backend_cors_origins
        return [origin.strip() for origin in origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
