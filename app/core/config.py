from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from pydantic import field_validator

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "postgresql://localhost:5432/helping_hand"
    AUTO_CREATE_TABLES: bool = True

    # Sessions (cookie carries a signed JWT holding the server-side session id)
    SECRET_KEY: str = "helping-hand-secret"
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "helping_hand_session"
    SESSION_MAX_AGE_DAYS: int = 30
    SESSION_COOKIE_SECURE: bool = False
    SESSION_COOKIE_SAMESITE: str = "lax"

    # Application
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    APP_NAME: str = "Helping Hand API"
    APP_VERSION: str = "1.0.0"
    CORS_ORIGINS: str = "http://localhost:8081,http://localhost:19006,http://127.0.0.1:8081"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    WORKERS: int = 4

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
    LOG_FILE: str = "logs/app.log"

    # Security
    PASSWORD_MIN_LENGTH: int = 6
    BCRYPT_ROUNDS: int = 12

    # Database Connection Pool
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    # Navigation fallback when the receiver does not share a location
    DEFAULT_RECEIVER_LATITUDE: float = 37.775
    DEFAULT_RECEIVER_LONGITUDE: float = -122.418

    # Source archive export
    EXPORT_ROOT: str = "."
    EXPORT_INCLUDE_DIRS: str = "app,alembic,scripts,tests"
    EXPORT_INCLUDE_FILES: str = "pyproject.toml,alembic.ini,run.py,README.md"
    EXPORT_ARCHIVE_NAME: str = "helping-hand.zip"

    @field_validator('DEBUG', 'SESSION_COOKIE_SECURE', 'AUTO_CREATE_TABLES', mode='before')
    @classmethod
    def parse_bool(cls, v):
        """Parse boolean from string."""
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes")
        return bool(v)

    @staticmethod
    def _split(value: str) -> List[str]:
        return [item.strip() for item in value.split(',') if item.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS_ORIGINS as a list."""
        return self._split(self.CORS_ORIGINS)

    @property
    def export_include_dirs_list(self) -> List[str]:
        return self._split(self.EXPORT_INCLUDE_DIRS)

    @property
    def export_include_files_list(self) -> List[str]:
        return self._split(self.EXPORT_INCLUDE_FILES)

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    return Settings()
