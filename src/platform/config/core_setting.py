import json
from pathlib import Path
from typing import Annotated, List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Party Booking Core'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # CORS (comma separated or a JSON list)
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return json.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'party_booking'
    POSTGRES_PORT: int = 5432

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 10  # seconds
    DB_POOL_RECYCLE: int = 1800  # seconds
    DB_POOL_PRE_PING: bool = True
    DB_STATEMENT_TIMEOUT_MS: int = 5000  # bounds a single request's time in the database

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def DATABASE_URL_SYNC(self) -> str:
        # alembic runs with the sync driver
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Tenant policy defaults (used when a tenant has no policy row or a column is null)
    DEFAULT_HOLD_MINUTES: int = 15
    DEFAULT_BUFFER_MINUTES: int = 30
    DEFAULT_DURATION_MINUTES: int = 120
    DEFAULT_DEPOSIT_PERCENT: int = 50

    # Hold extension
    DEFAULT_EXTEND_MINUTES: int = 5
    HOLD_EXTENSION_CEILING_MINUTES: int = 60  # upper bound on client-supplied max_total_minutes

    # Tenant/policy lookups only; hold and booking state is never cached
    POLICY_CACHE_TTL_SECONDS: float = 30.0

    # Background sweep of expired holds
    HOLD_SWEEP_ENABLED: bool = True
    HOLD_SWEEP_INTERVAL_SECONDS: float = 60.0


settings = Settings()  # type: ignore
