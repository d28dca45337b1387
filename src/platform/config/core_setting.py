from pathlib import Path
from typing import Dict, List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Seat Inventory Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = 'HS256'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'seat_inventory'
    POSTGRES_PORT: int = 5432
    POSTGRES_REPLICA_SERVER: str = ''
    POSTGRES_REPLICA_PORT: int = 0

    # Full URL override (e.g. sqlite+aiosqlite:///./local.db for tests)
    DATABASE_URL: str = ''

    # Connection pool
    DB_POOL_SIZE_WRITE: int = 10
    DB_POOL_SIZE_READ: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    @property
    def DATABASE_READ_URL_ASYNC(self) -> str:
        if self.DATABASE_URL or not self.POSTGRES_REPLICA_SERVER:
            return self.DATABASE_URL_ASYNC
        port = self.POSTGRES_REPLICA_PORT or self.POSTGRES_PORT
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_REPLICA_SERVER}:{port}/{self.POSTGRES_DB}'
        )

    # Seat holds
    RESERVATION_TTL_MINUTES: int = 10
    MAX_SEATS_PER_RESERVATION: int = 10
    RESERVATION_SWEEP_INTERVAL_SECONDS: float = 30.0

    # Seat count reconciliation (0 disables the scheduled run)
    CAPACITY_SYNC_INTERVAL_SECONDS: float = 24 * 60 * 60

    # Start the sweeper and seat count sync inside the API process
    RUN_BACKGROUND_JOBS: bool = True

    # Booking window
    LATE_BOOKING_SHOW_TYPES: List[str] = ['movie']
    LATE_BOOKING_GRACE_MINUTES: int = 15

    @field_validator('LATE_BOOKING_SHOW_TYPES', mode='before')
    @classmethod
    def assemble_late_booking_show_types(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip().lower() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return [str(i).lower() for i in v]
        return ['movie']

    # Promotion code -> percent off
    PROMOTION_CODES: Dict[str, int] = {}


settings = Settings()  # type: ignore
