# backend/storefront/config.py

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    data_dir: Path = BASE_DIR / "backend" / "data"
    images_dir: Path = BASE_DIR / "backend" / "public" / "images"
    host: str = "0.0.0.0"
    port: int = 4000
    public_base_url: str = "http://localhost:4000"

    # Used for "today" when computing bookable dates
    timezone: str = "UTC"

    # Multi-worker deployments set this so booking locks are shared
    redis_url: str | None = None
    lock_timeout_seconds: float = 10.0
    # Redis lock expiry; must outlast the longest critical section
    lock_lease_seconds: float = 60.0

    count_cancelled_orders: bool = False

    backup_interval_hours: float = 24.0
    backup_keep: int = 10
    backup_on_startup: bool = True
    backup_scheduler_enabled: bool = True

    max_image_bytes: int = 5 * 1024 * 1024
    max_images_per_upload: int = 5

    google_sheet_id: str | None = None
    google_credentials_file: Path | None = None

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="STOREFRONT_",
        extra="ignore",
    )

    @property
    def backups_dir(self) -> Path:
        return self.data_dir / "backups"


@lru_cache
def get_settings() -> Settings:
    return Settings()
