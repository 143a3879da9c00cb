"""SDK configuration with environment variable support.

All settings can be overridden via environment variables prefixed with
``FEATUREFEST_``, or via a ``.env`` file in the project root.

Examples::

    FEATUREFEST_BOARD_ID=f9f8ac71-01fa-445c-858e-e6e7e8308fc6 featurefest features
    FEATUREFEST_BASE_URL=http://127.0.0.1:8000/rest/v1 featurefest board
    FEATUREFEST_LOG_LEVEL=DEBUG featurefest serve
"""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root: two levels up from this file (featurefest/config.py -> repo root)
_BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_BASE_URL = "https://uisrjfxpjmxmjqgmeldp.supabase.co/rest/v1"


class Settings(BaseSettings):
    """Featurefest configuration — all values overridable via env vars."""

    model_config = SettingsConfigDict(
        env_prefix="FEATUREFEST_",
        env_file=str(_BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hosted backend
    base_url: str = DEFAULT_BASE_URL
    service_key: str = ""
    board_id: str | None = None
    default_user_id: str = "external-user"
    timeout: float = 5.0

    # Logging
    log_level: str = "INFO"

    # Local stub backend
    host: str = "127.0.0.1"
    port: int = 8000
    data_dir: Path = _BASE_DIR / "data"
    seed_demo_board: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / "featurefest-stub.db"

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.db_path}"

    @property
    def stub_base_url(self) -> str:
        return f"http://{self.host}:{self.port}/rest/v1"


# Singleton instance — import this everywhere
settings = Settings()


def configure_logging() -> None:
    """Configure root logging from ``settings.log_level``. The library itself never calls this."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s: %(message)s",
    )
