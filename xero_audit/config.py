"""
Environment-backed settings and logging setup
"""
import os
import logging
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_WINDOW_SIZE = 400
DEFAULT_BATCH_SIZE = 200


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./audit.db"
    window_size: int = DEFAULT_WINDOW_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    xero_api_base_url: str = "https://api.xero.com/api.xro/2.0"
    xero_timeout_seconds: float = 30.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment (call load_dotenv() first)"""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./audit.db"),
        window_size=int(os.getenv("AUDIT_WINDOW_SIZE", str(DEFAULT_WINDOW_SIZE))),
        batch_size=int(os.getenv("AUDIT_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
        xero_api_base_url=os.getenv("XERO_API_BASE_URL", "https://api.xero.com/api.xro/2.0"),
        xero_timeout_seconds=float(os.getenv("XERO_TIMEOUT_SECONDS", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )
