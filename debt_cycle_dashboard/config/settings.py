"""Configuration settings for the debt cycle data engine."""

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
import os

from dotenv import load_dotenv


load_dotenv()


DEFAULT_CACHE_TTL_HOURS = 24
DEFAULT_REQUEST_TIMEOUT = 15.0


@dataclass
class Settings:
    """Application settings."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    cache_ttl_hours: float = field(
        default_factory=lambda: float(
            os.getenv("FRED_CACHE_TTL_HOURS", DEFAULT_CACHE_TTL_HOURS)
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(
            os.getenv("FRED_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)
        )
    )
    proxy_url: str = field(default_factory=lambda: os.getenv("FRED_PROXY_URL", ""))
    cache_dir: Path = field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "cache"
    )
    db_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "debt_cycle.db"

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(hours=self.cache_ttl_hours)

    def validate(self) -> None:
        """Validate settings required for seeding the cache."""
        if not self.fred_api_key:
            raise ValueError(
                "FRED_API_KEY not set. Get one at: "
                "https://fred.stlouisfed.org/docs/api/api_key.html"
            )

    def has_fred_api_key(self) -> bool:
        """Check if a FRED API key is configured."""
        return bool(self.fred_api_key)
