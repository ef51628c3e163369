from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    """Deployment settings read from AIR_ROUTE_* environment variables or .env"""

    data_dir: Path = BASE_DIR / "data"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = True

    # CORS
    cors_origins: str = "*"  # Comma-separated origins

    model_config = SettingsConfigDict(
        env_prefix="AIR_ROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()

class Config:
    """Configuration settings for Air Route Advisor backend"""

    # Base directory
    BASE_DIR = BASE_DIR
    DATA_DIR = settings.data_dir

    # Fixture files (static JSON, re-read on every request)
    AIRPORTS_FILE: str = "airports.json"
    AIRLINES_FILE: str = "airline_summary.json"
    ROUTES_FILE: str = "route_summary.json"
    MONTHLY_ROUTES_FILE: str = "route_monthly_summary.json"
    FLIGHTS_FILE: str = "flights.json"
    WEATHER_FILE: str = "weather.json"

    # Scoring parameters
    SAFETY_WEIGHT: float = 0.6
    COMFORT_WEIGHT: float = 0.4
    ON_TIME_THRESHOLD_MINUTES: int = 15

    # Query limits
    DEFAULT_ROUTE_LIMIT: int = 10
    DETAIL_FLIGHT_LIMIT: int = 50
    DETAIL_WEATHER_LIMIT: int = 30
    RECENT_WEATHER_LIMIT: int = 7

    # API settings
    API_TITLE: str = "Air Route Advisor API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Read-only API for route, airline, airport and weather fixtures"

    # CORS settings
    CORS_ORIGINS: List[str] = settings.cors_origin_list

    # Logging
    LOG_LEVEL: str = settings.log_level

    # Server settings
    HOST: str = settings.host
    PORT: int = settings.port
    RELOAD: bool = settings.reload

    @classmethod
    def fixture_files(cls) -> List[str]:
        """Names of every fixture the service reads"""
        return [
            cls.AIRPORTS_FILE, cls.AIRLINES_FILE, cls.ROUTES_FILE,
            cls.MONTHLY_ROUTES_FILE, cls.FLIGHTS_FILE, cls.WEATHER_FILE,
        ]

    @classmethod
    def missing_data_files(cls) -> List[Path]:
        """Return fixture paths that do not exist under DATA_DIR"""
        data_dir = Path(cls.DATA_DIR)
        return [data_dir / name for name in cls.fixture_files() if not (data_dir / name).exists()]
