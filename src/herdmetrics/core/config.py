from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file is in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> herdmetrics -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


@lru_cache
def get_cache_dir() -> Path:
    """Get the cache directory (.cache/ in workspace root).

    Looks for project root by finding a .git directory,
    then returns .cache/ within that root.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / ".git").exists():
            cache_dir = parent / ".cache"
            cache_dir.mkdir(exist_ok=True)
            return cache_dir
    # Fallback to current working directory
    cache_dir = Path.cwd() / ".cache"
    cache_dir.mkdir(exist_ok=True)
    return cache_dir


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fallback gain per head (kg/day) when the herd has no usable weigh records
    default_daily_gain_kg: float = 0.5

    # Trailing window for herd weight gain (months)
    weight_gain_window_months: int = 12

    # Trailing window for herd FCR (months)
    fcr_period_months: int = 6

    # Snapshot file name inside the cache directory
    snapshot_file: str = "herd_snapshot.json"

    # Display units for CLI output ("metric" = kg, "imperial" = lb)
    # Note: all calculations use kg internally
    display_units: Literal["imperial", "metric"] = "metric"


settings = Settings()
