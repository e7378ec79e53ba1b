"""
Settings and environment management module for the claim router.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access

Environment Variables:
- APP_NAME: Display name used by the API root endpoint
- LOG_LEVEL: Root logging level (default: INFO)
- ROUTING_DEFAULT_LIMIT: Number of ranked partners returned by routing (default: 5)
- WINNER_SELECTION_MODE: highest_score or weighted_random (default: highest_score)
- RANDOM_SEED: Optional seed for the weighted-random selection source
- DEFAULT_STATE / DEFAULT_HOME_REGION: Fallbacks when a ZIP cannot be placed

Usage:
    from claimrouter.core.config import get_settings

    settings = get_settings()
    limit = settings.routing_default_limit
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from claimrouter.models.enums import SelectionMode


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name returned by the API root endpoint.
        log_level: Root logging level applied by main.py.
        cors_allowed_origins: Origins allowed by the CORS middleware.
        routing_default_limit: How many ranked partners routing returns by default.
        winner_selection_mode: Default winner selection strategy.
        random_seed: Seed for the default random source. None means OS entropy.
        default_state: State used when a ZIP code cannot be placed.
        default_home_region: Home region used when a ZIP code cannot be placed.
        distribution_iterations: Draws performed by the rotation distribution check.
        distribution_slots_per_iteration: Slots filled per draw in the distribution check.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Application
    # =========================================================================

    app_name: str = 'Claim Router API'

    log_level: str = 'INFO'

    cors_allowed_origins: List[str] = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    # =========================================================================
    # Routing
    # =========================================================================

    # Ranked partners returned when a caller does not pass an explicit limit
    routing_default_limit: int = Field(default=5, ge=1)

    winner_selection_mode: SelectionMode = SelectionMode.HIGHEST_SCORE

    # Fixed seed makes weighted_random reproducible across processes
    random_seed: Optional[int] = None

    # =========================================================================
    # Regions
    # =========================================================================

    default_state: str = 'TX'

    default_home_region: str = 'Austin Area'

    # =========================================================================
    # Rotation distribution check
    # =========================================================================

    distribution_iterations: int = Field(default=1000, ge=1)

    distribution_slots_per_iteration: int = Field(default=3, ge=1)


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
