"""
Core infrastructure package for the claim router.

Provides:
- Configuration management via pydantic-settings
- FastAPI dependency injection utilities

Usage:
    from claimrouter.core import get_settings, SettingsDep
"""

from claimrouter.core.config import Settings, get_settings
from claimrouter.core.dependencies import (
    get_settings_dependency,
    get_random_source,
    SettingsDep,
    RandomSourceDep,
)

__all__ = [
    'Settings',
    'get_settings',
    'get_settings_dependency',
    'get_random_source',
    'SettingsDep',
    'RandomSourceDep',
]
