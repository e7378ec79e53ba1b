"""
FastAPI dependency injection utilities.

Exposes the settings singleton and a per-request random source as typed
dependencies so route handlers stay thin and tests can override them through
``app.dependency_overrides``.
"""

from typing import Annotated

import numpy as np
from fastapi import Depends

from claimrouter.core.config import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Return the cached Settings instance."""
    return get_settings()


def get_random_source(
    settings: Annotated[Settings, Depends(get_settings_dependency)],
) -> np.random.Generator:
    """
    Build the random source used by weighted-random winner selection.

    A fresh generator is created per request. When ``random_seed`` is configured
    every request draws the same sequence, which is what reproducible
    environments want.
    """
    return np.random.default_rng(settings.random_seed)


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
RandomSourceDep = Annotated[np.random.Generator, Depends(get_random_source)]
