"""
Static reference data: regional demand, geography and the ad plan catalog.
"""

from claimrouter.data.regional_demand import (
    BASE_CPC_BY_TRADE,
    DEFAULT_BASE_CPC,
    DEFAULT_DEMAND_FACTOR,
    REGIONAL_DEMAND_DATA,
    RegionalDemandModel,
    default_demand_model,
    get_all_disaster_regions,
    get_base_cpc_for_trade,
    get_region_demand,
)
from claimrouter.data.regions import (
    REGION_ADJACENCY,
    STATE_REGION_ZIP_PREFIXES,
    ZIP_PREFIX_RANGES,
    RegionAdjacency,
    RegionGeography,
    default_geography,
    get_state_from_zip,
)

__all__ = [
    "BASE_CPC_BY_TRADE",
    "DEFAULT_BASE_CPC",
    "DEFAULT_DEMAND_FACTOR",
    "REGIONAL_DEMAND_DATA",
    "RegionalDemandModel",
    "default_demand_model",
    "get_all_disaster_regions",
    "get_base_cpc_for_trade",
    "get_region_demand",
    "REGION_ADJACENCY",
    "STATE_REGION_ZIP_PREFIXES",
    "ZIP_PREFIX_RANGES",
    "RegionAdjacency",
    "RegionGeography",
    "default_geography",
    "get_state_from_zip",
]
