"""
Regional Demand Model

Hand-curated market signals per state and region: cost multiplier, number of active
competitors, disaster declaration status, primary hazards, population density, the
typical monthly budget a contractor spends there, and a 0-100 demand index. Also holds
the base cost-per-click for each trade.

The tables are read-only reference data. ``RegionalDemandModel`` captures a table once
at construction and never mutates it; tests can build a model over a fake table.

Lookups never raise: an unknown state/region pair yields ``None`` from
``get_region_demand`` and callers substitute ``DEFAULT_DEMAND_FACTOR`` via
``demand_or_default``.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from claimrouter.models.enums import PopulationDensity
from claimrouter.models.schemas import DisasterRegion, RegionDemandFactor


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEMAND_DATA_AS_OF = "2024-12-01"

DEFAULT_BASE_CPC = 4.00

# Substituted for any state/region pair missing from the table
DEFAULT_DEMAND_FACTOR = RegionDemandFactor(
    baseMultiplier=1.0,
    competitorCount=15,
    disasterDeclaration=False,
    primaryHazards=(),
    populationDensity=PopulationDensity.SUBURBAN,
    avgContractorBudget=500,
    demandIndex=50,
)

# Base CPC in dollars, keyed by lower-case trade type
BASE_CPC_BY_TRADE: Mapping[str, float] = MappingProxyType({
    "roofer": 4.50,
    "roofing": 4.50,
    "general_contractor": 3.75,
    "remodeler": 3.25,
    "electrician": 3.50,
    "plumber": 3.00,
    "plumbing": 3.00,
    "hvac": 3.25,
    "restoration": 3.50,
    "public_adjuster": 8.00,
    "insurance_attorney": 12.00,
    "attorney": 12.00,
    "organization": 2.50,
})


# =============================================================================
# Regional Demand Table
# =============================================================================

DemandRow = Tuple[str, str, float, int, bool, Tuple[str, ...], str, int, int]

_DEMAND_ROWS: Tuple[DemandRow, ...] = (
    # state, region, multiplier, competitors, disaster, hazards, density, avg budget, demand index
    # TX
    ("TX", "North Texas", 1.2, 28, False, ("tornado", "hail", "severe_storm"), "urban", 650, 75),
    ("TX", "Houston Metro", 1.4, 35, True, ("hurricane", "flood", "severe_storm"), "urban", 900, 88),
    ("TX", "Austin Area", 1.3, 24, False, ("flood", "hail", "wildfire"), "urban", 750, 82),
    ("TX", "San Antonio Area", 0.95, 14, False, ("hail", "flood"), "suburban", 450, 60),
    ("TX", "Dallas-Fort Worth Metroplex", 1.35, 32, False, ("tornado", "hail", "severe_storm"), "urban", 800, 85),
    ("TX", "East Texas", 0.8, 8, False, ("tornado", "flood"), "rural", 300, 45),
    ("TX", "West Texas", 0.7, 6, False, ("hail", "severe_storm", "wildfire"), "rural", 250, 35),
    ("TX", "South Texas", 1.1, 12, False, ("hurricane", "flood"), "suburban", 400, 55),
    # FL
    ("FL", "South Florida", 1.5, 48, True, ("hurricane", "flood", "severe_storm"), "urban", 1200, 95),
    ("FL", "Central Florida", 1.25, 30, False, ("hurricane", "tornado", "flood"), "urban", 700, 78),
    ("FL", "Jacksonville Area", 1.1, 18, False, ("hurricane", "flood"), "urban", 550, 65),
    ("FL", "Southwest Florida", 1.35, 26, True, ("hurricane", "flood"), "suburban", 850, 85),
    ("FL", "Panhandle", 1.3, 16, True, ("hurricane", "tornado", "flood"), "suburban", 600, 81),
    # CA
    ("CA", "Bay Area", 1.4, 42, False, ("earthquake", "wildfire"), "urban", 1100, 85),
    ("CA", "Los Angeles Metro", 1.35, 55, True, ("wildfire", "earthquake", "flood"), "urban", 1000, 83),
    ("CA", "San Diego Area", 1.2, 28, False, ("wildfire", "earthquake"), "urban", 800, 72),
    ("CA", "Central Valley", 0.95, 18, False, ("wildfire", "flood"), "suburban", 500, 55),
    ("CA", "Inland Empire", 1.15, 22, True, ("wildfire", "earthquake"), "suburban", 650, 68),
    ("CA", "Northern California", 1.0, 12, False, ("wildfire", "flood"), "rural", 450, 50),
    # OK
    ("OK", "Oklahoma City Metro", 1.3, 22, False, ("tornado", "hail", "severe_storm"), "urban", 600, 80),
    ("OK", "Tulsa Area", 1.25, 18, False, ("tornado", "hail", "flood"), "urban", 550, 75),
    ("OK", "Southwest Oklahoma", 0.9, 6, False, ("tornado", "severe_storm"), "rural", 300, 45),
    ("OK", "Northeast Oklahoma", 0.85, 8, False, ("tornado", "flood"), "rural", 350, 40),
    # LA
    ("LA", "New Orleans Metro", 1.45, 32, True, ("hurricane", "flood", "severe_storm"), "urban", 950, 92),
    ("LA", "Baton Rouge Area", 1.2, 18, False, ("hurricane", "flood"), "suburban", 600, 70),
    ("LA", "Shreveport-Bossier", 0.9, 10, False, ("tornado", "severe_storm"), "suburban", 400, 50),
    ("LA", "Acadiana", 1.1, 12, False, ("hurricane", "flood"), "suburban", 500, 60),
    # MS
    ("MS", "Jackson Metro", 1.0, 14, False, ("tornado", "flood"), "suburban", 450, 55),
    ("MS", "Gulf Coast", 1.25, 18, True, ("hurricane", "flood"), "suburban", 650, 75),
    ("MS", "Northern Mississippi", 0.8, 8, False, ("tornado", "severe_storm"), "rural", 300, 40),
    ("MS", "Delta Region", 0.75, 5, False, ("flood", "tornado"), "rural", 250, 35),
    # IL
    ("IL", "Chicago Metro", 1.2, 45, False, ("severe_storm", "flood", "tornado"), "urban", 800, 75),
    ("IL", "Northern Illinois", 0.95, 16, False, ("tornado", "severe_storm"), "suburban", 450, 50),
    ("IL", "Central Illinois", 0.85, 12, False, ("tornado", "flood"), "rural", 350, 45),
    ("IL", "Southern Illinois", 0.8, 8, False, ("tornado", "flood"), "rural", 300, 40),
    # GA
    ("GA", "Atlanta Metro", 1.2, 38, False, ("tornado", "severe_storm", "hail"), "urban", 750, 78),
    ("GA", "North Georgia", 0.95, 14, False, ("tornado", "severe_storm"), "suburban", 450, 50),
    ("GA", "Savannah Area", 1.1, 12, False, ("hurricane", "flood"), "suburban", 550, 62),
    ("GA", "Augusta Area", 0.9, 10, False, ("tornado", "severe_storm"), "suburban", 400, 48),
    ("GA", "Columbus Area", 0.85, 8, False, ("tornado", "severe_storm"), "suburban", 350, 42),
    # NC
    ("NC", "Charlotte Metro", 1.15, 28, False, ("hurricane", "tornado", "severe_storm"), "urban", 700, 72),
    ("NC", "Raleigh-Durham-Chapel Hill", 1.1, 22, False, ("hurricane", "tornado"), "urban", 650, 68),
    ("NC", "Greensboro Area", 0.95, 16, False, ("tornado", "severe_storm"), "suburban", 500, 55),
    ("NC", "Coastal", 1.2, 18, True, ("hurricane", "flood"), "suburban", 600, 75),
    ("NC", "Western NC", 0.9, 10, False, ("severe_storm", "flood"), "rural", 400, 45),
    # CO
    ("CO", "Denver Metro", 1.25, 32, False, ("hail", "wildfire", "severe_storm"), "urban", 800, 78),
    ("CO", "Front Range", 1.15, 18, False, ("hail", "wildfire"), "suburban", 600, 65),
    ("CO", "Western Colorado", 0.85, 8, False, ("wildfire", "flood"), "rural", 350, 40),
    ("CO", "Southern Colorado", 0.8, 6, False, ("wildfire", "hail"), "rural", 300, 35),
    # WA
    ("WA", "Seattle Metro", 1.1, 28, False, ("earthquake", "flood", "severe_storm"), "urban", 750, 68),
    ("WA", "Tacoma Area", 1.0, 16, False, ("earthquake", "flood"), "suburban", 550, 55),
    ("WA", "Vancouver Area", 0.95, 10, False, ("flood", "wildfire"), "suburban", 450, 48),
    ("WA", "Spokane Area", 0.85, 12, False, ("wildfire", "severe_storm"), "suburban", 400, 42),
    ("WA", "Central Washington", 0.75, 6, False, ("wildfire", "flood"), "rural", 300, 32),
    # NY
    ("NY", "New York City", 1.1, 65, False, ("hurricane", "flood", "severe_storm"), "urban", 950, 72),
    ("NY", "Long Island", 1.15, 32, False, ("hurricane", "flood"), "suburban", 800, 70),
    ("NY", "Hudson Valley", 0.95, 18, False, ("flood", "severe_storm"), "suburban", 600, 55),
    ("NY", "Buffalo Area", 0.85, 14, False, ("severe_storm", "flood"), "suburban", 450, 45),
    ("NY", "Rochester-Syracuse", 0.8, 12, False, ("severe_storm", "flood"), "suburban", 400, 42),
    # MO
    ("MO", "Kansas City Metro", 1.2, 24, False, ("tornado", "hail", "severe_storm"), "urban", 650, 72),
    ("MO", "St. Louis Metro", 1.2, 28, False, ("tornado", "severe_storm", "flood"), "urban", 700, 75),
    ("MO", "Springfield Area", 0.9, 10, False, ("tornado", "severe_storm"), "suburban", 400, 48),
    ("MO", "Central Missouri", 0.8, 8, False, ("tornado", "flood"), "rural", 350, 40),
    # VA
    ("VA", "Northern Virginia", 1.05, 28, False, ("hurricane", "flood", "severe_storm"), "urban", 750, 62),
    ("VA", "Richmond Area", 0.95, 18, False, ("hurricane", "tornado"), "suburban", 550, 52),
    ("VA", "Hampton Roads", 1.1, 22, False, ("hurricane", "flood"), "urban", 650, 65),
    ("VA", "Southwest Virginia", 0.8, 8, False, ("flood", "severe_storm"), "rural", 350, 38),
)


def build_demand_table(
    rows: Iterable[DemandRow],
    last_updated: Optional[str] = DEMAND_DATA_AS_OF,
) -> Mapping[str, Mapping[str, RegionDemandFactor]]:
    """
    Build an immutable state -> region -> RegionDemandFactor table from flat rows.

    Args:
        rows: Tuples of (state, region, multiplier, competitors, disaster, hazards,
            density, avg budget, demand index)
        last_updated: Date stamp recorded on every factor

    Returns:
        Read-only nested mapping keyed by upper-case state code then region name
    """
    table: Dict[str, Dict[str, RegionDemandFactor]] = {}
    for state, region, multiplier, competitors, disaster, hazards, density, budget, demand in rows:
        table.setdefault(state.upper(), {})[region] = RegionDemandFactor(
            baseMultiplier=multiplier,
            competitorCount=competitors,
            disasterDeclaration=disaster,
            primaryHazards=tuple(hazards),
            populationDensity=PopulationDensity(density),
            avgContractorBudget=budget,
            demandIndex=demand,
            lastUpdated=last_updated,
        )
    return MappingProxyType({state: MappingProxyType(regions) for state, regions in table.items()})


REGIONAL_DEMAND_DATA = build_demand_table(_DEMAND_ROWS)


# =============================================================================
# Demand Model
# =============================================================================


class RegionalDemandModel:
    """
    Read-only view over a regional demand table and a trade CPC table.
    """

    def __init__(
        self,
        demand_table: Mapping[str, Mapping[str, RegionDemandFactor]] = REGIONAL_DEMAND_DATA,
        base_cpc_by_trade: Mapping[str, float] = BASE_CPC_BY_TRADE,
        default_factor: RegionDemandFactor = DEFAULT_DEMAND_FACTOR,
        default_cpc: float = DEFAULT_BASE_CPC,
    ):
        self._demand = demand_table
        self._cpc = base_cpc_by_trade
        self.default_factor = default_factor
        self.default_cpc = default_cpc

    def get_region_demand(self, state: str, region: str) -> Optional[RegionDemandFactor]:
        """Return the factor for a state/region pair, or None when not tabulated."""
        if not state or not region:
            return None
        return self._demand.get(state.upper(), {}).get(region)

    def demand_or_default(self, state: str, region: str) -> RegionDemandFactor:
        factor = self.get_region_demand(state, region)
        if factor is None:
            logger.debug(f"No demand data for {state}/{region}; using default factor")
            return self.default_factor
        return factor

    def get_base_cpc_for_trade(self, trade_type: str) -> float:
        """Base CPC for a trade, falling back to the default for unlisted trades."""
        if not trade_type:
            return self.default_cpc
        return self._cpc.get(trade_type.strip().lower(), self.default_cpc)

    def regions_for_state(self, state: str) -> List[str]:
        if not state:
            return []
        return list(self._demand.get(state.upper(), {}).keys())

    def get_all_disaster_regions(self) -> List[DisasterRegion]:
        """Full-table scan for regions with an active disaster declaration."""
        results: List[DisasterRegion] = []
        for state, regions in self._demand.items():
            for region, factor in regions.items():
                if factor.disasterDeclaration:
                    results.append(DisasterRegion(
                        state=state,
                        region=region,
                        hazards=list(factor.primaryHazards),
                    ))
        return results


# Module-level default model over the bundled tables
default_demand_model = RegionalDemandModel()


def get_region_demand(state: str, region: str) -> Optional[RegionDemandFactor]:
    return default_demand_model.get_region_demand(state, region)


def get_base_cpc_for_trade(trade_type: str) -> float:
    return default_demand_model.get_base_cpc_for_trade(trade_type)


def get_all_disaster_regions() -> List[DisasterRegion]:
    return default_demand_model.get_all_disaster_regions()
