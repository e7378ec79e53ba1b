"""
Pytest configuration and shared fixtures for the claim router tests.

Provides:
- Custom markers (slow, api)
- Partner and routing result factories
- A fake regional demand model and geography for allocation tests that must not
  depend on the bundled tables
- A scripted random source for deterministic weighted selection
- Settings cache isolation
"""

from datetime import datetime
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Optional

import pytest

from claimrouter.core.config import get_settings
from claimrouter.data.regional_demand import RegionalDemandModel, build_demand_table
from claimrouter.data.regions import RegionAdjacency, RegionGeography
from claimrouter.models.enums import AdStatus, RotationTier
from claimrouter.models.schemas import Partner, PartnerAdConfig, RoutingResult


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - slow: statistical tests that run many random draws (deselect with -m "not slow")
    - api: tests that exercise the FastAPI application through TestClient
    """
    config.addinivalue_line(
        'markers',
        'slow: marks statistical tests with many random draws (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'api: marks tests exercising the HTTP surface'
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test see settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================
# PARTNER FIXTURES
# ============================================================

@pytest.fixture
def make_partner() -> Callable[..., Partner]:
    """
    Factory for approved roofing partners in ZIP 75001, overridable per field.

    Example:
        partner = make_partner(tier="affiliate", subType="plumbing")
    """
    counter = {"n": 0}

    def _make(**overrides: Any) -> Partner:
        counter["n"] += 1
        fields: Dict[str, Any] = {
            "id": f"partner-{counter['n']}",
            "companyName": f"Partner {counter['n']}",
            "type": "contractor",
            "tier": "partner",
            "subType": "roofing",
            "zipCode": "75001",
            "state": "TX",
            "serviceRegions": [],
            "billingStatus": "active",
            "status": "approved",
            "adConfig": {"monthlyBudget": 1000},
        }
        fields.update(overrides)
        return Partner(**fields)

    return _make


@pytest.fixture
def make_result() -> Callable[[str, float], RoutingResult]:
    def _make(partner_id: str, score: float, tier: str = "partner") -> RoutingResult:
        return RoutingResult(
            partnerId=partner_id,
            companyName=partner_id.title(),
            matchScore=score,
            matchReasons=[],
            tier=tier,
        )

    return _make


@pytest.fixture
def make_ad_partner() -> Callable[..., PartnerAdConfig]:
    """Factory for active rotation partners serving Austin Area, TX."""
    def _make(partner_id: str, **overrides: Any) -> PartnerAdConfig:
        fields: Dict[str, Any] = {
            "partnerId": partner_id,
            "companyName": partner_id.title(),
            "tradeType": "roofing",
            "tier": RotationTier.STANDARD,
            "monthlyBudget": 500,
            "budgetSpent": 100,
            "regions": ["Austin Area"],
            "state": "TX",
            "status": AdStatus.ACTIVE,
        }
        fields.update(overrides)
        return PartnerAdConfig(**fields)

    return _make


# ============================================================
# REGION FIXTURES
# ============================================================

FAKE_STATE = "ZZ"


@pytest.fixture
def fake_demand_model() -> RegionalDemandModel:
    """
    Three-region state with demand 75 (Home), 50 (Near), 50 (Far), no disasters,
    plus a disaster region and a zero-demand state.
    """
    rows = [
        (FAKE_STATE, "Home", 1.0, 15, False, ("hail",), "urban", 500, 75),
        (FAKE_STATE, "Near", 1.0, 15, False, ("hail",), "suburban", 500, 50),
        (FAKE_STATE, "Far", 1.0, 15, False, ("hail",), "rural", 500, 50),
        (FAKE_STATE, "Storm", 1.0, 15, True, ("hurricane",), "urban", 500, 50),
        ("YY", "Quiet", 1.0, 15, False, (), "rural", 500, 0),
        ("YY", "Silent", 1.0, 15, False, (), "rural", 500, 0),
    ]
    return RegionalDemandModel(
        demand_table=build_demand_table(rows, last_updated="2024-01-01"),
        base_cpc_by_trade=MappingProxyType({"roofing": 5.0}),
    )


@pytest.fixture
def fake_geography() -> RegionGeography:
    """Geography where Near is adjacent to Home and Far is not."""
    return RegionGeography(
        zip_ranges=MappingProxyType({FAKE_STATE: ((10, 10),)}),
        region_prefixes=MappingProxyType({
            FAKE_STATE: MappingProxyType({
                "Home": ("010",),
                "Near": ("011",),
                "Far": ("012",),
            }),
        }),
        adjacency=MappingProxyType({
            FAKE_STATE: MappingProxyType({
                "Home": RegionAdjacency(adjacent=("Near",), non_adjacent=("Far", "Storm")),
            }),
        }),
    )


# ============================================================
# RANDOMNESS
# ============================================================

class ScriptedRandom:
    """Random source that replays a fixed sequence of floats."""

    def __init__(self, values: Iterable[float]):
        self._values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


@pytest.fixture
def scripted_random() -> Callable[..., ScriptedRandom]:
    def _make(*values: float) -> ScriptedRandom:
        return ScriptedRandom(values)

    return _make


@pytest.fixture
def mid_month() -> datetime:
    """A clock well before the month-end budget boost."""
    return datetime(2024, 6, 10, 12, 0, 0)
