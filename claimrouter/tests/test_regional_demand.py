"""
Tests for the regional demand model lookups.
"""

import pytest

from claimrouter.data.regional_demand import (
    BASE_CPC_BY_TRADE,
    DEFAULT_BASE_CPC,
    DEFAULT_DEMAND_FACTOR,
    REGIONAL_DEMAND_DATA,
    get_all_disaster_regions,
    get_base_cpc_for_trade,
    get_region_demand,
)
from claimrouter.models.enums import PopulationDensity


class TestRegionDemand:

    def test_known_region(self) -> None:
        factor = get_region_demand("TX", "Austin Area")
        assert factor is not None
        assert factor.baseMultiplier == 1.3
        assert factor.competitorCount == 24
        assert factor.demandIndex == 82
        assert factor.populationDensity is PopulationDensity.URBAN
        assert factor.disasterDeclaration is False

    def test_state_is_case_insensitive(self) -> None:
        assert get_region_demand("tx", "Austin Area") == get_region_demand("TX", "Austin Area")

    @pytest.mark.parametrize("state,region", [
        ("TX", "Nowhere"), ("ZZ", "Austin Area"), ("", "Austin Area"), ("TX", ""),
    ])
    def test_unknown_pairs_return_none(self, state, region) -> None:
        assert get_region_demand(state, region) is None

    def test_demand_or_default(self, fake_demand_model) -> None:
        assert fake_demand_model.demand_or_default("ZZ", "Home").demandIndex == 75
        assert fake_demand_model.demand_or_default("ZZ", "Missing") is DEFAULT_DEMAND_FACTOR

    def test_factors_are_immutable(self) -> None:
        factor = get_region_demand("TX", "Austin Area")
        with pytest.raises(Exception):
            factor.demandIndex = 1

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            REGIONAL_DEMAND_DATA["TX"] = {}

    def test_every_factor_is_within_range(self) -> None:
        for regions in REGIONAL_DEMAND_DATA.values():
            for factor in regions.values():
                assert 0 <= factor.demandIndex <= 100
                assert factor.baseMultiplier > 0

    def test_regions_for_state(self, fake_demand_model) -> None:
        assert fake_demand_model.regions_for_state("zz") == ["Home", "Near", "Far", "Storm"]
        assert fake_demand_model.regions_for_state("QQ") == []


class TestBaseCpc:

    def test_known_trade(self) -> None:
        assert get_base_cpc_for_trade("roofing") == 4.50
        assert get_base_cpc_for_trade("  Roofing ") == 4.50

    def test_unknown_trade_uses_default(self) -> None:
        assert get_base_cpc_for_trade("landscaping") == DEFAULT_BASE_CPC
        assert get_base_cpc_for_trade("") == DEFAULT_BASE_CPC

    def test_injected_table(self, fake_demand_model) -> None:
        assert fake_demand_model.get_base_cpc_for_trade("roofing") == 5.0
        assert fake_demand_model.get_base_cpc_for_trade("plumbing") == DEFAULT_BASE_CPC

    def test_table_has_no_negative_prices(self) -> None:
        assert all(cpc > 0 for cpc in BASE_CPC_BY_TRADE.values())


class TestDisasterRegions:

    def test_houston_is_flagged(self) -> None:
        flagged = {(d.state, d.region) for d in get_all_disaster_regions()}
        assert ("TX", "Houston Metro") in flagged
        assert ("TX", "Austin Area") not in flagged

    def test_only_declared_regions_are_returned(self) -> None:
        for disaster in get_all_disaster_regions():
            assert REGIONAL_DEMAND_DATA[disaster.state][disaster.region].disasterDeclaration

    def test_fake_model(self, fake_demand_model) -> None:
        disasters = fake_demand_model.get_all_disaster_regions()
        assert [(d.state, d.region, d.hazards) for d in disasters] == [("ZZ", "Storm", ["hurricane"])]
