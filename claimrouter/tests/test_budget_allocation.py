"""
Tests for regional budget allocation and the full region recommendation.
"""

from types import MappingProxyType

import pytest

from claimrouter.data.regional_demand import RegionalDemandModel, build_demand_table
from claimrouter.models.enums import AllocationPriority, RegionPlanType
from claimrouter.services.budget_allocation import (
    BudgetAllocator,
    absorb_remainder,
    allocate_budget_across_regions,
    generate_full_recommendation,
    get_available_regions,
    lead_conversion_rate,
)
from claimrouter.services.region_cost import RegionCostCalculator


@pytest.fixture
def allocator(fake_demand_model, fake_geography) -> BudgetAllocator:
    return BudgetAllocator(RegionCostCalculator(fake_demand_model), fake_geography)


@pytest.fixture
def calm_allocator(fake_geography) -> BudgetAllocator:
    """Same geography with no disaster anywhere in the state."""
    rows = [
        ("ZZ", "Home", 1.0, 15, False, ("hail",), "urban", 500, 60),
        ("ZZ", "Near", 1.0, 15, False, ("hail",), "suburban", 500, 60),
        ("ZZ", "Far", 1.0, 15, False, ("hail",), "rural", 500, 60),
    ]
    model = RegionalDemandModel(
        demand_table=build_demand_table(rows),
        base_cpc_by_trade=MappingProxyType({"roofing": 5.0}),
    )
    return BudgetAllocator(RegionCostCalculator(model), fake_geography)


class TestAbsorbRemainder:

    def test_first_value_takes_remainder(self) -> None:
        assert absorb_remainder([3, 3, 3], 10) == [4, 3, 3]
        assert absorb_remainder([506, 270, 225], 1000) == [505, 270, 225]

    def test_clamps_at_zero_and_cascades(self) -> None:
        assert absorb_remainder([0, 5, 5], 7) == [0, 2, 5]
        assert absorb_remainder([1, 1, 5], 3) == [0, 0, 3]

    def test_exact_input_is_unchanged(self) -> None:
        assert absorb_remainder([50, 50], 100) == [50, 50]

    def test_empty(self) -> None:
        assert absorb_remainder([], 0) == []


class TestAllocate:

    def test_home_adjacent_and_far_regions(self, allocator) -> None:
        allocations = allocator.allocate(["Home", "Near", "Far"], "ZZ", "roofing", 1000, "Home")

        assert [a.region for a in allocations] == ["Home", "Near", "Far"]
        assert [a.allocatedBudget for a in allocations] == [505, 270, 225]
        assert [a.percentage for a in allocations] == [51, 27, 22]
        assert [a.priority for a in allocations] == [
            AllocationPriority.PRIMARY,
            AllocationPriority.SECONDARY,
            AllocationPriority.TERTIARY,
        ]
        assert [a.estimatedClicks for a in allocations] == [101, 54, 45]
        assert [a.estimatedLeads for a in allocations] == [8, 2, 2]
        assert all(a.cpcRate == 5.0 for a in allocations)

    @pytest.mark.parametrize("total", [0, 1, 7, 99, 1000, 2347])
    def test_totals_are_exact(self, allocator, total) -> None:
        allocations = allocator.allocate(["Home", "Near", "Far", "Storm"], "ZZ", "roofing", total, "Home")
        assert sum(a.allocatedBudget for a in allocations) == total
        assert sum(a.percentage for a in allocations) == 100
        assert all(a.allocatedBudget >= 0 and a.percentage >= 0 for a in allocations)

    def test_disaster_region_is_primary_and_sorted_first(self, allocator) -> None:
        allocations = allocator.allocate(["Far", "Storm"], "ZZ", "roofing", 1000, "Home")

        assert [a.region for a in allocations] == ["Storm", "Far"]
        assert allocations[0].priority is AllocationPriority.PRIMARY
        assert allocations[0].allocatedBudget == 565
        assert allocations[1].allocatedBudget == 435

    def test_zero_demand_uses_floor_weight(self, allocator) -> None:
        allocations = allocator.allocate(["Quiet", "Silent"], "YY", "roofing", 100, "Quiet")
        assert [a.allocatedBudget for a in allocations] == [60, 40]
        assert [a.percentage for a in allocations] == [60, 40]

    def test_half_shares_round_up_before_reconciling(self, allocator) -> None:
        # Equal shares of 5 round to 3 + 3; the first allocation gives back the extra unit
        allocations = allocator.allocate(["Quiet", "Silent"], "YY", "roofing", 5, "Elsewhere")
        assert [a.allocatedBudget for a in allocations] == [2, 3]
        assert [a.percentage for a in allocations] == [50, 50]

    def test_empty_regions(self, allocator) -> None:
        assert allocator.allocate([], "ZZ", "roofing", 1000, "Home") == []

    def test_unknown_regions_get_default_pricing(self, allocator) -> None:
        allocations = allocator.allocate(["Home", "Mystery"], "ZZ", "roofing", 500, "Home")
        mystery = next(a for a in allocations if a.region == "Mystery")
        assert mystery.cpcRate == 5.0
        assert sum(a.allocatedBudget for a in allocations) == 500

    def test_default_tables(self) -> None:
        allocations = allocate_budget_across_regions(
            ["Austin Area", "Houston Metro", "West Texas"], "TX", "roofing", 2000, "Austin Area"
        )
        assert sum(a.allocatedBudget for a in allocations) == 2000
        assert {a.region for a in allocations if a.priority is AllocationPriority.PRIMARY} == {
            "Austin Area", "Houston Metro",
        }


class TestLeadConversion:

    @pytest.mark.parametrize("demand,rate", [(90, 0.08), (71, 0.08), (70, 0.06), (51, 0.06), (50, 0.04), (0, 0.04)])
    def test_rates(self, demand, rate) -> None:
        assert lead_conversion_rate(demand) == rate


class TestAvailableRegions:

    def test_home_zip(self, allocator) -> None:
        available = allocator.get_available_regions("01001")
        assert available.state == "ZZ"
        assert available.homeRegion == "Home"
        assert available.allRegions == ["Home", "Near", "Far"]
        assert available.adjacentRegions == ["Near"]
        assert available.nonAdjacentRegions == ["Far", "Storm"]

    def test_unplaceable_zip_uses_default_state(self, allocator) -> None:
        available = allocator.get_available_regions("00001")
        assert available.state == "TX"
        assert available.homeRegion == "Unknown"
        assert available.allRegions == []

    def test_austin_with_bundled_tables(self) -> None:
        available = get_available_regions("78701")
        assert (available.state, available.homeRegion) == ("TX", "Austin Area")
        assert "Houston Metro" in available.adjacentRegions


class TestFullRecommendation:

    def test_default_budget_and_bundle(self, allocator) -> None:
        rec = allocator.generate_full_recommendation("01001", "roofing", RegionPlanType.STANDARD)

        assert rec.homeRegion == "Home"
        assert rec.state == "ZZ"
        assert [a.region for a in rec.regions] == ["Home", "Near", "Far"]
        # 750 recommended x 3 regions x 0.6
        assert rec.totalBudget == 1350
        assert sum(a.allocatedBudget for a in rec.regions) == 1350
        assert rec.competitivenessScore == 33
        assert rec.planType is RegionPlanType.STANDARD

    def test_disaster_messaging(self, allocator) -> None:
        rec = allocator.generate_full_recommendation("01001", "roofing", "standard", budget=1000)

        assert [d.region for d in rec.activeDisasters] == ["Storm"]
        assert rec.communityNeed == "High demand for roofing services due to recent hurricane activity"
        assert rec.suggestion.startswith("Active disaster declarations in your region")
        assert "$1000/month" in rec.suggestion
        assert rec.estimatedMonthlyLeads == 12
        assert rec.avgCpcRate == 5.0

    def test_zero_budget_falls_back_to_default(self, allocator) -> None:
        rec = allocator.generate_full_recommendation("01001", "roofing", RegionPlanType.STANDARD, budget=0)
        assert rec.totalBudget == 1350

    def test_selected_regions_override_bundle(self, allocator) -> None:
        rec = allocator.generate_full_recommendation(
            "01001", "roofing", RegionPlanType.PREMIUM, budget=800, selected_regions=["Home", "Far"]
        )
        assert sorted(a.region for a in rec.regions) == ["Far", "Home"]
        assert rec.totalBudget == 800

    def test_low_budget_suggestion(self, calm_allocator) -> None:
        rec = calm_allocator.generate_full_recommendation("01001", "roofing", RegionPlanType.STANDARD, budget=100)
        assert rec.activeDisasters == []
        assert rec.communityNeed is None
        assert rec.suggestion.startswith("Your budget is below the competitive threshold for 3 regions.")

    def test_competitive_budget_suggestion(self, calm_allocator) -> None:
        rec = calm_allocator.generate_full_recommendation("01001", "roofing", RegionPlanType.STANDARD, budget=5000)
        assert rec.suggestion.startswith("Your budget positions you competitively")
        assert "Estimated " in rec.suggestion
        assert rec.competitivenessScore == 100

    def test_mid_budget_suggestion(self, calm_allocator) -> None:
        rec = calm_allocator.generate_full_recommendation("01001", "roofing", RegionPlanType.STANDARD, budget=1000)
        assert "provides good visibility across 3 regions" in rec.suggestion
        assert "$5/click" in rec.suggestion

    def test_score_is_capped(self, calm_allocator) -> None:
        rec = calm_allocator.generate_full_recommendation("01001", "roofing", RegionPlanType.STANDARD, budget=100000)
        assert rec.competitivenessScore == 100

    def test_bundled_tables(self) -> None:
        rec = generate_full_recommendation("78701", "roofing", RegionPlanType.STANDARD)
        assert rec.homeRegion == "Austin Area"
        assert rec.regions[0].region == "Austin Area"
        assert sum(a.percentage for a in rec.regions) == 100
        assert 0 <= rec.competitivenessScore <= 100
