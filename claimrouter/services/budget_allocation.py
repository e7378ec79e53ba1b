"""
Budget Allocation Service

Spreads a partner's monthly ad budget across candidate regions and builds the full
region recommendation shown during partner signup.

Weighting per region:
- raw weight = demandIndex / sum(demandIndex) over the candidates (0.1 each when the
  candidates carry no demand at all)
- x1.5 for the home region, otherwise x1.2 for regions adjacent to home
- x1.3 for regions under an active disaster declaration (compounds with the above)
- boosted weights are renormalized to sum to 1

Budgets and percentages are rounded per region, then reconciled so that they sum
exactly to the total budget and to 100. The first allocation in input order absorbs
the remainder; if that would push it below zero it stops at zero and the rest of the
remainder moves on to the next allocation.
"""

import logging
from typing import List, Optional, Sequence

from claimrouter.core.config import get_settings
from claimrouter.data.regions import RegionGeography, default_geography
from claimrouter.models.enums import AllocationPriority, RegionPlanType
from claimrouter.models.schemas import (
    AvailableRegions,
    BudgetAllocation,
    FullRegionRecommendation,
)
from claimrouter.services.region_cost import (
    RegionCostCalculator,
    default_cost_calculator,
    round_half_up,
)


logger = logging.getLogger(__name__)


HOME_REGION_BOOST = 1.5
ADJACENT_REGION_BOOST = 1.2
DISASTER_REGION_BOOST = 1.3

# Raw weight for every region when total demand is zero
FLOOR_WEIGHT = 0.1

# Share of the recommended per-region budget used for the default total
DEFAULT_BUDGET_SHARE = 0.6

UNKNOWN_HOME_REGION = "Unknown"


def lead_conversion_rate(demand_index: int) -> float:
    if demand_index > 70:
        return 0.08
    if demand_index > 50:
        return 0.06
    return 0.04


def absorb_remainder(values: Sequence[int], target: int) -> List[int]:
    """
    Shift ``target - sum(values)`` onto the values in order, never below zero.

    The first value takes the whole remainder unless that would make it negative,
    in which case it is clamped at zero and the residue moves to the next value.
    """
    adjusted = list(values)
    diff = target - sum(adjusted)
    for index, value in enumerate(adjusted):
        if diff == 0:
            break
        new_value = max(0, value + diff)
        diff -= new_value - value
        adjusted[index] = new_value
    return adjusted


class BudgetAllocator:
    """
    Budget allocation and region recommendation over a cost calculator and geography.

    Args:
        cost_calculator: Prices each candidate region; its demand model also supplies
            disaster declarations
        geography: ZIP, region and adjacency lookups
    """

    def __init__(
        self,
        cost_calculator: RegionCostCalculator = default_cost_calculator,
        geography: RegionGeography = default_geography,
    ):
        self.cost_calculator = cost_calculator
        self.geography = geography

    @property
    def demand_model(self):
        return self.cost_calculator.demand_model

    def allocate(
        self,
        regions: Sequence[str],
        state: str,
        trade_type: str,
        total_budget: int,
        home_region: str,
    ) -> List[BudgetAllocation]:
        """
        Allocate a monthly budget across regions.

        Args:
            regions: Candidate region names; order decides who absorbs rounding
            state: State code the regions belong to
            trade_type: Trade used to price clicks
            total_budget: Whole-dollar monthly budget
            home_region: The partner's home region

        Returns:
            Allocations summing exactly to total_budget and to 100 percent, ordered
            primary, secondary, tertiary (input order within a priority)
        """
        if not regions:
            return []

        breakdowns = [
            self.cost_calculator.breakdown(state, region, "", trade_type)
            for region in regions
        ]
        total_demand = sum(b.demandIndex for b in breakdowns)

        weights = []
        priorities = []
        for breakdown in breakdowns:
            is_home = breakdown.region == home_region
            is_adjacent = not is_home and self.geography.is_adjacent(
                state, home_region, breakdown.region
            )

            weight = breakdown.demandIndex / total_demand if total_demand > 0 else FLOOR_WEIGHT
            if is_home:
                weight *= HOME_REGION_BOOST
            elif is_adjacent:
                weight *= ADJACENT_REGION_BOOST
            if breakdown.hasDisasterDeclaration:
                weight *= DISASTER_REGION_BOOST
            weights.append(weight)

            if is_home or breakdown.hasDisasterDeclaration:
                priorities.append(AllocationPriority.PRIMARY)
            elif is_adjacent:
                priorities.append(AllocationPriority.SECONDARY)
            else:
                priorities.append(AllocationPriority.TERTIARY)

        weight_sum = sum(weights)
        shares = [w / weight_sum for w in weights]

        budgets = absorb_remainder([round_half_up(total_budget * s) for s in shares], total_budget)
        percentages = absorb_remainder([round_half_up(s * 100) for s in shares], 100)

        allocations = []
        for breakdown, budget, percentage, priority in zip(breakdowns, budgets, percentages, priorities):
            clicks = round_half_up(budget / breakdown.adjustedCpc) if breakdown.adjustedCpc > 0 else 0
            allocations.append(BudgetAllocation(
                region=breakdown.region,
                allocatedBudget=budget,
                percentage=percentage,
                estimatedClicks=clicks,
                estimatedLeads=round_half_up(clicks * lead_conversion_rate(breakdown.demandIndex)),
                cpcRate=breakdown.adjustedCpc,
                priority=priority,
            ))

        return sorted(allocations, key=lambda a: a.priority.rank)

    # =========================================================================
    # Region recommendation
    # =========================================================================

    def _resolve_home(self, zip_code: str):
        settings = get_settings()
        located = self.geography.find_region_by_zip(zip_code)
        if located:
            return located
        state = self.geography.state_from_zip(zip_code) or settings.default_state
        return state, None

    def get_available_regions(self, zip_code: str) -> AvailableRegions:
        """Regions a partner at this ZIP can buy, split by adjacency to home."""
        state, home_region = self._resolve_home(zip_code)
        all_regions = self.geography.regions_for_state(state)
        if not all_regions:
            return AvailableRegions(state=state, homeRegion=UNKNOWN_HOME_REGION)

        home_region = home_region or all_regions[0]
        return AvailableRegions(
            state=state,
            homeRegion=home_region,
            allRegions=all_regions,
            adjacentRegions=self.geography.adjacent_regions(state, home_region),
            nonAdjacentRegions=self.geography.non_adjacent_regions(state, home_region),
        )

    def generate_full_recommendation(
        self,
        zip_code: str,
        trade_type: str,
        plan_type: RegionPlanType,
        budget: Optional[int] = None,
        selected_regions: Optional[Sequence[str]] = None,
    ) -> FullRegionRecommendation:
        """
        Build the region plan for a partner's home ZIP.

        Regions come from ``selected_regions`` when given, otherwise from the plan's
        bundle around the home region. Without an explicit budget the total defaults
        to 60% of the home region's recommended budget per region.
        """
        plan_type = RegionPlanType(plan_type)
        state, home_region = self._resolve_home(zip_code)
        home_region = home_region or get_settings().default_home_region

        state_regions = self.geography.regions_for_state(state)
        if state_regions and home_region not in state_regions:
            home_region = state_regions[0]

        if selected_regions:
            regions = list(selected_regions)
        else:
            bundle = self.geography.region_allocation_by_plan(state, home_region, plan_type)
            regions = [
                region
                for region in [
                    bundle.homeRegion,
                    *bundle.includedAdjacent,
                    *bundle.includedNonAdjacent,
                    *bundle.selectableNonAdjacent[:1],
                ]
                if region
            ]

        home_cost = self.cost_calculator.breakdown(state, home_region, zip_code, trade_type)
        tiers = home_cost.recommendedMonthlyBudget
        total_budget = budget or round_half_up(tiers.recommended * len(regions) * DEFAULT_BUDGET_SHARE)

        allocations = self.allocate(regions, state, trade_type, total_budget, home_region)
        active_disasters = [
            d for d in self.demand_model.get_all_disaster_regions() if d.state == state
        ]

        count = len(allocations) or 1
        avg_demand = sum(
            self.demand_model.demand_or_default(state, a.region).demandIndex for a in allocations
        ) / count
        avg_cpc = sum(a.cpcRate for a in allocations) / count
        total_leads = sum(a.estimatedLeads for a in allocations)
        trade_label = trade_type.replace("_", " ")

        community_need = None
        if active_disasters:
            hazard = active_disasters[0].hazards[0] if active_disasters[0].hazards else "disaster"
            community_need = (
                f"High demand for {trade_label} services due to recent "
                f"{hazard.replace('_', ' ')} activity"
            )
        elif avg_demand > 75:
            community_need = f"Strong seasonal demand for {trade_label} services in {state}"

        if active_disasters:
            suggestion = (
                f"Active disaster declarations in your region create high demand. "
                f"Your ${total_budget}/month budget should generate approximately "
                f"{total_leads} qualified leads. Consider increasing budget for maximum "
                f"visibility during recovery period."
            )
        elif total_budget < tiers.minimum * len(regions):
            suggestion = (
                f"Your budget is below the competitive threshold for {len(regions)} regions. "
                f"You'll still receive rotation, but primarily during off-peak hours. "
                f"Consider focusing on fewer regions or increasing budget for better visibility."
            )
        elif total_budget >= tiers.competitive:
            per_lead = f" at ${round_half_up(total_budget / total_leads)} per lead" if total_leads else ""
            suggestion = (
                f"Your budget positions you competitively across all selected regions. "
                f"Estimated {total_leads} monthly leads{per_lead}. "
                f"Premium placement during peak hours included."
            )
        else:
            suggestion = (
                f"Your ${total_budget}/month budget provides good visibility across "
                f"{len(regions)} regions. Estimated {total_leads} leads at approximately "
                f"${round_half_up(avg_cpc)}/click. Adjust region selection based on your service area."
            )

        competitive_total = tiers.competitive * len(regions)
        score = round_half_up(total_budget / competitive_total * 100) if competitive_total > 0 else 0

        logger.info(
            f"Region recommendation for {zip_code}: {state}/{home_region} plan={plan_type.value} "
            f"budget={total_budget} regions={len(regions)}"
        )

        return FullRegionRecommendation(
            homeRegion=home_region,
            state=state,
            tradeType=trade_type,
            planType=plan_type,
            totalBudget=total_budget,
            regions=allocations,
            communityNeed=community_need,
            activeDisasters=active_disasters,
            suggestion=suggestion,
            avgCpcRate=round(avg_cpc, 2),
            estimatedMonthlyLeads=total_leads,
            competitivenessScore=min(100, score),
        )


default_budget_allocator = BudgetAllocator()


def allocate_budget_across_regions(
    regions: Sequence[str],
    state: str,
    trade_type: str,
    total_budget: int,
    home_region: str,
) -> List[BudgetAllocation]:
    return default_budget_allocator.allocate(regions, state, trade_type, total_budget, home_region)


def generate_full_recommendation(
    zip_code: str,
    trade_type: str,
    plan_type: RegionPlanType,
    budget: Optional[int] = None,
    selected_regions: Optional[Sequence[str]] = None,
) -> FullRegionRecommendation:
    return default_budget_allocator.generate_full_recommendation(
        zip_code, trade_type, plan_type, budget, selected_regions
    )


def get_available_regions(zip_code: str) -> AvailableRegions:
    return default_budget_allocator.get_available_regions(zip_code)
