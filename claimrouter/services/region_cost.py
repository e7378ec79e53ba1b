"""
Regional Cost Calculator

Derives per-region pricing for a trade from the regional demand model: an adjusted
cost-per-click, a three-tier monthly budget recommendation, a competitiveness bucket
and a plain-language explanation shown to partners as pricing justification.

Budget tiers scale the region's typical contractor budget by a competitiveness factor
``clamp(2.0 - competitorCount / 40, 0.6, 1.5)``:

- minimum: 0.3x
- recommended: 1.0x
- competitive: 1.8x
"""

import math

from claimrouter.data.regional_demand import RegionalDemandModel, default_demand_model
from claimrouter.models.enums import Competitiveness
from claimrouter.models.schemas import BudgetTiers, RegionalCostBreakdown, RegionDemandFactor


MIN_COMPETITIVENESS_FACTOR = 0.6
MAX_COMPETITIVENESS_FACTOR = 1.5
COMPETITORS_PER_FACTOR_POINT = 40

MINIMUM_BUDGET_RATIO = 0.3
COMPETITIVE_BUDGET_RATIO = 1.8


def round_half_up(value: float) -> int:
    """Round to whole currency units, .5 rounding up."""
    return math.floor(value + 0.5)


def competitiveness_factor(competitor_count: int) -> float:
    raw = 2.0 - competitor_count / COMPETITORS_PER_FACTOR_POINT
    return max(MIN_COMPETITIVENESS_FACTOR, min(MAX_COMPETITIVENESS_FACTOR, raw))


def classify_competitiveness(competitor_count: int) -> Competitiveness:
    if competitor_count >= 35:
        return Competitiveness.VERY_HIGH
    if competitor_count >= 20:
        return Competitiveness.HIGH
    if competitor_count >= 10:
        return Competitiveness.MEDIUM
    return Competitiveness.LOW


def build_explanation(region: str, factor: RegionDemandFactor, competitiveness: Competitiveness) -> str:
    hazards = (
        ", ".join(h.replace("_", " ") for h in factor.primaryHazards)
        if factor.primaryHazards
        else "general weather"
    )
    parts = [
        f"{region} has {competitiveness.value} competition with "
        f"{factor.competitorCount} active contractors.",
        f"Demand index: {factor.demandIndex}/100.",
        f"Primary hazards: {hazards}.",
    ]
    if factor.disasterDeclaration:
        parts.append("Active disaster declaration increases demand.")
    parts.append(
        "Recommended budget ensures visibility; lower budgets still rotate during off-peak hours."
    )
    return " ".join(parts)


class RegionCostCalculator:
    """Cost breakdowns over a demand model."""

    def __init__(self, demand_model: RegionalDemandModel = default_demand_model):
        self.demand_model = demand_model

    def breakdown(
        self,
        state: str,
        region: str,
        zip_code: str = "",
        trade_type: str = "",
    ) -> RegionalCostBreakdown:
        """
        Price one region for a trade.

        Unknown state/region pairs are priced with the default demand factor.
        """
        factor = self.demand_model.demand_or_default(state, region)
        base_cpc = self.demand_model.get_base_cpc_for_trade(trade_type)
        adjusted_cpc = round(base_cpc * factor.baseMultiplier, 2)

        scale = factor.avgContractorBudget * competitiveness_factor(factor.competitorCount)
        competitiveness = classify_competitiveness(factor.competitorCount)

        return RegionalCostBreakdown(
            region=region,
            state=state,
            zip=zip_code or "",
            tradeType=trade_type,
            baseCpc=base_cpc,
            adjustedCpc=adjusted_cpc,
            recommendedMonthlyBudget=BudgetTiers(
                minimum=round_half_up(scale * MINIMUM_BUDGET_RATIO),
                recommended=round_half_up(scale),
                competitive=round_half_up(scale * COMPETITIVE_BUDGET_RATIO),
            ),
            costMultiplier=factor.baseMultiplier,
            competitiveness=competitiveness,
            competitorCount=factor.competitorCount,
            demandIndex=factor.demandIndex,
            hasDisasterDeclaration=factor.disasterDeclaration,
            primaryHazards=list(factor.primaryHazards),
            explanation=build_explanation(region, factor, competitiveness),
        )


default_cost_calculator = RegionCostCalculator()


def calculate_region_cost_breakdown(
    state: str,
    region: str,
    zip_code: str = "",
    trade_type: str = "",
) -> RegionalCostBreakdown:
    return default_cost_calculator.breakdown(state, region, zip_code, trade_type)
