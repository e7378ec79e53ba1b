"""
Competitive Rotation Service

Decides how often each partner's ad is shown in a region relative to its competitors.

Rotation weight is the product of:
- tier multiplier: premium 4.0, standard 2.0, build_your_own 1.5, free 0.5
- budget factor: budget relative to the average paid budget, clamped to [0.3, 2.0],
  x1.5 late in the month (past 85%) while more than 30% of the budget remains
- competitive position: up to 2.0 for budgets large relative to the whole market
- demand bonus: 1.3 above demand index 70, 1.1 above 50
- disaster bonus: 1.8 for premium partners in a declared disaster region, 1.2 otherwise
- freshness penalty: 0.5 right after being shown, recovering linearly over 15 minutes
- trade association penalty: 0.5

and is capped at 10. Weights are ranked descending; rank 1 has the highest weight.
"""

import calendar
import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from claimrouter.data.regional_demand import RegionalDemandModel, default_demand_model
from claimrouter.models.enums import AdStatus, RotationTier
from claimrouter.models.schemas import (
    BudgetPacing,
    BudgetRange,
    CompetitiveInsights,
    PartnerAdConfig,
    PlacementResult,
    RotationFactors,
    RotationWeight,
)
from claimrouter.services.winner_selection import RandomSource


logger = logging.getLogger(__name__)


TIER_MULTIPLIERS: Mapping[RotationTier, float] = MappingProxyType({
    RotationTier.PREMIUM: 4.0,
    RotationTier.STANDARD: 2.0,
    RotationTier.BUILD_YOUR_OWN: 1.5,
    RotationTier.FREE: 0.5,
})

TIER_RANK: Mapping[RotationTier, int] = MappingProxyType({
    RotationTier.PREMIUM: 3,
    RotationTier.STANDARD: 2,
    RotationTier.BUILD_YOUR_OWN: 1,
    RotationTier.FREE: 0,
})

TIME_DECAY_MINUTES = 15
MONTH_END_PROGRESS = 0.85
MONTH_END_MIN_REMAINING = 0.3
MONTH_END_BUDGET_BOOST = 1.5
DISASTER_REGION_BOOST = 1.8
DISASTER_REGION_BOOST_NON_PREMIUM = 1.2
MAX_WEIGHT_CAP = 10.0

DEFAULT_AVG_BUDGET = 500.0
DEFAULT_DEMAND_INDEX = 50
CROWDED_MARKET_COMPETITORS = 20
CROWDED_MARKET_CPC_MARKUP = 1.2

# Acceptable spend rate band for a partner to count as on pace
PACING_BAND = (0.8, 1.2)


def month_progress(now: datetime):
    """Return (day of month, days in month)."""
    return now.day, calendar.monthrange(now.year, now.month)[1]


def as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class RotationEngine:
    """
    Rotation weights over a regional demand model.

    Args:
        demand_model: Source of demand index, disaster status, competitor count and CPC
    """

    def __init__(self, demand_model: RegionalDemandModel = default_demand_model):
        self.demand_model = demand_model

    @staticmethod
    def is_eligible(
        partner: PartnerAdConfig,
        region: str,
        state: str,
        trade_type: Optional[str],
    ) -> bool:
        if partner.status != AdStatus.ACTIVE:
            return False
        if partner.tier != RotationTier.FREE and partner.budgetSpent >= partner.monthlyBudget:
            return False
        if region not in partner.regions:
            return False
        if partner.state.upper() != state.upper():
            return False
        if trade_type and partner.tradeType.strip().lower() != trade_type.strip().lower():
            return False
        return True

    def calculate_weights(
        self,
        partners: Iterable[PartnerAdConfig],
        region: str,
        state: str,
        trade_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[RotationWeight]:
        """
        Rotation weights for the partners eligible in a region.

        Eligible partners are active, have budget left (free tier excepted), serve the
        region and state, and match the trade when one is given.

        Returns:
            Weights sorted descending with ``priority`` set to the 1-based rank
        """
        now = now or datetime.now(timezone.utc)
        eligible = [p for p in partners if self.is_eligible(p, region, state, trade_type)]
        if not eligible:
            return []

        factor = self.demand_model.get_region_demand(state, region)
        demand_index = factor.demandIndex if factor else DEFAULT_DEMAND_INDEX
        has_disaster = factor.disasterDeclaration if factor else False
        competitor_count = factor.competitorCount if factor and factor.competitorCount else len(eligible)
        region_multiplier = factor.baseMultiplier if factor else 1.0

        paid = [p.monthlyBudget for p in eligible if p.monthlyBudget > 0]
        avg_budget = sum(paid) / len(paid) if paid else DEFAULT_AVG_BUDGET

        day, days_in_month = month_progress(now)
        is_month_end = day / days_in_month > MONTH_END_PROGRESS

        demand_bonus = 1.3 if demand_index > 70 else 1.1 if demand_index > 50 else 1.0
        cpc_markup = CROWDED_MARKET_CPC_MARKUP if competitor_count > CROWDED_MARKET_COMPETITORS else 1.0

        weights = []
        for partner in eligible:
            tier_multiplier = TIER_MULTIPLIERS.get(partner.tier, 1.0)

            if partner.monthlyBudget > 0:
                budget_factor = min(2.0, max(0.3, partner.monthlyBudget / avg_budget))
                remaining = (partner.monthlyBudget - partner.budgetSpent) / partner.monthlyBudget
                if is_month_end and remaining > MONTH_END_MIN_REMAINING:
                    budget_factor *= MONTH_END_BUDGET_BOOST
                competitive_position = min(
                    2.0, 1.0 + partner.monthlyBudget / (avg_budget * competitor_count) * 0.5
                )
            else:
                budget_factor = 0.3
                competitive_position = 1.0

            if has_disaster:
                disaster_bonus = (
                    DISASTER_REGION_BOOST if partner.tier == RotationTier.PREMIUM
                    else DISASTER_REGION_BOOST_NON_PREMIUM
                )
            else:
                disaster_bonus = 1.0

            freshness_penalty = 1.0
            if partner.lastShownAt is not None:
                minutes = (as_utc(now) - as_utc(partner.lastShownAt)).total_seconds() / 60
                if minutes < TIME_DECAY_MINUTES:
                    freshness_penalty = 0.5 + max(0.0, minutes) / TIME_DECAY_MINUTES * 0.5

            association_penalty = 0.5 if partner.isTradeAssociation else 1.0

            raw = (
                tier_multiplier
                * budget_factor
                * competitive_position
                * demand_bonus
                * disaster_bonus
                * freshness_penalty
                * association_penalty
            )
            base_cpc = self.demand_model.get_base_cpc_for_trade(partner.tradeType)

            weights.append(RotationWeight(
                partnerId=partner.partnerId,
                weight=min(raw, MAX_WEIGHT_CAP),
                factors=RotationFactors(
                    tierMultiplier=tier_multiplier,
                    budgetFactor=budget_factor,
                    competitivePosition=competitive_position,
                    demandBonus=demand_bonus,
                    disasterBonus=disaster_bonus,
                    freshnessPenalty=freshness_penalty,
                    tradeAssociationPenalty=association_penalty,
                ),
                estimatedCpc=round(base_cpc * region_multiplier * cpc_markup, 2),
            ))

        weights.sort(key=lambda w: w.weight, reverse=True)
        for rank, weight in enumerate(weights, start=1):
            weight.priority = rank

        logger.debug(f"Rotation weights for {state}/{region}: {len(weights)} eligible")
        return weights

    def select_for_placement(
        self,
        partners: Iterable[PartnerAdConfig],
        region: str,
        state: str,
        trade_type: Optional[str] = None,
        max_results: int = 5,
        now: Optional[datetime] = None,
    ) -> PlacementResult:
        now = now or datetime.now(timezone.utc)
        weights = self.calculate_weights(partners, region, state, trade_type, now)
        return PlacementResult(
            topPartners=weights[:max_results],
            totalEligible=len(weights),
            region=region,
            tradeType=trade_type or "all",
            timestamp=now,
        )


def weighted_random_select(
    weights: Sequence[RotationWeight],
    count: int = 1,
    rng: Optional[RandomSource] = None,
) -> List[RotationWeight]:
    """
    Draw ``count`` weights without replacement, each draw proportional to weight
    among the entries not yet drawn.
    """
    if not weights:
        return []
    if len(weights) <= count:
        return list(weights)

    rng = rng or np.random.default_rng()
    available = list(weights)
    selected = []
    while available and len(selected) < count:
        remaining = float(rng.random()) * sum(w.weight for w in available)
        chosen = len(available) - 1
        for index, candidate in enumerate(available):
            remaining -= candidate.weight
            if remaining <= 0:
                chosen = index
                break
        selected.append(available.pop(chosen))
    return selected


def calculate_budget_pacing(partner: PartnerAdConfig, now: Optional[datetime] = None) -> BudgetPacing:
    """
    Compare a partner's spend so far with a straight-line monthly spend.

    ``spendRate`` is actual over ideal spend ratio; 0.8-1.2 counts as on pace.
    """
    now = now or datetime.now(timezone.utc)
    day, days_in_month = month_progress(now)
    days_remaining = days_in_month - day

    if partner.monthlyBudget <= 0:
        return BudgetPacing(
            isOnPace=True,
            spendRate=0.0,
            recommendedDailySpend=0.0,
            daysRemaining=days_remaining,
            projectedMonthEnd=0.0,
        )

    ideal_ratio = day / days_in_month
    actual_ratio = partner.budgetSpent / partner.monthlyBudget
    spend_rate = actual_ratio / ideal_ratio if ideal_ratio > 0 else 0.0

    budget_remaining = partner.monthlyBudget - partner.budgetSpent
    daily_spend = budget_remaining / days_remaining if days_remaining > 0 else budget_remaining
    projected = partner.budgetSpent + partner.budgetSpent / day * days_remaining

    low, high = PACING_BAND
    return BudgetPacing(
        isOnPace=low <= spend_rate <= high,
        spendRate=round(spend_rate, 2),
        recommendedDailySpend=round(daily_spend, 2),
        daysRemaining=days_remaining,
        projectedMonthEnd=round(projected, 2),
    )


def get_competitive_insights(
    partners: Iterable[PartnerAdConfig],
    region: str,
    state: str,
) -> CompetitiveInsights:
    """Budget and tier mix of the active partners competing in a region."""
    competitors = [
        p for p in partners
        if region in p.regions and p.state.upper() == state.upper() and p.status == AdStatus.ACTIVE
    ]
    if not competitors:
        return CompetitiveInsights(
            totalCompetitors=0,
            avgBudget=0,
            topTier="none",
            budgetRange=BudgetRange(min=0, max=0),
        )

    budgets = [p.monthlyBudget for p in competitors]
    distribution: Dict[str, int] = {}
    for partner in competitors:
        distribution[partner.tier.value] = distribution.get(partner.tier.value, 0) + 1

    top = competitors[0]
    for partner in competitors[1:]:
        if TIER_RANK[partner.tier] > TIER_RANK[top.tier]:
            top = partner

    return CompetitiveInsights(
        totalCompetitors=len(competitors),
        avgBudget=round(sum(budgets) / len(budgets)),
        topTier=top.tier.value,
        budgetRange=BudgetRange(min=min(budgets), max=max(budgets)),
        tierDistribution=distribution,
    )


default_rotation_engine = RotationEngine()


def calculate_rotation_weights(
    partners: Iterable[PartnerAdConfig],
    region: str,
    state: str,
    trade_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[RotationWeight]:
    return default_rotation_engine.calculate_weights(partners, region, state, trade_type, now)


def select_partners_for_placement(
    partners: Iterable[PartnerAdConfig],
    region: str,
    state: str,
    trade_type: Optional[str] = None,
    max_results: int = 5,
    now: Optional[datetime] = None,
) -> PlacementResult:
    return default_rotation_engine.select_for_placement(
        partners, region, state, trade_type, max_results, now
    )
