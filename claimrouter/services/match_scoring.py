"""
Match Score Calculator

Combines trade, location, billing and budget signals into one 0-100 score per partner,
weighted by the partner's contractual tier.

Components (additive, each recorded as a reason when applied):
- Trade: 40 * tier weight on a match; 20 * tier weight for generalists
- Location: 30 * location score * tier weight when the location matches
- Billing: flat 15 for an active billing status
- Budget: 1 point per $1,000 of monthly budget, capped at 15

The sum can exceed 100 for well-funded partner-tier candidates, so the total is
clamped.
"""

from types import MappingProxyType
from typing import Mapping

from claimrouter.models.enums import BillingStatus, PartnerTier
from claimrouter.models.schemas import MatchScore, Partner, RoutingCriteria
from claimrouter.services.location_matching import matches_location
from claimrouter.services.trade_matching import TradeMatcher, default_trade_matcher


TIER_WEIGHTS: Mapping[PartnerTier, float] = MappingProxyType({
    PartnerTier.PARTNER: 1.5,
    PartnerTier.ADVERTISER: 1.2,
    PartnerTier.AFFILIATE: 1.0,
    PartnerTier.UNKNOWN: 1.0,
})

TRADE_MATCH_POINTS = 40.0
GENERALIST_POINTS = 20.0
LOCATION_POINTS = 30.0
ACTIVE_BILLING_POINTS = 15.0
BUDGET_POINTS_PER_DOLLAR = 1 / 1000
MAX_BUDGET_BONUS = 15.0

MIN_SCORE = 0.0
MAX_SCORE = 100.0


class MatchScoreCalculator:
    """Scores a single partner against routing criteria."""

    def __init__(
        self,
        trade_matcher: TradeMatcher = default_trade_matcher,
        tier_weights: Mapping[PartnerTier, float] = TIER_WEIGHTS,
    ):
        self.trade_matcher = trade_matcher
        self.tier_weights = tier_weights

    def tier_weight(self, tier: str) -> float:
        return self.tier_weights.get(PartnerTier.from_value(tier), 1.0)

    def calculate(self, partner: Partner, criteria: RoutingCriteria) -> MatchScore:
        score = 0.0
        reasons = []
        weight = self.tier_weight(partner.tier)

        if self.trade_matcher.matches(partner.subType, criteria.trades):
            score += TRADE_MATCH_POINTS * weight
            reasons.append(f"Trade match: {partner.subType}")
        elif self.trade_matcher.is_general(partner.subType):
            score += GENERALIST_POINTS * weight
            reasons.append("General contractor (accepts all trades)")

        location = matches_location(partner, criteria.zipCode, criteria.state)
        if location.matches:
            score += LOCATION_POINTS * location.score * weight
            reasons.append(location.reason)

        if BillingStatus.from_value(partner.billingStatus) == BillingStatus.ACTIVE:
            score += ACTIVE_BILLING_POINTS
            reasons.append("Active billing status")

        budget = partner.monthly_budget
        if budget > 0:
            bonus = min(budget * BUDGET_POINTS_PER_DOLLAR, MAX_BUDGET_BONUS)
            score += bonus
            reasons.append(f"Budget bonus: +{bonus:.1f}")

        return MatchScore(score=max(MIN_SCORE, min(score, MAX_SCORE)), reasons=reasons)


default_score_calculator = MatchScoreCalculator()


def calculate_match_score(partner: Partner, criteria: RoutingCriteria) -> MatchScore:
    return default_score_calculator.calculate(partner, criteria)
