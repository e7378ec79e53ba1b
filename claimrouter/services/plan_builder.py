"""
Plan Builder Service

Rules-based ad plan recommendations for partners. Given a ZIP code, a trade and a plan
tier it recommends CPC bids, a monthly budget, an affiliate percentage, placements and
banner sizes, and projects a monthly funnel:

    impressions -> 2% CTR -> clicks -> trade conversion rate -> leads

State disaster risk scales CPC, budgets and impressions up and the affiliate
percentage down. Every output is a deterministic function of (zip, trade, tier).
"""

from typing import List, Mapping, Tuple

from claimrouter.data.plan_catalog import (
    BANNER_SIZES,
    CLICK_THROUGH_RATE,
    DEFAULT_PLAN_TRADE,
    DEFAULT_RISK_MULTIPLIER,
    FALLBACK_BASE_IMPRESSIONS,
    PAID_TIER_BUDGETS,
    PLACEMENT_DETAILS,
    STATE_RISK_MULTIPLIERS,
    TIER_CONFIG,
    TRADE_METRICS,
)
from claimrouter.data.regions import RegionGeography, default_geography
from claimrouter.models.enums import CompetitionLevel, PlanTier
from claimrouter.models.schemas import (
    BannerRecommendation,
    BannerSize,
    MonthlyProjections,
    PlacementDetails,
    PlacementRecommendation,
    PlanRecommendation,
    TierConfig,
    TierSummary,
    TradeMetrics,
    TradeTypeSummary,
)


def _label(identifier: str) -> str:
    return identifier.replace("_", " ")


class PlanRecommender:
    """
    Ad plan recommendations over the plan catalog.

    Args:
        geography: Resolves the partner's state from a ZIP code
        trade_metrics: Per-trade funnel assumptions
        risk_multipliers: Per-state disaster risk
        tier_config: Per-tier limits and features
    """

    def __init__(
        self,
        geography: RegionGeography = default_geography,
        trade_metrics: Mapping[str, TradeMetrics] = TRADE_METRICS,
        risk_multipliers: Mapping[str, float] = STATE_RISK_MULTIPLIERS,
        tier_config: Mapping[PlanTier, TierConfig] = TIER_CONFIG,
        banner_sizes: Mapping[str, Tuple[BannerSize, ...]] = BANNER_SIZES,
        placement_details: Mapping[str, PlacementDetails] = PLACEMENT_DETAILS,
    ):
        self.geography = geography
        self.trade_metrics = trade_metrics
        self.risk_multipliers = risk_multipliers
        self.tier_config = tier_config
        self.banner_sizes = banner_sizes
        self.placement_details = placement_details

    def risk_multiplier(self, state) -> float:
        if not state:
            return DEFAULT_RISK_MULTIPLIER
        return self.risk_multipliers.get(state, DEFAULT_RISK_MULTIPLIER)

    def recommend(self, zip_code: str, trade_type: str, tier: PlanTier) -> PlanRecommendation:
        tier = PlanTier(tier)
        state = self.geography.state_from_zip(zip_code)
        risk = self.risk_multiplier(state)
        trade = self.trade_metrics.get(trade_type) or self.trade_metrics[DEFAULT_PLAN_TRADE]
        config = self.tier_config[tier]

        # CPC
        base_cpc = trade.baseCpc * risk
        recommended_cpc = round(base_cpc, 2)
        min_cpc = round(base_cpc * 0.7, 2)
        max_cpc = round(base_cpc * 1.5, 2)

        # Affiliate share shrinks with risk to protect margins
        min_aff, max_aff = trade.affiliateRange
        affiliate_adjustment = 1 - (risk - 1) * 0.5
        affiliate_percent = round(
            (min_aff + max_aff) / 2 * affiliate_adjustment * (1 - config.affiliateDiscount)
        )

        # Budget
        recommended_budget = 0
        min_budget = 0
        max_budget = config.budgetCap
        if tier in PAID_TIER_BUDGETS:
            base_budget, min_budget = PAID_TIER_BUDGETS[tier]
            recommended_budget = round(base_budget * risk)

        # Placements and funnel
        selected = list(trade.recommendedPlacements[:config.maxPlacements])
        placements: List[PlacementRecommendation] = []
        for index, placement_id in enumerate(selected):
            details = self.placement_details.get(placement_id) or PlacementDetails(
                name=placement_id,
                description="",
                baseImpressions=FALLBACK_BASE_IMPRESSIONS,
            )
            impressions = round(details.baseImpressions * risk * config.priorityWeight)
            clicks = round(impressions * CLICK_THROUGH_RATE)
            placements.append(PlacementRecommendation(
                id=placement_id,
                name=details.name,
                description=details.description,
                priority=index + 1,
                estimatedImpressions=impressions,
                estimatedClicks=clicks,
                estimatedLeads=round(clicks * trade.baseConversionRate),
            ))

        banners = [
            BannerRecommendation(
                placement=placement_id,
                sizes=list(self.banner_sizes[placement_id][:config.maxBannerSizes]),
            )
            for placement_id in selected
            if placement_id in self.banner_sizes
        ]

        # Projections
        total_impressions = sum(p.estimatedImpressions for p in placements)
        total_clicks = sum(p.estimatedClicks for p in placements)
        total_leads = sum(p.estimatedLeads for p in placements)
        estimated_cost = (
            0.0 if tier == PlanTier.FREE
            else min(total_clicks * recommended_cpc, recommended_budget)
        )
        estimated_revenue = total_leads * trade.avgClaimValue * (affiliate_percent / 100)
        estimated_roi = (
            round((estimated_revenue / estimated_cost - 1) * 100) if estimated_cost > 0 else 0
        )

        insights = self._insights(
            state, trade_type, trade, tier, risk, total_leads, estimated_cost
        )

        return PlanRecommendation(
            tier=tier,
            tradeType=trade_type,
            zipCode=zip_code,
            state=state,
            riskMultiplier=round(risk, 2),
            recommendedMonthlyBudget=recommended_budget,
            minBudget=min_budget,
            maxBudget=max_budget,
            recommendedCpc=recommended_cpc,
            minCpc=min_cpc,
            maxCpc=max_cpc,
            recommendedAffiliatePercent=affiliate_percent,
            minAffiliate=min_aff,
            maxAffiliate=max_aff,
            recommendedPlacements=placements,
            recommendedBanners=banners,
            monthlyProjections=MonthlyProjections(
                estimatedImpressions=total_impressions,
                estimatedClicks=total_clicks,
                estimatedLeads=total_leads,
                estimatedCost=estimated_cost,
                estimatedRevenue=round(estimated_revenue),
                estimatedRoi=estimated_roi,
            ),
            tierFeatures=list(config.features),
            insights=insights,
        )

    @staticmethod
    def _insights(state, trade_type, trade, tier, risk, total_leads, estimated_cost) -> List[str]:
        area = state or "your area"
        insights = []

        if risk >= 1.3:
            insights.append(
                f"High disaster activity in {area} creates strong demand for "
                f"{_label(trade_type)} services."
            )
        elif risk >= 1.1:
            insights.append(f"Moderate disaster exposure in {area} provides steady lead flow.")
        else:
            insights.append(f"Lower competition in {area} means better cost efficiency.")

        if trade.competitionLevel == CompetitionLevel.HIGH:
            insights.append(
                f"{_label(trade_type)} is a competitive category - higher CPC recommended "
                f"for visibility."
            )

        if tier == PlanTier.PREMIUM:
            insights.append("Premium tier includes priority placement rotation and advanced targeting.")
        elif tier == PlanTier.STANDARD:
            insights.append("Upgrade to Premium for access to all placements and advanced analytics.")
        else:
            insights.append("Free tier uses pay-per-lead model with no monthly commitment.")

        if total_leads > 10:
            insights.append(
                f"Projected {total_leads} monthly leads at "
                f"${round(estimated_cost / total_leads)} cost per lead."
            )
        return insights

    def trade_types(self) -> List[TradeTypeSummary]:
        return [
            TradeTypeSummary(
                id=trade_id,
                label=_label(trade_id).title(),
                competitionLevel=metrics.competitionLevel,
                avgClaimValue=metrics.avgClaimValue,
            )
            for trade_id, metrics in self.trade_metrics.items()
        ]

    def tier_comparison(self) -> List[TierSummary]:
        return [
            TierSummary(
                id=tier,
                label=tier.value.capitalize(),
                monthlyPrice=config.monthlyPrice,
                maxPlacements=config.maxPlacements,
                maxBannerSizes=config.maxBannerSizes,
                budgetCap=config.budgetCap,
                affiliateDiscount=config.affiliateDiscount,
                priorityWeight=config.priorityWeight,
                features=list(config.features),
            )
            for tier, config in self.tier_config.items()
        ]


default_plan_recommender = PlanRecommender()


def generate_plan_recommendation(zip_code: str, trade_type: str, tier: PlanTier) -> PlanRecommendation:
    return default_plan_recommender.recommend(zip_code, trade_type, tier)


def get_trade_types() -> List[TradeTypeSummary]:
    return default_plan_recommender.trade_types()


def get_tier_comparison() -> List[TierSummary]:
    return default_plan_recommender.tier_comparison()
