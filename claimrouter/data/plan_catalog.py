"""
Ad Plan Catalog

Reference tables behind the plan recommender:

- TRADE_METRICS: conversion rate, claim value, competition, placements, CPC and
  affiliate range per partner trade
- STATE_RISK_MULTIPLIERS: disaster-exposure multiplier per state (1.0 when unlisted)
- TIER_CONFIG: limits, pricing and features per plan tier
- BANNER_SIZES / PLACEMENT_DETAILS: creative sizes and base impressions per placement

All tables are read-only.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from claimrouter.models.enums import BannerPerformance, CompetitionLevel, PlanTier
from claimrouter.models.schemas import BannerSize, PlacementDetails, TierConfig, TradeMetrics


DEFAULT_PLAN_TRADE = "general_contractor"

DEFAULT_RISK_MULTIPLIER = 1.0

CLICK_THROUGH_RATE = 0.02

# Used for placements missing from PLACEMENT_DETAILS
FALLBACK_BASE_IMPRESSIONS = 1000


TRADE_METRICS: Mapping[str, TradeMetrics] = MappingProxyType({
    "roofing": TradeMetrics(
        baseConversionRate=0.045,
        avgClaimValue=15000,
        competitionLevel=CompetitionLevel.HIGH,
        recommendedPlacements=("results_sidebar", "results_header", "claim_confirmation"),
        baseCpc=2.50,
        affiliateRange=(8, 15),
    ),
    "general_contractor": TradeMetrics(
        baseConversionRate=0.035,
        avgClaimValue=25000,
        competitionLevel=CompetitionLevel.MEDIUM,
        recommendedPlacements=("results_sidebar", "results_footer", "claim_confirmation"),
        baseCpc=2.00,
        affiliateRange=(6, 12),
    ),
    "public_adjuster": TradeMetrics(
        baseConversionRate=0.065,
        avgClaimValue=35000,
        competitionLevel=CompetitionLevel.HIGH,
        recommendedPlacements=("results_header", "claim_confirmation", "email_report"),
        baseCpc=4.00,
        affiliateRange=(10, 20),
    ),
    "insurance_attorney": TradeMetrics(
        baseConversionRate=0.025,
        avgClaimValue=75000,
        competitionLevel=CompetitionLevel.MEDIUM,
        recommendedPlacements=("results_header", "underpaid_alert", "email_report"),
        baseCpc=8.00,
        affiliateRange=(5, 10),
    ),
    "restoration": TradeMetrics(
        baseConversionRate=0.055,
        avgClaimValue=12000,
        competitionLevel=CompetitionLevel.MEDIUM,
        recommendedPlacements=("results_sidebar", "results_footer"),
        baseCpc=1.75,
        affiliateRange=(7, 14),
    ),
    "remodeler": TradeMetrics(
        baseConversionRate=0.040,
        avgClaimValue=18000,
        competitionLevel=CompetitionLevel.LOW,
        recommendedPlacements=("results_sidebar", "results_footer", "claim_confirmation"),
        baseCpc=1.50,
        affiliateRange=(6, 12),
    ),
})


STATE_RISK_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    # Critical disaster states
    "TX": 1.4, "FL": 1.5, "CA": 1.3, "OK": 1.35, "MS": 1.25, "IL": 1.2, "LA": 1.45,
    # High risk
    "GA": 1.2, "NC": 1.15, "MO": 1.2, "AL": 1.15, "CO": 1.25, "KS": 1.3, "TN": 1.1,
    "SC": 1.1, "VA": 1.05, "AR": 1.15, "KY": 1.05, "NY": 1.1, "PA": 1.05, "WA": 1.1,
    # Moderate
    "IN": 1.0, "OH": 1.0, "MI": 0.95, "MN": 1.0, "WI": 0.95, "OR": 1.05, "NV": 1.0,
    "NM": 1.05, "MT": 0.9, "ID": 0.9, "WY": 0.85, "UT": 0.95, "AZ": 1.1, "IA": 1.05,
    "NE": 1.1, "ND": 0.9, "SD": 0.9, "AK": 0.85, "HI": 1.0,
    # Low
    "ME": 0.8, "NH": 0.8, "VT": 0.75, "MA": 0.85, "CT": 0.85, "RI": 0.8, "NJ": 0.9,
    "DE": 0.85, "MD": 0.9, "WV": 0.85, "DC": 0.9,
})


TIER_CONFIG: Mapping[PlanTier, TierConfig] = MappingProxyType({
    PlanTier.FREE: TierConfig(
        maxPlacements=1,
        maxBannerSizes=1,
        budgetCap=0,
        affiliateDiscount=0.0,
        priorityWeight=1,
        monthlyPrice=0,
        features=("Basic listing", "1 placement", "Pay-per-lead only"),
    ),
    PlanTier.STANDARD: TierConfig(
        maxPlacements=3,
        maxBannerSizes=2,
        budgetCap=500,
        affiliateDiscount=0.15,
        priorityWeight=2,
        monthlyPrice=500,
        features=(
            "Priority listing",
            "3 placements",
            "2 banner sizes",
            "Basic analytics",
            "Email support",
        ),
    ),
    PlanTier.PREMIUM: TierConfig(
        maxPlacements=6,
        maxBannerSizes=4,
        budgetCap=2000,
        affiliateDiscount=0.25,
        priorityWeight=4,
        monthlyPrice=2000,
        features=(
            "Featured listing",
            "All placements",
            "All banner sizes",
            "Advanced analytics",
            "Dedicated support",
            "API access",
        ),
    ),
})

# (base monthly budget, minimum budget) for paid tiers; scaled by state risk
PAID_TIER_BUDGETS: Mapping[PlanTier, Tuple[int, int]] = MappingProxyType({
    PlanTier.STANDARD: (350, 100),
    PlanTier.PREMIUM: (1500, 500),
})


def _sizes(*specs: Tuple[int, int, str, str]) -> Tuple[BannerSize, ...]:
    return tuple(
        BannerSize(width=w, height=h, label=label, performance=BannerPerformance(perf))
        for w, h, label, perf in specs
    )


BANNER_SIZES: Mapping[str, Tuple[BannerSize, ...]] = MappingProxyType({
    "results_header": _sizes(
        (728, 90, "Leaderboard", "high"),
        (320, 100, "Mobile Banner", "medium"),
    ),
    "results_sidebar": _sizes(
        (300, 250, "Medium Rectangle", "high"),
        (300, 600, "Half Page", "high"),
        (160, 600, "Wide Skyscraper", "medium"),
    ),
    "results_footer": _sizes(
        (728, 90, "Leaderboard", "medium"),
        (970, 250, "Billboard", "high"),
    ),
    "claim_confirmation": _sizes(
        (300, 250, "Medium Rectangle", "high"),
        (336, 280, "Large Rectangle", "high"),
    ),
    "email_report": _sizes(
        (600, 100, "Email Banner", "medium"),
        (300, 250, "Medium Rectangle", "high"),
    ),
    "underpaid_alert": _sizes(
        (300, 250, "Medium Rectangle", "high"),
        (320, 100, "Mobile Banner", "medium"),
    ),
})


PLACEMENT_DETAILS: Mapping[str, PlacementDetails] = MappingProxyType({
    "results_header": PlacementDetails(
        name="Results Header",
        description="Premium placement at the top of claim results",
        baseImpressions=5000,
    ),
    "results_sidebar": PlacementDetails(
        name="Results Sidebar",
        description="Persistent sidebar visibility during review",
        baseImpressions=8000,
    ),
    "results_footer": PlacementDetails(
        name="Results Footer",
        description="Call-to-action placement after results",
        baseImpressions=4000,
    ),
    "claim_confirmation": PlacementDetails(
        name="Claim Confirmation",
        description="High-intent placement on claim submission",
        baseImpressions=3000,
    ),
    "email_report": PlacementDetails(
        name="Email Report",
        description="Included in emailed claim reports",
        baseImpressions=2000,
    ),
    "underpaid_alert": PlacementDetails(
        name="Underpaid Alert",
        description="Shown when underpayment is detected",
        baseImpressions=1500,
    ),
})
