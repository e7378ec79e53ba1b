"""
Models package for the claim router.

Re-exports the enums and pydantic schemas so callers can write:

    from claimrouter.models import Partner, RoutingCriteria, PartnerTier
"""

from claimrouter.models.enums import (
    AdStatus,
    AllocationPriority,
    BannerPerformance,
    BillingStatus,
    CompetitionLevel,
    Competitiveness,
    DisqualificationReason,
    PartnerStatus,
    PartnerTier,
    PlanTier,
    PopulationDensity,
    RegionPlanType,
    RotationTier,
    RoutingPriority,
    SelectionMode,
    Trade,
)
from claimrouter.models.schemas import (
    AdConfig,
    AllocationRequest,
    AvailableRegions,
    BannerRecommendation,
    BannerSize,
    BudgetAllocation,
    BudgetPacing,
    BudgetRange,
    BudgetTiers,
    ClaimItem,
    CompetitiveInsights,
    DisasterRegion,
    DistributionResult,
    DistributionSummary,
    ExtractTradesRequest,
    ExtractTradesResponse,
    FullRegionRecommendation,
    LocationMatch,
    MatchScore,
    MonthlyProjections,
    Partner,
    PartnerAdConfig,
    PlacementDetails,
    PlacementRecommendation,
    PlacementResult,
    PlanRecommendation,
    RegionAllocationPlan,
    RegionDemandFactor,
    RegionalCostBreakdown,
    RotationFactors,
    RotationWeight,
    RouteClaimRequest,
    RoutingAnalysis,
    RoutingCriteria,
    RoutingResult,
    SelectWinnerRequest,
    SelectWinnerResponse,
    TierConfig,
    TierSummary,
    TradeMetrics,
    TradeTypeSummary,
    WeightValidation,
)

__all__ = [
    # Enums
    'AdStatus',
    'AllocationPriority',
    'BannerPerformance',
    'BillingStatus',
    'CompetitionLevel',
    'Competitiveness',
    'DisqualificationReason',
    'PartnerStatus',
    'PartnerTier',
    'PlanTier',
    'PopulationDensity',
    'RegionPlanType',
    'RotationTier',
    'RoutingPriority',
    'SelectionMode',
    'Trade',
    # Partner / routing
    'AdConfig',
    'ClaimItem',
    'LocationMatch',
    'MatchScore',
    'Partner',
    'RoutingAnalysis',
    'RoutingCriteria',
    'RoutingResult',
    # Regions
    'AllocationRequest',
    'AvailableRegions',
    'BudgetAllocation',
    'BudgetTiers',
    'DisasterRegion',
    'FullRegionRecommendation',
    'RegionAllocationPlan',
    'RegionDemandFactor',
    'RegionalCostBreakdown',
    # Plans
    'BannerRecommendation',
    'BannerSize',
    'MonthlyProjections',
    'PlacementDetails',
    'PlacementRecommendation',
    'PlanRecommendation',
    'TierConfig',
    'TierSummary',
    'TradeMetrics',
    'TradeTypeSummary',
    # Rotation
    'BudgetPacing',
    'BudgetRange',
    'CompetitiveInsights',
    'DistributionResult',
    'DistributionSummary',
    'PartnerAdConfig',
    'PlacementResult',
    'RotationFactors',
    'RotationWeight',
    'WeightValidation',
    # API requests
    'ExtractTradesRequest',
    'ExtractTradesResponse',
    'RouteClaimRequest',
    'SelectWinnerRequest',
    'SelectWinnerResponse',
]
