"""
Pydantic request/response models for the claim router.

This module provides type-safe data validation and serialization for every record the
scoring and allocation core consumes or produces: partner records supplied by the
partner store, routing criteria and results, regional demand factors, cost breakdowns,
budget allocations, ad plan recommendations and competitive rotation weights.

Field names are camelCase to match the JSON exchanged with the partner store and the
web client. All models use Pydantic v2 syntax.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from claimrouter.models.enums import (
    AdStatus,
    AllocationPriority,
    BannerPerformance,
    CompetitionLevel,
    Competitiveness,
    PlanTier,
    PopulationDensity,
    RegionPlanType,
    RotationTier,
    RoutingPriority,
    SelectionMode,
)


# =============================================================================
# Partner Models
# =============================================================================


class AdConfig(BaseModel):
    """Advertising configuration attached to a partner record."""
    model_config = ConfigDict(extra="allow")

    monthlyBudget: float = Field(default=0.0, ge=0.0, description="Monthly ad budget in dollars")


class Partner(BaseModel):
    """
    Partner record as supplied by the partner store.

    Read-only to this package. Enumerated attributes (tier, status, billingStatus)
    are kept as raw strings so that values unknown to this version never fail
    validation; services resolve them with ``from_value``. ``type`` is informational.
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "partner-1",
                "companyName": "Lone Star Roofing",
                "type": "contractor",
                "tier": "partner",
                "subType": "roofing",
                "zipCode": "75001",
                "state": "TX",
                "serviceRegions": ["75001", "75002"],
                "billingStatus": "active",
                "status": "approved",
                "adConfig": {"monthlyBudget": 1000},
            }
        },
    )

    id: str = Field(..., min_length=1)
    companyName: str = ""
    type: str = "contractor"
    tier: str = "affiliate"
    subType: Optional[str] = Field(default=None, description="Free-text trade specialty")
    zipCode: Optional[str] = None
    state: Optional[str] = None
    serviceRegions: List[str] = Field(default_factory=list, description="ZIP codes or state codes served")
    billingStatus: Optional[str] = None
    status: str = "pending"
    adConfig: Optional[AdConfig] = None

    @property
    def monthly_budget(self) -> float:
        return self.adConfig.monthlyBudget if self.adConfig else 0.0


# =============================================================================
# Routing Models
# =============================================================================


class RoutingCriteria(BaseModel):
    """
    What a claim needs: trades plus an optional location.

    An empty ``trades`` list means any trade qualifies. Order of ``trades`` is
    irrelevant.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    trades: List[str] = Field(default_factory=list)
    zipCode: Optional[str] = None
    state: Optional[str] = None
    claimValue: Optional[float] = Field(default=None, ge=0.0)
    priority: Optional[RoutingPriority] = None

    @property
    def has_location(self) -> bool:
        return bool(self.zipCode or self.state)


class LocationMatch(BaseModel):
    """Outcome of the location precedence ladder for one partner."""
    matches: bool
    score: float = Field(..., ge=0.0, le=1.0)
    reason: str


class MatchScore(BaseModel):
    """Total match score with the factors that contributed to it."""
    score: float = Field(..., ge=0.0, le=100.0)
    reasons: List[str] = Field(default_factory=list)


class RoutingResult(BaseModel):
    """One ranked partner produced by a routing run. Never persisted here."""
    partnerId: str
    companyName: str
    matchScore: float = Field(..., ge=0.0, le=100.0)
    matchReasons: List[str] = Field(default_factory=list)
    tier: str


class RoutingAnalysis(BaseModel):
    """
    Result of routing a claim across a partner population.

    ``sum(disqualifiedReasons.values()) + totalEligible == totalCandidates`` always
    holds; ``eligiblePartners`` is the top slice of the eligible set.
    """
    eligiblePartners: List[RoutingResult] = Field(default_factory=list)
    totalCandidates: int = Field(..., ge=0)
    totalEligible: int = Field(..., ge=0)
    disqualifiedReasons: Dict[str, int] = Field(default_factory=dict)


class ClaimItem(BaseModel):
    """Claim line item used for trade extraction."""
    itemName: str
    category: Optional[str] = None


# =============================================================================
# Regional Demand Models
# =============================================================================


class RegionDemandFactor(BaseModel):
    """
    Market signals for one region. Immutable reference data.
    """
    model_config = ConfigDict(frozen=True)

    baseMultiplier: float = Field(..., ge=0.0)
    competitorCount: int = Field(..., ge=0)
    disasterDeclaration: bool = False
    primaryHazards: Tuple[str, ...] = ()
    populationDensity: PopulationDensity = PopulationDensity.SUBURBAN
    avgContractorBudget: float = Field(..., ge=0.0)
    demandIndex: int = Field(..., ge=0, le=100)
    lastUpdated: Optional[str] = None


class DisasterRegion(BaseModel):
    """A region currently flagged with a disaster declaration."""
    state: str
    region: str
    hazards: List[str] = Field(default_factory=list)


class BudgetTiers(BaseModel):
    """Three-tier monthly budget recommendation, in whole dollars."""
    minimum: int
    recommended: int
    competitive: int


class RegionalCostBreakdown(BaseModel):
    """Derived pricing for one region and trade. Pure function output."""
    region: str
    state: str
    zip: str = ""
    tradeType: str
    baseCpc: float
    adjustedCpc: float
    recommendedMonthlyBudget: BudgetTiers
    costMultiplier: float
    competitiveness: Competitiveness
    competitorCount: int
    demandIndex: int
    hasDisasterDeclaration: bool
    primaryHazards: List[str] = Field(default_factory=list)
    explanation: str


class BudgetAllocation(BaseModel):
    """Share of a monthly budget assigned to one region."""
    region: str
    allocatedBudget: int
    percentage: int
    estimatedClicks: int
    estimatedLeads: int
    cpcRate: float
    priority: AllocationPriority


class RegionAllocationPlan(BaseModel):
    """Which regions a plan type includes or lets the partner pick."""
    homeRegion: str
    includedAdjacent: List[str] = Field(default_factory=list)
    includedNonAdjacent: List[str] = Field(default_factory=list)
    selectableAdjacent: List[str] = Field(default_factory=list)
    selectableNonAdjacent: List[str] = Field(default_factory=list)
    totalRegions: int


class FullRegionRecommendation(BaseModel):
    """Budget plan across the regions around a partner's home ZIP."""
    homeRegion: str
    state: str
    tradeType: str
    planType: RegionPlanType
    totalBudget: int
    regions: List[BudgetAllocation] = Field(default_factory=list)
    communityNeed: Optional[str] = None
    activeDisasters: List[DisasterRegion] = Field(default_factory=list)
    suggestion: str
    avgCpcRate: float
    estimatedMonthlyLeads: int
    competitivenessScore: int


class AvailableRegions(BaseModel):
    state: str
    homeRegion: str
    allRegions: List[str] = Field(default_factory=list)
    adjacentRegions: List[str] = Field(default_factory=list)
    nonAdjacentRegions: List[str] = Field(default_factory=list)


class AllocationRequest(BaseModel):
    """Request body for allocating a budget across explicit regions."""
    regions: List[str] = Field(..., min_length=1)
    state: str = Field(..., min_length=2, max_length=2)
    tradeType: str
    totalBudget: int = Field(..., ge=0)
    homeRegion: str


# =============================================================================
# Ad Plan Models
# =============================================================================


class TradeMetrics(BaseModel):
    """Per-trade assumptions used by the plan recommender."""
    model_config = ConfigDict(frozen=True)

    baseConversionRate: float
    avgClaimValue: float
    competitionLevel: CompetitionLevel
    recommendedPlacements: Tuple[str, ...]
    baseCpc: float
    affiliateRange: Tuple[int, int]


class TierConfig(BaseModel):
    """Limits and features of an ad plan tier."""
    model_config = ConfigDict(frozen=True)

    maxPlacements: int
    maxBannerSizes: int
    budgetCap: int
    affiliateDiscount: float
    priorityWeight: int
    monthlyPrice: int
    features: Tuple[str, ...]


class BannerSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    label: str
    performance: BannerPerformance


class PlacementDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    baseImpressions: int


class PlacementRecommendation(BaseModel):
    """Funnel estimate for a single placement."""
    id: str
    name: str
    description: str
    priority: int
    estimatedImpressions: int
    estimatedClicks: int
    estimatedLeads: int


class BannerRecommendation(BaseModel):
    placement: str
    sizes: List[BannerSize] = Field(default_factory=list)


class MonthlyProjections(BaseModel):
    estimatedImpressions: int
    estimatedClicks: int
    estimatedLeads: int
    estimatedCost: float
    estimatedRevenue: int
    estimatedRoi: int


class PlanRecommendation(BaseModel):
    """Ad plan recommendation for a partner's ZIP, trade and tier."""
    tier: PlanTier
    tradeType: str
    zipCode: str
    state: Optional[str] = None
    riskMultiplier: float

    recommendedMonthlyBudget: int
    minBudget: int
    maxBudget: int

    recommendedCpc: float
    minCpc: float
    maxCpc: float

    recommendedAffiliatePercent: int
    minAffiliate: int
    maxAffiliate: int

    recommendedPlacements: List[PlacementRecommendation] = Field(default_factory=list)
    recommendedBanners: List[BannerRecommendation] = Field(default_factory=list)
    monthlyProjections: MonthlyProjections

    tierFeatures: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


class TradeTypeSummary(BaseModel):
    id: str
    label: str
    competitionLevel: CompetitionLevel
    avgClaimValue: float


class TierSummary(BaseModel):
    id: PlanTier
    label: str
    monthlyPrice: int
    maxPlacements: int
    maxBannerSizes: int
    budgetCap: int
    affiliateDiscount: float
    priorityWeight: int
    features: List[str] = Field(default_factory=list)


# =============================================================================
# Competitive Rotation Models
# =============================================================================


class PartnerAdConfig(BaseModel):
    """Ad serving state of one partner, as read from the ad store."""
    partnerId: str
    companyName: str = ""
    tradeType: str
    tier: RotationTier
    monthlyBudget: float = Field(default=0.0, ge=0.0)
    budgetSpent: float = Field(default=0.0, ge=0.0)
    regions: List[str] = Field(default_factory=list)
    state: str
    isTradeAssociation: bool = False
    status: AdStatus = AdStatus.ACTIVE
    lastShownAt: Optional[datetime] = None
    totalImpressions: int = 0
    totalClicks: int = 0


class RotationFactors(BaseModel):
    tierMultiplier: float
    budgetFactor: float
    competitivePosition: float
    demandBonus: float
    disasterBonus: float
    freshnessPenalty: float
    tradeAssociationPenalty: float


class RotationWeight(BaseModel):
    """How often a partner's ad is shown relative to its competitors."""
    partnerId: str
    weight: float = Field(..., ge=0.0)
    factors: RotationFactors
    priority: int = 0
    estimatedCpc: float


class PlacementResult(BaseModel):
    topPartners: List[RotationWeight] = Field(default_factory=list)
    totalEligible: int
    region: str
    tradeType: str
    timestamp: datetime


class BudgetPacing(BaseModel):
    isOnPace: bool
    spendRate: float
    recommendedDailySpend: float
    daysRemaining: int
    projectedMonthEnd: float


class BudgetRange(BaseModel):
    min: float
    max: float


class CompetitiveInsights(BaseModel):
    totalCompetitors: int
    avgBudget: int
    topTier: str
    budgetRange: BudgetRange
    tierDistribution: Dict[str, int] = Field(default_factory=dict)


class DistributionResult(BaseModel):
    """Observed versus expected selection share for one partner."""
    partnerId: str
    companyName: str
    tier: str
    monthlyBudget: float
    expectedWeight: float
    actualSelections: int
    actualPercentage: float
    expectedPercentage: float
    deviation: float
    chiSquareContrib: float


class DistributionSummary(BaseModel):
    """Chi-square goodness-of-fit summary of a rotation distribution run."""
    totalIterations: int
    totalSelections: int
    chiSquareStatistic: float
    passed: bool
    threshold: float
    message: str
    results: List[DistributionResult] = Field(default_factory=list)
    timestamp: datetime


class WeightValidation(BaseModel):
    valid: bool
    issues: List[str] = Field(default_factory=list)
    weights: List[RotationWeight] = Field(default_factory=list)


# =============================================================================
# API Request Models
# =============================================================================


class RouteClaimRequest(BaseModel):
    """Request body for routing a claim against a supplied partner population."""
    partners: List[Partner] = Field(default_factory=list)
    criteria: RoutingCriteria
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class SelectWinnerRequest(BaseModel):
    eligiblePartners: List[RoutingResult] = Field(default_factory=list)
    mode: Optional[SelectionMode] = None


class SelectWinnerResponse(BaseModel):
    winner: Optional[RoutingResult] = None


class ExtractTradesRequest(BaseModel):
    items: List[ClaimItem] = Field(default_factory=list)


class ExtractTradesResponse(BaseModel):
    trades: List[str] = Field(default_factory=list)
