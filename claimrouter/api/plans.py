"""
FastAPI router for ad plan recommendations.

Key Endpoints:
- GET /plans/recommendation - Plan for a ZIP, trade and tier
- GET /plans/trade-types - Trades known to the plan builder
- GET /plans/tiers - Tier comparison table
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from claimrouter.models.enums import PlanTier
from claimrouter.models.schemas import PlanRecommendation, TierSummary, TradeTypeSummary
from claimrouter.services.plan_builder import (
    generate_plan_recommendation,
    get_tier_comparison,
    get_trade_types,
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/recommendation", response_model=PlanRecommendation)
async def plan_recommendation(
    zip_code: str = Query(..., min_length=3, max_length=10),
    trade_type: str = Query("general_contractor"),
    tier: PlanTier = Query(PlanTier.STANDARD),
) -> PlanRecommendation:
    """
    Recommend CPC, budget, affiliate share, placements and banners for a plan.

    Unknown trades are priced as general contractors; unknown tiers are rejected
    with 422.
    """
    try:
        return generate_plan_recommendation(zip_code, trade_type, tier)
    except Exception as e:
        logger.error(f"Error generating plan recommendation: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error generating plan recommendation: {str(e)}",
        )


@router.get("/trade-types", response_model=List[TradeTypeSummary])
async def trade_types() -> List[TradeTypeSummary]:
    return get_trade_types()


@router.get("/tiers", response_model=List[TierSummary])
async def tiers() -> List[TierSummary]:
    return get_tier_comparison()
