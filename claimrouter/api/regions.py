"""
FastAPI router for regional pricing and budget allocation.

Key Endpoints:
- GET /regions/{state}/{region}/cost - Cost breakdown for one region and trade
- POST /regions/allocate - Split a budget across explicit regions
- GET /regions/recommendation - Full region plan for a partner's home ZIP
- GET /regions/available/{zip_code} - Regions purchasable from a home ZIP
- GET /regions/disasters - Regions with an active disaster declaration
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from claimrouter.data.regional_demand import get_all_disaster_regions
from claimrouter.models.enums import RegionPlanType
from claimrouter.models.schemas import (
    AllocationRequest,
    AvailableRegions,
    BudgetAllocation,
    DisasterRegion,
    FullRegionRecommendation,
    RegionalCostBreakdown,
)
from claimrouter.services.budget_allocation import (
    allocate_budget_across_regions,
    generate_full_recommendation,
    get_available_regions,
)
from claimrouter.services.region_cost import calculate_region_cost_breakdown


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/disasters", response_model=List[DisasterRegion])
async def list_disaster_regions() -> List[DisasterRegion]:
    return get_all_disaster_regions()


@router.get("/recommendation", response_model=FullRegionRecommendation)
async def region_recommendation(
    zip_code: str = Query(..., min_length=3, max_length=10, description="Partner home ZIP"),
    trade_type: str = Query(..., min_length=1),
    plan_type: RegionPlanType = Query(RegionPlanType.STANDARD),
    budget: Optional[int] = Query(None, ge=1, description="Monthly budget in dollars"),
    regions: Optional[List[str]] = Query(None, description="Explicit region selection"),
) -> FullRegionRecommendation:
    """
    Build the full region plan for a partner.

    Without ``regions`` the plan type's bundle around the home region is used;
    without ``budget`` a default derived from the home region's pricing is used.
    """
    try:
        return generate_full_recommendation(zip_code, trade_type, plan_type, budget, regions)
    except Exception as e:
        logger.error(f"Error building region recommendation: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error building region recommendation: {str(e)}",
        )


@router.get("/available/{zip_code}", response_model=AvailableRegions)
async def available_regions(zip_code: str) -> AvailableRegions:
    return get_available_regions(zip_code)


@router.post("/allocate", response_model=List[BudgetAllocation])
async def allocate_budget(request: AllocationRequest) -> List[BudgetAllocation]:
    """
    Allocate a monthly budget across the requested regions.

    Allocations sum exactly to ``totalBudget`` and to 100 percent.
    """
    try:
        return allocate_budget_across_regions(
            request.regions,
            request.state.upper(),
            request.tradeType,
            request.totalBudget,
            request.homeRegion,
        )
    except Exception as e:
        logger.error(f"Error allocating budget: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error allocating budget: {str(e)}")


@router.get("/{state}/{region}/cost", response_model=RegionalCostBreakdown)
async def region_cost(
    state: str,
    region: str,
    trade_type: str = Query("", description="Trade used to price clicks"),
    zip_code: str = Query("", description="ZIP echoed in the breakdown"),
) -> RegionalCostBreakdown:
    return calculate_region_cost_breakdown(state.upper(), region, zip_code, trade_type)
