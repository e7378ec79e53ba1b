"""
Claim router API package.

Router modules:
- routing: claim routing, winner selection, trade extraction
- regions: regional pricing, budget allocation, region recommendations
- plans: ad plan recommendations
"""

from fastapi import APIRouter

from claimrouter.api.plans import router as plans_router
from claimrouter.api.regions import router as regions_router
from claimrouter.api.routing import router as routing_router

api_router = APIRouter()

api_router.include_router(routing_router, prefix="/routing", tags=["routing"])
api_router.include_router(regions_router, prefix="/regions", tags=["regions"])
api_router.include_router(plans_router, prefix="/plans", tags=["plans"])

__all__ = [
    "api_router",
    "routing_router",
    "regions_router",
    "plans_router",
]
