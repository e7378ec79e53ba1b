"""
FastAPI router for claim lead routing.

Key Endpoints:
- POST /routing/route - Rank a supplied partner population for a claim
- POST /routing/select-winner - Pick one partner from ranked routing results
- POST /routing/extract-trades - Detect the trades named by claim line items

The partner population is supplied by the caller; nothing is read from or written to
a store here.
"""

import logging

from fastapi import APIRouter, HTTPException

from claimrouter.core.dependencies import RandomSourceDep, SettingsDep
from claimrouter.models.schemas import (
    ExtractTradesRequest,
    ExtractTradesResponse,
    RouteClaimRequest,
    RoutingAnalysis,
    SelectWinnerRequest,
    SelectWinnerResponse,
)
from claimrouter.services.routing import route_claim_to_partners
from claimrouter.services.trade_matching import extract_trades_from_claim_items
from claimrouter.services.winner_selection import select_winning_partner


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/route", response_model=RoutingAnalysis)
async def route_claim(request: RouteClaimRequest, settings: SettingsDep) -> RoutingAnalysis:
    """
    Rank partners for a claim.

    Returns the top partners by match score (``limit``, or the configured default)
    together with per-reason disqualification counts.
    """
    limit = request.limit or settings.routing_default_limit
    try:
        return route_claim_to_partners(request.partners, request.criteria, limit)
    except Exception as e:
        logger.error(f"Error routing claim: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error routing claim: {str(e)}")


@router.post("/select-winner", response_model=SelectWinnerResponse)
async def select_winner(
    request: SelectWinnerRequest,
    settings: SettingsDep,
    rng: RandomSourceDep,
) -> SelectWinnerResponse:
    mode = request.mode or settings.winner_selection_mode
    winner = select_winning_partner(request.eligiblePartners, mode, rng)
    if winner is None:
        logger.info("No eligible partners to select a winner from")
    return SelectWinnerResponse(winner=winner)


@router.post("/extract-trades", response_model=ExtractTradesResponse)
async def extract_trades(request: ExtractTradesRequest) -> ExtractTradesResponse:
    """Detect trades from line items using the trade alias table."""
    return ExtractTradesResponse(trades=extract_trades_from_claim_items(request.items))
