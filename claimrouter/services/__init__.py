"""
Claim Router Services

Stateless scoring and allocation services. Each takes its reference tables and
collaborators at construction and exposes module-level functions bound to the bundled
defaults.

Services:
- trade_matching: trade label normalization and specialty matching
- location_matching: ZIP / state coverage ladder
- match_scoring: tier-weighted 0-100 match score
- routing: eligibility filtering and ranking of partners for a claim
- winner_selection: highest-score or weighted-random winner
- region_cost: per-region CPC and budget tiers
- budget_allocation: budget split across regions and the full region recommendation
- plan_builder: ad plan recommendations
- rotation: competitive ad rotation weights
- distribution_check: chi-square check of rotation draws
"""

# =============================================================================
# Partner routing
# =============================================================================

from claimrouter.services.trade_matching import (
    TRADE_ALIASES,
    TradeMatcher,
    classify_trade,
    detect_trade_from_aliases,
    extract_trades_from_claim_items,
    matches_trade,
    normalize_trade,
)
from claimrouter.services.location_matching import matches_location
from claimrouter.services.match_scoring import (
    TIER_WEIGHTS,
    MatchScoreCalculator,
    calculate_match_score,
)
from claimrouter.services.routing import RoutingEngine, route_claim_to_partners
from claimrouter.services.winner_selection import RandomSource, select_winning_partner

# =============================================================================
# Regional pricing and allocation
# =============================================================================

from claimrouter.services.region_cost import (
    RegionCostCalculator,
    calculate_region_cost_breakdown,
)
from claimrouter.services.budget_allocation import (
    BudgetAllocator,
    allocate_budget_across_regions,
    generate_full_recommendation,
    get_available_regions,
)
from claimrouter.services.plan_builder import (
    PlanRecommender,
    generate_plan_recommendation,
    get_tier_comparison,
    get_trade_types,
)

# =============================================================================
# Competitive rotation
# =============================================================================

from claimrouter.services.rotation import (
    RotationEngine,
    calculate_budget_pacing,
    calculate_rotation_weights,
    get_competitive_insights,
    select_partners_for_placement,
    weighted_random_select,
)
from claimrouter.services.distribution_check import (
    run_distribution_test,
    validate_weight_factors,
)

__all__ = [
    "TRADE_ALIASES",
    "TradeMatcher",
    "classify_trade",
    "detect_trade_from_aliases",
    "extract_trades_from_claim_items",
    "matches_trade",
    "normalize_trade",
    "matches_location",
    "TIER_WEIGHTS",
    "MatchScoreCalculator",
    "calculate_match_score",
    "RoutingEngine",
    "route_claim_to_partners",
    "RandomSource",
    "select_winning_partner",
    "RegionCostCalculator",
    "calculate_region_cost_breakdown",
    "BudgetAllocator",
    "allocate_budget_across_regions",
    "generate_full_recommendation",
    "get_available_regions",
    "PlanRecommender",
    "generate_plan_recommendation",
    "get_tier_comparison",
    "get_trade_types",
    "RotationEngine",
    "calculate_budget_pacing",
    "calculate_rotation_weights",
    "get_competitive_insights",
    "select_partners_for_placement",
    "weighted_random_select",
    "run_distribution_test",
    "validate_weight_factors",
]
