"""
Enumeration definitions for the claim router.

All enums inherit from both `str` and `Enum` so they serialize as plain strings in
pydantic models and API responses, and compare equal to the raw strings stored by
the partner store.

Several sets describe values owned by external systems (partner tier, status,
billing status). Those expose a ``from_value`` classmethod that maps anything
unrecognized onto an UNKNOWN member instead of raising, so a new value added
upstream degrades to default behaviour rather than breaking routing.
"""

from enum import Enum
from typing import Optional


class _LenientEnum(str, Enum):
    """Base for enums that resolve unrecognized values to ``UNKNOWN``."""

    @classmethod
    def from_value(cls, value: Optional[str]):
        if value is None:
            return cls("unknown")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls("unknown")


# =============================================================================
# Partner Enums
# =============================================================================


class PartnerTier(_LenientEnum):
    """
    Contractual relationship level, used as a scoring multiplier.

    partner > advertiser > affiliate. UNKNOWN scores like an affiliate.
    """
    PARTNER = "partner"
    ADVERTISER = "advertiser"
    AFFILIATE = "affiliate"
    UNKNOWN = "unknown"


class PartnerStatus(_LenientEnum):
    """Approval lifecycle. Only APPROVED partners are routable."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    UNKNOWN = "unknown"


class BillingStatus(_LenientEnum):
    """Billing state reported by the payments provider."""
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    NONE = "none"
    UNKNOWN = "unknown"


# =============================================================================
# Trade Enums
# =============================================================================


class Trade(str, Enum):
    """
    Canonical trade taxonomy used for routing.

    Declaration order matters: trade normalization walks the alias table in this
    order and the first hit wins. UNKNOWN is never produced by the alias table; it
    marks labels that did not match any canonical trade.
    """
    ROOFING = "roofing"
    FLOORING = "flooring"
    DRYWALL = "drywall"
    PAINTING = "painting"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HVAC = "hvac"
    WINDOWS = "windows"
    DOORS = "doors"
    APPLIANCES = "appliances"
    CABINETS = "cabinets"
    GENERAL = "general"
    UNKNOWN = "unknown"


# =============================================================================
# Routing Enums
# =============================================================================


class DisqualificationReason(str, Enum):
    """
    Reason a partner was filtered out of a routing run.

    Values are the human-readable keys reported in
    ``RoutingAnalysis.disqualifiedReasons``.
    """
    NOT_APPROVED = "Not approved"
    NO_TRADE_MATCH = "No trade match"
    NO_LOCATION_COVERAGE = "No location coverage"


class SelectionMode(str, Enum):
    """Strategy used to pick a single winner from the eligible partners."""
    HIGHEST_SCORE = "highest_score"
    WEIGHTED_RANDOM = "weighted_random"


class RoutingPriority(str, Enum):
    """Caller hint about what the claimant cares about. Informational only."""
    BUDGET = "budget"
    RATING = "rating"
    DISTANCE = "distance"


# =============================================================================
# Region Enums
# =============================================================================


class PopulationDensity(str, Enum):
    RURAL = "rural"
    SUBURBAN = "suburban"
    URBAN = "urban"


class Competitiveness(str, Enum):
    """
    Competition bucket for a region, derived from its competitor count.

    - LOW: fewer than 10 competitors
    - MEDIUM: 10-19
    - HIGH: 20-34
    - VERY_HIGH: 35 or more
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class AllocationPriority(str, Enum):
    """
    Priority label of a region inside a budget allocation.

    PRIMARY regions are the home region or regions under an active disaster
    declaration, SECONDARY regions are adjacent to home, everything else is
    TERTIARY.
    """
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"

    @property
    def rank(self) -> int:
        return _ALLOCATION_PRIORITY_RANK[self]


_ALLOCATION_PRIORITY_RANK = {
    AllocationPriority.PRIMARY: 0,
    AllocationPriority.SECONDARY: 1,
    AllocationPriority.TERTIARY: 2,
}


class RegionPlanType(str, Enum):
    """Region bundle sold with an ad plan."""
    STANDARD = "standard"
    PREMIUM = "premium"
    BUILD_YOUR_OWN = "build_your_own"


# =============================================================================
# Ad Plan Enums
# =============================================================================


class PlanTier(str, Enum):
    """Ad plan tier used by the plan recommender."""
    FREE = "free"
    STANDARD = "standard"
    PREMIUM = "premium"


class CompetitionLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BannerPerformance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# Rotation Enums
# =============================================================================


class RotationTier(str, Enum):
    """Advertising tier used by the competitive rotation weights."""
    FREE = "free"
    STANDARD = "standard"
    PREMIUM = "premium"
    BUILD_YOUR_OWN = "build_your_own"


class AdStatus(str, Enum):
    """Serving state of a partner's ad configuration."""
    ACTIVE = "active"
    PAUSED = "paused"
    EXHAUSTED = "exhausted"
