"""
Trade Matching Service

Maps free-text trade labels ("Roofer", "sheetrock", "HVAC repair") onto the canonical
trade taxonomy and decides whether a partner's specialty satisfies a claim's required
trades.

Normalization walks TRADE_ALIASES in declaration order; the first canonical trade with
an alias contained in the lower-cased label wins. Because matching is by substring the
order is significant ("roof" inside "roofing" never reaches a later trade). Labels that
hit nothing are returned lower-cased and trimmed so that unknown trades still compare
equal to themselves.
"""

from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional, Tuple

from claimrouter.models.enums import Trade
from claimrouter.models.schemas import ClaimItem


# Detector signature: (item_name, category) -> trade label or None
TradeDetector = Callable[[str, Optional[str]], Optional[str]]


TRADE_ALIASES: Mapping[Trade, Tuple[str, ...]] = MappingProxyType({
    Trade.ROOFING: ("roofing", "roofer", "roofs", "roof", "shingle"),
    Trade.FLOORING: ("flooring", "floors", "carpet", "tile"),
    Trade.DRYWALL: ("drywall", "sheetrock", "wall"),
    Trade.PAINTING: ("painting", "painter", "paint"),
    Trade.PLUMBING: ("plumbing", "plumber", "pipe"),
    Trade.ELECTRICAL: ("electrical", "electrician", "electric"),
    Trade.HVAC: ("hvac", "heating", "cooling", "ac"),
    Trade.WINDOWS: ("windows", "window", "glass"),
    Trade.DOORS: ("doors", "door", "entry"),
    Trade.APPLIANCES: ("appliances", "appliance"),
    Trade.CABINETS: ("cabinets", "cabinet", "kitchen"),
    Trade.GENERAL: ("general", "contractor", "gc"),
})


class TradeMatcher:
    """
    Alias-table trade normalizer.

    Args:
        aliases: Ordered mapping of canonical trade to its alias strings
    """

    def __init__(self, aliases: Mapping[Trade, Tuple[str, ...]] = TRADE_ALIASES):
        self._aliases = aliases

    def classify(self, label: Optional[str]) -> Trade:
        """Return the canonical trade for a label, or Trade.UNKNOWN."""
        if not label:
            return Trade.UNKNOWN
        lowered = label.strip().lower()
        for trade, aliases in self._aliases.items():
            if any(alias in lowered for alias in aliases):
                return trade
        return Trade.UNKNOWN

    def normalize(self, label: Optional[str]) -> str:
        """
        Canonical trade value for a label.

        Unmatched labels come back lower-cased and trimmed. Idempotent:
        ``normalize(normalize(x)) == normalize(x)``.
        """
        if not label:
            return ""
        trade = self.classify(label)
        if trade is Trade.UNKNOWN:
            return label.strip().lower()
        return trade.value

    def matches(self, specialty: Optional[str], required: Iterable[str]) -> bool:
        """
        Whether a partner specialty covers the required trades.

        - no specialty: never matches
        - no required trades: always matches
        - general contractors match everything
        - otherwise any required trade equal to, containing, or contained in the
          partner's normalized trade matches
        """
        if not specialty:
            return False
        required = [r for r in required if r]
        if not required:
            return True

        partner_trade = self.normalize(specialty)
        if partner_trade == Trade.GENERAL.value:
            return True

        for needed in required:
            needed_trade = self.normalize(needed)
            if (
                needed_trade == partner_trade
                or needed_trade in partner_trade
                or partner_trade in needed_trade
            ):
                return True
        return False

    def is_general(self, specialty: Optional[str]) -> bool:
        """True for a missing specialty or one that normalizes to general."""
        return not specialty or self.normalize(specialty) == Trade.GENERAL.value

    def detect_from_item(self, item_name: str, category: Optional[str] = None) -> Optional[str]:
        """Alias-table detector: item name first, then category."""
        for label in (item_name, category):
            trade = self.classify(label)
            if trade is not Trade.UNKNOWN:
                return trade.value
        return None


default_trade_matcher = TradeMatcher()


def normalize_trade(label: Optional[str]) -> str:
    return default_trade_matcher.normalize(label)


def classify_trade(label: Optional[str]) -> Trade:
    return default_trade_matcher.classify(label)


def matches_trade(specialty: Optional[str], required: Iterable[str]) -> bool:
    return default_trade_matcher.matches(specialty, required)


def detect_trade_from_aliases(item_name: str, category: Optional[str] = None) -> Optional[str]:
    return default_trade_matcher.detect_from_item(item_name, category)


def extract_trades_from_claim_items(
    items: Iterable[ClaimItem],
    detect_trade: TradeDetector = detect_trade_from_aliases,
) -> List[str]:
    """
    Distinct trades detected across claim line items.

    Args:
        items: Claim line items
        detect_trade: Called once per item with (item_name, category)

    Returns:
        Detected trades in first-seen order, without duplicates or None
    """
    seen: List[str] = []
    for item in items:
        trade = detect_trade(item.itemName, item.category)
        if trade is not None and trade not in seen:
            seen.append(trade)
    return seen
