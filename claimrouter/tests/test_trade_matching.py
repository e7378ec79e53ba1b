"""
Tests for trade label normalization, trade matching and trade extraction.
"""

from types import MappingProxyType
from typing import List, Optional, Tuple

import pytest

from claimrouter.models.enums import Trade
from claimrouter.models.schemas import ClaimItem
from claimrouter.services.trade_matching import (
    TradeMatcher,
    classify_trade,
    detect_trade_from_aliases,
    extract_trades_from_claim_items,
    matches_trade,
    normalize_trade,
)


class TestNormalizeTrade:
    """Alias-table normalization."""

    @pytest.mark.parametrize("label,expected", [
        ("Roofing", "roofing"),
        ("  ROOFER ", "roofing"),
        ("shingle replacement", "roofing"),
        ("Sheetrock repair", "drywall"),
        ("Licensed Electrician", "electrical"),
        ("carpet", "flooring"),
        ("GC", "general"),
        ("kitchen remodel", "cabinets"),
    ])
    def test_known_aliases(self, label: str, expected: str) -> None:
        assert normalize_trade(label) == expected

    def test_unknown_label_is_lowered_and_trimmed(self) -> None:
        assert normalize_trade("  Landscaping ") == "landscaping"

    def test_first_trade_in_table_order_wins(self) -> None:
        # "roof" (roofing) and "tile" (flooring) both match; roofing comes first
        assert normalize_trade("roof tile") == "roofing"
        # "wall" matches drywall before painting is checked
        assert normalize_trade("wall paint") == "drywall"

    def test_substring_aliases_are_greedy(self) -> None:
        # "ac" is an hvac alias and appears inside "vacuum"
        assert normalize_trade("vacuum") == "hvac"
        assert normalize_trade("General Contractor") == "hvac"

    @pytest.mark.parametrize("label", [
        "Roofing", "plumber", "Landscaping", "  HVAC  ", "sheetrock", "", "gc",
    ])
    def test_idempotent(self, label: str) -> None:
        once = normalize_trade(label)
        assert normalize_trade(once) == once

    def test_empty_label(self) -> None:
        assert normalize_trade("") == ""
        assert normalize_trade(None) == ""

    def test_classify_returns_enum(self) -> None:
        assert classify_trade("Plumbing") is Trade.PLUMBING
        assert classify_trade("landscaping") is Trade.UNKNOWN
        assert classify_trade(None) is Trade.UNKNOWN


class TestMatchesTrade:

    def test_null_specialty_never_matches(self) -> None:
        assert matches_trade(None, []) is False
        assert matches_trade(None, ["roofing"]) is False
        assert matches_trade("", ["roofing"]) is False

    @pytest.mark.parametrize("specialty", ["roofing", "plumbing", "Landscaping", "gc"])
    def test_empty_requirements_match_any_specialty(self, specialty: str) -> None:
        assert matches_trade(specialty, []) is True

    def test_general_contractor_matches_everything(self) -> None:
        assert matches_trade("GC", ["plumbing", "electrical"]) is True

    def test_alias_match(self) -> None:
        assert matches_trade("Roofer", ["roofing"]) is True
        assert matches_trade("roofing", ["shingles"]) is True

    def test_any_required_trade_is_enough(self) -> None:
        assert matches_trade("plumbing", ["roofing", "plumber"]) is True

    def test_mismatch(self) -> None:
        assert matches_trade("plumbing", ["roofing"]) is False

    def test_unknown_trades_match_by_containment_both_ways(self) -> None:
        assert matches_trade("landscaping specialist", ["landscaping"]) is True
        assert matches_trade("landscaping", ["landscaping specialist"]) is True
        assert matches_trade("landscaping", ["masonry"]) is False

    def test_blank_required_entries_are_ignored(self) -> None:
        assert matches_trade("plumbing", [""]) is True


class TestCustomAliasTable:

    def test_injected_table_replaces_defaults(self) -> None:
        matcher = TradeMatcher(MappingProxyType({
            Trade.ROOFING: ("roof",),
            Trade.GENERAL: ("handyman",),
        }))
        assert matcher.normalize("Roofer") == "roofing"
        assert matcher.normalize("plumber") == "plumber"
        assert matcher.matches("Handyman", ["plumbing"]) is True


class TestExtractTrades:

    def test_deduplicates_in_first_seen_order(self) -> None:
        detected = {
            "Shingles": "roofing",
            "Drip edge": "roofing",
            "Water heater": "plumbing",
            "Couch": None,
        }
        calls: List[Tuple[str, Optional[str]]] = []

        def detector(name: str, category: Optional[str]) -> Optional[str]:
            calls.append((name, category))
            return detected[name]

        items = [
            ClaimItem(itemName="Shingles", category="Roof"),
            ClaimItem(itemName="Water heater"),
            ClaimItem(itemName="Drip edge", category="Roof"),
            ClaimItem(itemName="Couch", category="Furniture"),
        ]

        assert extract_trades_from_claim_items(items, detector) == ["roofing", "plumbing"]
        assert calls == [
            ("Shingles", "Roof"),
            ("Water heater", None),
            ("Drip edge", "Roof"),
            ("Couch", "Furniture"),
        ]

    def test_empty_items(self) -> None:
        assert extract_trades_from_claim_items([], lambda n, c: "roofing") == []

    def test_default_detector_uses_name_then_category(self) -> None:
        assert detect_trade_from_aliases("Ridge cap shingles") == "roofing"
        assert detect_trade_from_aliases("Flex line", "Plumbing") == "plumbing"
        assert detect_trade_from_aliases("Sofa", "Furniture") is None

    def test_default_detector_through_extraction(self) -> None:
        items = [
            ClaimItem(itemName="Ceiling fan", category="Electrical"),
            ClaimItem(itemName="Interior paint"),
            ClaimItem(itemName="Sofa"),
        ]
        assert extract_trades_from_claim_items(items) == ["electrical", "painting"]
