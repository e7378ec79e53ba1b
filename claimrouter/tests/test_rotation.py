"""
Tests for competitive rotation weights, placement selection, pacing and insights.
"""

from datetime import datetime, timedelta, timezone

import pytest

from claimrouter.models.enums import AdStatus, RotationTier
from claimrouter.services.rotation import (
    MAX_WEIGHT_CAP,
    RotationEngine,
    calculate_budget_pacing,
    calculate_rotation_weights,
    get_competitive_insights,
    select_partners_for_placement,
    weighted_random_select,
)


REGION = "Austin Area"


def _weights_by_id(weights):
    return {w.partnerId: w for w in weights}


class TestEligibility:

    def test_filters(self, make_ad_partner, mid_month) -> None:
        partners = [
            make_ad_partner("active"),
            make_ad_partner("paused", status=AdStatus.PAUSED),
            make_ad_partner("spent", budgetSpent=500),
            make_ad_partner("free", tier=RotationTier.FREE, monthlyBudget=0, budgetSpent=0),
            make_ad_partner("elsewhere", regions=["Houston Metro"]),
            make_ad_partner("wrong-state", state="OK"),
            make_ad_partner("plumber", tradeType="plumbing"),
            make_ad_partner("lower", state="tx", tradeType="Roofing"),
        ]

        weights = calculate_rotation_weights(partners, REGION, "TX", "roofing", mid_month)

        assert {w.partnerId for w in weights} == {"active", "free", "lower"}

    def test_no_trade_filter_without_trade(self, make_ad_partner, mid_month) -> None:
        partners = [make_ad_partner("a"), make_ad_partner("b", tradeType="plumbing")]
        assert len(calculate_rotation_weights(partners, REGION, "TX", None, mid_month)) == 2

    def test_no_eligible_partners(self, make_ad_partner, mid_month) -> None:
        assert calculate_rotation_weights([make_ad_partner("a")], "Houston Metro", "TX", now=mid_month) == []


class TestWeightFactors:

    def test_tier_ordering(self, make_ad_partner, mid_month) -> None:
        partners = [
            make_ad_partner("free", tier=RotationTier.FREE),
            make_ad_partner("byo", tier=RotationTier.BUILD_YOUR_OWN),
            make_ad_partner("standard", tier=RotationTier.STANDARD),
            make_ad_partner("premium", tier=RotationTier.PREMIUM),
        ]

        weights = calculate_rotation_weights(partners, REGION, "TX", "roofing", mid_month)

        assert [w.partnerId for w in weights] == ["premium", "standard", "byo", "free"]
        assert [w.priority for w in weights] == [1, 2, 3, 4]
        assert weights[0].factors.tierMultiplier == 4.0
        assert weights[-1].factors.tierMultiplier == 0.5

    def test_demand_bonus_and_cpc(self, make_ad_partner, mid_month) -> None:
        weight = calculate_rotation_weights([make_ad_partner("a")], REGION, "TX", now=mid_month)[0]
        # Austin: demand 82, 24 competitors, 1.3 region multiplier, 4.50 roofing CPC
        assert weight.factors.demandBonus == 1.3
        assert weight.factors.disasterBonus == 1.0
        assert weight.estimatedCpc == pytest.approx(7.02)

    def test_budget_factor_is_clamped(self, make_ad_partner, mid_month) -> None:
        partners = [
            make_ad_partner("big", monthlyBudget=10000, budgetSpent=0),
            make_ad_partner("small", monthlyBudget=10, budgetSpent=0),
            make_ad_partner("small-2", monthlyBudget=10, budgetSpent=0),
            make_ad_partner("small-3", monthlyBudget=10, budgetSpent=0),
        ]
        weights = _weights_by_id(calculate_rotation_weights(partners, REGION, "TX", now=mid_month))
        assert weights["big"].factors.budgetFactor == 2.0
        assert weights["small"].factors.budgetFactor == 0.3

    def test_zero_budget_free_partner(self, make_ad_partner, mid_month) -> None:
        partner = make_ad_partner("free", tier=RotationTier.FREE, monthlyBudget=0, budgetSpent=0)
        weight = calculate_rotation_weights([partner], REGION, "TX", now=mid_month)[0]
        assert weight.factors.budgetFactor == 0.3
        assert weight.factors.competitivePosition == 1.0

    def test_month_end_boost(self, make_ad_partner, mid_month) -> None:
        partner = make_ad_partner("a", monthlyBudget=500, budgetSpent=100)
        month_end = datetime(2024, 6, 28, 12, 0, 0)

        early = calculate_rotation_weights([partner], REGION, "TX", now=mid_month)[0]
        late = calculate_rotation_weights([partner], REGION, "TX", now=month_end)[0]

        assert early.factors.budgetFactor == 1.0
        assert late.factors.budgetFactor == 1.5

    def test_no_month_end_boost_when_budget_mostly_spent(self, make_ad_partner) -> None:
        partner = make_ad_partner("a", monthlyBudget=500, budgetSpent=400)
        weight = calculate_rotation_weights([partner], REGION, "TX", now=datetime(2024, 6, 29))[0]
        assert weight.factors.budgetFactor == 1.0

    def test_freshness_penalty(self, make_ad_partner, mid_month) -> None:
        partners = [
            make_ad_partner("just-shown", lastShownAt=mid_month - timedelta(minutes=3)),
            make_ad_partner("shown-earlier", lastShownAt=mid_month - timedelta(minutes=20)),
            make_ad_partner("never"),
        ]
        weights = _weights_by_id(calculate_rotation_weights(partners, REGION, "TX", now=mid_month))

        assert weights["just-shown"].factors.freshnessPenalty == pytest.approx(0.6)
        assert weights["shown-earlier"].factors.freshnessPenalty == 1.0
        assert weights["never"].factors.freshnessPenalty == 1.0
        assert weights["just-shown"].weight < weights["never"].weight

    def test_freshness_with_aware_last_shown(self, make_ad_partner) -> None:
        partner = make_ad_partner("a", lastShownAt=datetime.now(timezone.utc) - timedelta(minutes=5))
        weight = calculate_rotation_weights([partner], REGION, "TX", "roofing")[0]
        assert 0.5 < weight.factors.freshnessPenalty < 1.0

    def test_freshness_mixes_naive_and_aware(self, make_ad_partner, mid_month) -> None:
        partner = make_ad_partner("a", lastShownAt=mid_month - timedelta(minutes=3))
        aware_now = mid_month.replace(tzinfo=timezone.utc)
        weight = calculate_rotation_weights([partner], REGION, "TX", now=aware_now)[0]
        assert weight.factors.freshnessPenalty == pytest.approx(0.6)

    def test_trade_association_penalty(self, make_ad_partner, mid_month) -> None:
        partners = [make_ad_partner("assoc", isTradeAssociation=True), make_ad_partner("contractor")]
        weights = _weights_by_id(calculate_rotation_weights(partners, REGION, "TX", now=mid_month))
        assert weights["assoc"].factors.tradeAssociationPenalty == 0.5
        assert weights["assoc"].weight == pytest.approx(weights["contractor"].weight / 2)

    def test_disaster_bonus(self, make_ad_partner, fake_demand_model, mid_month) -> None:
        engine = RotationEngine(fake_demand_model)
        partners = [
            make_ad_partner("premium", tier=RotationTier.PREMIUM, regions=["Storm"], state="ZZ"),
            make_ad_partner("standard", regions=["Storm"], state="ZZ"),
        ]
        weights = _weights_by_id(engine.calculate_weights(partners, "Storm", "ZZ", now=mid_month))
        assert weights["premium"].factors.disasterBonus == 1.8
        assert weights["standard"].factors.disasterBonus == 1.2

    def test_weight_is_capped(self, make_ad_partner, mid_month) -> None:
        partners = [
            make_ad_partner("whale", tier=RotationTier.PREMIUM, monthlyBudget=10000, budgetSpent=0,
                            regions=["Houston Metro"]),
            make_ad_partner("minnow", monthlyBudget=100, budgetSpent=0, regions=["Houston Metro"]),
        ]
        weights = calculate_rotation_weights(partners, "Houston Metro", "TX", now=mid_month)
        assert weights[0].partnerId == "whale"
        assert weights[0].weight == MAX_WEIGHT_CAP

    def test_unknown_region_defaults(self, make_ad_partner, mid_month) -> None:
        partner = make_ad_partner("a", regions=["Nowhere"])
        weight = calculate_rotation_weights([partner], "Nowhere", "TX", now=mid_month)[0]
        assert weight.factors.demandBonus == 1.0
        assert weight.factors.disasterBonus == 1.0
        assert weight.estimatedCpc == 4.5
        # single competitor: 1 + 500 / (500 * 1) * 0.5
        assert weight.factors.competitivePosition == 1.5


class TestPlacementSelection:

    def test_select_for_placement(self, make_ad_partner, mid_month) -> None:
        partners = [make_ad_partner(f"p{i}") for i in range(4)]
        result = select_partners_for_placement(partners, REGION, "TX", max_results=2, now=mid_month)
        assert len(result.topPartners) == 2
        assert result.totalEligible == 4
        assert result.tradeType == "all"
        assert result.region == REGION
        assert result.timestamp == mid_month

    def test_weighted_random_select_returns_all_when_short(self, make_ad_partner, mid_month) -> None:
        weights = calculate_rotation_weights([make_ad_partner("a")], REGION, "TX", now=mid_month)
        assert weighted_random_select(weights, count=3) == weights
        assert weighted_random_select([], count=3) == []

    def test_drawn_entries_leave_the_pool(self, make_ad_partner, mid_month, scripted_random) -> None:
        partners = [make_ad_partner(pid) for pid in ("a", "b", "c")]
        weights = calculate_rotation_weights(partners, REGION, "TX", now=mid_month)
        ordered = [w.partnerId for w in weights]

        # Equal weights. 0.0 takes the first entry; 0.4 of the two left lands on the first of them
        selected = weighted_random_select(weights, count=2, rng=scripted_random(0.0, 0.4))

        assert [w.partnerId for w in selected] == [ordered[0], ordered[1]]

    def test_no_duplicates(self, make_ad_partner, mid_month, scripted_random) -> None:
        partners = [make_ad_partner(f"p{i}", monthlyBudget=100 * (i + 1), budgetSpent=0) for i in range(6)]
        weights = calculate_rotation_weights(partners, REGION, "TX", now=mid_month)
        selected = weighted_random_select(weights, count=4, rng=scripted_random(0.99, 0.99, 0.5, 0.01))
        ids = [w.partnerId for w in selected]
        assert len(ids) == 4
        assert len(set(ids)) == 4


class TestBudgetPacing:

    def test_underspending(self, make_ad_partner, mid_month) -> None:
        pacing = calculate_budget_pacing(make_ad_partner("a", monthlyBudget=500, budgetSpent=100), mid_month)
        assert pacing.isOnPace is False
        assert pacing.spendRate == 0.6
        assert pacing.daysRemaining == 20
        assert pacing.recommendedDailySpend == 20.0
        assert pacing.projectedMonthEnd == 300.0

    def test_on_pace(self, make_ad_partner, mid_month) -> None:
        pacing = calculate_budget_pacing(make_ad_partner("a", monthlyBudget=600, budgetSpent=200), mid_month)
        assert pacing.isOnPace is True
        assert pacing.spendRate == 1.0

    def test_zero_budget(self, make_ad_partner, mid_month) -> None:
        partner = make_ad_partner("a", tier=RotationTier.FREE, monthlyBudget=0, budgetSpent=0)
        pacing = calculate_budget_pacing(partner, mid_month)
        assert pacing.isOnPace is True
        assert pacing.spendRate == 0.0
        assert pacing.projectedMonthEnd == 0.0

    def test_last_day_of_month(self, make_ad_partner) -> None:
        pacing = calculate_budget_pacing(
            make_ad_partner("a", monthlyBudget=500, budgetSpent=450), datetime(2024, 6, 30, 23)
        )
        assert pacing.daysRemaining == 0
        assert pacing.recommendedDailySpend == 50.0


class TestCompetitiveInsights:

    def test_market_summary(self, make_ad_partner) -> None:
        partners = [
            make_ad_partner("premium", tier=RotationTier.PREMIUM, monthlyBudget=2000),
            make_ad_partner("standard", monthlyBudget=500),
            make_ad_partner("free", tier=RotationTier.FREE, monthlyBudget=0, budgetSpent=0),
            make_ad_partner("paused", tier=RotationTier.PREMIUM, status=AdStatus.PAUSED),
            make_ad_partner("elsewhere", regions=["Houston Metro"]),
        ]

        insights = get_competitive_insights(partners, REGION, "TX")

        assert insights.totalCompetitors == 3
        assert insights.avgBudget == 833
        assert insights.topTier == "premium"
        assert (insights.budgetRange.min, insights.budgetRange.max) == (0, 2000)
        assert insights.tierDistribution == {"premium": 1, "standard": 1, "free": 1}

    def test_empty_market(self) -> None:
        insights = get_competitive_insights([], REGION, "TX")
        assert insights.totalCompetitors == 0
        assert insights.topTier == "none"
        assert insights.tierDistribution == {}
