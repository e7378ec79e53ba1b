"""
Rotation Distribution Check

QA tooling for the competitive rotation. Repeatedly fills a small number of ad slots
by weighted draws without replacement and compares how often each partner was picked
with its share of the total rotation weight, using a chi-square goodness-of-fit
statistic at the 0.05 significance level.

Draws without replacement flatten the distribution (a dominant partner can take at
most one slot per draw), so a failing result with several slots per draw is expected
for very skewed weights.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import numpy as np
import pandas as pd

from claimrouter.core.config import get_settings
from claimrouter.models.enums import AdStatus, RotationTier
from claimrouter.models.schemas import (
    DistributionResult,
    DistributionSummary,
    PartnerAdConfig,
    WeightValidation,
)
from claimrouter.services.rotation import RotationEngine, default_rotation_engine


logger = logging.getLogger(__name__)


SAMPLE_REGION = "TX-Gulf"
SAMPLE_STATE = "TX"
SAMPLE_TRADE = "roofing"

# Critical chi-square values at alpha = 0.05 by degrees of freedom
CHI_SQUARE_CRITICAL_005 = {
    1: 3.841,
    2: 5.991,
    3: 7.815,
    4: 9.488,
    5: 11.070,
    6: 12.592,
    7: 14.067,
    8: 15.507,
    9: 16.919,
    10: 18.307,
}


def chi_square_threshold(degrees_of_freedom: int) -> float:
    """Critical value at 0.05; linear extrapolation past 10 degrees of freedom."""
    if degrees_of_freedom in CHI_SQUARE_CRITICAL_005:
        return CHI_SQUARE_CRITICAL_005[degrees_of_freedom]
    if degrees_of_freedom > 10:
        return CHI_SQUARE_CRITICAL_005[10] + (degrees_of_freedom - 10) * 1.5
    return 0.0


def sample_partners() -> List[PartnerAdConfig]:
    """Reference population spanning every rotation tier."""
    def partner(partner_id, name, tier, budget, spent, regions, impressions, clicks):
        return PartnerAdConfig(
            partnerId=partner_id,
            companyName=name,
            tradeType=SAMPLE_TRADE,
            tier=tier,
            monthlyBudget=budget,
            budgetSpent=spent,
            regions=regions,
            state=SAMPLE_STATE,
            status=AdStatus.ACTIVE,
            totalImpressions=impressions,
            totalClicks=clicks,
        )

    return [
        partner("test-premium-1", "Premium Roofing Co", RotationTier.PREMIUM,
                2000, 500, ["TX-Gulf", "TX-Central"], 1000, 50),
        partner("test-standard-1", "Standard Contractor LLC", RotationTier.STANDARD,
                500, 100, ["TX-Gulf", "TX-Central"], 500, 20),
        partner("test-standard-2", "Quality Repairs Inc", RotationTier.STANDARD,
                700, 200, ["TX-Gulf"], 300, 15),
        partner("test-byo-1", "Build Your Own Partner", RotationTier.BUILD_YOUR_OWN,
                300, 50, ["TX-Gulf", "TX-Central"], 200, 10),
        partner("test-free-1", "Free Tier Contractor", RotationTier.FREE,
                0, 0, ["TX-Gulf", "TX-Central", "TX-West"], 100, 5),
    ]


def run_distribution_test(
    partners: Optional[List[PartnerAdConfig]] = None,
    iterations: Optional[int] = None,
    region: str = SAMPLE_REGION,
    state: str = SAMPLE_STATE,
    trade_type: Optional[str] = SAMPLE_TRADE,
    slots_per_iteration: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
    engine: RotationEngine = default_rotation_engine,
) -> DistributionSummary:
    """
    Simulate rotation draws and test them against the rotation weights.

    Args:
        partners: Population to test; the sample population when None
        iterations: Number of draws; defaults to the configured distribution_iterations
        region, state, trade_type: Placement being simulated
        slots_per_iteration: Slots filled per draw; defaults to the configured value
        rng: numpy Generator used for the draws
        now: Clock used for the rotation weights

    Returns:
        DistributionSummary with per-partner results ordered by weight
    """
    settings = get_settings()
    iterations = iterations or settings.distribution_iterations
    slots = slots_per_iteration or settings.distribution_slots_per_iteration
    now = now or datetime.now(timezone.utc)
    population = sample_partners() if partners is None else partners

    weights = engine.calculate_weights(population, region, state, trade_type, now)
    if not weights:
        return DistributionSummary(
            totalIterations=0,
            totalSelections=0,
            chiSquareStatistic=0.0,
            passed=False,
            threshold=0.0,
            message="No eligible partners for the given criteria",
            timestamp=now,
        )

    rng = rng if rng is not None else np.random.default_rng(settings.random_seed)
    by_id = {p.partnerId: p for p in population}

    df = pd.DataFrame({
        "partnerId": [w.partnerId for w in weights],
        "weight": [w.weight for w in weights],
    })
    df["companyName"] = df["partnerId"].map(lambda pid: by_id[pid].companyName)
    df["tier"] = df["partnerId"].map(lambda pid: by_id[pid].tier.value)
    df["monthlyBudget"] = df["partnerId"].map(lambda pid: by_id[pid].monthlyBudget)
    df["share"] = df["weight"] / df["weight"].sum()

    draws = min(slots, int(np.count_nonzero(df["share"].to_numpy())))
    counts = np.zeros(len(df), dtype=np.int64)
    probabilities = df["share"].to_numpy()
    for _ in range(iterations):
        picked = rng.choice(len(df), size=draws, replace=False, p=probabilities)
        counts[picked] += 1

    total_selections = iterations * draws
    df["actualSelections"] = counts
    df["expectedPercentage"] = df["share"] * 100
    df["actualPercentage"] = df["actualSelections"] / total_selections * 100
    df["deviation"] = (df["actualPercentage"] - df["expectedPercentage"]).abs()
    expected_count = df["share"] * total_selections
    df["chiSquareContrib"] = np.where(
        expected_count > 0,
        (df["actualSelections"] - expected_count) ** 2 / expected_count.where(expected_count > 0, 1),
        0.0,
    )

    chi_square = float(df["chiSquareContrib"].sum())
    degrees_of_freedom = len(df) - 1
    threshold = chi_square_threshold(degrees_of_freedom)
    passed = chi_square <= threshold
    verdict = "PASSED" if passed else "FAILED"
    comparison = "<=" if passed else ">"
    message = (
        f"Distribution test {verdict}: Chi-square {chi_square:.2f} {comparison} "
        f"{threshold:.2f} (df={degrees_of_freedom})"
    )
    logger.info(message)

    df = df.sort_values("weight", ascending=False, kind="stable")
    results = [
        DistributionResult(
            partnerId=row.partnerId,
            companyName=row.companyName,
            tier=row.tier,
            monthlyBudget=float(row.monthlyBudget),
            expectedWeight=round(float(row.weight), 3),
            actualSelections=int(row.actualSelections),
            actualPercentage=round(float(row.actualPercentage), 2),
            expectedPercentage=round(float(row.expectedPercentage), 2),
            deviation=round(float(row.deviation), 2),
            chiSquareContrib=round(float(row.chiSquareContrib), 3),
        )
        for row in df.itertuples(index=False)
    ]

    return DistributionSummary(
        totalIterations=iterations,
        totalSelections=total_selections,
        chiSquareStatistic=round(chi_square, 3),
        passed=passed,
        threshold=round(threshold, 3),
        message=message,
        results=results,
        timestamp=now,
    )


def validate_weight_factors(
    now: Optional[datetime] = None,
    engine: RotationEngine = default_rotation_engine,
) -> WeightValidation:
    """Check tier ordering and factor sanity on the sample population."""
    weights = engine.calculate_weights(
        sample_partners(), SAMPLE_REGION, SAMPLE_STATE, SAMPLE_TRADE, now
    )
    if not weights:
        return WeightValidation(valid=False, issues=["No weights generated for test partners"])

    by_id = {w.partnerId: w for w in weights}
    premium = by_id.get("test-premium-1")
    standard = by_id.get("test-standard-1")
    free = by_id.get("test-free-1")

    issues = []
    if premium and standard and premium.weight <= standard.weight:
        issues.append("Premium tier should have higher weight than standard tier")
    if standard and free and standard.weight <= free.weight:
        issues.append("Standard tier should have higher weight than free tier")

    for w in weights:
        if w.factors.tierMultiplier <= 0:
            issues.append(f"Invalid tier multiplier for {w.partnerId}: {w.factors.tierMultiplier}")
        if w.factors.budgetFactor <= 0:
            issues.append(f"Invalid budget factor for {w.partnerId}: {w.factors.budgetFactor}")
        if w.weight <= 0:
            issues.append(f"Invalid total weight for {w.partnerId}: {w.weight}")

    return WeightValidation(valid=not issues, issues=issues, weights=weights)
