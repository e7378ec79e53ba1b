"""
Partner Routing Service

Filters a partner population down to the partners eligible for a claim, scores the
survivors and returns the top of the ranking together with disqualification counts.

Eligibility checks run in order and the first failure is the only one tallied:
1. status must be approved                      -> "Not approved"
2. specialty must cover the claim's trades      -> "No trade match"
3. location must match when ZIP or state given  -> "No location coverage"

``sum(disqualifiedReasons.values()) + totalEligible == totalCandidates`` for every run.
"""

import logging
from typing import Dict, Iterable, List, Optional

from claimrouter.core.config import get_settings
from claimrouter.models.enums import DisqualificationReason, PartnerStatus
from claimrouter.models.schemas import Partner, RoutingAnalysis, RoutingCriteria, RoutingResult
from claimrouter.services.location_matching import matches_location
from claimrouter.services.match_scoring import MatchScoreCalculator, default_score_calculator


logger = logging.getLogger(__name__)


class RoutingEngine:
    """
    Ranks partners for a claim.

    Args:
        score_calculator: Scorer used for surviving partners; its trade matcher also
            drives the trade eligibility check
    """

    def __init__(self, score_calculator: MatchScoreCalculator = default_score_calculator):
        self.score_calculator = score_calculator

    def disqualification(
        self,
        partner: Partner,
        criteria: RoutingCriteria,
    ) -> Optional[DisqualificationReason]:
        """First failing eligibility check for a partner, or None when eligible."""
        if PartnerStatus.from_value(partner.status) != PartnerStatus.APPROVED:
            return DisqualificationReason.NOT_APPROVED

        if criteria.trades and not self.score_calculator.trade_matcher.matches(
            partner.subType, criteria.trades
        ):
            return DisqualificationReason.NO_TRADE_MATCH

        if criteria.has_location:
            location = matches_location(partner, criteria.zipCode, criteria.state)
            if not location.matches:
                return DisqualificationReason.NO_LOCATION_COVERAGE

        return None

    def route(
        self,
        partners: Iterable[Partner],
        criteria: RoutingCriteria,
        limit: Optional[int] = None,
    ) -> RoutingAnalysis:
        """
        Route a claim across a partner population.

        Args:
            partners: Candidate partners, in store order
            criteria: Trades and location the claim needs
            limit: Maximum number of ranked partners returned. Defaults to the
                configured routing_default_limit.

        Returns:
            RoutingAnalysis with the top ``limit`` partners by descending score
        """
        if limit is None:
            limit = get_settings().routing_default_limit

        partners = list(partners)
        disqualified: Dict[str, int] = {reason.value: 0 for reason in DisqualificationReason}
        eligible: List[RoutingResult] = []

        for partner in partners:
            reason = self.disqualification(partner, criteria)
            if reason is not None:
                disqualified[reason.value] += 1
                continue

            match = self.score_calculator.calculate(partner, criteria)
            eligible.append(RoutingResult(
                partnerId=partner.id,
                companyName=partner.companyName,
                matchScore=match.score,
                matchReasons=match.reasons,
                tier=partner.tier,
            ))

        eligible.sort(key=lambda r: r.matchScore, reverse=True)

        logger.info(
            f"Routed claim for trades={criteria.trades} zip={criteria.zipCode} "
            f"state={criteria.state}: {len(eligible)}/{len(partners)} eligible"
        )
        logger.debug(f"Disqualified: {disqualified}")

        return RoutingAnalysis(
            eligiblePartners=eligible[:limit],
            totalCandidates=len(partners),
            totalEligible=len(eligible),
            disqualifiedReasons=disqualified,
        )


default_routing_engine = RoutingEngine()


def route_claim_to_partners(
    partners: Iterable[Partner],
    criteria: RoutingCriteria,
    limit: Optional[int] = None,
) -> RoutingAnalysis:
    return default_routing_engine.route(partners, criteria, limit)
