"""
Location Matching Service

Decides whether a partner covers a claim's location. Rules are evaluated in order and
the first that applies wins:

1. no ZIP and no state given          -> 0.5 "No location criteria"
2. exact ZIP                          -> 1.0 "Exact ZIP match"
3. same 3-digit ZIP prefix            -> 0.8 "ZIP prefix match (regional)"
4. ZIP listed in serviceRegions       -> 0.9 "In service regions"
5. state listed in serviceRegions     -> 0.7 "State in service regions"
6. partner's home state               -> 0.6 "State match"
7. otherwise                          -> no match

Rule 3 is checked before rule 4, so a same-prefix partner scores 0.8 even when the
exact ZIP is also in its service regions.
"""

from typing import Optional

from claimrouter.models.schemas import LocationMatch, Partner


NO_CRITERIA = LocationMatch(matches=True, score=0.5, reason="No location criteria")
NO_COVERAGE = LocationMatch(matches=False, score=0.0, reason="No location coverage")


def _zip_prefix(zip_code: str) -> str:
    return zip_code.strip()[:3]


def matches_location(
    partner: Partner,
    zip_code: Optional[str] = None,
    state: Optional[str] = None,
) -> LocationMatch:
    if not zip_code and not state:
        return NO_CRITERIA

    service_regions = partner.serviceRegions or []

    if zip_code:
        zip_code = zip_code.strip()
        if partner.zipCode and partner.zipCode.strip() == zip_code:
            return LocationMatch(matches=True, score=1.0, reason="Exact ZIP match")

        if partner.zipCode and len(zip_code) >= 3 and _zip_prefix(partner.zipCode) == _zip_prefix(zip_code):
            return LocationMatch(matches=True, score=0.8, reason="ZIP prefix match (regional)")

        if zip_code in service_regions:
            return LocationMatch(matches=True, score=0.9, reason="In service regions")

    if state:
        wanted = state.strip().upper()
        if any(region.strip().upper() == wanted for region in service_regions):
            return LocationMatch(matches=True, score=0.7, reason="State in service regions")

        if partner.state and partner.state.strip().upper() == wanted:
            return LocationMatch(matches=True, score=0.6, reason="State match")

    return NO_COVERAGE
