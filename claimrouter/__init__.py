"""
Claim Router Package.

Scoring and allocation core for routing home-repair claim leads to service partners
and for distributing a partner's advertising budget across regions.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - data: Immutable reference tables (regional demand, geography, plan catalog)
    - models: Pydantic schemas and enums
    - services: Matching, scoring, routing, allocation and plan services

Every service is a pure function of its inputs plus the reference tables. Fetching
partners and persisting leads or impressions is left to the caller.
"""

__version__ = "1.0.0"
