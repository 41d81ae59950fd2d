"""
Domain Models - Type-safe records for every dashboard collection

This package contains dataclasses representing the program's domains:
    - portfolio: BusinessProject, TechStackComponent, TechStackCategory
    - squads: Squad, TeamMember
    - environments: Environment, Booking, ApiEndpoint
    - releases: Release, Risk, ReadinessCheck
    - requirements: UserJourney, BusinessScenario, TestCase, Defect
    - snapshot: DashboardSnapshot and its sections

Usage:
    from traceboard.domain.requirements import TestCase

    case = TestCase.from_json({"id": "t1", "businessScenarioId": "s1"})
    if not case.is_automated:
        print(f"Test case {case.id} is still manual")
"""

# Import domain models for convenient access
from .environments import ApiEndpoint, Booking, Environment
from .metrics import MetricSnapshot
from .portfolio import BusinessProject, TechStackCategory, TechStackComponent
from .releases import ReadinessCheck, Release, Risk
from .requirements import BusinessScenario, Defect, TestCase, UserJourney
from .snapshot import (
    BusinessRequirementSummary,
    CoverageMetrics,
    DashboardSnapshot,
    EnvironmentSummary,
    ReleaseSummary,
    SquadSummary,
    TechStackSummary,
    TestExecutionSummary,
)
from .squads import Squad, TeamMember

__all__ = [
    # Base classes
    "MetricSnapshot",
    # Portfolio domain
    "BusinessProject",
    "TechStackComponent",
    "TechStackCategory",
    # Squad domain
    "Squad",
    "TeamMember",
    # Environment domain
    "Environment",
    "Booking",
    "ApiEndpoint",
    # Release domain
    "Release",
    "Risk",
    "ReadinessCheck",
    # Requirement hierarchy
    "UserJourney",
    "BusinessScenario",
    "TestCase",
    "Defect",
    # Snapshot
    "DashboardSnapshot",
    "BusinessRequirementSummary",
    "TechStackSummary",
    "ReleaseSummary",
    "SquadSummary",
    "EnvironmentSummary",
    "CoverageMetrics",
    "TestExecutionSummary",
]
