"""
Traceability - Requirement hierarchy validation and coverage metrics

Usage:
    from traceboard.traceability import compute_coverage, validate_hierarchy

    validation = validate_hierarchy(journeys, scenarios, test_cases)
    metrics = compute_coverage(journeys, scenarios, test_cases, validation)
"""

from .coverage import (
    IntegrationLinkCoverage,
    JourneyCoverage,
    compute_coverage,
    integration_link_coverage,
    journey_coverage,
    summarize_executions,
)
from .hierarchy import RequirementHierarchy
from .validator import HierarchyValidation, dangling_parents, find_tech_stack_cycles, validate_hierarchy

__all__ = [
    "HierarchyValidation",
    "IntegrationLinkCoverage",
    "JourneyCoverage",
    "RequirementHierarchy",
    "compute_coverage",
    "dangling_parents",
    "find_tech_stack_cycles",
    "integration_link_coverage",
    "journey_coverage",
    "summarize_executions",
    "validate_hierarchy",
]
