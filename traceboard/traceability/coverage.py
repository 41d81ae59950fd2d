"""
Coverage Calculator - Requirement coverage, automation and pass-rate metrics

All ratios are computed over the VALID part of the hierarchy (see
validator.validate_hierarchy); orphans are only counted. Percentages are
whole numbers rounded half-up, and an empty denominator gives 0.

Pass-rate policy: a linked test case that has never been executed stays in
the denominator and counts as not passed.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from traceboard.domain.requirements import BusinessScenario, TestCase, UserJourney
from traceboard.domain.snapshot import CoverageMetrics, TestExecutionSummary
from traceboard.utils.statistics import percentage

from .validator import HierarchyValidation, validate_hierarchy

__all__ = [
    "CoverageMetrics",
    "IntegrationLinkCoverage",
    "JourneyCoverage",
    "TestExecutionSummary",
    "compute_coverage",
    "integration_link_coverage",
    "journey_coverage",
    "summarize_executions",
]


@dataclass(frozen=True)
class JourneyCoverage:
    """Coverage of the scenarios under one user journey."""

    journey_id: str
    title: str
    scenarios: int
    covered_scenarios: int
    test_cases: int
    coverage_percentage: int


@dataclass(frozen=True)
class IntegrationLinkCoverage:
    """How much of the hierarchy is linked to Jira, Confluence and GitHub."""

    journeys_with_jira: int = 0
    journeys_with_confluence: int = 0
    scenarios_with_jira: int = 0
    test_cases_with_github: int = 0
    jira_percentage: int = 0
    github_percentage: int = 0


def _linked_by_scenario(validation: HierarchyValidation) -> dict[str, int]:
    counts: dict[str, int] = {}
    for test_case in validation.valid_test_cases:
        counts[test_case.business_scenario_id] = counts.get(test_case.business_scenario_id, 0) + 1
    return counts


def compute_coverage(
    journeys: Sequence[UserJourney],
    scenarios: Sequence[BusinessScenario],
    test_cases: Sequence[TestCase],
    validation: HierarchyValidation | None = None,
) -> CoverageMetrics:
    """
    Compute the traceability metrics of the requirement hierarchy.

    Args:
        journeys: User journeys
        scenarios: Business scenarios
        test_cases: Test cases
        validation: Pre-computed validate_hierarchy() result for the same inputs

    Returns:
        CoverageMetrics; coverage is the share of valid scenarios with at least
        one linked test case, so it never exceeds 100

    Example:
        metrics = compute_coverage(journeys, scenarios, test_cases)
        print(f"{metrics.coverage_percentage}% of scenarios are tested")
    """
    validation = validation or validate_hierarchy(journeys, scenarios, test_cases)
    linked = validation.valid_test_cases
    per_scenario = _linked_by_scenario(validation)

    total_scenarios = len(validation.valid_scenarios)
    covered = sum(1 for scenario in validation.valid_scenarios if per_scenario.get(scenario.id))
    automated = sum(1 for case in linked if case.is_automated)
    passed = sum(1 for case in linked if case.has_passed)

    return CoverageMetrics(
        total_journeys=len(journeys),
        approved_journeys=sum(1 for journey in journeys if journey.is_approved),
        total_scenarios=total_scenarios,
        covered_scenarios=covered,
        linked_test_cases=len(linked),
        total_test_cases=len(linked),
        automated_test_cases=automated,
        passed_test_cases=passed,
        coverage_percentage=percentage(covered, total_scenarios),
        automation_percentage=percentage(automated, len(linked)),
        pass_rate=percentage(passed, len(linked)),
        open_defects=sum(len(case.open_defects) for case in test_cases),
        orphaned_scenarios=len(validation.orphaned_scenarios),
        orphaned_test_cases=len(validation.orphaned_test_cases),
    )


def summarize_executions(test_cases: Sequence[TestCase]) -> TestExecutionSummary:
    """
    Count the last execution result of each test case.

    Pass the linked test cases to keep the summary consistent with
    compute_coverage(). Results other than Pass, Fail or Skip count as not run.
    """
    passed = sum(1 for case in test_cases if case.execution_result == "Pass")
    failed = sum(1 for case in test_cases if case.execution_result == "Fail")
    skipped = sum(1 for case in test_cases if case.execution_result == "Skip")
    total = len(test_cases)
    return TestExecutionSummary(
        total_tests=total,
        passed_tests=passed,
        failed_tests=failed,
        skipped_tests=skipped,
        not_run_tests=total - passed - failed - skipped,
        pass_rate=percentage(passed, total),
    )


def journey_coverage(
    journeys: Sequence[UserJourney],
    scenarios: Sequence[BusinessScenario],
    test_cases: Sequence[TestCase],
) -> list[JourneyCoverage]:
    """Per-journey coverage, in journey order."""
    validation = validate_hierarchy(journeys, scenarios, test_cases)
    per_scenario = _linked_by_scenario(validation)

    results = []
    for journey in journeys:
        owned = [s for s in validation.valid_scenarios if s.user_journey_id == journey.id]
        covered = sum(1 for scenario in owned if per_scenario.get(scenario.id))
        results.append(
            JourneyCoverage(
                journey_id=journey.id,
                title=journey.title,
                scenarios=len(owned),
                covered_scenarios=covered,
                test_cases=sum(per_scenario.get(scenario.id, 0) for scenario in owned),
                coverage_percentage=percentage(covered, len(owned)),
            )
        )
    return results


def integration_link_coverage(
    journeys: Sequence[UserJourney],
    scenarios: Sequence[BusinessScenario],
    test_cases: Sequence[TestCase],
) -> IntegrationLinkCoverage:
    """Count hierarchy records linked to external tools."""
    journeys_with_jira = sum(1 for journey in journeys if journey.jira_link)
    scenarios_with_jira = sum(1 for scenario in scenarios if scenario.jira_ticket)
    test_cases_with_github = sum(1 for case in test_cases if case.github_link)
    return IntegrationLinkCoverage(
        journeys_with_jira=journeys_with_jira,
        journeys_with_confluence=sum(1 for journey in journeys if journey.confluence_link),
        scenarios_with_jira=scenarios_with_jira,
        test_cases_with_github=test_cases_with_github,
        jira_percentage=percentage(journeys_with_jira + scenarios_with_jira, len(journeys) + len(scenarios)),
        github_percentage=percentage(test_cases_with_github, len(test_cases)),
    )
