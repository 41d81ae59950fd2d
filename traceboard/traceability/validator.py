"""
Hierarchy Validator - Read-time referential checks

Storage never enforces the journey -> scenario -> test case links, so every
read resolves them here. Broken links are reported, never raised:

    - A scenario is valid iff its user_journey_id names an existing journey.
    - A test case is valid iff its business_scenario_id names a VALID scenario.
      A test case under an orphaned scenario is itself orphaned.

Also reports tech-stack components that are their own ancestor.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from traceboard.core.logging_config import get_logger
from traceboard.domain.portfolio import TechStackComponent
from traceboard.domain.requirements import BusinessScenario, TestCase, UserJourney

logger = get_logger(__name__)


@dataclass(frozen=True)
class HierarchyValidation:
    """
    Partition of scenarios and test cases into valid and orphaned.

    Input order is preserved inside every partition.

    Attributes:
        valid_scenarios: Scenarios whose journey exists
        valid_test_cases: Test cases whose scenario is valid
        orphaned_scenarios: Scenarios whose journey is missing
        orphaned_test_cases: Test cases whose scenario is missing or orphaned
    """

    valid_scenarios: tuple[BusinessScenario, ...] = field(default_factory=tuple)
    valid_test_cases: tuple[TestCase, ...] = field(default_factory=tuple)
    orphaned_scenarios: tuple[BusinessScenario, ...] = field(default_factory=tuple)
    orphaned_test_cases: tuple[TestCase, ...] = field(default_factory=tuple)

    @property
    def has_orphans(self) -> bool:
        return bool(self.orphaned_scenarios or self.orphaned_test_cases)

    @property
    def valid_scenario_ids(self) -> frozenset[str]:
        return frozenset(scenario.id for scenario in self.valid_scenarios)


def validate_hierarchy(
    journeys: Iterable[UserJourney],
    scenarios: Iterable[BusinessScenario],
    test_cases: Iterable[TestCase],
) -> HierarchyValidation:
    """
    Resolve parent references across the three requirement collections.

    Args:
        journeys: User journeys
        scenarios: Business scenarios
        test_cases: Test cases

    Returns:
        HierarchyValidation partitioning scenarios and test cases

    Example:
        result = validate_hierarchy(
            [UserJourney(id="j1")],
            [BusinessScenario(id="s1", user_journey_id="j1"),
             BusinessScenario(id="s2", user_journey_id="jX")],
            [TestCase(id="t1", business_scenario_id="s2")],
        )
        [s.id for s in result.orphaned_scenarios]   # ["s2"]
        [t.id for t in result.orphaned_test_cases]  # ["t1"]
    """
    journey_ids = {journey.id for journey in journeys}

    valid_scenarios: list[BusinessScenario] = []
    orphaned_scenarios: list[BusinessScenario] = []
    for scenario in scenarios:
        if scenario.user_journey_id and scenario.user_journey_id in journey_ids:
            valid_scenarios.append(scenario)
        else:
            orphaned_scenarios.append(scenario)

    valid_scenario_ids = {scenario.id for scenario in valid_scenarios}

    valid_test_cases: list[TestCase] = []
    orphaned_test_cases: list[TestCase] = []
    for test_case in test_cases:
        if test_case.business_scenario_id and test_case.business_scenario_id in valid_scenario_ids:
            valid_test_cases.append(test_case)
        else:
            orphaned_test_cases.append(test_case)

    if orphaned_scenarios or orphaned_test_cases:
        logger.info(
            f"Hierarchy has {len(orphaned_scenarios)} orphaned scenarios "
            f"and {len(orphaned_test_cases)} orphaned test cases",
            extra={
                "extra_fields": {
                    "orphaned_scenarios": [s.id for s in orphaned_scenarios],
                    "orphaned_test_cases": [t.id for t in orphaned_test_cases],
                }
            },
        )

    return HierarchyValidation(
        valid_scenarios=tuple(valid_scenarios),
        valid_test_cases=tuple(valid_test_cases),
        orphaned_scenarios=tuple(orphaned_scenarios),
        orphaned_test_cases=tuple(orphaned_test_cases),
    )


def find_tech_stack_cycles(components: Sequence[TechStackComponent]) -> list[str]:
    """
    Find components that are their own ancestor.

    Follows parent_id links from every component. A component is reported
    when the walk returns to it; components that merely hang below a cycle
    are not. Unknown parents end the walk (see dangling_parents).

    Returns:
        Ids of components on a parent cycle, in input order
    """
    parents = {component.id: component.parent_id for component in components if component.id}
    on_cycle: list[str] = []

    for component_id in parents:
        seen: set[str] = set()
        current = parents.get(component_id)
        while current and current not in seen:
            if current == component_id:
                on_cycle.append(component_id)
                break
            seen.add(current)
            current = parents.get(current)

    if on_cycle:
        logger.warning(
            f"Tech stack has {len(on_cycle)} components on a parent cycle",
            extra={"extra_fields": {"components": on_cycle}},
        )
    return on_cycle


def dangling_parents(components: Sequence[TechStackComponent]) -> list[str]:
    """Ids of components whose parent_id names no known component."""
    known = {component.id for component in components if component.id}
    return [
        component.id
        for component in components
        if component.parent_id is not None and component.parent_id not in known
    ]
