"""
Requirement Hierarchy - Write-time policy for the editing forms

Reads tolerate broken links (see validator); writes do not. RequirementHierarchy
is an immutable value over the three requirement collections: each operation
checks the parent reference, keeps the parent's ordered child ids in step and
returns a new hierarchy.

Removal policy: removing a journey or scenario orphans its children unless
cascade=True, in which case the whole subtree goes.
"""

from dataclasses import dataclass, field

from traceboard.core.logging_config import get_logger
from traceboard.domain.requirements import BusinessScenario, TestCase, UserJourney
from traceboard.errors import MissingReferenceError

from .validator import HierarchyValidation, validate_hierarchy

logger = get_logger(__name__)


def _without(ids: tuple[str, ...], removed: str | set[str]) -> tuple[str, ...]:
    drop = {removed} if isinstance(removed, str) else removed
    return tuple(item for item in ids if item not in drop)


def _appended(ids: tuple[str, ...], new_id: str) -> tuple[str, ...]:
    return ids if new_id in ids else ids + (new_id,)


@dataclass(frozen=True)
class RequirementHierarchy:
    """
    The three requirement collections, edited together.

    Example:
        hierarchy = RequirementHierarchy(journeys=(UserJourney(id="j1"),))
        hierarchy = hierarchy.add_scenario(BusinessScenario(id="s1", user_journey_id="j1"))
        hierarchy.journey("j1").business_scenarios   # ("s1",)
        hierarchy.add_test_case(TestCase(id="t1", business_scenario_id="missing"))
        # -> MissingReferenceError
    """

    journeys: tuple[UserJourney, ...] = field(default_factory=tuple)
    scenarios: tuple[BusinessScenario, ...] = field(default_factory=tuple)
    test_cases: tuple[TestCase, ...] = field(default_factory=tuple)

    def journey(self, journey_id: str) -> UserJourney | None:
        return next((journey for journey in self.journeys if journey.id == journey_id), None)

    def scenario(self, scenario_id: str) -> BusinessScenario | None:
        return next((scenario for scenario in self.scenarios if scenario.id == scenario_id), None)

    def test_case(self, test_case_id: str) -> TestCase | None:
        return next((case for case in self.test_cases if case.id == test_case_id), None)

    @staticmethod
    def _relink_journey(journey: UserJourney, scenario: BusinessScenario) -> UserJourney:
        if journey.id == scenario.user_journey_id:
            return journey.with_scenarios(_appended(journey.business_scenarios, scenario.id))
        if scenario.id in journey.business_scenarios:
            return journey.with_scenarios(_without(journey.business_scenarios, scenario.id))
        return journey

    @staticmethod
    def _relink_scenario(scenario: BusinessScenario, test_case: TestCase) -> BusinessScenario:
        if scenario.id == test_case.business_scenario_id:
            return scenario.with_test_cases(_appended(scenario.test_cases, test_case.id))
        if test_case.id in scenario.test_cases:
            return scenario.with_test_cases(_without(scenario.test_cases, test_case.id))
        return scenario

    def add_scenario(self, scenario: BusinessScenario) -> "RequirementHierarchy":
        """
        Add a scenario under an existing journey.

        Re-adding a known scenario replaces it; when its journey changed the
        id moves from the old journey's list to the new one.

        Raises:
            MissingReferenceError: If the scenario's journey does not exist
        """
        if self.journey(scenario.user_journey_id) is None:
            raise MissingReferenceError(scenario.id, scenario.user_journey_id, "user journey")

        journeys = tuple(self._relink_journey(journey, scenario) for journey in self.journeys)
        scenarios = tuple(s for s in self.scenarios if s.id != scenario.id) + (scenario,)
        return RequirementHierarchy(journeys=journeys, scenarios=scenarios, test_cases=self.test_cases)

    def add_test_case(self, test_case: TestCase) -> "RequirementHierarchy":
        """
        Add a test case under an existing scenario, moving it off any other
        scenario that still lists it.

        Raises:
            MissingReferenceError: If the test case's scenario does not exist
        """
        if self.scenario(test_case.business_scenario_id) is None:
            raise MissingReferenceError(test_case.id, test_case.business_scenario_id, "business scenario")

        scenarios = tuple(self._relink_scenario(scenario, test_case) for scenario in self.scenarios)
        test_cases = tuple(t for t in self.test_cases if t.id != test_case.id) + (test_case,)
        return RequirementHierarchy(journeys=self.journeys, scenarios=scenarios, test_cases=test_cases)

    def remove_journey(self, journey_id: str, cascade: bool = False) -> "RequirementHierarchy":
        """
        Remove a journey.

        Args:
            journey_id: Journey to remove
            cascade: Also remove its scenarios and their test cases. When False
                the scenarios stay and become orphans.
        """
        journeys = tuple(journey for journey in self.journeys if journey.id != journey_id)
        if not cascade:
            children = [s.id for s in self.scenarios if s.user_journey_id == journey_id]
            if children:
                logger.info(
                    f"Removing journey {journey_id!r} orphans {len(children)} scenarios",
                    extra={"extra_fields": {"journey_id": journey_id, "scenarios": children}},
                )
            return RequirementHierarchy(journeys=journeys, scenarios=self.scenarios, test_cases=self.test_cases)

        removed_scenarios = {s.id for s in self.scenarios if s.user_journey_id == journey_id}
        return RequirementHierarchy(
            journeys=journeys,
            scenarios=tuple(s for s in self.scenarios if s.id not in removed_scenarios),
            test_cases=tuple(t for t in self.test_cases if t.business_scenario_id not in removed_scenarios),
        )

    def remove_scenario(self, scenario_id: str, cascade: bool = False) -> "RequirementHierarchy":
        """
        Remove a scenario and unlink it from its journey.

        Args:
            scenario_id: Scenario to remove
            cascade: Also remove its test cases. When False they become orphans.
        """
        journeys = tuple(
            journey.with_scenarios(_without(journey.business_scenarios, scenario_id))
            if scenario_id in journey.business_scenarios
            else journey
            for journey in self.journeys
        )
        scenarios = tuple(s for s in self.scenarios if s.id != scenario_id)
        test_cases = self.test_cases
        if cascade:
            test_cases = tuple(t for t in self.test_cases if t.business_scenario_id != scenario_id)
        return RequirementHierarchy(journeys=journeys, scenarios=scenarios, test_cases=test_cases)

    def remove_test_case(self, test_case_id: str) -> "RequirementHierarchy":
        """Remove a test case and unlink it from its scenario."""
        scenarios = tuple(
            scenario.with_test_cases(_without(scenario.test_cases, test_case_id))
            if test_case_id in scenario.test_cases
            else scenario
            for scenario in self.scenarios
        )
        test_cases = tuple(t for t in self.test_cases if t.id != test_case_id)
        return RequirementHierarchy(journeys=self.journeys, scenarios=scenarios, test_cases=test_cases)

    def validate(self) -> HierarchyValidation:
        return validate_hierarchy(self.journeys, self.scenarios, self.test_cases)
