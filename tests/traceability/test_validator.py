"""
Tests for hierarchy validation

Covers orphan detection (including transitive orphaning), order preservation
and tech-stack cycle reporting.
"""

from traceboard.domain.portfolio import TechStackComponent
from traceboard.domain.requirements import BusinessScenario, TestCase, UserJourney
from traceboard.traceability.validator import dangling_parents, find_tech_stack_cycles, validate_hierarchy


def _component(component_id, parent_id=None):
    return TechStackComponent(id=component_id, name=component_id, category="", status="Active", parent_id=parent_id)


class TestValidateHierarchy:
    """Tests for validate_hierarchy()"""

    def test_partitions_sample_hierarchy(self, journeys, scenarios, test_cases):
        result = validate_hierarchy(journeys, scenarios, test_cases)
        assert [s.id for s in result.valid_scenarios] == ["s1", "s2", "s3"]
        assert [s.id for s in result.orphaned_scenarios] == ["s9"]
        assert [t.id for t in result.valid_test_cases] == ["t1", "t2", "t3", "t4"]
        assert [t.id for t in result.orphaned_test_cases] == ["t9"]
        assert result.has_orphans is True

    def test_missing_journey_orphans_scenario_and_its_test_cases(self):
        """Test that orphaning is transitive"""
        result = validate_hierarchy(
            [],
            [BusinessScenario(id="s1", user_journey_id="MISSING")],
            [TestCase(id="t1", business_scenario_id="s1")],
        )
        assert result.valid_scenarios == ()
        assert result.valid_test_cases == ()
        assert len(result.orphaned_test_cases) == 1

    def test_unlinked_test_case_is_orphaned(self):
        result = validate_hierarchy(
            [UserJourney(id="j1")],
            [BusinessScenario(id="s1", user_journey_id="j1")],
            [TestCase(id="t1", business_scenario_id="")],
        )
        assert [t.id for t in result.orphaned_test_cases] == ["t1"]

    def test_empty_inputs(self):
        result = validate_hierarchy([], [], [])
        assert result.has_orphans is False
        assert result.valid_scenario_ids == frozenset()

    def test_partition_is_complete(self, journeys, scenarios, test_cases):
        """Every input lands in exactly one partition"""
        result = validate_hierarchy(journeys, scenarios, test_cases)
        assert len(result.valid_scenarios) + len(result.orphaned_scenarios) == len(scenarios)
        assert len(result.valid_test_cases) + len(result.orphaned_test_cases) == len(test_cases)

    def test_does_not_mutate_inputs(self, journeys, scenarios, test_cases):
        before = (list(journeys), list(scenarios), list(test_cases))
        validate_hierarchy(journeys, scenarios, test_cases)
        assert (journeys, scenarios, test_cases) == before


class TestTechStackCycles:
    """Tests for find_tech_stack_cycles() and dangling_parents()"""

    def test_tree_has_no_cycles(self):
        components = [_component("c1"), _component("c2", "c1"), _component("c3", "c2")]
        assert find_tech_stack_cycles(components) == []

    def test_self_parent(self):
        assert find_tech_stack_cycles([_component("c1", "c1")]) == ["c1"]

    def test_cycle_reports_members_only(self):
        """Components hanging below a cycle are not on it"""
        components = [_component("a", "b"), _component("b", "a"), _component("c", "a")]
        assert find_tech_stack_cycles(components) == ["a", "b"]

    def test_dangling_parents(self):
        components = [_component("c1"), _component("c2", "gone")]
        assert dangling_parents(components) == ["c2"]
        assert find_tech_stack_cycles(components) == []
