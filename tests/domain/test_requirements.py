"""
Tests for requirement hierarchy domain models

Tests UserJourney, BusinessScenario, TestCase and Defect parsing and round-trips.
"""

import pytest

from traceboard.domain.requirements import BusinessScenario, Defect, TestCase, UserJourney
from traceboard.errors import MalformedRecordError


class TestUserJourney:
    """Tests for UserJourney domain model"""

    def test_from_json(self, journey_records):
        """Test parsing a persisted journey record"""
        journey = UserJourney.from_json(journey_records[0])
        assert journey.id == "j1"
        assert journey.status == "Approved"
        assert journey.business_scenarios == ("s1", "s2")
        assert journey.jira_link == "https://jira.internal/browse/CHK-1"
        assert journey.confluence_link is None

    def test_is_approved(self, journeys):
        """Test is_approved for Approved and Draft journeys"""
        assert journeys[0].is_approved is True
        assert journeys[1].is_approved is False

    def test_defaults(self):
        """Test a minimal record gets defaults"""
        journey = UserJourney.from_json({"id": "j1"})
        assert journey.status == "Draft"
        assert journey.priority == "Medium"
        assert journey.business_scenarios == ()

    def test_numeric_id_is_stringified(self):
        """Test ids generated as timestamps are read as strings"""
        journey = UserJourney.from_json({"id": 1707300000000})
        assert journey.id == "1707300000000"

    def test_missing_id_is_malformed(self):
        """Test that the hierarchy requires ids"""
        with pytest.raises(MalformedRecordError):
            UserJourney.from_json({"title": "No id"})

    def test_non_object_is_malformed(self):
        """Test that a non-dict record is rejected"""
        with pytest.raises(MalformedRecordError):
            UserJourney.from_json(["j1"])

    def test_scenario_ids_deduplicated(self):
        """Test blank and repeated scenario ids are dropped, order kept"""
        journey = UserJourney.from_json({"id": "j1", "businessScenarios": ["s2", "", "s1", "s2", None]})
        assert journey.business_scenarios == ("s2", "s1")

    def test_to_json_keeps_unmodelled_fields(self):
        """Test that fields outside the model survive a round-trip"""
        record = {"id": "j1", "title": "Checkout", "owner": "Alice", "tags": ["web"]}
        data = UserJourney.from_json(record).to_json()
        assert data["owner"] == "Alice"
        assert data["tags"] == ["web"]
        assert data["businessScenarios"] == []


class TestBusinessScenario:
    """Tests for BusinessScenario domain model"""

    def test_from_json(self, scenario_records):
        """Test parsing a persisted scenario record"""
        scenario = BusinessScenario.from_json(scenario_records[0])
        assert scenario.id == "s1"
        assert scenario.user_journey_id == "j1"
        assert scenario.test_cases == ("t1", "t2")

    def test_missing_journey_reference(self):
        """Test that a scenario without a journey parses with an empty reference"""
        scenario = BusinessScenario.from_json({"id": "s1"})
        assert scenario.user_journey_id == ""

    def test_with_test_cases_returns_copy(self):
        """Test with_test_cases does not mutate the original"""
        scenario = BusinessScenario(id="s1", user_journey_id="j1")
        updated = scenario.with_test_cases(("t1",))
        assert scenario.test_cases == ()
        assert updated.test_cases == ("t1",)

    def test_non_list_test_cases_is_malformed(self):
        """Test that testCases must be a list"""
        with pytest.raises(MalformedRecordError):
            BusinessScenario.from_json({"id": "s1", "testCases": "t1"})


class TestTestCase:
    """Tests for TestCase domain model"""

    def test_from_json(self, test_case_records):
        """Test parsing a persisted test case record"""
        case = TestCase.from_json(test_case_records[1])
        assert case.business_scenario_id == "s1"
        assert case.automation_status == "Manual"
        assert case.execution_result == "Fail"
        assert case.defects == (Defect(id="d1", title="Card declined", severity="High", status="Open"),)

    def test_is_automated(self, test_cases):
        """Test is_automated only for Automated"""
        assert test_cases[0].is_automated is True
        assert test_cases[1].is_automated is False
        assert test_cases[3].is_automated is False  # Semi-Automated

    def test_has_passed(self, test_cases):
        """Test has_passed for Pass, Fail and never run"""
        assert test_cases[0].has_passed is True
        assert test_cases[1].has_passed is False
        assert test_cases[3].has_passed is False

    def test_never_run_has_no_result(self, test_cases):
        """Test a test case without executionResult"""
        assert test_cases[3].execution_result is None

    def test_legacy_scenario_key(self):
        """Test businessScenario is accepted for businessScenarioId"""
        case = TestCase.from_json({"id": "t1", "businessScenario": "s7"})
        assert case.business_scenario_id == "s7"

    def test_open_defects(self):
        """Test open_defects filters by status"""
        case = TestCase.from_json(
            {
                "id": "t1",
                "businessScenarioId": "s1",
                "defects": [{"id": "d1", "status": "Open"}, {"id": "d2", "status": "Closed"}],
            }
        )
        assert [d.id for d in case.open_defects] == ["d1"]

    def test_to_json_round_trip(self, test_case_records):
        """Test that to_json reproduces the persisted shape"""
        record = test_case_records[1]
        data = TestCase.from_json(record).to_json()
        assert data["businessScenarioId"] == "s1"
        assert data["defects"][0]["id"] == "d1"
        assert TestCase.from_json(data) == TestCase.from_json(record)


class TestDefect:
    """Tests for Defect domain model"""

    def test_defaults(self):
        """Test a defect without severity or status"""
        defect = Defect.from_json({"id": "d1"})
        assert defect.severity == "Medium"
        assert defect.is_open is True

    def test_resolved_is_not_open(self):
        """Test that only Open counts as open"""
        assert Defect(id="d1", status="Resolved").is_open is False
        assert Defect(id="d2", status="In Progress").is_open is False
