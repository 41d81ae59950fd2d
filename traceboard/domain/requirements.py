"""
Requirement hierarchy domain models

Three levels linked by string ids, each stored in its own collection:

    UserJourney  --owns-->  BusinessScenario  --owns-->  TestCase (+ Defects)

A child names its parent (``user_journey_id`` / ``business_scenario_id``) and a
parent lists its children's ids in order. Nothing enforces the links at write
time in storage; traceability.validator resolves them at read time.

These records round-trip through to_json(): fields the engine does not model
(description, owner, tags, ...) are carried in ``raw`` and written back.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from .records import (
    id_list,
    object_list,
    optional_link,
    optional_id,
    optional_text,
    reference_id,
    require_id,
    require_mapping,
)


@dataclass(frozen=True)
class Defect:
    """
    A defect raised against a test case.

    Attributes:
        id: Defect id
        title: Summary
        severity: Critical, High, Medium or Low
        status: Open, In Progress, Resolved or Closed
    """

    id: str
    title: str = ""
    severity: str = "Medium"
    status: str = "Open"

    @property
    def is_open(self) -> bool:
        return self.status == "Open"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Defect":
        data = require_mapping(data, "Defect")
        return cls(
            id=optional_id(data, "Defect"),
            title=optional_text(data, "title"),
            severity=optional_text(data, "severity", "Medium"),
            status=optional_text(data, "status", "Open"),
        )

    def to_json(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "severity": self.severity, "status": self.status}


@dataclass(frozen=True)
class UserJourney:
    """
    Top level of the requirement hierarchy.

    Attributes:
        id: Journey id
        title: Journey title
        persona: Persona the journey serves
        priority: High, Medium or Low
        status: Draft, Review, Approved or Deprecated
        business_scenarios: Ordered ids of the scenarios this journey owns
        jira_link / confluence_link: Optional integration links
    """

    id: str
    title: str = ""
    persona: str = ""
    priority: str = "Medium"
    status: str = "Draft"
    business_scenarios: tuple[str, ...] = field(default_factory=tuple)
    jira_link: str | None = None
    confluence_link: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_approved(self) -> bool:
        return self.status == "Approved"

    def with_scenarios(self, scenario_ids: tuple[str, ...]) -> "UserJourney":
        return replace(self, business_scenarios=scenario_ids)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "UserJourney":
        """
        Deserialize a persisted journey record.

        Raises:
            MalformedRecordError: Missing id or a non-list businessScenarios field
        """
        data = require_mapping(data, "UserJourney")
        return cls(
            id=require_id(data, "UserJourney"),
            title=optional_text(data, "title"),
            persona=optional_text(data, "persona"),
            priority=optional_text(data, "priority", "Medium"),
            status=optional_text(data, "status", "Draft"),
            business_scenarios=id_list(data, "businessScenarios"),
            jira_link=optional_link(data, "jiraLink"),
            confluence_link=optional_link(data, "confluenceLink"),
            raw=dict(data),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            **self.raw,
            "id": self.id,
            "title": self.title,
            "persona": self.persona,
            "priority": self.priority,
            "status": self.status,
            "businessScenarios": list(self.business_scenarios),
            "jiraLink": self.jira_link,
            "confluenceLink": self.confluence_link,
        }


@dataclass(frozen=True)
class BusinessScenario:
    """
    Middle level of the requirement hierarchy.

    Attributes:
        id: Scenario id
        title: Scenario title
        user_journey_id: Owning journey id (may not resolve; see validator)
        status: Draft, Review, Approved, In Progress or Completed
        test_cases: Ordered ids of the test cases this scenario owns
        jira_ticket: Optional Jira ticket key
    """

    id: str
    user_journey_id: str
    title: str = ""
    status: str = "Draft"
    priority: str = "Medium"
    test_cases: tuple[str, ...] = field(default_factory=tuple)
    jira_ticket: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def with_test_cases(self, test_case_ids: tuple[str, ...]) -> "BusinessScenario":
        return replace(self, test_cases=test_case_ids)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "BusinessScenario":
        data = require_mapping(data, "BusinessScenario")
        return cls(
            id=require_id(data, "BusinessScenario"),
            user_journey_id=reference_id(data, "userJourneyId"),
            title=optional_text(data, "title"),
            status=optional_text(data, "status", "Draft"),
            priority=optional_text(data, "priority", "Medium"),
            test_cases=id_list(data, "testCases"),
            jira_ticket=optional_link(data, "jiraTicket"),
            raw=dict(data),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            **self.raw,
            "id": self.id,
            "title": self.title,
            "userJourneyId": self.user_journey_id,
            "status": self.status,
            "priority": self.priority,
            "testCases": list(self.test_cases),
            "jiraTicket": self.jira_ticket,
        }


@dataclass(frozen=True)
class TestCase:
    """
    Leaf of the requirement hierarchy.

    Attributes:
        id: Test case id
        title: Test case title
        business_scenario_id: Owning scenario id ("" when unlinked)
        automation_status: Manual, Automated or Semi-Automated
        status: Draft, Ready, In Progress, Passed, Failed or Blocked
        execution_result: Last result (Pass, Fail, Skip) or None if never run
        defects: Defects raised against this test case
        github_link: Optional link to the automated test source

    Example:
        case = TestCase.from_json({
            "id": "t1", "businessScenarioId": "s1",
            "automationStatus": "Automated", "executionResult": "Pass",
        })
        case.is_automated  # True
        case.has_passed    # True
    """

    __test__ = False  # not a pytest test class

    id: str
    business_scenario_id: str
    title: str = ""
    automation_status: str = "Manual"
    status: str = "Draft"
    execution_result: str | None = None
    defects: tuple[Defect, ...] = field(default_factory=tuple)
    github_link: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_automated(self) -> bool:
        return self.automation_status == "Automated"

    @property
    def has_passed(self) -> bool:
        return self.execution_result == "Pass"

    @property
    def open_defects(self) -> tuple[Defect, ...]:
        return tuple(defect for defect in self.defects if defect.is_open)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "TestCase":
        """
        Deserialize a persisted test case record.

        ``businessScenario`` is accepted as an older spelling of
        ``businessScenarioId``.
        """
        data = require_mapping(data, "TestCase")
        scenario_id = reference_id(data, "businessScenarioId") or reference_id(data, "businessScenario")
        return cls(
            id=require_id(data, "TestCase"),
            business_scenario_id=scenario_id,
            title=optional_text(data, "title"),
            automation_status=optional_text(data, "automationStatus", "Manual"),
            status=optional_text(data, "status", "Draft"),
            execution_result=data.get("executionResult") or None,
            defects=tuple(Defect.from_json(defect) for defect in object_list(data, "defects")),
            github_link=optional_link(data, "githubLink"),
            raw=dict(data),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            **self.raw,
            "id": self.id,
            "title": self.title,
            "businessScenarioId": self.business_scenario_id,
            "automationStatus": self.automation_status,
            "status": self.status,
            "executionResult": self.execution_result,
            "defects": [defect.to_json() for defect in self.defects],
            "githubLink": self.github_link,
        }
