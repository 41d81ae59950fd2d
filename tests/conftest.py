"""
Pytest configuration and shared fixtures

Provides sample domain collections in the persisted (camelCase) record shape
plus in-memory repositories built from them.
"""

from datetime import datetime, timezone

import pytest

from traceboard.domain.requirements import BusinessScenario, TestCase, UserJourney
from traceboard.storage.repositories import InMemoryRepository

# ===== Record Fixtures =====


@pytest.fixture
def sample_timestamp():
    """Provide a consistent timestamp for testing"""
    return datetime(2026, 2, 7, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def journey_records():
    """Two journeys, one approved"""
    return [
        {
            "id": "j1",
            "title": "Customer checkout",
            "persona": "Shopper",
            "priority": "High",
            "status": "Approved",
            "businessScenarios": ["s1", "s2"],
            "jiraLink": "https://jira.internal/browse/CHK-1",
        },
        {
            "id": "j2",
            "title": "Account recovery",
            "persona": "Member",
            "priority": "Medium",
            "status": "Draft",
            "businessScenarios": ["s3"],
        },
    ]


@pytest.fixture
def scenario_records():
    """Three valid scenarios and one whose journey was deleted"""
    return [
        {"id": "s1", "userJourneyId": "j1", "title": "Pay by card", "testCases": ["t1", "t2"]},
        {"id": "s2", "userJourneyId": "j1", "title": "Pay by voucher", "testCases": ["t3"]},
        {"id": "s3", "userJourneyId": "j2", "title": "Reset password", "testCases": []},
        {"id": "s9", "userJourneyId": "j-deleted", "title": "Legacy flow", "testCases": ["t9"]},
    ]


@pytest.fixture
def test_case_records():
    """Four linked test cases and one under the orphaned scenario"""
    return [
        {
            "id": "t1",
            "businessScenarioId": "s1",
            "automationStatus": "Automated",
            "executionResult": "Pass",
            "githubLink": "https://github.com/acme/checkout/blob/main/tests/test_card.py",
        },
        {
            "id": "t2",
            "businessScenarioId": "s1",
            "automationStatus": "Manual",
            "executionResult": "Fail",
            "defects": [{"id": "d1", "title": "Card declined", "severity": "High", "status": "Open"}],
        },
        {"id": "t3", "businessScenarioId": "s2", "automationStatus": "Automated", "executionResult": "Pass"},
        {"id": "t4", "businessScenarioId": "s2", "automationStatus": "Semi-Automated"},
        {
            "id": "t9",
            "businessScenarioId": "s9",
            "automationStatus": "Automated",
            "executionResult": "Pass",
            "defects": [{"id": "d9", "title": "Legacy crash", "severity": "Low", "status": "Open"}],
        },
    ]


@pytest.fixture
def journeys(journey_records):
    return [UserJourney.from_json(record) for record in journey_records]


@pytest.fixture
def scenarios(scenario_records):
    return [BusinessScenario.from_json(record) for record in scenario_records]


@pytest.fixture
def test_cases(test_case_records):
    return [TestCase.from_json(record) for record in test_case_records]


@pytest.fixture
def sample_collections(journey_records, scenario_records, test_case_records):
    """A record set for every domain collection"""
    return {
        "businessRequirements_projects": [
            {"id": "p1", "name": "Portal", "status": "In Progress", "priority": "High", "budget": 250000},
            {"id": "p2", "name": "Billing", "status": "Completed", "priority": "Low", "budget": 100000.5},
            {"id": "p3", "name": "Search", "status": "On Hold", "priority": "Critical"},
        ],
        "techStackItems": [
            {"id": "c1", "name": "React", "category": "cat1", "status": "Active", "healthStatus": "Healthy"},
            {"id": "c2", "name": "Node", "category": "cat2", "status": "Active", "healthStatus": "Warning"},
            {"id": "c3", "name": "Oracle", "category": "cat3", "status": "Deprecated", "healthStatus": "Critical"},
        ],
        "techStackCategories": [{"id": "cat1", "name": "Frontend"}, {"id": "cat2", "name": "Backend"}],
        "squads": [
            {
                "id": "sq1",
                "name": "Payments",
                "status": "active",
                "engineers": [{"id": "u1", "status": "active"}, {"id": "u2", "status": "on_leave"}],
                "testers": [{"id": "u3"}],
                "productOwner": {"id": "u4", "status": "active"},
            },
            {"id": "sq2", "name": "Platform", "status": "planning", "analysts": ["u5"]},
        ],
        "environments": [
            {"id": "e1", "name": "SIT", "type": "testing", "status": "available", "capacity": 10, "currentUsage": 4},
            {
                "id": "e2",
                "name": "UAT",
                "type": "staging",
                "status": "booked",
                "capacity": 5,
                "currentUsage": 7,
                "booking": {
                    "id": "b1",
                    "bookedBy": "QA",
                    "startDate": "2026-02-01",
                    "endDate": "2026-02-14",
                    "purpose": "Regression",
                },
                "apis": [
                    {"id": "a1", "name": "Orders", "status": "healthy", "responseTime": 120, "uptime": 99.9},
                    {"id": "a2", "name": "Payments", "status": "degraded", "responseTime": 900, "uptime": 97},
                ],
            },
        ],
        "releases": [
            {
                "id": "r1",
                "name": "R1",
                "status": "testing",
                "progress": 40,
                "risks": [
                    {"id": "k1", "title": "Vendor delay", "severity": "critical", "status": "open"},
                    {"id": "k2", "title": "Scope", "severity": "low", "status": "mitigated"},
                ],
                "readinessChecks": [
                    {"id": "rc1", "item": "Sign-off", "status": "completed"},
                    {"id": "rc2", "item": "Runbook", "status": "blocked"},
                ],
            },
            {"id": "r2", "name": "R2", "status": "development", "progress": 80},
        ],
        "userJourneys": journey_records,
        "businessScenarios": scenario_records,
        "testCases": test_case_records,
    }


# ===== Repository Fixtures =====


@pytest.fixture
def in_memory_repositories(sample_collections):
    """One InMemoryRepository per domain, seeded with sample_collections"""
    return {key: InMemoryRepository(key, records) for key, records in sample_collections.items()}
