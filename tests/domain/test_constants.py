#!/usr/bin/env python3
"""
Tests for Domain Constants Module

Verifies immutability and the persisted values of keys and enumerations.
"""

from dataclasses import FrozenInstanceError

import pytest

from traceboard.domain.constants import (
    DomainKeys,
    domain_keys,
    environment_enums,
    project_enums,
    release_enums,
    requirement_enums,
    squad_enums,
    tech_stack_enums,
)


class TestDomainKeys:
    """Test DomainKeys constants"""

    def test_storage_keys(self):
        """Test keys match the browser storage keys of each collection"""
        assert domain_keys.BUSINESS_PROJECTS == "businessRequirements_projects"
        assert domain_keys.TECH_STACK_ITEMS == "techStackItems"
        assert domain_keys.TEST_CASES == "testCases"

    def test_all_lists_nine_unique_collections(self):
        assert len(domain_keys.all) == 9
        assert len(set(domain_keys.all)) == 9

    def test_immutable(self):
        with pytest.raises(FrozenInstanceError):
            domain_keys.SQUADS = "teams"  # type: ignore[misc]

    def test_class_defaults(self):
        assert DomainKeys().USER_JOURNEYS == "userJourneys"


class TestEnumerations:
    """Test status enumerations"""

    def test_environment_statuses(self):
        assert environment_enums.STATUSES == ("available", "booked", "maintenance", "down")

    def test_high_priorities_are_priorities(self):
        assert set(project_enums.HIGH_PRIORITIES) <= set(project_enums.PRIORITIES)

    def test_health_includes_unknown(self):
        assert "Unknown" in tech_stack_enums.HEALTH_STATUSES

    def test_squad_slots(self):
        assert squad_enums.SINGLE_SLOTS == ("productOwner", "releaseLead")
        assert "journeyExperts" in squad_enums.LIST_SLOTS

    def test_release_statuses(self):
        assert release_enums.STATUSES[-1] == "released"

    def test_execution_results(self):
        assert requirement_enums.EXECUTION_RESULTS == ("Pass", "Fail", "Skip")
