"""
Domain Constants

Status, health and severity enumerations shared by the domain models and the
aggregator, plus the storage keys of each domain collection. Values match the
strings the editing forms persist, so they are compared verbatim.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DomainKeys:
    """
    Storage key of each independently persisted domain collection.

    The keys double as file stems for JsonFileRepository
    (``<data_dir>/<key>.json``).

    Example:
        >>> domain_keys.TEST_CASES
        'testCases'
    """

    BUSINESS_PROJECTS: str = "businessRequirements_projects"
    TECH_STACK_ITEMS: str = "techStackItems"
    TECH_STACK_CATEGORIES: str = "techStackCategories"
    SQUADS: str = "squads"
    ENVIRONMENTS: str = "environments"
    RELEASES: str = "releases"
    USER_JOURNEYS: str = "userJourneys"
    BUSINESS_SCENARIOS: str = "businessScenarios"
    TEST_CASES: str = "testCases"

    @property
    def all(self) -> tuple[str, ...]:
        """Every collection key, in snapshot order."""
        return (
            self.BUSINESS_PROJECTS,
            self.TECH_STACK_ITEMS,
            self.TECH_STACK_CATEGORIES,
            self.SQUADS,
            self.ENVIRONMENTS,
            self.RELEASES,
            self.USER_JOURNEYS,
            self.BUSINESS_SCENARIOS,
            self.TEST_CASES,
        )


@dataclass(frozen=True)
class ProjectEnums:
    """Business project enumerations."""

    STATUSES: tuple[str, ...] = ("Planning", "In Progress", "On Hold", "Completed", "Cancelled")
    PRIORITIES: tuple[str, ...] = ("Low", "Medium", "High", "Critical")
    HIGH_PRIORITIES: tuple[str, ...] = ("High", "Critical")
    RISK_LEVELS: tuple[str, ...] = ("Low", "Medium", "High")


@dataclass(frozen=True)
class TechStackEnums:
    """Tech-stack component enumerations."""

    HEALTH_STATUSES: tuple[str, ...] = ("Healthy", "Warning", "Critical", "Unknown")
    STATUSES: tuple[str, ...] = ("Active", "Deprecated", "Development", "Planned")


@dataclass(frozen=True)
class SquadEnums:
    """
    Squad enumerations.

    LIST_SLOTS hold any number of members; SINGLE_SLOTS hold at most one.
    Slot names are the persisted record keys.
    """

    STATUSES: tuple[str, ...] = ("active", "inactive", "planning")
    MEMBER_STATUSES: tuple[str, ...] = ("active", "inactive", "on_leave")
    LIST_SLOTS: tuple[str, ...] = ("engineers", "testers", "analysts", "journeyExperts")
    SINGLE_SLOTS: tuple[str, ...] = ("productOwner", "releaseLead")


@dataclass(frozen=True)
class EnvironmentEnums:
    """Environment and API endpoint enumerations."""

    STATUSES: tuple[str, ...] = ("available", "booked", "maintenance", "down")
    TYPES: tuple[str, ...] = ("development", "testing", "staging", "production", "demo")
    API_STATUSES: tuple[str, ...] = ("healthy", "degraded", "down")


@dataclass(frozen=True)
class ReleaseEnums:
    """Release, risk and readiness-check enumerations."""

    STATUSES: tuple[str, ...] = ("planning", "development", "testing", "ready", "released")
    RISK_SEVERITIES: tuple[str, ...] = ("low", "medium", "high", "critical")
    RISK_STATUSES: tuple[str, ...] = ("open", "mitigated", "closed")
    CHECK_STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed", "blocked")


@dataclass(frozen=True)
class RequirementEnums:
    """User journey, scenario, test case and defect enumerations."""

    JOURNEY_STATUSES: tuple[str, ...] = ("Draft", "Review", "Approved", "Deprecated")
    SCENARIO_STATUSES: tuple[str, ...] = ("Draft", "Review", "Approved", "In Progress", "Completed")
    AUTOMATION_STATUSES: tuple[str, ...] = ("Manual", "Automated", "Semi-Automated")
    TEST_STATUSES: tuple[str, ...] = ("Draft", "Ready", "In Progress", "Passed", "Failed", "Blocked")
    EXECUTION_RESULTS: tuple[str, ...] = ("Pass", "Fail", "Skip")
    DEFECT_SEVERITIES: tuple[str, ...] = ("Critical", "High", "Medium", "Low")
    DEFECT_STATUSES: tuple[str, ...] = ("Open", "In Progress", "Resolved", "Closed")


# Singleton instances for easy import
domain_keys = DomainKeys()
project_enums = ProjectEnums()
tech_stack_enums = TechStackEnums()
squad_enums = SquadEnums()
environment_enums = EnvironmentEnums()
release_enums = ReleaseEnums()
requirement_enums = RequirementEnums()
