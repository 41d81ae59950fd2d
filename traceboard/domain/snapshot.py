"""
Dashboard snapshot domain models

The DashboardSnapshot is the only thing the dashboard presenter consumes: one
immutable value holding every derived counter, so no formula is re-derived in
the UI. Every metric is a finite non-negative number and every percentage is
an integer in [0, 100].

Sections:
    - BusinessRequirementSummary: projects by status, budget, priority
    - TechStackSummary: components by health
    - ReleaseSummary: releases by status, average progress, risks, readiness
    - SquadSummary: squads by status, total/available members
    - EnvironmentSummary: environments by status, capacity, API health
    - CoverageMetrics: requirement hierarchy coverage / automation / pass rate
    - TestExecutionSummary: last execution results
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any

from traceboard.utils.statistics import clamp_percentage, is_finite_number, non_negative, percentage

from .constants import environment_enums, project_enums, release_enums, squad_enums, tech_stack_enums
from .metrics import SOURCE_EMPTY, SOURCE_OVERVIEW, MetricSnapshot


def _zero_counts(keys: tuple[str, ...]) -> dict[str, int]:
    return {key: 0 for key in keys}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _is_percentage_field(name: str) -> bool:
    return name.endswith("percentage") or name == "pass_rate"


class SnapshotSection:
    """Shared serialisation and merge behaviour for snapshot sections."""

    def to_dict(self) -> dict[str, Any]:
        """camelCase dict in the shape the dashboard renders."""
        payload: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            payload[_camel(f.name)] = dict(value) if isinstance(value, dict) else value
        return payload

    def merged_with(self, payload: dict[str, Any]) -> "SnapshotSection":
        """
        Overlay values from a camelCase payload.

        Unknown keys are ignored. Numbers are sanitised: non-finite or negative
        values become 0 and percentages are clamped to [0, 100]. Count maps
        only accept their known keys.
        """
        updates: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            key = _camel(f.name)
            if key not in payload:
                continue
            current = getattr(self, f.name)
            incoming = payload[key]
            if isinstance(current, dict):
                if isinstance(incoming, dict):
                    updates[f.name] = {
                        k: int(non_negative(incoming[k])) if k in incoming else v for k, v in current.items()
                    }
            elif _is_percentage_field(f.name):
                updates[f.name] = clamp_percentage(incoming) if is_finite_number(incoming) else 0
            elif isinstance(current, int):
                updates[f.name] = int(non_negative(incoming)) if is_finite_number(incoming) else 0
            else:
                updates[f.name] = float(non_negative(incoming)) if is_finite_number(incoming) else 0.0
        return replace(self, **updates)  # type: ignore[type-var]


@dataclass(frozen=True)
class BusinessRequirementSummary(SnapshotSection):
    """Business projects grouped by status."""

    total_projects: int = 0
    by_status: dict[str, int] = field(default_factory=lambda: _zero_counts(project_enums.STATUSES))
    active_projects: int = 0
    completed_projects: int = 0
    on_hold_projects: int = 0
    high_priority_projects: int = 0
    total_budget: float = 0.0


@dataclass(frozen=True)
class TechStackSummary(SnapshotSection):
    """Tech-stack components grouped by health; cyclic_components sit on a parent cycle."""

    total_components: int = 0
    by_health: dict[str, int] = field(default_factory=lambda: _zero_counts(tech_stack_enums.HEALTH_STATUSES))
    healthy_components: int = 0
    warning_components: int = 0
    critical_components: int = 0
    active_categories: int = 0
    cyclic_components: int = 0


@dataclass(frozen=True)
class ReleaseSummary(SnapshotSection):
    """Releases grouped by status with average progress and risk counters."""

    total_releases: int = 0
    by_status: dict[str, int] = field(default_factory=lambda: _zero_counts(release_enums.STATUSES))
    in_development: int = 0
    in_testing: int = 0
    ready: int = 0
    released: int = 0
    average_progress: float = 0.0
    open_risks: int = 0
    critical_open_risks: int = 0
    blocked_checks: int = 0
    readiness_percentage: int = 0


@dataclass(frozen=True)
class SquadSummary(SnapshotSection):
    """Squads grouped by status; members summed across every role slot."""

    total_squads: int = 0
    by_status: dict[str, int] = field(default_factory=lambda: _zero_counts(squad_enums.STATUSES))
    active_squads: int = 0
    total_members: int = 0
    available_members: int = 0


@dataclass(frozen=True)
class EnvironmentSummary(SnapshotSection):
    """Environments grouped by status with capacity and API health counters."""

    total_environments: int = 0
    by_status: dict[str, int] = field(default_factory=lambda: _zero_counts(environment_enums.STATUSES))
    available_environments: int = 0
    booked_environments: int = 0
    maintenance_environments: int = 0
    down_environments: int = 0
    over_capacity_environments: int = 0
    total_apis: int = 0
    healthy_apis: int = 0


@dataclass(frozen=True)
class CoverageMetrics(SnapshotSection):
    """
    Requirement hierarchy metrics.

    Orphaned scenarios and test cases are excluded from every ratio; they are
    only counted in the orphan fields. ``open_defects`` counts defects on all
    test cases, orphaned ones included.

    Attributes:
        total_journeys: All user journeys
        approved_journeys: Journeys with status Approved
        total_scenarios: Scenarios whose journey exists
        covered_scenarios: Valid scenarios with at least one linked test case
        linked_test_cases: Test cases whose scenario is valid
        total_test_cases: Same population as linked_test_cases (ratio denominator)
        automated_test_cases: Linked test cases with automation status Automated
        passed_test_cases: Linked test cases whose last result is Pass
        coverage_percentage: covered_scenarios / total_scenarios
        automation_percentage: automated_test_cases / total_test_cases
        pass_rate: passed_test_cases / total_test_cases (never-run cases count as not passed)
        open_defects: Defects with status Open
        orphaned_scenarios: Scenarios whose journey is missing
        orphaned_test_cases: Test cases whose scenario is missing or orphaned
    """

    total_journeys: int = 0
    approved_journeys: int = 0
    total_scenarios: int = 0
    covered_scenarios: int = 0
    linked_test_cases: int = 0
    total_test_cases: int = 0
    automated_test_cases: int = 0
    passed_test_cases: int = 0
    coverage_percentage: int = 0
    automation_percentage: int = 0
    pass_rate: int = 0
    open_defects: int = 0
    orphaned_scenarios: int = 0
    orphaned_test_cases: int = 0


@dataclass(frozen=True)
class TestExecutionSummary(SnapshotSection):
    """Last execution results of the linked test cases."""

    __test__ = False  # not a pytest test class

    total_tests: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    skipped_tests: int = 0
    not_run_tests: int = 0
    pass_rate: int = 0


SECTION_KEYS = {
    "business_requirements": "businessRequirements",
    "tech_stack": "techStack",
    "releases": "releases",
    "squads": "squads",
    "environments": "environments",
    "traceability": "traceability",
    "test_results": "testResults",
}


@dataclass(frozen=True, kw_only=True)
class DashboardSnapshot(MetricSnapshot):
    """
    Complete result of one aggregation pass, safe to render as is.

    Example:
        snapshot = build_snapshot(collections)
        snapshot.traceability.coverage_percentage
        snapshot.environment_status  # {"available": 2, "booked": 1, ...}
        json.dumps(snapshot.to_dict())
    """

    business_requirements: BusinessRequirementSummary = field(default_factory=BusinessRequirementSummary)
    tech_stack: TechStackSummary = field(default_factory=TechStackSummary)
    releases: ReleaseSummary = field(default_factory=ReleaseSummary)
    squads: SquadSummary = field(default_factory=SquadSummary)
    environments: EnvironmentSummary = field(default_factory=EnvironmentSummary)
    traceability: CoverageMetrics = field(default_factory=CoverageMetrics)
    test_results: TestExecutionSummary = field(default_factory=TestExecutionSummary)

    @classmethod
    def empty(cls, timestamp: datetime | None = None) -> "DashboardSnapshot":
        """The all-zero snapshot."""
        return cls(timestamp=timestamp or datetime.now(timezone.utc), source=SOURCE_EMPTY)

    @property
    def environment_status(self) -> dict[str, int]:
        return dict(self.environments.by_status)

    @property
    def is_empty(self) -> bool:
        return all(value == 0 for value in self.numeric_fields().values())

    def sections(self) -> dict[str, SnapshotSection]:
        return {attr: getattr(self, attr) for attr in SECTION_KEYS}

    def to_dict(self) -> dict[str, Any]:
        """Serialise for the presenter (camelCase keys, ISO timestamp)."""
        payload: dict[str, Any] = {
            key: getattr(self, attr).to_dict() for attr, key in SECTION_KEYS.items()
        }
        payload["timestamp"] = self.timestamp.isoformat()
        payload["source"] = self.source
        return payload

    def numeric_fields(self) -> dict[str, float]:
        """
        Every metric flattened to ``{"section.field[.key]": number}``.

        Example:
            snapshot.numeric_fields()["environments.byStatus.available"]  # 2
        """
        flat: dict[str, float] = {}
        for attr, key in SECTION_KEYS.items():
            for name, value in getattr(self, attr).to_dict().items():
                if isinstance(value, dict):
                    for sub_key, sub_value in value.items():
                        flat[f"{key}.{name}.{sub_key}"] = sub_value
                else:
                    flat[f"{key}.{name}"] = value
        return flat

    def merged_with(self, data: dict[str, Any]) -> "DashboardSnapshot":
        """
        Overlay a pre-aggregated overview payload onto this snapshot.

        Understands the snapshot shape (``traceability``, ``releases``, ...)
        and the legacy overview ``metrics`` block (``coveragePercentage``,
        ``totalTestCases``, ``passedTests``, ``failedTests``, ``pendingTests``).
        Unknown keys are ignored; anything that is not a dict leaves the
        snapshot unchanged.
        """
        if not isinstance(data, dict):
            return self

        updates: dict[str, Any] = {}
        for attr, key in SECTION_KEYS.items():
            section_payload = data.get(key)
            if isinstance(section_payload, dict):
                updates[attr] = getattr(self, attr).merged_with(section_payload)

        legacy = data.get("metrics")
        if isinstance(legacy, dict):
            traceability = updates.get("traceability", self.traceability)
            updates["traceability"] = traceability.merged_with(
                {"coveragePercentage": legacy["coveragePercentage"]} if "coveragePercentage" in legacy else {}
            )
            test_results = updates.get("test_results", self.test_results).merged_with(
                {
                    "totalTests": legacy.get("totalTestCases", 0),
                    "passedTests": legacy.get("passedTests", 0),
                    "failedTests": legacy.get("failedTests", 0),
                    "notRunTests": legacy.get("pendingTests", 0),
                }
            )
            updates["test_results"] = replace(
                test_results, pass_rate=percentage(test_results.passed_tests, test_results.total_tests)
            )

        return replace(self, source=SOURCE_OVERVIEW, **updates)
