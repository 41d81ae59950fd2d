"""
Cross-Domain Aggregator - Builds the DashboardSnapshot

Pipeline (pure after the reads):
    1. Resolve each domain collection (records, domain objects or a SourceResult)
    2. Parse records into domain models, skipping malformed ones
    3. Validate the requirement hierarchy
    4. Group-by counts per domain + coverage metrics
    5. Assemble one immutable DashboardSnapshot

Partial-failure isolation: an unreadable domain contributes an empty
collection for that domain only. Nothing here raises for bad data.
"""

import asyncio
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from traceboard.core.logging_config import get_logger
from traceboard.domain.constants import (
    domain_keys,
    environment_enums,
    project_enums,
    release_enums,
    squad_enums,
    tech_stack_enums,
)
from traceboard.domain.environments import Environment
from traceboard.domain.portfolio import BusinessProject, TechStackCategory, TechStackComponent
from traceboard.domain.releases import Release
from traceboard.domain.requirements import BusinessScenario, TestCase, UserJourney
from traceboard.domain.snapshot import (
    BusinessRequirementSummary,
    DashboardSnapshot,
    EnvironmentSummary,
    ReleaseSummary,
    SquadSummary,
    TechStackSummary,
)
from traceboard.domain.squads import Squad
from traceboard.errors import MalformedRecordError, SourceError
from traceboard.storage.overview_source import OverviewSource
from traceboard.storage.repositories import CollectionRepository, SourceResult, read_source
from traceboard.traceability.coverage import compute_coverage, summarize_executions
from traceboard.traceability.validator import find_tech_stack_cycles, validate_hierarchy
from traceboard.utils.error_handling import log_and_continue, log_and_return_default
from traceboard.utils.statistics import average, count_by, finite_sum, percentage

logger = get_logger(__name__)

M = TypeVar("M")


def resolve_collection(collections: Mapping[str, Any], key: str) -> list[Any]:
    """
    Return the raw collection for one domain.

    A missing key is an empty collection. A failed SourceResult, or a value
    that is not a list, is unreadable: it is logged and treated as empty.
    """
    if key not in collections or collections[key] is None:
        return []

    value = collections[key]
    if isinstance(value, SourceResult):
        if value.error is not None:
            return log_and_return_default(logger, value.error, {"domain": key}, [], "Collection read")
        return list(value.records)

    if isinstance(value, (list, tuple)):
        return list(value)

    error = SourceError(key, f"expected a list of records, got {type(value).__name__}")
    return log_and_return_default(logger, error, {"domain": key}, [], "Collection read")


def parse_records(records: Sequence[Any], model: type[M], key: str) -> list[M]:
    """
    Convert raw records to domain models.

    Instances of ``model`` pass through unchanged. Malformed records are
    skipped and logged; they stay in storage untouched.
    """
    from_json: Callable[[Any], M] = model.from_json  # type: ignore[attr-defined]
    parsed: list[M] = []
    for index, record in enumerate(records):
        if isinstance(record, model):
            parsed.append(record)
            continue
        try:
            parsed.append(from_json(record))
        except MalformedRecordError as e:
            record_id = record.get("id") if isinstance(record, dict) else None
            log_and_continue(logger, e, {"domain": key, "index": index, "record_id": record_id}, "Record parsing")
    return parsed


def summarize_projects(projects: Sequence[BusinessProject]) -> BusinessRequirementSummary:
    by_status = count_by((p.status for p in projects), project_enums.STATUSES)
    return BusinessRequirementSummary(
        total_projects=len(projects),
        by_status=by_status,
        active_projects=by_status["In Progress"],
        completed_projects=by_status["Completed"],
        on_hold_projects=by_status["On Hold"],
        high_priority_projects=sum(1 for p in projects if p.is_high_priority),
        total_budget=round(finite_sum(p.budget for p in projects), 2),
    )


def summarize_tech_stack(
    components: Sequence[TechStackComponent], categories: Sequence[TechStackCategory]
) -> TechStackSummary:
    by_health = count_by((c.health_status for c in components), tech_stack_enums.HEALTH_STATUSES)
    cyclic = find_tech_stack_cycles(components)
    return TechStackSummary(
        total_components=len(components),
        by_health=by_health,
        healthy_components=by_health["Healthy"],
        warning_components=by_health["Warning"],
        critical_components=by_health["Critical"],
        active_categories=len(categories),
        cyclic_components=len(cyclic),
    )


def summarize_releases(releases: Sequence[Release]) -> ReleaseSummary:
    by_status = count_by((r.status for r in releases), release_enums.STATUSES)
    checks = [check for release in releases for check in release.readiness_checks]
    open_risks = [risk for release in releases for risk in release.open_risks]
    return ReleaseSummary(
        total_releases=len(releases),
        by_status=by_status,
        in_development=by_status["development"],
        in_testing=by_status["testing"],
        ready=by_status["ready"],
        released=by_status["released"],
        average_progress=average([r.progress for r in releases]),
        open_risks=len(open_risks),
        critical_open_risks=sum(1 for risk in open_risks if risk.is_critical),
        blocked_checks=sum(r.blocked_checks for r in releases),
        readiness_percentage=percentage(sum(r.completed_checks for r in releases), len(checks)),
    )


def summarize_squads(squads: Sequence[Squad]) -> SquadSummary:
    by_status = count_by((s.status for s in squads), squad_enums.STATUSES)
    return SquadSummary(
        total_squads=len(squads),
        by_status=by_status,
        active_squads=by_status["active"],
        total_members=sum(s.member_count for s in squads),
        available_members=sum(s.available_member_count for s in squads),
    )


def summarize_environments(environments: Sequence[Environment]) -> EnvironmentSummary:
    by_status = count_by((e.status for e in environments), environment_enums.STATUSES)
    apis = [api for env in environments for api in env.apis]
    return EnvironmentSummary(
        total_environments=len(environments),
        by_status=by_status,
        available_environments=by_status["available"],
        booked_environments=by_status["booked"],
        maintenance_environments=by_status["maintenance"],
        down_environments=by_status["down"],
        over_capacity_environments=sum(1 for e in environments if e.is_over_capacity),
        total_apis=len(apis),
        healthy_apis=sum(1 for api in apis if api.is_healthy),
    )


def build_snapshot(collections: Mapping[str, Any], timestamp: datetime | None = None) -> DashboardSnapshot:
    """
    Aggregate every domain collection into one DashboardSnapshot.

    Args:
        collections: Domain key -> list of JSON records, list of domain
            objects, or SourceResult. Missing keys are empty collections.
        timestamp: Snapshot time (defaults to now, UTC)

    Returns:
        DashboardSnapshot; all zeros when every collection is empty

    Example:
        snapshot = build_snapshot({
            "environments": [{"status": "booked"}, {"status": "available"}],
            "releases": [{"progress": 40}, {"progress": 80}],
        })
        snapshot.environment_status["available"]  # 1
        snapshot.releases.average_progress        # 60.0
    """
    def load(key: str, model: type[M]) -> list[M]:
        return parse_records(resolve_collection(collections, key), model, key)

    projects = load(domain_keys.BUSINESS_PROJECTS, BusinessProject)
    components = load(domain_keys.TECH_STACK_ITEMS, TechStackComponent)
    categories = load(domain_keys.TECH_STACK_CATEGORIES, TechStackCategory)
    squads = load(domain_keys.SQUADS, Squad)
    environments = load(domain_keys.ENVIRONMENTS, Environment)
    releases = load(domain_keys.RELEASES, Release)
    journeys = load(domain_keys.USER_JOURNEYS, UserJourney)
    scenarios = load(domain_keys.BUSINESS_SCENARIOS, BusinessScenario)
    test_cases = load(domain_keys.TEST_CASES, TestCase)

    validation = validate_hierarchy(journeys, scenarios, test_cases)

    snapshot = DashboardSnapshot(
        timestamp=timestamp or datetime.now(timezone.utc),
        business_requirements=summarize_projects(projects),
        tech_stack=summarize_tech_stack(components, categories),
        releases=summarize_releases(releases),
        squads=summarize_squads(squads),
        environments=summarize_environments(environments),
        traceability=compute_coverage(journeys, scenarios, test_cases, validation),
        test_results=summarize_executions(validation.valid_test_cases),
    )
    logger.debug(
        "Snapshot built",
        extra={
            "extra_fields": {
                "journeys": len(journeys),
                "scenarios": len(scenarios),
                "test_cases": len(test_cases),
                "coverage_percentage": snapshot.traceability.coverage_percentage,
            }
        },
    )
    return snapshot


class SnapshotAggregator:
    """
    Reads every domain repository concurrently and builds the snapshot.

    Holds no state between refreshes; concurrent refresh() calls are
    independent and the caller keeps whichever result it wants.

    Args:
        repositories: Domain key -> repository
        overview_source: Used when no repository is configured

    Example:
        aggregator = SnapshotAggregator(repositories_for(Path(".tmp/traceboard")))
        snapshot = await aggregator.refresh()
    """

    def __init__(
        self,
        repositories: Mapping[str, CollectionRepository] | None = None,
        overview_source: OverviewSource | None = None,
    ):
        self.repositories = dict(repositories or {})
        self.overview_source = overview_source

    async def read_all(self) -> dict[str, SourceResult]:
        """Read every repository concurrently; failures come back as SourceResults."""
        keys = list(self.repositories)
        results = await asyncio.gather(*(read_source(self.repositories[key]) for key in keys))

        failed = [result.domain for result in results if not result.ok]
        if failed:
            logger.warning(f"{len(failed)} of {len(keys)} collections unreadable: {', '.join(failed)}")
        return dict(zip(keys, results))

    async def refresh(self) -> DashboardSnapshot:
        """Produce a fresh snapshot."""
        if not self.repositories:
            if self.overview_source is not None:
                return await self.overview_source.fetch_snapshot()
            return DashboardSnapshot.empty()

        collections = await self.read_all()
        return build_snapshot(collections)
