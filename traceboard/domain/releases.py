"""
Release domain models

    - Release: a planned release with progress (0-100)
    - Risk: a release risk with severity and mitigation status
    - ReadinessCheck: a go-live checklist item
"""

from dataclasses import dataclass, field
from typing import Any

from .records import number, object_list, optional_id, optional_text, require_mapping


@dataclass(frozen=True)
class Risk:
    """A release risk (severity low/medium/high/critical, status open/mitigated/closed)."""

    id: str
    title: str
    severity: str
    status: str

    @property
    def is_open(self) -> bool:
        return self.status == "open"

    @property
    def is_critical(self) -> bool:
        return self.severity == "critical"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Risk":
        data = require_mapping(data, "Risk")
        return cls(
            id=optional_id(data, "Risk"),
            title=optional_text(data, "title"),
            severity=optional_text(data, "severity", "low"),
            status=optional_text(data, "status", "open"),
        )


@dataclass(frozen=True)
class ReadinessCheck:
    """A readiness checklist item (pending, in-progress, completed or blocked)."""

    id: str
    item: str
    status: str
    category: str = ""
    squad_id: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ReadinessCheck":
        data = require_mapping(data, "ReadinessCheck")
        return cls(
            id=optional_id(data, "ReadinessCheck"),
            item=optional_text(data, "item"),
            status=optional_text(data, "status", "pending"),
            category=optional_text(data, "category"),
            squad_id=optional_text(data, "squadId"),
        )


@dataclass(frozen=True)
class Release:
    """
    A release on the roadmap.

    Attributes:
        id: Release id
        name: Release name
        version: Version label
        status: planning, development, testing, ready or released
        progress: Completion percentage in [0, 100]
        risks: Release risks
        readiness_checks: Go-live checklist
    """

    id: str
    name: str
    status: str
    progress: float = 0.0
    version: str = ""
    risks: tuple[Risk, ...] = field(default_factory=tuple)
    readiness_checks: tuple[ReadinessCheck, ...] = field(default_factory=tuple)

    @property
    def open_risks(self) -> tuple[Risk, ...]:
        return tuple(risk for risk in self.risks if risk.is_open)

    @property
    def completed_checks(self) -> int:
        return sum(1 for check in self.readiness_checks if check.status == "completed")

    @property
    def blocked_checks(self) -> int:
        return sum(1 for check in self.readiness_checks if check.status == "blocked")

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Release":
        """
        Deserialize a persisted release record.

        Raises:
            MalformedRecordError: Progress outside [0, 100] or non-numeric
        """
        data = require_mapping(data, "Release")
        return cls(
            id=optional_id(data, "Release"),
            name=optional_text(data, "name"),
            status=optional_text(data, "status"),
            progress=number(data, "progress", default=0.0, minimum=0, maximum=100),
            version=optional_text(data, "version"),
            risks=tuple(Risk.from_json(risk) for risk in object_list(data, "risks")),
            readiness_checks=tuple(
                ReadinessCheck.from_json(check) for check in object_list(data, "readinessChecks")
            ),
        )
