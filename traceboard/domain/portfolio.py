"""
Portfolio domain models - Business projects and tech-stack components

Represents the records behind the business-requirements and technical
configuration screens:
    - BusinessProject: funded initiative with status, priority and budget
    - TechStackComponent: platform component with a health status, optionally
      nested under a parent component
    - TechStackCategory: grouping of components
"""

from dataclasses import dataclass
from typing import Any

from .constants import project_enums
from .records import number, optional_id, optional_text, reference_id, require_mapping


@dataclass(frozen=True)
class BusinessProject:
    """
    A business project from the business-requirements screen.

    Attributes:
        id: Project id
        name: Project name
        status: Planning, In Progress, On Hold, Completed or Cancelled
        priority: Low, Medium, High or Critical
        budget: Non-negative budget
        expected_roi: Expected return on investment (%)
        risk_level: Low, Medium or High

    Example:
        project = BusinessProject.from_json({
            "id": "p1", "name": "Customer Portal", "status": "In Progress",
            "priority": "High", "budget": 250000, "expectedROI": 35, "riskLevel": "Medium",
        })
        project.is_high_priority  # True
    """

    id: str
    name: str
    status: str
    priority: str = "Medium"
    budget: float = 0.0
    expected_roi: float = 0.0
    risk_level: str = "Low"

    @property
    def is_high_priority(self) -> bool:
        """True for High and Critical projects."""
        return self.priority in project_enums.HIGH_PRIORITIES

    @property
    def is_active(self) -> bool:
        return self.status == "In Progress"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "BusinessProject":
        """
        Deserialize a persisted project record.

        Raises:
            MalformedRecordError: A non-numeric or negative budget
        """
        data = require_mapping(data, "BusinessProject")
        return cls(
            id=optional_id(data, "BusinessProject"),
            name=optional_text(data, "name"),
            status=optional_text(data, "status"),
            priority=optional_text(data, "priority", "Medium"),
            budget=number(data, "budget", default=0.0, minimum=0),
            expected_roi=number(data, "expectedROI", default=0.0),
            risk_level=optional_text(data, "riskLevel", "Low"),
        )


@dataclass(frozen=True)
class TechStackComponent:
    """
    A component of the technical stack.

    Components form a tree through ``parent_id``; cycles are reported by
    traceability.validator.find_tech_stack_cycles().

    Attributes:
        id: Component id
        name: Component name
        category: Id of the owning TechStackCategory
        status: Active, Deprecated, Development or Planned
        health_status: Healthy, Warning, Critical or Unknown
        parent_id: Optional id of the parent component
    """

    id: str
    name: str
    category: str
    status: str
    health_status: str = "Unknown"
    parent_id: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "TechStackComponent":
        data = require_mapping(data, "TechStackComponent")
        return cls(
            id=optional_id(data, "TechStackComponent"),
            name=optional_text(data, "name"),
            category=reference_id(data, "category"),
            status=optional_text(data, "status"),
            health_status=optional_text(data, "healthStatus", "Unknown"),
            parent_id=reference_id(data, "parentId") or None,
        )


@dataclass(frozen=True)
class TechStackCategory:
    """A tech-stack category (Frontend, Backend, Data, ...)."""

    id: str
    name: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "TechStackCategory":
        data = require_mapping(data, "TechStackCategory")
        return cls(id=optional_id(data, "TechStackCategory"), name=optional_text(data, "name"))
