"""
Environment domain models - Shared test environments and their bookings

    - Environment: a deployable environment with advisory capacity
    - Booking: the single active reservation of an environment
    - ApiEndpoint: an API exposed by the environment, with health metrics

Booking model: an environment holds at most one booking. Booking again
replaces the current booking without any overlap check; book() returns the
displaced booking so callers can see what was lost.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from traceboard.core.logging_config import get_logger
from traceboard.errors import MalformedRecordError

from .records import number, object_list, optional_id, optional_text, require_mapping

logger = get_logger(__name__)


def parse_day(value: Any, key: str) -> date:
    """Parse an ISO date or datetime string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedRecordError(f"{key} must be an ISO date, got {value!r}")
    text = value.strip().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise MalformedRecordError(f"{key} must be an ISO date, got {value!r}") from e


@dataclass(frozen=True)
class Booking:
    """
    A reservation of an environment.

    Attributes:
        id: Booking id
        booked_by: Person holding the booking
        start_date: First booked day
        end_date: Last booked day (>= start_date)
        purpose: Free text
        contact: Contact details
        extendable: Whether the holder may extend the booking
        notes: Optional notes

    Raises:
        MalformedRecordError: If start_date is after end_date
    """

    id: str
    booked_by: str
    start_date: date
    end_date: date
    purpose: str = ""
    contact: str = ""
    extendable: bool = False
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise MalformedRecordError(
                f"Booking {self.id!r} starts {self.start_date} after it ends {self.end_date}"
            )

    def covers(self, day: date) -> bool:
        """True if ``day`` falls inside the booking window (inclusive)."""
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: "Booking") -> bool:
        return self.start_date <= other.end_date and other.start_date <= self.end_date

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Booking":
        data = require_mapping(data, "Booking")
        return cls(
            id=optional_id(data, "Booking"),
            booked_by=optional_text(data, "bookedBy"),
            start_date=parse_day(data.get("startDate"), "startDate"),
            end_date=parse_day(data.get("endDate"), "endDate"),
            purpose=optional_text(data, "purpose"),
            contact=optional_text(data, "contact"),
            extendable=bool(data.get("extendable", False)),
            notes=data.get("notes") or None,
        )


@dataclass(frozen=True)
class ApiEndpoint:
    """
    An API endpoint hosted in an environment.

    Attributes:
        id: Endpoint id
        name: Display name
        method: HTTP method
        status: healthy, degraded or down
        response_time_ms: Last measured response time
        uptime: Uptime percentage (0-100)
    """

    id: str
    name: str
    method: str = "GET"
    status: str = "healthy"
    response_time_ms: float = 0.0
    uptime: float = 100.0

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ApiEndpoint":
        data = require_mapping(data, "ApiEndpoint")
        return cls(
            id=optional_id(data, "ApiEndpoint"),
            name=optional_text(data, "name"),
            method=optional_text(data, "method", "GET"),
            status=optional_text(data, "status", "healthy"),
            response_time_ms=number(data, "responseTime", default=0.0, minimum=0),
            uptime=number(data, "uptime", default=100.0, minimum=0, maximum=100),
        )


@dataclass(frozen=True)
class Environment:
    """
    A shared environment.

    Capacity is advisory: ``current_usage`` may exceed ``capacity`` and the
    record is still valid; is_over_capacity reports the violation.

    Attributes:
        id: Environment id
        name: Environment name
        type: development, testing, staging, production or demo
        status: available, booked, maintenance or down
        capacity: Positive capacity, None when not recorded
        current_usage: Non-negative usage
        booking: The single active booking, if any
        apis: Hosted API endpoints

    Example:
        env = Environment(id="e1", name="SIT", type="testing", status="available", capacity=10)
        env, displaced = env.book(booking)
        env.status   # "booked"
    """

    id: str
    name: str
    type: str
    status: str
    capacity: float | None = None
    current_usage: float = 0.0
    booking: Booking | None = None
    apis: tuple[ApiEndpoint, ...] = field(default_factory=tuple)

    @property
    def is_over_capacity(self) -> bool:
        return self.capacity is not None and self.current_usage > self.capacity

    @property
    def utilization_percentage(self) -> float:
        """Usage as a share of capacity; may exceed 100 when over capacity."""
        if not self.capacity:
            return 0.0
        return round(self.current_usage / self.capacity * 100, 1)

    def book(self, booking: Booking) -> tuple["Environment", Booking | None]:
        """
        Book the environment, replacing any existing booking.

        No overlap detection is performed: a new booking silently displaces
        the current one even when their windows overlap. The displaced
        booking is returned (and logged) so the caller can surface it.

        Args:
            booking: The new booking

        Returns:
            (booked environment, displaced booking or None)
        """
        displaced = self.booking
        if displaced is not None:
            logger.warning(
                f"Booking {booking.id!r} replaces booking {displaced.id!r} on environment {self.id!r}",
                extra={
                    "extra_fields": {
                        "environment_id": self.id,
                        "displaced_booking": displaced.id,
                        "overlapping": displaced.overlaps(booking),
                    }
                },
            )
        return replace(self, status="booked", booking=booking), displaced

    def release_booking(self) -> "Environment":
        """Clear the booking and make the environment available again."""
        return replace(self, status="available", booking=None)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Environment":
        """
        Deserialize a persisted environment record.

        Raises:
            MalformedRecordError: Non-positive capacity, negative usage or an
                invalid booking window
        """
        data = require_mapping(data, "Environment")
        capacity = data.get("capacity")
        booking = data.get("booking")
        return cls(
            id=optional_id(data, "Environment"),
            name=optional_text(data, "name"),
            type=optional_text(data, "type"),
            status=optional_text(data, "status"),
            capacity=None if capacity is None else number(data, "capacity", minimum=0, exclusive_minimum=True),
            current_usage=number(data, "currentUsage", default=0.0, minimum=0),
            booking=Booking.from_json(booking) if booking else None,
            apis=tuple(ApiEndpoint.from_json(api) for api in object_list(data, "apis")),
        )
