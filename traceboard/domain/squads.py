"""
Squad domain models

A squad's members are partitioned by role slot. List slots (engineers,
testers, analysts, journey experts) hold any number of members; the product
owner and release lead slots are either empty or hold exactly one member.
"""

from dataclasses import dataclass, field
from typing import Any

from traceboard.errors import MalformedRecordError

from .constants import squad_enums
from .records import object_list, optional_id, optional_text, require_mapping


@dataclass(frozen=True)
class TeamMember:
    """
    A person filling one role slot of a squad.

    Attributes:
        id: Member identity
        name: Display name
        role: Role label from the squad form
        status: active, inactive or on_leave
    """

    id: str
    name: str = ""
    role: str = ""
    status: str = "active"

    @property
    def is_available(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_json(cls, data: Any) -> "TeamMember":
        """
        Deserialize a member; a bare string is treated as the member's identity.

        Raises:
            MalformedRecordError: If the member is neither an object nor a non-empty string
        """
        if isinstance(data, str):
            if not data.strip():
                raise MalformedRecordError("TeamMember identity is empty")
            return cls(id=data, name=data)

        data = require_mapping(data, "TeamMember")
        return cls(
            id=optional_id(data, "TeamMember"),
            name=optional_text(data, "name"),
            role=optional_text(data, "role"),
            status=optional_text(data, "status", "active"),
        )


@dataclass(frozen=True)
class Squad:
    """
    A delivery squad.

    Attributes:
        id: Squad id
        name: Squad name
        status: active, inactive or planning
        engineers / testers / analysts / journey_experts: List slots
        product_owner / release_lead: Singular slots (None when empty)

    Example:
        squad = Squad.from_json({
            "id": "sq1", "name": "Payments", "status": "active",
            "engineers": [{"id": "u1", "status": "active"}, {"id": "u2", "status": "on_leave"}],
            "productOwner": {"id": "u3"},
        })
        squad.member_count            # 3
        squad.available_member_count  # 2
    """

    id: str
    name: str
    status: str
    engineers: tuple[TeamMember, ...] = field(default_factory=tuple)
    testers: tuple[TeamMember, ...] = field(default_factory=tuple)
    analysts: tuple[TeamMember, ...] = field(default_factory=tuple)
    journey_experts: tuple[TeamMember, ...] = field(default_factory=tuple)
    product_owner: TeamMember | None = None
    release_lead: TeamMember | None = None

    @property
    def members(self) -> tuple[TeamMember, ...]:
        """All members across every role slot."""
        singles = tuple(m for m in (self.product_owner, self.release_lead) if m is not None)
        return self.engineers + self.testers + self.analysts + self.journey_experts + singles

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def available_member_count(self) -> int:
        return sum(1 for member in self.members if member.is_available)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Squad":
        """
        Deserialize a persisted squad record.

        Raises:
            MalformedRecordError: A list slot that is not a list,
                or a singular slot holding more than one member
        """
        data = require_mapping(data, "Squad")

        def list_slot(key: str) -> tuple[TeamMember, ...]:
            return tuple(TeamMember.from_json(item) for item in object_list(data, key))

        def single_slot(key: str) -> TeamMember | None:
            value = data.get(key)
            if value is None or value == "":
                return None
            if isinstance(value, list):
                raise MalformedRecordError(f"{key} holds at most one member, got a list")
            return TeamMember.from_json(value)

        engineers, testers, analysts, journey_experts = (list_slot(key) for key in squad_enums.LIST_SLOTS)
        product_owner, release_lead = (single_slot(key) for key in squad_enums.SINGLE_SLOTS)

        return cls(
            id=optional_id(data, "Squad"),
            name=optional_text(data, "name"),
            status=optional_text(data, "status"),
            engineers=engineers,
            testers=testers,
            analysts=analysts,
            journey_experts=journey_experts,
            product_owner=product_owner,
            release_lead=release_lead,
        )
