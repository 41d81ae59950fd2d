"""
Error taxonomy for the traceability engine.

Only MissingReferenceError and ConfigurationError are ever raised to callers.
SourceError travels inside a SourceResult and MalformedRecordError is caught
by the aggregator, so the dashboard always gets a snapshot.
"""


class TraceboardError(Exception):
    """Base class for all engine errors."""

    pass


class MissingReferenceError(TraceboardError):
    """
    A scenario or test case points at a parent id that does not exist.

    Raised by write-time hierarchy operations only. At read time the same
    condition is reported as an orphan by validate_hierarchy().

    Attributes:
        child_id: Id of the record being linked
        parent_id: The unresolved parent id
        parent_kind: "user journey" or "business scenario"
    """

    def __init__(self, child_id: str, parent_id: str, parent_kind: str):
        self.child_id = child_id
        self.parent_id = parent_id
        self.parent_kind = parent_kind
        super().__init__(f"{child_id!r} references unknown {parent_kind} {parent_id!r}")


class SourceError(TraceboardError):
    """
    A domain collection could not be read or parsed.

    Attributes:
        domain: Collection key (e.g. "techStackItems")
        reason: Human-readable cause
    """

    def __init__(self, domain: str, reason: str):
        self.domain = domain
        self.reason = reason
        super().__init__(f"{domain}: {reason}")


class MalformedRecordError(TraceboardError, ValueError):
    """A record fails basic shape expectations (missing id, non-numeric budget, ...)."""

    pass
