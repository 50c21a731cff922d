"""Resolution results.

Every attempt to move a pair of records ends in exactly one of three
tagged outcomes. ``Conflict`` is retried by the caller, ``Failed`` carries
a domain error to raise, and ``Resolved`` carries the final state.
"""

from typing import Literal

from kindred.domain.error import DomainError
from kindred.domain.model.common import DomainModel
from kindred.domain.value import EdgeStatus, RelationshipId


class Resolution(DomainModel):
    """Status of the caller's edge after an action."""

    status: EdgeStatus
    relationship_id: RelationshipId | None = None
    created: bool = False  # True when this call materialized the relationship


class Resolved(DomainModel):
    kind: Literal["resolved"] = "resolved"
    resolution: Resolution


class Conflict(DomainModel):
    kind: Literal["conflict"] = "conflict"
    reason: str


class Failed(DomainModel):
    kind: Literal["failed"] = "failed"
    error: DomainError


Attempt = Resolved | Conflict | Failed
