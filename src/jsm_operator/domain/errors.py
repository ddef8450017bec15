"""Error vocabulary shared by the gateway, the store and the engine."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

REVISION_CONFLICT_MESSAGE = "Specified revision was incorrect"


def is_revision_conflict(messages: Iterable[str]) -> bool:
    """Return True when any catalog error message reports a stale revision.

    The catalog exposes no structured error code for this case, so the message text
    is the only signal.
    """

    return any(REVISION_CONFLICT_MESSAGE in message for message in messages)


class RemoteErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    REVISION_CONFLICT = "revision_conflict"
    FAILURE = "failure"


class CatalogError(RuntimeError):
    """Base class for classified failures of the remote catalog."""

    kind: RemoteErrorKind = RemoteErrorKind.FAILURE

    def __init__(self, message: str, *, messages: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.messages: tuple[str, ...] = tuple(messages) or (message,)


class RemoteNotFoundError(CatalogError):
    kind = RemoteErrorKind.NOT_FOUND


class TeamNotFoundError(RemoteNotFoundError):
    """No catalog team carries the requested name."""


class TierNotFoundError(RemoteNotFoundError):
    """No catalog service tier has the requested level."""


class RevisionConflictError(CatalogError):
    """The supplied revision no longer matches the catalog's copy."""

    kind = RemoteErrorKind.REVISION_CONFLICT


class RemoteFailureError(CatalogError):
    """Any other rejection, including transport failures."""

    kind = RemoteErrorKind.FAILURE


def classify_failure(operation: str, messages: Iterable[str]) -> CatalogError:
    """Build the classified error for a ``success=false`` mutation result."""

    collected = tuple(messages)
    joined = "; ".join(collected) or "no error details returned"
    if is_revision_conflict(collected):
        return RevisionConflictError(f"{operation} failed: {joined}", messages=collected)
    return RemoteFailureError(f"{operation} failed: {joined}", messages=collected)


class ResourceNotFoundError(LookupError):
    """The local resource vanished between dequeue and fetch."""


class StatusWriteError(RuntimeError):
    """The resource store rejected a status update."""


class IncompleteStatusError(ValueError):
    """A status with a remote ID but no revision must never be persisted."""
