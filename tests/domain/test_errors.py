from __future__ import annotations

from jsm_operator.domain.errors import (
    REVISION_CONFLICT_MESSAGE,
    RemoteErrorKind,
    RemoteFailureError,
    RevisionConflictError,
    TeamNotFoundError,
    classify_failure,
    is_revision_conflict,
)


def test_revision_conflict_detected_inside_longer_message() -> None:
    assert is_revision_conflict(["Update rejected: Specified revision was incorrect (42)"])


def test_revision_conflict_not_detected_for_other_messages() -> None:
    assert not is_revision_conflict(["Specified revision is missing", "tier invalid"])
    assert not is_revision_conflict([])


def test_classify_failure_returns_conflict() -> None:
    error = classify_failure("service update", ["other", REVISION_CONFLICT_MESSAGE])

    assert isinstance(error, RevisionConflictError)
    assert error.kind is RemoteErrorKind.REVISION_CONFLICT


def test_classify_failure_joins_messages() -> None:
    error = classify_failure("service creation", ["name taken", "tier invalid"])

    assert isinstance(error, RemoteFailureError)
    assert str(error) == "service creation failed: name taken; tier invalid"
    assert error.messages == ("name taken", "tier invalid")


def test_not_found_errors_carry_kind() -> None:
    assert TeamNotFoundError("missing").kind is RemoteErrorKind.NOT_FOUND

