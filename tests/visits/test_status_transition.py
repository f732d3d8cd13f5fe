from __future__ import annotations

import pytest

from hygienist_visits.core.enums import VisitStatus
from hygienist_visits.core.exceptions import DataIntegrityError, ValidationError
from hygienist_visits.visits.status import transition


@pytest.mark.parametrize("current", list(VisitStatus))
@pytest.mark.parametrize("target", [VisitStatus.SCHEDULED, VisitStatus.COMPLETED])
def test_any_state_can_move_to_non_cancelled_states(current, target):
    change = transition(current, target.value, "left over")
    assert change.status == target
    assert change.cancellation_reason is None


def test_entering_cancelled_requires_reason():
    with pytest.raises(ValidationError) as ei:
        transition(VisitStatus.SCHEDULED, "cancelled", "   ")
    assert "cancellation_reason" in ei.value.details


def test_entering_cancelled_keeps_trimmed_reason():
    change = transition(VisitStatus.COMPLETED, "cancelled", "  sick ")
    assert change.status == VisitStatus.CANCELLED
    assert change.cancellation_reason == "sick"
    assert change.changed is True


def test_staying_cancelled_still_needs_reason():
    with pytest.raises(ValidationError):
        transition(VisitStatus.CANCELLED, VisitStatus.CANCELLED, None)


def test_unknown_requested_status_is_a_validation_error():
    with pytest.raises(ValidationError):
        transition(VisitStatus.SCHEDULED, "postponed")


def test_parse_rejects_unknown_stored_value():
    with pytest.raises(DataIntegrityError):
        VisitStatus.parse("done")


@pytest.mark.parametrize("value", [" CANCELLED ", "Completed", "scheduled "])
def test_status_must_match_exactly(value):
    with pytest.raises(DataIntegrityError):
        VisitStatus.parse(value)
    with pytest.raises(ValidationError) as ei:
        transition(VisitStatus.SCHEDULED, value, "sick")
    assert "status" in ei.value.details
