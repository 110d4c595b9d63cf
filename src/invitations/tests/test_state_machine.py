from datetime import UTC, datetime, timedelta

import pytest

from src.errors import InvitationAlreadyRespondedError, InvitationExpiredError
from src.invitations.state_machine import (
    CODE_ALPHABET,
    InvitationStatus,
    check_can_respond,
    effective_status,
    generate_invitation_code,
    normalize_code,
)

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


def test_generated_codes_are_six_uppercase_alphanumerics():
    codes = {generate_invitation_code() for _ in range(200)}

    for code in codes:
        assert len(code) == 6
        assert set(code) <= set(CODE_ALPHABET)
    # 36^6 possibilities; 200 draws colliding down to a handful would mean a broken generator
    assert len(codes) > 190


def test_normalize_code_ignores_case_and_whitespace():
    assert normalize_code("  ab12cd ") == "AB12CD"


def test_pending_invitation_past_expiry_reads_as_expired():
    expires_at = NOW - timedelta(seconds=1)

    assert effective_status("pending", expires_at, NOW) == InvitationStatus.EXPIRED


def test_answered_invitation_keeps_its_status_after_expiry():
    expires_at = NOW - timedelta(days=3)

    assert effective_status(InvitationStatus.ACCEPTED, expires_at, NOW) == InvitationStatus.ACCEPTED
    assert effective_status(InvitationStatus.REJECTED, expires_at, NOW) == InvitationStatus.REJECTED


def test_expiry_boundary_is_still_answerable():
    check_can_respond("ABC123", InvitationStatus.PENDING, NOW, NOW)
    assert effective_status(InvitationStatus.PENDING, NOW, NOW) == InvitationStatus.PENDING


def test_naive_expiry_is_treated_as_utc():
    naive = (NOW + timedelta(hours=1)).replace(tzinfo=None)

    assert effective_status(InvitationStatus.PENDING, naive, NOW) == InvitationStatus.PENDING


@pytest.mark.parametrize(
    "status",
    [InvitationStatus.PENDING, InvitationStatus.ACCEPTED, InvitationStatus.REJECTED],
)
def test_expired_wins_over_any_stored_status(status):
    with pytest.raises(InvitationExpiredError):
        check_can_respond("ABC123", status, NOW - timedelta(minutes=5), NOW)


@pytest.mark.parametrize("status", [InvitationStatus.ACCEPTED, InvitationStatus.REJECTED])
def test_answered_invitation_cannot_be_answered_again(status):
    with pytest.raises(InvitationAlreadyRespondedError) as exc_info:
        check_can_respond("ABC123", status, NOW + timedelta(hours=1), NOW)

    assert exc_info.value.status == status.value
