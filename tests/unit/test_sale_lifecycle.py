"""
Unit tests for the guarded sale status transitions.
"""

import pytest

from app.exceptions import ErrorKind, InvalidTransitionError
from app.models import Sale, SaleStatus
from app.services.sale_lifecycle import (
    GUARDED_TRANSITIONS, can_transition, ensure_transition, is_regression
)


class TestCancelGuard:
    """Tests for the cancel guard."""

    @pytest.mark.parametrize('status', [SaleStatus.PENDING, SaleStatus.PROCESSING])
    def test_cancel_allowed(self, status):
        """Test cancel moves Pending/Processing to Canceled."""
        assert ensure_transition(Sale(status=status), 'cancel') is SaleStatus.CANCELED

    @pytest.mark.parametrize('status', [SaleStatus.COMPLETED, SaleStatus.CANCELED, SaleStatus.REFUNDED])
    def test_cancel_rejected(self, status):
        """Test cancel from any other status names the current status."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            ensure_transition(Sale(status=status), 'cancel')

        assert exc_info.value.message == f'Unable to cancel a Sale with status: {status.label}'
        assert exc_info.value.kind is ErrorKind.INVALID_TRANSITION
        assert exc_info.value.status_code == 400


class TestRefundGuard:
    """Tests for the refund guard."""

    def test_refund_allowed_from_completed(self):
        """Test refund only moves Completed to Refunded."""
        assert ensure_transition(Sale(status=SaleStatus.COMPLETED), 'refund') is SaleStatus.REFUNDED

    @pytest.mark.parametrize('status', [
        SaleStatus.PENDING, SaleStatus.PROCESSING, SaleStatus.CANCELED, SaleStatus.REFUNDED
    ])
    def test_refund_rejected(self, status):
        """Test refund is refused for every non-Completed status."""
        with pytest.raises(InvalidTransitionError, match=f'Unable to refund a Sale with status: {status.label}'):
            ensure_transition(Sale(status=status), 'refund')


class TestTransitionTable:
    """Tests for the transition table itself."""

    def test_no_guarded_action_targets_pending(self):
        """Test no guarded action leads back to Pending."""
        assert all(target is not SaleStatus.PENDING for _, target in GUARDED_TRANSITIONS.values())

    def test_can_transition(self):
        """Test the boolean check mirrors the guard."""
        assert can_transition('cancel', SaleStatus.PROCESSING)
        assert not can_transition('refund', SaleStatus.PENDING)

    def test_unknown_action(self):
        """Test an unknown action is a programming error."""
        with pytest.raises(KeyError):
            ensure_transition(Sale(status=SaleStatus.PENDING), 'ship')


class TestRegression:
    """Tests for detecting moves against the normal flow."""

    @pytest.mark.parametrize('from_status,to_status', [
        (SaleStatus.REFUNDED, SaleStatus.PENDING),
        (SaleStatus.CANCELED, SaleStatus.PROCESSING),
        (SaleStatus.COMPLETED, SaleStatus.PENDING),
        (SaleStatus.PROCESSING, SaleStatus.PENDING),
    ])
    def test_backwards_moves(self, from_status, to_status):
        """Test backwards moves are flagged."""
        assert is_regression(from_status, to_status)

    @pytest.mark.parametrize('from_status,to_status', [
        (SaleStatus.PENDING, SaleStatus.PROCESSING),
        (SaleStatus.PROCESSING, SaleStatus.COMPLETED),
        (SaleStatus.COMPLETED, SaleStatus.REFUNDED),
        (SaleStatus.PENDING, SaleStatus.PENDING),
    ])
    def test_forward_moves(self, from_status, to_status):
        """Test normal flow (and staying put) is not flagged."""
        assert not is_regression(from_status, to_status)
