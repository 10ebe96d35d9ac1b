"""
Sale lifecycle rules.

This module defines the guarded status transitions for Sale entities.
It performs no database writes and never touches stock.
"""

from app.exceptions import InvalidTransitionError
from app.models import Sale, SaleStatus

# action -> (statuses it may start from, status it produces)
GUARDED_TRANSITIONS = {
    'cancel': (
        frozenset({SaleStatus.PENDING, SaleStatus.PROCESSING}),
        SaleStatus.CANCELED,
    ),
    'refund': (
        frozenset({SaleStatus.COMPLETED}),
        SaleStatus.REFUNDED,
    ),
}

# Every status reachable from a given one through the normal flow
_FORWARD = {
    SaleStatus.PENDING: frozenset({
        SaleStatus.PENDING, SaleStatus.PROCESSING, SaleStatus.COMPLETED, SaleStatus.CANCELED,
    }),
    SaleStatus.PROCESSING: frozenset({
        SaleStatus.PROCESSING, SaleStatus.COMPLETED, SaleStatus.CANCELED,
    }),
    SaleStatus.COMPLETED: frozenset({SaleStatus.COMPLETED, SaleStatus.REFUNDED}),
    SaleStatus.CANCELED: frozenset({SaleStatus.CANCELED}),
    SaleStatus.REFUNDED: frozenset({SaleStatus.REFUNDED}),
}


def can_transition(action: str, from_status: SaleStatus) -> bool:
    allowed_from, _ = GUARDED_TRANSITIONS[action]
    return from_status in allowed_from


def ensure_transition(sale: Sale, action: str) -> SaleStatus:
    """
    Check that `action` is allowed from the sale's current status.

    Returns:
        The status the sale moves to

    Raises:
        InvalidTransitionError: If the current status does not permit it
        KeyError: If `action` is not a guarded action
    """
    if not can_transition(action, sale.status):
        raise InvalidTransitionError(action, sale.status.label)
    _, target = GUARDED_TRANSITIONS[action]
    return target


def is_regression(from_status: SaleStatus, to_status: SaleStatus) -> bool:
    """True when moving `from_status` -> `to_status` goes against the normal flow."""
    return to_status not in _FORWARD[from_status]
