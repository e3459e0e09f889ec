"""
RENTAL LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed lifecycle transitions
for RentalOrder entities.

DESIGN PRINCIPLES:
- No database writes
- No side effects
- Single source of truth (ALLOWED_TRANSITIONS + REJECTIONS)
"""

from __future__ import annotations

from dataclasses import dataclass

from django.db import models

from rentals.models import RentalStatus
from rentals.services.exceptions import InvalidRentalActionError, RentalTransitionRejected


# ============================================================
# ACTIONS
# ============================================================


class RentalAction(models.TextChoices):
    SEND = "send", "Send"
    PRINT = "print", "Print"
    CONFIRM = "confirm", "Confirm"
    CANCEL = "cancel", "Cancel"


# ============================================================
# MESSAGES
# ============================================================

MSG_QUOTATION_SENT = "Quotation sent successfully"
MSG_QUOTATION_RESENT = "Quotation resent successfully"
MSG_CONFIRMED = "Rental confirmed successfully"
MSG_CANCELLED = "Rental cancelled successfully"
MSG_PRINTED = "Rental document prepared for printing"

MSG_CANNOT_CONFIRM = "Cannot confirm rental in current status"
MSG_ALREADY_CANCELLED = "Rental is already cancelled"
MSG_CANNOT_SEND_CONFIRMED = "Cannot send quotation for a confirmed rental"
MSG_CANNOT_SEND_CANCELLED = "Cannot send quotation for a cancelled rental"


@dataclass(frozen=True)
class Transition:
    previous_status: str
    new_status: str
    message: str

    @property
    def changed(self) -> bool:
        return self.previous_status != self.new_status


# ============================================================
# STATE DEFINITIONS
# ============================================================

# print is legal from every status and never moves it; handled in resolve_transition.
ALLOWED_TRANSITIONS = {
    RentalStatus.DRAFT: {
        RentalAction.SEND: (RentalStatus.QUOTATION_SENT, MSG_QUOTATION_SENT),
        RentalAction.CONFIRM: (RentalStatus.CONFIRMED, MSG_CONFIRMED),
        RentalAction.CANCEL: (RentalStatus.CANCELLED, MSG_CANCELLED),
    },
    RentalStatus.QUOTATION_SENT: {
        RentalAction.SEND: (RentalStatus.QUOTATION_SENT, MSG_QUOTATION_RESENT),
        RentalAction.CONFIRM: (RentalStatus.CONFIRMED, MSG_CONFIRMED),
        RentalAction.CANCEL: (RentalStatus.CANCELLED, MSG_CANCELLED),
    },
    RentalStatus.CONFIRMED: {
        RentalAction.CANCEL: (RentalStatus.CANCELLED, MSG_CANCELLED),
    },
    RentalStatus.CANCELLED: {},
}

REJECTIONS = {
    RentalStatus.CONFIRMED: {
        RentalAction.SEND: MSG_CANNOT_SEND_CONFIRMED,
        RentalAction.CONFIRM: MSG_CANNOT_CONFIRM,
    },
    RentalStatus.CANCELLED: {
        RentalAction.SEND: MSG_CANNOT_SEND_CANCELLED,
        RentalAction.CONFIRM: MSG_CANNOT_CONFIRM,
        RentalAction.CANCEL: MSG_ALREADY_CANCELLED,
    },
}

# Legacy behaviour (RENTAL_STRICT_SEND = False): send re-opens any rental as a quotation.
LEGACY_SEND_TRANSITIONS = {
    RentalStatus.CONFIRMED: (RentalStatus.QUOTATION_SENT, MSG_QUOTATION_RESENT),
    RentalStatus.CANCELLED: (RentalStatus.QUOTATION_SENT, MSG_QUOTATION_RESENT),
}


# ============================================================
# DOMAIN RULES
# ============================================================


def parse_action(token) -> RentalAction:
    """
    Normalize a raw action token. Anything outside the four known
    actions is a validation error, never a business-rule rejection.
    """
    value = (str(token) if token is not None else "").strip().lower()
    try:
        return RentalAction(value)
    except ValueError:
        raise InvalidRentalActionError(f"Invalid action '{token}'") from None


def _parse_status(status) -> RentalStatus:
    try:
        return RentalStatus(status)
    except ValueError:
        raise RentalTransitionRejected(f"Unknown rental status '{status}'") from None


def resolve_transition(current_status, action, *, strict_send: bool = True) -> Transition:
    status = _parse_status(current_status)
    action = parse_action(action)

    if action == RentalAction.PRINT:
        return Transition(previous_status=status, new_status=status, message=MSG_PRINTED)

    if not strict_send and action == RentalAction.SEND and status in LEGACY_SEND_TRANSITIONS:
        new_status, message = LEGACY_SEND_TRANSITIONS[status]
        return Transition(previous_status=status, new_status=new_status, message=message)

    allowed = ALLOWED_TRANSITIONS.get(status, {})
    if action in allowed:
        new_status, message = allowed[action]
        return Transition(previous_status=status, new_status=new_status, message=message)

    reason = REJECTIONS.get(status, {}).get(action) or (
        f"Cannot {action.value} rental in status '{status.value}'"
    )
    raise RentalTransitionRejected(reason)


def can_perform(current_status, action, *, strict_send: bool = True) -> bool:
    try:
        resolve_transition(current_status, action, strict_send=strict_send)
    except RentalTransitionRejected:
        return False
    return True


def allowed_actions(current_status, *, strict_send: bool = True) -> list[str]:
    return [
        action.value
        for action in RentalAction
        if can_perform(current_status, action, strict_send=strict_send)
    ]
