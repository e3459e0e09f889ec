from .exceptions import (
    InvalidRentalActionError,
    InvalidRentalFieldError,
    OrderLineNotFoundError,
    RentalConflictError,
    RentalLifecycleError,
    RentalLockedError,
    RentalNotFoundError,
    RentalPersistenceError,
    RentalTransitionRejected,
)
from .rental_lifecycle import (
    RentalAction,
    Transition,
    allowed_actions,
    can_perform,
    parse_action,
    resolve_transition,
)
from .totals import RentalTotals, compute_totals

__all__ = [
    "RentalLifecycleError",
    "RentalNotFoundError",
    "OrderLineNotFoundError",
    "InvalidRentalActionError",
    "InvalidRentalFieldError",
    "RentalTransitionRejected",
    "RentalLockedError",
    "RentalConflictError",
    "RentalPersistenceError",
    "RentalAction",
    "Transition",
    "parse_action",
    "resolve_transition",
    "can_perform",
    "allowed_actions",
    "RentalTotals",
    "compute_totals",
]
