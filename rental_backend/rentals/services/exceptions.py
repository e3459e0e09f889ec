"""
RENTAL DOMAIN ERRORS

Every error raised by the rental lifecycle derives from RentalLifecycleError.
Views map each subclass to one HTTP status (see rentals/api/viewsets/rental.py).
"""


class RentalLifecycleError(Exception):
    pass


# ---------------- NOT FOUND (404) ----------------
class RentalNotFoundError(RentalLifecycleError):
    pass


class OrderLineNotFoundError(RentalLifecycleError):
    pass


# ---------------- VALIDATION (400) ----------------
class InvalidRentalActionError(RentalLifecycleError):
    """Action token outside send / print / confirm / cancel."""


class InvalidRentalFieldError(RentalLifecycleError):
    """Unknown, derived, or malformed field in a write request."""


# ---------------- BUSINESS RULES (400) ----------------
class RentalTransitionRejected(RentalLifecycleError):
    """The action is known but not allowed from the current status."""


class RentalLockedError(RentalLifecycleError):
    """The rental's status forbids this edit."""


# ---------------- CONCURRENCY (409) ----------------
class RentalConflictError(RentalLifecycleError):
    pass


# ---------------- STORAGE (503) ----------------
class RentalPersistenceError(RentalLifecycleError):
    pass
