"""Error taxonomy for the data-access layer.

A missing row is not an error: reads return ``None`` and updates/deletes
return ``False``. Everything else surfaces as one of these.
"""


class PetCareError(Exception):
    """Base class for every failure raised by petcare."""


class ValidationError(PetCareError):
    """Input rejected before touching the database."""


class IllegalTransitionError(ValidationError):
    """Ticket status change not allowed by the transition table."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"illegal ticket transition: {current} -> {target}")


class NotFoundError(PetCareError):
    """Raised where an operation needs an existing row to proceed."""


class DataAccessError(PetCareError):
    """Connectivity loss, pool exhaustion or any other driver failure."""


class ConstraintError(DataAccessError):
    """Integrity violation reported by the schema (FK, unique, check)."""
