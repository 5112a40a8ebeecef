# repositories/errors.py


class MentorshipError(Exception):
    """Base class for failures raised by repositories and services."""


class NotFoundError(MentorshipError):
    pass


class AlreadyAssignedError(MentorshipError):
    pass


class StoreUnavailableError(MentorshipError):
    """The store could not be reached or failed the operation."""


class ValidationFailureError(MentorshipError):
    """The payload or the stored document shape was rejected."""
