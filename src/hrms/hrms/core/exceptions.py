class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class AttendanceError(DomainError):
    """Base exception for check-in/check-out rejections."""


class DuplicateActionError(AttendanceError):
    """Raised when an action is not allowed in the current state of the day."""


class AlreadyCheckedInError(DuplicateActionError):
    def __init__(self, message: str = "Already checked in today"):
        super().__init__(message)


class AlreadyCheckedOutError(DuplicateActionError):
    def __init__(self, message: str = "Already checked out today"):
        super().__init__(message)


class NoCheckInFoundError(DuplicateActionError):
    def __init__(self, message: str = "No check-in record found for today"):
        super().__init__(message)


class ReasonRequiredError(AttendanceError):
    """Raised when an action outside the geofence comes without a reason.

    Carries the measured distance so the caller can show it to the user.
    """

    def __init__(self, distance_meters: int, *, action: str = "check-in"):
        self.distance_meters = int(distance_meters)
        self.action = action
        super().__init__(
            f"You are {self.distance_meters}m away from the office. "
            f"Please provide a reason for out-of-office {action}."
        )
