class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the caller identity is missing or invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class StorageError(DomainError):
    """Raised when the backing store cannot be read or written."""


class ConcurrentModificationError(DomainError):
    """Raised when a record changed since it was read (version mismatch)."""


class InvalidStatusTransition(ValidationError):
    """Raised when a status change would move backwards or skip a step."""


# Attendance
class AlreadyCheckedIn(ValidationError):
    def __init__(self, message: str = "You have already checked in today"):
        super().__init__(message)


class NoActiveCheckIn(ValidationError):
    def __init__(self, message: str = "No active check-in found for today"):
        super().__init__(message)


class CycleComplete(ValidationError):
    def __init__(self, message: str = "You have already completed your attendance for today"):
        super().__init__(message)


# Lookups
class EmployeeNotFound(NotFoundError):
    def __init__(self, message: str = "Employee not found"):
        super().__init__(message)


class LeaveRequestNotFound(NotFoundError):
    def __init__(self, message: str = "Leave request not found"):
        super().__init__(message)


class OvertimeRecordNotFound(NotFoundError):
    def __init__(self, message: str = "Overtime record not found"):
        super().__init__(message)


class PayrollRecordNotFound(NotFoundError):
    def __init__(self, message: str = "Payroll record not found"):
        super().__init__(message)


# Registration
class InvalidOrExpiredCode(ValidationError):
    def __init__(self, message: str = "Invalid or expired registration code"):
        super().__init__(message)


class EmailAlreadyRegistered(ValidationError):
    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)
