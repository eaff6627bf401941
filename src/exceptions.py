"""Domain errors raised by the services and turned into JSON envelopes by main.py"""


class DomainError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(DomainError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class UnauthorizedError(DomainError):
    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message, 401)


class InsufficientInventoryError(DomainError):
    def __init__(self, message: str = "Not enough seats available"):
        super().__init__(message)


class AlreadyCancelledError(DomainError):
    def __init__(self, message: str = "Booking is already cancelled"):
        super().__init__(message)


class BookingNotCancellableError(DomainError):
    pass


class RefundNotEligibleError(DomainError):
    def __init__(self, message: str = "Refund not possible - too close to departure time"):
        super().__init__(message)


class DuplicateResourceError(DomainError):
    pass


class ResourceInUseError(DomainError):
    pass
