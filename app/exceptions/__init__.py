"""Custom exceptions for the e-commerce sales application."""
import enum


class ErrorKind(str, enum.Enum):
    """Category of a failed operation, used by callers to pick a status code."""
    VALIDATION = 'Validation'
    NOT_FOUND = 'NotFound'
    INSUFFICIENT_STOCK = 'InsufficientStock'
    INVALID_TRANSITION = 'InvalidTransition'
    UNAUTHORIZED = 'Unauthorized'
    STORAGE_FAILURE = 'StorageFailure'


class ECommerceError(Exception):
    """Base exception for all application errors."""
    kind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv


class StorageError(ECommerceError):
    """Raised when the underlying persistence call fails."""
    kind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message="There was an error accessing the database", payload=None):
        super().__init__(message, 500, payload)


class BusinessLogicError(ECommerceError):
    """Exception raised for business logic violations."""
    kind = ErrorKind.VALIDATION

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)


class NotFoundError(ECommerceError):
    """Exception raised when a resource is not found."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class InsufficientStockError(BusinessLogicError):
    """Raised when a cart line requests more than the product has in stock."""
    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_name, available, requested):
        message = (
            f"Insufficient stock for '{product_name}'. "
            f"Available: {available}, Requested: {requested}"
        )
        super().__init__(
            message,
            status_code=409,
            payload={'available': available, 'requested': requested},
        )


class InvalidTransitionError(BusinessLogicError):
    """Raised when a sale status change is not allowed from its current status."""
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, action, current_status):
        super().__init__(f"Unable to {action} a Sale with status: {current_status}")


class UnauthorizedError(ECommerceError):
    """Raised when a user lacks permission for an action."""
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message="Unauthorized access"):
        super().__init__(message, 403)


class AuthenticationRequiredError(ECommerceError):
    """Raised when a request carries no caller identity."""
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message="Authentication required"):
        super().__init__(message, 401)
