"""Custom exceptions for the Vyaapar ordering application."""

class VyaaparError(Exception):
    """Base exception for all application errors."""
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

class BusinessLogicError(VyaaparError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

class NotFoundError(VyaaparError):
    """Exception raised when a resource is not found (or is inactive)."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class InvalidRoleError(BusinessLogicError):
    """Raised when a buyer or supplier role violates the distribution hierarchy."""
    def __init__(self, message, expected_roles=()):
        self.expected_roles = sorted(getattr(r, 'value', r) for r in expected_roles)
        super().__init__(message, payload={'expected_roles': self.expected_roles})

class PreconditionFailedError(BusinessLogicError):
    """Raised when an operation is attempted before its prerequisites are met."""
    code = 'PRECONDITION_FAILED'

    def __init__(self, message):
        super().__init__(message, payload={'code': self.code})

class EmptyCartError(PreconditionFailedError):
    code = 'EMPTY_CART'

    def __init__(self, message='Cart is empty. Add items before checkout.'):
        super().__init__(message)

class MissingBuyerError(PreconditionFailedError):
    code = 'MISSING_BUYER'

    def __init__(self, message='Please select a buyer before checkout.'):
        super().__init__(message)

class MissingSupplierError(PreconditionFailedError):
    code = 'MISSING_SUPPLIER'

    def __init__(self, message='Please select a supplier before checkout.'):
        super().__init__(message)

class ConflictError(VyaaparError):
    """Raised when a write conflicts with existing data."""
    def __init__(self, message="Resource already exists", payload=None):
        super().__init__(message, 409, payload)

class OrderNumberExhaustedError(ConflictError):
    """Raised when no unique order number could be allocated within the retry budget."""
    def __init__(self, attempts):
        self.attempts = attempts
        message = f"Could not allocate a unique order number after {attempts} attempts. Please retry."
        super().__init__(message, payload={'code': 'ORDER_NUMBER_EXHAUSTED'})

class AuthenticationError(VyaaparError):
    """Raised when the caller is not (or no longer) authenticated."""
    def __init__(self, message="No token provided. Please login to access this resource."):
        super().__init__(message, 401)

class UnauthorizedError(VyaaparError):
    """Raised when a user lacks permission for an action."""
    def __init__(self, message="Unauthorized access"):
        super().__init__(message, 403)
