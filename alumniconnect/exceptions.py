# alumniconnect/exceptions.py
from typing import Optional
from fastapi import HTTPException, status

class BusinessLogicError(Exception):
    """Base exception for business logic errors"""
    status_code = status.HTTP_400_BAD_REQUEST

class ValidationError(BusinessLogicError):
    """Raised when input is well-formed but not acceptable (e.g. unknown status value)"""
    status_code = status.HTTP_400_BAD_REQUEST

class NotFoundError(BusinessLogicError):
    """Raised when a resource is not found"""
    status_code = status.HTTP_404_NOT_FOUND

class UnauthorizedError(BusinessLogicError):
    """Raised when user lacks authorization"""
    status_code = status.HTTP_403_FORBIDDEN

class ConflictError(BusinessLogicError):
    """Raised when an operation would violate a stored invariant"""
    status_code = status.HTTP_409_CONFLICT

class DuplicateRequestError(ConflictError):
    """Raised when duplicate request is attempted"""
    pass

class InvalidStatusTransitionError(ConflictError):
    """Raised when invalid status transition is attempted"""

    def __init__(self, message: str, current_status: Optional[str] = None):
        super().__init__(message)
        self.current_status = current_status

class DuplicateConversationError(ConflictError):
    """Raised when a conversation for a pair could not be created nor re-read"""
    pass

class PersistenceError(BusinessLogicError):
    """Raised when the database stays unavailable after retrying"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: BusinessLogicError) -> HTTPException:
    """Maps a business error onto the HTTP status its kind stands for."""
    return HTTPException(status_code=error.status_code, detail=str(error))
