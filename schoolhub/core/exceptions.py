# schoolhub/core/exceptions.py
from typing import Any, Dict, List, Optional, Union
from fastapi import status

Details = Union[Dict[str, Any], List[Dict[str, Any]], None]


class BaseAPIError(Exception):
    """Base exception class for API errors"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Details = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(message)


class UnauthenticatedError(BaseAPIError):
    """Raised when the request carries no valid session"""
    def __init__(self, message: str = "Authentication required", details: Details = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="UNAUTHENTICATED",
            details=details
        )


class ForbiddenError(BaseAPIError):
    """Raised when an authenticated principal targets another tenant or lacks the role"""
    def __init__(self, message: str = "Forbidden", details: Details = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="FORBIDDEN",
            details=details
        )


class ValidationError(BaseAPIError):
    """Raised when input fails schema constraints"""
    def __init__(
        self,
        message: str = "Validation error",
        details: Details = None,
        error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            details=details
        )


class InvalidTenantKeyError(ValidationError):
    """Raised when a school identifier cannot name a partition"""
    def __init__(self, tenant_key: Any):
        super().__init__(
            message="Invalid school ID",
            details=[{"path": "school_id", "message": f"'{tenant_key}' is not a valid school identifier"}],
            error_code="INVALID_SCHOOL_ID"
        )


class DuplicateResourceError(ValidationError):
    """Raised when attempting to create a duplicate resource"""
    def __init__(self, message: str = "Resource already exists", details: Details = None):
        super().__init__(message=message, details=details, error_code="DUPLICATE_RESOURCE")


class NotFoundError(BaseAPIError):
    """Raised when a tenant or entity does not exist"""
    def __init__(self, message: str = "Resource not found", details: Details = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details=details
        )


class StorageError(BaseAPIError):
    """Raised on connection or transport failures; never detailed to the caller"""
    def __init__(self, message: str = "Database operation failed", details: Details = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="STORAGE_ERROR",
            details=details
        )


class ProvisioningPartialFailure(StorageError):
    """
    Raised when a school record exists in the system partition but its own
    partition could not be initialized and the compensating delete failed too.
    """
    def __init__(self, school_id: str, message: str = "School provisioning left an orphaned record"):
        self.school_id = school_id
        super().__init__(message=message)
        self.error_code = "PROVISIONING_PARTIAL_FAILURE"
