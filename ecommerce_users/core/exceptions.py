"""Custom exceptions for the user store."""


class ServiceError(Exception):
    """Base exception for user store errors."""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: dict = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ServiceError, LookupError):
    """Referenced record does not exist."""

    def __init__(self, message: str = "Resource not found", details: dict = None):
        super().__init__(
            message=message,
            error_code="NOT_FOUND_ERROR",
            details=details
        )


class InvalidArgumentError(ServiceError, ValueError):
    """Input failed validation."""

    def __init__(self, message: str = "Invalid argument", details: dict = None):
        super().__init__(
            message=message,
            error_code="INVALID_ARGUMENT_ERROR",
            details=details
        )


class ConflictError(ServiceError):
    """Uniqueness constraint violated by the store."""

    def __init__(self, message: str = "Resource conflict", details: dict = None):
        super().__init__(
            message=message,
            error_code="CONFLICT_ERROR",
            details=details
        )


class ConfigurationError(ServiceError):
    """Configuration error."""

    def __init__(self, message: str = "Configuration error", details: dict = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details
        )


class ServiceClosedError(ServiceError):
    """Operation attempted after the store handle was released."""

    def __init__(self, message: str = "Service is closed", details: dict = None):
        super().__init__(
            message=message,
            error_code="SERVICE_CLOSED_ERROR",
            details=details
        )
