"""
User directory client exceptions.

Every error carries a class-level ``transient`` flag. The retry policy
only re-invokes operations that failed with a transient error.
"""


class UserServiceError(Exception):
    """Base exception for user directory errors."""

    transient: bool = False

    def __init__(self, message: str, operation: str | None = None):
        self.operation = operation
        super().__init__(message)


class InvalidArgumentError(UserServiceError, ValueError):
    """Caller supplied an argument outside the accepted range."""

    def __init__(self, argument: str, value: object, reason: str):
        self.argument = argument
        self.value = value
        super().__init__(f"Invalid {argument} {value!r}: {reason}")


class RequestTimeoutError(UserServiceError):
    """Request timed out, either in transit or as reported by the server."""

    transient = True

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        timeout: float | None = None,
    ):
        self.timeout = timeout
        super().__init__(message, operation=operation)


class TransportFailureError(UserServiceError):
    """Low-level connectivity failure (DNS, refused connection, reset)."""

    transient = True


class ServiceError(UserServiceError):
    """Remote service answered with a non-success status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        user_id: int | None = None,
        page: int | None = None,
    ):
        self.status_code = status_code
        self.user_id = user_id
        self.page = page

        if user_id is not None:
            target = f"user {user_id}"
        elif page is not None:
            target = f"users on page {page}"
        else:
            target = "users"
        super().__init__(
            f"Failed to fetch {target}: HTTP {status_code}",
            operation=operation,
        )


class ParseError(UserServiceError):
    """Response body did not match the expected envelope."""

    pass
