import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class TenantServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TenantNotFoundError(TenantServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class TenantValidationError(TenantServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateSubdomainError(TenantServiceError):
    status_code = status.HTTP_409_CONFLICT


class DuplicateEmailError(TenantValidationError):
    status_code = status.HTTP_409_CONFLICT


class AccessDeniedError(TenantServiceError):
    status_code = status.HTTP_403_FORBIDDEN


# Authentication errors. All of them surface as 401.

class AuthenticationError(TenantServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidCredentialsError(AuthenticationError):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class InvalidTokenFormatError(InvalidTokenError):
    def __init__(self, message: str = "Invalid token format"):
        super().__init__(message)


class UserNotFoundOrInactiveError(AuthenticationError):
    def __init__(self, message: str = "User not found or inactive"):
        super().__init__(message)


class AuthenticationFailedError(AuthenticationError):
    """Generic failure raised by the credential-checking pipeline."""

    def __init__(self, message: str = "Bad credentials"):
        super().__init__(message)


# Raised by the identity resolver; login collapses both into InvalidCredentialsError

class PrincipalLookupError(AuthenticationError):
    pass


class MalformedIdentityError(PrincipalLookupError):
    pass


class PrincipalNotFoundError(PrincipalLookupError):
    pass


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TenantServiceError)
    async def handle_service_error(request: Request, exc: TenantServiceError):
        logger.warning(
            "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message
        )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unexpected error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")
