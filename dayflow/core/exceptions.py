import logging
from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.requests import Request

logger = logging.getLogger(__name__)

# ---------------------------
# CRUD (Database abstraction)
# ---------------------------

class DatabaseError(Exception):
    """Base class for errors raised by the CRUD layer."""
    pass

class DatabaseConflictError(DatabaseError):
    """A unique constraint rejected the row (e-mail, saved activity name)."""
    pass

# ---------------------------
# Service (Business logic)
# ---------------------------

class BusinessError(Exception):
    """Base class for errors the services raise to the routers."""
    pass

class ServiceError(BusinessError):
    """Unexpected failure; reported as a generic 500."""
    pass

class NotFoundError(BusinessError):
    """The log, saved or planned activity does not exist for this user."""
    pass

class ConflictError(BusinessError):
    """The account or saved activity already exists."""
    pass

class ValidationError(BusinessError):
    """Input passed schema validation but breaks a rule (empty day, bad range)."""
    pass

class UnauthorizedError(BusinessError):
    """Wrong credentials or an unusable reset link."""
    pass

class AccountLockedError(BusinessError):
    """Too many failed logins locked the account."""
    pass

# ---------------------------
# Integrations (third-party APIs)
# ---------------------------

class ExternalServiceError(BusinessError):
    """Gemini, Google Calendar or another API failed or answered nonsense."""
    pass

class CalendarAuthError(ExternalServiceError):
    """Google Calendar authorization is missing, expired or revoked."""
    pass

class ConfigurationError(BusinessError):
    """An integration is used while its keys are not set on the server."""
    pass

# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

def _detail(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _detail(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return _detail(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AccountLockedError)
    async def locked_handler(request: Request, exc: AccountLockedError):
        return _detail(status.HTTP_423_LOCKED, exc)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _detail(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(CalendarAuthError)
    async def calendar_auth_handler(request: Request, exc: CalendarAuthError):
        logger.warning(f"Calendar authorization error: {exc}")
        return _detail(status.HTTP_401_UNAUTHORIZED, exc)

    @app.exception_handler(ExternalServiceError)
    async def external_service_handler(request: Request, exc: ExternalServiceError):
        logger.error(f"External service error: {exc}")
        return _detail(status.HTTP_502_BAD_GATEWAY, exc)

    @app.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error: {exc}")
        return _detail(status.HTTP_503_SERVICE_UNAVAILABLE, exc)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.error(f"Service error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
