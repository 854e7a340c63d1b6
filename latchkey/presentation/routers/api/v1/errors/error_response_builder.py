"""Turn application errors into Problem Details responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from latchkey.application.errors import ApplicationError, ApplicationErrorCode
from latchkey.core.config import settings
from latchkey.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_INTERNAL = (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

# code -> (HTTP status, problem title)
_PROBLEM_TYPES: dict[ApplicationErrorCode, tuple[int, str]] = {
    ApplicationErrorCode.VALIDATION_FAILED: (
        status.HTTP_400_BAD_REQUEST,
        "Validation Failed",
    ),
    ApplicationErrorCode.UNAUTHORIZED: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication Required",
    ),
    ApplicationErrorCode.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Access Denied"),
    ApplicationErrorCode.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    ApplicationErrorCode.CONFLICT: (status.HTTP_409_CONFLICT, "Resource Conflict"),
    # Captcha provider and mail relay failures surface as server errors.
    ApplicationErrorCode.EXTERNAL_SERVICE_ERROR: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "External Service Error",
    ),
    ApplicationErrorCode.INTERNAL_ERROR: _INTERNAL,
}


class ErrorResponseBuilder:
    """Builds the JSON error response for a handler ``Failure``.

    Example:
        >>> match await handler.handle(command):
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_application_error(
        ...             error=error,
        ...             request=request,
        ...             trace_id=get_trace_id(),
        ...         )
    """

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        status_code, title = _PROBLEM_TYPES.get(error.code, _INTERNAL)
        field_errors = [
            ErrorDetail(field=fe.field, code=error.code.value, message=fe.message)
            for fe in error.field_errors
        ]

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=title,
            status=status_code,
            detail=error.message,
            instance=request.url.path,
            errors=field_errors or None,
            trace_id=trace_id,
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )
