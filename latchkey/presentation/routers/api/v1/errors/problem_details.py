"""Error body schemas (RFC 7807 Problem Details).

``detail`` always carries the message a client should display. Validation
failures add one ``errors`` entry per offending field, in the order the
checks ran.
"""

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """One rejected field."""

    field: str = Field(..., description="Request field name (JSON alias)")
    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Why the field was rejected")


class ProblemDetails(BaseModel):
    """Problem Details body returned for every non-2xx response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "http://localhost:8000/errors/validation_failed",
                "title": "Validation Failed",
                "status": 400,
                "detail": "Validation failed",
                "instance": "/api/v1/users",
                "errors": [
                    {
                        "field": "username",
                        "code": "validation_failed",
                        "message": "Username taken",
                    }
                ],
                "trace_id": "0192f5a4-7c1e-7b7e-9a51-5b8f4a2c3d10",
            }
        }
    )

    type: str = Field(..., description="Problem type URI")
    title: str = Field(..., description="Summary of the problem type")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Message for this occurrence")
    instance: str = Field(..., description="Request path")
    errors: list[ErrorDetail] | None = Field(None, description="Per-field errors")
    trace_id: str | None = Field(None, description="X-Trace-Id of the request")
