from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every wire model.

    Python attributes stay snake_case; JSON members are camelCase
    (number_of_points_of_interest <-> numberOfPointsOfInterest). Input accepts
    either spelling.
    """

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ErrorResponse(BaseModel):
    """
    Generic error body for unexpected server faults (500).

    Example:
        {
            "error": "internal_server_error",
            "message": "An unexpected error occurred.",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class ValidationErrorResponse(ErrorResponse):
    """
    Error body for 400 responses, with messages grouped per field.

    Example:
        {
            "error": "validation_error",
            "message": "One or more validation errors occurred.",
            "errors": {"description": ["The provided description should be different from the name."]},
            "request_id": "1f2e3d4c"
        }
    """
    errors: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Field name -> validation messages",
    )


class HealthResponse(BaseModel):
    """Health check body returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store_backend: str = Field(description="Configured entity store: database, memory")
    store: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
