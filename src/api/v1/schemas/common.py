"""Response bodies shared by every router."""

from typing import Any

from pydantic import BaseModel


class FieldError(BaseModel):
    """One failed field. ``type`` is only set for request-shape errors."""

    field: str
    msg: str
    type: str | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    ``errors`` is present for validation failures only.
    """

    error_code: str
    msg: str
    details: Any | None = None
    errors: list[FieldError] | None = None

    def body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MessageResponse(BaseModel):
    msg: str
