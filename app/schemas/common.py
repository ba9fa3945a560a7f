from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body rendered for an ``HTTPException``."""

    detail: str


class ValidationErrorDetail(BaseModel):
    field: str
    message: str
    invalid_value: object | None = None
