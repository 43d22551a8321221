from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class ErrorResponse(BaseModel):
    """Error payload returned for every rejected request."""

    error: str
