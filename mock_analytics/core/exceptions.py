from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for errors surfaced to API clients as ``{"error": ...}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(status_code=self.status_code, detail=detail or self.message)


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


# --- Time window errors ---


class MalformedIntervalError(BadRequestError):
    message = "Invalid interval format. Use format: <number>d or <number>h or <number>m"


class IntervalTooShortError(BadRequestError):
    message = "Minimum interval is 12 hours"


class IntervalTooLongError(BadRequestError):
    message = "Maximum interval is 90 days"


class MalformedTimestampError(BadRequestError):
    message = "Invalid date format. Use an ISO-8601 timestamp"

    def __init__(self, field: str | None = None):
        if field is None:
            super().__init__()
        else:
            super().__init__(f"Invalid date format for '{field}'. Use an ISO-8601 timestamp")


class InvalidRangeError(BadRequestError):
    message = "'from' must be earlier than 'to'"


class RangeTooLongError(BadRequestError):
    message = "Maximum date range is 90 days"


class RangeTooShortError(BadRequestError):
    message = "Minimum date range is 12 hours"


class ConflictingWindowError(BadRequestError):
    message = "Use either 'interval' or 'from'/'to', not both"


# --- Category errors ---


class UnknownCategoryError(BadRequestError):
    message = "Invalid category. Use one of: device, browser, os"
