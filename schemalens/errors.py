"""Error types for schemalens."""

from typing import Optional, Dict, Any, List, NoReturn


class SchemaLensError(Exception):
    """Base exception for schemalens errors."""

    def __init__(self, message: str, code: str = "SCHEMALENS_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(SchemaLensError):
    """Connection configuration is missing or invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG_ERROR", details=details)


class DatabaseError(SchemaLensError):
    """Backend error with no more specific canonical kind."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="DATABASE_ERROR", details=details)


class NotNullError(DatabaseError):
    """A required column received no value.

    Raised from dialect error translation. ``column`` holds the offending
    column name when the backend reported one.
    """

    def __init__(self, column: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        message = f"Column '{column}' is required" if column else "A required column has no value"
        details = dict(details or {})
        details["column"] = column
        super().__init__(message, details=details)
        self.code = "NOT_NULL"
        self.column = column


def native_error_codes(error: BaseException) -> List[str]:
    """Collect the error codes a native exception carries.

    Drivers differ in where they put them: a ``code`` attribute, a
    ``reason`` attribute, or ``reason`` entries of an ``errors`` list as
    google-api-core does.
    """
    codes = []
    for attribute in ("code", "reason"):
        value = getattr(error, attribute, None)
        if value is not None:
            codes.append(str(value))
    for entry in getattr(error, "errors", None) or []:
        if isinstance(entry, dict) and entry.get("reason"):
            codes.append(str(entry["reason"]))
    return codes


def transform_error_fallback(error: BaseException) -> NoReturn:
    """Translate a native error no dialect recognised.

    Canonical errors are re-raised as they are; anything else surfaces as a
    ``DatabaseError`` chained to the original exception.
    """
    if isinstance(error, SchemaLensError):
        raise error
    raise DatabaseError(
        str(error) or type(error).__name__,
        details={
            "native_code": next(iter(native_error_codes(error)), None),
            "native_type": type(error).__name__,
        },
    ) from error
