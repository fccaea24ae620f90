"""Exception and advisory types raised by the enclosure engine."""

from __future__ import annotations


class EnclosureError(Exception):
    """Base class for all enclosure engine failures."""


class ValidationError(EnclosureError, ValueError):
    """Raised when a required parameter is missing, invalid, or degenerate."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ExportError(EnclosureError, OSError):
    """Raised when a cut sheet cannot be serialized or written."""


class DesignWarning(UserWarning):
    """Advisory finding attached to a calculation result; never fatal."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


__all__ = ["EnclosureError", "ValidationError", "ExportError", "DesignWarning"]
