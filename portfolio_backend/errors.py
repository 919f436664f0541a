"""
Error taxonomy for the portfolio API.

Every error carries the HTTP status it maps to; the app renders them as
``{"message": ...}`` bodies.
"""

from __future__ import annotations


class PortfolioError(Exception):
    """Base error for failures reported to API callers."""

    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class InvalidTable(PortfolioError):
    status_code = 400
    default_message = "Invalid table specified"


class InvalidId(PortfolioError):
    status_code = 400
    default_message = "Invalid ID format"


class RecordNotFound(PortfolioError):
    status_code = 404
    default_message = "Record not found"


class NoUpdatesProvided(PortfolioError):
    status_code = 400
    default_message = "No updates provided."


class ServerError(PortfolioError):
    """Opaque wrapper for store and transport failures."""


class LogoutFailed(PortfolioError):
    default_message = "Logout failed"
