"""Exception hierarchy for parameter conversion.

Every error carries an HTTP-equivalent status code so the middleware (or an
application exception handler) can translate it into a response without
inspecting the concrete type.
"""

from __future__ import annotations


class ParamConverterError(Exception):
    """Base exception carrying a descriptive detail and a status code."""

    default_status_code: int = 500

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )


class MalformedJsonError(ParamConverterError):
    """Raised when a JSON request body cannot be decoded into parameters (HTTP 400)."""

    default_status_code = 400


class DeserializationError(ParamConverterError):
    """Raised when a facade rejects the extracted parameters (HTTP 400)."""

    default_status_code = 400


class ParamTypeError(ParamConverterError, TypeError):
    """Raised when a parameter is read as a shape it does not have (HTTP 400)."""

    default_status_code = 400


class FacadeNotFoundError(ParamConverterError):
    """Raised when downstream code looks up a facade that was never attached (HTTP 500)."""

    default_status_code = 500


class FacadeTypeError(ParamConverterError):
    """Raised when the attached facade is not of the type downstream code expects (HTTP 500)."""

    default_status_code = 500
