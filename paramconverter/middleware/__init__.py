"""Middleware package for Starlette/FastAPI request processing.

This package contains the middleware that binds request parameters to
facades before the request reaches its handler.
"""

from .param_converter_middleware import ParamConverterMiddleware, new

__all__ = [
    "ParamConverterMiddleware",
    "new",
]
