"""Request parameter conversion middleware for Starlette and FastAPI.

Query string, url-encoded form, multipart form and JSON body parameters are
merged into one ParameterBag and bound to an application-defined facade
before the request reaches its handler.
"""

from .converter import ParamConverter
from .dependencies import facade_dependency, get_facade
from .exceptions import (
    DeserializationError,
    FacadeNotFoundError,
    FacadeTypeError,
    MalformedJsonError,
    ParamConverterError,
    ParamTypeError,
)
from .extractor import extract_data_from
from .facade import FacadeFactory, FacadeInterface, ModelFacade
from .middleware import ParamConverterMiddleware, new
from .params import ABSENT, Absent, JsonValue, Multiple, ParameterBag, ParamValue, Single

__all__ = [
    "ABSENT",
    "Absent",
    "DeserializationError",
    "FacadeFactory",
    "FacadeInterface",
    "FacadeNotFoundError",
    "FacadeTypeError",
    "JsonValue",
    "MalformedJsonError",
    "ModelFacade",
    "Multiple",
    "ParamConverter",
    "ParamConverterError",
    "ParamConverterMiddleware",
    "ParamTypeError",
    "ParamValue",
    "ParameterBag",
    "Single",
    "extract_data_from",
    "facade_dependency",
    "get_facade",
    "new",
]
