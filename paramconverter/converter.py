"""Request parameter conversion pipeline.

Builds one ParameterBag per request from, in order of increasing precedence:

1. the URL query string (always)
2. the body, chosen by the media type of the Content-Type header:
   - application/json: JSON object members (decode failure is fatal)
   - multipart/form-data: non-file fields (parse failure is ignored)
   - application/x-www-form-urlencoded: form fields (parse failure is ignored)

then hands the bag to a freshly built facade.
"""

import json
from typing import Any, Optional

from fastapi import HTTPException
from python_multipart.exceptions import FormParserError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect, Request

from paramconverter.core.config import settings
from paramconverter.core.logging_config import get_logger
from paramconverter.exceptions import DeserializationError, MalformedJsonError, ParamConverterError
from paramconverter.extractor import extract_data_from, multi_values, parse_multipart_fields
from paramconverter.facade import FacadeFactory, FacadeInterface, ensure_factory
from paramconverter.params import JsonValue, ParameterBag

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"
URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"


def media_type(content_type: Optional[str]) -> str:
    """Return the media type of a Content-Type header, without parameters."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def log_conversion_failure(error: ParamConverterError) -> None:
    if isinstance(error, MalformedJsonError):
        logger.warning(f"Undecodable json\n{error.detail}")
    else:
        logger.warning(f"Param conversion error: {error.detail}")


class ParamConverter:
    """Converts requests into bound facades built by ``facade_factory``.

    Also usable directly as a FastAPI dependency::

        @app.get("/search")
        async def search(facade: SearchFacade = Depends(ParamConverter(SearchFacade))):
            ...
    """

    def __init__(self, facade_factory: FacadeFactory):
        self.facade_factory = ensure_factory(facade_factory)

    async def __call__(self, request: Request) -> FacadeInterface:
        try:
            return await self.convert(request)
        except ParamConverterError as e:
            log_conversion_failure(e)
            raise HTTPException(status_code=e.status_code) from e

    async def convert(self, request: Request) -> FacadeInterface:
        """Extract the request parameters and bind them to a new facade.

        Raises:
            MalformedJsonError: JSON body could not be decoded into an object
            DeserializationError: the facade rejected the parameters
        """
        data = await self.build_parameters(request)
        return self.bind(data)

    async def build_parameters(self, request: Request) -> ParameterBag:
        """Merge query string and body parameters of ``request`` into a new bag."""
        data = extract_data_from(multi_values(request.query_params), ParameterBag())

        content_type = request.headers.get("content-type")
        kind = media_type(content_type)

        if kind == JSON_CONTENT_TYPE:
            await self._extract_json(request, data)
        elif kind == MULTIPART_CONTENT_TYPE:
            await self._extract_multipart(request, content_type, data)
        elif kind == URLENCODED_CONTENT_TYPE:
            await self._extract_urlencoded(request, data)

        return data

    def bind(self, data: ParameterBag) -> FacadeInterface:
        facade = self.facade_factory()

        try:
            facade.deserialize(data)
        except DeserializationError:
            raise
        except ParamConverterError as e:
            raise DeserializationError(e.detail) from e
        except (ValueError, TypeError, LookupError) as e:
            raise DeserializationError(str(e)) from e

        return facade

    async def _extract_json(self, request: Request, data: ParameterBag) -> None:
        try:
            body = await request.body()
        except ClientDisconnect as e:
            raise MalformedJsonError("client disconnected while sending the JSON body") from e

        # An empty body is no body at all; whitespace still goes to the decoder
        if not body:
            return

        try:
            decoded: Any = json.loads(body, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            raise MalformedJsonError(str(e)) from e

        if decoded is None:
            return
        if not isinstance(decoded, dict):
            raise MalformedJsonError(
                f"cannot unmarshal JSON {type(decoded).__name__} into a parameter object"
            )

        for key, value in decoded.items():
            data[key] = JsonValue(value)

    async def _extract_multipart(self, request: Request, content_type: str, data: ParameterBag) -> None:
        try:
            body = await request.body()
            fields = parse_multipart_fields(body, content_type, settings.MULTIPART_MAX_MEMORY)
        except (FormParserError, ClientDisconnect) as e:
            logger.debug(f"Ignoring unparsable multipart body: {e}")
            return

        extract_data_from(fields, data)

    async def _extract_urlencoded(self, request: Request, data: ParameterBag) -> None:
        try:
            # Cache the body first so handlers behind the middleware can still read it
            await request.body()
            form = await request.form()
        except (FormParserError, MultiPartException, StarletteHTTPException, ClientDisconnect) as e:
            logger.debug(f"Ignoring unparsable url-encoded body: {e}")
            return

        extract_data_from(multi_values(form), data)
