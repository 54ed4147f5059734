"""Starlette middleware binding request parameters to a facade.

Query string, url-encoded form, multipart form and JSON body parameters are
merged and handed to a facade built for this request. The bound facade is
stored on ``request.state`` for the handlers behind the middleware; a
malformed JSON body or a facade rejecting its parameters ends the request
with an empty 400 response.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from paramconverter.converter import ParamConverter, log_conversion_failure
from paramconverter.core.config import settings
from paramconverter.exceptions import DeserializationError, MalformedJsonError
from paramconverter.facade import FacadeFactory


class ParamConverterMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches a bound facade to every HTTP request.

    Install it app-wide::

        app.add_middleware(ParamConverterMiddleware, facade_factory=SearchFacade)

    or around a single endpoint with ``new``.
    """

    def __init__(self, app: ASGIApp, facade_factory: FacadeFactory):
        super().__init__(app)
        self.converter = ParamConverter(facade_factory)

    async def dispatch(self, request: Request, call_next) -> Response:
        """Bind the request parameters, then continue or answer 400.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in the chain

        Returns:
            HTTP response from downstream handlers, or an empty 400 response
        """
        try:
            facade = await self.converter.convert(request)
        except (MalformedJsonError, DeserializationError) as e:
            log_conversion_failure(e)
            return Response(status_code=e.status_code)

        setattr(request.state, settings.FACADE_STATE_KEY, facade)
        return await call_next(request)


def new(facade_factory: FacadeFactory, next_app: ASGIApp) -> ASGIApp:
    """Wrap ``next_app`` so it only runs with a facade bound from the request.

    e.g.
        route = Route("/hello", new(HelloFacade, hello_app))
    """
    return ParamConverterMiddleware(next_app, facade_factory=facade_factory)
