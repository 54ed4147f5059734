"""Access to the facade bound by ParamConverterMiddleware from downstream handlers."""

from typing import Callable, Optional, Type, TypeVar

from starlette.requests import Request

from paramconverter.core.config import settings
from paramconverter.exceptions import FacadeNotFoundError, FacadeTypeError

F = TypeVar("F")


def get_facade(request: Request, expected_type: Optional[Type[F]] = None) -> F:
    """Return the facade bound to ``request``.

    Args:
        request: Request that went through ParamConverterMiddleware
        expected_type: Facade class the caller expects, checked with isinstance

    Raises:
        FacadeNotFoundError: no facade is attached to the request
        FacadeTypeError: the attached facade is not an ``expected_type``
    """
    facade = getattr(request.state, settings.FACADE_STATE_KEY, None)

    if facade is None:
        raise FacadeNotFoundError(
            f'no facade attached to the request under "{settings.FACADE_STATE_KEY}"'
        )

    if expected_type is not None and not isinstance(facade, expected_type):
        raise FacadeTypeError(
            f"attached facade is {type(facade).__name__}, expected {expected_type.__name__}"
        )

    return facade


def facade_dependency(expected_type: Type[F]) -> Callable[[Request], F]:
    """FastAPI dependency returning the attached facade of ``expected_type``."""

    def dependency(request: Request) -> F:
        return get_facade(request, expected_type)

    return dependency
