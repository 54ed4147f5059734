"""Facade contract: the binder that turns a ParameterBag into typed fields.

A facade is built fresh for every request by a ``FacadeFactory`` (usually the
facade class itself), so concurrent requests never share binder state.
"""

from typing import Any, Callable, ClassVar, Optional, Protocol, Type, runtime_checkable

from pydantic import BaseModel, ValidationError

from paramconverter.exceptions import DeserializationError
from paramconverter.params import ParameterBag


@runtime_checkable
class FacadeInterface(Protocol):
    """Protocol every facade implements.

    ``deserialize`` receives all query, form, multipart and JSON parameters of
    a request and populates the facade's own fields from them. It signals a
    bad request (missing key, wrong type, invalid data) by raising
    ``DeserializationError``; ``ValueError``, ``TypeError`` and ``LookupError``
    are accepted as failures too. The middleware then logs the message and
    answers HTTP 400.
    """

    def deserialize(self, data: ParameterBag) -> None:
        ...


FacadeFactory = Callable[[], FacadeInterface]


def ensure_factory(facade_factory: Any) -> FacadeFactory:
    """Validate that ``facade_factory`` builds facades rather than being one.

    Raises:
        TypeError: an instance or another non-callable was passed
    """
    if not callable(facade_factory):
        raise TypeError(
            "facade_factory must be a callable returning a new facade per request "
            f"(e.g. the facade class), got {type(facade_factory).__name__} instance"
        )
    return facade_factory


class ModelFacade:
    """Facade that validates the whole bag with a pydantic model.

    Subclasses set ``model``; the validated instance is available as ``value``
    after a successful ``deserialize``::

        class SearchParams(BaseModel):
            q: str
            page: int = 1

        class SearchFacade(ModelFacade):
            model = SearchParams
    """

    model: ClassVar[Type[BaseModel]]

    def __init__(self):
        self.value: Optional[BaseModel] = None

    def deserialize(self, data: ParameterBag) -> None:
        try:
            self.value = self.model.model_validate(data.to_dict())
        except ValidationError as e:
            raise DeserializationError(
                f"invalid parameters for {self.model.__name__}\n{e}"
            ) from e
