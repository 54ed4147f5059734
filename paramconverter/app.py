from typing import List

from fastapi import Depends, FastAPI, Request
from pydantic import BaseModel
from starlette.responses import PlainTextResponse, Response
from starlette.routing import request_response

from paramconverter.converter import ParamConverter
from paramconverter.core.config import settings
from paramconverter.core.logging_config import get_logger
from paramconverter.dependencies import get_facade
from paramconverter.exceptions import DeserializationError, ParamConverterError
from paramconverter.facade import ModelFacade
from paramconverter.middleware import new
from paramconverter.params import ParameterBag

logger = get_logger("paramconverter.app")


class ParamFacade:
    """Binds the required integer parameter ``param``."""

    def __init__(self):
        self.param = 0

    def deserialize(self, data: ParameterBag) -> None:
        raw = data.text("param")

        if raw is None:
            raise DeserializationError('parameter "param" not found in query')

        try:
            self.param = int(raw)
        except ValueError as e:
            raise DeserializationError(f"cannot parse param as int\n{e}") from e


class SearchParams(BaseModel):
    q: str
    page: int = 1
    tags: List[str] = []


class SearchFacade(ModelFacade):
    model = SearchParams


async def show_param(request: Request) -> Response:
    try:
        facade = get_facade(request, ParamFacade)
    except ParamConverterError as e:
        logger.error(f"Facade lookup failed: {e.detail}")
        return Response(status_code=e.status_code)

    return PlainTextResponse(str(facade.param))


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Demo of request parameters bound to facades",
    version=settings.VERSION,
)

# Plain ASGI route so the middleware wraps this endpoint only
app.add_route("/api/v1/param", new(ParamFacade, request_response(show_param)))


@app.get("/api/v1/search")
@app.post("/api/v1/search")
async def search(facade: SearchFacade = Depends(ParamConverter(SearchFacade))):
    return facade.value.model_dump()

