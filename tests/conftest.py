import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route, request_response
from starlette.testclient import TestClient

from paramconverter.middleware import new


def build_request(
    method: str = "GET",
    query_string: bytes = b"",
    headers: dict | None = None,
    body: bytes = b"",
) -> Request:
    """Build a Starlette request whose body is delivered in one message."""
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": "/",
        "raw_path": b"/",
        "root_path": "",
        "query_string": query_string,
        "headers": raw_headers,
        "server": ("testserver", 80),
        "client": ("testclient", 50000),
    }
    sent = False

    async def receive():
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request():
    """Factory for standalone Starlette requests."""
    return build_request


@pytest.fixture
def make_client():
    """Factory for a TestClient serving ``handler`` at / behind the middleware."""

    def _make_client(facade_factory, handler) -> TestClient:
        app = Starlette(routes=[Route("/", new(facade_factory, request_response(handler)))])
        return TestClient(app)

    return _make_client
