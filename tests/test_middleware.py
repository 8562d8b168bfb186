from typing import Generator

from fastapi import Request, Response
from fastapi.testclient import TestClient
import pytest

from figma_auth_relay.contracts.settings import ServerSettings
from figma_auth_relay.main import create_app
from figma_auth_relay.util import Environment
from figma_auth_relay.web_api.middleware import (
    cors_middleware,
    https_redirect_middleware,
    middleware_chain,
)

from tests.mocks import BASE_CONFIG, TLS_CONFIG, FakeFigma, make_config


@pytest.fixture
def figma() -> FakeFigma:
    return FakeFigma()


@pytest.fixture
def tls_client(figma: FakeFigma) -> Generator[TestClient, None, None]:
    app = create_app(make_config(base=TLS_CONFIG), transport=figma.transport)
    with TestClient(app, follow_redirects=False) as client:
        yield client


def test_http_redirected_to_https(tls_client: TestClient):
    response = tls_client.get("/v0/ping")

    assert response.status_code == 301
    assert response.headers["location"] == "https://testserver/v0/ping"


def test_redirect_keeps_query_and_skips_handler(tls_client: TestClient, figma: FakeFigma):
    response = tls_client.get("/v0/integrations/figma/token", params={"Code": "abc123"})

    assert response.status_code == 301
    assert response.headers["location"] == (
        "https://testserver/v0/integrations/figma/token?Code=abc123"
    )
    assert figma.requests == []


def test_redirect_keeps_host_and_port(tls_client: TestClient):
    response = tls_client.get("http://relay.example.com:8080/v0/ping")

    assert response.status_code == 301
    assert response.headers["location"] == "https://relay.example.com:8080/v0/ping"


def test_redirect_adds_no_security_headers(tls_client: TestClient):
    response = tls_client.get("/v0/ping")

    for header in [
        "strict-transport-security",
        "x-frame-options",
        "x-content-type-options",
        "x-xss-protection",
        "content-security-policy",
    ]:
        assert header not in response.headers


def test_redirect_carries_cors_headers(tls_client: TestClient):
    response = tls_client.get("/v0/ping", headers={"Origin": "https://app.example.com"})

    assert response.status_code == 301
    assert response.headers["access-control-allow-origin"] == "https://app.example.com"


def test_options_not_redirected(tls_client: TestClient):
    response = tls_client.options("/v0/ping")
    assert response.status_code == 204


def test_https_passes_through(tls_client: TestClient, figma: FakeFigma):
    response = tls_client.get(
        "https://testserver/v0/integrations/figma/token", params={"Code": "abc123"}
    )

    assert response.status_code == 200
    assert response.json()["AccessToken"] == "tok"
    assert len(figma.requests) == 1


def test_no_redirect_in_development(figma: FakeFigma):
    app = create_app(
        make_config(base=TLS_CONFIG, env=Environment.DEV), transport=figma.transport
    )
    with TestClient(app, follow_redirects=False) as client:
        response = client.get("/v0/ping")

    assert response.status_code == 200
    assert response.text == "pong"


def test_no_redirect_without_tls(figma: FakeFigma):
    app = create_app(make_config(), transport=figma.transport)
    with TestClient(app, follow_redirects=False) as client:
        response = client.get("/v0/ping")

    assert response.status_code == 200


def test_middleware_chain_order():
    tls = ServerSettings.from_config(make_config(base=TLS_CONFIG))
    plain = ServerSettings.from_config(make_config(base=BASE_CONFIG))
    tls_dev = ServerSettings.from_config(
        make_config(base=TLS_CONFIG, env=Environment.DEV)
    )

    assert middleware_chain(tls) == [cors_middleware, https_redirect_middleware]
    assert middleware_chain(plain) == [cors_middleware]
    assert middleware_chain(tls_dev) == [cors_middleware]


def bare_request(headers: list[tuple[bytes, bytes]]) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "path": "/v0/ping",
            "raw_path": b"/v0/ping",
            "query_string": b"",
            "headers": headers,
            "server": None,
        }
    )


async def must_not_be_called(request: Request) -> Response:
    raise AssertionError("request should not have reached the next stage")


async def test_https_redirect_failure_stops_processing():
    response = await https_redirect_middleware(bare_request([]), must_not_be_called)

    assert response.status_code == 500
    assert response.body == b"error securing session"


async def test_cors_options_stops_processing():
    request = bare_request([(b"origin", b"https://app.example.com")])
    request.scope["method"] = "OPTIONS"

    response = await cors_middleware(request, must_not_be_called)

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "https://app.example.com"
