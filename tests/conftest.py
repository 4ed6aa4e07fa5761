"""Pytest configuration and fixtures.

CDN credentials and SECRET_KEY are set before citaya.main is imported
(create_app() validates settings). The ImageKit REST API is replaced by an
httpx.MockTransport, and the app's media gateway dependency is overridden
so tests never need the lifespan or the network.
"""

import os

os.environ.setdefault("CDN_PUBLIC_KEY", "public_test_key")
os.environ.setdefault("CDN_PRIVATE_KEY", "private_test_key")
os.environ.setdefault("CDN_URL_ENDPOINT", "https://ik.imagekit.io/citaya")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing-0123456789")
os.environ.setdefault("DEPLOYMENT_MODE", "development")

from typing import Any  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from citaya.api.v1.dependencies import get_media_gateway  # noqa: E402
from citaya.core.limiter import limiter  # noqa: E402
from citaya.domain.media import Credentials  # noqa: E402
from citaya.infrastructure.security.jwt import create_access_token  # noqa: E402
from citaya.infrastructure.services import MediaGatewayService  # noqa: E402
from citaya.main import app  # noqa: E402

TEST_URL_ENDPOINT = "https://ik.imagekit.io/citaya"

UPLOAD_PAYLOAD: dict[str, Any] = {
    "fileId": "6673f1e0e7f4b0a1c2d3e4f5",
    "name": "logo_a1B2c3.png",
    "url": f"{TEST_URL_ENDPOINT}/logos/logo_a1B2c3.png",
    "thumbnailUrl": f"{TEST_URL_ENDPOINT}/tr:n-ik_ml_thumbnail/logos/logo_a1B2c3.png",
    "filePath": "/logos/logo_a1B2c3.png",
    "size": 10240,
    "fileType": "image",
    "height": 256,
    "width": 256,
}


class FakeImageKit:
    """Stand-in for the ImageKit REST API behind httpx.MockTransport.

    Records every request. Set upload_status/upload_json, delete_status/
    delete_json, or raise_error to change behaviour per test.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.upload_status = 200
        self.upload_json: Any = dict(UPLOAD_PAYLOAD)
        self.delete_status = 204
        self.delete_json: Any = None
        self.raise_error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if request.method == "POST" and request.url.path.endswith("/files/upload"):
            return httpx.Response(self.upload_status, json=self.upload_json)
        if request.method == "DELETE" and "/files/" in request.url.path:
            if self.delete_json is None:
                return httpx.Response(self.delete_status)
            return httpx.Response(self.delete_status, json=self.delete_json)
        return httpx.Response(404, json={"message": "Route not found"})


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        public_key="public_test_key",
        private_key="private_test_key",
        url_endpoint=TEST_URL_ENDPOINT,
    )


@pytest.fixture
def fake_cdn() -> FakeImageKit:
    return FakeImageKit()


@pytest.fixture
async def gateway(credentials: Credentials, fake_cdn: FakeImageKit) -> MediaGatewayService:
    """Media gateway wired to the fake CDN."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_cdn)) as http:
        yield MediaGatewayService.create(credentials, http)


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Rate-limit counters are process-global; start every test clean."""
    limiter.reset()


@pytest.fixture
async def client(gateway: MediaGatewayService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) using the fake CDN."""
    app.dependency_overrides[get_media_gateway] = lambda: gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_media_gateway, None)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header with a valid bearer token."""
    token = create_access_token({"sub": "user-123", "userId": "user-123", "rol": "ADMIN_NEGOCIO"})
    return {"Authorization": f"Bearer {token}"}
