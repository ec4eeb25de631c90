"""Pytest configuration for the gateway test-suite."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from site_selector.core.crypto import CredentialCrypto  # noqa: E402
from site_selector.core.trust_token import TrustTokenCodec  # noqa: E402
from site_selector.models.gateway import GatewayConfig  # noqa: E402
from site_selector.services.gateway import GatewayController  # noqa: E402
from site_selector.services.handoff import HandoffSelector  # noqa: E402
from site_selector.services.identity import IdentityExtractor  # noqa: E402
from site_selector.services.location import LocationResolver  # noqa: E402

JWT_KEY = "test-shared-secret-0123456789"
SAML_LOCATION_ATTRIBUTE = "nodeLocation"


class FakeClock:
    """Controllable replacement for ``time.time``."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def gateway_env(monkeypatch: pytest.MonkeyPatch):
    """Provide a valid master configuration and fresh caches for every test."""
    monkeypatch.setenv("GSS_MODE", "master")
    monkeypatch.setenv("GSS_JWT_KEY", JWT_KEY)
    monkeypatch.setenv("GSS_MASTER_ADMIN", "admin")
    monkeypatch.setenv("GSS_SAML_SLAVE_MAPPING", SAML_LOCATION_ATTRIBUTE)
    monkeypatch.delenv("GSS_LOOKUP_SERVER_URL", raising=False)

    from site_selector.config import reload_settings
    from site_selector.dependencies import reset_dependencies

    reload_settings()
    reset_dependencies()
    yield
    reset_dependencies()
    from site_selector.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def jwt_key() -> str:
    return JWT_KEY


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(
        master_admins=frozenset({"admin", "root"}),
        saml_location_attribute=SAML_LOCATION_ATTRIBUTE,
        jwt_key=JWT_KEY,
    )


@pytest.fixture
def codec(clock: FakeClock) -> TrustTokenCodec:
    return TrustTokenCodec(JWT_KEY, crypto=CredentialCrypto(JWT_KEY), clock=clock)


@pytest.fixture
def directory() -> AsyncMock:
    """Lookup server stand-in that knows nobody by default."""
    mock = AsyncMock()
    mock.search = AsyncMock(return_value="")
    return mock


@pytest.fixture
def exchanger() -> AsyncMock:
    mock = AsyncMock()
    mock.fetch_app_token = AsyncMock(return_value="tok123")
    return mock


@pytest.fixture
def controller(
    gateway_config: GatewayConfig,
    codec: TrustTokenCodec,
    directory: AsyncMock,
    exchanger: AsyncMock,
) -> GatewayController:
    return GatewayController(
        config=gateway_config,
        codec=codec,
        extractor=IdentityExtractor(gateway_config),
        resolver=LocationResolver(directory),
        selector=HandoffSelector(exchanger, codec),
    )
