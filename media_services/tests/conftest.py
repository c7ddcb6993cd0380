from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from media_services.config import MediaServicesConfig
from media_services.context import MediaContext
from media_services.tests.utils.fakes import TOKEN_HOST, MockTransport, RecordingConnectionFactory

API_SERVER = "https://media.test/API/"
ACS_ADDRESS = f"https://{TOKEN_HOST}"


@pytest.fixture
def config() -> MediaServicesConfig:
    return MediaServicesConfig(api_url=API_SERVER, acs_base_address=ACS_ADDRESS)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def context(config: MediaServicesConfig, mock_transport: MockTransport) -> MediaContext:
    return MediaContext("account", "account-key", config=config, transport=mock_transport)


@pytest.fixture
def recording_factory(
    context: MediaContext, monkeypatch: pytest.MonkeyPatch
) -> RecordingConnectionFactory:
    factory = RecordingConnectionFactory()
    monkeypatch.setattr(context, "_connection_factory", factory)
    return factory


@pytest.fixture(scope="session")
def certificate() -> x509.Certificate:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "media-services-test")])
    now = datetime.now(timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
