import pytest

from media_services.config import MediaServicesConfig


def test_defaults_match_service_endpoints() -> None:
    config = MediaServicesConfig()

    assert config.api_url == "https://media.windows.net/API/"
    assert config.scope == "urn:WindowsAzureMediaServices"
    assert config.parallel_transfer_thread_count == 10
    assert config.number_of_concurrent_transfers == 2


def test_api_url_gets_trailing_slash() -> None:
    config = MediaServicesConfig(api_url="https://media.test/API")

    assert config.api_url == "https://media.test/API/"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("timeout", 0),
        ("page_size", 0),
        ("token_refresh_margin", -1),
        ("parallel_transfer_thread_count", 0),
        ("number_of_concurrent_transfers", -2),
    ],
)
def test_invalid_values_are_rejected(field: str, value: float) -> None:
    with pytest.raises(ValueError, match=field):
        MediaServicesConfig(**{field: value})
