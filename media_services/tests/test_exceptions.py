from media_services.exceptions import (
    APIError,
    AuthenticationError,
    MediaServicesError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnexpectedResponseError,
)


def test_media_services_error_str_without_context() -> None:
    error = MediaServicesError("Something failed")

    assert str(error) == "Something failed"


def test_media_services_error_str_with_context() -> None:
    error = MediaServicesError("Failed", id="nb:kid:UUID:1", attempt=3)

    assert "Failed" in str(error)
    assert "id='nb:kid:UUID:1'" in str(error)
    assert "attempt=3" in str(error)


def test_not_found_error_has_code_404() -> None:
    error = NotFoundError("Entity not found", endpoint="/Assets('x')")

    assert error.code == 404
    assert error.endpoint == "/Assets('x')"


def test_server_error_defaults_to_500() -> None:
    error = ServerError("Boom")

    assert error.code == 500
    assert isinstance(error, APIError)


def test_unexpected_response_error_keeps_endpoint() -> None:
    error = UnexpectedResponseError("Bad payload", endpoint="/RebindContentKey")

    assert error.endpoint == "/RebindContentKey"
    assert "endpoint='/RebindContentKey'" in str(error)


def test_unauthorized_error_is_api_and_authentication_error() -> None:
    error = UnauthorizedError("Token expired", endpoint="/Assets")

    assert error.code == 401
    assert isinstance(error, APIError)
    assert isinstance(error, AuthenticationError)
    assert "code=401" in str(error)
