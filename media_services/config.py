"""
Media Services client configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class MediaServicesConfig:
    """
    Attributes:
        api_url: Base URL of the Media Services REST API.
        acs_base_address: Access control service used to obtain bearer tokens.
        scope: Authorization scope requested from the access control service.
        api_version: Service version sent as ``x-ms-version``.
        data_service_version: OData protocol version sent to the service.
        user_agent: User-Agent header value.
        timeout: Request timeout in seconds.
        page_size: Number of entities fetched per page while enumerating.
        token_refresh_margin: Seconds before expiry at which a token is renewed.
        parallel_transfer_thread_count: Default threads used per blob transfer.
        number_of_concurrent_transfers: Default number of concurrent blob transfers.
    """

    api_url: str = "https://media.windows.net/API/"
    acs_base_address: str = "https://wamsprodglobal001acs.accesscontrol.windows.net"
    scope: str = "urn:WindowsAzureMediaServices"
    api_version: str = "2.19"
    data_service_version: str = "3.0"
    user_agent: str = "media-services-python/0.1.0"
    timeout: float = 30.0
    page_size: int = 1000
    token_refresh_margin: float = 60.0
    parallel_transfer_thread_count: int = 10
    number_of_concurrent_transfers: int = 2

    def __post_init__(self) -> None:
        if not self.api_url.endswith("/"):
            object.__setattr__(self, "api_url", f"{self.api_url}/")
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.page_size <= 0:
            msg = "page_size must be positive"
            raise ValueError(msg)
        if self.token_refresh_margin < 0:
            msg = "token_refresh_margin must be non-negative"
            raise ValueError(msg)
        if self.parallel_transfer_thread_count <= 0:
            msg = "parallel_transfer_thread_count must be positive"
            raise ValueError(msg)
        if self.number_of_concurrent_transfers <= 0:
            msg = "number_of_concurrent_transfers must be positive"
            raise ValueError(msg)
