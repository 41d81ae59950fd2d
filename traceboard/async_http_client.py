"""
Async Secure HTTP Client Wrapper

Provides async GET with enforced SSL verification and timeouts for the
dashboard overview endpoint. Built on httpx.

Usage:
    from traceboard.async_http_client import AsyncSecureHTTPClient

    async with AsyncSecureHTTPClient(timeout=10) as client:
        response = await client.get(url)

Security Features:
    - SSL verification always enabled (verify=True)
    - Default 30-second timeout on all requests
    - HTTP/2 support
"""

import httpx


class AsyncSecureHTTPClient:
    """
    Async HTTP client with enforced SSL verification and connection pooling.

    Features:
    - Context manager for automatic connection cleanup
    - Connection pooling (configurable max connections)
    - HTTP/2 support for multiplexing
    - Request timeouts
    """

    DEFAULT_TIMEOUT = 30  # seconds
    DEFAULT_MAX_CONNECTIONS = 10
    DEFAULT_MAX_KEEPALIVE = 5

    def __init__(
        self,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        max_keepalive_connections: int = DEFAULT_MAX_KEEPALIVE,
        timeout: float = DEFAULT_TIMEOUT,
        http2: bool = True,
    ):
        """
        Initialize async HTTP client.

        Args:
            max_connections: Maximum number of concurrent connections (default: 10)
            max_keepalive_connections: Max persistent connections (default: 5)
            timeout: Default timeout in seconds (default: 30)
            http2: Enable HTTP/2 support (default: True)
        """
        self.limits = httpx.Limits(max_connections=max_connections, max_keepalive_connections=max_keepalive_connections)
        self.timeout = httpx.Timeout(timeout)
        self.http2 = http2
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "AsyncSecureHTTPClient":
        """Context manager entry - create async client"""
        self.client = httpx.AsyncClient(
            limits=self.limits,
            timeout=self.timeout,
            verify=True,
            http2=self.http2,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *args):
        """Context manager exit - close connections"""
        if self.client:
            await self.client.aclose()

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        Async GET request with SSL verification enforced.

        Args:
            url: URL to fetch
            **kwargs: Additional arguments to pass to httpx.AsyncClient.get()

        Returns:
            httpx.Response: HTTP response

        Raises:
            RuntimeError: If used outside the async context manager
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with AsyncSecureHTTPClient()' context manager")

        return await self.client.get(url, **kwargs)
