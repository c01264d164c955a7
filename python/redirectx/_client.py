# RedirectClient: a transport wrapper that follows redirects

from ._compat import USE_CLIENT_DEFAULT
from ._config import RedirectConfig
from ._driver import execute
from ._models import Request
from ._transports import AsyncBaseTransport


class RedirectClient(AsyncBaseTransport):
    """An async HTTP client that follows redirects.

    Wraps any transport with an async ``send(request)`` and exposes the same
    ``send`` shape, so callers cannot tell it apart from the transport except
    that the response they receive is always the terminal one. The client is
    itself a transport and can be wrapped again.

    By default up to 10 redirects are followed; see RedirectConfig for the
    other options.

    Example:
        async with RedirectClient(HTTPXTransport()) as client:
            response = await client.get("http://example.org/old-path")
    """

    def __init__(self, transport, *, max_redirects=USE_CLIENT_DEFAULT, config=None):
        if config is None:
            config = RedirectConfig()
        if max_redirects is not USE_CLIENT_DEFAULT:
            config = config.replace(max_redirects=max_redirects)
        self._transport = transport
        self._config = config
        self._is_closed = False

    @property
    def transport(self):
        return self._transport

    @property
    def config(self):
        return self._config

    @property
    def max_redirects(self):
        """Maximum number of redirects followed per call."""
        return self._config.max_redirects

    @max_redirects.setter
    def max_redirects(self, value):
        self._config = self._config.replace(max_redirects=value)

    @property
    def is_closed(self):
        return self._is_closed

    def _check_closed(self):
        if self._is_closed:
            raise RuntimeError("Cannot send a request, as the client has been closed.")

    async def __aenter__(self):
        if self._is_closed:
            raise RuntimeError("Cannot open a client that has been closed")
        if hasattr(self._transport, "__aenter__"):
            await self._transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return None

    async def aclose(self):
        """Close the client and the wrapped transport."""
        if self._is_closed:
            return
        self._is_closed = True
        if hasattr(self._transport, "aclose"):
            await self._transport.aclose()

    def build_request(self, method, url, *, headers=None, content=None):
        """Build a Request without sending it."""
        return Request(method, url, headers=headers, content=content)

    async def send(
        self, request, *, follow_redirects=True, max_redirects=USE_CLIENT_DEFAULT
    ):
        """Send a request, following redirects unless told otherwise.

        ``follow_redirects=False`` sends exactly once and returns whatever
        came back. ``max_redirects`` overrides the client's limit for this
        call only.
        """
        self._check_closed()
        if not follow_redirects:
            max_redirects = 0
        elif max_redirects is USE_CLIENT_DEFAULT:
            max_redirects = self._config.max_redirects
        return await execute(self._transport, request, max_redirects, self._config)

    async def request(
        self,
        method,
        url,
        *,
        headers=None,
        content=None,
        follow_redirects=True,
        max_redirects=USE_CLIENT_DEFAULT,
    ):
        """Build and send a request."""
        request = self.build_request(method, url, headers=headers, content=content)
        return await self.send(
            request, follow_redirects=follow_redirects, max_redirects=max_redirects
        )

    async def get(self, url, *, headers=None, **kwargs):
        """HTTP GET."""
        return await self.request("GET", url, headers=headers, **kwargs)

    async def head(self, url, *, headers=None, **kwargs):
        """HTTP HEAD."""
        return await self.request("HEAD", url, headers=headers, **kwargs)

    async def options(self, url, *, headers=None, **kwargs):
        """HTTP OPTIONS."""
        return await self.request("OPTIONS", url, headers=headers, **kwargs)

    async def delete(self, url, *, headers=None, **kwargs):
        """HTTP DELETE."""
        return await self.request("DELETE", url, headers=headers, **kwargs)

    async def post(self, url, *, content=None, headers=None, **kwargs):
        """HTTP POST."""
        return await self.request("POST", url, content=content, headers=headers, **kwargs)

    async def put(self, url, *, content=None, headers=None, **kwargs):
        """HTTP PUT."""
        return await self.request("PUT", url, content=content, headers=headers, **kwargs)

    async def patch(self, url, *, content=None, headers=None, **kwargs):
        """HTTP PATCH."""
        return await self.request("PATCH", url, content=content, headers=headers, **kwargs)

    def __repr__(self):
        return (
            f"<RedirectClient transport={self._transport!r} "
            f"max_redirects={self._config.max_redirects}>"
        )


def follow_redirects(transport, max_redirects=None, **config_options):
    """Wrap ``transport`` in a RedirectClient.

    Shorthand for ``RedirectClient(transport, config=RedirectConfig(...))``.
    """
    if max_redirects is not None:
        config_options["max_redirects"] = max_redirects
    return RedirectClient(transport, config=RedirectConfig(**config_options))
