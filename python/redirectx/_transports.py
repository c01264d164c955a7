# Transport base class and implementations

import inspect

import httpx

from ._compat import _logger
from ._models import Response
from ._streams import BufferedBody, StreamingBody


class AsyncBaseTransport:
    """Base class for async HTTP transport implementations.

    Subclass and implement send to create custom transports. A transport
    sends exactly one request per call and never retries or follows
    redirects itself.
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return None

    async def aclose(self):
        pass

    async def send(self, request):
        raise NotImplementedError("Subclasses must implement send()")


class MockTransport(AsyncBaseTransport):
    """Mock transport for testing - calls a handler function to generate responses.

    The handler receives the request and returns a Response, or a bare
    status code. It may be a plain function or a coroutine function.
    Streaming request bodies are read before the handler runs, exactly as a
    network transport would, so the handler always sees a buffered body.
    Every request the handler saw is kept in ``requests``.
    """

    def __init__(self, handler=None):
        self._handler = handler
        self.requests = []

    @property
    def handler(self):
        """Public access to the handler function."""
        return self._handler

    async def send(self, request):
        sent = request
        if isinstance(request.body, StreamingBody):
            data = await request.body.aread()
            sent = request.copy_with(content=data)
        self.requests.append(sent)

        if self._handler is None:
            return Response(200, request=request)
        result = self._handler(sent)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, Response):
            result = Response(result)
        if result._request is None:
            result._request = request
        return result

    def __repr__(self):
        return "<MockTransport>"


class HTTPXTransport(AsyncBaseTransport):
    """Transport backed by an ``httpx.AsyncClient``.

    Pass an existing client to share its connection pool (it is then left
    open on ``aclose``), or keyword arguments to have one created. The
    client never follows redirects on its own.

    Example:
        async with RedirectClient(HTTPXTransport(timeout=10.0)) as client:
            response = await client.get("https://example.org/moved")
    """

    def __init__(self, client=None, **client_kwargs):
        if client is not None and client_kwargs:
            raise TypeError("Pass either an httpx.AsyncClient or client options, not both")
        self._owns_client = client is None
        if client is None:
            client_kwargs["follow_redirects"] = False
            client = httpx.AsyncClient(**client_kwargs)
        self._client = client

    @property
    def client(self):
        return self._client

    async def send(self, request):
        body = request.body
        if isinstance(body, BufferedBody):
            content = body.read()
        elif isinstance(body, StreamingBody):
            content = _iter_body(body)
        else:
            content = None

        httpx_request = self._client.build_request(
            request.method,
            request.url,
            headers=request.headers,
            content=content,
        )
        httpx_response = await self._client.send(httpx_request, follow_redirects=False)

        _logger.debug(
            f'HTTP Request: {request.method} {request.url} '
            f'"{httpx_response.http_version} {httpx_response.status_code} '
            f'{httpx_response.reason_phrase}"'
        )
        return Response(
            httpx_response.status_code,
            headers=httpx_response.headers,
            content=httpx_response.content,
            request=request,
        )

    async def aclose(self):
        if self._owns_client:
            await self._client.aclose()

    def __repr__(self):
        return f"<HTTPXTransport client={self._client!r}>"


async def _iter_body(body):
    # httpx treats anything with __iter__ as a sync stream; hand it a pure
    # async iterator instead.
    async for chunk in body:
        yield chunk
