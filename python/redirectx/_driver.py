# Redirect loop driver: sends requests and follows redirects hop by hop

from ._compat import _logger
from ._config import RedirectConfig
from ._exceptions import RedirectError, RedirectLoop, TooManyRedirects, TransportError
from ._policy import Fail, Stop, evaluate
from ._streams import StreamingBody
from ._urls import normalize_url


class RedirectState:
    """Bookkeeping for a single top-level call.

    A fresh instance is created for every call to ``execute`` and is never
    shared, so concurrent calls on one client cannot interfere.
    """

    __slots__ = ("hops", "visited", "original_method", "replayable")

    def __init__(self, request):
        self.hops = 0
        self.visited = set()
        self.original_method = request.method
        self.replayable = request.is_replayable

    def __repr__(self):
        return (
            f"<RedirectState hops={self.hops} visited={len(self.visited)} "
            f"original_method={self.original_method!r}>"
        )


async def execute(transport, initial_request, max_redirects=None, config=None):
    """Send ``initial_request`` through ``transport``, following redirects.

    Args:
        transport: Anything with an async ``send(request) -> Response``.
        initial_request: The first Request to send.
        max_redirects: Overrides ``config.max_redirects`` when given.
        config: A RedirectConfig; defaults apply when omitted.

    Returns:
        The terminal Response.

    Raises:
        TransportError: The transport failed; the failure is not retried.
        InvalidRedirectTarget: A Location header could not be resolved.
        BodyNotReplayable: A consumed streaming body would have to be resent.
        TooManyRedirects: More than ``max_redirects`` redirects were needed.
        RedirectLoop: The chain returned to a URL it had already visited.
    """
    if config is None:
        config = RedirectConfig()
    if max_redirects is None:
        max_redirects = config.max_redirects
    elif max_redirects < 0:
        raise ValueError(f"max_redirects must be >= 0, got {max_redirects}")

    request = initial_request
    if config.buffer_request_body and isinstance(request.body, StreamingBody):
        request = await buffer_request(request)

    state = RedirectState(request)
    while True:
        response = await _send(transport, request)

        if max_redirects == 0:
            return response

        decision = evaluate(state.original_method, request, response, config)
        if isinstance(decision, Stop):
            return decision.response
        if isinstance(decision, Fail):
            _logger.debug(
                "Redirect from %s failed (body replayable: %s): %s",
                request.url,
                state.replayable,
                decision.error,
            )
            raise decision.error

        next_request = decision.request
        if state.hops + 1 > max_redirects:
            _logger.debug(
                "Giving up after %d redirects at %s", state.hops, request.url
            )
            raise TooManyRedirects(max_redirects, request=request, response=response)

        if normalize_url(next_request.url) in state.visited:
            _logger.debug("Redirect loop: %s -> %s", request.url, next_request.url)
            raise RedirectLoop(next_request.url, request=request, response=response)

        state.hops += 1
        state.visited.add(normalize_url(request.url))
        _logger.debug(
            "Redirect %d/%d: %s %s -> %s %s [%d]",
            state.hops,
            max_redirects,
            request.method,
            request.url,
            next_request.method,
            next_request.url,
            response.status_code,
        )
        request = next_request


async def buffer_request(request):
    """Return a copy of ``request`` with its streaming body read into memory."""
    data = await request.body.aread()
    headers = request.headers
    headers.pop("Transfer-Encoding", None)
    if data:
        headers["Content-Length"] = str(len(data))
    else:
        headers.pop("Content-Length", None)
    return request.copy_with(headers=headers, content=data)


async def _send(transport, request):
    # Errors from a wrapped RedirectClient pass through; cancellation is a
    # BaseException and is never caught.
    try:
        response = await transport.send(request)
    except (RedirectError, TransportError):
        raise
    except Exception as exc:
        raise TransportError(exc, request=request) from exc

    if response._request is None:
        response._request = request
    return response
