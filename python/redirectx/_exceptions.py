# Exception classes with request attribute support


class RequestError(Exception):
    """Base class for request errors."""

    def __init__(self, message="", *, request=None):
        super().__init__(message)
        self._request = request

    @property
    def request(self):
        if self._request is None:
            raise RuntimeError(
                "The request instance has not been set on this exception."
            )
        return self._request


class TransportError(RequestError):
    """The underlying transport failed to send a request.

    The original exception is available as ``cause`` (and ``__cause__``).
    Redirect following never retries after a transport failure.
    """

    def __init__(self, cause, *, request=None):
        super().__init__(f"{type(cause).__name__}: {cause}", request=request)
        self.cause = cause


class RedirectError(RequestError):
    """Base class for errors raised while following redirects."""

    def __init__(self, message="", *, request=None, response=None):
        super().__init__(message, request=request)
        self.response = response


class InvalidRedirectTarget(RedirectError):
    """A Location header could not be resolved to an http(s) URL."""

    def __init__(self, location, *, request=None, response=None):
        super().__init__(
            f"Invalid redirect target: {location!r}",
            request=request,
            response=response,
        )
        self.location = location


class TooManyRedirects(RedirectError):
    """Following the next redirect would exceed the configured maximum.

    ``response`` is the last redirect response received.
    """

    def __init__(self, max_redirects, *, request=None, response=None):
        super().__init__(
            f"Exceeded {max_redirects} redirects.",
            request=request,
            response=response,
        )
        self.max_redirects = max_redirects


class RedirectLoop(RedirectError):
    """A redirect chain pointed back at a URL it already visited."""

    def __init__(self, url, *, request=None, response=None):
        super().__init__(
            f"Redirect loop detected at {url}",
            request=request,
            response=response,
        )
        self.url = url


class BodyNotReplayable(RedirectError):
    """A consumed streaming body would have to be sent again."""

    def __init__(self, message=None, *, request=None, response=None):
        super().__init__(
            message
            or "Cannot follow redirect: the streaming request body was already "
            "consumed. Send a buffered body or enable buffer_request_body.",
            request=request,
            response=response,
        )


class StreamError(RequestError):
    """Stream error."""

    pass


class StreamConsumed(StreamError):
    """Stream consumed error."""

    def __init__(self, message=None, *, request=None):
        super().__init__(
            message or "The request body stream has already been consumed.",
            request=request,
        )
