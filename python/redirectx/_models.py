# Request and Response value types

import httpx

from ._streams import BufferedBody, coerce_body

Headers = httpx.Headers

REDIRECT_STATUS_CODES = frozenset(
    (
        httpx.codes.MOVED_PERMANENTLY,  # 301
        httpx.codes.FOUND,  # 302
        httpx.codes.SEE_OTHER,  # 303
        httpx.codes.TEMPORARY_REDIRECT,  # 307
        httpx.codes.PERMANENT_REDIRECT,  # 308
    )
)


class Request:
    """An outgoing HTTP request.

    Requests are immutable: redirect handling derives new requests with
    ``copy_with`` and never edits one that has been sent. ``headers`` hands
    out a copy of the stored header mapping.

    ``content`` may be bytes/str (stored as a BufferedBody), an iterator or
    async iterator of bytes (stored as a StreamingBody), or an existing body
    object.
    """

    __slots__ = ("_method", "_url", "_headers", "_body")

    def __init__(self, method, url, *, headers=None, content=None):
        url = httpx.URL(url)
        if not url.is_absolute_url:
            raise ValueError(f"Request URL must be absolute, got {str(url)!r}")
        self._method = method.upper()
        self._url = url
        self._headers = Headers(headers)
        self._body = coerce_body(content)
        if isinstance(self._body, BufferedBody) and not (
            "content-length" in self._headers or "transfer-encoding" in self._headers
        ):
            self._headers["Content-Length"] = str(len(self._body))

    @property
    def method(self):
        return self._method

    @property
    def url(self):
        return self._url

    @property
    def headers(self):
        return self._headers.copy()

    @property
    def body(self):
        return self._body

    @property
    def content(self):
        """The request body bytes; only available for buffered bodies."""
        if self._body is None:
            return b""
        if isinstance(self._body, BufferedBody):
            return self._body.read()
        raise TypeError("Streaming request bodies have no buffered content")

    @property
    def is_replayable(self):
        return self._body is None or self._body.replayable

    def copy_with(self, *, method=None, url=None, headers=None, content=None, drop_body=False):
        """Return a new Request with the given fields replaced."""
        new = Request.__new__(Request)
        new._method = method.upper() if method is not None else self._method
        new._url = httpx.URL(url) if url is not None else self._url
        new._headers = Headers(headers) if headers is not None else self._headers.copy()
        if drop_body:
            new._body = None
        elif content is not None:
            new._body = coerce_body(content)
        else:
            new._body = self._body
        return new

    def __eq__(self, other):
        if not isinstance(other, Request):
            return NotImplemented
        return (
            self._method == other._method
            and self._url == other._url
            and self._headers == other._headers
            and self._body == other._body
        )

    __hash__ = None

    def __repr__(self):
        return f"<Request({self._method!r}, {str(self._url)!r})>"


class Response:
    """An HTTP response as returned by a transport.

    Redirect handling only looks at ``status_code`` and the ``Location``
    header; ``content`` is carried through untouched.
    """

    def __init__(self, status_code, *, headers=None, content=b"", request=None):
        self.status_code = int(status_code)
        self.headers = Headers(headers)
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.content = bytes(content or b"")
        self._request = request

    @property
    def request(self):
        if self._request is None:
            raise RuntimeError(
                "The request instance has not been set on this response."
            )
        return self._request

    @property
    def url(self):
        return self.request.url

    @property
    def reason_phrase(self):
        return httpx.codes.get_reason_phrase(self.status_code)

    @property
    def text(self):
        return self.content.decode("utf-8", errors="replace")

    @property
    def location(self):
        return self.headers.get("location")

    @property
    def is_redirect(self):
        """True for a redirect status code carrying a Location header."""
        return self.status_code in REDIRECT_STATUS_CODES and "location" in self.headers

    def __repr__(self):
        return f"<Response [{self.status_code} {self.reason_phrase}]>"
