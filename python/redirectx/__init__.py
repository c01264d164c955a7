"""
redirectx - Async HTTP client decorator that transparently follows redirects
"""

from ._client import RedirectClient, follow_redirects
from ._compat import USE_CLIENT_DEFAULT
from ._config import DEFAULT_MAX_REDIRECTS, RedirectConfig
from ._driver import RedirectState, execute
from ._exceptions import (
    BodyNotReplayable,
    InvalidRedirectTarget,
    RedirectError,
    RedirectLoop,
    RequestError,
    StreamConsumed,
    StreamError,
    TooManyRedirects,
    TransportError,
)
from ._models import REDIRECT_STATUS_CODES, Headers, Request, Response
from ._policy import Fail, Follow, RedirectDecision, Stop, evaluate
from ._streams import BufferedBody, StreamingBody
from ._transports import AsyncBaseTransport, HTTPXTransport, MockTransport

__version__ = "0.1.0"

__all__ = [
    "AsyncBaseTransport",
    "BodyNotReplayable",
    "BufferedBody",
    "DEFAULT_MAX_REDIRECTS",
    "Fail",
    "Follow",
    "HTTPXTransport",
    "Headers",
    "InvalidRedirectTarget",
    "MockTransport",
    "REDIRECT_STATUS_CODES",
    "RedirectClient",
    "RedirectConfig",
    "RedirectDecision",
    "RedirectError",
    "RedirectLoop",
    "RedirectState",
    "Request",
    "RequestError",
    "Response",
    "Stop",
    "StreamConsumed",
    "StreamError",
    "StreamingBody",
    "TooManyRedirects",
    "TransportError",
    "USE_CLIENT_DEFAULT",
    "evaluate",
    "execute",
    "follow_redirects",
]
