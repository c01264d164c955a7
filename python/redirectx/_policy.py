# Redirect policy: decides whether and how to follow a single response
#
# Everything here is pure: no I/O and no logging, so each decision can be
# checked with hand-built requests and responses.

from dataclasses import dataclass

import httpx

from ._config import RedirectConfig
from ._exceptions import BodyNotReplayable, InvalidRedirectTarget, RedirectError
from ._models import REDIRECT_STATUS_CODES, Request, Response
from ._streams import StreamingBody
from ._urls import resolve_location, same_credential_scope

# Headers describing the size or framing of the body.
BODY_FRAMING_HEADERS = ("Content-Length", "Transfer-Encoding", "Content-Type")

# Headers never forwarded outside the previous URL's credential scope.
CREDENTIAL_HEADERS = (
    "Authorization",
    "Proxy-Authorization",
    "Cookie",
    "Cookie2",
    "WWW-Authenticate",
)

_DEFAULT_CONFIG = RedirectConfig()


@dataclass(frozen=True)
class Follow:
    """Send ``request`` next."""

    request: Request


@dataclass(frozen=True)
class Stop:
    """``response`` is the terminal response."""

    response: Response


@dataclass(frozen=True)
class Fail:
    """Following the redirect is impossible; raise ``error``."""

    error: RedirectError


# RedirectDecision is one of Follow, Stop or Fail.
RedirectDecision = (Follow, Stop, Fail)


def evaluate(original_method, prior_request, response, config=None):
    """Decide what to do with ``response`` to ``prior_request``.

    Args:
        original_method: Method of the request that started the chain.
        prior_request: The request that produced ``response``.
        response: The response just received.
        config: A RedirectConfig; defaults apply when omitted.

    Returns:
        Follow(next_request), Stop(response) or Fail(error).
    """
    if config is None:
        config = _DEFAULT_CONFIG

    if response.status_code not in REDIRECT_STATUS_CODES:
        return Stop(response)
    location = response.headers.get("location")
    if location is None:
        return Stop(response)

    try:
        next_url = resolve_location(prior_request.url, location)
    except InvalidRedirectTarget as exc:
        error = InvalidRedirectTarget(
            exc.location, request=prior_request, response=response
        )
        error.__cause__ = exc.__cause__
        return Fail(error)

    method, drop_body = redirect_method(
        response.status_code, original_method, prior_request.method, config
    )

    body = None if drop_body else prior_request.body
    if isinstance(body, StreamingBody) and body.consumed:
        return Fail(BodyNotReplayable(request=prior_request, response=response))

    headers = redirect_headers(prior_request, next_url, body, config)
    next_request = prior_request.copy_with(
        method=method, url=next_url, headers=headers, drop_body=body is None
    )
    return Follow(next_request)


def redirect_method(status_code, original_method, prior_method, config=None):
    """Return ``(method, drop_body)`` for the request following a redirect.

    303 always becomes a body-less GET. 301 and 302 turn an original POST
    into a body-less GET under ``relaxed_method_rewrite``. Everything else,
    307 and 308 included, keeps the method and body.
    """
    if config is None:
        config = _DEFAULT_CONFIG

    if status_code == httpx.codes.SEE_OTHER:
        return "GET", True
    if (
        status_code in (httpx.codes.MOVED_PERMANENTLY, httpx.codes.FOUND)
        and config.relaxed_method_rewrite
        and original_method.upper() == "POST"
    ):
        return "GET", True
    return prior_method, False


def redirect_headers(prior_request, next_url, body, config=None):
    """Build the header mapping for the request following a redirect.

    ``Host`` is always dropped so the transport sets it for the new URL.
    Body framing headers are removed when there is no body and
    Content-Length is recomputed for a buffered one. Credential headers are
    removed when ``next_url`` leaves the previous URL's credential scope.
    """
    if config is None:
        config = _DEFAULT_CONFIG

    headers = prior_request.headers
    headers.pop("Host", None)

    if body is None:
        for name in BODY_FRAMING_HEADERS:
            headers.pop(name, None)
    elif not isinstance(body, StreamingBody):
        headers.pop("Transfer-Encoding", None)
        headers["Content-Length"] = str(len(body))

    if config.cross_origin_header_stripping and not same_credential_scope(
        prior_request.url, next_url, config.credential_scope
    ):
        for name in CREDENTIAL_HEADERS:
            headers.pop(name, None)

    return headers
