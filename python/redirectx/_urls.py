# URL resolution and comparison helpers for redirect handling

import typing

import httpx

from ._exceptions import InvalidRedirectTarget

DEFAULT_PORTS = {"http": 80, "https": 443}

SUPPORTED_SCHEMES = ("http", "https")

# How much of two URLs must match for credentials to be forwarded.
CREDENTIAL_SCOPES = ("host", "authority", "origin")


def resolve_location(base_url: httpx.URL, location: str) -> httpx.URL:
    """Resolve a Location header value against the URL that produced it.

    Handles absolute, scheme-relative (``//host/path``), absolute-path and
    relative-path references per RFC 3986. When the reference carries no
    fragment, the base URL's fragment is inherited (RFC 7231 section 7.1.2).

    Raises InvalidRedirectTarget if the value cannot be parsed or does not
    resolve to an http(s) URL with a host.
    """
    location = location.strip()
    if not location:
        raise InvalidRedirectTarget(location)
    try:
        target = base_url.join(location)
    except (httpx.InvalidURL, ValueError, UnicodeError) as exc:
        raise InvalidRedirectTarget(location) from exc

    if target.scheme not in SUPPORTED_SCHEMES or not target.host:
        raise InvalidRedirectTarget(location)

    if not target.fragment and base_url.fragment:
        target = target.copy_with(fragment=base_url.fragment)
    return target


def effective_port(url: httpx.URL) -> typing.Optional[int]:
    """Return the explicit port, or the scheme's default port."""
    if url.port is not None:
        return url.port
    return DEFAULT_PORTS.get(url.scheme)


def normalize_url(url: httpx.URL) -> str:
    """Return the form of ``url`` used to detect redirect cycles.

    Scheme and host are lower-cased, default ports dropped, an empty path
    becomes ``/`` and the fragment is discarded (it is never sent).
    """
    scheme = url.scheme.lower()
    host = url.host.lower()
    if ":" in host:
        host = f"[{host}]"
    port = effective_port(url)
    netloc = host if port == DEFAULT_PORTS.get(scheme) else f"{host}:{port}"
    path = url.raw_path.decode("ascii") or "/"
    return f"{scheme}://{netloc}{path}"


def same_credential_scope(
    previous: httpx.URL, following: httpx.URL, scope: str = "authority"
) -> bool:
    """Check whether credentials sent to ``previous`` may go to ``following``.

    ``host`` compares hosts only, ``authority`` also compares the effective
    port, and ``origin`` compares scheme, host and effective port.
    """
    if scope not in CREDENTIAL_SCOPES:
        raise ValueError(
            f"Unknown credential scope {scope!r}; expected one of {CREDENTIAL_SCOPES}"
        )
    if previous.host.lower() != following.host.lower():
        return False
    if scope == "host":
        return True
    if effective_port(previous) != effective_port(following):
        return False
    if scope == "authority":
        return True
    return previous.scheme == following.scheme
