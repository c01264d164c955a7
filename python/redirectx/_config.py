# Redirect policy configuration

import dataclasses
import os
import typing
from dataclasses import dataclass

from ._urls import CREDENTIAL_SCOPES

# The default limit on the number of redirects to follow.
DEFAULT_MAX_REDIRECTS = 10

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class RedirectConfig:
    """Options controlling how redirects are followed.

    Attributes:
        max_redirects: Maximum number of redirects followed per call. 0 means
            the first response is always returned as-is.
        cross_origin_header_stripping: Remove credential-bearing headers
            (Authorization, Cookie, ...) when a redirect leaves the
            credential scope of the previous URL.
        relaxed_method_rewrite: Rewrite POST to GET (dropping the body) on
            301/302, as most deployed clients do. When False, 301/302
            preserve the method and body.
        credential_scope: What must match for credentials to be forwarded:
            "host", "authority" (host and port) or "origin" (scheme, host
            and port).
        buffer_request_body: Read a streaming request body into memory
            before the first send so it can be replayed on 307/308.
    """

    max_redirects: int = DEFAULT_MAX_REDIRECTS
    cross_origin_header_stripping: bool = True
    relaxed_method_rewrite: bool = True
    credential_scope: str = "authority"
    buffer_request_body: bool = False

    def __post_init__(self):
        if isinstance(self.max_redirects, bool) or not isinstance(
            self.max_redirects, int
        ):
            raise TypeError(
                f"max_redirects must be an int, got {type(self.max_redirects).__name__}"
            )
        if self.max_redirects < 0:
            raise ValueError(f"max_redirects must be >= 0, got {self.max_redirects}")
        if self.credential_scope not in CREDENTIAL_SCOPES:
            raise ValueError(
                f"credential_scope must be one of {CREDENTIAL_SCOPES}, "
                f"got {self.credential_scope!r}"
            )

    def replace(self, **changes) -> "RedirectConfig":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(
        cls, environ: typing.Optional[typing.Mapping[str, str]] = None
    ) -> "RedirectConfig":
        """Build a config from ``REDIRECTX_*`` environment variables.

        Unset variables keep their defaults:

        - REDIRECTX_MAX_REDIRECTS
        - REDIRECTX_STRIP_CROSS_ORIGIN
        - REDIRECTX_RELAXED_METHOD_REWRITE
        - REDIRECTX_CREDENTIAL_SCOPE
        - REDIRECTX_BUFFER_REQUEST_BODY
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        max_redirects = environ.get("REDIRECTX_MAX_REDIRECTS")
        if max_redirects:
            try:
                kwargs["max_redirects"] = int(max_redirects)
            except ValueError:
                raise ValueError(
                    f"REDIRECTX_MAX_REDIRECTS must be an integer, got {max_redirects!r}"
                ) from None

        for var, field in (
            ("REDIRECTX_STRIP_CROSS_ORIGIN", "cross_origin_header_stripping"),
            ("REDIRECTX_RELAXED_METHOD_REWRITE", "relaxed_method_rewrite"),
            ("REDIRECTX_BUFFER_REQUEST_BODY", "buffer_request_body"),
        ):
            value = environ.get(var)
            if value:
                kwargs[field] = _parse_bool(var, value)

        scope = environ.get("REDIRECTX_CREDENTIAL_SCOPE")
        if scope:
            kwargs["credential_scope"] = scope.strip().lower()

        return cls(**kwargs)


def _parse_bool(name, value):
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")
