"""Tests for request/response value types and body variants."""

import os

import pytest

from redirectx import (
    BufferedBody,
    RedirectConfig,
    Request,
    Response,
    StreamConsumed,
    StreamingBody,
)
from redirectx._streams import coerce_body


class TestRequest:
    """Test the Request value type."""

    def test_method_upper_cased(self):
        """Methods are normalized to upper case."""
        assert Request("post", "http://a/").method == "POST"

    def test_relative_url_rejected(self):
        """Requests need an absolute URL."""
        with pytest.raises(ValueError):
            Request("GET", "/relative")

    def test_buffered_content_length(self):
        """A buffered body gets a Content-Length header."""
        request = Request("POST", "http://a/", content=b"payload")
        assert isinstance(request.body, BufferedBody)
        assert request.headers["content-length"] == "7"
        assert request.is_replayable

    def test_no_body(self):
        """Empty content means no body at all."""
        request = Request("POST", "http://a/", content=b"")
        assert request.body is None
        assert request.content == b""
        assert "content-length" not in request.headers

    def test_streaming_content(self):
        """Iterators become single-use streaming bodies."""
        request = Request("POST", "http://a/", content=iter([b"x"]))
        assert isinstance(request.body, StreamingBody)
        assert not request.is_replayable
        with pytest.raises(TypeError):
            request.content

    def test_headers_are_copies(self):
        """Changing the returned headers does not change the request."""
        request = Request("GET", "http://a/", headers={"X-One": "1"})
        headers = request.headers
        headers["X-Two"] = "2"
        assert "x-two" not in request.headers

    def test_case_insensitive_headers(self):
        """Header names compare case-insensitively."""
        request = Request("GET", "http://a/", headers={"Authorization": "t"})
        assert request.headers["AUTHORIZATION"] == "t"

    def test_copy_with(self):
        """copy_with derives a new request and leaves the original alone."""
        request = Request("POST", "http://a/x", content=b"data")
        copy = request.copy_with(method="get", url="http://b/y", drop_body=True)
        assert copy.method == "GET"
        assert copy.url == "http://b/y"
        assert copy.body is None
        assert request.method == "POST"
        assert request.content == b"data"

    def test_immutable(self):
        """Attributes cannot be reassigned."""
        request = Request("GET", "http://a/")
        with pytest.raises(AttributeError):
            request.method = "POST"

    def test_equality(self):
        """Requests with the same fields compare equal."""
        assert Request("GET", "http://a/", content=b"x") == Request(
            "GET", "http://a/", content=b"x"
        )
        assert Request("GET", "http://a/") != Request("GET", "http://b/")


class TestResponse:
    """Test the Response value type."""

    def test_is_redirect(self):
        """Only redirect statuses with a Location count as redirects."""
        assert Response(302, headers={"Location": "/y"}).is_redirect
        assert not Response(302).is_redirect
        assert not Response(300, headers={"Location": "/y"}).is_redirect

    def test_location(self):
        """The Location header is exposed directly."""
        assert Response(301, headers={"location": "/y"}).location == "/y"
        assert Response(200).location is None

    def test_request_not_set(self):
        """Accessing an unset request is an error."""
        with pytest.raises(RuntimeError):
            Response(200).request

    def test_text_and_reason(self):
        """Text decoding and reason phrase helpers."""
        response = Response(404, content="missing")
        assert response.text == "missing"
        assert response.reason_phrase == "Not Found"
        assert repr(response) == "<Response [404 Not Found]>"


class TestBodies:
    """Test buffered and streaming bodies."""

    def test_buffered_replay(self):
        """Buffered bodies can be read many times."""
        body = BufferedBody(b"abc")
        assert list(body) == [b"abc"]
        assert list(body) == [b"abc"]
        assert body.read() == b"abc"
        assert len(body) == 3

    @pytest.mark.asyncio
    async def test_buffered_async(self):
        """Buffered bodies support async reads."""
        body = BufferedBody("abc")
        assert [chunk async for chunk in body] == [b"abc"]
        assert await body.aread() == b"abc"

    def test_streaming_single_use(self):
        """A streaming body refuses a second iteration."""
        body = StreamingBody(iter([b"a", "b"]))
        assert not body.consumed
        assert list(body) == [b"a", b"b"]
        assert body.consumed
        with pytest.raises(StreamConsumed):
            list(body)

    @pytest.mark.asyncio
    async def test_streaming_async_source(self):
        """Async iterables are read with aread."""

        async def chunks():
            yield b"a"
            yield b"b"

        body = StreamingBody(chunks())
        assert body.is_async
        assert await body.aread() == b"ab"
        with pytest.raises(StreamConsumed):
            await body.aread()

    @pytest.mark.asyncio
    async def test_streaming_sync_source_async_read(self):
        """Sync iterables can also be read asynchronously."""
        body = StreamingBody(iter([b"a", b"b"]))
        assert await body.aread() == b"ab"

    def test_async_source_not_sync_iterable(self):
        """An async source cannot be iterated synchronously."""

        async def chunks():
            yield b"a"

        body = StreamingBody(chunks())
        with pytest.raises(TypeError):
            list(body)

    def test_coerce_body(self):
        """User content maps to the right body variant."""
        assert coerce_body(None) is None
        assert coerce_body(b"") is None
        assert isinstance(coerce_body("text"), BufferedBody)
        assert isinstance(coerce_body(bytearray(b"x")), BufferedBody)
        assert isinstance(coerce_body(iter([b"x"])), StreamingBody)
        body = BufferedBody(b"x")
        assert coerce_body(body) is body
        with pytest.raises(TypeError):
            coerce_body(42)


class TestRedirectConfig:
    """Test configuration validation and loading."""

    def test_defaults(self):
        """Defaults follow the common client conventions."""
        config = RedirectConfig()
        assert config.max_redirects == 10
        assert config.cross_origin_header_stripping is True
        assert config.relaxed_method_rewrite is True
        assert config.credential_scope == "authority"
        assert config.buffer_request_body is False

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            ({"max_redirects": -1}, ValueError),
            ({"max_redirects": "3"}, TypeError),
            ({"max_redirects": True}, TypeError),
            ({"credential_scope": "path"}, ValueError),
        ],
    )
    def test_validation(self, kwargs, error):
        """Invalid values are rejected at construction."""
        with pytest.raises(error):
            RedirectConfig(**kwargs)

    def test_replace(self):
        """replace returns a changed copy."""
        config = RedirectConfig()
        changed = config.replace(max_redirects=0)
        assert changed.max_redirects == 0
        assert config.max_redirects == 10

    def test_from_env(self):
        """Environment variables override defaults."""
        config = RedirectConfig.from_env(
            {
                "REDIRECTX_MAX_REDIRECTS": "4",
                "REDIRECTX_STRIP_CROSS_ORIGIN": "off",
                "REDIRECTX_RELAXED_METHOD_REWRITE": "false",
                "REDIRECTX_CREDENTIAL_SCOPE": "Origin",
                "REDIRECTX_BUFFER_REQUEST_BODY": "yes",
            }
        )
        assert config == RedirectConfig(
            max_redirects=4,
            cross_origin_header_stripping=False,
            relaxed_method_rewrite=False,
            credential_scope="origin",
            buffer_request_body=True,
        )

    def test_from_env_empty(self):
        """No variables means the defaults."""
        assert RedirectConfig.from_env({}) == RedirectConfig()

    def test_from_process_env(self, monkeypatch):
        """Without a mapping the process environment is read."""
        monkeypatch.setenv("REDIRECTX_MAX_REDIRECTS", "2")
        assert "REDIRECTX_MAX_REDIRECTS" in os.environ
        assert RedirectConfig.from_env().max_redirects == 2

    @pytest.mark.parametrize(
        "env",
        [
            {"REDIRECTX_MAX_REDIRECTS": "many"},
            {"REDIRECTX_STRIP_CROSS_ORIGIN": "maybe"},
        ],
    )
    def test_from_env_invalid(self, env):
        """Malformed values raise ValueError."""
        with pytest.raises(ValueError):
            RedirectConfig.from_env(env)
