# Request body variants: absent (None), buffered, or streaming

import inspect

from ._exceptions import StreamConsumed


class BufferedBody:
    """A finite request body held in memory.

    Can be iterated and read any number of times, so it is safe to resend
    when a redirect preserves the request body.
    """

    replayable = True

    def __init__(self, data=b""):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data = bytes(data)

    def __len__(self):
        return len(self._data)

    def __bytes__(self):
        return self._data

    def __eq__(self, other):
        if isinstance(other, BufferedBody):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == bytes(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._data)

    def __iter__(self):
        if self._data:
            yield self._data

    async def __aiter__(self):
        if self._data:
            yield self._data

    def read(self):
        """Read all bytes."""
        return self._data

    async def aread(self):
        """Read all bytes."""
        return self._data

    def __repr__(self):
        return f"<BufferedBody [{len(self._data)} bytes]>"


class StreamingBody:
    """A single-consumption request body backed by an iterator.

    Accepts a sync or async iterable of byte chunks. Once iteration has
    started the body counts as consumed: a second iteration raises
    StreamConsumed, and redirect following refuses to resend it.
    """

    replayable = False

    def __init__(self, iterable):
        self._iterable = iterable
        self._consumed = False

    @property
    def consumed(self):
        return self._consumed

    @property
    def is_async(self):
        return hasattr(self._iterable, "__aiter__")

    def _mark_consumed(self):
        if self._consumed:
            raise StreamConsumed()
        self._consumed = True

    def __iter__(self):
        if self.is_async:
            raise TypeError("Cannot iterate an async streaming body synchronously")
        self._mark_consumed()
        for chunk in self._iterable:
            yield _to_bytes(chunk)

    async def __aiter__(self):
        self._mark_consumed()
        if self.is_async:
            async for chunk in self._iterable:
                yield _to_bytes(chunk)
        else:
            for chunk in self._iterable:
                yield _to_bytes(chunk)

    async def aread(self):
        """Read all remaining bytes, consuming the stream."""
        chunks = []
        async for chunk in self:
            chunks.append(chunk)
        return b"".join(chunks)

    async def aclose(self):
        """Close the underlying iterator if it supports closing."""
        closer = getattr(self._iterable, "aclose", None) or getattr(
            self._iterable, "close", None
        )
        if closer is None:
            return
        result = closer()
        if inspect.isawaitable(result):
            await result

    def __repr__(self):
        state = "consumed" if self._consumed else "unread"
        return f"<StreamingBody [{state}]>"


def _to_bytes(chunk):
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


def coerce_body(content):
    """Turn user-supplied content into one of the body variants.

    ``None`` and empty content mean no body. ``bytes``/``str`` become a
    BufferedBody; iterators, generators and async iterables become a
    StreamingBody. Existing body objects pass through unchanged.
    """
    if content is None or isinstance(content, (BufferedBody, StreamingBody)):
        return content
    if isinstance(content, (bytes, bytearray, memoryview, str)):
        if not content:
            return None
        return BufferedBody(content)
    if hasattr(content, "__aiter__") or hasattr(content, "__iter__"):
        return StreamingBody(content)
    raise TypeError(
        f"Unsupported request content type: {type(content).__name__}. "
        "Expected bytes, str, or an iterable of bytes."
    )
