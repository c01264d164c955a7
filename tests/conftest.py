"""Pytest configuration for redirectx tests."""

import pytest

from redirectx import MockTransport, Response


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture
def route_transport():
    """Build a MockTransport from a ``{url: (status, location)}`` table.

    ``location`` may be None for a plain response. URLs missing from the
    table answer 404.
    """

    def make(routes):
        def handler(request):
            status, location = routes.get(str(request.url), (404, None))
            headers = {"Location": location} if location is not None else {}
            return Response(status, headers=headers, content=f"{status}".encode())

        return MockTransport(handler)

    return make
