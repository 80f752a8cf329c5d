import pytest

from gapi_client import Transport, discover


class FakeTransport(Transport):
    """Records dispatched requests instead of sending them."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def dispatch(self, request, options):
        self.calls.append((request, options))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return FakeTransport(response={"kind": "ok"})


@pytest.fixture
def service_factory(transport):
    services = []

    def factory(name, version=None, options=None):
        service = discover(name, version, options, transport=transport)
        services.append(service)
        return service

    yield factory
    for service in services:
        service.close()
