import pytest

from shopping_content.client import ShoppingClient

from samples import FakeTransport


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    client = ShoppingClient("7852698", transport=transport)
    client.set_token("TOKEN")
    return client
