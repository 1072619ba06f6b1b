"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock

import httpx

# Set test environment variables before rocketcart modules read them
os.environ.setdefault("CART_LANGUAGE", "en")
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("INVENTORY_API_URL", "http://inventory.test")
os.environ.setdefault("INVENTORY_MAX_ATTEMPTS", "2")

from rocketcart.cart import CartEngine, MemoryStorage
from rocketcart.db import StorageKeys
from rocketcart.services.inventory import InventoryClient
from rocketcart.services.models import Product, StockRecord


class RecordingSink:
    """Notification sink that remembers every message."""

    def __init__(self):
        self.messages = []

    def report_error(self, message: str) -> None:
        self.messages.append(message)


def _not_found(path: str) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", f"http://inventory.test{path}")
    response = httpx.Response(404, request=request)
    return httpx.HTTPStatusError("Not Found", request=request, response=response)


@pytest.fixture
def products():
    """Products known to the fake inventory service"""
    return {
        3: {"id": 3, "title": "Tênis de Caminhada Leve Confortável", "price": 179.9, "image": "https://img.test/3.jpg"},
        5: {"id": 5, "title": "Tênis VR Caminhada Confortável", "price": 139.9, "image": "https://img.test/5.jpg"},
        7: {"id": 7, "title": "Tênis Adidas Duramo Lite 2.0", "price": 219.9, "image": "https://img.test/7.jpg"},
    }


@pytest.fixture
def stock():
    """Available amount per product id; tests mutate it freely"""
    return {3: 10, 5: 5, 7: 3}


@pytest.fixture
def inventory(products, stock):
    """InventoryClient double backed by the products and stock fixtures"""
    client = AsyncMock(spec=InventoryClient)

    async def get_product(product_id):
        if product_id not in products:
            raise _not_found(f"/products/{product_id}")
        return Product.model_validate(products[product_id])

    async def get_stock(product_id):
        if product_id not in stock:
            raise _not_found(f"/stock/{product_id}")
        return StockRecord(id=product_id, amount=stock[product_id])

    client.get_product.side_effect = get_product
    client.get_stock.side_effect = get_stock
    return client


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def engine(storage, inventory, sink):
    """Engine over an empty cart"""
    return CartEngine(storage=storage, inventory=inventory, notifier=sink, lang="en")


@pytest.fixture
def storage_key():
    return StorageKeys.CART
