"""Tests for inventory Pydantic models"""
import pytest
from decimal import Decimal
from pydantic import ValidationError

from rocketcart.services.models import Product, StockRecord


def test_product_model(products):
    """Test Product model creation"""
    product = Product.model_validate(products[7])

    assert product.id == 7
    assert product.price == Decimal("219.9")
    assert product.image == "https://img.test/7.jpg"


def test_product_keeps_unknown_fields():
    product = Product.model_validate({"id": 1, "title": "Shoe", "price": 10, "color": "red"})

    assert product.to_dict()["color"] == "red"


def test_product_is_immutable():
    product = Product(id=1, title="Shoe", price=10)

    with pytest.raises(ValidationError):
        product.price = 5


@pytest.mark.parametrize("data", [
    {"title": "no id", "price": 1},
    {"id": 1, "price": 1},
    {"id": 1, "title": "bad price", "price": "abc"},
])
def test_product_rejects_malformed(data):
    with pytest.raises(ValidationError):
        Product.model_validate(data)


def test_stock_record():
    stock = StockRecord.model_validate({"id": 3, "amount": 4, "warehouse": "SP"})

    assert stock.amount == 4


@pytest.mark.parametrize("data", [{}, {"amount": -1}, {"amount": "many"}])
def test_stock_record_rejects_malformed(data):
    with pytest.raises(ValidationError):
        StockRecord.model_validate(data)
