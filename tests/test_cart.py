"""
Tests for cart models and repository
"""

import pytest
from decimal import Decimal
from rocketcart.cart import CartItem, Cart, CartRepository
from rocketcart.services.models import Product


def make_product(product_id=1, price=100.0, **extra):
    return Product(id=product_id, title=f"Product {product_id}", price=price, image=None, **extra)


class TestCartItem:
    """Tests for CartItem dataclass."""

    def test_create_cart_item(self):
        """Test creating a cart item."""
        item = CartItem(product=make_product(7), amount=2)

        assert item.product_id == 7
        assert item.amount == 2

    @pytest.mark.parametrize("amount", [0, -3, 1.5, True])
    def test_rejects_invalid_amount(self, amount):
        with pytest.raises(ValueError):
            CartItem(product=make_product(), amount=amount)

    def test_total_price(self):
        item = CartItem(product=make_product(price=139.9), amount=3)

        assert item.total_price == Decimal("419.7")

    def test_to_dict_is_flat(self):
        """Product fields and amount share one level."""
        item = CartItem(product=make_product(7, price=219.9, brand="Adidas"), amount=1)

        data = item.to_dict()
        assert data == {
            "id": 7,
            "title": "Product 7",
            "price": 219.9,
            "image": None,
            "brand": "Adidas",
            "amount": 1,
        }

    def test_from_dict(self):
        data = {"id": 5, "title": "Tênis VR", "price": "139.90", "image": "5.jpg", "amount": 2}

        item = CartItem.from_dict(data)
        assert item.product_id == 5
        assert item.product.price == Decimal("139.90")
        assert item.amount == 2
        assert "amount" in data

    def test_from_dict_missing_amount(self):
        with pytest.raises(KeyError):
            CartItem.from_dict({"id": 5, "title": "x", "price": 1})

    @pytest.mark.parametrize("amount", [2.7, True, "2"])
    def test_from_dict_rejects_non_integer_amount(self, amount):
        with pytest.raises(ValueError):
            CartItem.from_dict({"id": 5, "title": "x", "price": 1, "amount": amount})


class TestCart:
    """Tests for Cart dataclass."""

    def test_create_empty_cart(self):
        cart = Cart()

        assert len(cart) == 0
        assert cart.total_items == 0
        assert cart.subtotal == 0
        assert cart.summary()["is_empty"] is True

    def test_cart_totals(self):
        cart = Cart(items=[
            CartItem(product=make_product(1, price=100.0), amount=2),
            CartItem(product=make_product(2, price=50.5), amount=1),
        ])

        assert cart.total_items == 3
        assert cart.subtotal == Decimal("250.5")
        summary = cart.summary()
        assert summary["subtotal"] == 250.5
        assert [i["product_id"] for i in summary["items"]] == [1, 2]

    def test_rejects_duplicate_products(self):
        with pytest.raises(ValueError):
            Cart(items=[
                CartItem(product=make_product(1), amount=1),
                CartItem(product=make_product(1), amount=2),
            ])

    def test_find(self):
        cart = Cart(items=[CartItem(product=make_product(4), amount=1)])

        assert cart.find(4).amount == 1
        assert cart.find(5) is None

    def test_cart_serialization(self):
        cart = Cart(items=[
            CartItem(product=make_product(2), amount=1),
            CartItem(product=make_product(1), amount=3),
        ])

        restored = Cart.from_list(cart.to_list())

        assert [(i.product_id, i.amount) for i in restored] == [(2, 1), (1, 3)]

    def test_from_list_rejects_non_list(self):
        with pytest.raises(TypeError):
            Cart.from_list({"items": []})


class TestCartRepository:
    """Tests for CartRepository."""

    def test_starts_empty(self):
        assert len(CartRepository().snapshot()) == 0

    def test_replace_and_find(self):
        repo = CartRepository()
        repo.replace(Cart(items=[CartItem(product=make_product(3), amount=2)]))

        assert repo.find(3).amount == 2
        assert repo.find(4) is None

    def test_snapshot_is_a_copy(self):
        repo = CartRepository(Cart(items=[CartItem(product=make_product(3), amount=2)]))

        snapshot = repo.snapshot()
        snapshot.items[0].amount = 10
        snapshot.items.append(CartItem(product=make_product(4), amount=1))

        assert [(i.product_id, i.amount) for i in repo.snapshot()] == [(3, 2)]

    def test_replace_does_not_alias_argument(self):
        repo = CartRepository()
        new_cart = Cart(items=[CartItem(product=make_product(3), amount=2)])

        repo.replace(new_cart)
        new_cart.items[0].amount = 7

        assert repo.find(3).amount == 2

    def test_found_item_is_a_copy(self):
        repo = CartRepository(Cart(items=[CartItem(product=make_product(3), amount=2)]))

        repo.find(3).amount = 9

        assert repo.find(3).amount == 2
