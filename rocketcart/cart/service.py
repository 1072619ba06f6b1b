"""Cart engine: stock-gated cart mutations kept in sync with storage."""
import asyncio
import json
from typing import Optional

from rocketcart.db import StorageKeys
from rocketcart.errors import CartError, CartErrorKind, CartResult, NotificationCategory
from rocketcart.logging import get_logger, sanitize_string_for_logging
from rocketcart.services.inventory import InventoryClient
from rocketcart.services.notifications import LoggingNotificationSink, NotificationSink, notify
from rocketcart.services.stock import StockValidator
from .models import Cart, CartItem
from .repository import CartRepository
from .storage import PersistenceAdapter, get_storage

logger = get_logger(__name__)


class CartEngine:
    """
    Adds, removes and re-quantifies cart items.

    Features:
    - Every add/update is validated against live stock before anything changes
    - New state is persisted first and only then swapped into memory, so the
      stored and in-memory carts never diverge
    - Mutations are serialized per engine, so concurrent adds of the same
      product each count
    - Nothing raises to the caller: failures become one user notification
      and a CartResult carrying the structured cause
    """

    def __init__(
        self,
        storage: PersistenceAdapter,
        inventory: InventoryClient,
        notifier: NotificationSink,
        repository: Optional[CartRepository] = None,
        storage_key: Optional[str] = None,
        lang: Optional[str] = None,
    ):
        self.storage = storage
        self.inventory = inventory
        self.notifier = notifier
        self.repository = repository or CartRepository()
        self.storage_key = storage_key or StorageKeys.CART
        self.lang = lang
        self.validator = StockValidator(inventory, notifier, lang)
        self._lock = asyncio.Lock()

    @property
    def cart(self) -> Cart:
        """Current cart snapshot."""
        return self.repository.snapshot()

    async def reload(self) -> Cart:
        """Restore the live cart from storage. Missing or corrupted data yields an empty cart."""
        try:
            data = await self.storage.get(self.storage_key)
        except Exception as e:
            logger.error(f"Failed to read cart from storage: {e}")
            raise ValueError(f"Cart storage unavailable: {str(e)}") from e

        cart = Cart()
        if data:
            try:
                cart = Cart.from_list(json.loads(data))
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"Corrupted cart data under {self.storage_key}: {e}")

        self.repository.replace(cart)
        logger.info("Cart restored with %d item(s)", len(cart))
        return self.repository.snapshot()

    async def add_product(self, product_id: int) -> CartResult:
        """Add one unit of a product; an existing item is incremented via the update path."""
        async with self._lock:
            try:
                existing = self.repository.find(product_id)
                if existing:
                    return await self._update_amount(product_id, existing.amount + 1)
                return await self._add_new(product_id)
            except Exception as e:
                logger.exception("Unexpected failure adding product %s", product_id)
                return self._fail(CartErrorKind.INTERNAL, "add_product", product_id,
                                  NotificationCategory.ADD_FAILED, e)

    async def remove_product(self, product_id: int) -> CartResult:
        """Remove a product entirely. No stock check."""
        async with self._lock:
            try:
                if self.repository.find(product_id) is None:
                    return self._fail(CartErrorKind.NOT_IN_CART, "remove_product", product_id,
                                      NotificationCategory.REMOVE_FAILED)
                current = self.repository.snapshot()
                new_cart = Cart(items=[item for item in current if item.product_id != product_id])
                return await self._commit(new_cart, "remove_product", product_id,
                                          NotificationCategory.REMOVE_FAILED)
            except Exception as e:
                logger.exception("Unexpected failure removing product %s", product_id)
                return self._fail(CartErrorKind.INTERNAL, "remove_product", product_id,
                                  NotificationCategory.REMOVE_FAILED, e)

    async def update_product_amount(self, product_id: int, amount: int) -> CartResult:
        """Set a product's amount. Amounts below 1 are ignored; use remove_product instead."""
        try:
            if amount < 1:
                return CartResult.success()
            async with self._lock:
                return await self._update_amount(product_id, amount)
        except Exception as e:
            logger.exception("Unexpected failure updating product %s", product_id)
            return self._fail(CartErrorKind.INTERNAL, "update_product_amount", product_id,
                              NotificationCategory.UPDATE_FAILED, e)

    async def aclose(self) -> None:
        await self.inventory.aclose()

    # ==================== INTERNAL HELPERS ====================

    async def _add_new(self, product_id: int) -> CartResult:
        try:
            product = await self.inventory.get_product(product_id)
        except Exception as e:
            return self._fail(CartErrorKind.FETCH_FAILED, "add_product", product_id,
                              NotificationCategory.ADD_FAILED, e)
        if product.id != product_id:
            return self._fail(CartErrorKind.FETCH_FAILED, "add_product", product_id,
                              NotificationCategory.ADD_FAILED,
                              f"service returned product {product.id}")

        if not await self.validator.check_availability(product_id, 1):
            return self._out_of_stock("add_product", product_id)

        new_cart = self.repository.snapshot()
        new_cart.items.append(CartItem(product=product, amount=1))
        return await self._commit(new_cart, "add_product", product_id, NotificationCategory.ADD_FAILED)

    async def _update_amount(self, product_id: int, amount: int) -> CartResult:
        if self.repository.find(product_id) is None:
            return self._fail(CartErrorKind.NOT_IN_CART, "update_product_amount", product_id,
                              NotificationCategory.UPDATE_FAILED)

        # Rebuilding the item validates the amount before anything is stored
        current = self.repository.snapshot()
        new_cart = Cart(items=[
            CartItem(product=item.product, amount=amount) if item.product_id == product_id else item
            for item in current
        ])

        if not await self.validator.check_availability(product_id, amount):
            return self._out_of_stock("update_product_amount", product_id)

        return await self._commit(new_cart, "update_product_amount", product_id,
                                  NotificationCategory.UPDATE_FAILED)

    async def _commit(
        self,
        new_cart: Cart,
        operation: str,
        product_id: int,
        category: NotificationCategory,
    ) -> CartResult:
        """Persist, then swap into memory. A failed write leaves memory untouched."""
        try:
            await self.storage.set(self.storage_key, json.dumps(new_cart.to_list()))
        except Exception as e:
            return self._fail(CartErrorKind.PERSIST_FAILED, operation, product_id, category, e)

        self.repository.replace(new_cart)
        logger.info("%s(%s) committed, cart has %d item(s)", operation, product_id, len(new_cart))
        return CartResult.success()

    def _fail(
        self,
        kind: CartErrorKind,
        operation: str,
        product_id: int,
        category: NotificationCategory,
        cause: object = None,
    ) -> CartResult:
        detail = sanitize_string_for_logging(cause, max_length=200) if cause else ""
        error = CartError(kind=kind, operation=operation, product_id=product_id, detail=detail)
        logger.warning("Cart operation failed: %s", error)
        notify(self.notifier, category, self.lang)
        return CartResult.failure(error)

    def _out_of_stock(self, operation: str, product_id: int) -> CartResult:
        # StockValidator has already notified the user
        error = CartError(kind=CartErrorKind.OUT_OF_STOCK, operation=operation, product_id=product_id)
        logger.info("Cart operation rejected: %s", error)
        return CartResult.failure(error)


async def build_cart_engine(
    storage: Optional[PersistenceAdapter] = None,
    inventory: Optional[InventoryClient] = None,
    notifier: Optional[NotificationSink] = None,
    lang: Optional[str] = None,
) -> CartEngine:
    """Composition root: build an engine from configuration and restore the stored cart."""
    engine = CartEngine(
        storage=storage or get_storage(),
        inventory=inventory or InventoryClient(),
        notifier=notifier or LoggingNotificationSink(),
        lang=lang,
    )
    await engine.reload()
    return engine
