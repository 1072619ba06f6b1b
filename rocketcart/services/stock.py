"""Stock Validator - answers whether a requested quantity can be bought."""
import httpx
from pydantic import ValidationError

from rocketcart.errors import NotificationCategory
from rocketcart.logging import get_logger
from rocketcart.services.inventory import InventoryClient
from rocketcart.services.notifications import NotificationSink, notify

logger = get_logger(__name__)


class StockValidator:
    """
    Checks requested amounts against live inventory.

    Every call hits the inventory service; nothing is cached. Retrieval
    failures are indistinguishable from genuine unavailability for the
    caller: both return False and emit exactly one "out of stock"
    notification.
    """

    def __init__(self, inventory: InventoryClient, notifier: NotificationSink, lang: str | None = None):
        self.inventory = inventory
        self.notifier = notifier
        self.lang = lang

    async def check_availability(self, product_id: int, requested_amount: int) -> bool:
        try:
            stock = await self.inventory.get_stock(product_id)
        except httpx.HTTPStatusError as e:
            logger.warning("Stock lookup for product %s returned %s", product_id, e.response.status_code)
            return self._unavailable()
        except httpx.RequestError as e:
            logger.warning("Stock lookup for product %s failed: %s", product_id, e)
            return self._unavailable()
        except (ValidationError, ValueError) as e:
            logger.warning("Malformed stock record for product %s: %s", product_id, e)
            return self._unavailable()
        except Exception:
            logger.exception("Stock lookup for product %s failed unexpectedly", product_id)
            return self._unavailable()

        if requested_amount > stock.amount:
            logger.info(
                "Product %s out of stock: requested %s, available %s",
                product_id, requested_amount, stock.amount,
            )
            return self._unavailable()
        return True

    def _unavailable(self) -> bool:
        notify(self.notifier, NotificationCategory.OUT_OF_STOCK, self.lang)
        return False
