"""
Cart Error Taxonomy

Structured failure kinds kept for logging and tests, plus the four
user-facing notification messages. Message text lives here to avoid
string duplication across the engine and the stock validator.
"""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Notification messages (en)
ERROR_ADD_FAILED = "Failed to add product"
ERROR_REMOVE_FAILED = "Failed to remove product"
ERROR_UPDATE_FAILED = "Failed to change product amount"
ERROR_OUT_OF_STOCK = "Requested amount is out of stock"

# Notification messages (pt-BR)
ERROR_ADD_FAILED_PT = "Erro na adição do produto"
ERROR_REMOVE_FAILED_PT = "Erro na remoção do produto"
ERROR_UPDATE_FAILED_PT = "Erro na alteração de quantidade do produto"
ERROR_OUT_OF_STOCK_PT = "Quantidade solicitada fora de estoque"

DEFAULT_LANGUAGE = os.environ.get("CART_LANGUAGE", "pt")


class CartErrorKind(str, Enum):
    """Why a cart operation was aborted."""
    NOT_IN_CART = "not_in_cart"
    OUT_OF_STOCK = "out_of_stock"
    FETCH_FAILED = "fetch_failed"
    PERSIST_FAILED = "persist_failed"
    INTERNAL = "internal"


class NotificationCategory(str, Enum):
    """The only messages ever shown to the user."""
    ADD_FAILED = "add_failed"
    REMOVE_FAILED = "remove_failed"
    UPDATE_FAILED = "update_failed"
    OUT_OF_STOCK = "out_of_stock"


_MESSAGES = {
    NotificationCategory.ADD_FAILED: (ERROR_ADD_FAILED_PT, ERROR_ADD_FAILED),
    NotificationCategory.REMOVE_FAILED: (ERROR_REMOVE_FAILED_PT, ERROR_REMOVE_FAILED),
    NotificationCategory.UPDATE_FAILED: (ERROR_UPDATE_FAILED_PT, ERROR_UPDATE_FAILED),
    NotificationCategory.OUT_OF_STOCK: (ERROR_OUT_OF_STOCK_PT, ERROR_OUT_OF_STOCK),
}


def _msg(lang: str, pt: str, en: str) -> str:
    """Return message in user's language."""
    return pt if lang.split("-")[0].lower() == "pt" else en


def message_for(category: NotificationCategory, lang: Optional[str] = None) -> str:
    """Return the notification text for a category."""
    pt, en = _MESSAGES[category]
    return _msg(lang or DEFAULT_LANGUAGE, pt, en)


@dataclass(frozen=True)
class CartError:
    """A failed cart operation with its retained cause."""
    kind: CartErrorKind
    operation: str
    product_id: int
    detail: str = ""

    def __str__(self) -> str:
        suffix = f": {self.detail}" if self.detail else ""
        return f"{self.operation}({self.product_id}) {self.kind.value}{suffix}"


@dataclass(frozen=True)
class CartResult:
    """Outcome of an engine operation. Callers are free to ignore it."""
    ok: bool
    error: Optional[CartError] = None

    @classmethod
    def success(cls) -> "CartResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: CartError) -> "CartResult":
        return cls(ok=False, error=error)
