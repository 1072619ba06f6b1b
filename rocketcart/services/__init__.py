"""Inventory-facing services: models, HTTP client, stock validation, notifications."""
from .models import Product, StockRecord
from .inventory import InventoryClient
from .notifications import (
    NotificationSink,
    LoggingNotificationSink,
    CallbackNotificationSink,
    notify,
)
from .stock import StockValidator

__all__ = [
    "Product",
    "StockRecord",
    "InventoryClient",
    "NotificationSink",
    "LoggingNotificationSink",
    "CallbackNotificationSink",
    "notify",
    "StockValidator",
]
