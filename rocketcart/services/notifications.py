"""
Notification Sink

The cart engine reports user-facing failures through a sink. Reporting is
fire-and-forget: a sink that fails must never break the cart operation, so
failures inside a sink are logged and dropped by `notify`.
"""
from typing import Callable, Protocol

from rocketcart.errors import NotificationCategory, message_for
from rocketcart.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class NotificationSink(Protocol):
    """Anything that can show an error message to the user."""

    def report_error(self, message: str) -> None:
        ...


class LoggingNotificationSink:
    """Sink for headless use: writes user-facing errors to the log."""

    def report_error(self, message: str) -> None:
        logger.warning("Cart notification: %s", sanitize_string_for_logging(message, max_length=200))


class CallbackNotificationSink:
    """Forwards messages to a callable, e.g. a UI toast function."""

    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def report_error(self, message: str) -> None:
        self.callback(message)


def notify(sink: NotificationSink, category: NotificationCategory, lang: str | None = None) -> None:
    """Send one category message to the sink without letting it raise."""
    message = message_for(category, lang)
    try:
        sink.report_error(message)
    except Exception:
        logger.exception("Notification sink failed for %s", category.value)
