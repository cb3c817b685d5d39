# =============================================================================
# TELEWIND - NOTIFICATIONS
# =============================================================================
#
# Outbound alerts (Telegram) and the subscriber table they are sent to.
#
# =============================================================================

from .subscriptions import Subscription, SubscriptionStore
from .telegram import TelegramNotifier, send_message, format_wind_alert

__all__ = [
    "Subscription",
    "SubscriptionStore",
    "TelegramNotifier",
    "send_message",
    "format_wind_alert",
]
