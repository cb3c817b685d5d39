# =============================================================================
# TELEGRAM NOTIFICATIONS
# =============================================================================
import logging
from typing import Iterable, Optional

import requests

from models.data_models import Observation

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org/bot{token}"
DEFAULT_TIMEOUT = 10
MAX_MESSAGE_LENGTH = 4096


def api_url(token: str, method: str) -> str:
    return TELEGRAM_API_BASE.format(token=token) + "/" + method


def send_message(
    token: str,
    chat_id: int,
    text: str,
    disable_notification: bool = False,
    timeout: int = DEFAULT_TIMEOUT,
) -> bool:
    if not token:
        logger.debug("Telegram: no bot token, message dropped")
        return False
    try:
        payload = {
            "chat_id": chat_id,
            "text": text[:MAX_MESSAGE_LENGTH],
            "disable_web_page_preview": True,
            "disable_notification": disable_notification,
        }
        resp = requests.post(api_url(token, "sendMessage"), json=payload, timeout=timeout)
        if resp.ok:
            logger.debug(f"Telegram: message sent to {chat_id}")
            return True
        else:
            logger.warning(f"Telegram API error for {chat_id}: {resp.status_code} {resp.text[:100]}")
            return False
    except requests.exceptions.Timeout:
        logger.warning(f"Telegram: timeout sending to {chat_id}")
        return False
    except requests.RequestException as e:
        logger.warning(f"Telegram: error sending to {chat_id}: {e}")
        return False


def format_wind_alert(observation: Observation) -> str:
    return f"Wind is growing up: {observation}"


class TelegramNotifier:
    """Delivers rising-edge alerts to every subscribed chat."""

    def __init__(self, token: Optional[str], timeout: int = DEFAULT_TIMEOUT):
        self.token = token
        self.timeout = timeout

    def notify(self, observation: Observation, chat_ids: Iterable[int]) -> int:
        """
        Send the wind alert to each chat.

        Returns:
            Number of chats the message was delivered to
        """
        chat_ids = list(chat_ids)
        logger.warning(
            f"Wind is growing up: {observation}. Sending notifications to {len(chat_ids)} users"
        )

        text = format_wind_alert(observation)
        delivered = 0
        for chat_id in chat_ids:
            if send_message(self.token, chat_id, text, timeout=self.timeout):
                delivered += 1

        if delivered < len(chat_ids):
            logger.warning(f"Delivered to {delivered}/{len(chat_ids)} users")
        return delivered
