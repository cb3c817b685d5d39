#!/usr/bin/env python3
"""
Telegram Bot - subscription commands.

Polls getUpdates in a daemon thread and maintains the subscriber table.

COMMANDS (private chats only):
    /subscribe    - receive wind alerts
    /unsubscribe  - stop receiving wind alerts
    /start, /help - show help

USAGE:
    from shared.telegram_bot import TelegramCommandListener

    listener = TelegramCommandListener(token, store)
    listener.start()
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Optional

import requests

from notifications.subscriptions import SubscriptionStore
from notifications.telegram import api_url, send_message

logger = logging.getLogger("telegram")

HELP_TEXT = (
    "TELEWIND\n"
    "---\n"
    "/subscribe - Get notified when sustained wind starts\n"
    "/unsubscribe - Stop notifications\n"
    "/help - Show this help"
)

BOT_COMMANDS = [
    {"command": "subscribe", "description": "Get wind notifications"},
    {"command": "unsubscribe", "description": "Stop wind notifications"},
    {"command": "help", "description": "Show help"},
]

LONG_POLL_TIMEOUT = 30
MAX_BACKOFF = 30.0


class TelegramCommandListener:
    """Background poller handling subscription commands."""

    def __init__(self, token: str, subscriptions: SubscriptionStore):
        self.token = token
        self.subscriptions = subscriptions
        self.last_update_id = 0

        self._active = False
        self._thread: Optional[threading.Thread] = None

    # =========================================================================
    # COMMAND HANDLING
    # =========================================================================

    def handle_command(self, command: str, chat_id: int) -> Optional[str]:
        """
        Apply a command for a private chat.

        Returns:
            Reply text, or None if the message is not a known command
        """
        raw = (command or "").strip()
        first = (raw.split() or [""])[0]
        cmd = first.lower().split("@")[0]

        if cmd == "/subscribe":
            logger.info(f"Subscribing {chat_id}")
            self.subscriptions.add(chat_id)
            return "You are subscribed successfully!"

        if cmd == "/unsubscribe":
            logger.info(f"Unsubscribing {chat_id}")
            self.subscriptions.remove(chat_id)
            return "You are unsubscribed"

        if cmd in ("/start", "/help"):
            return HELP_TEXT

        return None

    def handle_update(self, update: dict) -> None:
        """Process one getUpdates entry."""
        self.last_update_id = max(self.last_update_id, update.get("update_id", 0))
        logger.debug(f"{update}")

        message = update.get("message") or {}
        chat = message.get("chat") or {}
        if chat.get("type") != "private":
            return

        text = (message.get("text") or "").strip()
        if not text.startswith("/"):
            return

        chat_id = chat["id"]
        reply = self.handle_command(text, chat_id)
        if reply is not None:
            send_message(self.token, chat_id, reply)

    # =========================================================================
    # POLLING
    # =========================================================================

    def poll_once(self) -> int:
        """
        Fetch and handle one batch of updates.

        Returns:
            Number of updates handled

        Raises:
            requests.RequestException: On network failure or bad status
        """
        params = {"offset": self.last_update_id + 1, "timeout": LONG_POLL_TIMEOUT}
        resp = requests.get(
            api_url(self.token, "getUpdates"),
            params=params,
            timeout=LONG_POLL_TIMEOUT + 5,
        )
        resp.raise_for_status()

        updates = resp.json().get("result", [])
        for update in updates:
            self.handle_update(update)
        return len(updates)

    def _poll_loop(self) -> None:
        backoff = 1.0

        while self._active:
            try:
                self.poll_once()
                backoff = 1.0

            except requests.HTTPError as e:
                if e.response is not None and e.response.status_code == 409:
                    logger.warning("409 Conflict - another poller active")
                    time.sleep(60)
                else:
                    logger.warning(f"getUpdates failed: {e}")
                    time.sleep(backoff)
                    backoff = min(backoff * 2, MAX_BACKOFF)

            except Exception as e:
                logger.warning(f"polling error: {type(e).__name__}: {e}")
                time.sleep(backoff)
                backoff = min(backoff * 2, MAX_BACKOFF)

    def register_commands(self) -> bool:
        """Register bot commands with Telegram for autocomplete."""
        try:
            resp = requests.post(
                api_url(self.token, "setMyCommands"),
                data={"commands": json.dumps(BOT_COMMANDS)},
                timeout=10,
            )
            if resp.status_code == 200:
                logger.info("Bot commands registered")
                return True
            logger.warning(f"setMyCommands failed: {resp.status_code}")
        except requests.RequestException as e:
            logger.warning(f"Failed to register commands: {e}")
        return False

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def start(self) -> bool:
        """Start the listener thread. Returns True if it is running."""
        if not self.token:
            logger.warning("TELEGRAM_BOT_TOKEN missing")
            return False

        if self._thread and self._thread.is_alive():
            return True

        self.register_commands()

        self._active = True
        self._thread = threading.Thread(
            target=self._poll_loop,
            name="subscription loop",
            daemon=True,
        )
        self._thread.start()

        logger.info("Telegram listener started")
        return True

    def stop(self, timeout: float = 5.0) -> bool:
        """
        Ask the listener thread to exit and wait for it.

        The thread may be blocked in a getUpdates long poll, so the wait
        is bounded.

        Returns:
            True if no listener thread is running anymore
        """
        self._active = False

        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True

        thread.join(timeout)
        if thread.is_alive():
            logger.warning(f"Telegram listener still busy after {timeout:.0f}s")
            return False

        logger.info("Telegram listener stopped")
        return True
