from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import requests
from loguru import logger

from wallet_tracker.config import AppSettings

MESSAGE_LIMIT = 4096


def format_message(data: Mapping[str, Any], indent: str = "") -> str:
    """Render ``data`` as ``key: value`` lines; nested mappings are indented, None is skipped."""
    lines: list[str] = []
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            lines.append(f"{indent}{key}:")
            nested = format_message(value, indent + "  ")
            if nested:
                lines.append(nested)
        else:
            lines.append(f"{indent}{key}: {value}")
    return "\n".join(lines)


def clip(text: str, limit: int = MESSAGE_LIMIT) -> str:
    if len(text) <= limit:
        return text
    suffix = "…(clipped)"
    return text[: limit - len(suffix)] + suffix


def tracked_wallets_message(wallets: Iterable[str]) -> str:
    msg = "Tracked wallets\n"
    for i, w in enumerate(wallets, start=1):
        msg += f"{i}: {w}\n"
    return msg


@dataclass
class TelegramNotifier:
    token: str | None
    chat_id: str | None
    disabled: bool = False
    api_url: str = "https://api.telegram.org"
    timeout: float = 15

    @classmethod
    def create(cls, settings: AppSettings) -> TelegramNotifier:
        return cls(
            token=settings.telegram_bot_token,
            chat_id=settings.admin_chat_id,
            disabled=settings.disable_telegram_messages,
            api_url=settings.telegram_api_url,
        )

    @property
    def enabled(self) -> bool:
        return not self.disabled and bool(self.token and self.chat_id)

    def _post(self, text: str) -> bool:
        url = f"{self.api_url}/bot{self.token}/sendMessage"
        try:
            r = requests.post(
                url, json={"chat_id": self.chat_id, "text": clip(text)}, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("Telegram send error: {}", e)
            return False
        if not r.ok:
            logger.warning("Telegram error {}: {}", r.status_code, r.text)
            return False
        return True

    async def send(self, text: str) -> bool:
        if not self.enabled:
            return False
        # requests is blocking; keep the event loop free while it runs
        return await asyncio.to_thread(self._post, text)

    async def announce_startup(self, wallets: Iterable[str]) -> None:
        logger.info("DISABLE_TELEGRAM_MESSAGES: {}", self.disabled)
        await self.send("Wallet Tracker started.")
        await self.send("Monitoring.")
        await self.send(tracked_wallets_message(wallets))
