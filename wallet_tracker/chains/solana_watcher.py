from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from loguru import logger

from wallet_tracker.chains.solana_ledger import LogEvent, SolanaLedger
from wallet_tracker.config import AppSettings
from wallet_tracker.notify.telegram import TelegramNotifier, format_message
from wallet_tracker.parsing.mints import MintResolver
from wallet_tracker.parsing.parser import TransactionParser
from wallet_tracker.parsing.results import ParseResult
from wallet_tracker.programs import identify_dex


class Ledger(Protocol):
    def subscribe_logs(self, address: str) -> AsyncIterator[LogEvent]: ...

    async def fetch_parsed_account(self, address: str) -> dict[str, Any] | None: ...

    async def fetch_parsed_transactions(
        self, signatures: list[str]
    ) -> list[dict[str, Any] | None]: ...


class Notifier(Protocol):
    async def send(self, text: str) -> bool: ...


@dataclass
class SolanaWatcher:
    ledger: Ledger
    parser: TransactionParser
    notifier: Notifier
    wallets: tuple[str, ...]
    reconnect_delay_sec: float = 2.0
    _inflight: set[asyncio.Task] = field(default_factory=set, repr=False)

    @classmethod
    def create(cls, settings: AppSettings, wallets: tuple[str, ...]) -> SolanaWatcher:
        ledger = SolanaLedger.create(settings)
        return cls(
            ledger=ledger,
            parser=TransactionParser(mints=MintResolver(ledger)),
            notifier=TelegramNotifier.create(settings),
            wallets=wallets,
            reconnect_delay_sec=settings.reconnect_delay_sec,
        )

    async def run(self):
        if not self.wallets:
            logger.warning("No Solana wallets configured to follow.")
            return
        await asyncio.gather(*(self.watch_wallet(w) for w in self.wallets))

    async def watch_wallet(self, wallet: str, max_sessions: int | None = None):
        """Keep a logs subscription open for ``wallet``, reconnecting when it drops.

        Each event is handled in its own task so a slow fetch does not hold up
        the subscription.
        """
        sessions = 0
        while max_sessions is None or sessions < max_sessions:
            sessions += 1
            try:
                async for event in self.ledger.subscribe_logs(wallet):
                    task = asyncio.create_task(self.handle_event(wallet, event))
                    self._inflight.add(task)
                    task.add_done_callback(self._inflight.discard)
                logger.warning("Logs subscription for {} closed", wallet)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception("Solana subscription error for {}: {}", wallet, e)
            await asyncio.sleep(self.reconnect_delay_sec)

    async def drain(self):
        if self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def handle_event(self, wallet: str, event: LogEvent) -> ParseResult | None:
        try:
            label = identify_dex(event.logs)
            if not label.matched:
                return None

            details = await self.ledger.fetch_parsed_transactions([event.signature])
            result = await self.parser.parse(details, label)
            if result.swap is None:
                logger.debug(
                    "Dropped {} for {} ({}): {}",
                    event.signature,
                    wallet,
                    result.kind.value if result.kind else result.status.value,
                    result.reason,
                )
                return result

            record = result.swap.as_dict()
            logger.info("New transaction: {}", record)
            await self.notifier.send(format_message(record))
            return result
        except Exception as e:
            logger.exception("Error processing transaction {}: {}", event.signature, e)
            return None
