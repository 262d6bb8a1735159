from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

from loguru import logger
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.websocket_api import connect as ws_connect
from solders.pubkey import Pubkey
from solders.rpc.config import RpcTransactionLogsFilterMentions
from solders.signature import Signature

from wallet_tracker.config import AppSettings


@dataclass(frozen=True)
class LogEvent:
    signature: str
    logs: tuple[str, ...]


def _result_value(resp) -> Any:
    # solders responses serialize to the JSON-RPC envelope the node sent
    payload = json.loads(resp.to_json())
    return payload.get("result")


def log_event_from_message(msg) -> LogEvent | None:
    result = getattr(msg, "result", None)
    value = getattr(result, "value", None)
    if value is None or not hasattr(value, "logs"):
        # subscription acks carry a bare int result
        return None
    return LogEvent(signature=str(value.signature), logs=tuple(value.logs or ()))


@dataclass
class SolanaLedger:
    client: AsyncClient
    ws_url: str
    commitment: Commitment
    max_supported_transaction_version: int = 0

    @classmethod
    def create(cls, settings: AppSettings) -> SolanaLedger:
        commitment = Commitment(settings.commitment)
        client = AsyncClient(settings.sol_rpc_url, commitment=commitment)
        return cls(
            client=client,
            ws_url=settings.ws_url(),
            commitment=commitment,
            max_supported_transaction_version=settings.max_supported_transaction_version,
        )

    async def subscribe_logs(self, address: str) -> AsyncIterator[LogEvent]:
        """Yield log events mentioning ``address`` until the socket closes."""
        async with ws_connect(self.ws_url) as websocket:
            filt = RpcTransactionLogsFilterMentions(Pubkey.from_string(address))
            await websocket.logs_subscribe(filter_=filt, commitment=self.commitment)
            logger.info("Monitoring wallet: {}", address)
            async for messages in websocket:
                batch = messages if isinstance(messages, list) else [messages]
                for msg in batch:
                    event = log_event_from_message(msg)
                    if event is not None:
                        yield event

    async def fetch_parsed_account(self, address: str) -> dict[str, Any] | None:
        resp = await self.client.get_account_info_json_parsed(
            Pubkey.from_string(address), commitment=self.commitment
        )
        result = _result_value(resp) or {}
        return result.get("value")

    async def fetch_parsed_transaction(self, signature: str) -> dict[str, Any] | None:
        resp = await self.client.get_transaction(
            Signature.from_string(signature),
            encoding="jsonParsed",
            commitment=self.commitment,
            max_supported_transaction_version=self.max_supported_transaction_version,
        )
        return _result_value(resp)

    async def fetch_parsed_transactions(self, signatures: list[str]) -> list[dict[str, Any] | None]:
        return list(
            await asyncio.gather(*(self.fetch_parsed_transaction(s) for s in signatures))
        )

    async def close(self) -> None:
        await self.client.close()
