from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from loguru import logger

UNKNOWN_MINT = "unknown"


class AccountSource(Protocol):
    async def fetch_parsed_account(self, address: str) -> dict[str, Any] | None: ...


def mint_from_account(account: dict[str, Any] | None) -> str | None:
    if not isinstance(account, dict):
        return None
    data = account.get("data")
    if not isinstance(data, dict):
        # Accounts the node cannot parse come back as [base64, encoding]
        return None
    info = (data.get("parsed") or {}).get("info") or {}
    mint = info.get("mint") if isinstance(info, dict) else None
    return mint if isinstance(mint, str) and mint else None


@dataclass
class MintResolver:
    ledger: AccountSource

    async def resolve(self, address: str) -> str:
        """Mint of the token account at ``address``, or ``UNKNOWN_MINT``. Never raises."""
        if not address:
            return UNKNOWN_MINT
        try:
            account = await self.ledger.fetch_parsed_account(address)
        except Exception as e:
            logger.warning("Mint lookup failed for {}: {}", address, e)
            return UNKNOWN_MINT
        mint = mint_from_account(account)
        if mint is None:
            logger.debug("No token mint for account {}", address)
            return UNKNOWN_MINT
        return mint
