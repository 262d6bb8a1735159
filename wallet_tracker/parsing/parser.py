from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from loguru import logger

from wallet_tracker.parsing.balances import SCALE, analyze_native_balance
from wallet_tracker.parsing.mints import MintResolver
from wallet_tracker.parsing.models import ShapeError, decode_transaction
from wallet_tracker.parsing.results import (
    FailureKind,
    ParsedSwap,
    ParseResult,
    TokenLeg,
)
from wallet_tracker.parsing.transfers import extract_transfers
from wallet_tracker.programs import ProgramLabel

_SIX_PLACES = Decimal("0.000001")


def scale_amount(raw: int) -> str:
    return format((Decimal(raw) / SCALE).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP), "f")


@dataclass
class TransactionParser:
    """Turns a fetched transaction into a ``ParsedSwap``.

    Direction comes from the fee payer's SOL delta. The swap legs come from the
    inner token transfers by position: ``token_in`` is the source account of the
    last transfer, ``token_out`` the destination of the first. With a single
    transfer both legs read from it.
    """

    mints: MintResolver

    async def parse(
        self, details: Sequence[Any] | None, label: ProgramLabel
    ) -> ParseResult:
        try:
            return await self._parse(details, label)
        except Exception as e:
            logger.exception("Error parsing transaction: {}", e)
            return ParseResult.failed(FailureKind.UNEXPECTED, str(e))

    async def _parse(self, details: Sequence[Any] | None, label: ProgramLabel) -> ParseResult:
        if not label.matched:
            return ParseResult.no_match("no dex label")
        if not details or details[0] is None:
            return ParseResult.no_match("transaction detail unavailable")
        try:
            tx = decode_transaction(details[0])
        except ShapeError as e:
            return ParseResult.failed(FailureKind.SHAPE, str(e))

        native = analyze_native_balance(tx)
        if native is None:
            return ParseResult.failed(FailureKind.SHAPE, "native balances missing")

        owner = tx.signer()

        transfers = extract_transfers(tx.meta.inner_instructions if tx.meta else None)
        if not transfers:
            return ParseResult.no_match("no token transfers")

        first, last = transfers[0], transfers[-1]
        mint_in, mint_out = await asyncio.gather(
            self.mints.resolve(last.source),
            self.mints.resolve(first.destination),
        )

        swap = ParsedSwap(
            direction=native.direction,
            monitored_wallet=owner,
            dex=label.dex,
            operation=label.operation.value if label.operation else "",
            token_in=TokenLeg(mint=mint_in, amount=scale_amount(last.amount)),
            token_out=TokenLeg(mint=mint_out, amount=scale_amount(first.amount)),
            signature=tx.signature,
        )
        return ParseResult.parsed(swap)
