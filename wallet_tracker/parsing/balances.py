from __future__ import annotations

from decimal import Decimal

from loguru import logger

from wallet_tracker.parsing.models import ParsedTransaction
from wallet_tracker.parsing.results import Direction, NativeBalanceChange

# lamports per SOL
SCALE = Decimal(10) ** 9


def native_balance_change(pre: int, post: int) -> NativeBalanceChange:
    delta = Decimal(post - pre) / SCALE
    direction = Direction.BUY if delta < 0 else Direction.SELL
    return NativeBalanceChange(direction=direction, magnitude=abs(delta))


def analyze_native_balance(tx: ParsedTransaction) -> NativeBalanceChange | None:
    """Classify ``tx`` from the fee payer's SOL balance.

    Index 0 of pre/post balances is taken as the fee payer without checking the
    signer flag. A wallet that spent SOL bought; anything else (including no change)
    is a sell. Returns None when the balances are not there.
    """
    meta = tx.meta
    if meta is None or not meta.pre_balances or not meta.post_balances:
        logger.debug("No native balances on {}", tx.signature)
        return None
    return native_balance_change(meta.pre_balances[0], meta.post_balances[0])
