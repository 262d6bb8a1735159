from __future__ import annotations

from collections.abc import Iterable

from wallet_tracker.parsing.models import InnerInstructionGroup, Instruction
from wallet_tracker.parsing.results import TokenTransfer


def _as_transfer(ix: Instruction) -> TokenTransfer | None:
    parsed = ix.parsed
    if not isinstance(parsed, dict) or parsed.get("type") != "transfer":
        return None
    info = parsed.get("info") or {}
    if not isinstance(info, dict):
        return None
    # SOL transfers carry "lamports" instead of "amount" and are skipped here
    raw = info.get("amount")
    if raw in (None, ""):
        return None
    try:
        amount = int(raw)
    except (TypeError, ValueError):
        return None
    if amount <= 0:
        return None
    return TokenTransfer(
        amount=amount,
        source=str(info.get("source") or ""),
        destination=str(info.get("destination") or ""),
    )


def extract_transfers(groups: Iterable[InnerInstructionGroup] | None) -> list[TokenTransfer]:
    """Collect token transfers from inner instructions in the order they appear.

    The order is that of the instruction tree, not execution order. Repeated
    transfers between the same accounts are kept as separate entries.
    """
    out: list[TokenTransfer] = []
    for group in groups or []:
        for ix in group.instructions:
            transfer = _as_transfer(ix)
            if transfer is not None:
                out.append(transfer)
    return out
