from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class OperationKind(str, Enum):
    SWAP = "swap"
    MINT = "mint"


@dataclass(frozen=True)
class ProgramLabel:
    dex: str | None
    operation: OperationKind | None

    @property
    def matched(self) -> bool:
        return self.dex is not None


NO_MATCH = ProgramLabel(dex=None, operation=None)

JUPITER = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
RAYDIUM = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
PUMP_FUN = "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P"
PUMP_FUN_TOKEN_MINT_AUTH = "TSLvdd1pWpHVjahSpsvCXUbgwsL3JAcvokwaKt1eokM"

# Checked in this order; the first program id found in the logs wins.
PROGRAMS: tuple[tuple[str, ProgramLabel], ...] = (
    (PUMP_FUN_TOKEN_MINT_AUTH, ProgramLabel("Pump.fun", OperationKind.MINT)),
    (PUMP_FUN, ProgramLabel("Pump.fun", OperationKind.SWAP)),
    (JUPITER, ProgramLabel("Jupiter", OperationKind.SWAP)),
    (RAYDIUM, ProgramLabel("Raydium", OperationKind.SWAP)),
)


def identify_dex(logs: Iterable[str] | None) -> ProgramLabel:
    """Return the label of the highest-priority known program mentioned in ``logs``.

    Matching is substring containment over the space-joined log lines, so a program
    id appearing anywhere in a line counts. Empty or missing logs give ``NO_MATCH``.
    """
    if not logs:
        return NO_MATCH
    log_text = " ".join(logs)
    for program_id, label in PROGRAMS:
        if program_id in log_text:
            return label
    return NO_MATCH
