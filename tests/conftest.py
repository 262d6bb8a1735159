from __future__ import annotations

from typing import Any

import pytest

WALLET = "5szGx4sTngM9528j1pN3ap8fbnWwdByHrvopBqLFu9PW"
SIG = "3yZe7d2mC4QkYb8uPzvjBz1QpH6w3Uu9XgQ8cZ4m1fE2nK5tLrS7aV9bW2xY4dF6gH8jK1mN3pQ5rT7uV9wX1yZ"


def transfer_ix(amount: Any, source: str, destination: str, type_: str = "transfer") -> dict:
    return {
        "program": "spl-token",
        "programId": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",
        "parsed": {
            "type": type_,
            "info": {
                "amount": amount,
                "source": source,
                "destination": destination,
                "authority": WALLET,
            },
        },
        "stackHeight": 2,
    }


@pytest.fixture
def make_tx():
    def _make(
        pre: int = 2_000_000_000,
        post: int = 1_000_000_000,
        inner: list[list[dict]] | None = None,
        signer: bool = True,
        signatures: list[str] | None = None,
    ) -> dict:
        groups = [
            {"index": i, "instructions": ixs} for i, ixs in enumerate(inner or [])
        ]
        return {
            "slot": 250_000_000,
            "blockTime": 1_700_000_000,
            "version": 0,
            "meta": {
                "err": None,
                "fee": 5000,
                "preBalances": [pre, 1_000],
                "postBalances": [post, 1_000],
                "innerInstructions": groups,
                "logMessages": [],
            },
            "transaction": {
                "signatures": signatures if signatures is not None else [SIG],
                "message": {
                    "accountKeys": [
                        {"pubkey": WALLET, "signer": signer, "writable": True, "source": "transaction"},
                        {"pubkey": "11111111111111111111111111111111", "signer": False, "writable": False},
                    ],
                    "instructions": [],
                },
            },
        }

    return _make


class FakeMints:
    """Stands in for MintResolver; returns a mint per address or 'unknown'."""

    def __init__(self, mapping: dict[str, str] | None = None):
        self.mapping = mapping or {}
        self.calls: list[str] = []

    async def resolve(self, address: str) -> str:
        self.calls.append(address)
        return self.mapping.get(address, "unknown")


@pytest.fixture
def fake_mints():
    return FakeMints


@pytest.fixture
def transfer():
    return transfer_ix
