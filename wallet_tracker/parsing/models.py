"""Typed view of a ``getTransaction`` (jsonParsed) result.

Raw RPC payloads are decoded here once, so the rest of the pipeline can rely on
attributes instead of probing optional keys. Anything that does not fit raises
``ShapeError``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class ShapeError(ValueError):
    """Transaction detail is missing fields or has the wrong types."""


class _RpcModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AccountKey(_RpcModel):
    pubkey: str
    signer: bool = False
    writable: bool = False


class Instruction(_RpcModel):
    program: str | None = None
    program_id: str | None = None
    # spl-token/system instructions decode to a dict; some programs (memo) decode to a str
    parsed: dict[str, Any] | str | None = None


class InnerInstructionGroup(_RpcModel):
    index: int = 0
    instructions: list[Instruction] = []


class TransactionMeta(_RpcModel):
    err: Any = None
    fee: int = 0
    pre_balances: list[int] = []
    post_balances: list[int] = []
    inner_instructions: list[InnerInstructionGroup] | None = None
    log_messages: list[str] | None = None

    @field_validator("inner_instructions", mode="before")
    @classmethod
    def _drop_null_groups(cls, v):
        if isinstance(v, list):
            return [g for g in v if g is not None]
        return v


class Message(_RpcModel):
    account_keys: list[AccountKey] = []

    @field_validator("account_keys", mode="before")
    @classmethod
    def _legacy_string_keys(cls, v):
        # Non-parsed encodings list keys as bare strings without signer flags
        if isinstance(v, list):
            return [{"pubkey": k} if isinstance(k, str) else k for k in v]
        return v


class Transaction(_RpcModel):
    message: Message
    signatures: list[str] = []


class ParsedTransaction(_RpcModel):
    slot: int | None = None
    block_time: int | None = None
    transaction: Transaction
    meta: TransactionMeta | None = None

    @property
    def signature(self) -> str | None:
        sigs = self.transaction.signatures
        return sigs[0] if sigs else None

    def signer(self) -> str | None:
        for key in self.transaction.message.account_keys:
            if key.signer:
                return key.pubkey
        return None


def decode_transaction(raw: Any) -> ParsedTransaction:
    if isinstance(raw, ParsedTransaction):
        return raw
    if not isinstance(raw, dict):
        raise ShapeError(f"expected a transaction object, got {type(raw).__name__}")
    try:
        return ParsedTransaction.model_validate(raw)
    except ValidationError as e:
        raise ShapeError(str(e)) from e
