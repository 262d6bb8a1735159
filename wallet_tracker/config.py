from pathlib import Path

from loguru import logger
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.pubkey import Pubkey


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="TRACKER_", extra="allow")

    # Solana
    sol_rpc_url: str = "https://api.mainnet-beta.solana.com"
    sol_ws_url: str | None = None  # derived from sol_rpc_url when unset
    commitment: str = "confirmed"
    max_supported_transaction_version: int = 0
    reconnect_delay_sec: float = 2.0

    # Telegram
    telegram_bot_token: str | None = None
    admin_chat_id: str | None = None
    disable_telegram_messages: bool = False
    telegram_api_url: str = "https://api.telegram.org"

    # Watch-list
    wallets_config: str = "config/wallets.yaml"
    wallets: str | None = None  # comma-separated override of wallets_config

    # Liveness endpoint
    serve_liveness: bool = True
    port: int = Field(default=3000, validation_alias=AliasChoices("TRACKER_PORT", "PORT", "port"))

    # Logging
    log_level: str = "INFO"

    # --- Validators to coerce empty strings in optional envs to None ---
    @field_validator(
        "sol_ws_url", "telegram_bot_token", "admin_chat_id", "wallets", mode="before"
    )
    @classmethod
    def _empty_str_to_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator("disable_telegram_messages", mode="before")
    @classmethod
    def _empty_str_to_false(cls, v):
        if v is None or v == "":
            return False
        return v

    def ws_url(self) -> str:
        if self.sol_ws_url:
            return self.sol_ws_url
        return self.sol_rpc_url.replace("https://", "wss://").replace("http://", "ws://")

    def wallets_from_config(self) -> list[str]:
        import yaml

        path = Path(self.wallets_config)
        if not path.exists():
            return []
        data = yaml.safe_load(path.read_text()) or {}
        lst: list[str] = []
        for item in data.get("wallets", []):
            if isinstance(item, str):
                lst.append(item)
                continue
            addr = item.get("address")
            item_chain = (item.get("chain") or "solana").lower()
            if addr and item_chain == "solana":
                lst.append(addr)
        return lst

    def watch_list(self) -> tuple[str, ...]:
        """Resolve the watched accounts once; the result is never mutated afterwards."""
        if self.wallets:
            raw = [w.strip() for w in self.wallets.split(",")]
        else:
            raw = self.wallets_from_config()
        out: list[str] = []
        for addr in raw:
            if not addr or addr in out:
                continue
            try:
                Pubkey.from_string(addr)
            except ValueError:
                logger.warning("Skipping invalid wallet address in watch-list: {}", addr)
                continue
            out.append(addr)
        return tuple(out)
