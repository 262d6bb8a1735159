from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml
from solders.pubkey import Pubkey


def load_wallets_yaml(path: Path) -> dict:
    if not path.exists():
        return {"wallets": []}
    return yaml.safe_load(path.read_text()) or {"wallets": []}


def save_wallets_yaml(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False))


def parse_addresses(payload: Any) -> list[str]:
    # Accept a list of strings, list of objects with 'address', or newline-separated strings
    if isinstance(payload, list):
        if all(isinstance(x, str) for x in payload):
            return [x.strip() for x in payload if x and x.strip()]
        if all(isinstance(x, dict) for x in payload):
            addrs: list[str] = []
            for row in payload:
                a = row.get("address") or row.get("wallet") or row.get("walletAddress")
                if a:
                    addrs.append(a.strip())
            return addrs
    if isinstance(payload, str):
        return [line.strip() for line in payload.splitlines() if line.strip()]
    return []


def is_valid_address(address: str) -> bool:
    try:
        Pubkey.from_string(address)
    except ValueError:
        return False
    return True


def upsert(wallets: list[dict], address: str, notes: str | None = None) -> bool:
    """Add ``address`` unless already present; returns True when a row was added."""
    for w in wallets:
        if w.get("address") == address and (w.get("chain") or "solana").lower() == "solana":
            if notes and not w.get("notes"):
                w["notes"] = notes
            return False
    item = {"chain": "solana", "address": address}
    if notes:
        item["notes"] = notes
    wallets.append(item)
    return True


def main() -> int:
    p = argparse.ArgumentParser(description="Import Solana wallets into the tracker watch-list")
    p.add_argument("--input", "-i", help="Input file (JSON array or newline-separated addresses). If omitted, reads stdin.")
    p.add_argument("--wallets-yaml", default="config/wallets.yaml", help="Path to wallets.yaml")
    p.add_argument("--notes", default=None, help="Notes stored with newly added wallets")
    p.add_argument("--replace", action="store_true", help="Drop existing wallets before importing")
    args = p.parse_args()

    if args.input:
        raw = Path(args.input).read_text()
    else:
        raw = sys.stdin.read()

    try:
        payload = json.loads(raw)
    except ValueError:
        payload = raw

    addrs = parse_addresses(payload)
    invalid = [a for a in addrs if not is_valid_address(a)]
    for a in invalid:
        print(f"Skipping invalid address: {a}", file=sys.stderr)
    addrs = [a for a in addrs if a not in invalid]
    if not addrs:
        print("No addresses parsed from input", file=sys.stderr)
        return 1

    path = Path(args.wallets_yaml)
    data = load_wallets_yaml(path)
    wallets: list[dict] = [] if args.replace else data.get("wallets", [])

    added = sum(1 for a in addrs if upsert(wallets, a, args.notes))

    data["wallets"] = wallets
    save_wallets_yaml(path, data)
    print(f"Imported {added} new addresses into {path} ({len(wallets)} total)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
