import importlib.util
from pathlib import Path

SOL_A = "9xQeWvG816bUx9EPm2Tbd2Ykqg3k9uADuZbL9g1z3Q2E"
SOL_B = "GxhQ5LTFc4dTxAXt7aQ4uSKvr8ev9T2QXE9zWKA3pjFP"


def load_module(path: Path):
    spec = importlib.util.spec_from_file_location("import_wallets", str(path))
    assert spec and spec.loader, "Failed to load module spec"
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)  # type: ignore[assignment]
    return mod


def test_import_wallets_parse_and_upsert(tmp_path):
    mod = load_module(Path(__file__).resolve().parents[1] / "scripts" / "import_wallets.py")

    payload = [{"address": SOL_A}, {"wallet": SOL_B}, {"walletAddress": "bogus"}]
    addrs = mod.parse_addresses(payload)
    assert addrs == [SOL_A, SOL_B, "bogus"]
    assert not mod.is_valid_address("bogus")
    assert mod.parse_addresses(f"{SOL_A}\n\n{SOL_B}\n") == [SOL_A, SOL_B]

    wallets_yaml = tmp_path / "wallets.yaml"
    wallets_yaml.write_text(f"wallets:\n  - chain: solana\n    address: {SOL_A}\n")
    data = mod.load_wallets_yaml(wallets_yaml)
    wallets = data.get("wallets", [])
    added = [mod.upsert(wallets, a, "test") for a in (SOL_A, SOL_B)]
    assert added == [False, True]
    data["wallets"] = wallets
    mod.save_wallets_yaml(wallets_yaml, data)

    out = mod.load_wallets_yaml(wallets_yaml)
    assert [w["address"] for w in out["wallets"]] == [SOL_A, SOL_B]
    assert out["wallets"][0]["notes"] == "test"
    assert out["wallets"][1] == {"chain": "solana", "address": SOL_B, "notes": "test"}


def test_tracker_reads_imported_file(tmp_path):
    from wallet_tracker.config import AppSettings

    mod = load_module(Path(__file__).resolve().parents[1] / "scripts" / "import_wallets.py")
    path = tmp_path / "config" / "wallets.yaml"
    wallets: list[dict] = []
    mod.upsert(wallets, SOL_A)
    mod.save_wallets_yaml(path, {"wallets": wallets})

    assert AppSettings(wallets_config=str(path)).watch_list() == (SOL_A,)
