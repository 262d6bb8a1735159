from pathlib import Path

from wallet_tracker.config import AppSettings

SAMPLE = Path(__file__).resolve().parents[1] / "config" / "wallets.yaml"


def test_settings_load():
    s = AppSettings()
    assert s is not None
    assert s.commitment == "confirmed"


def test_sample_watch_list_loads():
    s = AppSettings(wallets_config=str(SAMPLE), wallets=None)
    assert len(s.watch_list()) == 6
