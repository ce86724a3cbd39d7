"""Configuration loading from TOML, env vars and deployments.json."""

from __future__ import annotations

import json

import pytest

from zkverify_dapp.config import load_config
from zkverify_dapp.contract.abi import VERIFIER_ABI, has_function, load_abi
from zkverify_dapp.errors import ConfigurationError

from tests.conftest import CONTRACT_ADDRESS


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    """Run each test in an empty directory with no ZKVERIFY_ env vars."""
    monkeypatch.chdir(tmp_path)
    for name in ("WALLET_URL", "CONTRACT_ADDRESS", "ABI_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(f"ZKVERIFY_{name}", raising=False)


def test_defaults():
    cfg = load_config(None)
    assert cfg.wallet_url == "http://127.0.0.1:1248"
    assert cfg.contract_address == ""
    assert cfg.function_name == "verifyTx"
    assert cfg.confirm_timeout is None


def test_toml_sections(tmp_path):
    path = tmp_path / "zkverify.toml"
    path.write_text(
        '[wallet]\n'
        'url = "http://127.0.0.1:8545"\n'
        'request_timeout = 12\n'
        '[contract]\n'
        f'address = "{CONTRACT_ADDRESS}"\n'
        'function = "verifyProof"\n'
        '[workflow]\n'
        'confirm_poll_interval = 0.5\n'
        'confirm_timeout = 90\n'
        'log_level = "debug"\n'
    )

    cfg = load_config(path)

    assert cfg.wallet_url == "http://127.0.0.1:8545"
    assert cfg.request_timeout == 12.0
    assert cfg.contract_address == CONTRACT_ADDRESS
    assert cfg.function_name == "verifyProof"
    assert cfg.confirm_poll_interval == 0.5
    assert cfg.confirm_timeout == 90.0
    assert cfg.log_level == "debug"


def test_zero_timeout_means_wait_forever(tmp_path):
    path = tmp_path / "zkverify.toml"
    path.write_text("[workflow]\nconfirm_timeout = 0\n")
    assert load_config(path).confirm_timeout is None


def test_unknown_log_level(tmp_path, monkeypatch):
    path = tmp_path / "zkverify.toml"
    path.write_text('[workflow]\nlog_level = "loud"\n')
    with pytest.raises(ConfigurationError, match="loud"):
        load_config(path)

    monkeypatch.setenv("ZKVERIFY_LOG_LEVEL", "WARNING")
    assert load_config(path).log_level == "WARNING"


def test_missing_file_uses_defaults(tmp_path):
    cfg = load_config(tmp_path / "nope.toml")
    assert cfg.wallet_url == "http://127.0.0.1:1248"


def test_env_overrides_toml(tmp_path, monkeypatch):
    path = tmp_path / "zkverify.toml"
    path.write_text('[wallet]\nurl = "http://from-file"\n')
    monkeypatch.setenv("ZKVERIFY_WALLET_URL", "http://from-env")
    monkeypatch.setenv("ZKVERIFY_CONTRACT_ADDRESS", CONTRACT_ADDRESS)

    cfg = load_config(path)

    assert cfg.wallet_url == "http://from-env"
    assert cfg.contract_address == CONTRACT_ADDRESS


def test_address_from_deployments(tmp_path):
    (tmp_path / "deployments.json").write_text(
        json.dumps({"verifier": {"address": CONTRACT_ADDRESS}})
    )
    assert load_config(None).contract_address == CONTRACT_ADDRESS


def test_configured_address_beats_deployments(tmp_path, monkeypatch):
    (tmp_path / "deployments.json").write_text(
        json.dumps({"verifier": {"address": "0x" + "11" * 20}})
    )
    monkeypatch.setenv("ZKVERIFY_CONTRACT_ADDRESS", CONTRACT_ADDRESS)
    assert load_config(None).contract_address == CONTRACT_ADDRESS


# ── ABI loading ───────────────────────────────────────────────────


def test_builtin_abi():
    assert load_abi("") is VERIFIER_ABI
    assert has_function(VERIFIER_ABI, "verifyTx")
    assert not has_function(VERIFIER_ABI, "Verified")


def test_abi_from_artifact(tmp_path):
    path = tmp_path / "Verifier.json"
    path.write_text(json.dumps({"contractName": "Verifier", "abi": VERIFIER_ABI}))
    assert load_abi(path) == VERIFIER_ABI


def test_abi_from_bare_list(tmp_path):
    path = tmp_path / "abi.json"
    path.write_text(json.dumps(VERIFIER_ABI))
    assert load_abi(str(path)) == VERIFIER_ABI


@pytest.mark.parametrize("content", ["{not json", '{"bytecode": "0x"}', "42"])
def test_bad_abi_file(tmp_path, content):
    path = tmp_path / "abi.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_abi(path)
