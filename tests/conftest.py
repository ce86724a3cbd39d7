"""Shared fixtures for zkverify_dapp tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from zkverify_dapp.models.config import DappConfig
from zkverify_dapp.wallet.gateway import ProviderWalletGateway
from zkverify_dapp.workflow import VerificationWorkflow

from tests.mocks import (
    TEST_ACCOUNT,
    MockContractClient,
    MockWalletProvider,
    RecordingNotifier,
)

CONTRACT_ADDRESS = "0xe78a0f7e598cc8b0bb87894b0f60dd2a88d6a8ab"


# ── Report metadata ──────────────────────────────────────────────


def pytest_configure(config):
    """Add wallet/contract info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Wallet"] = "MockWalletProvider (tier 1), aiohttp JSON-RPC fake (tier 2)"
    meta["Verifier Contract"] = CONTRACT_ADDRESS
    meta["Test Account"] = TEST_ACCOUNT


def make_test_config(**overrides) -> DappConfig:
    """Build a DappConfig suitable for testing."""
    defaults = dict(
        wallet_url="http://127.0.0.1:1248",
        request_timeout=5.0,
        contract_address=CONTRACT_ADDRESS,
        abi_path="",
        function_name="verifyTx",
        deployments_path="deployments.json",
        confirm_poll_interval=0.0,
        confirm_timeout=5.0,
        log_level="debug",
    )
    defaults.update(overrides)
    return DappConfig(**defaults)


@pytest.fixture
def test_config():
    """Default DappConfig for tests."""
    return make_test_config()


@pytest.fixture
def mock_provider():
    """Wallet with one account that has not authorized this app yet."""
    return MockWalletProvider()


@pytest.fixture
def gateway(mock_provider):
    return ProviderWalletGateway(mock_provider)


@pytest.fixture
def mock_contract():
    return MockContractClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def workflow(gateway, mock_contract, notifier):
    """VerificationWorkflow over a mock wallet and a mock verifier contract."""
    return VerificationWorkflow(
        gateway=gateway,
        bind_contract=mock_contract.bind,
        notifier=notifier,
    )


@pytest.fixture
async def connected_workflow(workflow):
    """Workflow that has already connected TEST_ACCOUNT."""
    await workflow.connect()
    return workflow
