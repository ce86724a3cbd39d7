"""CLI entry point for zkverify_dapp."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from zkverify_dapp.app import build_workflow
from zkverify_dapp.config import load_config
from zkverify_dapp.errors import ConfigurationError, ProviderUnavailable
from zkverify_dapp.models.config import DappConfig
from zkverify_dapp.notify import ClickNotifier
from zkverify_dapp.wallet.gateway import ProviderWalletGateway
from zkverify_dapp.wallet.provider import HttpWalletProvider
from zkverify_dapp.workflow import VerificationWorkflow


def _load(ctx: click.Context) -> DappConfig:
    try:
        cfg = load_config(ctx.obj["config_path"])
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if not ctx.obj["verbose"]:
        logging.getLogger().setLevel(cfg.log_level.upper())
    return cfg


def _require_contract(cfg: DappConfig) -> None:
    """Exit with error if no verifier address is configured."""
    if not cfg.contract_address:
        click.echo("Error: No verifier contract address configured.", err=True)
        click.echo("Set ZKVERIFY_CONTRACT_ADDRESS or check deployments.json.", err=True)
        sys.exit(1)


async def _ensure_account(workflow: VerificationWorkflow) -> str | None:
    """Reuse an authorized account, else prompt, unless no wallet answered."""
    account = await workflow.start()
    if account is None and not isinstance(workflow.last_error, ProviderUnavailable):
        account = await workflow.connect()
    return account


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """zkverify - submit zero-knowledge proofs to an on-chain verifier."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show client configuration."""
    cfg = _load(ctx)
    timeout = f"{cfg.confirm_timeout:g}s" if cfg.confirm_timeout else "none"
    click.echo(f"Wallet URL:     {cfg.wallet_url}")
    click.echo(f"Contract:       {cfg.contract_address or '(not set)'}")
    click.echo(f"Function:       {cfg.function_name}")
    click.echo(f"ABI:            {cfg.abi_path or '(built-in)'}")
    click.echo(f"Poll interval:  {cfg.confirm_poll_interval:g}s")
    click.echo(f"Confirm limit:  {timeout}")


# ── Wallet ─────────────────────────────────────────────


@cli.command()
@click.pass_context
def accounts(ctx: click.Context) -> None:
    """Show the already-authorized wallet account, without prompting."""
    cfg = _load(ctx)

    async def _accounts():
        gateway = ProviderWalletGateway(HttpWalletProvider(cfg.wallet_url, cfg.request_timeout))
        try:
            account = await gateway.check_existing_connection()
            chain_id = await gateway.chain_id()
        except ProviderUnavailable as exc:
            click.echo(f"Wallet unavailable: {exc}", err=True)
            click.echo("Install or start a wallet provider.", err=True)
            sys.exit(1)

        click.echo(f"Chain ID:  {chain_id}")
        click.echo(f"Account:   {account or '(none authorized)'}")

    asyncio.run(_accounts())


@cli.command()
@click.pass_context
def connect(ctx: click.Context) -> None:
    """Request wallet authorization (may open a wallet popup)."""
    cfg = _load(ctx)

    async def _connect():
        workflow = build_workflow(cfg, notifier=ClickNotifier())
        account = await _ensure_account(workflow)
        if not account:
            sys.exit(1)
        click.echo(f"Connected:  {account}")

    try:
        asyncio.run(_connect())
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ── Verification ───────────────────────────────────────


@cli.command()
@click.option("--proof", "proof_text", default=None, help="Proof text (0x-prefixed hex or raw text)")
@click.option(
    "--proof-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the proof from a file",
)
@click.option("--input", "input_text", required=True, help="Public input(s), comma separated")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def verify(
    ctx: click.Context,
    proof_text: str | None,
    proof_file: Path | None,
    input_text: str,
    yes: bool,
) -> None:
    """Submit a proof and public input to the verifier and wait for the receipt."""
    cfg = _load(ctx)
    _require_contract(cfg)

    if (proof_text is None) == (proof_file is None):
        click.echo("Error: give exactly one of --proof or --proof-file.", err=True)
        sys.exit(1)
    if proof_file is not None:
        proof_text = proof_file.read_text()

    async def _verify():
        workflow = build_workflow(cfg, notifier=ClickNotifier())

        account = await _ensure_account(workflow)
        if not account:
            sys.exit(1)

        workflow.set_field("proof", proof_text)
        workflow.set_field("input", input_text)

        click.echo(f"Verifying on {cfg.contract_address}")
        click.echo(f"  Account:  {account}")
        click.echo(f"  Input:    {input_text}")
        if not yes:
            click.confirm("\nSubmit verification transaction?", abort=True)

        click.echo(f"\nSubmitting {cfg.function_name} transaction...")
        result = await workflow.submit()
        record = result.record

        if not result.success:
            click.echo(f"\nVerification failed: {result.message}", err=True)
            if record is not None and record.tx_hash:
                click.echo(f"  Tx hash:  {record.tx_hash}", err=True)
            sys.exit(1)

        receipt = record.receipt
        click.echo("Verification confirmed!")
        click.echo(f"  Tx hash:  {record.tx_hash}")
        click.echo(f"  Block:    {receipt.block_number}")
        click.echo(f"  Gas used: {receipt.gas_used}")

    try:
        asyncio.run(_verify())
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
