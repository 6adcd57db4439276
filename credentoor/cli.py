"""CLI entry point for credentoor."""

import asyncio
import json
import logging
import sys
from typing import Optional

import click

from .chain import (
    BeaconAPIError,
    BeaconClient,
    ChainSnapshot,
    SnapshotFileError,
    fetch_chain_snapshot,
    load_snapshot,
    save_snapshot,
)
from .chain.snapshot_file import DEFAULT_SNAPSHOT_FILE
from .config import Config
from .credentials.export import DEFAULT_CHANGES_FILE
from .credentials import (
    ChangeGenerator,
    ChangeRequest,
    change_to_json,
    read_changes,
    validate_request,
    write_changes,
)
from .exceptions import CredentialChangeError
from .keys import BLSKeySource
from .spec.constants import DEFAULT_MAX_DISTANCE
from .utils import decode_hex

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    if level.upper() != "DEBUG":
        logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


async def _fetch_snapshot(config: Config) -> ChainSnapshot:
    client = BeaconClient(config.connection, timeout=config.timeout)
    try:
        return await fetch_chain_snapshot(client)
    finally:
        await client.close()


async def _submit(config: Config, changes: list[dict]) -> None:
    client = BeaconClient(config.connection, timeout=config.timeout)
    try:
        await client.submit_bls_to_execution_changes(changes)
    finally:
        await client.close()


def _obtain_snapshot(config: Config) -> ChainSnapshot:
    if config.offline:
        return load_snapshot(config.offline_preparation_path or DEFAULT_SNAPSHOT_FILE)
    logger.info(f"Fetching chain information from {config.connection}")
    return asyncio.run(_fetch_snapshot(config))


log_level_option = click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
    envvar="CREDENTOOR_LOG_LEVEL",
)
connection_option = click.option(
    "--connection",
    default="http://localhost:5052",
    help="Beacon node Beacon API URL",
    envvar="CREDENTOOR_CONNECTION",
)
timeout_option = click.option(
    "--timeout",
    default=60.0,
    type=float,
    help="Beacon API request timeout in seconds",
    envvar="CREDENTOOR_TIMEOUT",
)


@click.group()
@click.version_option(package_name="credentoor")
def cli():
    """Credentoor - generate BLS to execution withdrawal credential changes."""
    pass


@cli.command()
@connection_option
@timeout_option
@click.option(
    "--file",
    "path",
    default=DEFAULT_SNAPSHOT_FILE,
    type=click.Path(dir_okay=False, writable=True),
    help="Offline preparation file to write",
    envvar="CREDENTOOR_OFFLINE_PREPARATION",
)
@log_level_option
def prepare(connection: str, timeout: float, path: str, log_level: str):
    """Save chain information for generating changes offline."""
    setup_logging(log_level)
    config = Config(connection=connection, timeout=timeout, log_level=log_level)

    try:
        snapshot = asyncio.run(_fetch_snapshot(config))
    except BeaconAPIError as e:
        raise click.ClickException(str(e))
    save_snapshot(snapshot, path)
    click.echo(f"Saved {len(snapshot.validators)} validators to {path}", err=True)


@cli.command(name="set")
@click.option(
    "--withdrawal-address",
    help="Execution address to receive withdrawals (0x-prefixed)",
    envvar="CREDENTOOR_WITHDRAWAL_ADDRESS",
)
@click.option("--mnemonic", help="Mnemonic of the validator keys", envvar="CREDENTOOR_MNEMONIC")
@click.option("--seed", help="Hex seed of the validator keys, instead of a mnemonic")
@click.option("--path", help="Derivation path of a validator key, e.g. m/12381/3600/0/0/0")
@click.option("--validator", help="Validator index or public key")
@click.option("--all", "scan", is_flag=True, default=False, help="Generate changes for every validator of the mnemonic")
@click.option("--private-key", help="Withdrawal private key, instead of deriving it", envvar="CREDENTOOR_PRIVATE_KEY")
@connection_option
@timeout_option
@click.option(
    "--offline-preparation",
    type=click.Path(dir_okay=False),
    help="Use chain information from an offline preparation file instead of a beacon node",
    envvar="CREDENTOOR_OFFLINE_PREPARATION",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="File to write the signed changes to (stdout if not given)",
)
@click.option("--submit", is_flag=True, default=False, help="Submit the signed changes to the beacon node")
@click.option(
    "--max-distance",
    default=DEFAULT_MAX_DISTANCE,
    type=click.IntRange(min=1),
    help="Number of mnemonic accounts searched for a named validator",
    envvar="CREDENTOOR_MAX_DISTANCE",
)
@log_level_option
def set_credentials(
    withdrawal_address: Optional[str],
    mnemonic: Optional[str],
    seed: Optional[str],
    path: Optional[str],
    validator: Optional[str],
    scan: bool,
    private_key: Optional[str],
    connection: str,
    timeout: float,
    offline_preparation: Optional[str],
    output: Optional[str],
    submit: bool,
    max_distance: int,
    log_level: str,
):
    """Generate signed withdrawal credential changes."""
    setup_logging(log_level)

    config = Config(
        connection=connection,
        offline_preparation_path=offline_preparation or "",
        output_path=output or "",
        withdrawal_address=withdrawal_address or "",
        max_distance=max_distance,
        timeout=timeout,
        log_level=log_level,
        offline=offline_preparation is not None,
        submit=submit,
    )
    if config.offline and config.submit:
        raise click.UsageError("--submit cannot be used with --offline-preparation")

    try:
        seed_bytes = decode_hex(seed) if seed else b""
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--seed")

    request = ChangeRequest(
        withdrawal_address=config.withdrawal_address,
        mnemonic=mnemonic or "",
        seed=seed_bytes,
        private_key=private_key or "",
        path=path or "",
        validator=validator or "",
        scan=scan,
    )

    key_source = BLSKeySource()
    key_source.initialize()

    try:
        validate_request(key_source, request)
        snapshot = _obtain_snapshot(config)
        generator = ChangeGenerator(key_source, snapshot, max_distance=config.max_distance)
        changes = generator.generate(request)
    except (CredentialChangeError, BeaconAPIError, SnapshotFileError) as e:
        raise click.ClickException(str(e))

    if not changes:
        click.echo("No credential changes generated", err=True)
        return

    encoded = [change_to_json(c) for c in changes]
    if config.submit:
        try:
            asyncio.run(_submit(config, encoded))
        except BeaconAPIError as e:
            raise click.ClickException(str(e))
        click.echo(f"Submitted {len(encoded)} credential change(s)", err=True)
    elif config.output_path:
        write_changes(changes, config.output_path)
        click.echo(f"Wrote {len(encoded)} credential change(s) to {config.output_path}", err=True)
    else:
        click.echo(json.dumps(encoded, indent=2))


@cli.command(name="submit")
@click.option(
    "--file",
    "path",
    default=DEFAULT_CHANGES_FILE,
    type=click.Path(exists=True, dir_okay=False),
    help="File of signed changes written by 'credentoor set'",
)
@connection_option
@timeout_option
@log_level_option
def submit_changes(path: str, connection: str, timeout: float, log_level: str):
    """Submit previously generated changes to a beacon node."""
    setup_logging(log_level)
    config = Config(connection=connection, timeout=timeout, log_level=log_level)

    try:
        changes = read_changes(path)
        asyncio.run(_submit(config, [change_to_json(c) for c in changes]))
    except (CredentialChangeError, BeaconAPIError) as e:
        raise click.ClickException(str(e))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path}: invalid JSON: {e}")
    click.echo(f"Submitted {len(changes)} credential change(s)", err=True)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
