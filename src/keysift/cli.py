from concurrent.futures import ThreadPoolExecutor
import os

import click
import structlog

from keysift.classifier import classify_partial
from keysift.codec import normalize_nfkd
from keysift.constants import DEFAULT_MISSING_CHAR
from keysift.logging_config import configure_logging
from keysift.minikey import check_mini_key
from keysift.models import CheckResponse, ScanResponse
from keysift.outcome import ValidationOutcome
from keysift.report import Report
from keysift.scan import CHECKERS, load_candidates, run_scan_and_close
from keysift.ui import ui_loop
from keysift.validator import check_address, check_bip38, check_private_key, decode_witness_address

log = structlog.get_logger()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Render log lines as JSON")
def cli(verbose: bool, json_logs: bool):
    """Check damaged Bitcoin keys and addresses."""
    configure_logging(verbose, json_logs)


def emit(text: str, outcome: ValidationOutcome, as_json: bool) -> None:
    """Print the outcome and exit non-zero when the input was rejected."""
    if as_json:
        click.echo(CheckResponse.from_outcome(text, outcome).model_dump_json(indent=2))
    else:
        click.echo(outcome.message)
    if not outcome.ok:
        raise click.exceptions.Exit(1)


json_option = click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")


def nfkd(ctx, param, value: str) -> str:
    changed, normalized = normalize_nfkd(value)
    if changed:
        log.warning("input.normalized", param=param.name, value=normalized)
    return normalized


@cli.command("check-key")
@click.argument("key", callback=nfkd)
@json_option
def check_key_cmd(key: str, as_json: bool):
    """Check a WIF private key."""
    emit(key, check_private_key(key), as_json)


@cli.command("check-address")
@click.argument("address", callback=nfkd)
@json_option
def check_address_cmd(address: str, as_json: bool):
    """Check a base-58 or bech32 (bc1) address."""
    if address.lower().startswith("bc1"):
        outcome = decode_witness_address(address)
    else:
        outcome = check_address(address)
    emit(address, outcome, as_json)


@cli.command("check-bip38")
@click.argument("bip38", callback=nfkd)
@json_option
def check_bip38_cmd(bip38: str, as_json: bool):
    """Check a BIP-38 encrypted key."""
    emit(bip38, check_bip38(bip38), as_json)


@cli.command("check-mini")
@click.argument("key", callback=nfkd)
@json_option
def check_mini_cmd(key: str, as_json: bool):
    """Check a mini private key and print the keys and addresses it stands for."""
    emit(key, check_mini_key(key), as_json)


@cli.command()
@click.argument("key", callback=nfkd)
@click.option(
    "--missing-char",
    "-m",
    default=DEFAULT_MISSING_CHAR,
    envvar="KEYSIFT_MISSING_CHAR",
    show_default=True,
    help="Character used in KEY for every unknown position",
)
@json_option
def classify(key: str, missing_char: str, as_json: bool):
    """Check whether a key with missing characters is worth searching."""
    emit(key, classify_partial(key, missing_char), as_json)


@cli.command()
@click.argument("candidates_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--kind", "-k", type=click.Choice(sorted(CHECKERS)), default="key", show_default=True)
@click.option(
    "--partitions",
    "-p",
    type=click.IntRange(min=1),
    default=lambda: os.cpu_count() or 1,
    envvar="KEYSIFT_PARTITIONS",
    help="Number of parallel workers (defaults to the CPU count)",
)
@click.option("--ui/--no-ui", default=True, help="Show the live progress panel")
@json_option
def scan(candidates_path: str, kind: str, partitions: int, ui: bool, as_json: bool):
    """Check every line of CANDIDATES_PATH in parallel and report the valid ones."""
    candidates = load_candidates(candidates_path)
    with Report() as report:
        if ui and not as_json:
            subscriber = report.subscribe()
            with ThreadPoolExecutor(max_workers=1) as executor:
                future = executor.submit(run_scan_and_close, report, candidates, kind, partitions)
                try:
                    ui_loop(subscriber)
                except KeyboardInterrupt:
                    report.close()
                found = future.result()
        else:
            found = run_scan_and_close(report, candidates, kind, partitions)

    state = report.snapshot()
    if as_json:
        response = ScanResponse(
            found_any_result=found,
            state=state.state,
            percent=state.percent,
            message=state.message,
        )
        click.echo(response.model_dump_json(indent=2))
    elif not ui:
        click.echo(state.message)

    if not found:
        raise click.exceptions.Exit(1)


if __name__ == "__main__":
    cli()
