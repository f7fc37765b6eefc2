# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for DZ CCP.

This module wires together the building blocks of DZ CCP:

- configuration (long account policy, account column, display options),
- the CCP derivation engine (key, RIP, RIP key),
- client CSV reading and batch derivation / verification,
- view helpers (tabular rendering and CSV export).

The CLI is intentionally thin: it does not implement any part of the CCP
algorithm itself.


Commands
--------

``derive ACCOUNT [ACCOUNT ...]``
    Derive the CCP key, RIP and RIP key of each account number.

``batch CSV [--column NAME]``
    Derive identifiers for every row of a client CSV file.

``verify CSV [--column NAME]``
    Compare the identifiers stored in a client CSV file (cle, rip, rip_cle)
    with freshly derived ones. Exits with status 1 when at least one row is
    invalid or mismatching.

``check-rip RIP [RIP ...]``
    Check that existing RIP identifiers are consistent.


Configuration and overrides
---------------------------

By default, the CLI reads ``dz_ccp_config.toml`` in the current working
directory if it exists, and uses built-in defaults otherwise. You can point
to another file with:

    --config PATH

The following arguments override the configuration for the current run:

- ``--policy {reject,clamp}``:
    What to do with account numbers longer than 10 digits.
- ``--display-mode {table,csv,both}``:
    'table' prints results to stdout, 'csv' writes CSV files only,
    'both' does both.
- ``--output DIR``:
    Directory where CSV files are written.


Examples
--------

    python -m dz_ccp.cli derive 1234567890 42
    python -m dz_ccp.cli --policy clamp batch data/clients.csv
    python -m dz_ccp.cli verify data/clients.csv --display-mode both
    python -m dz_ccp.cli check-rip 00799999123456789006
"""

import argparse
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from . import __version__
from .accounts import derive_accounts, summarize, verify_accounts
from .ccp import LONG_ACCOUNT_POLICIES, check_rip, derive
from .config import DISPLAY_MODES, AppConfig, load_app_config
from .io import ACCOUNT_COLUMN, read_client_accounts
from .views import batch_view, results_to_dataframe, verification_view


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m dz_ccp.cli",
        description=(
            "DZ CCP - Algeria postal account tools. Computes the CCP key "
            "(clé), the RIP identifier and the RIP key of CCP account numbers, "
            "and verifies the identifiers stored in client lists."
        ),
    )

    # Generic options
    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of dz_ccp and exit.",
    )

    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the TOML configuration file. If omitted, "
            "'dz_ccp_config.toml' in the current directory is used when present."
        ),
    )

    ap.add_argument(
        "--policy",
        choices=list(LONG_ACCOUNT_POLICIES),
        help=(
            "Override ccp.long_account_policy: 'reject' marks account numbers "
            "longer than 10 digits as invalid, 'clamp' keeps their last 10 digits."
        ),
    )

    # Display options
    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help=(
            "Override the display.mode setting from the configuration file. "
            "'table' prints results to stdout, "
            "'csv' writes CSV files only, "
            "'both' does both."
        ),
    )
    ap.add_argument(
        "--output",
        dest="output_dir",
        help=(
            "Output directory where CSV files will be written when display "
            "mode includes 'csv'. If omitted, display.output_dir is used."
        ),
    )

    subparsers = ap.add_subparsers(
        dest="command",
        metavar="command",
        help="One of: derive, batch, verify, check-rip.",
    )

    derive_parser = subparsers.add_parser(
        "derive",
        help="Derive the CCP key, RIP and RIP key of account numbers.",
    )
    derive_parser.add_argument(
        "accounts",
        nargs="+",
        metavar="ACCOUNT",
        help="CCP account numbers (digits only, up to 10 digits).",
    )

    batch_parser = subparsers.add_parser(
        "batch",
        help="Derive identifiers for every row of a client CSV file.",
    )
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify the identifiers stored in a client CSV file.",
    )
    for p in (batch_parser, verify_parser):
        p.add_argument("csv_path", metavar="CSV", help="Client CSV file.")
        p.add_argument(
            "--column",
            help=(
                "Name of the account column. Overrides io.account_column; "
                "detected automatically when neither is set."
            ),
        )

    rip_parser = subparsers.add_parser(
        "check-rip",
        help="Check that RIP identifiers are consistent.",
    )
    rip_parser.add_argument(
        "rips",
        nargs="+",
        metavar="RIP",
        help="RIP identifiers (20 digits starting with 00799999).",
    )

    return ap


def _render(
    df: pd.DataFrame,
    *,
    title: str,
    file_stem: str,
    display_mode: str,
    output_dir: Path,
) -> None:
    """Print ``df`` as a table and/or write it to a timestamped CSV file."""
    if display_mode in {"table", "both"}:
        print()
        print(f"=== {title} ===")
        if df.empty:
            print("No rows.")
        else:
            print(df.to_string(index=False))

    if display_mode in {"csv", "both"}:
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
        path = output_dir / f"{file_stem}_{timestamp}.csv"
        df.to_csv(path, index=False)
        print(f"Wrote {path} ({len(df)} rows)")


def _load_accounts(
    parser: argparse.ArgumentParser, args: argparse.Namespace, config: AppConfig
) -> pd.DataFrame:
    csv_path = Path(args.csv_path)
    if not csv_path.is_file():
        parser.error(f"CSV file not found: {csv_path}")

    column = args.column or config.account_column
    try:
        return read_client_accounts(csv_path, column=column)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def _handle_derive(
    args: argparse.Namespace, policy: str, display_mode: str, output_dir: Path
) -> None:
    results = [derive(raw, policy=policy) for raw in args.accounts]
    df = results_to_dataframe(args.accounts, results)
    _render(
        df,
        title="CCP derivation",
        file_stem="ccp_derivation",
        display_mode=display_mode,
        output_dir=output_dir,
    )

    invalid = sum(1 for r in results if not r.is_valid)
    if invalid:
        print()
        print(f"{invalid} of {len(results)} account number(s) rejected.")


def _handle_check_rip(
    args: argparse.Namespace, display_mode: str, output_dir: Path
) -> int:
    results = [check_rip(raw) for raw in args.rips]
    df = results_to_dataframe(args.rips, results)
    _render(
        df,
        title="RIP check",
        file_stem="rip_check",
        display_mode=display_mode,
        output_dir=output_dir,
    )

    invalid = sum(1 for r in results if not r.is_valid)
    print()
    print(f"Valid RIPs: {len(results) - invalid} | Invalid RIPs: {invalid}")
    return 1 if invalid else 0


def _handle_batch(
    accounts: pd.DataFrame, policy: str, display_mode: str, output_dir: Path
) -> None:
    derived = derive_accounts(accounts, column=ACCOUNT_COLUMN, policy=policy)
    _render(
        batch_view(derived),
        title="CCP batch derivation",
        file_stem="ccp_batch",
        display_mode=display_mode,
        output_dir=output_dir,
    )

    invalid = int((~derived["is_valid"]).sum())
    print()
    print(f"Total accounts: {len(derived)} | Invalid: {invalid}")


def _handle_verify(
    accounts: pd.DataFrame, policy: str, display_mode: str, output_dir: Path
) -> int:
    try:
        verified = verify_accounts(accounts, column=ACCOUNT_COLUMN, policy=policy)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    _render(
        verification_view(verified),
        title="CCP verification",
        file_stem="ccp_verification",
        display_mode=display_mode,
        output_dir=output_dir,
    )

    summary = summarize(verified)
    print()
    print(
        f"Total accounts: {summary.total} | OK: {summary.ok} | "
        f"Mismatch: {summary.mismatch} | Invalid: {summary.invalid}"
    )
    return 0 if summary.all_ok else 1


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the DZ CCP CLI.

    This function parses command-line arguments, loads the configuration,
    applies the CLI overrides, runs the requested command and renders its
    output as console tables and/or CSV files. Commands that check data
    (verify, check-rip) exit with status 1 when problems are found.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"dz_ccp version {__version__}")
        return

    if not args.command:
        parser.error("a command is required (derive, batch, verify, check-rip).")

    # 1) Load configuration
    try:
        config = load_app_config(args.config_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    # 2) Resolve CLI overrides
    policy = args.policy or config.long_account_policy
    display_mode = args.display_mode or config.display.mode
    output_dir = (
        Path(args.output_dir) if args.output_dir else config.display.output_dir
    )

    # 3) Run the command
    exit_code = 0
    if args.command == "derive":
        _handle_derive(args, policy, display_mode, output_dir)
    elif args.command == "check-rip":
        exit_code = _handle_check_rip(args, display_mode, output_dir)
    elif args.command == "batch":
        accounts = _load_accounts(parser, args, config)
        _handle_batch(accounts, policy, display_mode, output_dir)
    elif args.command == "verify":
        accounts = _load_accounts(parser, args, config)
        exit_code = _handle_verify(accounts, policy, display_mode, output_dir)

    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
