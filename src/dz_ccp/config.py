# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for DZ CCP.

This module is responsible for:
- loading the application configuration from a TOML file,
- falling back to built-in defaults when no configuration file exists,
- exposing typed dataclasses used by the CLI.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import]

from .ccp import LONG_ACCOUNT_POLICIES

DEFAULT_CONFIG_FILENAME = "dz_ccp_config.toml"
DISPLAY_MODES = ("table", "csv", "both")


@dataclass(frozen=True)
class DisplayConfig:
    """Where and how results are rendered."""

    mode: str
    output_dir: Path


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for DZ CCP.

    This aggregates:
    - the policy applied to account numbers longer than 10 digits,
    - the name of the account column in client CSV files (None = detect),
    - display options for tables and CSV exports.
    """

    long_account_policy: str
    account_column: Optional[str]
    display: DisplayConfig


def default_config(base_dir: Optional[Path] = None) -> AppConfig:
    """Return the configuration used when no TOML file is available."""
    base = base_dir if base_dir is not None else Path.cwd()
    return AppConfig(
        long_account_policy="reject",
        account_column=None,
        display=DisplayConfig(mode="table", output_dir=(base / "data/output")),
    )


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed or is not a table.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Invalid TOML root type in {path}, expected a table.")

    return data


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        return {}
    return section


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the DZ CCP configuration from a TOML file.

    Expected sections in the TOML file
    ----------------------------------
    [ccp]
        long_account_policy: "reject" (default) or "clamp".

    [io]
        account_column: name of the CCP account column in client CSV files.
        If omitted, the column is detected from common names.

    [display]
        mode: "table", "csv" or "both".
        output_dir: directory for CSV exports, resolved relative to the
        directory of the TOML file.

    Parameters
    ----------
    config_path : str, optional
        Path to the TOML file. When omitted, ``dz_ccp_config.toml`` in the
        current directory is used if it exists, otherwise defaults apply.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    FileNotFoundError
        If an explicit ``config_path`` does not exist.
    ValueError
        If the file cannot be parsed or holds unsupported values.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILENAME).resolve()
        if not config_file.is_file():
            return default_config()
    else:
        config_file = Path(config_path).resolve()

    raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) CCP section
    ccp_section = _section(raw, "ccp")
    policy = str(ccp_section.get("long_account_policy") or "reject").lower()
    if policy not in LONG_ACCOUNT_POLICIES:
        raise ValueError(
            "Invalid value for 'ccp.long_account_policy' in the configuration. "
            f"Expected one of: {', '.join(LONG_ACCOUNT_POLICIES)}."
        )

    # 2) IO section
    io_section = _section(raw, "io")
    raw_column = io_section.get("account_column")
    account_column: Optional[str]
    if raw_column is None or str(raw_column).strip() == "":
        account_column = None
    else:
        account_column = str(raw_column).strip().lower()

    # 3) Display section
    display_section = _section(raw, "display")
    mode = str(display_section.get("mode", "table")).lower()
    if mode not in DISPLAY_MODES:
        raise ValueError(
            "Invalid value for 'display.mode' in the configuration. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )
    output_raw = display_section.get("output_dir") or "data/output"
    output_dir = (base_dir / str(output_raw)).resolve()

    return AppConfig(
        long_account_policy=policy,
        account_column=account_column,
        display=DisplayConfig(mode=mode, output_dir=output_dir),
    )
