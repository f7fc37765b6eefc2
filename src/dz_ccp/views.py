# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for DZ CCP.

This module turns derivation results into DataFrames ready for display
(``DataFrame.to_string``) or CSV export. It does not compute anything: the
identifiers come from ``ccp.derive`` / ``ccp.check_rip`` or from the batch
helpers in ``accounts``.

Column order puts the CCP columns first, then any extra input columns
(client names, emails, ...) in their original order.
"""

from collections.abc import Iterable

import pandas as pd

from .accounts import DERIVED_COLUMNS
from .ccp import CCPResult, ValidCCP, format_ccp
from .io import ACCOUNT_COLUMN

RESULT_COLUMNS = ["input", "ccp", *DERIVED_COLUMNS]


def results_to_dataframe(
    inputs: Iterable[str], results: Iterable[CCPResult]
) -> pd.DataFrame:
    """
    Convert (input, result) pairs into a DataFrame.

    The resulting DataFrame has the following columns:
        - input:          Raw value as given by the user.
        - ccp:            "<account>-<key>" display form, empty if invalid.
        - account_number, check_key, rip, rip_check_key, is_valid
        - reason:         Rejection reason, empty for valid results.
    """
    rows: list[dict[str, object]] = []
    for raw, result in zip(inputs, results):
        row: dict[str, object] = {"input": raw, "ccp": format_ccp(result)}
        row.update(result.to_dict())
        row["reason"] = "" if isinstance(result, ValidCCP) else result.reason.value
        rows.append(row)

    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def _ordered(df: pd.DataFrame, leading: list[str]) -> pd.DataFrame:
    first = [c for c in leading if c in df.columns]
    rest = [c for c in df.columns if c not in first]
    return df[first + rest].reset_index(drop=True)


def batch_view(derived: pd.DataFrame) -> pd.DataFrame:
    """Reorder the output of ``accounts.derive_accounts`` for display."""
    return _ordered(derived, [ACCOUNT_COLUMN, *DERIVED_COLUMNS])


def verification_view(verified: pd.DataFrame) -> pd.DataFrame:
    """Reorder the output of ``accounts.verify_accounts`` for display."""
    leading = [
        ACCOUNT_COLUMN,
        "status",
        "mismatched_fields",
        "check_key",
        "stored_cle",
        "rip",
        "stored_rip",
        "rip_check_key",
        "stored_rip_cle",
        "account_number",
        "is_valid",
        "reason",
    ]
    return _ordered(verified, leading)
