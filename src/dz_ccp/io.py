# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
I/O module for DZ CCP.

This module reads client account lists from a CSV file and normalizes them
into a consistent structure suitable for batch derivation and verification.

Expected input
--------------

Column names are case-insensitive. The only required column holds the CCP
account number; it is detected from the first of these names:

    ccp_account, ccpaccount, ccp, account_number, account

(or taken from the explicit ``column`` argument). It is renamed to
``ccp_account``.

Clients exported from the CRM usually also carry the identifiers computed
when they were saved. These optional columns are renamed so they never
collide with freshly derived values:

    - ``cle``, ``cle_ccp``, ``checkkey``, ``check_key`` -> ``stored_cle``
    - ``rip``                                         -> ``stored_rip``
    - ``ripcle``, ``rip_cle``, ``rip_key``, ``rip_check_key``
                                                      -> ``stored_rip_cle``

At most one alias per stored field may be present; several aliases of the
same field (e.g. ``cle`` and ``check_key``) raise a ValueError.

Every column is read as a string so that leading zeros survive, and missing
values become empty strings. Any other column (names, emails, ...) is kept
as-is.
"""

import os
from typing import Optional, Union

import pandas as pd

ACCOUNT_COLUMN = "ccp_account"
ACCOUNT_COLUMN_CANDIDATES = [
    "ccp_account",
    "ccpaccount",
    "ccp",
    "account_number",
    "account",
]

STORED_FIELD_ALIASES = {
    "stored_cle": ["cle", "cle_ccp", "checkkey", "check_key"],
    "stored_rip": ["rip"],
    "stored_rip_cle": ["ripcle", "rip_cle", "rip_key", "rip_check_key"],
}


def _find_column(cols: list[str], candidates: list[str]) -> Optional[str]:
    for cand in candidates:
        if cand in cols:
            return cand
    return None


def read_client_accounts(
    path: Union[str, "os.PathLike[str]"], column: Optional[str] = None
) -> pd.DataFrame:
    """
    Read a client account list from CSV and normalize its columns.

    Parameters
    ----------
    path:
        Path to the CSV file.
    column:
        Name of the account column. If omitted, it is detected from
        ``ACCOUNT_COLUMN_CANDIDATES``.

    Returns
    -------
    pandas.DataFrame
        All input rows, with the account column renamed to ``ccp_account``
        and stored identifiers renamed to ``stored_*``. Every value is a str.

    Raises
    ------
    ValueError
        If the account column cannot be found, or if several columns
        alias the same stored identifier.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    # Normalize column names to lowercase (to make the lookup case-insensitive)
    df.columns = [str(c).lower().strip() for c in df.columns]
    cols = list(df.columns)

    if column is not None:
        account_col = column.lower().strip()
        if account_col not in cols:
            raise ValueError(
                f"Account column {column!r} not found in {path}. "
                f"Available columns: {', '.join(cols)}."
            )
    else:
        account_col = _find_column(cols, ACCOUNT_COLUMN_CANDIDATES)
        if account_col is None:
            raise ValueError(
                f"Could not find a CCP account column in {path}. "
                f"Expected one of: {', '.join(ACCOUNT_COLUMN_CANDIDATES)}."
            )

    renames = {account_col: ACCOUNT_COLUMN}
    for target, aliases in STORED_FIELD_ALIASES.items():
        found = [c for c in aliases if c in cols and c != account_col]
        if len(found) > 1:
            raise ValueError(
                f"Ambiguous stored identifier columns in {path}: "
                f"{', '.join(found)} all map to {target!r}. Keep only one."
            )
        if found:
            renames[found[0]] = target

    out = df.rename(columns=renames)
    return out.fillna("")
