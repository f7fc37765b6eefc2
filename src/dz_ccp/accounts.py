# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Batch helpers for client account lists.

This module applies the CCP derivation engine to every row of a DataFrame
(typically produced by ``io.read_client_accounts``).

Responsibilities:
- Derive the CCP key, RIP and RIP key for each account number, keeping
  invalid rows and flagging them instead of dropping them.
- Verify identifiers stored alongside the account (``stored_cle``,
  ``stored_rip``, ``stored_rip_cle``) against freshly derived values.
- Summarize a verification run.
"""

from dataclasses import dataclass

import pandas as pd

from .ccp import ValidCCP, derive
from .io import ACCOUNT_COLUMN

DERIVED_COLUMNS = [
    "account_number",
    "check_key",
    "rip",
    "rip_check_key",
    "is_valid",
    "reason",
]

# stored column -> (derived column, number of digits for zero-padding or 0)
STORED_TO_DERIVED = {
    "stored_cle": ("check_key", 2),
    "stored_rip": ("rip", 0),
    "stored_rip_cle": ("rip_check_key", 2),
}

STATUS_OK = "ok"
STATUS_MISMATCH = "mismatch"
STATUS_INVALID = "invalid"


@dataclass(frozen=True)
class VerificationSummary:
    """Counts produced by a verification run."""

    total: int
    ok: int
    mismatch: int
    invalid: int

    @property
    def all_ok(self) -> bool:
        return self.ok == self.total


def _cell_text(value: object) -> str:
    """Return a cell as text; integer-valued floats lose their '.0' suffix."""
    if value is None or pd.isna(value):
        return ""
    if pd.api.types.is_float(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def derive_accounts(
    df: pd.DataFrame,
    column: str = ACCOUNT_COLUMN,
    policy: str = "reject",
) -> pd.DataFrame:
    """Derive CCP identifiers for every row of ``df``.

    Args:
        df: DataFrame with one account number per row in ``column``.
        column: Name of the account column.
        policy: Long account policy forwarded to ``ccp.derive``.

    Returns:
        A copy of ``df`` with the columns listed in DERIVED_COLUMNS added.
        Invalid rows are kept with empty identifiers, ``is_valid`` False and
        the rejection reason in ``reason``.

        Numeric columns are accepted: a column holding missing values is
        stored by pandas as float, so 42.0 is read back as "42".

    Raises:
        ValueError: if ``column`` is missing or ``policy`` is unknown.
    """
    if column not in df.columns:
        raise ValueError(f"Account column {column!r} not found in DataFrame.")

    rows: list[dict[str, object]] = []
    for value in df[column]:
        result = derive(_cell_text(value), policy=policy)
        row = result.to_dict()
        row["reason"] = "" if isinstance(result, ValidCCP) else result.reason.value
        rows.append(row)

    out = df.copy()
    derived = pd.DataFrame(rows, columns=DERIVED_COLUMNS, index=df.index)
    for col in DERIVED_COLUMNS:
        out[col] = derived[col]
    out["is_valid"] = out["is_valid"].astype(bool)
    return out


def _normalize_stored(value: object, width: int) -> str:
    s = _cell_text(value).strip()
    if width and s.isdigit():
        return s.zfill(width)
    return s


def verify_accounts(
    df: pd.DataFrame,
    column: str = ACCOUNT_COLUMN,
    policy: str = "reject",
) -> pd.DataFrame:
    """Check stored CCP identifiers against freshly derived ones.

    Each row gets a ``status``:
      - "invalid":  the account number itself is rejected,
      - "mismatch": at least one stored identifier differs,
      - "ok":       every stored identifier matches (empty ones are skipped).

    Mismatching fields are listed in ``mismatched_fields`` using the derived
    column names (e.g. "check_key,rip").

    Stored keys are compared after zero-padding to two digits, so a key
    saved as "7" by a spreadsheet still matches "07".

    Raises:
        ValueError: if ``df`` holds none of the stored_* columns.
    """
    stored_cols = [c for c in STORED_TO_DERIVED if c in df.columns]
    if not stored_cols:
        raise ValueError(
            "No stored identifiers to verify. Expected at least one of: "
            f"{', '.join(STORED_TO_DERIVED)}."
        )

    out = derive_accounts(df, column=column, policy=policy)

    statuses: list[str] = []
    mismatches: list[str] = []
    for _, row in out.iterrows():
        if not row["is_valid"]:
            statuses.append(STATUS_INVALID)
            mismatches.append("")
            continue

        bad_fields = []
        for stored_col in stored_cols:
            derived_col, width = STORED_TO_DERIVED[stored_col]
            stored = _normalize_stored(row[stored_col], width)
            if stored and stored != row[derived_col]:
                bad_fields.append(derived_col)

        statuses.append(STATUS_MISMATCH if bad_fields else STATUS_OK)
        mismatches.append(",".join(bad_fields))

    out["status"] = pd.Series(statuses, index=out.index, dtype=object)
    out["mismatched_fields"] = pd.Series(mismatches, index=out.index, dtype=object)
    return out


def summarize(verified: pd.DataFrame) -> VerificationSummary:
    """Count rows per status in the output of ``verify_accounts``."""
    counts = verified["status"].value_counts()
    return VerificationSummary(
        total=len(verified),
        ok=int(counts.get(STATUS_OK, 0)),
        mismatch=int(counts.get(STATUS_MISMATCH, 0)),
        invalid=int(counts.get(STATUS_INVALID, 0)),
    )
