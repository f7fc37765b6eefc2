# DZ CCP - Algeria postal account (CCP) key and RIP derivation
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
CCP derivation engine for DZ CCP.

Given a raw CCP (Compte Courant Postal) account number, this module computes:

- the CCP check key ("clé"),
- the RIP (Relevé d'Identité Postal) identifier derived from the account,
- the RIP check key (the last two digits of the RIP).

Everything here is pure computation: no I/O, no shared state. The module is
safe to call from any thread, and ``derive`` never raises for user input.
Input problems are returned as data (an ``InvalidCCP`` instance) so that
callers can branch on ``result.is_valid``.

Algorithm
---------

1) Normalize: left-pad the digit string with '0' to 10 characters.

2) CCP key: read the 10 digits from right to left, weighting them with the
   multipliers 4, 5, ..., 13, and keep the sum modulo 100::

       key = sum(d[9 - k] * (4 + k) for k in range(10)) % 100

3) RIP: with ``n`` the account as an integer::

       remainder = (n * 100) % 97
       candidate = remainder + 85
       x = 97 - (candidate - 97) if candidate > 97 else 97 - candidate
       rip = "00799999" + f"{n:010d}" + f"{x:02d}"

   "007" is the bank code of Algérie Poste and "99999" the branch code.

4) RIP key: the last two characters of the RIP.

Example: account "1234567890" has the key "45" and the RIP
"00799999123456789006", whose own key is "06".
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

ACCOUNT_WIDTH = 10
RIP_PREFIX = "00799999"
RIP_LENGTH = len(RIP_PREFIX) + ACCOUNT_WIDTH + 2

LONG_ACCOUNT_POLICIES = ("reject", "clamp")

# ASCII digits only: str.isdigit() and \d also accept other Unicode digits.
_DIGITS_RE = re.compile(r"[0-9]+")


class InvalidReason(str, Enum):
    """Why an input could not be turned into CCP identifiers."""

    EMPTY = "empty"
    NOT_DIGITS = "not_digits"
    TOO_LONG = "too_long"
    BAD_RIP = "bad_rip"


@dataclass(frozen=True)
class ValidCCP:
    """
    Identifiers derived from a valid CCP account number.

    Attributes:
        account_number: Account number zero-padded to 10 digits.
        check_key: Two-digit CCP key ("clé").
        rip: Full RIP identifier (bank + branch + account + RIP key).
    """

    account_number: str
    check_key: str
    rip: str

    @property
    def rip_check_key(self) -> str:
        """Two-digit RIP key, always the trailing characters of ``rip``."""
        return self.rip[-2:].zfill(2)

    @property
    def is_valid(self) -> bool:
        return True

    def to_dict(self) -> dict[str, object]:
        return {
            "account_number": self.account_number,
            "check_key": self.check_key,
            "rip": self.rip,
            "rip_check_key": self.rip_check_key,
            "is_valid": True,
        }


@dataclass(frozen=True)
class InvalidCCP:
    """An input rejected by validation. Carries no derived identifiers."""

    raw: str
    reason: InvalidReason

    @property
    def is_valid(self) -> bool:
        return False

    def to_dict(self) -> dict[str, object]:
        return {
            "account_number": "",
            "check_key": "",
            "rip": "",
            "rip_check_key": "",
            "is_valid": False,
        }


CCPResult = Union[ValidCCP, InvalidCCP]


def _is_ascii_digits(value: str) -> bool:
    return _DIGITS_RE.fullmatch(value) is not None


def compute_check_key(account: str) -> str:
    """
    Compute the two-digit CCP key of a normalized account number.

    Args:
        account: Exactly 10 ASCII digits (already zero-padded).

    Returns:
        The key as a zero-padded two-character string.

    Raises:
        ValueError: if ``account`` is not exactly 10 ASCII digits.
    """
    if len(account) != ACCOUNT_WIDTH or not _is_ascii_digits(account):
        raise ValueError(
            f"Expected a {ACCOUNT_WIDTH}-digit account number, got {account!r}."
        )

    total = 0
    index = ACCOUNT_WIDTH - 1
    for multiplier in range(4, 14):
        total += int(account[index]) * multiplier
        index -= 1

    return f"{total % 100:02d}"


def compute_rip(account: str) -> str:
    """
    Build the RIP identifier of a CCP account number.

    Leading zeros in ``account`` are not significant: the account is parsed
    as an integer and re-padded to 10 digits inside the RIP.

    Raises:
        ValueError: if ``account`` is not made of ASCII digits or does not
            fit in 10 digits.
    """
    if not _is_ascii_digits(account):
        raise ValueError(
            f"Account number must contain digits only, got {account!r}."
        )

    number = int(account)
    if number >= 10**ACCOUNT_WIDTH:
        raise ValueError(
            f"Account number {account!r} does not fit in {ACCOUNT_WIDTH} digits."
        )

    remainder = (number * 100) % 97
    candidate = remainder + 85
    if candidate > 97:
        x = 97 - (candidate - 97)
    else:
        x = 97 - candidate

    # remainder in [0, 96] keeps x in [0, 96], so the key is two digits.
    assert 0 <= x < 97, f"RIP key out of range: {x}"

    return f"{RIP_PREFIX}{number:0{ACCOUNT_WIDTH}d}{x:02d}"


def normalize_account(digits: str) -> str:
    """
    Drop non-significant leading zeros, then left-pad to 10 characters.

    Significant digits are never removed: "00001234567890" becomes
    "1234567890" and "42" becomes "0000000042". The result is longer than
    10 characters only when the account value itself needs more than 10
    digits.
    """
    return digits.lstrip("0").zfill(ACCOUNT_WIDTH)


def derive(raw_input: Optional[str], policy: str = "reject") -> CCPResult:
    """
    Validate a raw CCP account number and derive its identifiers.

    Args:
        raw_input: Account number as typed by the user. Surrounding
            whitespace is ignored. ``None`` is treated as an empty input.
        policy: What to do with accounts needing more than 10 digits:
            "reject" returns an InvalidCCP (reason TOO_LONG), "clamp" keeps
            the rightmost 10 digits. Under "clamp", the key, the RIP and
            ``account_number`` are all computed from those 10 digits, not
            from the full input.

    Returns:
        A ValidCCP with every identifier, or an InvalidCCP describing why
        the input was rejected. No exception is raised for any string input.

    Raises:
        ValueError: if ``policy`` is not one of LONG_ACCOUNT_POLICIES.
    """
    if policy not in LONG_ACCOUNT_POLICIES:
        raise ValueError(
            f"Unknown long account policy: {policy!r}. "
            f"Expected one of: {', '.join(LONG_ACCOUNT_POLICIES)}."
        )

    raw = "" if raw_input is None else str(raw_input)
    value = raw.strip()

    if not value:
        return InvalidCCP(raw=raw, reason=InvalidReason.EMPTY)

    if not _is_ascii_digits(value):
        return InvalidCCP(raw=raw, reason=InvalidReason.NOT_DIGITS)

    account = normalize_account(value)
    if len(account) > ACCOUNT_WIDTH:
        if policy == "reject":
            return InvalidCCP(raw=raw, reason=InvalidReason.TOO_LONG)
        account = account[-ACCOUNT_WIDTH:]

    return ValidCCP(
        account_number=account,
        check_key=compute_check_key(account),
        rip=compute_rip(account),
    )


def check_rip(raw_rip: Optional[str]) -> CCPResult:
    """
    Validate an existing RIP identifier.

    The RIP must be 20 ASCII digits starting with "00799999", and its last
    two digits must match the key recomputed from the embedded account.

    Returns:
        The ValidCCP derived from the embedded account number when the RIP
        is consistent, otherwise an InvalidCCP (EMPTY, NOT_DIGITS or BAD_RIP).
    """
    raw = "" if raw_rip is None else str(raw_rip)
    value = raw.strip()

    if not value:
        return InvalidCCP(raw=raw, reason=InvalidReason.EMPTY)

    if not _is_ascii_digits(value):
        return InvalidCCP(raw=raw, reason=InvalidReason.NOT_DIGITS)

    if len(value) != RIP_LENGTH or not value.startswith(RIP_PREFIX):
        return InvalidCCP(raw=raw, reason=InvalidReason.BAD_RIP)

    account = value[len(RIP_PREFIX) : len(RIP_PREFIX) + ACCOUNT_WIDTH]
    result = derive(account)
    if not isinstance(result, ValidCCP) or result.rip != value:
        return InvalidCCP(raw=raw, reason=InvalidReason.BAD_RIP)

    return result


def format_ccp(result: CCPResult) -> str:
    """Return the "<account>-<key>" display form, or "" for invalid results."""
    if not isinstance(result, ValidCCP):
        return ""
    return f"{result.account_number}-{result.check_key}"
