# tests/test_ccp.py

import pytest

from dz_ccp.ccp import (
    RIP_LENGTH,
    RIP_PREFIX,
    InvalidCCP,
    InvalidReason,
    ValidCCP,
    check_rip,
    compute_check_key,
    compute_rip,
    derive,
    format_ccp,
)


def test_reference_account_1234567890() -> None:
    """Reference account: key 45, RIP 00799999 + account + 06."""
    result = derive("1234567890")

    assert isinstance(result, ValidCCP)
    assert result.is_valid is True
    assert result.account_number == "1234567890"
    assert result.check_key == "45"
    assert result.rip == "00799999123456789006"
    assert result.rip_check_key == "06"


@pytest.mark.parametrize(
    "raw, key, rip",
    [
        ("42", "28", "00799999000000004280"),
        ("9876543210", "65", "00799999987654321082"),
        ("0", "00", "00799999000000000012"),
        # (4 * 100) % 97 == 12: candidate is exactly 97, RIP key "00"
        ("4", "16", "00799999000000000400"),
    ],
)
def test_known_values(raw: str, key: str, rip: str) -> None:
    """derive should reproduce hand-computed keys and RIPs."""
    result = derive(raw)

    assert isinstance(result, ValidCCP)
    assert result.check_key == key
    assert result.rip == rip
    assert result.rip_check_key == rip[-2:]


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_empty_input_is_invalid_not_an_error(raw) -> None:
    """Empty or whitespace-only input is the 'nothing entered yet' state."""
    result = derive(raw)

    assert isinstance(result, InvalidCCP)
    assert result.is_valid is False
    assert result.reason is InvalidReason.EMPTY


@pytest.mark.parametrize(
    "raw", ["abc", "12a4", "-42", "+42", "4.2", "4 2", "12 34", "٤٢"]
)
def test_non_digit_input_is_invalid(raw: str) -> None:
    """Signs, decimals, interior spaces and non-ASCII digits are rejected."""
    result = derive(raw)

    assert isinstance(result, InvalidCCP)
    assert result.reason is InvalidReason.NOT_DIGITS


def test_invalid_result_has_empty_fields() -> None:
    """An invalid result exposes only empty identifiers."""
    assert derive("abc").to_dict() == {
        "account_number": "",
        "check_key": "",
        "rip": "",
        "rip_check_key": "",
        "is_valid": False,
    }


def test_surrounding_whitespace_is_trimmed() -> None:
    """' 42 ' and '42' derive the same identifiers."""
    assert derive(" 42 ") == derive("42")


def test_padding_does_not_change_result() -> None:
    """'42' and '0000000042' share the same key and RIP."""
    short = derive("42")
    padded = derive("0000000042")

    assert isinstance(short, ValidCCP)
    assert short.account_number == "0000000042"
    assert short == padded


def test_leading_zeros_beyond_ten_digits_are_not_significant() -> None:
    """Extra leading zeros are accepted when the value fits in 10 digits."""
    assert derive("00001234567890") == derive("1234567890")


def test_long_account_rejected_by_default() -> None:
    """Accounts needing more than 10 digits are rejected by default."""
    result = derive("12345678901")

    assert isinstance(result, InvalidCCP)
    assert result.reason is InvalidReason.TOO_LONG


def test_long_account_clamped_on_request() -> None:
    """With the 'clamp' policy, the rightmost 10 digits are used."""
    assert derive("12345678901", policy="clamp") == derive("2345678901")


def test_unknown_policy_raises() -> None:
    """An unknown policy is a programming error."""
    with pytest.raises(ValueError):
        derive("42", policy="truncate")


def test_every_rip_residue_gives_a_two_digit_key() -> None:
    """(n * 100) % 97 covers every residue for n in 0..96."""
    residues = set()
    for n in range(97):
        result = derive(str(n))
        assert isinstance(result, ValidCCP)

        residues.add((n * 100) % 97)
        key = int(result.rip_check_key)
        assert 0 <= key <= 96
        assert len(result.rip) == RIP_LENGTH == 20
        assert result.rip.startswith(RIP_PREFIX)
        assert result.rip.endswith(result.rip_check_key)

    assert residues == set(range(97))


def test_derivation_is_deterministic_and_round_trips() -> None:
    """Re-deriving from account_number gives the same result."""
    for raw in ["1", "42", "700012", "1234567890", "9999999999"]:
        first = derive(raw)
        assert isinstance(first, ValidCCP)
        assert derive(raw) == first
        assert derive(first.account_number) == first


def test_compute_check_key_requires_ten_digits() -> None:
    """compute_check_key only accepts normalized account numbers."""
    assert compute_check_key("0000000042") == "28"
    with pytest.raises(ValueError):
        compute_check_key("42")
    with pytest.raises(ValueError):
        compute_check_key("00000000x2")


def test_compute_rip_rejects_values_over_ten_digits() -> None:
    """compute_rip parses the account as an integer of at most 10 digits."""
    assert compute_rip("42") == "00799999000000004280"
    with pytest.raises(ValueError):
        compute_rip("10000000000")
    with pytest.raises(ValueError):
        compute_rip("4-2")


def test_check_rip_accepts_derived_rips() -> None:
    """check_rip returns the same result as derive for a consistent RIP."""
    expected = derive("1234567890")

    assert check_rip("00799999123456789006") == expected
    assert check_rip(" 00799999123456789006 ") == expected


@pytest.mark.parametrize(
    "rip, reason",
    [
        ("", InvalidReason.EMPTY),
        ("0079999912345678900x", InvalidReason.NOT_DIGITS),
        ("00799999123456789007", InvalidReason.BAD_RIP),
        ("00899999123456789006", InvalidReason.BAD_RIP),
        ("0079999912345678906", InvalidReason.BAD_RIP),
    ],
)
def test_check_rip_rejects_inconsistent_rips(rip: str, reason: InvalidReason) -> None:
    """Wrong key, prefix or length are reported as invalid."""
    result = check_rip(rip)

    assert isinstance(result, InvalidCCP)
    assert result.reason is reason


def test_format_ccp() -> None:
    """format_ccp renders '<account>-<key>' and '' for invalid input."""
    assert format_ccp(derive("42")) == "0000000042-28"
    assert format_ccp(derive("abc")) == ""


@pytest.mark.parametrize(
    "raw, policy, expected",
    [
        ("9" * 5000, "reject", InvalidReason.TOO_LONG),
        ("9" * 5000, "clamp", "9999999999"),
        ("0" * 5000, "reject", "0000000000"),
        ("0" * 5000, "clamp", "0000000000"),
    ],
)
def test_very_long_inputs_never_raise(raw: str, policy: str, expected) -> None:
    """Thousands of digits are rejected, clamped or reduced to zero cleanly."""
    result = derive(raw, policy=policy)

    if isinstance(expected, InvalidReason):
        assert isinstance(result, InvalidCCP)
        assert result.reason is expected
    else:
        assert isinstance(result, ValidCCP)
        assert result.account_number == expected
        assert result == derive(expected)


def test_check_rip_very_long_input() -> None:
    """An over-long digit string is a bad RIP, not an error."""
    result = check_rip("9" * 5000)

    assert isinstance(result, InvalidCCP)
    assert result.reason is InvalidReason.BAD_RIP
