# tests/test_config.py

from pathlib import Path

import pytest

from dz_ccp.config import load_app_config


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "dz_ccp_config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_when_no_config_file(tmp_path, monkeypatch) -> None:
    """Without dz_ccp_config.toml in the CWD, built-in defaults are used."""
    monkeypatch.chdir(tmp_path)

    config = load_app_config()

    assert config.long_account_policy == "reject"
    assert config.account_column is None
    assert config.display.mode == "table"
    expected_output = (tmp_path / "data/output").resolve()
    assert config.display.output_dir.resolve() == expected_output


def test_default_file_in_cwd_is_loaded(tmp_path, monkeypatch) -> None:
    """dz_ccp_config.toml in the CWD is picked up automatically."""
    _write_config(tmp_path, '[ccp]\nlong_account_policy = "clamp"\n')
    monkeypatch.chdir(tmp_path)

    assert load_app_config().long_account_policy == "clamp"


def test_full_config_is_parsed(tmp_path) -> None:
    """All sections are read and output_dir is resolved next to the file."""
    path = _write_config(
        tmp_path,
        "[ccp]\n"
        'long_account_policy = "CLAMP"\n'
        "[io]\n"
        'account_column = " CCP "\n'
        "[display]\n"
        'mode = "both"\n'
        'output_dir = "exports"\n',
    )

    config = load_app_config(str(path))

    assert config.long_account_policy == "clamp"
    assert config.account_column == "ccp"
    assert config.display.mode == "both"
    assert config.display.output_dir == (tmp_path / "exports").resolve()


def test_empty_account_column_means_detection(tmp_path) -> None:
    """An empty io.account_column falls back to column detection."""
    path = _write_config(tmp_path, '[io]\naccount_column = ""\n')

    assert load_app_config(str(path)).account_column is None


def test_missing_explicit_config_raises(tmp_path) -> None:
    """An explicit path that does not exist is an error."""
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "missing.toml"))


def test_invalid_toml_raises(tmp_path) -> None:
    """Unparsable TOML is reported as a ValueError."""
    path = _write_config(tmp_path, "[ccp\nlong_account_policy = ")

    with pytest.raises(ValueError, match="Failed to parse TOML"):
        load_app_config(str(path))


@pytest.mark.parametrize(
    "content",
    [
        '[ccp]\nlong_account_policy = "truncate"\n',
        '[display]\nmode = "html"\n',
    ],
)
def test_unsupported_values_raise(tmp_path, content: str) -> None:
    """Unknown policies and display modes are rejected."""
    path = _write_config(tmp_path, content)

    with pytest.raises(ValueError):
        load_app_config(str(path))
