from pathlib import Path

import pytest

from anchorage.infra.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_CELL_SIZE,
    DEFAULT_ENV_FILES,
    ApiSettings,
    load_api_settings,
    load_cell_size,
    load_default_env_files,
    load_env_file,
    parse_env_text,
)

_ENV_KEYS = (
    "ANCHORAGE_API_BASE_URL",
    "ANCHORAGE_FLEET_PATH",
    "ANCHORAGE_API_TIMEOUT_S",
    "ANCHORAGE_CELL_SIZE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so monkeypatch restores keys that load_env_file writes directly.
    for key in _ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.mark.parametrize(
    "base_url,fleet_path,expected",
    [
        ("https://esa.instech.no", "api/fleets/random", "https://esa.instech.no/api/fleets/random"),
        ("https://esa.instech.no/", "/api/fleets/random", "https://esa.instech.no/api/fleets/random"),
        ("https://host.example/app", "fleets/random", "https://host.example/app/fleets/random"),
        ("https://host.example/app/", "/fleets/random", "https://host.example/fleets/random"),
        ("https://host.example", "https://other.example/api/fleets/random", "https://other.example/api/fleets/random"),
    ],
)
def test_fleet_url_resolution(base_url: str, fleet_path: str, expected: str) -> None:
    assert ApiSettings(base_url=base_url, fleet_path=fleet_path).fleet_url == expected


def test_load_api_settings_defaults() -> None:
    settings = load_api_settings()
    assert settings == ApiSettings()
    assert settings.base_url == DEFAULT_API_BASE_URL


def test_load_api_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANCHORAGE_API_BASE_URL", "http://localhost:8080")
    monkeypatch.setenv("ANCHORAGE_FLEET_PATH", "/fleets/random")
    monkeypatch.setenv("ANCHORAGE_API_TIMEOUT_S", "1.5")
    settings = load_api_settings()
    assert settings.fleet_url == "http://localhost:8080/fleets/random"
    assert settings.timeout_s == 1.5


@pytest.mark.parametrize("raw", ["soon", "-1", "0"])
def test_invalid_timeout_falls_back(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("ANCHORAGE_API_TIMEOUT_S", raw)
    assert load_api_settings().timeout_s == ApiSettings().timeout_s


def test_cell_size_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert load_cell_size() == DEFAULT_CELL_SIZE
    monkeypatch.setenv("ANCHORAGE_CELL_SIZE", "32")
    assert load_cell_size() == 32
    monkeypatch.setenv("ANCHORAGE_CELL_SIZE", "big")
    assert load_cell_size() == DEFAULT_CELL_SIZE


def test_load_env_file_parses_pairs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# fleet api\n"
        "ANCHORAGE_API_BASE_URL='http://proxy.local'\n"
        "ANCHORAGE_FLEET_PATH = \"fleets/random\"\n"
        "not a pair\n"
        "=orphan\n",
        encoding="utf-8",
    )
    load_env_file(str(env_file))
    settings = load_api_settings()
    assert settings.fleet_url == "http://proxy.local/fleets/random"


def test_load_env_file_can_keep_existing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("ANCHORAGE_CELL_SIZE=20\n", encoding="utf-8")
    monkeypatch.setenv("ANCHORAGE_CELL_SIZE", "50")
    load_env_file(str(env_file), override_existing=False)
    assert load_cell_size() == 50
    load_env_file(str(env_file))
    assert load_cell_size() == 20


def test_load_default_env_files_later_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    first = tmp_path / "first.env"
    second = tmp_path / "second.env"
    first.write_text("ANCHORAGE_CELL_SIZE=10\n", encoding="utf-8")
    second.write_text("ANCHORAGE_CELL_SIZE=12\n", encoding="utf-8")
    load_default_env_files(paths=[str(first), str(tmp_path / "missing.env"), str(second)])
    assert load_cell_size() == 12


def test_default_env_files_are_read_from_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert DEFAULT_ENV_FILES == (".env", ".env.local")
    (tmp_path / ".env").write_text("ANCHORAGE_CELL_SIZE=24\nANCHORAGE_FLEET_PATH=fleets/random\n", encoding="utf-8")
    (tmp_path / ".env.local").write_text("ANCHORAGE_CELL_SIZE=30\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    load_default_env_files()

    assert load_cell_size() == 30
    assert load_api_settings().fleet_path == "fleets/random"


def test_parse_env_text_skips_noise() -> None:
    text = "\n# comment\nA=1\n B = 'two words' \nnot a pair\n=orphan\nC=\"x=y\"\nEMPTY=\n"
    assert parse_env_text(text) == {"A": "1", "B": "two words", "C": "x=y", "EMPTY": ""}
