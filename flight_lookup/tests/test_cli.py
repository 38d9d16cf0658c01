import json
import locale
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from flight_lookup.cli import cli
from flight_lookup.config import get_settings
from flight_lookup.credentials import CredentialStore


@pytest.fixture
def storage(monkeypatch, tmp_path):
    path = tmp_path / "storage.json"
    monkeypatch.setenv("FLIGHT_STORAGE_PATH", str(path))
    monkeypatch.setenv("FLIGHT_MOCK_DELAY_S", "0")
    get_settings.cache_clear()
    saved_locale = locale.setlocale(locale.LC_TIME)
    yield path
    locale.setlocale(locale.LC_TIME, saved_locale)
    get_settings.cache_clear()


def test_lookup_with_generated_data(storage, tmp_path):
    map_file = tmp_path / "map.html"
    result = CliRunner().invoke(cli, ["lookup", "ba117", "--map-out", str(map_file)])

    assert result.exit_code == 0, result.output
    assert "BA117" in result.output
    assert "Duration" in result.output
    assert map_file.exists()


def test_lookup_json(storage):
    result = CliRunner().invoke(cli, ["lookup", "ek202", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["flight"]["iata"] == "EK202"
    assert data["aircraft"] == {"iata": "B777"}


@patch("requests.get")
def test_lookup_error_exit_code(mock_get, storage):
    CredentialStore(storage).save("abc123")
    resp = Mock(status_code=200)
    resp.json.return_value = {"data": []}
    mock_get.return_value = resp

    result = CliRunner().invoke(cli, ["lookup", "xx1"])

    assert result.exit_code == 1
    assert "Flight not found." in result.output


def test_key_commands(storage):
    runner = CliRunner()

    result = runner.invoke(cli, ["key", "set", "abc123456"])
    assert result.exit_code == 0
    assert "Settings saved!" in result.output
    assert CredentialStore(storage).load() == "abc123456"

    result = runner.invoke(cli, ["key", "show"])
    assert "*****3456" in result.output

    runner.invoke(cli, ["key", "clear"])
    assert CredentialStore(storage).load() is None
    result = runner.invoke(cli, ["key", "show"])
    assert "No access key stored" in result.output


def test_interactive_session(storage):
    lines = "\n".join(["", "dl1", ":settings", "newkey", ":quit"]) + "\n"
    result = CliRunner().invoke(cli, ["interactive"], input=lines)

    assert result.exit_code == 0, result.output
    assert "DL1" in result.output
    assert "Settings saved!" in result.output
    assert CredentialStore(storage).load() == "newkey"


def test_interactive_blank_line_does_not_reprint(storage):
    lines = "\n".join(["dl1", "", "   ", ":quit"]) + "\n"
    result = CliRunner().invoke(cli, ["interactive"], input=lines)

    assert result.exit_code == 0, result.output
    assert result.output.count("Duration") == 1
