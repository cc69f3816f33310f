"""End-to-end tests of the click commands against local fixture feeds."""

import json
import sys
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner


# Make the src/ directory importable for command modules
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

import truth_redacted  # noqa: E402
from truth_redacted.cli import cli  # noqa: E402
from truth_redacted.commands import download as download_cmd  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.setenv("TRUTH_REDACTED_DATA_DIR", str(tmp_path / "data"))
    feed_uri = (FIXTURES / "sample_feed.xml").resolve().as_uri()
    path = tmp_path / "config.yaml"
    path.write_text(
        textwrap.dedent(
            f"""
            feed:
              url: "{feed_uri}"
              format: "auto"
              pairing: "redact"
            redaction:
              mode: "soften"
            server:
              port: 3000
            download:
              output: "snapshots/latest.json"
            """
        ).strip() + "\n",
        encoding="utf-8",
    )
    return path


def test_status_reports_valid_config(config_path):
    result = CliRunner().invoke(cli, ["--config", str(config_path), "status"])

    assert result.exit_code == 0
    assert "✅ Configuration is valid" in result.output
    assert "sample_feed.xml" in result.output
    assert "Redaction mode: soften" in result.output


def test_status_reports_invalid_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("feed: {format: xml}\nserver: {}\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--config", str(path), "status"])

    assert "❌ Configuration validation failed" in result.output


def test_load_writes_normalized_entries(config_path, tmp_path):
    output = tmp_path / "out" / "entries.json"

    result = CliRunner().invoke(cli, ["--config", str(config_path), "load", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "✅ Loaded 3 entries (3 changes) from live feed" in result.output

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["origin"] == "live"
    assert [e["source"] for e in payload["entries"]] == ["defense.gov", "home.treasury.gov", "epa.gov"]
    assert payload["stats"]["documents"] == 3
    for entry in payload["entries"]:
        assert set(entry["changes"][0]) == {"from", "to"}


def test_load_override_falls_back_to_sample(config_path, tmp_path):
    missing = tmp_path / "missing.xml"
    output = tmp_path / "entries.json"

    result = CliRunner().invoke(
        cli, ["--config", str(config_path), "load", "--url", str(missing), "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    assert "from sample data" in result.output
    assert json.loads(output.read_text(encoding="utf-8"))["origin"] == "sample"


def test_load_with_invalid_config_exits_nonzero(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("feed: {}\nserver: {mode: cloud}\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--config", str(path), "load"])

    assert result.exit_code == 1
    assert "❌ Load command failed" in result.output


def test_redact_command(config_path):
    runner = CliRunner()

    softened = runner.invoke(cli, ["--config", str(config_path), "redact", "Secret crisis in Iraq"])
    assert softened.exit_code == 0
    assert "Secret situation in the region" in softened.output
    assert "Watch-list words: secret, crisis" in softened.output

    masked = runner.invoke(cli, ["--config", str(config_path), "redact", "--mode", "mask", "12 files"])
    assert "█████ files" in masked.output


def test_show_prints_plain_blocks(config_path):
    result = CliRunner().invoke(
        cli, ["--config", str(config_path), "show", "-n", "2", "--seed", "7", "--no-color"]
    )

    assert result.exit_code == 0, result.output
    assert "Documents: 3 | Changes: 3 | Words Redacted:" in result.output
    assert "(sample data)" not in result.output
    assert result.output.count("Source: ") == 2
    assert " → " in result.output


def test_download_resolves_output_in_data_dir(config_path, tmp_path, monkeypatch):
    calls = {}

    def fake_download(url, output, http_client=None):
        calls["url"] = url
        Path(output).write_text("{}", encoding="utf-8")
        return {}

    monkeypatch.setattr(download_cmd, "download_snapshot", fake_download)

    result = CliRunner().invoke(cli, ["--config", str(config_path), "download"])

    assert result.exit_code == 0, result.output
    expected = (tmp_path / "data").resolve() / "snapshots" / "latest.json"
    assert expected.exists()
    assert calls["url"] is None
    assert "✅ Data saved to" in result.output


def test_python_api(config_path):
    assert truth_redacted.redact("A 15% cut", mode="mask", config_path=str(config_path)) == "A █████ cut"

    info = truth_redacted.status(config_path=str(config_path))
    assert info["valid"] is True
    assert info["redaction_mode"] == "soften"

    payload = truth_redacted.load(config_path=str(config_path))
    assert payload["stats"]["changes"] == 3
