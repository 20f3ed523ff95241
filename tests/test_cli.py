import json
import logging

import pytest
from typer.testing import CliRunner

from csv_fingerprint.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def quiet(monkeypatch):
    monkeypatch.setenv("CSVFP_LOG_LEVEL", "WARNING")


@pytest.fixture
def people_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,age\nAlice,30\nBob,\nCarl,\n", encoding="utf-8")
    return path


def test_summary(quiet, people_csv):
    result = runner.invoke(app, ["process", str(people_csv)])
    assert result.exit_code == 0
    assert "Valid rows" in result.output
    assert "Line 3: Row contains empty fields." in result.output
    assert "Line 4: Row contains empty fields." in result.output


def test_summary_preview_is_limited(quiet, monkeypatch, people_csv):
    monkeypatch.setenv("CSVFP_ERROR_PREVIEW", "1")
    result = runner.invoke(app, ["process", str(people_csv)])
    assert result.exit_code == 0
    assert "Line 4:" not in result.output
    assert "... and 1 more" in result.output


def test_json_output(quiet, people_csv):
    result = runner.invoke(app, ["process", str(people_csv), "--json"])
    assert result.exit_code == 0

    report = json.loads(result.stdout)
    assert [r["line"] for r in report["processed_rows"]] == [2]
    assert [e["line"] for e in report["errors"]] == [3, 4]


def test_strict_width_flag(quiet, tmp_path):
    path = tmp_path / "ragged.csv"
    path.write_text("a,b\n1\n", encoding="utf-8")

    result = runner.invoke(app, ["process", str(path), "--json", "--strict-width"])
    report = json.loads(result.stdout)
    assert report["errors"][0]["data"] is None


def test_missing_file(quiet, tmp_path):
    result = runner.invoke(app, ["process", str(tmp_path / "missing.csv")])
    assert result.exit_code == 1
    assert "File not found" in result.output
