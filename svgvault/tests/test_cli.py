"""Tests for the svault command line."""

import json
import pytest
from click.testing import CliRunner

from svgvault.cli.vault import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    # Keep config discovery away from the developer's files
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return CliRunner()


def test_index(runner, sample_vault):
    result = runner.invoke(cli, ["index", str(sample_vault)])

    assert result.exit_code == 0, result.output
    assert "Indexed 4 items" in result.output
    assert "#ff0000" in result.output
    assert (sample_vault / ".svgwiz.index.json").exists()


def test_index_json(runner, sample_vault):
    result = runner.invoke(cli, ["index", str(sample_vault), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["count"] == 4
    assert data["version"] == 1


def test_index_invalid_root(runner, tmp_path):
    result = runner.invoke(cli, ["index", str(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Invalid rootDir" in result.output


def test_search(runner, sample_vault):
    runner.invoke(cli, ["index", str(sample_vault)])
    result = runner.invoke(cli, ["search", str(sample_vault), "star"])

    assert result.exit_code == 0
    assert "Results: 3" in result.output
    assert "moon.svg" in result.output


def test_search_filters_json(runner, sample_vault):
    runner.invoke(cli, ["index", str(sample_vault)])
    result = runner.invoke(cli, [
        "search", str(sample_vault), "--min-paths", "2", "--max-paths", "5", "--json"
    ])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [item["name"] for item in data["items"]] == ["comet.svg"]
    assert data["count"] == 1


def test_search_fill(runner, sample_vault):
    runner.invoke(cli, ["index", str(sample_vault)])
    result = runner.invoke(cli, ["search", str(sample_vault), "--fill", "#FF0000", "--json"])

    data = json.loads(result.stdout)
    assert [item["name"] for item in data["items"]] == ["star-icon.svg"]


def test_search_without_index(runner, vault):
    result = runner.invoke(cli, ["search", str(vault), "anything"])

    assert result.exit_code == 0
    assert "No results found" in result.output


def test_colors(runner, sample_vault):
    runner.invoke(cli, ["index", str(sample_vault)])
    result = runner.invoke(cli, ["colors", str(sample_vault)])

    assert result.exit_code == 0
    assert "#00ff00" in result.output
    assert "starlight" in result.output


def test_colors_not_indexed(runner, vault):
    result = runner.invoke(cli, ["colors", str(vault)])

    assert result.exit_code == 0
    assert "not indexed" in result.output


def test_config_option(runner, sample_vault, tmp_path):
    config_path = tmp_path / "custom.yaml"
    config_path.write_text("indexer:\n  sidecar_name: custom-index.json\n")

    result = runner.invoke(cli, ["--config", str(config_path), "index", str(sample_vault)])

    assert result.exit_code == 0
    assert (sample_vault / "custom-index.json").exists()
    assert not (sample_vault / ".svgwiz.index.json").exists()
