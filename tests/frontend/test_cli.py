"""Tests for the ``favorites`` click commands."""

from __future__ import annotations

from click.testing import CliRunner

from frontend import cli as cli_module


def test_edit_without_fields_is_a_usage_error() -> None:
    runner = CliRunner()

    result = runner.invoke(cli_module.cli, ["edit", "3"])

    assert result.exit_code == 2
    assert "at least one field" in result.output


def test_add_rejects_unknown_type() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli_module.cli,
        [
            "add",
            "--title",
            "Inception",
            "--type",
            "FILM",
            "--director",
            "Christopher Nolan",
            "--budget",
            "$160M",
            "--location",
            "LA",
            "--duration",
            "148 min",
            "--year-time",
            "2010",
        ],
    )

    assert result.exit_code == 2
    assert "FILM" in result.output


def test_delete_cancelled_without_confirmation(monkeypatch) -> None:
    called: list[int] = []

    async def fake_delete(api_url, favorite_id):
        called.append(favorite_id)

    monkeypatch.setattr(cli_module, "_delete_async", fake_delete)
    runner = CliRunner()

    result = runner.invoke(cli_module.cli, ["delete", "5"], input="n\n")

    assert result.exit_code == 0
    assert called == []


def test_delete_with_yes_skips_prompt(monkeypatch) -> None:
    called: list[tuple[str | None, int]] = []

    async def fake_delete(api_url, favorite_id):
        called.append((api_url, favorite_id))

    monkeypatch.setattr(cli_module, "_delete_async", fake_delete)
    runner = CliRunner()

    result = runner.invoke(
        cli_module.cli, ["--api-url", "http://api.test", "delete", "5", "--yes"]
    )

    assert result.exit_code == 0
    assert called == [("http://api.test", 5)]


def test_collect_fields_maps_option_names_to_wire_keys() -> None:
    data = cli_module._collect_fields(
        {"title": "Dune", "year_time": "2021", "director": None}
    )

    assert data == {"title": "Dune", "yearTime": "2021"}
