import argparse
import json

import pytest

from poster_library import cli
from poster_library.config import Settings


@pytest.fixture
def parser():
    return cli.build_parser()


@pytest.fixture
def manifest_file(tmp_path, manifest_payload):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest_payload), encoding="utf-8")
    return path


@pytest.fixture
def settings(monkeypatch, manifest_file):
    configured = Settings(_env_file=None, manifest_path=manifest_file)
    monkeypatch.setattr(cli, "get_settings", lambda: configured)
    return configured


def test_build_parser_has_commands(parser: argparse.ArgumentParser):
    assert parser.parse_args(["serve"]).command == "serve"
    assert parser.parse_args(["sections"]).command == "sections"

    search_args = parser.parse_args(["search", "--query", "eye"])
    assert search_args.command == "search"
    assert search_args.section == "ALL"

    suggest_args = parser.parse_args(["suggest", "bet"])
    assert suggest_args.query == "bet"


def test_main_serve_dispatch(monkeypatch):
    called = {}

    async def fake_serve(settings, *, host, port, log_level):
        called["args"] = {"settings": settings, "host": host, "port": port, "log_level": log_level}

    monkeypatch.setattr(cli, "get_settings", lambda: "settings")
    monkeypatch.setattr(cli, "serve_http", fake_serve)

    exit_code = cli.main(["serve", "--port", "9000", "--log-level", "DEBUG"])
    assert exit_code == 0
    assert called["args"] == {
        "settings": "settings",
        "host": "127.0.0.1",
        "port": 9000,
        "log_level": "DEBUG",
    }


def test_sections_command(settings, capsys):
    assert cli.main(["sections"]) == 0
    out = capsys.readouterr().out
    assert "All Sections: 5 poster(s)" in out
    assert "eye-ear: Eye & Ear (2)" in out


def test_search_command(settings, capsys):
    assert cli.main(["search", "--section", "fish_aquatics", "--query", "gold"]) == 0
    out = capsys.readouterr().out
    assert "Fish & Aquatics: 1 poster(s)" in out
    assert "Goldfish Anatomy" in out
    assert "Betta Care" not in out


def test_suggest_command(settings, capsys):
    assert cli.main(["suggest", "betta"]) == 0
    out = capsys.readouterr().out
    assert "Suggestions for 'betta': 1" in out
    assert "Betta Care [Fish & Aquatics] (betta, fish, aquarium)" in out


def test_missing_manifest_shows_empty_catalog(settings, tmp_path, capsys):
    assert cli.main(["search", "--manifest", str(tmp_path / "gone.json")]) == 0
    out = capsys.readouterr().out
    assert "Manifest unavailable" in out
    assert "manifest.json missing/failed" in out
