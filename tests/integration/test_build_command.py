from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from catipedia.build.hashes import content_hash
from catipedia.cli.main import cli

CSS = "/* cards */\n.card {\n    color: red;\n}\n"
JS = "// helpers\nfunction add(a, b) {\n    return a + b;\n}\n"


@pytest.fixture
def site(write_file: Callable[..., Path], tmp_path: Path) -> Path:
    write_file("index.html", "<html><body>Cats</body></html>")
    write_file("robots.txt", "User-agent: *\n")
    write_file("css/a.css", CSS)
    write_file("js/b.js", JS)
    write_file("src/data/breeds.json", '{"breeds": []}')
    return tmp_path


def test_development_build_copies_assets_unchanged(site: Path) -> None:
    (site / "dist").mkdir()
    (site / "dist" / "stale.html").write_text("old")

    result = CliRunner().invoke(cli, ["build"])

    assert result.exit_code == 0, result.output
    dist = site / "dist"
    assert (dist / "index.html").is_file()
    assert (dist / "robots.txt").is_file()
    assert (dist / "css" / "a.css").read_text() == CSS
    assert (dist / "js" / "b.js").read_text() == JS
    assert (dist / "src" / "data" / "breeds.json").is_file()
    assert not (dist / "stale.html").exists()
    assert not (dist / "hashes.json").exists()
    assert not (site / "dist.lock").exists()
    assert "Build completed successfully" in result.output


def test_production_build_writes_hash_manifest(site: Path) -> None:
    result = CliRunner().invoke(cli, ["build", "--production"])

    assert result.exit_code == 0, result.output
    dist = site / "dist"
    css = (dist / "css" / "a.css").read_bytes()
    js = (dist / "js" / "b.js").read_bytes()
    assert b"/*" not in css
    assert b"//" not in js

    manifest = json.loads((dist / "hashes.json").read_text())
    assert manifest == {"css/a.css": content_hash(css), "js/b.js": content_hash(js)}
    assert "Environment: Production" in result.output


def test_node_env_production_enables_minification(
    site: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("NODE_ENV", "production")
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 0, result.output
    assert (site / "dist" / "hashes.json").is_file()


def test_no_clean_keeps_previous_output(site: Path) -> None:
    (site / "dist").mkdir()
    (site / "dist" / "keep.txt").write_text("keep")
    result = CliRunner().invoke(cli, ["build", "--no-clean"])
    assert result.exit_code == 0, result.output
    assert (site / "dist" / "keep.txt").is_file()


def test_missing_index_fails(tmp_path: Path, write_file: Callable[..., Path]) -> None:
    write_file("css/a.css", CSS)
    result = CliRunner().invoke(cli, ["build"])
    assert result.exit_code == 1
    assert "index.html" in result.output
    assert not (tmp_path / "dist.lock").exists()


def test_held_lock_fails_without_touching_output(site: Path) -> None:
    (site / "dist").mkdir()
    (site / "dist" / "previous.html").write_text("previous")
    (site / "dist.lock").write_text("4242\n")

    result = CliRunner().invoke(cli, ["build"])

    assert result.exit_code == 1
    assert (site / "dist" / "previous.html").is_file()
    assert (site / "dist.lock").read_text() == "4242\n"


def test_production_build_with_non_utf8_stylesheet(site: Path) -> None:
    (site / "css" / "a.css").write_bytes(b"/* caf\xe9 */ .a { color: red; }")

    result = CliRunner().invoke(cli, ["build", "--production"])

    assert result.exit_code == 0, result.output
    assert "color:red" in (site / "dist" / "css" / "a.css").read_text(encoding="utf-8")


def test_nested_output_directory(site: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATIPEDIA_DIST_DIR", "build/site")

    result = CliRunner().invoke(cli, ["build"])

    assert result.exit_code == 0, result.output
    assert (site / "build" / "site" / "index.html").is_file()
    assert not (site / "build" / "site.lock").exists()
