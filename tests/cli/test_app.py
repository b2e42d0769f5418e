from pathlib import Path

import pytest
from typer.testing import CliRunner

from xrefkit.cli.app import app

runner = CliRunner()

MANIFEST = """
pipelines:
  Content:
    - Xref: intro
      Link: /docs/intro.html
      Children:
        - Xref: intro-setup
          Link: /docs/intro/setup.html
    - Xref: draft
    - Xref: dup
      Link: /one.html
    - Xref: DUP
      Link: /two.html
  Api:
    - Xref: client
      Link: /api/client.html
"""


@pytest.fixture
def manifest(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("XREFKIT_RESOLVER__CONTENT_PIPELINE", raising=False)
    path = tmp_path / "manifest.yml"
    path.write_text(MANIFEST, encoding="utf-8")
    return path


def test_link_command(manifest: Path):
    result = runner.invoke(app, ["link", "INTRO-setup", "--manifest", str(manifest)])

    assert result.exit_code == 0
    assert "/docs/intro/setup.html" in result.stdout


def test_link_command_not_found(manifest: Path):
    result = runner.invoke(app, ["link", "missing", "--manifest", str(manifest)])

    assert result.exit_code == 1
    assert "Not found" in result.output


def test_link_command_unpublished(manifest: Path):
    result = runner.invoke(app, ["link", "draft", "--manifest", str(manifest)])

    assert result.exit_code == 1
    assert "Unpublished" in result.output


def test_link_command_ambiguous(manifest: Path):
    result = runner.invoke(app, ["link", "dup", "--manifest", str(manifest)])

    assert result.exit_code == 1
    assert "Ambiguous xref" in result.output
    assert "/one.html" in result.output
    assert "/two.html" in result.output


def test_find_command(manifest: Path):
    result = runner.invoke(app, ["find", "intro", "--manifest", str(manifest)])

    assert result.exit_code == 0
    assert "/docs/intro.html" in result.stdout
    assert "Children: 1" in result.stdout


def test_find_command_other_pipeline(manifest: Path):
    result = runner.invoke(app, ["find", "client", "--manifest", str(manifest), "--pipeline", "Api"])

    assert result.exit_code == 0
    assert "/api/client.html" in result.stdout


def test_find_command_uses_configured_pipeline(manifest: Path, monkeypatch):
    monkeypatch.setenv("XREFKIT_RESOLVER__CONTENT_PIPELINE", "Api")

    result = runner.invoke(app, ["link", "client", "--manifest", str(manifest)])

    assert result.exit_code == 0
    assert "/api/client.html" in result.stdout


def test_list_command(manifest: Path):
    result = runner.invoke(app, ["list", "--manifest", str(manifest)])

    assert result.exit_code == 0
    assert result.stdout.index("intro-setup") > result.stdout.index("/docs/intro.html")
    assert "draft" in result.stdout


def test_invalid_manifest(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "manifest.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    result = runner.invoke(app, ["list", "--manifest", str(path)])

    assert result.exit_code == 2
    assert "Invalid manifest" in result.output
