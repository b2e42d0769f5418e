from pathlib import Path

import pytest

from xrefkit.core.exceptions import ManifestError
from xrefkit.core.types import get_children, get_link, get_xref
from xrefkit.infra.manifest import load_manifest, parse_manifest

MANIFEST = """
pipelines:
  Content:
    - Xref: intro
      Link: /docs/intro.html
      Title: Introduction
      Children:
        - Xref: intro-setup
          Link: /docs/intro/setup.html
        - Title: Untagged child
    - Xref: ~
      Link: /docs/about.html
  Data:
    - Xref: feed
"""


def test_load_manifest(tmp_path: Path):
    path = tmp_path / "manifest.yml"
    path.write_text(MANIFEST, encoding="utf-8")

    outputs = load_manifest(path)

    assert outputs.names == ["Content", "Data"]
    intro, about = outputs.documents("Content")
    assert get_xref(intro) == "intro"
    assert get_link(intro) == "/docs/intro.html"
    assert intro.metadata == {"Title": "Introduction"}
    assert [get_xref(child) for child in get_children(intro)] == ["intro-setup", None]
    assert get_xref(about) is None
    assert get_link(about) == "/docs/about.html"


def test_load_manifest_invalid_yaml(tmp_path: Path):
    path = tmp_path / "manifest.yml"
    path.write_text("pipelines: [unclosed", encoding="utf-8")

    with pytest.raises(ManifestError, match="Invalid YAML"):
        load_manifest(path)


def test_load_manifest_missing_file(tmp_path: Path):
    with pytest.raises(ManifestError, match="Cannot read manifest"):
        load_manifest(tmp_path / "missing.yml")


@pytest.mark.parametrize("data", [None, {}, {"pipelines": None}])
def test_parse_empty_manifest(data):
    assert parse_manifest(data).pipelines == {}


def test_parse_pipeline_without_documents():
    assert list(parse_manifest({"pipelines": {"Content": None}}).documents()) == []


@pytest.mark.parametrize(
    ("data", "message"),
    [
        (["not", "a", "mapping"], "root must be a mapping"),
        ({"pipelines": ["Content"]}, "'pipelines' must be a mapping"),
        ({"pipelines": {"Content": {"Xref": "a"}}}, "must list its documents"),
        ({"pipelines": {"Content": ["a"]}}, r"Content\[0\]: document must be a mapping"),
        ({"pipelines": {"Content": [{"Xref": 12}]}}, "Xref must be a string"),
        ({"pipelines": {"Content": [{"Link": ["/a"]}]}}, "Link must be a string"),
        ({"pipelines": {"Content": [{"Children": {"Xref": "a"}}]}}, "Children must be a list"),
        (
            {"pipelines": {"Content": [{"Children": [{"Xref": 1}]}]}},
            r"Content\[0\]\.Children\[0\]: Xref must be a string",
        ),
    ],
)
def test_parse_rejects_malformed_manifest(data, message):
    with pytest.raises(ManifestError, match=message):
        parse_manifest(data)
